from __future__ import annotations

"""Daily report intake: cooldown, validation and storage."""
import html
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from ..models.account import Account
from ..models.report import DailyReport
from .accounts import AccountRoster
from .parser import ReportParser, ReportValidationError
from .storage import StorageService

LOGGER = logging.getLogger(__name__)

DEFAULT_COOLDOWN_HOURS = 23


class ReportRejected(Exception):
    """Submission refused; ``key`` and ``params`` describe the reply."""

    def __init__(self, key: str, **params: object) -> None:
        super().__init__(key)
        self.key = key
        self.params = params


@dataclass
class SubmittedReport:
    report: DailyReport
    admin_ids: List[int] = field(default_factory=list)

    def escaped_name(self) -> str:
        return html.escape(self.report.user_name)

    def escaped_text(self) -> str:
        return html.escape(self.report.text)


class ReportService:
    def __init__(
        self,
        storage: StorageService,
        roster: AccountRoster,
        *,
        parser: Optional[ReportParser] = None,
        cooldown_hours: float = DEFAULT_COOLDOWN_HOURS,
    ) -> None:
        self._storage = storage
        self._roster = roster
        self._parser = parser or ReportParser()
        self._cooldown = timedelta(hours=cooldown_hours)

    async def submit(self, account: Optional[Account], telegram_id: int, text: str, now: Optional[datetime] = None) -> SubmittedReport:
        if account is None:
            raise ReportRejected("no_role")
        received_at = now or datetime.now()

        last = await self._storage.last_report_by_user(telegram_id)
        if last is not None:
            elapsed = received_at - last.received_at
            if elapsed < self._cooldown:
                hours_left = (self._cooldown - elapsed).total_seconds() / 3600
                raise ReportRejected("report_cooldown", hours=max(1, math.ceil(hours_left)))

        try:
            parsed = self._parser.parse(text)
        except ReportValidationError as exc:
            if exc.key in ("report_bad_date", "report_bad_hours"):
                raise ReportRejected(exc.key) from exc
            raise ReportRejected("report_invalid", reason_key=exc.key) from exc

        report = DailyReport(
            user_id=telegram_id,
            user_name=self._roster.user_name(telegram_id),
            report_date=parsed.report_date,
            hours_worked=parsed.hours_worked,
            text=parsed.text,
            received_at=received_at,
        )
        report.id = await self._storage.insert_report(report)
        LOGGER.info("Stored report %s from %s for %s", report.id, telegram_id, report.report_date.isoformat())
        return SubmittedReport(report=report, admin_ids=await self._storage.list_admin_ids())
