from __future__ import annotations

"""Report statistics for moderators and admins."""
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional

from ..i18n import Translator
from .accounts import AccountRoster
from .parser import DATE_FORMAT, DateRangeParser
from .storage import StorageService


class StatsService:
    def __init__(
        self,
        storage: StorageService,
        roster: AccountRoster,
        translator: Translator,
        parser: Optional[DateRangeParser] = None,
    ) -> None:
        self._storage = storage
        self._roster = roster
        self._translator = translator
        self._parser = parser or DateRangeParser()

    async def render(self, argument: str, locale: Optional[str] = None) -> str:
        argument = argument.strip()
        if not argument:
            return self._t("stats_usage", locale)
        tokens = argument.split(maxsplit=1)
        if len(tokens) == 2:
            return await self._render_user(tokens[0], tokens[1], locale)
        return await self._render_totals(argument, locale)

    async def _render_user(self, user_token: str, range_text: str, locale: Optional[str]) -> str:
        bounds = self._parser.parse(range_text)
        if bounds is None or not user_token.isdigit():
            return self._t("stats_bad_user_range", locale)
        date_from, date_to = bounds
        user_id = int(user_token)
        reports = [r for r in await self._storage.reports_by_date_range(date_from, date_to) if r.user_id == user_id]
        if not reports:
            return self._t("stats_user_empty", locale, user_id=user_id, **self._range(date_from, date_to))
        name = self._roster.user_name(user_id)
        reports.sort(key=lambda report: report.report_date)
        return "\n".join(
            f"{name} {report.report_date.strftime(DATE_FORMAT)} {report.hours_worked}" for report in reports
        )

    async def _render_totals(self, range_text: str, locale: Optional[str]) -> str:
        bounds = self._parser.parse(range_text)
        if bounds is None:
            return self._t("stats_bad_range", locale)
        date_from, date_to = bounds
        reports = await self._storage.reports_by_date_range(date_from, date_to)
        if not reports:
            return self._t("stats_empty", locale, **self._range(date_from, date_to))
        totals: Dict[int, int] = defaultdict(int)
        for report in reports:
            totals[report.user_id] += report.hours_worked
        rows = sorted(((self._roster.user_name(user_id), hours) for user_id, hours in totals.items()))
        lines: List[str] = [self._t("stats_header", locale, **self._range(date_from, date_to)), ""]
        lines.extend(self._t("stats_total_line", locale, name=name, hours=hours) for name, hours in rows)
        return "\n".join(lines)

    @staticmethod
    def _range(date_from: date, date_to: date) -> Dict[str, str]:
        return {"date_from": date_from.strftime(DATE_FORMAT), "date_to": date_to.strftime(DATE_FORMAT)}

    def _t(self, key: str, locale: Optional[str], **params: object) -> str:
        return self._translator.translate(key, locale, **params)
