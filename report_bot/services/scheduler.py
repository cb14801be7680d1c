from __future__ import annotations

"""Periodic daily-report reminder scheduler."""
import asyncio
import logging
from datetime import date, datetime
from enum import Enum
from typing import Awaitable, Callable, Dict, Optional, Protocol, Sequence

import pytz

from ..models.account import Account
from .dedup import NotificationDedupTracker
from .delivery import DeliveryError
from .timezones import TimeZoneResolver
from .vacations import VacationRegistry

LOGGER = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 60.0

Clock = Callable[[], datetime]


class AccountSource(Protocol):
    def list_accounts(self) -> Sequence[Account]:
        ...


class ReportLookup(Protocol):
    def has_report_for_user_on_date(self, user_id: int, local_date: date) -> Awaitable[bool]:
        ...


class TextSender(Protocol):
    def send_text(self, user_id: int, text: str) -> Awaitable[None]:
        ...


class ReminderOutcome(str, Enum):
    VACATION = "vacation"
    WEEKEND = "weekend"
    BEFORE_DEADLINE = "before_deadline"
    ALREADY_NOTIFIED = "already_notified"
    REPORT_FILED = "report_filed"
    SENT = "sent"
    FAILED = "failed"


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


class ReminderScheduler:
    """Evaluates the roster once per tick and reminds users who have not reported.

    Ticks run sequentially: the first one right after :meth:`start`, then every
    ``interval_seconds`` counted from the start of the previous tick. A tick that
    overruns the interval is followed immediately by the next one.
    """

    def __init__(
        self,
        accounts: AccountSource,
        reports: ReportLookup,
        sender: TextSender,
        *,
        reminder_text: str,
        vacations: Optional[VacationRegistry] = None,
        notified: Optional[NotificationDedupTracker] = None,
        resolver: Optional[TimeZoneResolver] = None,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        clock: Clock = utc_now,
    ) -> None:
        self._accounts = accounts
        self._reports = reports
        self._sender = sender
        self._reminder_text = reminder_text
        self._vacations = vacations or VacationRegistry()
        self._notified = notified or NotificationDedupTracker()
        self._resolver = resolver or TimeZoneResolver()
        self._interval = max(1.0, float(interval_seconds))
        self._clock = clock
        self._task: asyncio.Task[None] | None = None
        self._stopped = asyncio.Event()

    @property
    def vacations(self) -> VacationRegistry:
        return self._vacations

    @property
    def notified(self) -> NotificationDedupTracker:
        return self._notified

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            LOGGER.debug("Scheduler already started")
            return
        self._stopped.clear()
        self._task = asyncio.create_task(self.run(), name="reminder-scheduler")

    async def stop(self) -> None:
        self._stopped.set()
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            LOGGER.debug("Scheduler task cancelled")
        finally:
            self._task = None

    async def run(self) -> None:
        loop = asyncio.get_running_loop()
        LOGGER.info("Reminder scheduler started, interval %.0fs", self._interval)
        try:
            while not self._stopped.is_set():
                next_run = loop.time() + self._interval
                try:
                    await self.tick()
                except Exception:
                    LOGGER.exception("Reminder tick failed")
                delay = max(0.0, next_run - loop.time())
                try:
                    await asyncio.wait_for(self._stopped.wait(), timeout=delay)
                except asyncio.TimeoutError:
                    LOGGER.debug("New reminder tick")
        finally:
            LOGGER.info("Reminder scheduler stopped")

    async def tick(self) -> Dict[int, ReminderOutcome]:
        now = self._clock()
        outcomes: Dict[int, ReminderOutcome] = {}
        for account in self._accounts.list_accounts():
            if self._stopped.is_set():
                LOGGER.debug("Stop requested, abandoning tick")
                break
            if not account.is_scheduled():
                continue
            try:
                outcome = await self._evaluate(account, now)
            except Exception:
                LOGGER.exception("Reminder evaluation failed for user %s", account.telegram_id)
                outcome = ReminderOutcome.FAILED
            outcomes[account.telegram_id] = outcome
        return outcomes

    async def _evaluate(self, account: Account, now: datetime) -> ReminderOutcome:
        user_id = account.telegram_id
        local_now = self._resolver.resolve(account.time_zone_id).to_local(now)
        today = local_now.date()

        if self._vacations.is_on_vacation(user_id, today):
            self._notified.clear(user_id)
            return ReminderOutcome.VACATION
        if local_now.weekday() >= 5:
            self._notified.clear(user_id)
            return ReminderOutcome.WEEKEND
        if local_now.time() < account.report_deadline:
            self._notified.clear(user_id)
            return ReminderOutcome.BEFORE_DEADLINE
        # Dedup state is kept here, unlike the other suppressions.
        if self._notified.was_notified_on(user_id, today):
            return ReminderOutcome.ALREADY_NOTIFIED
        if await self._reports.has_report_for_user_on_date(user_id, today):
            self._notified.clear(user_id)
            return ReminderOutcome.REPORT_FILED

        try:
            await self._sender.send_text(user_id, self._reminder_text)
        except DeliveryError as exc:
            LOGGER.warning("Could not send reminder to %s: %s", user_id, exc.reason)
            LOGGER.debug("Delivery failure", exc_info=True)
            return ReminderOutcome.FAILED
        self._notified.mark_notified(user_id, today)
        LOGGER.info("Sent reminder to %s for %s", user_id, today.isoformat())
        return ReminderOutcome.SENT
