from __future__ import annotations

"""In-memory registry of per-user vacations (inclusive end date, user-local)."""
import threading
from datetime import date
from typing import Dict, Optional


class VacationRegistry:
    def __init__(self) -> None:
        self._until: Dict[int, date] = {}
        self._lock = threading.Lock()

    def set_vacation_until(self, user_id: int, until_inclusive: date) -> None:
        # Overwrites any earlier entry, ranges are never merged.
        with self._lock:
            self._until[user_id] = until_inclusive

    def get_vacation_until(self, user_id: int) -> Optional[date]:
        with self._lock:
            return self._until.get(user_id)

    def is_on_vacation(self, user_id: int, today_local: date) -> bool:
        # Lapsed entries stay in place and simply stop matching.
        until = self.get_vacation_until(user_id)
        return until is not None and today_local <= until
