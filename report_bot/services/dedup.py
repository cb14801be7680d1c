from __future__ import annotations

"""Tracks the last user-local date a reminder was actually delivered."""
import threading
from datetime import date
from typing import Dict, Optional


class NotificationDedupTracker:
    def __init__(self) -> None:
        self._notified: Dict[int, date] = {}
        self._lock = threading.Lock()

    def mark_notified(self, user_id: int, day: date) -> None:
        with self._lock:
            self._notified[user_id] = day

    def was_notified_on(self, user_id: int, day: date) -> bool:
        with self._lock:
            return self._notified.get(user_id) == day

    def last_notified(self, user_id: int) -> Optional[date]:
        with self._lock:
            return self._notified.get(user_id)

    def clear(self, user_id: int) -> None:
        with self._lock:
            self._notified.pop(user_id, None)
