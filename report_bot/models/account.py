from __future__ import annotations

from datetime import time
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

DEFAULT_TIME_ZONE_ID = "UTC+04:00"


class Role(str, Enum):
    ADMIN = "admin"
    MODERATOR = "moderator"
    USER = "user"


class Account(BaseModel):
    telegram_id: int
    user_name: Optional[str] = None
    role: Role = Role.USER
    time_zone_id: str = Field(default=DEFAULT_TIME_ZONE_ID, description="Fixed offset like UTC+04:00 or a named zone.")
    report_deadline: time = Field(default=time(hour=20), description="Local time-of-day the report is due.")

    def is_scheduled(self) -> bool:
        return self.role is Role.USER

