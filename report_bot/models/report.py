from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, Field


class DailyReport(BaseModel):
    id: Optional[int] = None
    user_id: int
    user_name: str
    report_date: date
    hours_worked: int = Field(ge=0)
    text: str = ""
    received_at: datetime = Field(default_factory=datetime.now)
