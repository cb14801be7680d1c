from __future__ import annotations

from datetime import date
from pydantic import BaseModel


class ParsedReport(BaseModel):
    text: str
    report_date: date
    hours_worked: int
