from __future__ import annotations

"""Parses daily report texts and DD.MM.YYYY date ranges."""
import re
from datetime import date, datetime
from typing import Optional, Tuple

from ..models.parsed_report import ParsedReport

DATE_FORMAT = "%d.%m.%Y"


class ReportValidationError(ValueError):
    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key


def parse_day(value: str) -> Optional[date]:
    text = value.strip()
    if not re.fullmatch(r"\d{2}\.\d{2}\.\d{4}", text):
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


class ReportParser:
    REQUIRED_LINES = (
        ("Имя:", "report_missing_name"),
        ("Дата:", "report_missing_date"),
        ("Часов:", "report_missing_hours"),
        ("Сделано:", "report_missing_done"),
        ("Проблемы:", "report_missing_problems"),
        ("Планируется:", "report_missing_plans"),
    )
    DATE_PATTERN = re.compile(r"^Дата:\s*(?P<date>\d{2}\.\d{2}\.\d{4})", re.IGNORECASE | re.MULTILINE)
    HOURS_PATTERN = re.compile(r"^Часов:\s*(?P<hours>\d+)", re.IGNORECASE | re.MULTILINE)

    def parse(self, text: str) -> ParsedReport:
        report = text.strip()
        for label, key in self.REQUIRED_LINES:
            if not re.search(rf"^{re.escape(label)}", report, re.IGNORECASE | re.MULTILINE):
                raise ReportValidationError(key)

        date_match = self.DATE_PATTERN.search(report)
        report_date = parse_day(date_match.group("date")) if date_match else None
        if report_date is None:
            raise ReportValidationError("report_bad_date")

        hours_match = self.HOURS_PATTERN.search(report)
        if not hours_match:
            raise ReportValidationError("report_bad_hours")
        return ParsedReport(text=report, report_date=report_date, hours_worked=int(hours_match.group("hours")))


class DateRangeParser:
    def parse(self, value: str) -> Optional[Tuple[date, date]]:
        parts = [part for part in value.split("-", 1) if part.strip()]
        if len(parts) != 2:
            return None
        date_from = parse_day(parts[0])
        date_to = parse_day(parts[1])
        if date_from is None or date_to is None:
            return None
        if date_to < date_from:
            date_from, date_to = date_to, date_from
        return date_from, date_to
