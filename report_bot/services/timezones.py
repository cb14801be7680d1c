from __future__ import annotations

"""Resolution of account time-zone ids into fixed offsets or named zones."""
import logging
import re
import threading
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Dict, Optional, Union

import pytz

LOGGER = logging.getLogger(__name__)

DEFAULT_OFFSET_MINUTES = 4 * 60
MAX_OFFSET_HOURS = 14

_OFFSET_PATTERN = re.compile(r"^UTC(?P<sign>[+-])(?P<hours>\d{1,2})(?::(?P<minutes>\d{2}))?$", re.IGNORECASE)


@dataclass(frozen=True)
class FixedOffsetZone:
    """Constant UTC delta, no daylight-saving transitions."""

    minutes: int

    def tzinfo(self) -> tzinfo:
        return pytz.FixedOffset(self.minutes)

    def to_local(self, utc_now: datetime) -> datetime:
        return utc_now.astimezone(self.tzinfo())

    @property
    def label(self) -> str:
        sign = "-" if self.minutes < 0 else "+"
        hours, minutes = divmod(abs(self.minutes), 60)
        return f"UTC{sign}{hours:02d}:{minutes:02d}"


@dataclass(frozen=True)
class NamedZone:
    """Zone from the tz database, DST-aware."""

    zone_id: str

    def tzinfo(self) -> tzinfo:
        return pytz.timezone(self.zone_id)

    def to_local(self, utc_now: datetime) -> datetime:
        return utc_now.astimezone(self.tzinfo())

    @property
    def label(self) -> str:
        return self.zone_id


ResolvedZone = Union[FixedOffsetZone, NamedZone]

DEFAULT_ZONE = FixedOffsetZone(DEFAULT_OFFSET_MINUTES)
UTC_ZONE = FixedOffsetZone(0)


def parse_utc_offset(value: str) -> Optional[FixedOffsetZone]:
    """Parse ``UTC``, ``UTC+HH`` or ``UTC-HH:MM``; ``None`` when the value is not one of those."""
    candidate = value.strip()
    if candidate.upper() == "UTC":
        return UTC_ZONE
    match = _OFFSET_PATTERN.match(candidate)
    if not match:
        return None
    hours = int(match.group("hours"))
    minutes = int(match.group("minutes") or 0)
    if hours > MAX_OFFSET_HOURS or minutes > 59:
        return None
    sign = -1 if match.group("sign") == "-" else 1
    return FixedOffsetZone(sign * (hours * 60 + minutes))


class TimeZoneResolver:
    """Turns ``Account.time_zone_id`` into a zone; never raises."""

    def __init__(self, default: ResolvedZone = DEFAULT_ZONE) -> None:
        self._default = default
        self._cache: Dict[str, ResolvedZone] = {}
        self._lock = threading.Lock()

    @property
    def default(self) -> ResolvedZone:
        return self._default

    def resolve(self, time_zone_id: Optional[str]) -> ResolvedZone:
        key = (time_zone_id or "").strip()
        if not key:
            return self._default
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached
        resolved = self._resolve_uncached(key)
        with self._lock:
            self._cache[key] = resolved
        return resolved

    def _resolve_uncached(self, key: str) -> ResolvedZone:
        fixed = parse_utc_offset(key)
        if fixed is not None:
            return fixed
        try:
            zone = pytz.timezone(key)
        except pytz.UnknownTimeZoneError:
            LOGGER.warning("Unknown time zone %r, falling back to %s", key, self._default.label)
            return self._default
        except (ValueError, OSError) as exc:
            LOGGER.warning("Could not load time zone %r: %s. Falling back to %s", key, exc, self._default.label)
            LOGGER.debug("Time zone lookup failure", exc_info=True)
            return self._default
        return NamedZone(zone.zone)
