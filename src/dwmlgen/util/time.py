"""
Local-time helpers: fixed UTC offsets, US daylight saving rules and ISO rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from dateutil import tz
from dateutil.relativedelta import SU, relativedelta

HOUR = 3600
DAY = 24 * HOUR

_EPOCH = datetime(1970, 1, 1)

# US rules: 2007 onward, second Sunday of March to first Sunday of November.
# The end is 02:00 daylight, i.e. 01:00 standard.
_DST_START = relativedelta(hours=+2, month=3, day=1, weekday=SU(+2))
_DST_END = relativedelta(hours=+1, month=11, day=1, weekday=SU(+1))


@lru_cache(maxsize=None)
def us_zone(utc_offset: float, observes_dst: bool, year: int) -> tzinfo:
    """
    Zone for a point with a fixed standard offset.

    Before 2007 the dateutil tzrange defaults apply: first Sunday of April to
    last Sunday of October.
    """
    standard = timedelta(hours=utc_offset)
    if not observes_dst:
        return tz.tzoffset(None, standard)
    if year >= 2007:
        return tz.tzrange("STD", standard, "DST", start=_DST_START, end=_DST_END)
    return tz.tzrange("STD", standard, "DST")


def format_offset(hours: float) -> str:
    """Render an offset in hours as an ISO-8601 suffix, e.g. -4 -> '-04:00'."""
    minutes = int(round(hours * 60))
    sign = "-" if minutes < 0 else "+"
    minutes = abs(minutes)
    return f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def format_utc(epoch: float) -> str:
    stamp = _EPOCH + timedelta(seconds=int(epoch))
    return stamp.strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_timestamp(value: object) -> int:
    """
    Convert epoch seconds or an ISO-8601 string into integer epoch seconds.

    Naive ISO strings are read as UTC.

    Raises:
        ValueError: If the value cannot be interpreted.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty timestamp")
        if text.lstrip("-").isdigit():
            return int(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return int(parsed.timestamp())
    raise ValueError(f"Invalid timestamp: {value!r}")


@dataclass(frozen=True)
class LocalClock:
    """
    Wall-clock view of a forecast point.

    Attributes:
        utc_offset: Local standard time offset from UTC in hours (e.g. -5 for EST).
        observes_dst: Whether the point follows US daylight saving rules.
    """
    utc_offset: float = 0.0
    observes_dst: bool = False

    def standard(self, epoch: float) -> datetime:
        """Naive local standard time for an instant."""
        return _EPOCH + timedelta(seconds=int(epoch + self.utc_offset * HOUR))

    def zoned(self, epoch: float) -> datetime:
        """Aware local time for an instant."""
        zone = us_zone(self.utc_offset, self.observes_dst, self.standard(epoch).year)
        return datetime.fromtimestamp(int(epoch), zone)

    def is_dst(self, epoch: float) -> bool:
        return bool(self.zoned(epoch).dst())

    def offset_hours(self, epoch: float) -> float:
        return self.zoned(epoch).utcoffset().total_seconds() / HOUR

    def local(self, epoch: float) -> datetime:
        """Naive local wall-clock time for an instant."""
        return self.zoned(epoch).replace(tzinfo=None)

    def local_date(self, epoch: float) -> date:
        return self.local(epoch).date()

    def local_hour(self, epoch: float) -> int:
        return self.local(epoch).hour

    def isoformat(self, epoch: float) -> str:
        stamp = self.local(epoch).strftime("%Y-%m-%dT%H:%M:%S")
        return stamp + format_offset(self.offset_hours(epoch))

    def standard_epoch(self, day: date, hour: float) -> int:
        """Epoch of `hour` o'clock local standard time on `day`."""
        days = (day - _EPOCH.date()).days
        return int(days * DAY + hour * HOUR - self.utc_offset * HOUR)

    def wall_clock(self, day: date, hour: float) -> int:
        """
        Epoch of `hour` o'clock on the local wall clock of `day`.

        When the instant falls within daylight saving the standard offset is
        shifted by one hour.
        """
        epoch = self.standard_epoch(day, hour)
        if self.observes_dst and self.is_dst(epoch - HOUR):
            return epoch - HOUR
        return epoch
