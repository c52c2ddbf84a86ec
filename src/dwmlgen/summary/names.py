"""
Friendly period labels ("Today", "Tonight", "Thursday Night", holidays).
"""

from __future__ import annotations

from datetime import date, timedelta
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from dateutil.relativedelta import MO, TH, relativedelta

from ..util.time import LocalClock


class Issuance(Enum):
    EARLY_MORNING = "earlyMorning"
    MORNING_12 = "morning12"
    AFTERNOON_12 = "afternoon12"
    EARLY_MORNING_MAXT = "earlyMorningMaxT"
    EARLY_MORNING_MINT = "earlyMorningMinT"
    MORNING_24 = "morning24"
    AFTERNOON_24 = "afternoon24"


PERIOD_NAMES: Dict[Issuance, Tuple[str, ...]] = {
    Issuance.EARLY_MORNING: ("Overnight", "Later Today"),
    Issuance.MORNING_12: ("Today", "Tonight", "Tomorrow", "Tomorrow Night"),
    Issuance.AFTERNOON_12: ("Tonight", "Tomorrow", "Tomorrow Night"),
    Issuance.EARLY_MORNING_MAXT: ("Later Today",),
    Issuance.EARLY_MORNING_MINT: ("Overnight",),
    Issuance.MORNING_24: ("Today", "Tomorrow"),
    Issuance.AFTERNOON_24: ("Tonight", "Tomorrow Night"),
}

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def _is_night_hour(hour: int) -> bool:
    return hour >= 18 or hour < 6


def issuance_type(first_start_hour: int, period_hours: int, current_hour: Optional[int] = None) -> Issuance:
    """
    Pick the label row from the first start hour; early-morning variants apply
    while the current local hour is before 06:00.
    """
    night_first = _is_night_hour(first_start_hour)
    early = current_hour is not None and current_hour < 6
    if period_hours >= 24:
        if early:
            return Issuance.EARLY_MORNING_MINT if night_first else Issuance.EARLY_MORNING_MAXT
        return Issuance.AFTERNOON_24 if first_start_hour >= 12 or first_start_hour < 6 else Issuance.MORNING_24
    if early and night_first:
        return Issuance.EARLY_MORNING
    if 6 <= first_start_hour < 12:
        return Issuance.MORNING_12
    return Issuance.AFTERNOON_12


def period_names(
    starts: Sequence[int],
    period_hours: int,
    clock: LocalClock,
    now: Optional[int] = None,
) -> List[str]:
    """Label each row start; past the fixed table fall back to weekday names."""
    if not starts:
        return []
    current_hour = clock.local_hour(now) if now is not None else None
    table = PERIOD_NAMES[issuance_type(clock.local_hour(starts[0]), period_hours, current_hour)]

    names = []
    for index, start in enumerate(starts):
        if index < len(table):
            names.append(table[index])
            continue
        local = clock.local(start)
        night = _is_night_hour(local.hour)
        label_date = local.date() - timedelta(days=1) if local.hour < 6 else local.date()
        holiday = None if night else holiday_name(label_date)
        if holiday:
            names.append(holiday)
        else:
            weekday = WEEKDAYS[label_date.weekday()]
            names.append(f"{weekday} Night" if night else weekday)
    return names


def holiday_name(day: date) -> Optional[str]:
    """US holidays that replace a weekday label."""
    fixed = {
        (1, 1): "New Year's Day",
        (7, 4): "Independence Day",
        (11, 11): "Veterans Day",
        (12, 24): "Christmas Eve",
        (12, 25): "Christmas Day",
        (12, 31): "New Year's Eve",
    }
    if (day.month, day.day) in fixed:
        return fixed[(day.month, day.day)]
    new_year = date(day.year, 1, 1)
    floating = {
        new_year + relativedelta(month=1, day=1, weekday=MO(+3)): "Martin Luther King Jr Day",
        new_year + relativedelta(month=2, day=1, weekday=MO(+3)): "Washington's Birthday",
        new_year + relativedelta(month=5, day=31, weekday=MO(-1)): "Memorial Day",
        new_year + relativedelta(month=9, day=1, weekday=MO(+1)): "Labor Day",
        new_year + relativedelta(month=10, day=1, weekday=MO(+2)): "Columbus Day",
        new_year + relativedelta(month=11, day=1, weekday=TH(+4)): "Thanksgiving Day",
    }
    return floating.get(day)
