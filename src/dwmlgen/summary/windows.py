"""
Window planning: where a document starts and ends, and the period grids the
summary profiles are built on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import List, Optional

from ..config.models import MAX_DAYS, ConfigError
from ..ndfd.products import Product
from ..util.time import DAY, HOUR, LocalClock

logger = logging.getLogger(__name__)

HALF_DAY = 12 * HOUR
DAY_START_HOUR = 6
NIGHT_START_HOUR = 18


@dataclass(frozen=True)
class PeriodSpan:
    """Half-open [start, end) interval in epoch seconds."""
    start: int
    end: int
    is_day: bool = True

    def contains(self, instant: int) -> bool:
        return self.start <= instant < self.end


@dataclass(frozen=True)
class Window:
    """
    The resolved output window of one point.

    Attributes:
        start: Effective user start, or None when the data decides.
        end: Effective user end, or None when the data decides.
        anchor: Start of the first summary period (None for native profiles).
        num_days: Number of days covered by a summary profile.
        six_cycle_first: True when the first half-day bucket is the 06-18 cycle.
        first_day_tomorrow: True when a 24-hourly anchor was advanced a day.
        evening_start: True when a 24-hourly request starts at or after 18:00 local.
    """
    start: Optional[int] = None
    end: Optional[int] = None
    anchor: Optional[int] = None
    num_days: int = 0
    six_cycle_first: bool = True
    first_day_tomorrow: bool = False
    evening_start: bool = False

    @property
    def grid_end(self) -> Optional[int]:
        if self.anchor is None:
            return None
        return self.anchor + self.num_days * DAY


def plan_window(
    product: Product,
    clock: LocalClock,
    *,
    start_time: Optional[int] = None,
    end_time: Optional[int] = None,
    num_days: Optional[int] = None,
    earliest_time: Optional[int] = None,
    latest_time: Optional[int] = None,
    first_pop_time: Optional[int] = None,
    now: Optional[int] = None,
) -> Window:
    """
    Resolve the user window for one point.

    Native profiles pass the (validated) user times straight through. Summary
    profiles anchor on 06:00 local of the reference date, or on 18:00 of the
    previous evening (12-hourly) / 06:00 tomorrow (24-hourly) when the first
    PoP window says the current half-day is already closing.

    Raises:
        ConfigError: If the end time does not follow the start time.
    """
    if start_time and end_time and end_time <= start_time:
        raise ConfigError("end_time must be later than start_time")

    start = start_time or None
    end = end_time or None
    if start is not None and now is not None and start < now:
        logger.warning("Requested start time is in the past; using the data's first valid time instead.")
        start = None
    if end is not None and latest_time is not None and end > latest_time:
        logger.warning("Requested end time is beyond the last forecast value; ignoring it.")
        end = None

    if not product.is_summary:
        return Window(start=start, end=end)

    reference = start if start is not None else earliest_time
    if reference is None:
        raise ConfigError("Cannot plan a summary window without a start time or forecast data.")
    reference_date = clock.local_date(reference)

    anchor = clock.wall_clock(reference_date, DAY_START_HOUR)
    six_cycle_first = True
    first_day_tomorrow = False
    evening_start = False

    if start is None and first_pop_time is not None:
        pop_date = clock.local_date(first_pop_time)
        if product is Product.TWELVE_HOURLY and clock.local_hour(first_pop_time) < 12:
            anchor = clock.wall_clock(pop_date - timedelta(days=1), NIGHT_START_HOUR)
            six_cycle_first = False
        elif product is Product.TWENTY_FOUR_HOURLY and pop_date != reference_date:
            anchor = clock.wall_clock(reference_date + timedelta(days=1), DAY_START_HOUR)
            first_day_tomorrow = True
    elif start is not None and product is Product.TWENTY_FOUR_HOURLY:
        evening_start = clock.local_hour(start) >= NIGHT_START_HOUR

    days = _resolve_days(anchor, start, end, num_days, latest_time)
    return Window(
        start=start,
        end=end,
        anchor=anchor,
        num_days=days,
        six_cycle_first=six_cycle_first,
        first_day_tomorrow=first_day_tomorrow,
        evening_start=evening_start,
    )


def _resolve_days(
    anchor: int,
    start: Optional[int],
    end: Optional[int],
    num_days: Optional[int],
    latest_time: Optional[int],
) -> int:
    if num_days:
        return max(1, min(MAX_DAYS, num_days))
    if end is not None:
        if start is not None and end - start <= HALF_DAY:
            end += DAY
        return max(1, min(MAX_DAYS, (end - anchor) // DAY))
    if latest_time is not None:
        return max(1, min(MAX_DAYS, -(-(latest_time - anchor) // DAY)))
    return 1


def summary_periods(window: Window, product: Product) -> List[PeriodSpan]:
    """Weather/icon periods of a summary profile."""
    anchor = _anchor(window)
    if product is Product.TWENTY_FOUR_HOURLY:
        base = anchor + HALF_DAY if window.evening_start else anchor
        return [PeriodSpan(base + k * DAY, base + (k + 1) * DAY, True) for k in range(window.num_days)]
    return _half_days(anchor, 2 * window.num_days, window.six_cycle_first)


def pop_periods(window: Window) -> List[PeriodSpan]:
    """
    Twelve-hour PoP periods. When a 24-hourly anchor moved to tomorrow the PoP
    grid starts a half-day earlier so tonight's value still surfaces.
    """
    anchor = _anchor(window)
    if window.first_day_tomorrow:
        return _half_days(anchor - HALF_DAY, 2 * window.num_days, not window.six_cycle_first)
    return _half_days(anchor, 2 * window.num_days, window.six_cycle_first)


def day_periods(window: Window) -> List[PeriodSpan]:
    """06:00-18:00 periods, one per day; MaxT lives here."""
    anchor = _anchor(window)
    first = anchor if window.six_cycle_first else anchor + HALF_DAY
    return [PeriodSpan(first + k * DAY, first + k * DAY + HALF_DAY, True) for k in range(window.num_days)]


def night_periods(window: Window) -> List[PeriodSpan]:
    """18:00-06:00 periods, one per day; MinT lives here."""
    anchor = _anchor(window)
    first = anchor + HALF_DAY if window.six_cycle_first else anchor
    return [PeriodSpan(first + k * DAY, first + k * DAY + HALF_DAY, False) for k in range(window.num_days)]


def _half_days(start: int, count: int, day_first: bool) -> List[PeriodSpan]:
    return [
        PeriodSpan(start + k * HALF_DAY, start + (k + 1) * HALF_DAY, (k % 2 == 0) == day_first)
        for k in range(count)
    ]


def _anchor(window: Window) -> int:
    if window.anchor is None:
        raise ValueError("Window has no summary anchor")
    return window.anchor
