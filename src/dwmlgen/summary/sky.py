"""
Sky-cover categories and trend phrasing for summary periods.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .buckets import PeriodWindow

# Upper bounds (inclusive) of categories 0-3; anything above is category 4.
SKY_BANDS: Tuple[int, ...] = (15, 39, 69, 90)

DAY_PHRASES = ("Sunny", "Mostly Sunny", "Partly Sunny", "Mostly Cloudy", "Cloudy")
NIGHT_PHRASES = ("Clear", "Mostly Clear", "Partly Cloudy", "Mostly Cloudy", "Cloudy")
SKY_ICONS = ("skc", "few", "sct", "bkn", "ovc")

TREND_SPEED = 4
TREND_HORIZON_HOURS = 48


class SkyTrend(str, Enum):
    STEADY = "steady"
    INCREASING = "increasing"
    DECREASING = "decreasing"
    CLEARING = "clearing"


@dataclass(frozen=True)
class SkyPhrase:
    phrase: str
    icon: str
    trend: SkyTrend = SkyTrend.STEADY


def sky_category(percent: float) -> int:
    for category, upper in enumerate(SKY_BANDS):
        if percent <= upper:
            return category
    return len(SKY_BANDS)


def sky_icon(category: int, is_day: bool) -> str:
    icon = SKY_ICONS[category]
    return icon if is_day else "n" + icon


def _category_phrase(category: int, is_day: bool, trend: SkyTrend = SkyTrend.STEADY) -> SkyPhrase:
    phrases = DAY_PHRASES if is_day else NIGHT_PHRASES
    return SkyPhrase(phrases[category], sky_icon(category, is_day), trend)


def analyze_sky(window: PeriodWindow, *, within_horizon: bool = True) -> Optional[SkyPhrase]:
    """
    Sky phrase for a period, or None when the period holds no sky data.

    A trend is only described when the extremes are two or more categories
    apart and the period is within the trend horizon.
    """
    if window.avg_sky is None or window.max_sky is None or window.min_sky is None:
        return None
    is_day = window.is_day
    average = sky_category(window.avg_sky)
    highest = sky_category(window.max_sky)
    lowest = sky_category(window.min_sky)
    if not within_horizon or abs(highest - lowest) < 2:
        return _category_phrase(average, is_day)

    max_index = window.max_sky_index or 0
    min_index = window.min_sky_index or 0
    first = window.start_index or 0
    speed = abs(max_index - min_index)

    if min_index < max_index:
        early = min_index - first
        if highest == len(SKY_BANDS):
            return SkyPhrase("Becoming Cloudy", sky_icon(highest, is_day), SkyTrend.INCREASING)
        if speed >= TREND_SPEED:
            return SkyPhrase("Increasing Clouds", sky_icon(average, is_day), SkyTrend.INCREASING)
        if early < TREND_SPEED:
            return _category_phrase(highest, is_day, SkyTrend.INCREASING)
        return _category_phrase(average, is_day, SkyTrend.INCREASING)

    early = max_index - first
    if highest - lowest >= 3:
        phrase = "Gradual Clearing" if speed >= TREND_SPEED else "Clearing"
        return SkyPhrase(phrase, sky_icon(lowest, is_day), SkyTrend.CLEARING)
    if speed >= TREND_SPEED:
        return SkyPhrase("Decreasing Clouds", sky_icon(average, is_day), SkyTrend.DECREASING)
    if lowest == 0 and is_day:
        return SkyPhrase("Becoming Sunny", sky_icon(lowest, is_day), SkyTrend.DECREASING)
    if early < TREND_SPEED:
        return _category_phrase(lowest, is_day, SkyTrend.DECREASING)
    return _category_phrase(average, is_day, SkyTrend.DECREASING)
