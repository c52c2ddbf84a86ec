"""
Summarization buckets: attributing native-cadence values to summary periods.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..ndfd.elements import NdfdElement, default_period
from ..ndfd.matches import Match
from ..util.time import HOUR, LocalClock
from ..weather.dominant import PeriodWeather
from ..weather.ugly import parse_weather
from .layouts import row_times
from .windows import PeriodSpan

NO_POP = -1


def attribution_instant(element: NdfdElement, valid_time: int, period_hours: int, clock: LocalClock) -> int:
    """
    The instant used to place a value into a period.

    MaxT/MinT use their synthesized start; everything else is pulled back by
    half its period, so a 16-19h value lands in the 06-18h window it overlaps.
    """
    if element in (NdfdElement.MAX_T, NdfdElement.MIN_T):
        return row_times(element, valid_time, period_hours, clock)[0]
    return valid_time - period_hours * HOUR // 2


def locate(spans: Sequence[PeriodSpan], instant: int, starts: Optional[Sequence[int]] = None) -> Optional[int]:
    """Index of the period holding `instant`, or None."""
    if starts is None:
        starts = [span.start for span in spans]
    index = bisect_right(starts, instant) - 1
    if index < 0 or not spans[index].contains(instant):
        return None
    return index


def bucketize(
    spans: Sequence[PeriodSpan],
    rows: Sequence[Match],
    element: NdfdElement,
    period_hours: int,
    clock: LocalClock,
) -> List[List[int]]:
    """Row indices per period, in row order."""
    starts = [span.start for span in spans]
    buckets: List[List[int]] = [[] for _ in spans]
    for index, match in enumerate(rows):
        slot = locate(spans, attribution_instant(element, match.valid_time, period_hours, clock), starts)
        if slot is not None:
            buckets[slot].append(index)
    return buckets


@dataclass
class PeriodWindow:
    """
    Everything the phrase composer needs to know about one period.

    Sky indices are positions in the point's Sky rows, so trends can be read
    from how far apart the extremes sit.
    """
    start: int
    end: int
    is_day: bool
    max_temp: Optional[float] = None
    max_wind_speed: Optional[float] = None
    max_wind_direction: Optional[float] = None
    avg_sky: Optional[float] = None
    min_sky: Optional[float] = None
    max_sky: Optional[float] = None
    max_sky_index: Optional[int] = None
    min_sky_index: Optional[int] = None
    start_index: Optional[int] = None
    end_index: Optional[int] = None
    max_daily_pop: Optional[float] = None
    fog_fraction: float = 0.0
    weather: PeriodWeather = field(default_factory=PeriodWeather)
    _sky_sum: float = 0.0
    _sky_count: int = 0

    @classmethod
    def from_span(cls, span: PeriodSpan) -> "PeriodWindow":
        return cls(start=span.start, end=span.end, is_day=span.is_day)

    def add_sky(self, value: float, index: int) -> None:
        if self.start_index is None:
            self.start_index = index
        self.end_index = index
        self._sky_sum += value
        self._sky_count += 1
        self.avg_sky = self._sky_sum / self._sky_count
        if self.max_sky is None or value > self.max_sky:
            self.max_sky = value
            self.max_sky_index = index
        if self.min_sky is None or value < self.min_sky:
            self.min_sky = value
            self.min_sky_index = index

    def add_temp(self, value: float) -> None:
        if self.max_temp is None or value > self.max_temp:
            self.max_temp = value

    def add_wind(self, speed: float, direction: Optional[float]) -> None:
        if self.max_wind_speed is None or speed > self.max_wind_speed:
            self.max_wind_speed = speed
            self.max_wind_direction = direction

    def add_pop(self, value: float) -> None:
        if self.max_daily_pop is None or value > self.max_daily_pop:
            self.max_daily_pop = value

    def add_weather(self, text: Optional[str]) -> None:
        self.weather.offer(parse_weather(text))
        self.fog_fraction = self.weather.fog_fraction


def build_period_windows(
    spans: Sequence[PeriodSpan],
    rows_by_element: Dict[NdfdElement, List[Match]],
    periods: Dict[NdfdElement, int],
    clock: LocalClock,
) -> List[PeriodWindow]:
    """
    Accumulate sky, temperature, wind, PoP and weather into each period.

    Missing values never contribute. When Temp is unavailable the period's
    MaxT stands in for the maximum temperature.
    """
    windows = [PeriodWindow.from_span(span) for span in spans]

    def place(element: NdfdElement):
        rows = rows_by_element.get(element, [])
        return rows, bucketize(spans, rows, element, periods.get(element) or default_period(element), clock)

    sky_rows, sky_buckets = place(NdfdElement.SKY)
    for window, indices in zip(windows, sky_buckets):
        for index in indices:
            if not sky_rows[index].is_missing and sky_rows[index].value is not None:
                window.add_sky(sky_rows[index].value, index)

    temp_element = NdfdElement.TEMP if rows_by_element.get(NdfdElement.TEMP) else NdfdElement.MAX_T
    temp_rows, temp_buckets = place(temp_element)
    for window, indices in zip(windows, temp_buckets):
        for index in indices:
            if temp_rows[index].value is not None:
                window.add_temp(temp_rows[index].value)

    directions = {
        match.valid_time: match.value
        for match in rows_by_element.get(NdfdElement.WIND_DIR, [])
        if match.value is not None
    }
    wind_rows, wind_buckets = place(NdfdElement.WIND_SPEED)
    for window, indices in zip(windows, wind_buckets):
        for index in indices:
            match = wind_rows[index]
            if match.value is not None:
                window.add_wind(match.value, directions.get(match.valid_time))

    pop_rows, pop_buckets = place(NdfdElement.POP12)
    for window, indices in zip(windows, pop_buckets):
        for index in indices:
            if pop_rows[index].value is not None:
                window.add_pop(pop_rows[index].value)

    wx_rows, wx_buckets = place(NdfdElement.WEATHER)
    for window, indices in zip(windows, wx_buckets):
        for index in indices:
            if not wx_rows[index].is_missing:
                window.add_weather(wx_rows[index].text)

    return windows


def spread_pop(weather_rows: Sequence[Match], pop_rows: Sequence[Match], pop_period: int = 12) -> List[float]:
    """
    PoP for every weather row: the first PoP whose (valid - period, valid]
    window holds the weather valid-time, or -1 when none does.
    """
    spread = []
    for weather in weather_rows:
        value: float = NO_POP
        for pop in pop_rows:
            if pop.valid_time - pop_period * HOUR < weather.valid_time <= pop.valid_time:
                value = pop.value if pop.value is not None else NO_POP
                break
        spread.append(value)
    return spread
