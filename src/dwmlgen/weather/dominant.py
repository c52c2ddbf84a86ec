"""
Dominant weather selection for summarization periods.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

from .tokens import WxType
from .ugly import WeatherExpression, WeatherGroup


def outranks(candidate: WeatherGroup, current: WeatherGroup) -> bool:
    """Coverage decides; ties fall to intensity, then to type."""
    return candidate.rank > current.rank


def dominant_group(expression: WeatherExpression) -> Optional[WeatherGroup]:
    """Reduce one weather value to its single most dominant group."""
    best: Optional[WeatherGroup] = None
    for group in expression:
        if best is None or outranks(group, best):
            best = group
    return best


@dataclass
class PeriodWeather:
    """
    Running dominant weather for one period.

    The full group-set of the dominant match is retained so mixtures
    ("Rain/Snow") can be recognised later.
    """
    dominant: Optional[WeatherGroup] = None
    expression: WeatherExpression = field(default_factory=WeatherExpression)
    match_count: int = 0
    fog_count: int = 0

    @property
    def fog_fraction(self) -> float:
        if not self.match_count:
            return 0.0
        return self.fog_count / self.match_count

    def offer(self, expression: WeatherExpression) -> None:
        self.match_count += 1
        group = dominant_group(expression)
        if group is None:
            return
        if group.wx_type is WxType.FOG:
            self.fog_count += 1
        if self.dominant is None or outranks(group, self.dominant):
            self._take(group, expression)
        elif group.rank == self.dominant.rank and len(expression) > len(self.expression):
            # Same headline weather, but the richer description wins.
            self._take(group, expression)

    def _take(self, group: WeatherGroup, expression: WeatherExpression) -> None:
        self.dominant = group
        self.expression = expression


def select_period_weather(expressions: Iterable[WeatherExpression]) -> PeriodWeather:
    period = PeriodWeather()
    for expression in expressions:
        period.offer(expression)
    return period
