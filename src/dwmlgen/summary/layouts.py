"""
Time-layout registry and the per-element synthesis of row start/end times.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..ndfd.elements import NdfdElement, element_info
from ..util.time import HOUR, LocalClock

# MaxT covers 07-19 local standard time, MinT 19-08.
MAX_T_HOURS = (7, 19)
MIN_T_HOURS = (19, 8)


def row_times(element: NdfdElement, valid_time: int, period_hours: int, clock: LocalClock) -> Tuple[int, Optional[int]]:
    """
    Start and end instants a row is reported with.

    MaxT/MinT get synthesized daytime/overnight bounds instead of their raw
    valid-time; other period elements end at their valid-time; snapshot
    elements have no end.
    """
    local = clock.local(valid_time)
    if element is NdfdElement.MAX_T:
        day = local.date() if local.hour >= 12 else local.date() - timedelta(days=1)
        return clock.standard_epoch(day, MAX_T_HOURS[0]), clock.standard_epoch(day, MAX_T_HOURS[1])
    if element is NdfdElement.MIN_T:
        day = local.date() if local.hour < 18 else local.date() + timedelta(days=1)
        return (
            clock.standard_epoch(day - timedelta(days=1), MIN_T_HOURS[0]),
            clock.standard_epoch(day, MIN_T_HOURS[1]),
        )
    if element_info(element).has_end_time:
        return valid_time - period_hours * HOUR, valid_time
    return valid_time, None


@dataclass(frozen=True)
class LayoutRow:
    start: str
    end: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True)
class TimeLayout:
    key: str
    period_hours: int
    rows: Tuple[LayoutRow, ...]
    summarization: str = "none"

    @property
    def first_start(self) -> str:
        return self.rows[0].start if self.rows else ""


def layout_rows(
    times: Sequence[Tuple[int, Optional[int]]],
    clock: LocalClock,
    names: Optional[Sequence[Optional[str]]] = None,
) -> Tuple[LayoutRow, ...]:
    """Render (start, end) instants as local ISO strings, attaching period names if given."""
    rows = []
    for index, (start, end) in enumerate(times):
        rows.append(
            LayoutRow(
                start=clock.isoformat(start),
                end=clock.isoformat(end) if end is not None else None,
                name=names[index] if names is not None else None,
            )
        )
    return tuple(rows)


class LayoutRegistry:
    """
    Insertion-ordered store of time layouts for one document.

    Two layouts are the same layout when period, row count and first start
    all agree; the first registration wins and later ones reuse its key.
    """

    def __init__(self, summarization: str = "none"):
        self.summarization = summarization
        self._layouts: Dict[Tuple[int, int, str], TimeLayout] = {}

    def register(self, period_hours: int, rows: Sequence[LayoutRow]) -> str:
        rows = tuple(rows)
        identity = (period_hours, len(rows), rows[0].start if rows else "")
        existing = self._layouts.get(identity)
        if existing is not None:
            return existing.key
        key = f"k-p{period_hours}h-n{len(rows)}-{len(self._layouts) + 1}"
        self._layouts[identity] = TimeLayout(key, period_hours, rows, self.summarization)
        return key

    def __iter__(self) -> Iterator[TimeLayout]:
        return iter(self._layouts.values())

    def __len__(self) -> int:
        return len(self._layouts)

    def keys(self) -> List[str]:
        return [layout.key for layout in self._layouts.values()]
