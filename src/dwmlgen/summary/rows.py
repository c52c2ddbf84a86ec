"""
Row-count allocation: how many of an element's matches fall inside the window.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..ndfd.elements import NdfdElement, element_info
from ..ndfd.matches import Match
from ..ndfd.products import ICON_PREREQUISITES
from ..util.time import HOUR, LocalClock
from .windows import PeriodSpan, Window

logger = logging.getLogger(__name__)


@dataclass
class NumRowsInfo:
    """
    Row bookkeeping for one (point, element).

    Attributes:
        total: Number of matches held for the element.
        skip_beg: Matches dropped before the window.
        skip_end: Matches dropped after the window.
        first_user_time: Valid-time of the first kept match.
        last_user_time: Valid-time of the last kept match.
    """
    total: int = 0
    skip_beg: int = 0
    skip_end: int = 0
    first_user_time: Optional[int] = None
    last_user_time: Optional[int] = None

    @property
    def formatted(self) -> int:
        return self.total - self.skip_beg - self.skip_end

    @property
    def present(self) -> bool:
        return self.formatted > 0

    def kept(self, rows: Sequence[Match]) -> List[Match]:
        return list(rows[self.skip_beg:self.total - self.skip_end])


def count_rows(
    rows: Sequence[Match],
    *,
    before: Callable[[Match], bool],
    after: Callable[[Match], bool],
) -> NumRowsInfo:
    """
    Count rows falling before and after a window.

    Rows are in valid-time order, so skipped rows only come off the ends.
    """
    total = len(rows)
    skip_beg = 0
    while skip_beg < total and before(rows[skip_beg]):
        skip_beg += 1
    skip_end = 0
    while skip_end < total - skip_beg and after(rows[total - 1 - skip_end]):
        skip_end += 1
    info = NumRowsInfo(total=total, skip_beg=skip_beg, skip_end=skip_end)
    if info.present:
        info.first_user_time = rows[skip_beg].valid_time
        info.last_user_time = rows[total - skip_end - 1].valid_time
    return info


def native_row_counts(
    element: NdfdElement,
    rows: Sequence[Match],
    period_hours: int,
    window: Window,
    clock: LocalClock,
) -> NumRowsInfo:
    """
    Row counts for the time-series and glance profiles.

    Every element loses a quarter period at each edge of the window. The start
    edge is left alone for PoP, before 06:00 local, and for MinT from 20:00 on,
    so overnight values still surface.
    """
    has_end = element_info(element).has_end_time
    shrink = period_hours * HOUR // 4

    def start_instant(match: Match) -> int:
        return match.valid_time - period_hours * HOUR if has_end else match.valid_time

    effective_start = None
    if window.start is not None:
        hour = clock.local_hour(window.start)
        start_shrink = shrink
        if element is NdfdElement.POP12 or hour < 6 or (element is NdfdElement.MIN_T and hour >= 20):
            start_shrink = 0
        effective_start = window.start + start_shrink
    effective_end = window.end - shrink if window.end is not None else None

    def before(match: Match) -> bool:
        return effective_start is not None and match.valid_time < effective_start

    def after(match: Match) -> bool:
        return effective_end is not None and start_instant(match) > effective_end

    return count_rows(rows, before=before, after=after)


def summary_row_counts(
    rows: Sequence[Match],
    spans: Sequence[PeriodSpan],
    instant: Callable[[Match], int],
) -> NumRowsInfo:
    """Row counts against a summary period grid, using each row's attribution instant."""
    if not spans:
        return count_rows(rows, before=_always, after=_never)
    low, high = spans[0].start, spans[-1].end
    return count_rows(
        rows,
        before=lambda match: instant(match) < low,
        after=lambda match: instant(match) >= high,
    )


def missing_icon_inputs(counts: Iterable[Dict[NdfdElement, NumRowsInfo]]) -> List[NdfdElement]:
    """Icon prerequisites with no in-window rows for at least one point."""
    missing = set()
    for per_point in counts:
        for element in ICON_PREREQUISITES:
            info = per_point.get(element)
            if info is None or not info.present:
                missing.add(element)
    return sorted(missing)


def _never(match: Match) -> bool:
    return False


def _always(match: Match) -> bool:
    return True
