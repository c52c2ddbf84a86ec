"""
Summarization: window planning, row counts, time layouts, period buckets and
phrase/icon derivation.
"""

from .buckets import PeriodWindow, attribution_instant, bucketize, build_period_windows, spread_pop
from .icons import PeriodForecast, cold_season, compose_instant, compose_period, icon_filename
from .layouts import LayoutRegistry, LayoutRow, TimeLayout, layout_rows, row_times
from .names import period_names
from .rows import NumRowsInfo, missing_icon_inputs, native_row_counts, summary_row_counts
from .sky import SkyPhrase, SkyTrend, analyze_sky, sky_category
from .windows import PeriodSpan, Window, day_periods, night_periods, plan_window, pop_periods, summary_periods

__all__ = [
    "PeriodWindow",
    "attribution_instant",
    "bucketize",
    "build_period_windows",
    "spread_pop",
    "PeriodForecast",
    "cold_season",
    "compose_instant",
    "compose_period",
    "icon_filename",
    "LayoutRegistry",
    "LayoutRow",
    "TimeLayout",
    "layout_rows",
    "row_times",
    "period_names",
    "NumRowsInfo",
    "missing_icon_inputs",
    "native_row_counts",
    "summary_row_counts",
    "SkyPhrase",
    "SkyTrend",
    "analyze_sky",
    "sky_category",
    "PeriodSpan",
    "Window",
    "day_periods",
    "night_periods",
    "plan_window",
    "pop_periods",
    "summary_periods",
]
