"""
Document builder: ties windows, row counts, layouts, buckets and phrases
together for every point and hands the result to the DWML emitter.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..config.models import ConfigError, DocumentConfig, PointConfig
from ..config.settings import DEFAULT_ICON_BASE_URL
from ..ndfd.elements import NdfdElement, element_info, element_period
from ..ndfd.matches import Match, MatchStore
from ..ndfd.products import Product, UnitSystem, emitted_elements, select_elements
from ..render.dwml import DwmlDocument, IconBlock, PointBlock, ValueBlock, WeatherBlock, WeatherRow
from ..summary.buckets import attribution_instant, bucketize, build_period_windows, spread_pop
from ..summary.icons import cold_season, compose_instant, compose_period
from ..summary.layouts import LayoutRegistry, layout_rows, row_times
from ..summary.names import period_names
from ..summary.rows import NumRowsInfo, missing_icon_inputs, native_row_counts, summary_row_counts
from ..summary.sky import TREND_HORIZON_HOURS
from ..summary.windows import PeriodSpan, Window, day_periods, night_periods, plan_window, pop_periods, summary_periods
from ..util.meteo import fahrenheit_to_celsius, feet_to_meters, inches_to_cm, knots_to_mps, round_away
from ..util.solar import daytime_flags
from ..util.time import HOUR, LocalClock
from ..weather.ugly import parse_weather

logger = logging.getLogger(__name__)

_METRIC = {
    NdfdElement.MAX_T: fahrenheit_to_celsius,
    NdfdElement.MIN_T: fahrenheit_to_celsius,
    NdfdElement.TEMP: fahrenheit_to_celsius,
    NdfdElement.DEW_PT: fahrenheit_to_celsius,
    NdfdElement.APPARENT_T: fahrenheit_to_celsius,
    NdfdElement.WIND_SPEED: knots_to_mps,
    NdfdElement.WIND_GUST: knots_to_mps,
    NdfdElement.QPF: inches_to_cm,
    NdfdElement.SNOW: inches_to_cm,
    NdfdElement.WAVE_HEIGHT: feet_to_meters,
}


@dataclass
class DocumentRequest:
    """
    Everything needed to build one document.

    Attributes:
        product: Output profile.
        points: Forecast points, indexed like the matches' `point` field.
        matches: Probed values for all points.
        start_time: Requested start (epoch seconds UTC) or None.
        end_time: Requested end (epoch seconds UTC) or None.
        num_days: Days for summary profiles, or None to derive from the data.
        unit_system: English or metric output.
        include_icons: Whether to derive condition icons.
        elements: Elements the user asked for.
        now: Reference "current" time; defaults to the wall clock.
        icon_base_url: Base URL for derived icons.
    """
    product: Product
    points: Sequence[PointConfig]
    matches: Sequence[Match]
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    num_days: Optional[int] = None
    unit_system: UnitSystem = UnitSystem.ENGLISH
    include_icons: bool = True
    elements: Sequence[NdfdElement] = ()
    now: Optional[int] = None
    icon_base_url: str = DEFAULT_ICON_BASE_URL

    @classmethod
    def from_config(
        cls,
        config: DocumentConfig,
        matches: Sequence[Match],
        *,
        now: Optional[int] = None,
        icon_base_url: str = DEFAULT_ICON_BASE_URL,
    ) -> "DocumentRequest":
        return cls(
            product=config.product,
            points=list(config.points),
            matches=list(matches),
            start_time=config.start_time,
            end_time=config.end_time,
            num_days=config.num_days,
            unit_system=config.unit_system,
            include_icons=config.icons,
            elements=list(config.elements),
            now=now,
            icon_base_url=icon_base_url,
        )


@dataclass
class _PointPlan:
    index: int
    point: PointConfig
    clock: LocalClock
    window: Window
    rows: Dict[NdfdElement, List[Match]]
    periods: Dict[NdfdElement, int]
    counts: Dict[NdfdElement, NumRowsInfo] = field(default_factory=dict)


def active_points(points: Sequence[PointConfig]) -> List[Tuple[int, PointConfig]]:
    """
    Points inside a forecast sector, with their original indices.

    Raises:
        ConfigError: If no point lies in any sector.
    """
    if not points:
        raise ConfigError("No forecast points configured.")
    active = []
    for index, point in enumerate(points):
        if not point.in_sector:
            logger.warning(
                "Point %s (%.2f, %.2f) is outside every forecast sector; skipping it.",
                point.name or index + 1,
                point.latitude,
                point.longitude,
            )
            continue
        active.append((index, point))
    if not active:
        raise ConfigError("None of the configured points lies in a forecast sector.")
    return active


def format_value(element: NdfdElement, match: Match, unit_system: UnitSystem = UnitSystem.ENGLISH) -> Optional[str]:
    """Render one value; None means nil."""
    if match.is_missing or match.value is None:
        return None
    value = match.value
    if unit_system is UnitSystem.METRIC and element in _METRIC:
        value = _METRIC[element](value)
    decimals = element_info(element).decimals
    if decimals:
        return f"{value:.{decimals}f}"
    return str(round_away(value))


def build_document(request: DocumentRequest) -> Optional[DwmlDocument]:
    """
    Build the document model for a request.

    Returns None when there is nothing to report (no matches at all).

    Raises:
        ConfigError: On invalid windows or when every point is out of sector.
    """
    if not request.matches:
        logger.warning("No forecast values were supplied; no document produced.")
        return None
    points = active_points(request.points)
    now = request.now if request.now is not None else int(time.time())

    store = MatchStore(request.matches)
    product = request.product
    selected = select_elements(product, request.elements, include_icons=request.include_icons)
    emitted = emitted_elements(product, selected)
    logger.debug("Selected elements: %s", ", ".join(element.name for element in selected))

    valid_times = [match.valid_time for match in store]
    overall = (min(valid_times), max(valid_times))
    plans = [_plan_point(index, point, store, selected, request, now, overall) for index, point in points]

    include_icons = request.include_icons
    if include_icons:
        missing = missing_icon_inputs(plan.counts for plan in plans)
        if missing:
            logger.warning(
                "Icons disabled: no in-window values for %s.",
                ", ".join(element.name for element in missing),
            )
            include_icons = False

    registry = LayoutRegistry(product.summarization)
    blocks = []
    for number, plan in enumerate(plans, start=1):
        if product.is_summary:
            parameters = _summary_parameters(plan, product, emitted, registry, request, now, include_icons)
        else:
            parameters = _native_parameters(plan, product, emitted, registry, request, now, include_icons)
        blocks.append(PointBlock(number, plan.point.latitude, plan.point.longitude, parameters))

    logger.info(
        "Built %s document: %d point(s), %d time layout(s)",
        product.value,
        len(blocks),
        len(registry),
    )
    return DwmlDocument(product=product, creation_time=now, points=blocks, layouts=list(registry))


def _plan_point(
    index: int,
    point: PointConfig,
    store: MatchStore,
    selected: Sequence[NdfdElement],
    request: DocumentRequest,
    now: int,
    overall: Tuple[int, int],
) -> _PointPlan:
    clock = LocalClock(point.utc_offset, point.observes_dst)
    rows = {}
    for element in selected:
        element_rows = store.rows(element, index)
        if element_rows:
            rows[element] = element_rows
    periods = {element: element_period(element, [m.valid_time for m in element_rows]) for element, element_rows in rows.items()}

    time_range = store.time_range(index) or overall
    pop_rows = rows.get(NdfdElement.POP12, [])
    window = plan_window(
        request.product,
        clock,
        start_time=request.start_time,
        end_time=request.end_time,
        num_days=request.num_days,
        earliest_time=time_range[0],
        latest_time=time_range[1],
        first_pop_time=pop_rows[0].valid_time if pop_rows else None,
        now=now,
    )
    plan = _PointPlan(index, point, clock, window, rows, periods)

    for element, element_rows in rows.items():
        period = periods[element]
        if request.product.is_summary:
            spans = _element_spans(element, window, request.product)
            plan.counts[element] = summary_row_counts(
                element_rows,
                spans,
                lambda match, element=element, period=period: attribution_instant(element, match.valid_time, period, clock),
            )
        else:
            plan.counts[element] = native_row_counts(element, element_rows, period, window, clock)
    return plan


def _element_spans(element: NdfdElement, window: Window, product: Product) -> List[PeriodSpan]:
    if element is NdfdElement.MAX_T:
        return day_periods(window)
    if element is NdfdElement.MIN_T:
        return night_periods(window)
    if element is NdfdElement.POP12:
        return pop_periods(window)
    return summary_periods(window, product)


def _native_parameters(
    plan: _PointPlan,
    product: Product,
    emitted: Sequence[NdfdElement],
    registry: LayoutRegistry,
    request: DocumentRequest,
    now: int,
    include_icons: bool,
) -> list:
    blocks: list = []
    for element in emitted:
        info = plan.counts.get(element)
        if info is None or not info.present:
            continue
        kept = info.kept(plan.rows[element])
        period = plan.periods[element]
        times = [row_times(element, match.valid_time, period, plan.clock) for match in kept]
        names = None
        if product is Product.GLANCE and period >= 12:
            names = period_names([start for start, _ in times], period, plan.clock, now)
        key = registry.register(period, layout_rows(times, plan.clock, names))

        if element is NdfdElement.WEATHER:
            blocks.append(
                WeatherBlock(key, [WeatherRow(None if match.is_missing else parse_weather(match.text)) for match in kept])
            )
            if include_icons:
                blocks.append(IconBlock(key, _row_icons(plan, kept, request.icon_base_url)))
        else:
            values = [format_value(element, match, request.unit_system) for match in kept]
            blocks.append(ValueBlock(element, key, values, request.unit_system))
    return blocks


def _values_by_time(plan: _PointPlan, element: NdfdElement) -> Dict[int, float]:
    return {
        match.valid_time: match.value
        for match in plan.rows.get(element, [])
        if match.value is not None
    }


def _row_icons(plan: _PointPlan, weather_rows: Sequence[Match], base_url: str) -> List[Optional[str]]:
    """One icon per weather row, judged at the row's valid time."""
    sky = _values_by_time(plan, NdfdElement.SKY)
    temp = _values_by_time(plan, NdfdElement.TEMP)
    speed = _values_by_time(plan, NdfdElement.WIND_SPEED)
    direction = _values_by_time(plan, NdfdElement.WIND_DIR)
    pops = spread_pop(
        weather_rows,
        plan.rows.get(NdfdElement.POP12, []),
        plan.periods.get(NdfdElement.POP12, 12),
    )
    daytime = daytime_flags(
        [match.valid_time for match in weather_rows],
        plan.point.latitude,
        plan.point.longitude,
    )
    links = []
    for match, pop, is_day in zip(weather_rows, pops, daytime):
        instant = match.valid_time
        forecast = compose_instant(
            instant,
            is_day=is_day,
            weather=None if match.is_missing else match.text,
            sky=sky.get(instant),
            temp=temp.get(instant),
            wind_speed=speed.get(instant),
            wind_direction=direction.get(instant),
            pop=pop,
            season=cold_season(instant, plan.clock),
        )
        links.append(forecast.icon_url(base_url))
    return links


def _summary_parameters(
    plan: _PointPlan,
    product: Product,
    emitted: Sequence[NdfdElement],
    registry: LayoutRegistry,
    request: DocumentRequest,
    now: int,
    include_icons: bool,
) -> list:
    blocks: list = []
    clock = plan.clock
    for element in emitted:
        info = plan.counts.get(element)
        if info is None or not info.present:
            continue
        spans = _element_spans(element, plan.window, product)
        if element is NdfdElement.WEATHER:
            blocks.extend(_summary_weather(plan, spans, product, registry, request, now, include_icons))
            continue

        layout_period = 12 if element is NdfdElement.POP12 else 24
        times = [(span.start, span.end) for span in spans]
        names = period_names([span.start for span in spans], layout_period, clock, now)
        key = registry.register(layout_period, layout_rows(times, clock, names))

        rows = plan.rows[element]
        buckets = bucketize(spans, rows, element, plan.periods[element], clock)
        values: List[Optional[str]] = []
        for span, indices in zip(spans, buckets):
            if not indices or _is_past(span, plan.window):
                values.append(None)
                continue
            values.append(format_value(element, rows[indices[0]], request.unit_system))
        blocks.append(ValueBlock(element, key, values, request.unit_system))
    return blocks


def _summary_weather(
    plan: _PointPlan,
    spans: Sequence[PeriodSpan],
    product: Product,
    registry: LayoutRegistry,
    request: DocumentRequest,
    now: int,
    include_icons: bool,
) -> list:
    clock = plan.clock
    period = product.period_hours
    times = [(span.start, span.end) for span in spans]
    names = period_names([span.start for span in spans], period, clock, now)
    key = registry.register(period, layout_rows(times, clock, names))

    windows = build_period_windows(spans, plan.rows, plan.periods, clock)
    horizon = spans[0].start + TREND_HORIZON_HOURS * HOUR if spans else 0
    weather_rows: List[WeatherRow] = []
    links: List[Optional[str]] = []
    for span, window in zip(spans, windows):
        forecast = compose_period(
            window,
            within_horizon=span.start < horizon,
            season=cold_season(span.start, clock),
        )
        if _is_past(span, plan.window):
            weather_rows.append(WeatherRow())
            links.append(None)
            continue
        expression = window.weather.expression if window.weather.match_count else None
        weather_rows.append(WeatherRow(expression, forecast.phrase))
        links.append(forecast.icon_url(request.icon_base_url))

    blocks: list = [WeatherBlock(key, weather_rows)]
    if include_icons:
        blocks.append(IconBlock(key, links))
    return blocks


def _is_past(span: PeriodSpan, window: Window) -> bool:
    """A period that ended before the requested start has nothing to report."""
    return window.start is not None and span.end <= window.start
