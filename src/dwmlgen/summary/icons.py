"""
Phrase and icon composition for summary periods and individual weather rows.

The chain runs: dominant fog, PoP-gated precipitation (with mixtures),
obscurations, sky cover. Temperature and wind extremes then replace whatever
phrase the chain picked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, FrozenSet, List, Optional, Tuple

from ..config.settings import DEFAULT_ICON_BASE_URL
from ..util.meteo import is_north_wind, round_pop
from ..util.time import LocalClock
from ..weather.tokens import Coverage, WxType
from ..weather.ugly import WeatherGroup
from .buckets import PeriodWindow
from .sky import analyze_sky

logger = logging.getLogger(__name__)

PRECIP_POP_THRESHOLD = 20
THUNDER_POP_THRESHOLD = 10
FOG_DOMINANCE = 0.5
COVERED_SKY = 60
HOT_F = 95
COLD_F = 32
WINDY_KT = 25
BREEZY_KT = 15


@dataclass(frozen=True)
class Template:
    """Phrase plus day/night icon prefixes; showers and storms also have a covered-sky variant."""
    phrase: str
    day: str
    night: str
    covered_day: Optional[str] = None
    covered_night: Optional[str] = None

    def prefix(self, is_day: bool, avg_sky: Optional[float] = None) -> str:
        if self.covered_day and avg_sky is not None and avg_sky > COVERED_SKY:
            return self.covered_day if is_day else (self.covered_night or self.covered_day)
        return self.day if is_day else self.night


PRECIP_TEMPLATES: Dict[WxType, Template] = {
    WxType.RAIN: Template("Rain", "ra", "nra"),
    WxType.DRIZZLE: Template("Drizzle", "ra", "nra"),
    WxType.RAIN_SHOWERS: Template("Showers", "hi_shwrs", "hi_nshwrs", "shra", "nshra"),
    WxType.SNOW: Template("Snow", "sn", "nsn"),
    WxType.SNOW_SHOWERS: Template("Snow Showers", "sn", "nsn"),
    WxType.ICE_PELLETS: Template("Sleet", "ip", "nip"),
    WxType.FREEZING_RAIN: Template("Freezing Rain", "fzra", "nfzra"),
    WxType.FREEZING_DRIZZLE: Template("Freezing Drizzle", "fzra", "nfzra"),
    WxType.THUNDERSTORMS: Template("Thunderstorms", "scttsra", "nscttsra", "tsra", "ntsra"),
    WxType.WATER_SPOUTS: Template("Waterspouts", "scttsra", "nscttsra", "tsra", "ntsra"),
}

OBSCURATION_TEMPLATES: Dict[WxType, Template] = {
    WxType.FOG: Template("Fog", "fg", "nfg"),
    WxType.ICE_FOG: Template("Ice Fog", "fg", "nfg"),
    WxType.FREEZING_FOG: Template("Freezing Fog", "fg", "nfg"),
    WxType.SMOKE: Template("Smoke", "fu", "nfu"),
    WxType.HAZE: Template("Haze", "hz", "hz"),
    WxType.BLOWING_DUST: Template("Blowing Dust", "du", "ndu"),
    WxType.BLOWING_SAND: Template("Blowing Sand", "du", "ndu"),
    WxType.VOLCANIC_ASH: Template("Volcanic Ash", "fu", "nfu"),
    WxType.FROST: Template("Frost", "cold", "ncold"),
    WxType.ICE_CRYSTALS: Template("Ice Crystals", "ip", "nip"),
    WxType.BLOWING_SNOW: Template("Blowing Snow", "blizzard", "nblizzard"),
    WxType.FREEZING_SPRAY: Template("Freezing Spray", "fzra", "nfzra"),
}

THUNDER_TYPES = frozenset({WxType.THUNDERSTORMS, WxType.WATER_SPOUTS})

_FAMILIES: Dict[WxType, str] = {
    WxType.RAIN: "rain",
    WxType.RAIN_SHOWERS: "rain",
    WxType.DRIZZLE: "rain",
    WxType.SNOW: "snow",
    WxType.SNOW_SHOWERS: "snow",
    WxType.FREEZING_RAIN: "freezing",
    WxType.FREEZING_DRIZZLE: "freezing",
    WxType.ICE_PELLETS: "ice",
}

WINTRY_MIX = Template("Wintry Mix", "mix", "nmix")

MIXTURE_TEMPLATES: Dict[FrozenSet[str], Template] = {
    frozenset({"rain", "snow"}): Template("Rain/Snow", "rasn", "nrasn"),
    frozenset({"rain", "freezing"}): Template("Rain/Freezing Rain", "ra_fzra", "nra_fzra"),
    frozenset({"rain", "ice"}): Template("Rain/Sleet", "raip", "nraip"),
    frozenset({"snow", "ice"}): Template("Snow/Sleet", "ip", "nip"),
    frozenset({"snow", "freezing"}): WINTRY_MIX,
    frozenset({"freezing", "ice"}): WINTRY_MIX,
}

OBSCURATION_PREFIX = {
    Coverage.PATCHY: "Patchy ",
    Coverage.AREAS: "Areas Of ",
}


@dataclass(frozen=True)
class PeriodForecast:
    """
    Phrase and icon for one period.

    Attributes:
        phrase: Short phrase, or None when nothing could be derived.
        icon: Icon filename (no base URL), or None.
        precipitation: True when the phrase describes precipitation.
    """
    phrase: Optional[str] = None
    icon: Optional[str] = None
    precipitation: bool = False

    def icon_url(self, base_url: str = DEFAULT_ICON_BASE_URL) -> Optional[str]:
        if not self.icon:
            return None
        return base_url.rstrip("/") + "/" + self.icon


def icon_filename(prefix: str, pop: Optional[float] = None) -> str:
    """`{prefix}{pop}.jpg` with PoP rounded to ten, only when it rounds into 10-100."""
    rounded = round_pop(pop)
    if rounded is not None and 10 <= rounded <= 100:
        return f"{prefix}{rounded}.jpg"
    return f"{prefix}.jpg"


def coverage_phrase(phrase: str, coverage: Coverage) -> str:
    if coverage in (Coverage.CHANCE, Coverage.SLIGHT_CHANCE):
        return "Chance " + phrase
    if coverage is Coverage.LIKELY:
        return phrase + " Likely"
    return phrase


def pop_threshold(wx_type: WxType) -> int:
    return THUNDER_POP_THRESHOLD if wx_type in THUNDER_TYPES else PRECIP_POP_THRESHOLD


def passes_pop_gate(wx_type: WxType, pop: Optional[float]) -> bool:
    """Unknown PoP never gates."""
    return pop is None or pop < 0 or pop >= pop_threshold(wx_type)


def cold_season(instant: int, clock: LocalClock) -> Tuple[int, int]:
    """The 1 October to 1 April interval around `instant`."""
    local = clock.local_date(instant)
    year = local.year if local.month >= 4 else local.year - 1
    return clock.wall_clock(date(year, 10, 1), 0), clock.wall_clock(date(year + 1, 4, 1), 0)


def _strongest(groups: List[WeatherGroup]) -> WeatherGroup:
    best = groups[0]
    for group in groups[1:]:
        if group.rank > best.rank:
            best = group
    return best


def precipitation_forecast(
    groups: List[WeatherGroup],
    pop: Optional[float],
    is_day: bool,
    avg_sky: Optional[float] = None,
) -> Optional[PeriodForecast]:
    """Phrase and icon for the PoP-qualified precipitation groups, if any."""
    active = [
        group for group in groups
        if group.wx_type in PRECIP_TEMPLATES and passes_pop_gate(group.wx_type, pop)
    ]
    if not active:
        return None
    lead = _strongest(active)
    pop_for_icon = pop if pop is not None and pop >= 0 else None

    thunder = [group for group in active if group.wx_type in THUNDER_TYPES]
    families = {_FAMILIES[group.wx_type] for group in active if group.wx_type in _FAMILIES}
    if thunder:
        storm = _strongest(thunder)
        template = PRECIP_TEMPLATES[storm.wx_type]
        phrase = template.phrase
        rain = [group for group in active if _FAMILIES.get(group.wx_type) == "rain"]
        if rain:
            phrase = f"{PRECIP_TEMPLATES[_strongest(rain).wx_type].phrase} and {phrase}"
    elif len(families) >= 2:
        template = MIXTURE_TEMPLATES.get(frozenset(families), WINTRY_MIX)
        phrase = template.phrase
    else:
        template = PRECIP_TEMPLATES[lead.wx_type]
        phrase = template.phrase

    return PeriodForecast(
        phrase=coverage_phrase(phrase, lead.coverage),
        icon=icon_filename(template.prefix(is_day, avg_sky), pop_for_icon),
        precipitation=True,
    )


def obscuration_forecast(groups: List[WeatherGroup], is_day: bool) -> Optional[PeriodForecast]:
    candidates = [group for group in groups if group.wx_type in OBSCURATION_TEMPLATES]
    if not candidates:
        return None
    group = _strongest(candidates)
    template = OBSCURATION_TEMPLATES[group.wx_type]
    phrase = OBSCURATION_PREFIX.get(group.coverage, "") + template.phrase
    return PeriodForecast(phrase=phrase, icon=icon_filename(template.prefix(is_day)))


def apply_extremes(
    forecast: PeriodForecast,
    window: PeriodWindow,
    season: Optional[Tuple[int, int]] = None,
) -> PeriodForecast:
    """Hot/Cold, then Windy/Blustery/Breezy, each replacing the prior phrase."""
    suffix = "" if window.is_day else "n"
    if window.is_day and window.max_temp is not None:
        if window.max_temp > HOT_F:
            forecast = PeriodForecast("Hot", "hot.jpg")
        elif window.max_temp < COLD_F:
            forecast = PeriodForecast("Cold", "cold.jpg")

    speed = window.max_wind_speed
    if speed is None:
        return forecast
    if speed >= WINDY_KT:
        return PeriodForecast("Windy", f"{suffix}wind.jpg")
    if speed >= BREEZY_KT:
        in_season = season is not None and season[0] <= window.start < season[1]
        frigid = window.max_temp is not None and window.max_temp < COLD_F
        if in_season and frigid and is_north_wind(window.max_wind_direction):
            return PeriodForecast("Blustery", f"{suffix}wind.jpg")
        return PeriodForecast("Breezy", f"{suffix}wind.jpg")
    return forecast


def compose_period(
    window: PeriodWindow,
    *,
    within_horizon: bool = True,
    season: Optional[Tuple[int, int]] = None,
) -> PeriodForecast:
    """Derive the phrase and icon for one period window."""
    is_day = window.is_day
    pop = window.max_daily_pop
    if window.fog_fraction >= FOG_DOMINANCE:
        forecast = PeriodForecast("Fog", icon_filename("fg" if is_day else "nfg"))
    else:
        groups = list(window.weather.expression)
        forecast = precipitation_forecast(groups, pop, is_day, window.avg_sky)
        if forecast is None:
            forecast = obscuration_forecast(groups, is_day)
        if forecast is None:
            sky = analyze_sky(window, within_horizon=within_horizon)
            forecast = PeriodForecast(sky.phrase, icon_filename(sky.icon)) if sky else PeriodForecast()
    return apply_extremes(forecast, window, season)


def compose_instant(
    instant: int,
    *,
    is_day: bool,
    weather: Optional[str],
    sky: Optional[float] = None,
    temp: Optional[float] = None,
    wind_speed: Optional[float] = None,
    wind_direction: Optional[float] = None,
    pop: Optional[float] = None,
    season: Optional[Tuple[int, int]] = None,
) -> PeriodForecast:
    """Phrase and icon for a single weather row (time-series and glance)."""
    window = PeriodWindow(start=instant, end=instant, is_day=is_day)
    if sky is not None:
        window.add_sky(sky, 0)
    if temp is not None:
        window.add_temp(temp)
    if wind_speed is not None:
        window.add_wind(wind_speed, wind_direction)
    if pop is not None and pop >= 0:
        window.add_pop(pop)
    window.add_weather(weather)
    return compose_period(window, within_horizon=False, season=season)
