"""
NDFD element catalogue: identities, naming conventions, cadences and output metadata.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, Optional


class NdfdElement(IntEnum):
    """NDFD elements in probe/sort order."""
    MAX_T = 0
    MIN_T = 1
    POP12 = 2
    TEMP = 3
    WIND_DIR = 4
    WIND_SPEED = 5
    DEW_PT = 6
    SKY = 7
    QPF = 8
    SNOW = 9
    WEATHER = 10
    WAVE_HEIGHT = 11
    APPARENT_T = 12
    REL_HUM = 13
    WIND_GUST = 14
    WIND_INC_34 = 15
    WIND_INC_50 = 16
    WIND_INC_64 = 17
    WIND_CUM_34 = 18
    WIND_CUM_50 = 19
    WIND_CUM_64 = 20


class NamingConvention(Enum):
    SHORT = "short"
    FILE = "file"
    VERIFICATION = "verification"


@dataclass(frozen=True)
class ElementInfo:
    """
    Static description of one element.

    Attributes:
        short_name: Name used on the command line (e.g. "maxt", "t").
        file_name: Name used by NDFD data files (e.g. "temp", "wspd").
        verification_name: Two-letter verification file prefix (e.g. "tt").
        tag: DWML tag the element is written under.
        type_attr: Value of the `type` attribute, if any.
        display_name: Text of the `<name>` child.
        english_units: Units label for the English unit system.
        metric_units: Units label for the metric unit system.
        has_end_time: Whether layouts carry an end-valid-time per row.
        decimals: Number of decimals written for values.
    """
    short_name: str
    file_name: str
    verification_name: str
    tag: str
    type_attr: Optional[str]
    display_name: str
    english_units: Optional[str]
    metric_units: Optional[str]
    has_end_time: bool = False
    decimals: int = 0


_F = ("Fahrenheit", "Celsius")
_PCT = ("percent", "percent")
_KT = ("knots", "meters/second")


def _info(short, file, verif, tag, type_attr, name, units, *, end=False, decimals=0) -> ElementInfo:
    english, metric = units if units else (None, None)
    return ElementInfo(short, file, verif, tag, type_attr, name, english, metric, end, decimals)


ELEMENTS: Dict[NdfdElement, ElementInfo] = {
    NdfdElement.MAX_T: _info("maxt", "maxt", "mx", "temperature", "maximum", "Daily Maximum Temperature", _F, end=True),
    NdfdElement.MIN_T: _info("mint", "mint", "mn", "temperature", "minimum", "Daily Minimum Temperature", _F, end=True),
    NdfdElement.POP12: _info(
        "pop12", "pop12", "po", "probability-of-precipitation", "12 hour",
        "12 Hourly Probability of Precipitation", _PCT, end=True,
    ),
    NdfdElement.TEMP: _info("t", "temp", "tt", "temperature", "hourly", "Temperature", _F),
    NdfdElement.WIND_DIR: _info("winddir", "wdir", "wd", "direction", "wind", "Wind Direction", ("degrees true", "degrees true")),
    NdfdElement.WIND_SPEED: _info("windspd", "wspd", "ws", "wind-speed", "sustained", "Wind Speed", _KT),
    NdfdElement.DEW_PT: _info("td", "td", "dp", "temperature", "dew point", "Dew Point Temperature", _F),
    NdfdElement.SKY: _info("sky", "sky", "cl", "cloud-amount", "total", "Cloud Cover Amount", _PCT),
    NdfdElement.QPF: _info(
        "qpf", "qpf", "qp", "precipitation", "liquid", "Liquid Precipitation Amount",
        ("inches", "centimeters"), end=True, decimals=2,
    ),
    NdfdElement.SNOW: _info(
        "snowamt", "snow", "sn", "precipitation", "snow", "Snow Amount", ("inches", "centimeters"), end=True,
    ),
    NdfdElement.WEATHER: _info("wx", "wx", "wx", "weather", None, "Weather Type, Coverage, and Intensity", None),
    NdfdElement.WAVE_HEIGHT: _info("waveheight", "waveh", "wh", "waves", "significant", "Wave Height", ("feet", "meters")),
    NdfdElement.APPARENT_T: _info("apparentt", "apt", "at", "temperature", "apparent", "Apparent Temperature", _F),
    NdfdElement.REL_HUM: _info("rh", "rhm", "rh", "humidity", "relative", "Relative Humidity", _PCT),
    NdfdElement.WIND_GUST: _info("windgust", "wgust", "wg", "wind-speed", "gust", "Wind Speed Gust", _KT),
    NdfdElement.WIND_INC_34: _info(
        "probwindspd34i", "tcwspdabv34i", "i3", "wind-speed", "incremental34",
        "Probability of a Tropical Cyclone Wind Speed above 34 Knots (Incremental)", _PCT,
    ),
    NdfdElement.WIND_INC_50: _info(
        "probwindspd50i", "tcwspdabv50i", "i5", "wind-speed", "incremental50",
        "Probability of a Tropical Cyclone Wind Speed above 50 Knots (Incremental)", _PCT,
    ),
    NdfdElement.WIND_INC_64: _info(
        "probwindspd64i", "tcwspdabv64i", "i6", "wind-speed", "incremental64",
        "Probability of a Tropical Cyclone Wind Speed above 64 Knots (Incremental)", _PCT,
    ),
    NdfdElement.WIND_CUM_34: _info(
        "probwindspd34c", "tcwspdabv34c", "c3", "wind-speed", "cumulative34",
        "Probability of a Tropical Cyclone Wind Speed above 34 Knots (Cumulative)", _PCT,
    ),
    NdfdElement.WIND_CUM_50: _info(
        "probwindspd50c", "tcwspdabv50c", "c5", "wind-speed", "cumulative50",
        "Probability of a Tropical Cyclone Wind Speed above 50 Knots (Cumulative)", _PCT,
    ),
    NdfdElement.WIND_CUM_64: _info(
        "probwindspd64c", "tcwspdabv64c", "c6", "wind-speed", "cumulative64",
        "Probability of a Tropical Cyclone Wind Speed above 64 Knots (Cumulative)", _PCT,
    ),
}


def element_info(element: NdfdElement) -> ElementInfo:
    return ELEMENTS[element]


def element_name(element: NdfdElement, convention: NamingConvention = NamingConvention.SHORT) -> str:
    info = ELEMENTS[element]
    if convention is NamingConvention.FILE:
        return info.file_name
    if convention is NamingConvention.VERIFICATION:
        return info.verification_name
    return info.short_name


def lookup_element(name: str, convention: Optional[NamingConvention] = None) -> Optional[NdfdElement]:
    """
    Resolve an element name (case-insensitive) to its enum, or None when undefined.

    With no convention given, the short, file and verification names are tried in turn.
    """
    key = (name or "").strip().lower()
    if not key:
        return None
    conventions = [convention] if convention else list(NamingConvention)
    for conv in conventions:
        for element in NdfdElement:
            if element_name(element, conv) == key:
                return element
    return None


def default_period(element: NdfdElement) -> int:
    """Native period in hours assumed when only one row is available."""
    if element in (NdfdElement.MAX_T, NdfdElement.MIN_T):
        return 24
    if element in (NdfdElement.POP12, NdfdElement.WAVE_HEIGHT):
        return 12
    if element in (NdfdElement.QPF, NdfdElement.SNOW):
        return 6
    return 3


def resolve_period(valid_times) -> Optional[int]:
    """
    Derive the native period (hours) from the first two successive valid-times.

    Returns None when fewer than two rows exist, leaving the caller to fall back
    to `default_period`.
    """
    times = list(valid_times)
    for first, second in zip(times, times[1:]):
        if second > first:
            return int((second - first) // 3600)
    return None


def element_period(element: NdfdElement, valid_times) -> int:
    return resolve_period(valid_times) or default_period(element)
