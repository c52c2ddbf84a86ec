"""
Weather token lattices and their English translations.

Coverage, intensity and type are totally ordered; a higher ordinal is more dominant.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict, Optional


class Coverage(IntEnum):
    NONE = 0
    PATCHY = 1
    AREAS = 2
    BRIEF = 3
    INTERMITTENT = 4
    PERIODS = 5
    OCCASIONAL = 6
    FREQUENT = 7
    ISOLATED = 8
    SLIGHT_CHANCE = 9
    SCATTERED = 10
    CHANCE = 11
    NUMEROUS = 12
    LIKELY = 13
    WIDESPREAD = 14
    DEFINITE = 15


class Intensity(IntEnum):
    NONE = 0
    VERY_LIGHT = 1
    LIGHT = 2
    MODERATE = 3
    HEAVY = 4


class WxType(IntEnum):
    NONE = 0
    FOG = 1
    BLOWING_SNOW = 2
    BLOWING_DUST = 3
    BLOWING_SAND = 4
    HAZE = 5
    SMOKE = 6
    FROST = 7
    VOLCANIC_ASH = 8
    DRIZZLE = 9
    RAIN_SHOWERS = 10
    RAIN = 11
    ICE_CRYSTALS = 12
    ICE_FOG = 13
    SNOW_SHOWERS = 14
    SNOW = 15
    ICE_PELLETS = 16
    FREEZING_FOG = 17
    FREEZING_SPRAY = 18
    FREEZING_DRIZZLE = 19
    FREEZING_RAIN = 20
    THUNDERSTORMS = 21
    WATER_SPOUTS = 22


COVERAGE_CODES: Dict[str, Coverage] = {
    "none": Coverage.NONE,
    "Patchy": Coverage.PATCHY,
    "Areas": Coverage.AREAS,
    "Brf": Coverage.BRIEF,
    "Inter": Coverage.INTERMITTENT,
    "Pds": Coverage.PERIODS,
    "Ocnl": Coverage.OCCASIONAL,
    "Frq": Coverage.FREQUENT,
    "Iso": Coverage.ISOLATED,
    "SChc": Coverage.SLIGHT_CHANCE,
    "Sct": Coverage.SCATTERED,
    "Chc": Coverage.CHANCE,
    "Num": Coverage.NUMEROUS,
    "Lkly": Coverage.LIKELY,
    "Wide": Coverage.WIDESPREAD,
    "Def": Coverage.DEFINITE,
}

COVERAGE_ENGLISH: Dict[Coverage, str] = {
    Coverage.NONE: "none",
    Coverage.PATCHY: "patchy",
    Coverage.AREAS: "areas",
    Coverage.BRIEF: "brief",
    Coverage.INTERMITTENT: "intermittent",
    Coverage.PERIODS: "periods of",
    Coverage.OCCASIONAL: "occasional",
    Coverage.FREQUENT: "frequent",
    Coverage.ISOLATED: "isolated",
    Coverage.SLIGHT_CHANCE: "slight chance",
    Coverage.SCATTERED: "scattered",
    Coverage.CHANCE: "chance",
    Coverage.NUMEROUS: "numerous",
    Coverage.LIKELY: "likely",
    Coverage.WIDESPREAD: "widespread",
    Coverage.DEFINITE: "definitely",
}

INTENSITY_CODES: Dict[str, Intensity] = {
    "none": Intensity.NONE,
    "--": Intensity.VERY_LIGHT,
    "-": Intensity.LIGHT,
    "m": Intensity.MODERATE,
    "+": Intensity.HEAVY,
}

INTENSITY_ENGLISH: Dict[Intensity, str] = {
    Intensity.NONE: "none",
    Intensity.VERY_LIGHT: "very light",
    Intensity.LIGHT: "light",
    Intensity.MODERATE: "moderate",
    Intensity.HEAVY: "heavy",
}

TYPE_CODES: Dict[str, WxType] = {
    "none": WxType.NONE,
    "F": WxType.FOG,
    "BS": WxType.BLOWING_SNOW,
    "BD": WxType.BLOWING_DUST,
    "BN": WxType.BLOWING_SAND,
    "H": WxType.HAZE,
    "K": WxType.SMOKE,
    "FR": WxType.FROST,
    "VA": WxType.VOLCANIC_ASH,
    "L": WxType.DRIZZLE,
    "RW": WxType.RAIN_SHOWERS,
    "R": WxType.RAIN,
    "IC": WxType.ICE_CRYSTALS,
    "IF": WxType.ICE_FOG,
    "SW": WxType.SNOW_SHOWERS,
    "S": WxType.SNOW,
    "IP": WxType.ICE_PELLETS,
    "ZF": WxType.FREEZING_FOG,
    "ZY": WxType.FREEZING_SPRAY,
    "ZL": WxType.FREEZING_DRIZZLE,
    "ZR": WxType.FREEZING_RAIN,
    "T": WxType.THUNDERSTORMS,
    "WP": WxType.WATER_SPOUTS,
}

TYPE_ENGLISH: Dict[WxType, str] = {
    WxType.NONE: "none",
    WxType.FOG: "fog",
    WxType.BLOWING_SNOW: "blowing snow",
    WxType.BLOWING_DUST: "blowing dust",
    WxType.BLOWING_SAND: "blowing sand",
    WxType.HAZE: "haze",
    WxType.SMOKE: "smoke",
    WxType.FROST: "frost",
    WxType.VOLCANIC_ASH: "volcanic ash",
    WxType.DRIZZLE: "drizzle",
    WxType.RAIN_SHOWERS: "rain showers",
    WxType.RAIN: "rain",
    WxType.ICE_CRYSTALS: "ice crystals",
    WxType.ICE_FOG: "ice fog",
    WxType.SNOW_SHOWERS: "snow showers",
    WxType.SNOW: "snow",
    WxType.ICE_PELLETS: "ice pellets",
    WxType.FREEZING_FOG: "freezing fog",
    WxType.FREEZING_SPRAY: "freezing spray",
    WxType.FREEZING_DRIZZLE: "freezing drizzle",
    WxType.FREEZING_RAIN: "freezing rain",
    WxType.THUNDERSTORMS: "thunderstorms",
    WxType.WATER_SPOUTS: "water spouts",
}

# Visibility codes map to the statute-mile figure written in DWML.
VISIBILITY_CODES: Dict[str, str] = {
    "0SM": "0",
    "1/4SM": "1/4",
    "1/2SM": "1/2",
    "3/4SM": "3/4",
    "1SM": "1",
    "11/2SM": "1 1/2",
    "2SM": "2",
    "21/2SM": "2 1/2",
    "3SM": "3",
    "4SM": "4",
    "5SM": "5",
    "6SM": "6",
    "P6SM": "6+",
}

QUALIFIER_ENGLISH: Dict[str, str] = {
    "FL": "frequent lightning",
    "GW": "gusty winds",
    "HvyRn": "heavy rain",
    "DmgW": "damaging winds",
    "SmA": "small hail",
    "LgA": "large hail",
    "OLA": "outlying areas",
    "OBO": "on bridges and overpasses",
    "OGA": "on grassy areas",
    "Dry": "dry",
    "Primary": "highest ranking",
    "Mention": "include unconditionally",
    "TOR": "tornadoes",
    "MX": "mixture",
    "OR": "or",
    "none": "none",
}

ADDITIVE_OR = "OR"


def is_sentinel(token: Optional[str]) -> bool:
    """True for empty fields, 'none', and the <NoCov>-style placeholders."""
    if token is None:
        return True
    text = token.strip()
    return not text or text.lower() == "none" or (text.startswith("<") and text.endswith(">"))


def coverage_from_code(code: Optional[str]) -> Coverage:
    if is_sentinel(code):
        return Coverage.NONE
    return COVERAGE_CODES.get(code.strip(), Coverage.NONE)


def intensity_from_code(code: Optional[str]) -> Intensity:
    if is_sentinel(code):
        return Intensity.NONE
    return INTENSITY_CODES.get(code.strip(), Intensity.NONE)


def type_from_code(code: Optional[str]) -> WxType:
    if is_sentinel(code):
        return WxType.NONE
    return TYPE_CODES.get(code.strip(), WxType.NONE)


def visibility_from_code(code: Optional[str]) -> Optional[str]:
    if is_sentinel(code):
        return None
    return VISIBILITY_CODES.get(code.strip())


def translate_qualifier(code: str) -> str:
    return QUALIFIER_ENGLISH.get(code, code)
