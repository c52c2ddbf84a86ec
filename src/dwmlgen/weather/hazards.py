"""
Hazard phenomenon and significance translations, with marine hazard icons.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

HAZARD_PHENOMENA: Dict[str, str] = {
    "AF": "Ashfall",
    "AS": "Air Stagnation",
    "BS": "Blowing Snow",
    "BW": "Brisk Wind",
    "BZ": "Blizzard",
    "CF": "Coastal Flood",
    "DS": "Dust Storm",
    "DU": "Blowing Dust",
    "EC": "Extreme Cold",
    "EH": "Excessive Heat",
    "FA": "Areal Flood",
    "FF": "Flash Flood",
    "FG": "Dense Fog",
    "FR": "Frost",
    "FW": "Fire Weather",
    "FZ": "Freeze",
    "GL": "Gale",
    "HF": "Hurricane Force Wind",
    "HI": "Hurricane Wind",
    "HS": "Heavy Snow",
    "HT": "Heat",
    "HU": "Hurricane",
    "HW": "High Wind",
    "HZ": "Hard Freeze",
    "IP": "Sleet",
    "IS": "Ice Storm",
    "LB": "Lake Effect Snow and Blowing Snow",
    "LE": "Lake Effect",
    "LO": "Low Water",
    "LS": "Lakeshore Flood",
    "LW": "Lake Wind",
    "MA": "Marine",
    "RB": "Small Craft, for Rough Bar",
    "SB": "Snow and Blowing Snow",
    "SC": "Small Craft",
    "SE": "Hazardous Seas",
    "SI": "Small Craft, for Winds",
    "SM": "Dense Smoke",
    "SN": "Snow",
    "SR": "Storm",
    "SU": "High Surf",
    "SV": "Severe Thunderstorm",
    "SW": "Small Craft, for Hazardous Seas",
    "TI": "Tropical Storm Wind",
    "TO": "Tornado",
    "TR": "Tropical Storm",
    "TS": "Tsunami",
    "TY": "Typhoon",
    "UP": "Freezing Spray",
    "WC": "Wind Chill",
    "WI": "Wind",
    "WS": "Winter Storm",
    "WW": "Winter Weather",
    "ZF": "Freezing Fog",
    "ZR": "Freezing Rain",
    "none": "none",
}

HAZARD_ICONS: Dict[str, str] = {
    "GL": "mf_gale.gif",
    "HF": "mf_hurr.gif",
    "HI": "mf_hurr.gif",
    "RB": "mf_smcraft.gif",
    "SC": "mf_smcraft.gif",
    "SI": "mf_smcraft.gif",
    "SW": "mf_smcraft.gif",
    "TI": "mf_storm.gif",
    "TR": "mf_storm.gif",
    "TS": "m_wave.gif",
}

HAZARD_SIGNIFICANCE: Dict[str, str] = {
    "W": "Warning",
    "A": "Watch",
    "Y": "Advisory",
    "S": "Statement",
}


@dataclass(frozen=True)
class HazardTranslation:
    phenomenon: str
    significance: Optional[str] = None
    icon: Optional[str] = None

    @property
    def headline(self) -> str:
        if self.significance:
            return f"{self.phenomenon} {self.significance}"
        return self.phenomenon


def translate_hazard(code: str) -> Optional[HazardTranslation]:
    """
    Translate a hazard code such as "WS.A" (phenomenon.significance) or "GL".

    Returns None when the phenomenon is not in the table.
    """
    phen, _, sig = (code or "").strip().partition(".")
    phenomenon = HAZARD_PHENOMENA.get(phen)
    if phenomenon is None:
        return None
    return HazardTranslation(
        phenomenon=phenomenon,
        significance=HAZARD_SIGNIFICANCE.get(sig) if sig else None,
        icon=HAZARD_ICONS.get(phen),
    )
