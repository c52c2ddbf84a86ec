"""
Solar position, used to tell day from night for native-cadence icons.
"""

from __future__ import annotations

from typing import List, Sequence

import pandas as pd
import pvlib

# Upper limb on the horizon with standard refraction.
SUNRISE_ELEVATION = -0.833


def solar_elevations(epochs: Sequence[float], latitude: float, longitude: float) -> List[float]:
    """Geometric sun elevation in degrees at each instant."""
    if not epochs:
        return []
    times = pd.to_datetime([int(epoch) for epoch in epochs], unit="s", utc=True)
    loc = pvlib.location.Location(latitude=latitude, longitude=longitude, tz="UTC")
    solpos = loc.get_solarposition(times)
    return [float(value) for value in solpos["elevation"].to_numpy(dtype=float)]


def solar_elevation(epoch: float, latitude: float, longitude: float) -> float:
    return solar_elevations([epoch], latitude, longitude)[0]


def daytime_flags(epochs: Sequence[float], latitude: float, longitude: float) -> List[bool]:
    return [elevation > SUNRISE_ELEVATION for elevation in solar_elevations(epochs, latitude, longitude)]


def is_daytime(epoch: float, latitude: float, longitude: float) -> bool:
    return daytime_flags([epoch], latitude, longitude)[0]
