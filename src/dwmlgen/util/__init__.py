"""
Shared utility helpers for time, solar position, numbers and files.
"""

from .filesystem import write_text_file
from .meteo import round_away, round_pop, is_north_wind
from .solar import daytime_flags, is_daytime, solar_elevation
from .time import DAY, HOUR, LocalClock, format_utc, parse_timestamp

__all__ = [
    "write_text_file",
    "round_away",
    "round_pop",
    "is_north_wind",
    "daytime_flags",
    "is_daytime",
    "solar_elevation",
    "DAY",
    "HOUR",
    "LocalClock",
    "format_utc",
    "parse_timestamp",
]
