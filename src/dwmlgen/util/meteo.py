"""
Numeric helpers for forecast values (rounding, unit conversion, wind quadrants).
"""

from __future__ import annotations

import logging
import math

logger = logging.getLogger(__name__)

KNOTS_TO_MPS = 0.514444
INCH_TO_CM = 2.54
FEET_TO_M = 0.3048


def round_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def round_pop(value: float | int | None) -> int | None:
    """Round a probability of precipitation to the nearest ten."""
    if value is None or value < 0:
        return None
    return int(math.floor(value / 10.0 + 0.5)) * 10


def fahrenheit_to_celsius(value: float) -> float:
    return (value - 32.0) * 5.0 / 9.0


def knots_to_mps(value: float) -> float:
    return value * KNOTS_TO_MPS


def inches_to_cm(value: float) -> float:
    return value * INCH_TO_CM


def feet_to_meters(value: float) -> float:
    return value * FEET_TO_M


def is_north_wind(direction: float | int | None) -> bool:
    """True when a wind direction (degrees true) lies in the north quadrant."""
    try:
        degrees = float(direction) % 360.0
    except (TypeError, ValueError):
        logger.debug("Invalid wind direction %s; not treated as northerly", direction)
        return False
    return degrees >= 315.0 or degrees <= 45.0
