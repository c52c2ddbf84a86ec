"""
Coded weather parsing, translation tables and dominant-weather selection.
"""

from .dominant import PeriodWeather, dominant_group, outranks, select_period_weather
from .hazards import HazardTranslation, translate_hazard
from .tokens import Coverage, Intensity, WxType
from .ugly import WeatherExpression, WeatherGroup, parse_group, parse_weather

__all__ = [
    "PeriodWeather",
    "dominant_group",
    "outranks",
    "select_period_weather",
    "HazardTranslation",
    "translate_hazard",
    "Coverage",
    "Intensity",
    "WxType",
    "WeatherExpression",
    "WeatherGroup",
    "parse_group",
    "parse_weather",
]
