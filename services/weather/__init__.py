"""
SKYQUEUE Weather Service

Stochastic weekly and hourly forecasts and the smoothed instantaneous
weather that observations are scored against.
"""

from .engine import (
    SkyCondition,
    WeatherState,
    ForecastBlock,
    DailyForecast,
    WeatherEngine,
    classify_clouds,
)

__all__ = [
    "SkyCondition",
    "WeatherState",
    "ForecastBlock",
    "DailyForecast",
    "WeatherEngine",
    "classify_clouds",
]
