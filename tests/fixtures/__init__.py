"""
SKYQUEUE Test Fixtures Package.

Sample observations and deterministic collaborators for unit tests.

Available fixtures:
- make_observation / make_catalog: Observations with permissive tiers
- FixedWeatherEngine: forecasts that hold one WeatherState all week

Usage:
    from tests.fixtures import FixedWeatherEngine, make_catalog

    def test_week():
        week = WeekOrchestrator(catalog=make_catalog(3), weather_engine=FixedWeatherEngine())
"""

from tests.fixtures.sample_catalog import FixedWeatherEngine, make_catalog, make_observation

__all__ = [
    "FixedWeatherEngine",
    "make_catalog",
    "make_observation",
]
