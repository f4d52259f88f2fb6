"""
SKYQUEUE Weather Engine Tests

Tests for weekly and hourly forecast generation and weather smoothing.
"""

import random

import pytest

from services.weather import (
    DailyForecast,
    ForecastBlock,
    SkyCondition,
    WeatherEngine,
    WeatherState,
    classify_clouds,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def engine():
    return WeatherEngine(rng=random.Random(42))


@pytest.fixture
def daily():
    return DailyForecast(
        day=0,
        day_name="Sunday",
        condition=SkyCondition.PARTLY_CLOUDY,
        avg_clouds=40.0,
        avg_seeing=0.8,
        avg_humidity=50.0,
    )


def _block(hour, clouds=30.0, seeing=1.0, humidity=60.0):
    return ForecastBlock(
        hour=hour,
        condition=classify_clouds(clouds),
        clouds=clouds,
        seeing=seeing,
        humidity=humidity,
    )


# =============================================================================
# Weekly Forecast Tests
# =============================================================================


class TestWeeklyForecast:
    """Tests for generate_weekly_forecast."""

    def test_seven_named_nights(self, engine):
        week = engine.generate_weekly_forecast()

        assert len(week) == 7
        assert [d.day for d in week] == list(range(7))
        assert week[0].day_name == "Sunday"
        assert week[6].day_name == "Saturday"

    def test_seeded_is_reproducible(self):
        a = WeatherEngine(rng=random.Random(7)).generate_weekly_forecast()
        b = WeatherEngine(rng=random.Random(7)).generate_weekly_forecast()
        assert a == b

    def test_values_within_condition_ranges(self):
        engine = WeatherEngine(rng=random.Random(1))
        for daily in engine.generate_weekly_forecast(nights=200):
            if daily.condition is SkyCondition.CLEAR:
                assert 10 <= daily.avg_clouds <= 30
                assert 0.3 <= daily.avg_seeing <= 0.7
            elif daily.condition is SkyCondition.CLOUDY:
                assert 65 <= daily.avg_clouds <= 95
            assert daily.avg_clouds <= 95
            assert daily.avg_humidity <= 90

    def test_tendency_thresholds(self):
        """Draws below 0.4 are clear, below 0.7 partly cloudy, else cloudy."""
        engine = WeatherEngine(rng=random.Random())
        expected = {
            0.1: SkyCondition.CLEAR,
            0.5: SkyCondition.PARTLY_CLOUDY,
            0.9: SkyCondition.CLOUDY,
        }
        for draw, condition in expected.items():
            engine.rng.random = lambda draw=draw: draw
            assert engine.generate_weekly_forecast(nights=1)[0].condition is condition


# =============================================================================
# Night Forecast Tests
# =============================================================================


class TestNightForecast:
    """Tests for generate_night_forecast."""

    def test_eleven_hourly_blocks(self, engine, daily):
        blocks = engine.generate_night_forecast(daily)

        assert len(blocks) == 11
        assert [b.hour for b in blocks] == [19, 20, 21, 22, 23, 24, 1, 2, 3, 4, 5]

    def test_noise_is_bounded(self, engine, daily):
        for _ in range(50):
            for block in engine.generate_night_forecast(daily):
                assert abs(block.clouds - daily.avg_clouds) <= 10
                assert abs(block.seeing - daily.avg_seeing) <= 0.15
                assert abs(block.humidity - daily.avg_humidity) <= 7.5

    def test_clamped(self, engine):
        extreme = DailyForecast(
            day=0, day_name="Sunday", condition=SkyCondition.CLEAR,
            avg_clouds=0.0, avg_seeing=0.2, avg_humidity=5.0,
        )
        for block in engine.generate_night_forecast(extreme):
            assert 0 <= block.clouds <= 100
            assert block.seeing >= 0.2
            assert 10 <= block.humidity <= 95

    def test_condition_follows_clouds(self, engine, daily):
        for block in engine.generate_night_forecast(daily):
            assert block.condition is classify_clouds(block.clouds)

    def test_classify_clouds(self):
        assert classify_clouds(24.9) is SkyCondition.CLEAR
        assert classify_clouds(25) is SkyCondition.PARTLY_CLOUDY
        assert classify_clouds(54.9) is SkyCondition.PARTLY_CLOUDY
        assert classify_clouds(55) is SkyCondition.CLOUDY


# =============================================================================
# Instantaneous Weather Tests
# =============================================================================


class TestWeatherStepping:
    """Tests for initial weather, block lookup and smoothing."""

    def test_initial_weather_is_first_block(self):
        blocks = [_block(19, clouds=12, seeing=0.5, humidity=33), _block(20)]

        weather = WeatherEngine.initial_weather(blocks)

        assert (weather.clouds, weather.seeing, weather.humidity) == (12, 0.5, 33)

    def test_block_for_hour(self):
        blocks = [_block(h) for h in (19, 20, 21, 22, 23, 24, 1, 2, 3, 4, 5)]

        assert WeatherEngine.block_for_hour(blocks, 21).hour == 21
        assert WeatherEngine.block_for_hour(blocks, 0).hour == 24
        assert WeatherEngine.block_for_hour(blocks, 3).hour == 3

    def test_block_for_hour_outside_night(self):
        blocks = [_block(19), _block(20)]
        assert WeatherEngine.block_for_hour(blocks, 12) is blocks[0]
        assert WeatherEngine.block_for_hour([], 12) is None

    def test_step_moves_fraction_of_gap(self, engine):
        weather = WeatherState(clouds=20, seeing=0.8, humidity=45)
        target = _block(19, clouds=70, seeing=1.8, humidity=65)

        engine.step_weather(weather, target)

        assert weather.clouds == pytest.approx(25)
        assert weather.seeing == pytest.approx(0.9)
        assert weather.humidity == pytest.approx(47)

    def test_step_converges_without_overshoot(self, engine):
        weather = WeatherState(clouds=0, seeing=0.3, humidity=20)
        target = _block(19, clouds=80, seeing=1.5, humidity=70)

        for _ in range(200):
            engine.step_weather(weather, target)
            assert weather.clouds <= 80

        assert weather.clouds == pytest.approx(80, abs=1e-3)
        assert weather.seeing == pytest.approx(1.5, abs=1e-3)

    def test_step_without_block_is_noop(self, engine):
        weather = WeatherState()
        engine.step_weather(weather, None)
        assert weather == WeatherState()

    def test_step_custom_smoothing(self, engine):
        weather = WeatherState(clouds=0, seeing=1.0, humidity=50)
        engine.step_weather(weather, _block(19, clouds=100), smoothing=1.0)
        assert weather.clouds == 100
