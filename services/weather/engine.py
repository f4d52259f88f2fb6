"""
SKYQUEUE Weather Engine

Stochastic weather for a simulated observing week.

The engine works at three levels:
- Weekly forecast: one DailyForecast per night, drawn from a condition
  tendency (clear / partly-cloudy / cloudy) and its value ranges
- Nightly forecast: eleven hourly ForecastBlocks (19h through 05h) that
  perturb the night's averages with bounded uniform noise
- Instantaneous weather: a WeatherState that eases toward the block of the
  current simulated hour by exponential smoothing, once per tick

All randomness comes from an injected random.Random, so a seeded engine
reproduces the same week.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from skyqueue.constants import (
    CLOUDS_MAX,
    CLOUDS_MIN,
    CONDITION_RANGES,
    DAILY_MAX_CLOUDS,
    DAILY_MAX_HUMIDITY,
    DAY_NAMES,
    HOURLY_CLEAR_BELOW,
    HOURLY_CLOUD_NOISE,
    HOURLY_HUMIDITY_NOISE,
    HOURLY_PARTLY_CLOUDY_BELOW,
    HOURLY_SEEING_NOISE,
    HUMIDITY_MAX,
    HUMIDITY_MIN,
    INITIAL_CLOUDS,
    INITIAL_HUMIDITY,
    INITIAL_SEEING_ARCSEC,
    NIGHT_END_HOUR,
    NIGHT_START_HOUR,
    NIGHTS_PER_WEEK,
    SEEING_MIN_ARCSEC,
    TENDENCY_CLEAR_THRESHOLD,
    TENDENCY_PARTLY_CLOUDY_THRESHOLD,
    WEATHER_SMOOTHING,
)
from skyqueue.logging_config import get_logger

logger = get_logger(__name__)

__all__ = [
    "SkyCondition",
    "WeatherState",
    "ForecastBlock",
    "DailyForecast",
    "WeatherEngine",
    "classify_clouds",
]


class SkyCondition(Enum):
    """Qualitative sky condition."""
    CLEAR = "clear"
    PARTLY_CLOUDY = "partly-cloudy"
    CLOUDY = "cloudy"


@dataclass
class WeatherState:
    """Instantaneous weather seen by the telescope.

    Written only by WeatherEngine; scoring and renderers read it.
    """
    clouds: float = INITIAL_CLOUDS            # Percent, 0-100
    seeing: float = INITIAL_SEEING_ARCSEC     # Arcseconds, >= 0.2
    humidity: float = INITIAL_HUMIDITY        # Percent, 0-100

    def copy(self) -> "WeatherState":
        return WeatherState(self.clouds, self.seeing, self.humidity)

    def to_dict(self) -> Dict[str, float]:
        return {
            "clouds": round(self.clouds, 1),
            "seeing": round(self.seeing, 2),
            "humidity": round(self.humidity, 1),
        }


@dataclass(frozen=True)
class ForecastBlock:
    """Target weather for one simulated hour of a night."""
    hour: int                 # 19..24 then 1..5
    condition: SkyCondition
    clouds: float
    seeing: float
    humidity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hour": self.hour,
            "condition": self.condition.value,
            "clouds": round(self.clouds, 1),
            "seeing": round(self.seeing, 2),
            "humidity": round(self.humidity, 1),
        }


@dataclass(frozen=True)
class DailyForecast:
    """Tendency and averages for one night of the week."""
    day: int
    day_name: str
    condition: SkyCondition
    avg_clouds: float
    avg_seeing: float
    avg_humidity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": self.day,
            "day_name": self.day_name,
            "condition": self.condition.value,
            "avg_clouds": round(self.avg_clouds, 1),
            "avg_seeing": round(self.avg_seeing, 2),
            "avg_humidity": round(self.avg_humidity, 1),
        }


def classify_clouds(clouds: float) -> SkyCondition:
    """Hourly condition from cloud cover."""
    if clouds < HOURLY_CLEAR_BELOW:
        return SkyCondition.CLEAR
    if clouds < HOURLY_PARTLY_CLOUDY_BELOW:
        return SkyCondition.PARTLY_CLOUDY
    return SkyCondition.CLOUDY


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class WeatherEngine:
    """
    Generates forecasts and advances instantaneous weather.

    Usage:
        engine = WeatherEngine(rng=random.Random(42))
        week = engine.generate_weekly_forecast()
        blocks = engine.generate_night_forecast(week[0])
        weather = engine.initial_weather(blocks)
        engine.step_weather(weather, engine.block_for_hour(blocks, 21))
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        smoothing: float = WEATHER_SMOOTHING,
    ):
        """
        Args:
            rng: Random source; pass a seeded random.Random for reproducible runs
            smoothing: Fraction of the gap to the forecast closed per tick
        """
        self.rng = rng or random.Random()
        self.smoothing = smoothing

    # =========================================================================
    # Forecast generation
    # =========================================================================

    def generate_weekly_forecast(self, nights: int = NIGHTS_PER_WEEK) -> List[DailyForecast]:
        """Draw a tendency and averages for each night of the week."""
        forecast = []
        for day in range(nights):
            condition = self._draw_tendency()
            ranges = CONDITION_RANGES[condition.value]

            avg_clouds = self._draw(ranges["clouds"])
            avg_seeing = self._draw(ranges["seeing"])
            avg_humidity = self._draw(ranges["humidity"])

            forecast.append(DailyForecast(
                day=day,
                day_name=DAY_NAMES[day % len(DAY_NAMES)],
                condition=condition,
                avg_clouds=min(DAILY_MAX_CLOUDS, avg_clouds),
                avg_seeing=avg_seeing,
                avg_humidity=min(DAILY_MAX_HUMIDITY, avg_humidity),
            ))

        logger.info(
            "Weekly forecast: "
            + ", ".join(f"{d.day_name[:3]}={d.condition.value}" for d in forecast)
        )
        return forecast

    def generate_night_forecast(self, daily: DailyForecast) -> List[ForecastBlock]:
        """Eleven hourly blocks around the night's averages."""
        blocks = []
        for hour in range(NIGHT_START_HOUR, NIGHT_END_HOUR + 1):
            display_hour = hour - 24 if hour > 24 else hour

            clouds = _clamp(
                daily.avg_clouds + self._noise(HOURLY_CLOUD_NOISE), CLOUDS_MIN, CLOUDS_MAX
            )
            seeing = max(SEEING_MIN_ARCSEC, daily.avg_seeing + self._noise(HOURLY_SEEING_NOISE))
            humidity = _clamp(
                daily.avg_humidity + self._noise(HOURLY_HUMIDITY_NOISE), HUMIDITY_MIN, HUMIDITY_MAX
            )

            blocks.append(ForecastBlock(
                hour=display_hour,
                condition=classify_clouds(clouds),
                clouds=clouds,
                seeing=seeing,
                humidity=humidity,
            ))

        logger.debug(f"Night {daily.day} forecast: {len(blocks)} hourly blocks")
        return blocks

    # =========================================================================
    # Instantaneous weather
    # =========================================================================

    @staticmethod
    def initial_weather(blocks: List[ForecastBlock]) -> WeatherState:
        """Weather at the start of a night: the first block, exactly."""
        if not blocks:
            return WeatherState()
        first = blocks[0]
        return WeatherState(clouds=first.clouds, seeing=first.seeing, humidity=first.humidity)

    @staticmethod
    def block_for_hour(blocks: List[ForecastBlock], hour: int) -> Optional[ForecastBlock]:
        """Block covering a clock hour (0-23), or the first block outside the night."""
        for block in blocks:
            if block.hour % 24 == hour % 24:
                return block
        return blocks[0] if blocks else None

    def step_weather(
        self,
        current: WeatherState,
        block: Optional[ForecastBlock],
        smoothing: Optional[float] = None,
    ) -> WeatherState:
        """Ease current weather toward a forecast block, in place.

        value += (target - value) * smoothing
        """
        if block is None:
            return current
        k = self.smoothing if smoothing is None else smoothing
        current.clouds += (block.clouds - current.clouds) * k
        current.seeing += (block.seeing - current.seeing) * k
        current.humidity += (block.humidity - current.humidity) * k
        return current

    # =========================================================================
    # Random draws
    # =========================================================================

    def _draw_tendency(self) -> SkyCondition:
        u = self.rng.random()
        if u < TENDENCY_CLEAR_THRESHOLD:
            return SkyCondition.CLEAR
        if u < TENDENCY_PARTLY_CLOUDY_THRESHOLD:
            return SkyCondition.PARTLY_CLOUDY
        return SkyCondition.CLOUDY

    def _draw(self, base_span: tuple) -> float:
        base, span = base_span
        return base + self.rng.random() * span

    def _noise(self, width: float) -> float:
        return (self.rng.random() - 0.5) * width
