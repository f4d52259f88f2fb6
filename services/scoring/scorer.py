"""
SKYQUEUE Observation Scorer

Scores a completed observation against the weather at the instant it
finished.

Base points are the sum of the target's IQ, CC and WV tier weights. Each
requirement then contributes an independent multiplier:
- conditions at or better than required earn a proportional bonus
- worse conditions cost a proportional penalty, down to a floor

    factor_IQ = 1 + 0.3 * (req - seeing) / req             if seeing <= req
              = max(0.3, 1 - 0.6 * (seeing - req) / req)   otherwise
    factor_CC = 1 + 0.2 * (req - clouds) / req             if clouds <= req
              = max(0.3, 1 - 0.7 * (clouds - req) / (100 - req + 1))
    factor_WV = 1 + 0.15 * (req - humidity) / req          if humidity <= req
              = max(0.5, 1 - 0.5 * (humidity - req) / (100 - req + 1))

    points = round(base * IQ * CC * WV), efficiency = round(IQ * CC * WV * 100)

Scoring is a pure function of its inputs.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict

from skyqueue.constants import (
    CC_BONUS_WEIGHT,
    CC_FACTOR_FLOOR,
    CC_PENALTY_WEIGHT,
    IQ_BONUS_WEIGHT,
    IQ_FACTOR_FLOOR,
    IQ_PENALTY_WEIGHT,
    WV_BONUS_WEIGHT,
    WV_FACTOR_FLOOR,
    WV_PENALTY_WEIGHT,
)
from services.catalog.catalog import Observation
from services.weather.engine import WeatherState

__all__ = [
    "ScoreResult",
    "score_observation",
    "iq_factor",
    "cc_factor",
    "wv_factor",
    "round_half_up",
    "efficiency_percent",
]


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of scoring one observation."""
    points: int
    efficiency: int           # Percent of base points, may exceed 100
    base_points: int
    iq_factor: float
    cc_factor: float
    wv_factor: float

    @property
    def multiplier(self) -> float:
        return self.iq_factor * self.cc_factor * self.wv_factor

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "points": self.points,
            "efficiency": self.efficiency,
            "base_points": self.base_points,
            "factors": {
                "iq": self.iq_factor,
                "cc": self.cc_factor,
                "wv": self.wv_factor,
            },
            "multiplier": self.multiplier,
        }


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (2.5 -> 3), unlike round()."""
    return int(math.floor(value + 0.5))


def efficiency_percent(score: int, possible: int) -> int:
    """round(100 * score / possible), 0 when nothing was possible."""
    if possible <= 0:
        return 0
    return round_half_up(score / possible * 100)


def iq_factor(required_seeing: float, actual_seeing: float) -> float:
    """Seeing multiplier. The bonus branch has no cap."""
    if actual_seeing <= required_seeing:
        bonus = (required_seeing - actual_seeing) / required_seeing
        return 1.0 + bonus * IQ_BONUS_WEIGHT
    penalty = (actual_seeing - required_seeing) / required_seeing
    return max(IQ_FACTOR_FLOOR, 1.0 - penalty * IQ_PENALTY_WEIGHT)


def cc_factor(required_clouds: float, actual_clouds: float) -> float:
    """Cloud cover multiplier."""
    if actual_clouds <= required_clouds:
        bonus = (required_clouds - actual_clouds) / required_clouds
        return 1.0 + bonus * CC_BONUS_WEIGHT
    penalty = (actual_clouds - required_clouds) / (100 - required_clouds + 1)
    return max(CC_FACTOR_FLOOR, 1.0 - penalty * CC_PENALTY_WEIGHT)


def wv_factor(required_humidity: float, actual_humidity: float) -> float:
    """Water vapor (humidity) multiplier."""
    if actual_humidity <= required_humidity:
        bonus = (required_humidity - actual_humidity) / required_humidity
        return 1.0 + bonus * WV_BONUS_WEIGHT
    penalty = (actual_humidity - required_humidity) / (100 - required_humidity + 1)
    return max(WV_FACTOR_FLOOR, 1.0 - penalty * WV_PENALTY_WEIGHT)


def score_observation(observation: Observation, weather: WeatherState) -> ScoreResult:
    """
    Score an observation under the given weather.

    Args:
        observation: Target with IQ/CC/WV requirements
        weather: Conditions at the moment the exposure finished

    Returns:
        ScoreResult with awarded points, efficiency and the three factors
    """
    iq = iq_factor(observation.iq.max_seeing, weather.seeing)
    cc = cc_factor(observation.cc.max_clouds, weather.clouds)
    wv = wv_factor(observation.wv.max_humidity, weather.humidity)
    multiplier = iq * cc * wv

    base = observation.base_points
    return ScoreResult(
        points=round_half_up(base * multiplier),
        efficiency=round_half_up(multiplier * 100),
        base_points=base,
        iq_factor=iq,
        cc_factor=cc,
        wv_factor=wv,
    )
