"""
SKYQUEUE Scoring Service

Weather-dependent points and efficiency for completed observations.
"""

from .scorer import (
    ScoreResult,
    score_observation,
    iq_factor,
    cc_factor,
    wv_factor,
    round_half_up,
    efficiency_percent,
)

__all__ = [
    "ScoreResult",
    "score_observation",
    "iq_factor",
    "cc_factor",
    "wv_factor",
    "round_half_up",
    "efficiency_percent",
]
