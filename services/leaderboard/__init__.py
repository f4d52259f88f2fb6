"""
SKYQUEUE Leaderboard Service

Client for the remote ranked store of week-end scores.
"""

from .client import (
    ScoreSubmission,
    LeaderboardEntry,
    SubmissionResult,
    LeaderboardClient,
)

__all__ = [
    "ScoreSubmission",
    "LeaderboardEntry",
    "SubmissionResult",
    "LeaderboardClient",
]
