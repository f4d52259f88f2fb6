"""
SKYQUEUE Shared Constants

Centralizes the fixed numbers of the queue-observing simulation: queue
capacity, timing, weather generation ranges, scoring weights and rating
bands. Runtime-tunable values (timing, smoothing, seed) are also exposed
through skyqueue.config; the values here are the defaults.

Constants are organized by category:
    - Version and identity
    - Queue and timing
    - Weather generation (weekly tendency, nightly blocks)
    - Requirement tiers (IQ / CC / WV)
    - Scoring multipliers
    - Weekly rating bands
"""

from typing import Final

# =============================================================================
# Version and Identity
# =============================================================================

SKYQUEUE_VERSION: Final[str] = "0.1.0"
SKYQUEUE_NAME: Final[str] = "SKYQUEUE"

# =============================================================================
# Queue and Timing
# =============================================================================

MAX_QUEUE_SIZE: Final[int] = 6
NIGHTS_PER_WEEK: Final[int] = 7

# Real seconds
SLEW_DURATION_SEC: Final[float] = 1.0
INTER_TARGET_PAUSE_SEC: Final[float] = 1.0
DEFAULT_TICK_INTERVAL_SEC: Final[float] = 1.0 / 60.0

# Real seconds per simulated second of observation
OBSERVATION_DURATION_SCALE: Final[float] = 0.0037

DAY_NAMES: Final[tuple[str, ...]] = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)

# =============================================================================
# Weather Generation
# =============================================================================

WEATHER_SMOOTHING: Final[float] = 0.1

# Night window: hourly blocks 19..29, displayed as 19..24, 1..5
NIGHT_START_HOUR: Final[int] = 19
NIGHT_END_HOUR: Final[int] = 24 + 5

# Cumulative tendency thresholds (clear / partly-cloudy / cloudy)
TENDENCY_CLEAR_THRESHOLD: Final[float] = 0.4
TENDENCY_PARTLY_CLOUDY_THRESHOLD: Final[float] = 0.7

# Per-tendency (base, span) ranges for daily averages
CONDITION_RANGES: Final[dict[str, dict[str, tuple[float, float]]]] = {
    "clear": {"clouds": (10.0, 20.0), "seeing": (0.3, 0.4), "humidity": (25.0, 20.0)},
    "partly-cloudy": {"clouds": (35.0, 25.0), "seeing": (0.6, 0.5), "humidity": (40.0, 25.0)},
    "cloudy": {"clouds": (65.0, 30.0), "seeing": (1.0, 0.8), "humidity": (60.0, 30.0)},
}

DAILY_MAX_CLOUDS: Final[float] = 95.0
DAILY_MAX_HUMIDITY: Final[float] = 90.0

# Full widths of the uniform hourly noise (applied as (u - 0.5) * width)
HOURLY_CLOUD_NOISE: Final[float] = 20.0
HOURLY_SEEING_NOISE: Final[float] = 0.3
HOURLY_HUMIDITY_NOISE: Final[float] = 15.0

CLOUDS_MIN: Final[float] = 0.0
CLOUDS_MAX: Final[float] = 100.0
SEEING_MIN_ARCSEC: Final[float] = 0.2
HUMIDITY_MIN: Final[float] = 10.0
HUMIDITY_MAX: Final[float] = 95.0

# Hourly classification by cloud cover (percent)
HOURLY_CLEAR_BELOW: Final[float] = 25.0
HOURLY_PARTLY_CLOUDY_BELOW: Final[float] = 55.0

# Weather at simulator start, before any forecast exists
INITIAL_CLOUDS: Final[float] = 20.0
INITIAL_SEEING_ARCSEC: Final[float] = 0.8
INITIAL_HUMIDITY: Final[float] = 45.0

# =============================================================================
# Requirement Tiers
# =============================================================================

# Maximum acceptable seeing (arcsec) per Image Quality tier
IQ_REQUIREMENTS: Final[dict[str, float]] = {
    "IQ20": 0.4,
    "IQ70": 0.7,
    "IQ85": 1.0,
    "IQAny": 2.0,
}

# Maximum acceptable cloud cover (percent) per Cloud Cover tier
CC_REQUIREMENTS: Final[dict[str, float]] = {
    "CC50": 50.0,
    "CC70": 70.0,
    "CC80": 80.0,
    "CCAny": 100.0,
}

# Maximum acceptable humidity (percent) per Water Vapor tier
WV_REQUIREMENTS: Final[dict[str, float]] = {
    "WV20": 30.0,
    "WV50": 50.0,
    "WV80": 70.0,
    "WVAny": 100.0,
}

# Stricter tier = more points
IQ_POINTS: Final[dict[str, int]] = {"IQ20": 50, "IQ70": 35, "IQ85": 25, "IQAny": 15}
CC_POINTS: Final[dict[str, int]] = {"CC50": 30, "CC70": 20, "CC80": 10, "CCAny": 5}
WV_POINTS: Final[dict[str, int]] = {"WV20": 20, "WV50": 12, "WV80": 6, "WVAny": 3}

# =============================================================================
# Scoring Multipliers
# =============================================================================

IQ_BONUS_WEIGHT: Final[float] = 0.3
IQ_PENALTY_WEIGHT: Final[float] = 0.6
IQ_FACTOR_FLOOR: Final[float] = 0.3

CC_BONUS_WEIGHT: Final[float] = 0.2
CC_PENALTY_WEIGHT: Final[float] = 0.7
CC_FACTOR_FLOOR: Final[float] = 0.3

WV_BONUS_WEIGHT: Final[float] = 0.15
WV_PENALTY_WEIGHT: Final[float] = 0.5
WV_FACTOR_FLOOR: Final[float] = 0.5

# =============================================================================
# Weekly Rating Bands (efficiency %, completion %)
# =============================================================================

RATING_TOP_BAND: Final[tuple[int, int]] = (90, 80)
RATING_SECOND_BAND: Final[tuple[int, int]] = (75, 60)
RATING_THIRD_BAND: Final[tuple[int, int]] = (60, 40)

# =============================================================================
# Leaderboard
# =============================================================================

LEADERBOARD_DEFAULT_URL: Final[str] = "http://localhost:8080"
LEADERBOARD_MAX_ENTRIES: Final[int] = 20
LEADERBOARD_TIMEOUT_SEC: Final[float] = 10.0
