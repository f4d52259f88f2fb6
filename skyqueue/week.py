"""
SKYQUEUE Week Orchestrator
Seven-night campaign wrapped around the night state machine.

Responsibilities:
- Own the week's state: catalog availability, nightly queue, forecasts,
  weather, per-night results and the running weekly score
- Gate queue edits and night start on the queue rules
- Fold each finished night into the weekly aggregates and prepare the next
- Rate the finished week and build the leaderboard payload
- Notify registered callbacks so a renderer can redraw from snapshot()

Usage:
    week = WeekOrchestrator(config=load_config())
    week.add_to_queue(3)
    week.start_night()
    while week.night.is_running:
        week.tick(1 / 60)          # end_night() runs automatically
    print(week.state.weekly_score)
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from skyqueue.config import SkyQueueConfig
from skyqueue.constants import (
    NIGHTS_PER_WEEK,
    RATING_SECOND_BAND,
    RATING_THIRD_BAND,
    RATING_TOP_BAND,
)
from skyqueue.logging_config import get_logger
from skyqueue.night import CompletedObservation, ExecutionState, NightOrchestrator
from services.catalog import CatalogStore, Observation, QueueManager, load_default_catalog
from services.leaderboard import ScoreSubmission
from services.scoring import efficiency_percent, round_half_up
from services.weather import DailyForecast, ForecastBlock, WeatherEngine, WeatherState

logger = get_logger(__name__)

__all__ = [
    "WeekRating",
    "NightResult",
    "WeekSummary",
    "WeekState",
    "WeekOrchestrator",
]


class WeekRating(Enum):
    """Qualitative band for a finished week."""
    OUTSTANDING = "outstanding"
    EXCELLENT = "excellent"
    GOOD = "good"
    KEEP_PRACTICING = "keep_practicing"

    @property
    def title(self) -> str:
        return _RATING_TITLES[self]

    @classmethod
    def from_rates(cls, efficiency: int, completion_rate: int) -> "WeekRating":
        """Pick the band from weekly efficiency and catalog completion (percent)."""
        bands = (
            (RATING_TOP_BAND, cls.OUTSTANDING),
            (RATING_SECOND_BAND, cls.EXCELLENT),
            (RATING_THIRD_BAND, cls.GOOD),
        )
        for (min_efficiency, min_completion), rating in bands:
            if efficiency >= min_efficiency and completion_rate >= min_completion:
                return rating
        return cls.KEEP_PRACTICING


_RATING_TITLES = {
    WeekRating.OUTSTANDING: "Outstanding Queue Coordinator!",
    WeekRating.EXCELLENT: "Excellent Observer!",
    WeekRating.GOOD: "Good Work!",
    WeekRating.KEEP_PRACTICING: "Keep Practicing!",
}


@dataclass
class NightResult:
    """Outcome of one night of the week."""
    night: int
    day_name: str
    score: int
    observations: List[CompletedObservation]
    efficiency: int

    @property
    def possible_points(self) -> int:
        return sum(c.base_points for c in self.observations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "night": self.night,
            "day_name": self.day_name,
            "score": self.score,
            "efficiency": self.efficiency,
            "observations": [c.to_dict() for c in self.observations],
        }


@dataclass
class WeekSummary:
    """Everything shown on the week-end screen."""
    weekly_score: int
    weekly_efficiency: int
    completion_rate: int
    observations_completed: int
    catalog_size: int
    max_possible_score: int
    rating: WeekRating
    nights: List[NightResult]
    missed: List[Observation]

    @property
    def title(self) -> str:
        return self.rating.title

    def to_submission(self, name: str) -> ScoreSubmission:
        """Leaderboard payload for this week."""
        return ScoreSubmission(
            name=name,
            score=self.weekly_score,
            observations=self.observations_completed,
            efficiency=self.weekly_efficiency,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weekly_score": self.weekly_score,
            "weekly_efficiency": self.weekly_efficiency,
            "completion_rate": self.completion_rate,
            "observations_completed": self.observations_completed,
            "catalog_size": self.catalog_size,
            "max_possible_score": self.max_possible_score,
            "rating": self.rating.value,
            "title": self.title,
            "nights": [n.to_dict() for n in self.nights],
            "missed": [obs.to_dict() for obs in self.missed],
        }


@dataclass
class WeekState:
    """Owned state of the week in progress."""
    catalog: CatalogStore
    queue: QueueManager
    night_index: int = 0
    weekly_score: int = 0
    completed: List[CompletedObservation] = field(default_factory=list)
    results: List[NightResult] = field(default_factory=list)
    weekly_forecast: List[DailyForecast] = field(default_factory=list)
    night_forecast: List[ForecastBlock] = field(default_factory=list)
    weather: WeatherState = field(default_factory=WeatherState)
    start_weather: Optional[WeatherState] = None  # Weather as the running night began
    is_complete: bool = False
    summary: Optional[WeekSummary] = None

    @property
    def day_name(self) -> str:
        if self.night_index < len(self.weekly_forecast):
            return self.weekly_forecast[self.night_index].day_name
        return ""


class WeekOrchestrator:
    """
    Runs a week of nights over a shared catalog.

    Every queue or night operation that breaks a rule is a silent no-op:
    it returns False (or None) and the state is left untouched.
    """

    def __init__(
        self,
        catalog: Union[CatalogStore, Iterable[Observation], None] = None,
        weather_engine: Optional[WeatherEngine] = None,
        config: Optional[SkyQueueConfig] = None,
    ):
        """
        Args:
            catalog: Store or observations to play with (default: training catalog)
            weather_engine: Engine to draw forecasts from; built from config when None
            config: Full configuration (defaults when None)
        """
        self.config = config or SkyQueueConfig()

        if catalog is None:
            catalog = load_default_catalog()
        if not isinstance(catalog, CatalogStore):
            catalog = CatalogStore(catalog)

        self.weather_engine = weather_engine or WeatherEngine(
            rng=random.Random(self.config.weather.seed),
            smoothing=self.config.weather.smoothing,
        )
        self.night = NightOrchestrator(
            self.weather_engine,
            timing=self.config.timing,
            notify=self._notify_callbacks,
        )
        self._callbacks: List[Callable[[str, Any], None]] = []
        self.state = WeekState(
            catalog=catalog,
            queue=QueueManager(catalog, max_size=self.config.queue.max_size),
        )
        self.initialize_week()

    # =========================================================================
    # Week lifecycle
    # =========================================================================

    def initialize_week(self) -> None:
        """Start a fresh week: full catalog, night 0, new forecasts."""
        catalog = self.state.catalog
        catalog.reset()
        self.night.reset()

        self.state = WeekState(catalog=catalog, queue=self.state.queue)
        self.state.queue.clear()
        self.state.weekly_forecast = self.weather_engine.generate_weekly_forecast(NIGHTS_PER_WEEK)
        self._prepare_night(0)

        logger.info(f"Week initialized with {len(catalog)} available target(s)")

    def reset_week(self) -> None:
        """Discard all weekly progress and start over."""
        self.initialize_week()
        self._notify_callbacks("week_reset", self.snapshot())

    def _prepare_night(self, index: int) -> None:
        state = self.state
        state.night_index = index
        state.night_forecast = self.weather_engine.generate_night_forecast(
            state.weekly_forecast[index]
        )
        state.weather = self.weather_engine.initial_weather(state.night_forecast)

    def night_start_time(self, index: Optional[int] = None) -> datetime:
        """Simulated clock at the start of a night."""
        sim = self.config.simulation
        if index is None:
            index = self.state.night_index
        day = sim.start_date + timedelta(days=index)
        return datetime.combine(day, time(hour=sim.night_start_hour))

    # =========================================================================
    # Queue
    # =========================================================================

    def add_to_queue(self, obs_id: int) -> bool:
        if self.state.is_complete or self.night.is_running:
            return False
        if not self.state.queue.add(obs_id):
            return False
        self._notify_callbacks("queue_changed", self.state.queue.ids)
        return True

    def remove_from_queue(self, obs_id: int) -> bool:
        if self.night.is_running:
            return False
        if not self.state.queue.remove(obs_id):
            return False
        self._notify_callbacks("queue_changed", self.state.queue.ids)
        return True

    # =========================================================================
    # Night control
    # =========================================================================

    def start_night(self) -> bool:
        """Lock the queue and begin executing it.

        Returns False when the queue is empty, a night is already running
        or the week is over.
        """
        state = self.state
        if state.is_complete or self.night.state != ExecutionState.IDLE:
            return False
        if not state.queue.lock():
            return False
        state.start_weather = state.weather.copy()

        started = self.night.start(
            state.queue.entries,
            state.night_forecast,
            state.weather,
            self.night_start_time(),
        )
        if not started:
            state.queue.clear()
        return started

    def tick(self, elapsed_sec: float) -> ExecutionState:
        """Advance the running night; a finished night is folded in immediately."""
        result = self.night.tick(elapsed_sec)
        if result == ExecutionState.NIGHT_COMPLETE:
            self.end_night()
        return result

    def end_night(self) -> Optional[NightResult]:
        """Fold the current night into the week.

        Accepted when the night has reached NIGHT_COMPLETE, or when it is
        IDLE (the night is skipped with nothing observed). Returns None
        while a night is running or once the week is complete.
        """
        state = self.state
        if state.is_complete or self.night.is_running:
            return None

        run = self.night.run
        completed = list(run.completed) if run.state == ExecutionState.NIGHT_COMPLETE else []

        state.catalog.remove(c.obs_id for c in completed)
        state.completed.extend(completed)

        night_score = sum(c.points for c in completed)
        result = NightResult(
            night=state.night_index,
            day_name=state.day_name,
            score=night_score,
            observations=completed,
            efficiency=efficiency_percent(night_score, sum(c.base_points for c in completed)),
        )
        state.results.append(result)
        state.weekly_score += night_score

        logger.info(
            f"Night {result.night + 1} ({result.day_name}) ended: "
            f"{len(completed)} observation(s), {night_score} points, {result.efficiency}%"
        )

        self.night.reset()
        state.start_weather = None
        state.queue.clear()
        self._notify_callbacks("night_completed", result.to_dict())

        if state.night_index >= NIGHTS_PER_WEEK - 1:
            state.is_complete = True
            state.summary = self.summarize()
            logger.info(
                f"Week complete: {state.weekly_score} points, "
                f"{state.summary.weekly_efficiency}% efficiency, "
                f"{state.summary.completion_rate}% completion ({state.summary.title})"
            )
            self._notify_callbacks("week_completed", state.summary.to_dict())
        else:
            self._prepare_night(state.night_index + 1)
            self._notify_callbacks("state_changed", self.snapshot())

        return result

    def abort_night(self) -> None:
        """Cancel the running night. Nothing from it is kept, weather included."""
        state = self.state
        started = self.night.state != ExecutionState.IDLE
        self.night.abort()
        if started and state.start_weather is not None:
            state.weather = state.start_weather
        state.start_weather = None
        state.queue.clear()
        self._notify_callbacks("queue_changed", state.queue.ids)
        if started:
            self._notify_callbacks("state_changed", self.snapshot())

    # =========================================================================
    # Results
    # =========================================================================

    def summarize(self) -> WeekSummary:
        """Weekly aggregates and rating for the results so far."""
        state = self.state
        catalog_size = len(state.catalog.catalog)
        possible = sum(c.base_points for c in state.completed)
        efficiency = efficiency_percent(state.weekly_score, possible)
        completion = round_half_up(len(state.completed) / catalog_size * 100) if catalog_size else 0

        return WeekSummary(
            weekly_score=state.weekly_score,
            weekly_efficiency=efficiency,
            completion_rate=completion,
            observations_completed=len(state.completed),
            catalog_size=catalog_size,
            max_possible_score=state.catalog.max_possible_score,
            rating=WeekRating.from_rates(efficiency, completion),
            nights=list(state.results),
            missed=state.catalog.available,
        )

    def submission(self, name: str) -> Optional[ScoreSubmission]:
        """Leaderboard payload once the week is complete, else None."""
        if self.state.summary is None:
            return None
        return self.state.summary.to_submission(name)

    # =========================================================================
    # Notification
    # =========================================================================

    def register_callback(self, callback: Callable[[str, Any], None]) -> None:
        """Register callback for week and night events."""
        self._callbacks.append(callback)

    def unregister_callback(self, callback: Callable[[str, Any], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def _notify_callbacks(self, event: str, data: Any = None) -> None:
        """Notify registered callbacks."""
        for callback in self._callbacks:
            try:
                callback(event, data)
            except Exception as e:
                logger.error(f"Callback error: {e}")

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict view of the week for renderers."""
        state = self.state
        night = self.night.snapshot()
        return {
            "night_index": state.night_index,
            "day_name": state.day_name,
            "date": self.night_start_time().date().isoformat(),
            "state": night["state"],
            "weather": state.weather.to_dict(),
            "weekly_forecast": [d.to_dict() for d in state.weekly_forecast],
            "night_forecast": [b.to_dict() for b in state.night_forecast],
            "queue": state.queue.ids,
            "queue_locked": state.queue.is_locked,
            "available": [obs.obs_id for obs in state.catalog.available],
            "current_target": night["current_target"],
            "progress": night["progress"],
            "sim_time": night["sim_time"],
            "pointing": night["pointing"],
            "night_score": night["score"],
            "weekly_score": state.weekly_score,
            "completed": [c.to_dict() for c in state.completed],
            "is_complete": state.is_complete,
        }
