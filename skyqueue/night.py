"""
SKYQUEUE Night Orchestrator
Observation execution state machine for one night.

Each queue entry runs through:

    IDLE -> SLEWING -> OBSERVING -> COMPLETE -> (next entry) SLEWING ...

and the night ends in NIGHT_COMPLETE after the last entry's pause.

The machine never sleeps or schedules callbacks. The caller owns the clock
and advances it with tick(elapsed_sec); every wait (slew, exposure,
inter-target pause) is just elapsed time compared against a fixed duration.
The full state can be inspected between ticks.

Weather moves only inside tick(), and only while OBSERVING: one smoothing
step per tick toward the forecast block of the current simulated hour.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from skyqueue.config import TimingConfig
from skyqueue.logging_config import get_logger
from services.catalog.catalog import Observation, format_dec, format_ra
from services.scoring.scorer import efficiency_percent, score_observation
from services.weather.engine import ForecastBlock, WeatherEngine, WeatherState

logger = get_logger(__name__)

__all__ = [
    "ExecutionState",
    "CompletedObservation",
    "NightRun",
    "NightOrchestrator",
]

# Callback signature shared with the week orchestrator: (event, data)
NotifyCallback = Callable[[str, Any], None]


class ExecutionState(Enum):
    """State of the night's execution."""
    IDLE = "idle"                      # Nothing running
    SLEWING = "slewing"                # Moving to the current target
    OBSERVING = "observing"            # Exposing, weather advancing
    COMPLETE = "complete"              # Target scored, pausing before the next
    NIGHT_COMPLETE = "night_complete"  # Queue exhausted

    @property
    def is_active(self) -> bool:
        return self in (ExecutionState.SLEWING, ExecutionState.OBSERVING, ExecutionState.COMPLETE)


@dataclass
class CompletedObservation:
    """A finished target with the score it earned."""
    observation: Observation
    points: int
    efficiency: int
    completed_at: datetime
    weather: WeatherState

    @property
    def obs_id(self) -> int:
        return self.observation.obs_id

    @property
    def base_points(self) -> int:
        return self.observation.base_points

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.observation.obs_id,
            "name": self.observation.name,
            "points": self.points,
            "base_points": self.observation.base_points,
            "efficiency": self.efficiency,
            "completed_at": self.completed_at.isoformat(),
            "weather": self.weather.to_dict(),
        }


@dataclass
class NightRun:
    """Everything the state machine knows about the night in progress."""
    queue: List[Observation] = field(default_factory=list)
    forecast: List[ForecastBlock] = field(default_factory=list)
    state: ExecutionState = ExecutionState.IDLE
    index: int = -1
    phase_elapsed: float = 0.0        # Real seconds spent in the current state
    progress: float = 0.0             # Exposure progress 0..1
    sim_time: Optional[datetime] = None
    completed: List[CompletedObservation] = field(default_factory=list)

    # Display only
    target_ra: float = 0.0
    target_dec: float = 0.0
    pointing_ra: float = 0.0
    pointing_dec: float = 0.0

    @property
    def current(self) -> Optional[Observation]:
        if 0 <= self.index < len(self.queue):
            return self.queue[self.index]
        return None

    @property
    def score(self) -> int:
        return sum(c.points for c in self.completed)

    @property
    def possible_points(self) -> int:
        return sum(c.base_points for c in self.completed)

    @property
    def efficiency(self) -> int:
        return efficiency_percent(self.score, self.possible_points)


class NightOrchestrator:
    """
    Drives the queue through the execution state machine.

    Usage:
        night = NightOrchestrator(engine, TimingConfig())
        night.start(queue, forecast_blocks, weather, datetime(2024, 1, 15, 19))
        while night.state.is_active:
            night.tick(1 / 60)
        print(night.run.score)
    """

    def __init__(
        self,
        weather_engine: WeatherEngine,
        timing: Optional[TimingConfig] = None,
        notify: Optional[NotifyCallback] = None,
    ):
        self.weather_engine = weather_engine
        self.timing = timing or TimingConfig()
        self._notify = notify
        self._weather: Optional[WeatherState] = None
        self.run = NightRun()

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state(self) -> ExecutionState:
        return self.run.state

    @property
    def is_running(self) -> bool:
        return self.run.state.is_active

    @property
    def weather(self) -> Optional[WeatherState]:
        return self._weather

    def observation_seconds(self, observation: Observation) -> float:
        """Real seconds an exposure takes."""
        return observation.duration_minutes * 60 * self.timing.observation_duration_scale

    # =========================================================================
    # Control
    # =========================================================================

    def start(
        self,
        queue: List[Observation],
        forecast: List[ForecastBlock],
        weather: WeatherState,
        sim_start: datetime,
    ) -> bool:
        """Begin the night with the first queue entry.

        Returns False (and changes nothing) when the queue is empty or a
        night is already running.
        """
        if not queue or self.is_running:
            return False

        self._weather = weather
        self.run = NightRun(
            queue=list(queue),
            forecast=list(forecast),
            sim_time=sim_start,
            pointing_ra=self.run.pointing_ra,
            pointing_dec=self.run.pointing_dec,
        )
        logger.info(f"Night started with {len(queue)} target(s) at {sim_start:%Y-%m-%d %H:%M}")
        self._start_next()
        return True

    def reset(self) -> None:
        """Return to IDLE with an empty run. Telescope pointing is kept."""
        self.run = NightRun(pointing_ra=self.run.pointing_ra, pointing_dec=self.run.pointing_dec)

    def abort(self) -> None:
        """Stop immediately, discarding the whole night's progress."""
        was_active = self.is_running
        self.reset()
        if was_active:
            logger.info("Night aborted, progress discarded")
            self._emit("night_aborted", None)
            self._emit("state_changed", self.snapshot())

    def tick(self, elapsed_sec: float) -> ExecutionState:
        """Advance the machine by elapsed real seconds.

        Leftover time carries across transitions, so one large tick can
        finish several phases. Weather is stepped once for each exposure
        the tick spends time in.

        Returns:
            The state after the tick
        """
        if elapsed_sec < 0:
            raise ValueError(f"elapsed_sec must be >= 0, got {elapsed_sec}")

        budget = elapsed_sec
        run = self.run
        while run.state.is_active:
            if run.state == ExecutionState.SLEWING:
                needed = self.timing.slew_duration_sec - run.phase_elapsed
                if budget < needed:
                    run.phase_elapsed += budget
                    break
                budget -= max(needed, 0.0)
                self._begin_observing()

            elif run.state == ExecutionState.OBSERVING:
                total = self.observation_seconds(run.current)
                remaining = total - run.phase_elapsed
                if budget >= remaining:
                    budget -= remaining
                    run.phase_elapsed = total
                else:
                    run.phase_elapsed += budget
                    budget = 0.0
                run.progress = min(run.phase_elapsed / total, 1.0)
                self._step_weather()
                if run.progress < 1.0:
                    break
                self._complete_current()

            elif run.state == ExecutionState.COMPLETE:
                needed = self.timing.inter_target_pause_sec - run.phase_elapsed
                if budget < needed:
                    run.phase_elapsed += budget
                    break
                budget -= max(needed, 0.0)
                self._start_next()

        return run.state

    # =========================================================================
    # Transitions
    # =========================================================================

    def _start_next(self) -> None:
        run = self.run
        run.index += 1
        run.phase_elapsed = 0.0
        run.progress = 0.0

        obs = run.current
        if obs is None:
            run.state = ExecutionState.NIGHT_COMPLETE
            logger.info(
                f"Night complete: {len(run.completed)} observation(s), "
                f"{run.score} points ({run.efficiency}%)"
            )
            self._emit("state_changed", self.snapshot())
            return

        run.target_ra = obs.ra_hours
        run.target_dec = obs.dec_degrees
        run.state = ExecutionState.SLEWING
        logger.debug(f"Slewing to {obs.name} ({format_ra(run.target_ra)} {format_dec(run.target_dec)})")
        self._emit("state_changed", self.snapshot())

    def _begin_observing(self) -> None:
        run = self.run
        run.pointing_ra = run.target_ra
        run.pointing_dec = run.target_dec
        run.phase_elapsed = 0.0
        run.progress = 0.0
        run.state = ExecutionState.OBSERVING
        logger.debug(f"Observing {run.current.name} for {run.current.duration_minutes:g} min")
        self._emit("state_changed", self.snapshot())

    def _step_weather(self) -> None:
        if self._weather is None:
            return
        block = self.weather_engine.block_for_hour(self.run.forecast, self.run.sim_time.hour)
        self.weather_engine.step_weather(self._weather, block)
        self._emit("weather_updated", self._weather.to_dict())

    def _complete_current(self) -> None:
        run = self.run
        obs = run.current
        weather = self._weather or WeatherState()
        result = score_observation(obs, weather)
        run.sim_time = run.sim_time + timedelta(minutes=obs.duration_minutes)

        completed = CompletedObservation(
            observation=obs,
            points=result.points,
            efficiency=result.efficiency,
            completed_at=run.sim_time,
            weather=weather.copy(),
        )
        run.completed.append(completed)
        run.phase_elapsed = 0.0
        run.state = ExecutionState.COMPLETE

        logger.info(
            f"Completed {obs.name}: +{result.points}/{obs.base_points} "
            f"({result.efficiency}%)"
        )
        self._emit("observation_completed", completed.to_dict())
        self._emit("state_changed", self.snapshot())

    # =========================================================================
    # Inspection
    # =========================================================================

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view of the night for renderers."""
        run = self.run
        current = run.current
        return {
            "state": run.state.value,
            "index": run.index,
            "queue_length": len(run.queue),
            "current_target": current.to_dict() if current else None,
            "progress": run.progress,
            "sim_time": run.sim_time.isoformat() if run.sim_time else None,
            "target": {"ra": format_ra(run.target_ra), "dec": format_dec(run.target_dec)},
            "pointing": {"ra": format_ra(run.pointing_ra), "dec": format_dec(run.pointing_dec)},
            "completed": [c.to_dict() for c in run.completed],
            "score": run.score,
            "efficiency": run.efficiency,
        }

    def _emit(self, event: str, data: Any) -> None:
        if self._notify is not None:
            self._notify(event, data)
