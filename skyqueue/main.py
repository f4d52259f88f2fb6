"""
SKYQUEUE Headless Runner

Plays a full week without a renderer: each night's queue is filled greedily
with the highest-value targets still available, the night is driven tick by
tick until it completes, and the week summary is printed at the end.

Usage:
    skyqueue --seed 42
    skyqueue --config skyqueue.yaml --submit "Ada Lovelace"
    python -m skyqueue.main --log-level DEBUG
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from skyqueue.config import SkyQueueConfig, load_config
from skyqueue.constants import SKYQUEUE_NAME, SKYQUEUE_VERSION
from skyqueue.exceptions import SkyQueueError
from skyqueue.logging_config import (
    correlation_context,
    get_logger,
    log_exception,
    log_timing,
    setup_logging,
)
from skyqueue.week import WeekOrchestrator, WeekSummary
from services.catalog import CatalogStore, load_catalog_file, load_default_catalog
from services.leaderboard import LeaderboardClient

logger = get_logger(__name__)


def fill_queue(week: WeekOrchestrator) -> List[int]:
    """Queue the most valuable available targets, ties broken by id."""
    candidates = sorted(
        week.state.catalog.available,
        key=lambda obs: (-obs.base_points, obs.obs_id),
    )
    for obs in candidates:
        if week.state.queue.is_full:
            break
        week.add_to_queue(obs.obs_id)
    return week.state.queue.ids


def run_week(week: WeekOrchestrator, tick_sec: float) -> WeekSummary:
    """Play every remaining night of the week and return its summary."""
    while not week.state.is_complete:
        queued = fill_queue(week)
        if not week.start_night():
            logger.info(f"Night {week.state.night_index + 1}: nothing to observe, skipping")
            week.end_night()
            continue

        night_label = f"Night {week.state.night_index + 1} ({week.state.day_name})"
        logger.debug(f"{night_label} queue: {queued}")
        with log_timing(logger, night_label):
            while week.night.is_running:
                week.tick(tick_sec)

    return week.state.summary


def print_summary(summary: WeekSummary) -> None:
    print()
    print(f"=== Week complete: {summary.title} ===")
    print(f"Weekly score:     {summary.weekly_score} / {summary.max_possible_score}")
    print(f"Efficiency:       {summary.weekly_efficiency}%")
    print(
        f"Completion:       {summary.completion_rate}% "
        f"({summary.observations_completed}/{summary.catalog_size})"
    )
    print()
    for night in summary.nights:
        names = ", ".join(c.observation.name for c in night.observations) or "-"
        print(
            f"  {night.day_name:<9} {night.score:>4} pts  {night.efficiency:>3}%  {names}"
        )
    if summary.missed:
        print()
        print(f"Missed: {', '.join(obs.name for obs in summary.missed)}")


def submission_name(submit: Optional[str], config: SkyQueueConfig) -> Optional[str]:
    """Name to submit under: --submit wins, else the configured player when enabled."""
    if submit:
        return submit
    board = config.leaderboard
    if not board.enabled:
        return None
    if not board.player_name:
        logger.warning("Leaderboard enabled but no player_name configured, not submitting")
        return None
    return board.player_name


def build_week(config: SkyQueueConfig) -> WeekOrchestrator:
    if config.simulation.catalog_file:
        observations = load_catalog_file(config.simulation.catalog_file)
    else:
        observations = load_default_catalog()
    return WeekOrchestrator(catalog=CatalogStore(observations), config=config)


def main(argv: Optional[List[str]] = None) -> int:
    """Run one headless week from the command line."""
    parser = argparse.ArgumentParser(
        description=f"{SKYQUEUE_NAME}: play a simulated week of queue-scheduled observing"
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML configuration file (default: search standard locations)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible weather",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: from config)",
    )
    parser.add_argument(
        "--submit",
        metavar="NAME",
        default=None,
        help="Submit the week's score to the leaderboard under NAME (overrides leaderboard.player_name)",
    )
    parser.add_argument(
        "--leaderboard-url",
        default=None,
        help="Leaderboard base URL (default: from config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {SKYQUEUE_VERSION}",
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except SkyQueueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    if args.seed is not None:
        config.weather.seed = args.seed
    if args.leaderboard_url:
        config.leaderboard.base_url = args.leaderboard_url.rstrip("/")

    setup_logging(log_level=args.log_level or config.log_level)

    with correlation_context(prefix="week"):
        try:
            week = build_week(config)
        except SkyQueueError as e:
            log_exception(logger, "Cannot load catalog", e, include_traceback=False)
            return 2

        summary = run_week(week, config.timing.tick_interval_sec)
        print_summary(summary)

        name = submission_name(args.submit, config)
        if name is None:
            return 0

        client = LeaderboardClient.from_config(config.leaderboard)
        result = asyncio.run(client.submit_score(summary.to_submission(name)))
        if not result.success:
            print(f"Leaderboard submission failed: {result.error}", file=sys.stderr)
            return 1

        print(f"Submitted to leaderboard: rank #{result.rank}")
        return 0


if __name__ == "__main__":
    sys.exit(main())
