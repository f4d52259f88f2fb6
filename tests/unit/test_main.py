"""
SKYQUEUE Headless Runner Tests

Tests for greedy queue filling, the week loop and the command line.
"""

import logging
import os
from unittest.mock import AsyncMock, patch

import pytest

from services.leaderboard import SubmissionResult
from skyqueue.config import SkyQueueConfig, TimingConfig
from skyqueue.main import fill_queue, main, run_week, submission_name
from skyqueue.week import WeekOrchestrator
from tests.fixtures import FixedWeatherEngine, make_observation


FAST_CONFIG = """\
timing:
  slew_duration_sec: 0.5
  observation_duration_scale: 0.002
  inter_target_pause_sec: 0.5
  tick_interval_sec: 0.25
"""


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    for key in list(os.environ):
        if key.startswith("SKYQUEUE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger("skyqueue")
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "skyqueue.yaml"
    path.write_text(FAST_CONFIG)
    return path


@pytest.fixture
def week():
    catalog = [
        make_observation(1),                                   # 23 points
        make_observation(2, iq="IQ20", cc="CC50", wv="WV20"),  # 100 points
        make_observation(3, iq="IQ70", cc="CC70", wv="WV50"),  # 67 points
        make_observation(4, iq="IQ20", cc="CC50", wv="WV20"),  # 100 points
    ]
    config = SkyQueueConfig(
        timing=TimingConfig(
            slew_duration_sec=0.5,
            observation_duration_scale=0.002,
            inter_target_pause_sec=0.5,
        ),
    )
    config.queue.max_size = 2
    return WeekOrchestrator(catalog=catalog, weather_engine=FixedWeatherEngine(), config=config)


class TestRunner:
    """Tests for fill_queue and run_week."""

    def test_fill_queue_takes_highest_value_first(self, week):
        assert fill_queue(week) == [2, 4]

    def test_run_week_observes_whole_catalog(self, week):
        summary = run_week(week, tick_sec=0.25)

        assert week.state.is_complete
        assert summary.observations_completed == 4
        assert summary.completion_rate == 100
        assert [len(n.observations) for n in summary.nights] == [2, 2, 0, 0, 0, 0, 0]
        assert summary.weekly_score == sum(n.score for n in summary.nights)


class TestMain:
    """Tests for the command line entry point."""

    def test_runs_week(self, config_file, capsys):
        assert main(["--config", str(config_file), "--seed", "3"]) == 0

        out = capsys.readouterr().out
        assert "Week complete" in out
        assert "Sunday" in out and "Saturday" in out

    def test_missing_config(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "absent.yaml")]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_bad_catalog(self, tmp_path, capsys):
        path = tmp_path / "skyqueue.yaml"
        path.write_text(FAST_CONFIG + "simulation:\n  catalog_file: missing.yaml\n")

        assert main(["--config", str(path)]) == 2

    def test_submit_success(self, config_file, capsys):
        submit = AsyncMock(return_value=SubmissionResult(success=True, rank=1, score=500))
        with patch("skyqueue.main.LeaderboardClient.submit_score", new=submit):
            assert main(["--config", str(config_file), "--seed", "3", "--submit", "Ada"]) == 0

        submission = submit.call_args.args[0]
        assert submission.name == "Ada"
        assert "rank #1" in capsys.readouterr().out

    def test_submit_failure_keeps_summary(self, config_file, capsys):
        code = main([
            "--config", str(config_file),
            "--seed", "3",
            "--submit", "Ada",
            "--leaderboard-url", "http://127.0.0.1:1",
        ])

        captured = capsys.readouterr()
        assert code == 1
        assert "Week complete" in captured.out
        assert "Leaderboard submission failed" in captured.err

    def test_enabled_leaderboard_submits_configured_player(self, tmp_path):
        path = tmp_path / "skyqueue.yaml"
        path.write_text(FAST_CONFIG + "leaderboard:\n  enabled: true\n  player_name: Grace\n")

        submit = AsyncMock(return_value=SubmissionResult(success=True, rank=3, score=200))
        with patch("skyqueue.main.LeaderboardClient.submit_score", new=submit):
            assert main(["--config", str(path), "--seed", "3"]) == 0

        assert submit.call_args.args[0].name == "Grace"

    def test_disabled_leaderboard_does_not_submit(self, config_file):
        submit = AsyncMock()
        with patch("skyqueue.main.LeaderboardClient.submit_score", new=submit):
            assert main(["--config", str(config_file), "--seed", "3"]) == 0

        submit.assert_not_called()


class TestSubmissionName:
    """Tests for choosing the leaderboard name."""

    def test_flag_wins(self):
        config = SkyQueueConfig()
        config.leaderboard.enabled = True
        config.leaderboard.player_name = "Grace"
        assert submission_name("Ada", config) == "Ada"

    def test_disabled_without_flag(self):
        config = SkyQueueConfig()
        config.leaderboard.player_name = "Grace"
        assert submission_name(None, config) is None

    def test_enabled_uses_player_name(self):
        config = SkyQueueConfig()
        config.leaderboard.enabled = True
        config.leaderboard.player_name = "Grace"
        assert submission_name(None, config) == "Grace"

    def test_enabled_without_player_name(self, caplog):
        config = SkyQueueConfig()
        config.leaderboard.enabled = True
        with caplog.at_level(logging.WARNING, logger="skyqueue"):
            assert submission_name(None, config) is None
        assert "no player_name" in caplog.text
