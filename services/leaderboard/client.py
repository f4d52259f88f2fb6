"""
SKYQUEUE Leaderboard Client

HTTP client for the remote week-end leaderboard.

Endpoints (relative to the configured base URL):
    GET  /scores         -> [{name, score, observations, efficiency, date}, ...]
                            ordered by descending score, at most 20
    POST /scores         {name, score, observations, efficiency}
                         -> {success, rank, score} or {error}
    GET  /scores/stream  server-sent events; each ``data:`` frame carries
                         the updated top list after a submission
    GET  /health         -> {status: "healthy"}

The server owns ranking. The client keeps the order it receives.

Submission never raises: network, HTTP and parse failures come back as a
SubmissionResult with success=False, so a finished week keeps its summary
and the caller can retry with the same payload.

Usage:
    client = LeaderboardClient("http://localhost:8080")
    result = await client.submit_score(summary.to_submission("Ada"))
    if not result.success:
        print(f"Submission failed: {result.error}")
    top = await client.fetch_scores()
"""

from __future__ import annotations

import asyncio
import json
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, AsyncIterator, Dict, List, Optional

import aiohttp

from skyqueue.constants import (
    LEADERBOARD_DEFAULT_URL,
    LEADERBOARD_MAX_ENTRIES,
    LEADERBOARD_TIMEOUT_SEC,
)
from skyqueue.exceptions import LeaderboardError
from skyqueue.logging_config import get_logger

if TYPE_CHECKING:
    from skyqueue.config import LeaderboardConfig

logger = get_logger(__name__)

__all__ = [
    "ScoreSubmission",
    "LeaderboardEntry",
    "SubmissionResult",
    "LeaderboardClient",
]


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class ScoreSubmission:
    """Week-end result as posted to the leaderboard."""
    name: str
    score: int
    observations: int
    efficiency: int

    def to_payload(self) -> Dict[str, Any]:
        """Request body; the key set is fixed by the service."""
        return {
            "name": self.name,
            "score": self.score,
            "observations": self.observations,
            "efficiency": self.efficiency,
        }


@dataclass(frozen=True)
class LeaderboardEntry:
    """One ranked record returned by the service."""
    name: str
    score: float
    observations: int = 0
    efficiency: int = 0
    date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LeaderboardEntry":
        try:
            return cls(
                name=str(data["name"]),
                score=data["score"],
                observations=int(data.get("observations") or 0),
                efficiency=int(data.get("efficiency") or 0),
                date=data.get("date"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise LeaderboardError(f"Malformed leaderboard record: {data!r}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "observations": self.observations,
            "efficiency": self.efficiency,
            "date": self.date,
        }


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of a submission. On failure only ``error`` is set."""
    success: bool
    rank: Optional[int] = None
    score: Optional[float] = None
    error: Optional[str] = None


# =============================================================================
# Client
# =============================================================================


class LeaderboardClient:
    """
    Async client for the leaderboard service.

    A ClientSession may be injected (and is then left open); otherwise each
    call opens and closes its own.
    """

    def __init__(
        self,
        base_url: str = LEADERBOARD_DEFAULT_URL,
        scores_path: str = "/scores",
        stream_path: str = "/scores/stream",
        timeout: float = LEADERBOARD_TIMEOUT_SEC,
        max_entries: int = LEADERBOARD_MAX_ENTRIES,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.scores_path = scores_path
        self.stream_path = stream_path
        self.timeout = timeout
        self.max_entries = max_entries
        self._session = session

    @classmethod
    def from_config(
        cls,
        config: "LeaderboardConfig",
        session: Optional[aiohttp.ClientSession] = None,
    ) -> "LeaderboardClient":
        return cls(
            base_url=config.base_url,
            scores_path=config.scores_path,
            stream_path=config.stream_path,
            timeout=config.timeout,
            max_entries=config.max_entries,
            session=session,
        )

    @property
    def scores_url(self) -> str:
        return f"{self.base_url}{self.scores_path}"

    @property
    def stream_url(self) -> str:
        return f"{self.base_url}{self.stream_path}"

    @asynccontextmanager
    async def _session_scope(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._session is not None:
            yield self._session
            return
        async with aiohttp.ClientSession() as session:
            yield session

    def _parse_entries(self, data: Any) -> List[LeaderboardEntry]:
        if isinstance(data, dict):
            data = data.get("scores")
        if not isinstance(data, list):
            raise LeaderboardError("Leaderboard response is not a list", url=self.scores_url)
        return [LeaderboardEntry.from_dict(item) for item in data[: self.max_entries]]

    # =========================================================================
    # Requests
    # =========================================================================

    async def fetch_scores(self) -> List[LeaderboardEntry]:
        """Current top list, in server order.

        Raises:
            LeaderboardError: On network, HTTP or parse failure
        """
        url = self.scores_url
        try:
            async with self._session_scope() as session:
                async with session.get(
                    url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as resp:
                    if resp.status != 200:
                        raise LeaderboardError(
                            f"HTTP {resp.status} fetching scores", url=url, status=resp.status
                        )
                    data = await resp.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise LeaderboardError(f"Timeout fetching scores after {self.timeout}s", url=url) from e
        except aiohttp.ClientError as e:
            raise LeaderboardError(f"Cannot fetch scores: {e}", url=url) from e
        except ValueError as e:
            raise LeaderboardError(f"Invalid JSON from leaderboard: {e}", url=url) from e

        entries = self._parse_entries(data)
        logger.debug(f"Fetched {len(entries)} leaderboard entries")
        return entries

    async def submit_score(self, submission: ScoreSubmission) -> SubmissionResult:
        """Post a week-end score. Failures are returned, not raised."""
        if not submission.name.strip():
            return SubmissionResult(success=False, error="Name is required")

        url = self.scores_url
        try:
            async with self._session_scope() as session:
                async with session.post(
                    url,
                    json=submission.to_payload(),
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as resp:
                    status = resp.status
                    body = await resp.json(content_type=None)
        except asyncio.TimeoutError:
            logger.warning(f"Leaderboard submission timed out after {self.timeout}s")
            return SubmissionResult(success=False, error=f"Timeout after {self.timeout}s")
        except aiohttp.ClientError as e:
            logger.warning(f"Leaderboard submission failed: {e}")
            return SubmissionResult(success=False, error=f"Connection error: {e}")
        except ValueError as e:
            logger.warning(f"Leaderboard returned invalid JSON: {e}")
            return SubmissionResult(success=False, error=f"Invalid response: {e}")

        if not isinstance(body, dict):
            return SubmissionResult(success=False, error=f"Unexpected response (HTTP {status})")
        if status >= 400 or "error" in body or not body.get("success"):
            error = body.get("error") or f"HTTP {status}"
            logger.warning(f"Leaderboard rejected submission: {error}")
            return SubmissionResult(success=False, error=str(error))

        result = SubmissionResult(
            success=True,
            rank=body.get("rank"),
            score=body.get("score", submission.score),
        )
        logger.info(f"Submitted {submission.score} points for {submission.name}, rank {result.rank}")
        return result

    async def stream_scores(self) -> AsyncIterator[List[LeaderboardEntry]]:
        """Yield the top list each time the server pushes one.

        Raises:
            LeaderboardError: If the stream cannot be opened or a frame is invalid
        """
        url = self.stream_url
        timeout = aiohttp.ClientTimeout(total=None, sock_connect=self.timeout)
        try:
            async with self._session_scope() as session:
                async with session.get(
                    url, headers={"Accept": "text/event-stream"}, timeout=timeout
                ) as resp:
                    if resp.status != 200:
                        raise LeaderboardError(
                            f"HTTP {resp.status} opening score stream", url=url, status=resp.status
                        )
                    data_lines: List[str] = []
                    async for raw in resp.content:
                        try:
                            line = raw.decode("utf-8").rstrip("\r\n")
                        except UnicodeDecodeError as e:
                            raise LeaderboardError(f"Invalid stream frame: {e}", url=url) from e
                        if line.startswith("data:"):
                            data_lines.append(line[5:].lstrip())
                        elif not line and data_lines:
                            payload = "\n".join(data_lines)
                            data_lines = []
                            try:
                                frame = json.loads(payload)
                            except ValueError as e:
                                raise LeaderboardError(f"Invalid stream frame: {e}", url=url) from e
                            yield self._parse_entries(frame)
        except aiohttp.ClientError as e:
            raise LeaderboardError(f"Score stream failed: {e}", url=url) from e

    async def check_health(self) -> tuple[bool, float, str]:
        """Probe GET /health.

        Returns:
            Tuple of (healthy, latency_ms, message)
        """
        url = f"{self.base_url}/health"
        start = time.monotonic()
        try:
            async with self._session_scope() as session:
                async with session.get(
                    url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as resp:
                    latency = (time.monotonic() - start) * 1000
                    if resp.status == 200:
                        return True, latency, f"HTTP {resp.status} from {url}"
                    return False, latency, f"HTTP {resp.status} (expected 200)"
        except asyncio.TimeoutError:
            return False, self.timeout * 1000, f"HTTP timeout to {url}"
        except aiohttp.ClientError as e:
            return False, 0.0, f"HTTP error: {e}"
