"""
SKYQUEUE Leaderboard Client Tests

Tests for LeaderboardClient against an in-process aiohttp server.

Run:
    pytest tests/unit/test_leaderboard_client.py -v
"""

import asyncio
import json

import pytest
import pytest_asyncio
from aiohttp import ClientSession, web
from aiohttp.test_utils import TestServer

from services.leaderboard import LeaderboardClient, ScoreSubmission
from skyqueue.config import LeaderboardConfig
from skyqueue.exceptions import LeaderboardError


TOP_SCORES = [
    {"name": "Vera", "score": 910, "observations": 24, "efficiency": 112, "date": "2024-01-21"},
    {"name": "Edwin", "score": 640, "observations": 18, "efficiency": 97, "date": "2024-01-20"},
]


# =============================================================================
# Fixtures
# =============================================================================


def make_app(submissions, health_status=200, scores=TOP_SCORES, stream_frames=()):
    """Leaderboard service double."""

    async def get_scores(request):
        return web.json_response(scores)

    async def post_score(request):
        data = await request.json()
        if not data.get("name"):
            return web.json_response({"error": "Name is required"}, status=400)
        if not isinstance(data.get("score"), (int, float)):
            return web.json_response({"error": "Score must be a number"}, status=400)
        submissions.append(data)
        return web.json_response({"success": True, "rank": 2, "score": data["score"]})

    async def stream(request):
        resp = web.StreamResponse(headers={"Content-Type": "text/event-stream"})
        await resp.prepare(request)
        await resp.write(b": connected\n\n")
        for frame in stream_frames:
            await resp.write(f"data: {json.dumps(frame)}\n\n".encode("utf-8"))
        return resp

    async def garbled_stream(request):
        resp = web.StreamResponse(headers={"Content-Type": "text/event-stream"})
        await resp.prepare(request)
        await resp.write(b"data: \xff\xfe\n\n")
        return resp

    async def slow(request):
        await asyncio.sleep(1.0)
        return web.json_response([])

    async def health(request):
        return web.json_response({"status": "healthy"}, status=health_status)

    app = web.Application()
    app.router.add_get("/scores", get_scores)
    app.router.add_post("/scores", post_score)
    app.router.add_get("/scores/stream", stream)
    app.router.add_get("/scores/garbled", garbled_stream)
    app.router.add_get("/slow", slow)
    app.router.add_get("/health", health)
    return app


@pytest.fixture
def submissions():
    return []


@pytest_asyncio.fixture
async def server(submissions):
    server = TestServer(make_app(submissions, stream_frames=[TOP_SCORES[:1], TOP_SCORES]))
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def client(server):
    return LeaderboardClient(str(server.make_url("/")), timeout=2.0)


@pytest.fixture
def submission():
    return ScoreSubmission(name="Ada", score=412, observations=14, efficiency=103)


# =============================================================================
# Construction Tests
# =============================================================================


class TestConstruction:
    """Tests for URLs and config wiring."""

    def test_defaults(self):
        client = LeaderboardClient()
        assert client.scores_url == "http://localhost:8080/scores"
        assert client.stream_url == "http://localhost:8080/scores/stream"
        assert client.max_entries == 20

    def test_trailing_slash_stripped(self):
        assert LeaderboardClient("http://board.example/").scores_url == "http://board.example/scores"

    def test_from_config(self):
        config = LeaderboardConfig(
            base_url="https://board.example/",
            scores_path="/api/scores",
            timeout=3.0,
            max_entries=5,
        )

        client = LeaderboardClient.from_config(config)

        assert client.scores_url == "https://board.example/api/scores"
        assert client.timeout == 3.0
        assert client.max_entries == 5

    def test_payload_keys(self, submission):
        assert submission.to_payload() == {
            "name": "Ada",
            "score": 412,
            "observations": 14,
            "efficiency": 103,
        }


# =============================================================================
# Fetch Tests
# =============================================================================


class TestFetchScores:
    """Tests for GET /scores."""

    @pytest.mark.asyncio
    async def test_fetch_keeps_server_order(self, client):
        entries = await client.fetch_scores()

        assert [e.name for e in entries] == ["Vera", "Edwin"]
        assert entries[0].score == 910
        assert entries[0].date == "2024-01-21"

    @pytest.mark.asyncio
    async def test_fetch_capped(self, server):
        client = LeaderboardClient(str(server.make_url("/")), max_entries=1)
        assert len(await client.fetch_scores()) == 1

    @pytest.mark.asyncio
    async def test_fetch_http_error(self, server):
        client = LeaderboardClient(str(server.make_url("/")), scores_path="/missing")

        with pytest.raises(LeaderboardError) as exc_info:
            await client.fetch_scores()

        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_fetch_unreachable(self):
        client = LeaderboardClient("http://127.0.0.1:1", timeout=1.0)
        with pytest.raises(LeaderboardError):
            await client.fetch_scores()

    @pytest.mark.asyncio
    async def test_fetch_timeout(self, server):
        client = LeaderboardClient(str(server.make_url("/")), scores_path="/slow", timeout=0.1)
        with pytest.raises(LeaderboardError, match="Timeout"):
            await client.fetch_scores()

    @pytest.mark.asyncio
    async def test_injected_session_left_open(self, server):
        async with ClientSession() as session:
            client = LeaderboardClient(str(server.make_url("/")), session=session)
            await client.fetch_scores()
            assert not session.closed


# =============================================================================
# Submit Tests
# =============================================================================


class TestSubmitScore:
    """Tests for POST /scores."""

    @pytest.mark.asyncio
    async def test_submit_success(self, client, submission, submissions):
        result = await client.submit_score(submission)

        assert result.success
        assert result.rank == 2
        assert result.score == 412
        assert result.error is None
        assert submissions == [submission.to_payload()]

    @pytest.mark.asyncio
    async def test_blank_name_refused_locally(self, client, submissions):
        result = await client.submit_score(
            ScoreSubmission(name="  ", score=1, observations=1, efficiency=1)
        )

        assert not result.success
        assert result.error == "Name is required"
        assert submissions == []

    @pytest.mark.asyncio
    async def test_server_validation_error(self, client):
        result = await client.submit_score(
            ScoreSubmission(name="Ada", score="lots", observations=1, efficiency=1)
        )

        assert not result.success
        assert result.error == "Score must be a number"

    @pytest.mark.asyncio
    async def test_unreachable_returns_failure(self, submission):
        client = LeaderboardClient("http://127.0.0.1:1", timeout=1.0)

        result = await client.submit_score(submission)

        assert not result.success
        assert "Connection error" in result.error

    @pytest.mark.asyncio
    async def test_retry_after_failure(self, server, submission, submissions):
        """The same payload can be resubmitted after a failed attempt."""
        down = LeaderboardClient("http://127.0.0.1:1", timeout=1.0)
        assert not (await down.submit_score(submission)).success

        up = LeaderboardClient(str(server.make_url("/")))
        assert (await up.submit_score(submission)).success
        assert len(submissions) == 1


# =============================================================================
# Stream and Health Tests
# =============================================================================


class TestStreamAndHealth:
    """Tests for the SSE stream and health probe."""

    @pytest.mark.asyncio
    async def test_stream_frames(self, client):
        frames = [frame async for frame in client.stream_scores()]

        assert [[e.name for e in frame] for frame in frames] == [["Vera"], ["Vera", "Edwin"]]

    @pytest.mark.asyncio
    async def test_stream_missing(self, server):
        client = LeaderboardClient(str(server.make_url("/")), stream_path="/nope")
        with pytest.raises(LeaderboardError):
            async for _ in client.stream_scores():
                pass

    @pytest.mark.asyncio
    async def test_stream_undecodable_frame(self, server):
        client = LeaderboardClient(str(server.make_url("/")), stream_path="/scores/garbled")
        with pytest.raises(LeaderboardError, match="Invalid stream frame"):
            async for _ in client.stream_scores():
                pass

    @pytest.mark.asyncio
    async def test_health_ok(self, client):
        healthy, latency_ms, message = await client.check_health()

        assert healthy
        assert latency_ms >= 0
        assert "HTTP 200" in message

    @pytest.mark.asyncio
    async def test_health_unhealthy_status(self, submissions):
        server = TestServer(make_app(submissions, health_status=503))
        await server.start_server()
        try:
            client = LeaderboardClient(str(server.make_url("/")))
            healthy, _, message = await client.check_health()
        finally:
            await server.close()

        assert not healthy
        assert "503" in message

    @pytest.mark.asyncio
    async def test_health_unreachable(self):
        healthy, _, message = await LeaderboardClient("http://127.0.0.1:1").check_health()
        assert not healthy
        assert "HTTP error" in message
