"""
Pytest configuration and fixtures for Streakboard tests.

The tracks API is replaced by an in-process fake served through
``httpx.MockTransport``; nothing leaves the process.
"""

import os

# Settings are read at import time
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("UPSTREAM_API_URL", "http://upstream.test")

import asyncio
import inspect
from typing import Any, Callable, Dict, List, Optional, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from streakboard.api.deps import get_http_client
from streakboard.clients.upstream import UpstreamClient
from streakboard.main import app
from streakboard.schemas.leaderboard import LeaderboardEntry

UPSTREAM_URL = "http://upstream.test"

Route = Union[httpx.Response, Callable[[httpx.Request], Any]]


class FakeTracksAPI:
    """Route table keyed by path; unknown paths answer 404"""

    def __init__(self):
        self.routes: Dict[str, Route] = {}
        self.requests: List[httpx.Request] = []

    def json(self, path: str, payload: Any, status_code: int = 200) -> None:
        self.routes[path] = httpx.Response(status_code, json=payload)

    def status(self, path: str, status_code: int) -> None:
        self.routes[path] = httpx.Response(status_code, json={"error": "upstream says no"})

    def raw(self, path: str, body: bytes, status_code: int = 200) -> None:
        self.routes[path] = httpx.Response(status_code, content=body)

    def handler(self, path: str, func: Callable[[httpx.Request], Any]) -> None:
        self.routes[path] = func

    def leaderboard(self, track_id: str, rows: List[Dict[str, Any]]) -> None:
        self.json(f"/api/tracks/{track_id}/leaderboard", {"leaderboard": rows})

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(route, httpx.Response):
            return httpx.Response(
                route.status_code, content=route.content, headers=route.headers
            )
        result = route(request)
        if inspect.isawaitable(result):
            result = await result
        return result


def row(
    user_id: str,
    total: float = 0,
    base: Optional[float] = None,
    streak: int = 0,
    mult: float = 1.0,
    name: Optional[str] = None,
    rank: int = 0,
) -> Dict[str, Any]:
    """Upstream-shaped leaderboard row"""
    return {
        "rank": rank,
        "userId": user_id,
        "userName": name if name is not None else user_id.upper(),
        "baseScore": total if base is None else base,
        "totalScore": total,
        "currentStreak": streak,
        "longestStreak": streak,
        "streakMultiplier": mult,
    }


def entry(*args, **kwargs) -> LeaderboardEntry:
    return LeaderboardEntry.model_validate(row(*args, **kwargs))


@pytest.fixture
def make_row():
    return row


@pytest.fixture
def make_entry():
    return entry


@pytest.fixture
def tracks_api() -> FakeTracksAPI:
    return FakeTracksAPI()


@pytest.fixture
def http_client(tracks_api) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        transport=httpx.MockTransport(tracks_api), base_url=UPSTREAM_URL
    )


@pytest.fixture
def upstream(http_client) -> UpstreamClient:
    return UpstreamClient(http_client, token="test-token", request_id="req-123")


@pytest.fixture
def api_client(http_client):
    app.dependency_overrides[get_http_client] = lambda: http_client
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def never_answers():
    """Handler that blocks until cancelled, recording the cancellation"""
    state = {"started": 0, "cancelled": 0}

    async def handle(request: httpx.Request) -> httpx.Response:
        state["started"] += 1
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            state["cancelled"] += 1
            raise
        return httpx.Response(200, json={"leaderboard": []})

    handle.state = state
    return handle
