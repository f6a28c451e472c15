"""Shared test fixtures — fake clock and a mocked WordPress backend."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from services.cache import CacheManager
from services.wordpress import WordPressClient

WP_URL = "https://wp.test"


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeWordPress:
    """Routes (method, path) to canned responses and records every request."""

    def __init__(self):
        self.routes: dict[tuple[str, str], object] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, response) -> None:
        """response is an httpx.Response, a list of them (served in order), or a callable."""
        self.routes[(method, path)] = response

    def calls(self, path: str) -> int:
        return sum(1 for r in self.requests if r.url.path == path)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "not found"})
        if callable(route):
            return route(request)
        if isinstance(route, list):
            return route.pop(0) if len(route) > 1 else route[0]
        return route


def graphql_body(request: httpx.Request) -> dict:
    return json.loads(request.content)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> CacheManager:
    return CacheManager(clock=clock)


@pytest.fixture
def wp() -> FakeWordPress:
    return FakeWordPress()


@pytest.fixture
def wordpress(wp) -> WordPressClient:
    return WordPressClient(WP_URL, transport=httpx.MockTransport(wp.handler))


@pytest.fixture
def client(cache, wordpress) -> TestClient:
    app = create_app(settings=Settings(), cache=cache, wordpress=wordpress)
    return TestClient(app)
