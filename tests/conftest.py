"""Shared test fixtures for apifetch.

Provides reusable fixtures for isolating the global output state, fixed
clocks for cache expiry, and a recording ``httpx.MockTransport``.  These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import httpx
import pytest

from apifetch.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches a reference to sys.stderr at creation time.
    When pytest's capture swaps streams between tests the cached reference
    goes stale, so a fresh manager is created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Clock fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def now() -> datetime:
    """A fixed "current" time for expiry checks."""
    return datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def later(now: datetime) -> datetime:
    """A time one hour after :func:`now`."""
    return now + timedelta(hours=1)


@pytest.fixture
def earlier(now: datetime) -> datetime:
    """A time one hour before :func:`now`."""
    return now - timedelta(hours=1)


# ---------------------------------------------------------------------------
# Transport fixtures
# ---------------------------------------------------------------------------


class RecordingHandler:
    """MockTransport handler that records requests and replays a canned response.

    The response factory receives the request so individual tests can assert
    on it or vary the reply.
    """

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def make_handler() -> Callable[..., RecordingHandler]:
    """Factory for :class:`RecordingHandler` instances.

    Call with a response factory, or with ``json=`` / ``status_code=`` for a
    fixed JSON reply.
    """

    def _make(
        respond: Callable[[httpx.Request], httpx.Response] | None = None,
        *,
        json: object = None,
        status_code: int = 200,
    ) -> RecordingHandler:
        if respond is None:
            payload = json

            def respond(request: httpx.Request) -> httpx.Response:
                return httpx.Response(status_code, json=payload)

        return RecordingHandler(respond)

    return _make
