"""
Shared pytest fixtures for the timeout harness tests.

Timings are scaled down from the real run (1s delay / 500ms timeout) so the
suite stays quick; assertions leave room for scheduler jitter.
"""

import asyncio

import httpx
import pytest


class FakeFetch:
    """Stand-in for HttpFetcher that sleeps instead of touching the network.

    Records how many calls started, finished, and were cancelled so tests
    can tell an aborted request from an abandoned one.
    """

    def __init__(self, delay_s: float = 0.0, error: Exception = None):
        self.delay_s = delay_s
        self.error = error
        self.calls = 0
        self.completed = 0
        self.cancelled = 0
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, url, options):
        self.calls += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay_s)
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        finally:
            self.in_flight -= 1
        if self.error is not None:
            raise self.error
        self.completed += 1
        return httpx.Response(200, request=httpx.Request("GET", url))


@pytest.fixture
def fake_fetch():
    """Factory for FakeFetch instances."""
    return FakeFetch


@pytest.fixture
def delayed_transport():
    """Factory for an httpx MockTransport that answers after ``delay_s``."""

    def make(delay_s: float, status_code: int = 200):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(delay_s)
            return httpx.Response(status_code, json={"url": str(request.url)})

        return httpx.MockTransport(handler)

    return make
