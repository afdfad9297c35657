"""Shared pytest fixtures.

The price API is faked with `httpx.MockTransport`; SDK objects are plain
namespaces or dicts so that absent attributes really are absent.
"""

from __future__ import annotations

import asyncio
from typing import Callable, List, Optional

import httpx
import pytest

from swapmeter.integrations.pricing.price_client import TokenPriceClient

PRICE_API_BASE_URL = "https://prices.test/api/v2"


class FakeClock:
    """Monotonic clock under test control."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    return []


@pytest.fixture
def price_http_clients() -> List[httpx.AsyncClient]:
    """HTTP clients opened by `make_price_client`, in creation order."""
    return []


@pytest.fixture
def make_price_client(clock: FakeClock, requests_seen: List[httpx.Request],
                      price_http_clients: List[httpx.AsyncClient]):
    """Build TokenPriceClients whose HTTP traffic is answered by `handler`; their HTTP clients close on teardown."""

    def _make(
            handler: Callable[[httpx.Request], httpx.Response],
            *,
            revalidate_seconds: float = 0,
            max_requests_per_minute: int = 0,
            base_url: Optional[str] = PRICE_API_BASE_URL,
    ) -> TokenPriceClient:
        def _recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(_recording_handler))
        price_http_clients.append(http_client)
        return TokenPriceClient(
            base_url=base_url,
            http_client=http_client,
            revalidate_seconds=revalidate_seconds,
            max_requests_per_minute=max_requests_per_minute,
            clock=clock,
        )

    yield _make

    # own loop: the test's loop may already be closed, and no global loop is replaced
    loop = asyncio.new_event_loop()
    try:
        for http_client in price_http_clients:
            loop.run_until_complete(http_client.aclose())
    finally:
        loop.close()
