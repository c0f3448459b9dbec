"""Shared test fixtures."""

from collections.abc import Callable

import httpx
import pytest

from tests.unit.fakes import FakeClient
from tests.unit.payloads import BASE_URL, envelope
from yuque_mcp.api import YuqueClient

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(
    recorded_requests: list[httpx.Request],
) -> Callable[..., YuqueClient]:
    """Return a factory for YuqueClient instances backed by a mock transport.

    Every request is appended to ``recorded_requests``. Without a handler the
    remote answers ``{"data": {}}``.
    """

    def factory(
        handler: Handler | None = None, *, token: str = "test-token", base_url: str = BASE_URL
    ) -> YuqueClient:
        def record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            if handler is None:
                return envelope({})
            return handler(request)

        return YuqueClient(token, base_url, transport=httpx.MockTransport(record))

    return factory
