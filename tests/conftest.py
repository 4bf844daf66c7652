"""Global pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tests.fakes import FakeAsyncRedis, FakeRedis


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: needs a Redis container started through Docker"
    )


class ManualClock:
    """Clock advanced explicitly by tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def fake_redis(clock: ManualClock) -> FakeRedis:
    """Fake blocking client driven by the manual clock."""
    return FakeRedis(clock=clock)


@pytest.fixture
def fake_async_redis(fake_redis: FakeRedis) -> FakeAsyncRedis:
    return FakeAsyncRedis(fake_redis)


@pytest.fixture(autouse=True)
def reset_default_clients() -> Iterator[None]:
    """Drop process-wide clients created by a test."""
    from adaptive_polling import store

    yield

    store._redis_client = None
    store._async_redis_client = None
