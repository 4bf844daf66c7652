"""Integration test fixtures using Docker.

Provides a containerized Redis so governors run against real SET NX PX,
INCR/DECR and PTTL semantics.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
import redis
import redis.asyncio as aioredis

from tests.integration.docker_utils import RedisContainer, get_docker_client, run_redis


@pytest.fixture(scope="session")
def docker_client():
    """Create a Docker client or skip if Docker is unavailable."""
    try:
        client = get_docker_client()
        client.ping()
    except Exception as exc:
        pytest.skip(f"Docker not available: {exc}")
    yield client
    client.close()


@pytest.fixture(scope="session")
def redis_container(docker_client) -> Iterator[RedisContainer]:
    """Start a Redis container for the test session."""
    with run_redis(docker_client) as container:
        yield container


@pytest.fixture(scope="session")
def redis_url(redis_container: RedisContainer) -> str:
    return redis_container.url


@pytest.fixture
def redis_client(redis_url: str) -> Iterator[redis.Redis]:
    """Blocking client against the container, flushed after each test."""
    client = redis.from_url(redis_url)
    _wait_for_redis(client)
    yield client
    client.flushdb()
    client.close()


@pytest_asyncio.fixture
async def async_redis_client(redis_url: str) -> AsyncIterator[aioredis.Redis]:
    """asyncio client against the container, flushed after each test."""
    client = aioredis.from_url(redis_url)
    await _wait_for_async_redis(client)
    yield client
    await client.flushdb()
    await client.aclose()


def _wait_for_redis(client: redis.Redis, timeout: float = 30.0) -> None:
    """Wait for Redis to accept connections."""
    deadline = time.monotonic() + timeout
    while True:
        try:
            client.ping()
            return
        except redis.exceptions.ConnectionError:
            if time.monotonic() >= deadline:
                raise
            time.sleep(0.5)


async def _wait_for_async_redis(client: aioredis.Redis, timeout: float = 30.0) -> None:
    deadline = time.monotonic() + timeout
    while True:
        try:
            await client.ping()
            return
        except redis.exceptions.ConnectionError:
            if time.monotonic() >= deadline:
                raise
            await asyncio.sleep(0.5)
