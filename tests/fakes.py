"""In-memory Redis stand-ins for unit tests.

Implements the handful of commands governors and the CLI issue, with Redis
semantics for NX/PX writes, INCR/DECR and PTTL. Values are stored as bytes,
as redis-py returns them without decode_responses.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

from redis.exceptions import ResponseError


class FakeRedis:
    """Thread-safe fake of the blocking redis-py client.

    Args:
        clock: Returns the current time in seconds (defaults to time.monotonic)
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.monotonic
        self._data: dict[str, bytes] = {}
        self._expires_at: dict[str, float] = {}
        self._mutex = threading.Lock()

        # Call log for assertions
        self.commands: list[tuple[str, str]] = []

    @staticmethod
    def _encode(value: Any) -> bytes:
        if isinstance(value, bytes):
            return value
        if isinstance(value, bool):
            return b"1" if value else b"0"
        return str(value).encode()

    def _purge(self, key: str) -> None:
        expires_at = self._expires_at.get(key)
        if expires_at is not None and self._clock() >= expires_at:
            self._data.pop(key, None)
            self._expires_at.pop(key, None)

    def get(self, name: str) -> bytes | None:
        with self._mutex:
            self.commands.append(("get", name))
            self._purge(name)
            return self._data.get(name)

    def set(
        self,
        name: str,
        value: Any,
        ex: int | None = None,
        px: int | None = None,
        nx: bool = False,
    ) -> bool | None:
        with self._mutex:
            self.commands.append(("set", name))
            self._purge(name)
            if nx and name in self._data:
                return None
            self._data[name] = self._encode(value)
            self._expires_at.pop(name, None)
            if px is not None:
                self._expires_at[name] = self._clock() + px / 1000
            elif ex is not None:
                self._expires_at[name] = self._clock() + ex
            return True

    def _add(self, name: str, amount: int) -> int:
        self._purge(name)
        raw = self._data.get(name, b"0")
        try:
            current = int(raw)
        except ValueError:
            raise ResponseError("value is not an integer or out of range") from None
        current += amount
        self._data[name] = str(current).encode()
        return current

    def incr(self, name: str, amount: int = 1) -> int:
        with self._mutex:
            self.commands.append(("incr", name))
            return self._add(name, amount)

    def decr(self, name: str, amount: int = 1) -> int:
        with self._mutex:
            self.commands.append(("decr", name))
            return self._add(name, -amount)

    def pttl(self, name: str) -> int:
        with self._mutex:
            self.commands.append(("pttl", name))
            self._purge(name)
            if name not in self._data:
                return -2
            expires_at = self._expires_at.get(name)
            if expires_at is None:
                return -1
            return max(0, int((expires_at - self._clock()) * 1000))

    def exists(self, *names: str) -> int:
        with self._mutex:
            count = 0
            for name in names:
                self._purge(name)
                if name in self._data:
                    count += 1
            return count

    def delete(self, *names: str) -> int:
        with self._mutex:
            removed = 0
            for name in names:
                self._expires_at.pop(name, None)
                if self._data.pop(name, None) is not None:
                    removed += 1
            return removed

    def pipeline(self, transaction: bool = True) -> FakePipeline:
        return FakePipeline(self)

    def close(self) -> None:
        pass


class FakePipeline:
    """Queues commands and runs them against the parent on execute()."""

    def __init__(self, client: FakeRedis) -> None:
        self._client = client
        self._queued: list[tuple[str, tuple[Any, ...]]] = []

    def __enter__(self) -> FakePipeline:
        return self

    def __exit__(self, *args: Any) -> None:
        self._queued.clear()

    def get(self, name: str) -> FakePipeline:
        self._queued.append(("get", (name,)))
        return self

    def pttl(self, name: str) -> FakePipeline:
        self._queued.append(("pttl", (name,)))
        return self

    def execute(self) -> list[Any]:
        results = [getattr(self._client, command)(*args) for command, args in self._queued]
        self._queued.clear()
        return results


class FakeAsyncRedis:
    """asyncio facade over a FakeRedis."""

    def __init__(self, sync: FakeRedis | None = None) -> None:
        self.sync = sync or FakeRedis()

    async def get(self, name: str) -> bytes | None:
        return self.sync.get(name)

    async def set(self, name: str, value: Any, **kwargs: Any) -> bool | None:
        return self.sync.set(name, value, **kwargs)

    async def incr(self, name: str, amount: int = 1) -> int:
        return self.sync.incr(name, amount)

    async def decr(self, name: str, amount: int = 1) -> int:
        return self.sync.decr(name, amount)

    async def pttl(self, name: str) -> int:
        return self.sync.pttl(name)

    async def aclose(self) -> None:
        pass
