"""Adaptive polling governor for asyncio applications.

Same keys, same arithmetic and the same lock protocol as
``adaptive_polling.governor.Governor``, over ``redis.asyncio``. A blocking
governor and an async governor with the same id cooperate.

Example:
    governor = AsyncGovernor("cleanup", LinearCorrection(5000, 1000))

    async def cleanup(gov: AsyncGovernor) -> None:
        if await run_cleanup() == 0:
            await gov.increment_coefficient()

    while running:
        await governor.try_lock(cleanup)
        await asyncio.sleep(await governor.calculate_interval() / 1000)
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any, Callable

from adaptive_polling.algorithms import AlgorithmLike, resolve_algorithm
from adaptive_polling.errors import InvalidArgumentError
from adaptive_polling.governor import LOCK_MARKER, clamp_interval, validate_id
from adaptive_polling.keys import GovernorKeys
from adaptive_polling.observability.logging import LogContext
from adaptive_polling.store import get_async_redis

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)

AsyncLockAction = Callable[["AsyncGovernor"], Any]


class AsyncGovernor:
    """asyncio counterpart of Governor.

    The default client is resolved on first use, so construction needs no
    running event loop.

    Args:
        governor_id: Identity shared by every cooperating instance
        correction_algorithm: Callable or CorrectionAlgorithm (synchronous)
        redis_client: asyncio client to use (defaults to the process-wide client)
    """

    def __init__(
        self,
        governor_id: str,
        correction_algorithm: AlgorithmLike,
        redis_client: Redis | None = None,
    ) -> None:
        self._id = validate_id(governor_id)
        self._compute = resolve_algorithm(correction_algorithm)
        self._correction_algorithm = correction_algorithm
        self._keys = GovernorKeys(self._id)
        self._redis = redis_client

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def correction_algorithm(self) -> AlgorithmLike:
        return self._correction_algorithm

    @property
    def redis_client(self) -> Redis | None:
        """The client in use, or None until the default one is first needed."""
        return self._redis

    @property
    def namespace(self) -> str:
        return self._keys.namespace

    @property
    def coefficient_key(self) -> str:
        return self._keys.coefficient_key

    @property
    def lock_key(self) -> str:
        return self._keys.lock_key

    async def _get_redis(self) -> Redis:
        if self._redis is None:
            self._redis = await get_async_redis()
        return self._redis

    async def read_coefficient(self) -> float:
        """Current shared coefficient; 0.0 when it was never set."""
        redis = await self._get_redis()
        value = await redis.get(self.coefficient_key)
        if value is None:
            return 0.0
        return float(value)

    async def increment_coefficient(self) -> int:
        """Atomically add one to the shared coefficient."""
        redis = await self._get_redis()
        value: int = await redis.incr(self.coefficient_key)
        logger.debug(f"Incremented coefficient for '{self._id}' to {value}")
        return value

    async def decrement_coefficient(self) -> int:
        """Atomically subtract one from the shared coefficient (no floor)."""
        redis = await self._get_redis()
        value: int = await redis.decr(self.coefficient_key)
        logger.debug(f"Decremented coefficient for '{self._id}' to {value}")
        return value

    async def calculate_interval(self) -> int:
        """Polling interval in milliseconds; see Governor.calculate_interval."""
        return clamp_interval(self._compute(await self.read_coefficient()))

    async def try_lock(self, action: AsyncLockAction | None = None) -> bool:
        """Run action if no other instance holds the lock.

        action may be a plain function or a coroutine function; an awaitable
        result is awaited before returning True.

        Raises:
            InvalidArgumentError: if action is missing or not callable
        """
        if action is None or not callable(action):
            raise InvalidArgumentError("try_lock requires a callable action")

        ttl_ms = await self.calculate_interval()
        redis = await self._get_redis()
        acquired = await redis.set(self.lock_key, LOCK_MARKER, nx=True, px=ttl_ms)
        if not acquired:
            logger.debug(f"Lock for '{self._id}' is held elsewhere")
            return False

        logger.debug(f"Acquired lock for '{self._id}' for {ttl_ms}ms")
        with LogContext(governor_id=self._id):
            result = action(self)
            if inspect.isawaitable(result):
                await result
        return True

    async def lock_ttl(self) -> int:
        """Remaining lock lifetime in milliseconds (PTTL semantics)."""
        redis = await self._get_redis()
        ttl: int = await redis.pttl(self.lock_key)
        return ttl
