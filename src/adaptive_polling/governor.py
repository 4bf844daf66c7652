"""Adaptive polling governor.

A governor lets many processes agree, through one Redis server, on how long
to wait before acting next and on which of them may act right now.

Every governor constructed with the same id, in any process on any host,
shares two keys:
1. A correction coefficient, adjusted with INCR/DECR by whoever observes load
2. A lock record, created with SET NX PX and released only by expiry

The lock TTL is the interval the correction algorithm computes from the
current coefficient, so a lock outlives exactly one polling period.

Example:
    governor = Governor("cleanup", lambda cc: cc * 1000 + 5000)

    def cleanup(gov: Governor) -> None:
        if run_cleanup() == 0:
            gov.increment_coefficient()  # nothing to do, back off

    while True:
        governor.try_lock(cleanup)
        time.sleep(governor.calculate_interval() / 1000)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from adaptive_polling.algorithms import AlgorithmLike, resolve_algorithm
from adaptive_polling.errors import InvalidArgumentError
from adaptive_polling.keys import GovernorKeys
from adaptive_polling.observability.logging import LogContext
from adaptive_polling.store import get_redis

if TYPE_CHECKING:
    from redis import Redis

logger = logging.getLogger(__name__)

# Value stored under the lock key; only its presence matters
LOCK_MARKER = "true"

LockAction = Callable[["Governor"], Any]


def validate_id(governor_id: str | None) -> str:
    if not governor_id or not isinstance(governor_id, str):
        raise InvalidArgumentError("id must be a non-empty string")
    return governor_id


def clamp_interval(value: Any) -> int:
    """Truncate toward zero; anything not positive becomes 1ms."""
    interval = int(value)
    return interval if interval > 0 else 1


class Governor:
    """Redis-backed polling governor for one identity.

    Holds no state besides the algorithm and the client. The coefficient is
    read from Redis on every call and never cached.

    Args:
        governor_id: Identity shared by every cooperating instance
        correction_algorithm: Callable or CorrectionAlgorithm mapping the
            coefficient to an interval in milliseconds
        redis_client: Client to use (defaults to the process-wide client)

    Raises:
        InvalidArgumentError: if the id is empty or the algorithm is missing
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
        self._redis = redis_client if redis_client is not None else get_redis()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def correction_algorithm(self) -> AlgorithmLike:
        return self._correction_algorithm

    @property
    def redis_client(self) -> Redis:
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

    # -------------------------------------------------------------------------
    # Coefficient
    # -------------------------------------------------------------------------

    def read_coefficient(self) -> float:
        """Current shared coefficient; 0.0 when it was never set."""
        value = self._redis.get(self.coefficient_key)
        if value is None:
            return 0.0
        return float(value)

    def increment_coefficient(self) -> int:
        """Atomically add one to the shared coefficient."""
        value: int = self._redis.incr(self.coefficient_key)
        logger.debug(f"Incremented coefficient for '{self._id}' to {value}")
        return value

    def decrement_coefficient(self) -> int:
        """Atomically subtract one from the shared coefficient.

        There is no floor; the coefficient may go negative.
        """
        value: int = self._redis.decr(self.coefficient_key)
        logger.debug(f"Decremented coefficient for '{self._id}' to {value}")
        return value

    # -------------------------------------------------------------------------
    # Interval
    # -------------------------------------------------------------------------

    def calculate_interval(self) -> int:
        """Polling interval in milliseconds for the current coefficient.

        The algorithm result is truncated toward zero. Results of zero or
        below become 1. Errors raised by the algorithm, or a result that
        int() rejects, propagate.
        """
        return clamp_interval(self._compute(self.read_coefficient()))

    # -------------------------------------------------------------------------
    # Lock
    # -------------------------------------------------------------------------

    def try_lock(self, action: LockAction | None = None) -> bool:
        """Run action if no other instance holds the lock.

        The lock is taken with a single SET NX PX whose TTL is the current
        interval. It is never deleted: it expires on its own, also when
        action raises.

        Args:
            action: Called with this governor once the lock is acquired

        Returns:
            True if the lock was acquired and action completed,
            False if another instance holds the lock

        Raises:
            InvalidArgumentError: if action is missing or not callable
        """
        if action is None or not callable(action):
            raise InvalidArgumentError("try_lock requires a callable action")

        ttl_ms = self.calculate_interval()
        acquired = self._redis.set(self.lock_key, LOCK_MARKER, nx=True, px=ttl_ms)
        if not acquired:
            logger.debug(f"Lock for '{self._id}' is held elsewhere")
            return False

        logger.debug(f"Acquired lock for '{self._id}' for {ttl_ms}ms")
        with LogContext(governor_id=self._id):
            action(self)
        return True

    def lock_ttl(self) -> int:
        """Remaining lock lifetime in milliseconds.

        Follows PTTL: -2 when no lock is held, -1 when the key has no expiry.
        """
        ttl: int = self._redis.pttl(self.lock_key)
        return ttl
