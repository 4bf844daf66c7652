"""Correction algorithms for adaptive polling.

A correction algorithm maps the shared coefficient of a governor to a desired
polling interval in milliseconds. Any plain callable works:

    Governor("job1", lambda cc: cc * 1000 + 5000)

Objects exposing ``compute(coefficient)`` are accepted as well, which is how
the stock algorithms below are written:

    Governor("job1", LinearCorrection(base_ms=5000, step_ms=1000))

Algorithms are expected to be pure functions of the coefficient. The governor
does not enforce this.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Union, runtime_checkable

from adaptive_polling.errors import InvalidArgumentError


@runtime_checkable
class CorrectionAlgorithm(Protocol):
    """Strategy mapping a coefficient to an interval in milliseconds."""

    def compute(self, coefficient: float) -> float:
        """Return the desired interval for the given coefficient."""
        ...


AlgorithmLike = Union[CorrectionAlgorithm, Callable[[float], float]]


def resolve_algorithm(algorithm: AlgorithmLike | None) -> Callable[[float], float]:
    """Return the callable that evaluates an algorithm.

    Raises:
        InvalidArgumentError: if algorithm is None or cannot be called
    """
    if algorithm is None:
        raise InvalidArgumentError("correction_algorithm is required")
    if isinstance(algorithm, CorrectionAlgorithm):
        return algorithm.compute
    if callable(algorithm):
        return algorithm
    raise InvalidArgumentError(
        f"correction_algorithm must be callable or define compute(), got {type(algorithm).__name__}"
    )


@dataclass(frozen=True)
class LinearCorrection:
    """Interval grows by step_ms for every unit of coefficient.

    Negative coefficients shrink the interval below base_ms.
    """

    base_ms: float
    step_ms: float

    def compute(self, coefficient: float) -> float:
        return self.base_ms + coefficient * self.step_ms


@dataclass(frozen=True)
class ExponentialCorrection:
    """Interval scales by factor for every unit of coefficient.

    Args:
        base_ms: Interval at coefficient 0
        factor: Multiplier per unit of coefficient
        max_ms: Upper bound on the result (None = unbounded)
    """

    base_ms: float
    factor: float = 2.0
    max_ms: float | None = None

    def compute(self, coefficient: float) -> float:
        try:
            interval = self.base_ms * self.factor**coefficient
        except OverflowError:
            # Coefficient too large for a float power
            if self.max_ms is None:
                raise
            return self.max_ms
        if self.max_ms is not None:
            interval = min(interval, self.max_ms)
        return interval
