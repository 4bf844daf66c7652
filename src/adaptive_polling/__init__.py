"""Adaptive polling governors backed by Redis.

Many instances of a worker share one identity. Through Redis they agree on
how long to wait before polling again and on which instance may act now:

    from adaptive_polling import Governor

    governor = Governor("job1", lambda cc: cc * 1000 + 5000)
    governor.try_lock(lambda gov: do_work())
"""

from adaptive_polling.aio import AsyncGovernor
from adaptive_polling.algorithms import (
    CorrectionAlgorithm,
    ExponentialCorrection,
    LinearCorrection,
    resolve_algorithm,
)
from adaptive_polling.errors import GovernorError, InvalidArgumentError
from adaptive_polling.governor import LOCK_MARKER, Governor
from adaptive_polling.keys import (
    BASE_NAMESPACE,
    COEFFICIENT_SUFFIX,
    LOCK_SUFFIX,
    GovernorKeys,
)

__all__ = [
    # Governors
    "Governor",
    "AsyncGovernor",
    "LOCK_MARKER",
    # Algorithms
    "CorrectionAlgorithm",
    "LinearCorrection",
    "ExponentialCorrection",
    "resolve_algorithm",
    # Keys
    "GovernorKeys",
    "BASE_NAMESPACE",
    "COEFFICIENT_SUFFIX",
    "LOCK_SUFFIX",
    # Errors
    "GovernorError",
    "InvalidArgumentError",
]

__version__ = "0.1.0"
