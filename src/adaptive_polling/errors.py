"""Exceptions raised by adaptive_polling.

Redis client errors and errors raised by correction algorithms are not
wrapped; they reach the caller unchanged.
"""

from __future__ import annotations


class GovernorError(Exception):
    """Base class for errors raised by this package."""


class InvalidArgumentError(GovernorError, ValueError):
    """A governor was constructed or invoked with a missing or unusable argument."""
