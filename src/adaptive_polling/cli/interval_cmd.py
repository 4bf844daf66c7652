"""CLI command for previewing a polling interval.

Usage:
    adaptive-polling interval job1 --base-ms 5000 --step-ms 1000
"""

from __future__ import annotations

import typer
from redis.exceptions import RedisError

from adaptive_polling.algorithms import LinearCorrection
from adaptive_polling.cli.common import open_client
from adaptive_polling.governor import Governor


def interval(
    ctx: typer.Context,
    governor_id: str = typer.Argument(..., metavar="ID", help="Governor id"),
    base_ms: float = typer.Option(
        ...,
        "--base-ms",
        help="Interval at coefficient 0",
    ),
    step_ms: float = typer.Option(
        ...,
        "--step-ms",
        help="Interval change per unit of coefficient",
    ),
) -> None:
    """Print the interval in milliseconds for the current coefficient.

    Uses base_ms + coefficient * step_ms, truncated and clamped to at least 1.
    """
    governor = Governor(
        governor_id,
        LinearCorrection(base_ms=base_ms, step_ms=step_ms),
        redis_client=open_client(ctx),
    )
    try:
        value = governor.calculate_interval()
    except RedisError as e:
        typer.echo(f"Redis error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(value))
