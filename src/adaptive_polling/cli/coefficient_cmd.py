"""CLI commands for adjusting a shared coefficient.

Usage:
    adaptive-polling coefficient incr job1
    adaptive-polling coefficient decr job1
"""

from __future__ import annotations

import typer
from redis.exceptions import RedisError

from adaptive_polling.cli.common import open_client
from adaptive_polling.governor import Governor

app = typer.Typer(help="Adjust the shared coefficient of a governor id")


def _governor(ctx: typer.Context, governor_id: str) -> Governor:
    # Adjusting the coefficient never evaluates the algorithm
    return Governor(governor_id, lambda cc: cc, redis_client=open_client(ctx))


@app.command("incr")
def increment(
    ctx: typer.Context,
    governor_id: str = typer.Argument(..., metavar="ID", help="Governor id"),
) -> None:
    """Add one to the shared coefficient and print the new value."""
    try:
        value = _governor(ctx, governor_id).increment_coefficient()
    except RedisError as e:
        typer.echo(f"Redis error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(value))


@app.command("decr")
def decrement(
    ctx: typer.Context,
    governor_id: str = typer.Argument(..., metavar="ID", help="Governor id"),
) -> None:
    """Subtract one from the shared coefficient and print the new value."""
    try:
        value = _governor(ctx, governor_id).decrement_coefficient()
    except RedisError as e:
        typer.echo(f"Redis error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(value))
