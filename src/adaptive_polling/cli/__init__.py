"""Operator CLI for adaptive polling governors.

Provides command-line interface using Typer:
- adaptive-polling status: Show coefficient and lock state for an id
- adaptive-polling coefficient incr|decr: Adjust the shared coefficient
- adaptive-polling interval: Preview the interval of a linear governor

Usage:
    adaptive-polling --help
    adaptive-polling status job1
    adaptive-polling --redis-url redis://cache:6379/0 coefficient incr job1
    adaptive-polling interval job1 --base-ms 5000 --step-ms 1000
"""

from __future__ import annotations

import typer

from adaptive_polling.cli.coefficient_cmd import app as coefficient_app
from adaptive_polling.cli.interval_cmd import interval
from adaptive_polling.cli.status_cmd import status
from adaptive_polling.config import settings
from adaptive_polling.observability.logging import configure_logging

app = typer.Typer(
    name="adaptive-polling",
    help="Inspect and adjust adaptive polling governors",
    no_args_is_help=True,
)

app.command(name="status")(status)
app.add_typer(coefficient_app, name="coefficient")
app.command(name="interval")(interval)


@app.callback()
def callback(
    ctx: typer.Context,
    redis_url: str | None = typer.Option(
        None,
        "--redis-url",
        help="Redis URL (defaults to REDIS_URL or redis://localhost:6379/0)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log Redis round trips",
    ),
) -> None:
    """Inspect and adjust adaptive polling governors."""
    configure_logging(
        json_format=settings.log_json,
        level="DEBUG" if verbose else settings.log_level,
    )
    ctx.obj = redis_url


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
