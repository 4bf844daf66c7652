"""CLI command for inspecting a governor's shared state.

Usage:
    adaptive-polling status job1
    adaptive-polling status job1 --format json
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypedDict

import typer
from redis.exceptions import RedisError

from adaptive_polling.cli.common import open_client
from adaptive_polling.keys import GovernorKeys

if TYPE_CHECKING:
    from redis import Redis


class GovernorStatus(TypedDict):
    id: str
    namespace: str
    coefficient_key: str
    lock_key: str
    coefficient: float
    locked: bool
    lock_ttl_ms: int | None


def status(
    ctx: typer.Context,
    governor_id: str = typer.Argument(
        ...,
        metavar="ID",
        help="Governor id",
    ),
    output_format: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: text, json",
    ),
) -> None:
    """Show the shared coefficient and lock record of a governor id.

    Reads the keys directly; no correction algorithm is needed.
    """
    import json

    from rich.console import Console

    console = Console()

    try:
        result = read_status(open_client(ctx), governor_id)
    except RedisError as e:
        console.print(f"[red]Redis error:[/red] {e}")
        raise typer.Exit(code=1)
    except ValueError as e:
        console.print(f"[red]Invalid coefficient:[/red] {e}")
        raise typer.Exit(code=1)

    if output_format == "json":
        typer.echo(json.dumps(result, indent=2))
        return

    from rich.table import Table

    table = Table(title=f"Governor {governor_id}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Namespace", result["namespace"])
    table.add_row("Coefficient key", result["coefficient_key"])
    table.add_row("Lock key", result["lock_key"])
    table.add_row("Coefficient", f"{result['coefficient']:g}")
    if result["locked"]:
        ttl = result["lock_ttl_ms"]
        left = f" ({ttl}ms left)" if ttl is not None else ""
        table.add_row("Lock", f"[yellow]held[/yellow]{left}")
    else:
        table.add_row("Lock", "[green]free[/green]")
    console.print(table)


def read_status(client: Redis, governor_id: str) -> GovernorStatus:
    """Collect the Redis-side state of one governor id."""
    keys = GovernorKeys(governor_id)

    with client.pipeline(transaction=False) as pipe:
        pipe.get(keys.coefficient_key)
        pipe.pttl(keys.lock_key)
        raw_coefficient, pttl = pipe.execute()

    # PTTL: -2 missing, -1 no expiry
    locked = pttl != -2
    return {
        "id": governor_id,
        "namespace": keys.namespace,
        "coefficient_key": keys.coefficient_key,
        "lock_key": keys.lock_key,
        "coefficient": float(raw_coefficient) if raw_coefficient is not None else 0.0,
        "locked": locked,
        "lock_ttl_ms": pttl if pttl >= 0 else None,
    }
