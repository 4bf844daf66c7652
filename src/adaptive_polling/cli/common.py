"""Helpers shared by CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import redis
import typer

from adaptive_polling.store import get_redis

if TYPE_CHECKING:
    from redis import Redis


def open_client(ctx: typer.Context) -> Redis:
    """Client for the --redis-url given to the root command, else the default.

    A client built from --redis-url is closed when the command finishes.
    """
    redis_url = ctx.obj
    if redis_url:
        client = redis.from_url(redis_url)
        ctx.call_on_close(client.close)
        return client
    return get_redis()
