# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Cache inspection CLI commands.

With Redis disabled (``TIERCACHE_USE_REDIS`` unset) every command works on
a local store that lives only as long as the CLI process, so a value set by
one invocation is gone by the next.
"""

from __future__ import annotations

import asyncio
import json
from typing import Annotated

import typer

from tiercache.cache.base import TTLMode

app = typer.Typer()

_LOCAL_ONLY_NOTICE = (
    "Note: Redis is disabled (TIERCACHE_USE_REDIS); "
    "the local cache lives only for this process."
)


def _warn_if_local_only() -> None:
    from tiercache.cache.service import get_cache_service

    if not get_cache_service().remote_enabled:
        typer.echo(_LOCAL_ONLY_NOTICE, err=True)


@app.command()
def get(key: Annotated[str, typer.Argument(help="Cache key")]) -> None:
    """Print the cached value for KEY as JSON."""
    value = asyncio.run(_async_get(key))
    if value is None:
        typer.echo(f"No entry for {key!r}.", err=True)
        _warn_if_local_only()
        raise typer.Exit(code=1)
    typer.echo(json.dumps(value, indent=2))


async def _async_get(key: str) -> object:
    from tiercache.cache.service import get_cache_service

    return await get_cache_service().get(key)


@app.command(name="set")
def set_(
    key: Annotated[str, typer.Argument(help="Cache key")],
    value: Annotated[str, typer.Argument(help="JSON value (plain text is stored as a string)")],
    ttl: Annotated[float | None, typer.Option("--ttl", help="Time-to-live")] = None,
    mode: Annotated[TTLMode, typer.Option("--mode", help="TTL interpretation")] = TTLMode.EX,
) -> None:
    """Store VALUE under KEY.

    Without Redis the value is only kept until this command exits.
    """
    try:
        parsed: object = json.loads(value)
    except ValueError:
        parsed = value
    asyncio.run(_async_set(key, parsed, ttl, mode))
    typer.echo(f"Stored {key!r}.")
    _warn_if_local_only()


async def _async_set(key: str, value: object, ttl: float | None, mode: TTLMode) -> None:
    from tiercache.cache.service import get_cache_service

    await get_cache_service().set(key, value, ttl=ttl, mode=mode)


@app.command()
def delete(key: Annotated[str, typer.Argument(help="Cache key")]) -> None:
    """Remove KEY from every tier."""
    asyncio.run(_async_delete(key))
    typer.echo(f"Deleted {key!r}.")
    _warn_if_local_only()


async def _async_delete(key: str) -> None:
    from tiercache.cache.service import get_cache_service

    await get_cache_service().delete(key)


@app.command()
def stats() -> None:
    """Show cache hit/miss counts and local size."""
    from rich.console import Console
    from rich.table import Table

    from tiercache.cache.service import get_cache_service

    service = get_cache_service()
    st = service.stats

    console = Console()
    table = Table(title="Cache Statistics")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Remote enabled", "yes" if service.remote_enabled else "no")
    table.add_row("Remote hits", str(st.remote_hits))
    table.add_row("Local hits", str(st.local_hits))
    table.add_row("Misses", str(st.misses))
    table.add_row("Remote errors", str(st.remote_errors))
    table.add_row("Hit Rate", f"{st.hit_rate:.2%}")
    table.add_row("Local entries", str(service.local.size()))

    console.print(table)
