# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import typer

from tiercache.cli.commands import cache as cache_cmd

app = typer.Typer(
    name="tiercache",
    help="TTL cache with a remote backend and local fallback",
    no_args_is_help=True,
)

app.add_typer(cache_cmd.app, name="cache", help="Inspect and edit cache entries")


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", help="Override TIERCACHE_LOG_LEVEL"),
) -> None:
    from tiercache.core.config import get_settings
    from tiercache.core.logging import setup_logging

    settings = get_settings()
    setup_logging(log_level or settings.log_level, settings.log_format)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
) -> None:
    """Start the tiercache API server."""
    import uvicorn

    from tiercache.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "tiercache.api.app:create_app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from tiercache import __version__

    typer.echo(f"tiercache v{__version__}")
