"""CLI commands for the sync server.

Commands:
- serve: Run the HTTP API
- check: Verify the key-value store is reachable
"""

from __future__ import annotations

import asyncio

import typer
import uvicorn
from rich.console import Console

from kosync.config import ConfigError, ServerConfig, load_app_config
from kosync.db.store import RedisStore
from kosync.logging_config import configure_logging
from kosync.web.api import create_app

app = typer.Typer(
    name="kosync",
    help="Reading progress synchronization server for e-reader devices.",
    no_args_is_help=True,
)

console = Console()


def _load_config_or_exit(**overrides) -> ServerConfig:
    """Load config with CLI overrides applied, or exit with the error."""
    try:
        return load_app_config().with_overrides(**overrides)
    except ConfigError as e:
        console.print(f"[red]✗ Invalid configuration: {e}[/red]")
        raise typer.Exit(code=1)


async def _ping(redis_url: str) -> bool:
    store = RedisStore.from_url(redis_url)
    try:
        return await store.ping()
    finally:
        await store.close()


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on"),
    redis: str | None = typer.Option(
        None, "--redis", "-r", help="Redis URL for storage"
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, ..."),
    json_logs: bool | None = typer.Option(
        None, "--json-logs/--console-logs", help="Log format"
    ),
) -> None:
    """Run the sync server."""
    config = _load_config_or_exit(
        host=host,
        port=port,
        redis_url=redis,
        log_level=log_level,
        json_logs=json_logs,
    )

    try:
        configure_logging(config.log_level, json_logs=config.json_logs)
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Listening on {config.host}:{config.port}[/green]")
    console.print(f"  [dim]redis:[/dim] {config.redis_url}")

    api = create_app(redis_url=config.redis_url)
    uvicorn.run(
        api,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


@app.command()
def check(
    redis: str | None = typer.Option(
        None, "--redis", "-r", help="Redis URL for storage"
    ),
) -> None:
    """Check that the key-value store is reachable."""
    config = _load_config_or_exit(redis_url=redis)

    if asyncio.run(_ping(config.redis_url)):
        console.print(f"[green]✓ Store reachable:[/green] {config.redis_url}")
    else:
        console.print(f"[red]✗ Store unreachable:[/red] {config.redis_url}")
        raise typer.Exit(code=1)
