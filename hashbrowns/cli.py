"""Command line interface."""

import asyncio
import sys

import click

from hashbrowns.content_store import ContentStore, build_content_store, derive_key
from hashbrowns.core.config import Settings
from hashbrowns.core.logging import configure_logging
from hashbrowns.errors import NotFound, StorageUnavailable


def _read_content(content: str) -> str:
    if content == "-":
        return sys.stdin.read()
    return content


def _persistent_store() -> ContentStore:
    settings = Settings()
    if settings.STORE_BACKEND == "memory":
        # Entries would vanish when the command exits
        raise click.UsageError(
            "The memory backend does not persist between commands; "
            "set STORE_BACKEND to redis or sqlite"
        )
    return build_content_store(settings)


async def _put(store: ContentStore, content: str) -> str:
    await store.open()
    try:
        entry = await store.store_content(content)
    finally:
        await store.close()
    return entry.key


async def _get(store: ContentStore, key: str) -> str:
    await store.open()
    try:
        return await store.get(key)
    finally:
        await store.close()


@click.group()
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    help="Log level for messages written to stderr",
)
def cli(log_level: str) -> None:
    """Hash Browns content store commands."""
    configure_logging(level=log_level, json_logs=False)


@cli.command()
@click.argument("content")
def derive(content: str) -> None:
    """Print the key for CONTENT ("-" reads stdin)."""
    click.echo(derive_key(_read_content(content)))


@cli.command()
@click.argument("content")
def put(content: str) -> None:
    """Store CONTENT in the configured backend ("-" reads stdin)."""
    text = _read_content(content)
    if not text:
        raise click.UsageError("Refusing to store empty content")

    store = _persistent_store()
    try:
        key = asyncio.run(_put(store, text))
    except StorageUnavailable as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)
    click.echo(key)


@cli.command()
@click.argument("key")
def get(key: str) -> None:
    """Print the content stored under KEY."""
    store = _persistent_store()
    try:
        value = asyncio.run(_get(store, key))
    except NotFound as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)
    except StorageUnavailable as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)
    click.echo(value)


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=8000, type=int, help="Port to bind to")
def serve(host: str, port: int) -> None:
    """Run the HTTP server."""
    import uvicorn

    uvicorn.run(
        "hashbrowns.main:create_app_from_env", host=host, port=port, factory=True
    )
