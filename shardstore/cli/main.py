"""
shardstore CLI entry point.

Commands:
    shardstore get KEY       — Print or export a stored blob
    shardstore put KEY FILE  — Store a file's contents
    shardstore rm KEY        — Remove a key
    shardstore ls PREFIX     — List every key under a prefix
    shardstore rm-range PREFIX — Remove every key under a prefix

Keys are written with "/" between segments: ab12cd34/snapshot
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable

import typer
from rich.console import Console
from rich.table import Table

from shardstore import __version__
from shardstore.core.config import ShardStoreConfig
from shardstore.core.errors import ConfigError, ShardStoreError
from shardstore.core.log import setup_logging
from shardstore.core.types import StorageKey
from shardstore.store.filesystem import FileSystemStorageAdapter

app = typer.Typer(
    name="shardstore",
    help="shardstore — inspect and maintain a sharded blob store.",
    add_completion=False,
)

console = Console()

PREVIEW_BYTES = 32


@app.callback()
def main(
    ctx: typer.Context,
    base_dir: str = typer.Option(
        None, "--base-dir", "-d", help="Store directory (overrides config)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
) -> None:
    """Load configuration and logging for every command."""
    overrides = {"storage": {"base_directory": base_dir}} if base_dir else None
    try:
        config = ShardStoreConfig.load(overrides=overrides)
    except ConfigError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(2)

    setup_logging(
        log_dir=config.get_log_dir(),
        console_level=logging.DEBUG if verbose else config.logging.console_level,
        file_level=config.logging.file_level,
    )
    ctx.obj = config


@app.command()
def version() -> None:
    """Show the shardstore version."""
    console.print(f"shardstore {__version__}")


@app.command()
def get(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key, e.g. ab12cd34/snapshot"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the blob here"),
) -> None:
    """Load a blob."""
    storage_key = _parse_key(key)
    data = _execute(ctx.obj, lambda adapter: adapter.load(storage_key))

    if data is None:
        console.print(f"[yellow]Not found: {key}[/yellow]")
        raise typer.Exit(1)

    if output is not None:
        output.write_bytes(data)
        console.print(f"Wrote {len(data)} bytes to {output}")
        return

    preview = data[:PREVIEW_BYTES].hex(" ")
    more = " …" if len(data) > PREVIEW_BYTES else ""
    console.print(f"{key}: {len(data)} bytes")
    console.print(f"[dim]{preview}{more}[/dim]")


@app.command()
def put(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key, e.g. ab12cd34/snapshot"),
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File to store"),
) -> None:
    """Store a file's contents under a key."""
    storage_key = _parse_key(key)
    data = file.read_bytes()
    _execute(ctx.obj, lambda adapter: adapter.save(storage_key, data))
    console.print(f"Saved {len(data)} bytes to {key}")


@app.command()
def rm(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key, e.g. ab12cd34/snapshot"),
) -> None:
    """Remove a key."""
    storage_key = _parse_key(key)
    _execute(ctx.obj, lambda adapter: adapter.remove(storage_key))
    console.print(f"Removed {key}")


@app.command("ls")
def list_range(
    ctx: typer.Context,
    prefix: str = typer.Argument(..., help="Key prefix, e.g. ab12cd34"),
) -> None:
    """List every key under a prefix."""
    storage_prefix = _parse_key(prefix)
    chunks = _execute(ctx.obj, lambda adapter: adapter.load_range(storage_prefix))

    if not chunks:
        console.print(f"[dim]No keys under {prefix}[/dim]")
        return

    table = Table(title=f"Keys under {prefix}")
    table.add_column("Key", style="cyan")
    table.add_column("Size", justify="right")
    for chunk in chunks:
        size = "[red]unreadable[/red]" if chunk.data is None else str(len(chunk.data))
        table.add_row(str(chunk.key), size)
    console.print(table)


@app.command("rm-range")
def remove_range(
    ctx: typer.Context,
    prefix: str = typer.Argument(..., help="Key prefix, e.g. ab12cd34"),
) -> None:
    """Remove every key under a prefix."""
    storage_prefix = _parse_key(prefix)
    _execute(ctx.obj, lambda adapter: adapter.remove_range(storage_prefix))
    console.print(f"Removed everything under {prefix}")


# ━━━ Helpers ━━━


def _parse_key(text: str) -> StorageKey:
    """Parse a "/"-separated key, exiting with a message if it is malformed."""
    try:
        return StorageKey.parse(text.strip("/"))
    except ShardStoreError as e:
        console.print(f"[red]Invalid key '{text}': {e.message}[/red]")
        raise typer.Exit(2)


def _execute(
    config: ShardStoreConfig,
    action: Callable[[FileSystemStorageAdapter], Awaitable[Any]],
) -> Any:
    """Run one adapter operation to completion."""

    async def runner() -> Any:
        async with FileSystemStorageAdapter.from_config(config) as adapter:
            return await action(adapter)

    try:
        return asyncio.run(runner())
    except ShardStoreError as e:
        console.print(f"[red]{e.message}[/red]")
        raise typer.Exit(2)
