"""CLI entry point for offline-map-storage.

Invoked as::

    offline-maps [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m offline_map_storage.cli.main

Commands
--------
- version  — Show version information
- list     — List stored maps
- show     — Print the content of a map
- import   — Save a file as an offline map
- delete   — Remove a map
"""
from __future__ import annotations

import asyncio
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from offline_map_storage.adapter import NEW_MAP_ID, OfflineAdapter
from offline_map_storage.config import StorageConfig, build_adapter
from offline_map_storage.errors import AdapterError, OfflineStorageError

console = Console()


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def _make_config(
    config_file: str | None,
    backend: str | None,
    path: str | None,
    prefix: str | None,
) -> StorageConfig:
    """Merge the optional YAML config file with explicit command-line options.

    Options given on the command line take precedence over the file.
    """
    base = StorageConfig.from_yaml(config_file) if config_file else StorageConfig()
    overrides = {
        key: value
        for key, value in {"backend": backend, "path": path, "prefix": prefix}.items()
        if value is not None
    }
    return StorageConfig.model_validate({**base.model_dump(), **overrides})


def _format_timestamp(seconds: int) -> str:
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="offline-map-storage")
@click.option(
    "--backend",
    default=None,
    type=click.Choice(["memory", "filesystem", "sqlite", "redis"], case_sensitive=False),
    help="Key-value store to use.  [default: filesystem]",
)
@click.option("--path", default=None, help="Storage directory or SQLite database file.")
@click.option("--prefix", default=None, help="Identifier namespace.  [default: offline]")
@click.option(
    "--config",
    "config_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="YAML configuration file.",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    backend: str | None,
    path: str | None,
    prefix: str | None,
    config_file: str | None,
    log_level: str,
) -> None:
    """Store and retrieve maps in local storage."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    try:
        config = _make_config(config_file, backend, path, prefix)
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        sys.exit(2)
    ctx.obj["config"] = config


def _adapter(ctx: click.Context) -> OfflineAdapter:
    adapter = ctx.obj.get("adapter")
    if adapter is None:
        adapter = build_adapter(ctx.obj["config"])
        ctx.obj["adapter"] = adapter
    return adapter


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show version information."""
    from offline_map_storage import __version__

    console.print(f"[bold]offline-map-storage[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


@cli.command(name="list")
@click.pass_context
def list_command(ctx: click.Context) -> None:
    """List stored maps, most recently modified first."""
    try:
        entries = _adapter(ctx).index.list()
    except OfflineStorageError as exc:
        console.print(f"[red]Cannot read catalog:[/red] {exc}")
        sys.exit(1)

    if not entries:
        console.print("[yellow]No maps stored.[/yellow]")
        return

    table = Table(title="Offline maps", show_lines=False)
    table.add_column("Map ID", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Modified", justify="right")
    ordered = sorted(entries.items(), key=lambda item: item[1].modified_at, reverse=True)
    for map_id, info in ordered:
        table.add_row(map_id, info.description, _format_timestamp(info.modified_at))
    console.print(table)


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------


@cli.command(name="show")
@click.argument("map_id")
@click.pass_context
def show_command(ctx: click.Context, map_id: str) -> None:
    """Print the stored content of MAP_ID."""
    try:
        loaded = asyncio.run(_adapter(ctx).load_map(map_id))
    except AdapterError as exc:
        console.print(f"[red]Cannot load {map_id}:[/red] {exc.reason}")
        sys.exit(1)

    if isinstance(loaded.content, str):
        click.echo(loaded.content)
    else:
        click.echo(json.dumps(loaded.content, indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# import
# ---------------------------------------------------------------------------


@cli.command(name="import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--map-id",
    default=NEW_MAP_ID,
    show_default=True,
    help="Identifier to overwrite; 'new' allocates one.",
)
@click.pass_context
def import_command(ctx: click.Context, file: Path, map_id: str) -> None:
    """Save FILE as an offline map, using its name as the description."""
    content = file.read_text(encoding="utf-8")
    try:
        saved_id = asyncio.run(_adapter(ctx).save_map(content, map_id, file.name))
    except AdapterError as exc:
        console.print(f"[red]Import failed:[/red] {exc.reason}")
        sys.exit(1)
    console.print(f"[green]Map saved:[/green] {saved_id}")


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


@cli.command(name="delete")
@click.argument("map_id")
@click.pass_context
def delete_command(ctx: click.Context, map_id: str) -> None:
    """Remove MAP_ID, including content left without a catalog entry."""
    try:
        removed = _adapter(ctx).index.remove(map_id)
    except OfflineStorageError as exc:
        console.print(f"[red]Cannot delete {map_id}:[/red] {exc}")
        sys.exit(1)
    if not removed:
        console.print(f"[red]Map not found:[/red] {map_id}")
        sys.exit(1)
    console.print(f"[green]Map deleted:[/green] {map_id}")


if __name__ == "__main__":
    cli()
