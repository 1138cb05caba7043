"""splitjson CLI: inspect and edit a split JSON store.

Commands:
    splitjson init               create splitjson.toml + data dir
    splitjson read [--key K]     print the resolved record as JSON
    splitjson write [FILE]       persist a JSON object (FILE or stdin)
    splitjson keys               show which file backs each key
    splitjson check              report ambiguous ownership (exit 1 if any)
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TextIO

import click

from splitjson.adapter import SplitJSONAdapter
from splitjson.config import StoreConfig, init_config, load_config
from splitjson.models import Category
from splitjson.validator import validate_keys

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_cfg() -> StoreConfig:
    try:
        return load_config()
    except Exception as exc:
        raise click.ClickException(str(exc)) from exc


def _adapter(data_dir: str | None) -> SplitJSONAdapter:
    cfg = _load_cfg()
    if data_dir:
        cfg.data_dir = Path(data_dir)
    try:
        return SplitJSONAdapter.from_config(cfg)
    except (TypeError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc


_dir_option = click.option("--dir", "data_dir", default=None, help="Data directory (default: from splitjson.toml)")


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="splitjson")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output")
def cli(verbose: bool) -> None:
    """splitjson — one file per key record store."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(message)s",
    )


# ---------------------------------------------------------------------------
# splitjson init
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--root", default=".", show_default=True, help="Project root")
@click.option("--data-dir", default="data", show_default=True, help="Data directory, relative to root")
def init(root: str, data_dir: str) -> None:
    """Create splitjson.toml and the data directory."""
    root_path = Path(root).resolve()
    try:
        config_path = init_config(root_path, data_dir=data_dir)
        click.echo(f"Created {config_path}")
    except FileExistsError:
        click.echo("splitjson.toml already exists — skipping init")

    cfg = load_config(root_path)
    cfg.ensure_dirs()
    click.echo(f"Data dir : {cfg.data_dir}")


# ---------------------------------------------------------------------------
# splitjson read / write
# ---------------------------------------------------------------------------


@cli.command()
@_dir_option
@click.option("--key", "key", default=None, help="Print only this key")
def read(data_dir: str | None, key: str | None) -> None:
    """Print the resolved record as JSON."""
    adapter = _adapter(data_dir)
    try:
        data = adapter.read()
    except (OSError, ValueError, AttributeError) as exc:
        raise click.ClickException(str(exc)) from exc
    if key is not None:
        if key not in data:
            raise click.ClickException(f"no such key: {key}")
        data = data[key]
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


@cli.command()
@_dir_option
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
def write(data_dir: str | None, source: TextIO) -> None:
    """Persist a JSON object read from SOURCE (default: stdin)."""
    try:
        data = json.load(source)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise click.ClickException("top-level JSON value must be an object")

    adapter = _adapter(data_dir)
    keys = adapter.read_keys()
    skipped = sorted(k for k in data if keys.is_read_only(k))
    try:
        adapter.write(data)
    except OSError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Wrote {len(data) - len(skipped)} keys")
    if skipped:
        click.echo(f"Skipped read-only: {', '.join(skipped)}")


# ---------------------------------------------------------------------------
# splitjson keys / check
# ---------------------------------------------------------------------------


@cli.command()
@_dir_option
def keys(data_dir: str | None) -> None:
    """Show the winning source and write target for every key."""
    from rich.console import Console
    from rich.table import Table

    adapter = _adapter(data_dir)
    file_keys = adapter.read_keys()
    adapter.validate_keys(file_keys)

    console = Console()
    table = Table(title=f"splitjson — {adapter.dir_path}", show_header=True, header_style="bold")
    table.add_column("Key", no_wrap=True)
    table.add_column("Source", style="dim")
    table.add_column("Category")
    table.add_column("Write target")

    for key in sorted(file_keys.merged()):
        category = file_keys.category_of(key)
        source = adapter.source_for(key, file_keys)
        target = adapter.target_for(key, file_keys)
        table.add_row(
            key,
            source.name if source else "(default)",
            category.value,
            target.name if target else "[yellow]read-only[/yellow]",
        )

    if not file_keys.merged():
        table.add_row("[dim]no keys[/dim]", "", "", "")
    console.print(table)
    if not adapter.dynamic and any(p.suffix == ".hy" for p in adapter.dir_path.iterdir()):
        console.print(f"[yellow]⚠ .hy files ignored — install hy to use {Category.DYNAMIC_SCRIPT.value} keys[/yellow]")


@cli.command()
@_dir_option
def check(data_dir: str | None) -> None:
    """Report keys with more than one authoritative file."""
    adapter = _adapter(data_dir)
    diagnostics = validate_keys(adapter.read_keys())
    if not diagnostics:
        click.echo("OK")
        return
    for d in diagnostics:
        click.echo(f"{d.key}: {d.code} — {d.message}")
    sys.exit(1)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    cli(standalone_mode=True)


if __name__ == "__main__":
    main()
