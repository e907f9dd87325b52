"""Implementation of the 'init' command."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from release_bump.config import CONFIG_FILENAME, CONFIG_TEMPLATE

if TYPE_CHECKING:
    from rich.console import Console


def run_init(path: str | None, dry_run: bool, console: Console, err_console: Console) -> None:
    """Write a starter release-bump.toml.

    Args:
        path: Config file or directory to create it in; defaults to cwd
        dry_run: Only report what would be created
        console: Console for standard output
        err_console: Console for error output
    """
    target = Path(path) if path else Path.cwd()
    if target.is_dir():
        target = target / CONFIG_FILENAME

    console.print(f"Will create a new config file at [bold]{target}[/]")

    if target.exists():
        console.print(f"[yellow]A file already exists at {target}, not doing anything[/]")
        return

    if dry_run:
        console.print("[yellow]Dry run is active, not creating a config file[/]")
        return

    try:
        target.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as e:
        err_console.print(
            f"[red]Failed to create file at {target}:[/] {e}\n"
            "Check if the location is actually writeable by the user"
        )
        raise SystemExit(1) from e

    console.print(f"[green]✓[/] Created a config file at [bold]{target}[/]")
