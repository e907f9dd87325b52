"""Typer application for the release-bump command line."""

from typing import Annotated, Optional

import typer
from rich.console import Console

from release_bump import __version__
from release_bump.cli.commands.bump import run_bump
from release_bump.cli.commands.init import run_init
from release_bump.logging import init_logging

app = typer.Typer(
    name="release-bump",
    help="Bump semantic versions in project manifests from conventional commits.",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"release-bump {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    init_logging("DEBUG" if verbose else None, console=err_console)


@app.command()
def bump(
    path: Annotated[
        Optional[str], typer.Argument(help="Path to the subproject to release")
    ] = None,
    config: Annotated[
        Optional[str], typer.Option("--config", "-c", help="Path to release-bump.toml")
    ] = None,
    tag: Annotated[
        Optional[str], typer.Option("--tag", "-t", help="Prefix of the tags to be matched")
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-d", help="Don't change files or create commits/tags"),
    ] = False,
    patch_tokens: Annotated[
        Optional[str],
        typer.Option(help="Tokens that trigger a patch level bump; comma separated"),
    ] = None,
    minor_tokens: Annotated[
        Optional[str],
        typer.Option(help="Tokens that trigger a minor level bump; comma separated"),
    ] = None,
    on_error: Annotated[
        Optional[str],
        typer.Option(help="What to do when a manifest can't be updated: abort or skip"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Bump the version of all configured manifests, then commit and tag."""
    if on_error is not None and on_error not in ("abort", "skip"):
        err_console.print(f"[red]Invalid --on-error value:[/] {on_error}")
        raise typer.Exit(1)
    if verbose:
        init_logging("DEBUG", console=err_console)
    run_bump(
        path=path,
        config_path=config,
        tag_prefix=tag,
        dry_run=dry_run,
        patch_tokens=patch_tokens,
        minor_tokens=minor_tokens,
        on_error=on_error,
        console=console,
        err_console=err_console,
    )


@app.command()
def init(
    path: Annotated[
        Optional[str], typer.Argument(help="Where to create release-bump.toml")
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-d", help="Don't create the file")
    ] = False,
) -> None:
    """Create a starter configuration file."""
    run_init(path=path, dry_run=dry_run, console=console, err_console=err_console)
