"""Implementation of the 'bump' command.

The bump command classifies commits since the last release tag, writes
the next version into every configured manifest, then commits and tags.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.panel import Panel

from release_bump.config import load_config
from release_bump.config.loader import find_config_file
from release_bump.core.release import ReleaseOrchestrator
from release_bump.exceptions import ReleaseBumpError
from release_bump.logging import get_logger
from release_bump.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

logger = get_logger(__name__)


def _split_tokens(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [token for token in (t.strip() for t in value.split(",")) if token]


def run_bump(
    path: str | None,
    config_path: str | None,
    tag_prefix: str | None,
    dry_run: bool,
    patch_tokens: str | None,
    minor_tokens: str | None,
    on_error: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the bump command.

    Args:
        path: Optional path to the (sub)project; defaults to cwd
        config_path: Explicit config file; searched upwards from path if None
        tag_prefix: Overrides the configured tag prefix
        dry_run: Report what would change without touching files or git
        patch_tokens: Comma separated override for patch tokens
        minor_tokens: Comma separated override for minor tokens
        on_error: Overrides on_manifest_error ("abort" or "skip")
        console: Console for standard output
        err_console: Console for error output
    """
    project_path = Path(path) if path else Path.cwd()

    # Load configuration; manifest paths are relative to the config file
    try:
        config_file = Path(config_path) if config_path else project_path
        if not config_file.is_file():
            config_file = find_config_file(config_file)
        config = load_config(config_file)
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error loading config:[/] {e}")
        raise SystemExit(1) from e

    overrides: dict[str, object] = {}
    if tag_prefix is not None:
        overrides["tag_prefix"] = tag_prefix
    if on_error is not None:
        overrides["on_manifest_error"] = on_error
    commit_overrides: dict[str, object] = {}
    if (tokens := _split_tokens(patch_tokens)) is not None:
        commit_overrides["patch_tokens"] = tokens
    if (tokens := _split_tokens(minor_tokens)) is not None:
        commit_overrides["minor_tokens"] = tokens
    if commit_overrides:
        overrides["commits"] = config.commits.model_copy(update=commit_overrides)
    if overrides:
        config = config.model_copy(update=overrides)

    # Initialize git repository
    try:
        repo = GitRepository(project_path)
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1) from e

    console.print(f"Looking for a git repo at (or above) [bold]{project_path}[/]")

    try:
        latest_tag = repo.get_latest_tag(config.tag_prefix)
        if latest_tag is None:
            console.print("[yellow]No matching tag found, considering all commits[/]")
        else:
            console.print(f"Found tag [bold]{latest_tag.name}[/], will use that as base")
        commits = repo.get_commits_since_tag(latest_tag, config.subpath)
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error reading git history:[/] {e}")
        raise SystemExit(1) from e

    if not commits:
        console.print("[yellow]Found no commits since the last tag. Nothing to do.[/]")
        return

    for commit in commits:
        logger.debug("commit %s: %s", commit.sha[:8], commit.summary)

    orchestrator = ReleaseOrchestrator(config, config_file.parent)
    try:
        plan = orchestrator.plan(commits)
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error getting version:[/] {e}")
        raise SystemExit(1) from e

    if not plan.is_release:
        console.print(
            "[yellow]No relevant commits found that have a matching format; nothing to do here.[/]"
        )
        return

    mode_str = "[yellow]DRY-RUN[/]" if dry_run else "[green]EXECUTING[/]"
    console.print(
        f"\n{mode_str} - bump level [bold]{plan.level}[/]: "
        f"[cyan]{plan.current}[/] -> [green]{plan.next}[/]\n"
    )

    try:
        result = orchestrator.apply(plan, dry_run=dry_run)
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error updating manifest:[/] {e}")
        raise SystemExit(1) from e

    for update in result.updates:
        mark = "[green]✓[/]" if update.changed else "[dim]-[/]"
        console.print(f"  {mark} {update.path}: {update.old_value} -> {update.new_value}")
    for failure in result.failures:
        err_console.print(f"  [red]✗[/] {failure.manifest.path}: {failure.error}")

    if dry_run:
        console.print(
            Panel(
                f"Would release [green]{plan.next}[/] "
                f"as tag [cyan]{config.tag_prefix}{plan.next}[/]",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        return

    if not result.changed:
        console.print("[yellow]No manifest changed; not committing or tagging.[/]")
        return

    try:
        sha = repo.commit_release(plan.next, result.changed_files)
        tag = repo.tag_release(config.tag_prefix, plan.next, sha)
    except ReleaseBumpError as e:
        err_console.print(f"[red]Error committing release:[/] {e}")
        raise SystemExit(1) from e

    console.print(
        Panel(
            f"[green]Released version {plan.next}![/]\n\n"
            f"Commit: [cyan]{sha[:8]}[/]\n"
            f"Tag: [cyan]{tag.name}[/]\n\n"
            f"Push with: [cyan]git push --follow-tags[/]",
            title="[green]Bump Complete[/]",
            border_style="green",
        )
    )
