"""Git repository access through the git command line."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from release_bump.core.version import SemanticVersion
from release_bump.exceptions import GitError, VersionParseError
from release_bump.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = get_logger(__name__)

# Field and record separators for `git log --format`
_FS = "\x1f"
_RS = "\x1e"
_LOG_FORMAT = f"%H{_FS}%an{_FS}%ae{_FS}%aI{_FS}%B{_RS}"


@dataclass(frozen=True)
class Commit:
    """A commit as returned by git log."""

    sha: str
    message: str
    author_name: str = ""
    author_email: str = ""
    date: datetime | None = None

    @property
    def summary(self) -> str:
        return self.message.strip().split("\n", 1)[0].strip()

    @property
    def body(self) -> str | None:
        parts = self.message.strip().split("\n", 1)
        if len(parts) < 2 or not parts[1].strip():
            return None
        return parts[1].strip()


@dataclass(frozen=True)
class Tag:
    name: str
    sha: str


class GitRepository:
    """Thin wrapper over the git CLI for a single repository."""

    def __init__(self, path: Path | str) -> None:
        toplevel = self._run_in(Path(path), "rev-parse", "--show-toplevel")
        self.path = Path(toplevel)

    @staticmethod
    def _run_in(cwd: Path, *args: str) -> str:
        try:
            result = subprocess.run(
                ["git", *args],
                capture_output=True,
                text=True,
                check=True,
                cwd=cwd,
            )
        except FileNotFoundError as e:
            raise GitError("git executable not found") from e
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {' '.join(args)} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        return result.stdout.strip()

    def _run(self, *args: str) -> str:
        logger.debug("Running git %s", " ".join(args))
        return self._run_in(self.path, *args)

    def get_latest_tag(self, prefix: str = "") -> Tag | None:
        """Return the most recent tag named ``{prefix}MAJOR.MINOR.PATCH``.

        Tags matching the prefix whose remainder is not a valid version
        are ignored.
        """
        output = self._run(
            "tag",
            "--list",
            f"{prefix}*",
            "--sort=-creatordate",
            "--format=%(refname:short)%09%(objectname)",
        )
        for line in output.splitlines():
            name, _, sha = line.partition("\t")
            try:
                SemanticVersion.parse(name[len(prefix) :])
            except VersionParseError:
                logger.debug("Ignoring tag %s", name)
                continue
            return Tag(name=name, sha=sha)
        return None

    def get_commits_since_tag(self, tag: Tag | None, subpath: str = ".") -> list[Commit]:
        """List commits after tag (or all commits) that touch subpath."""
        revision = f"{tag.name}..HEAD" if tag else "HEAD"
        output = self._run("log", f"--format={_LOG_FORMAT}", revision, "--", subpath)

        commits = []
        for record in output.split(_RS):
            record = record.strip("\n")
            if not record:
                continue
            sha, author_name, author_email, date, message = record.split(_FS, 4)
            commits.append(
                Commit(
                    sha=sha,
                    message=message,
                    author_name=author_name,
                    author_email=author_email,
                    date=datetime.fromisoformat(date),
                )
            )
        return commits

    def is_dirty(self) -> bool:
        return bool(self._run("status", "--porcelain"))

    def commit_release(self, version: SemanticVersion | str, paths: Iterable[Path | str]) -> str:
        """Stage paths and commit them; returns the new commit sha."""
        self._run("add", "--", *(str(p) for p in paths))
        self._run("commit", "-m", f"chore(release): {version}")
        sha = self._run("rev-parse", "HEAD")
        logger.info("Created release commit %s", sha[:8])
        return sha

    def tag_release(self, prefix: str, version: SemanticVersion | str, sha: str) -> Tag:
        """Create an annotated release tag on sha."""
        name = f"{prefix}{version}"
        self._run("tag", "-a", name, "-m", f"Release {name}", sha)
        logger.info("Created tag %s", name)
        return Tag(name=name, sha=sha)
