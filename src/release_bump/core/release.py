"""Release orchestration.

A release reads the current version from the first configured manifest,
classifies the commits since the last tag, bumps the version once and
writes the same resolved version into every manifest, in order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from release_bump.core.commits import classify
from release_bump.core.version import BumpLevel, SemanticVersion
from release_bump.exceptions import DocumentFormatError, ManifestIOError, VersionNotFoundError
from release_bump.logging import get_logger
from release_bump.project.manifest import read_manifest_version, update_manifest

if TYPE_CHECKING:
    import logging
    from collections.abc import Sequence

    from release_bump.config.models import ManifestFile, ReleaseBumpConfig
    from release_bump.core.commits import CommitLike
    from release_bump.exceptions import ManifestError
    from release_bump.project.manifest import ManifestUpdate

_MANIFEST_ERRORS = (VersionNotFoundError, ManifestIOError, DocumentFormatError)


@dataclass(frozen=True)
class ReleasePlan:
    """The version transition computed for a set of commits."""

    current: SemanticVersion
    next: SemanticVersion
    level: BumpLevel
    commit_count: int

    @property
    def is_release(self) -> bool:
        return self.level > BumpLevel.NONE


@dataclass(frozen=True)
class ManifestFailure:
    manifest: ManifestFile
    error: ManifestError


@dataclass
class ReleaseResult:
    """What happened to each manifest during apply()."""

    plan: ReleasePlan
    updates: list[ManifestUpdate] = field(default_factory=list)
    failures: list[ManifestFailure] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return any(update.changed for update in self.updates)

    @property
    def changed_files(self) -> list[Path]:
        return [update.path for update in self.updates if update.changed]


class ReleaseOrchestrator:
    """Computes and applies a version bump across configured manifests."""

    def __init__(
        self,
        config: ReleaseBumpConfig,
        base_dir: Path | str,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self.base_dir = Path(base_dir)
        self.log = logger or get_logger(__name__)

    def current_version(self) -> SemanticVersion:
        """Parse the version held by the first manifest.

        All manifests are assumed to start out in agreement, so only the
        first one is consulted. With no manifests configured the version
        defaults to 0.0.0.
        """
        if not self.config.files:
            self.log.warning("No manifest files configured; starting from 0.0.0")
            return SemanticVersion.default()
        raw = read_manifest_version(self.config.files[0], self.base_dir, log=self.log)
        return SemanticVersion.parse(raw)

    def plan(self, commits: Sequence[CommitLike]) -> ReleasePlan:
        """Work out the next version for commits.

        Raises:
            VersionParseError: If the first manifest holds a malformed version
        """
        current = self.current_version()
        if not commits:
            self.log.info("Found no commits since the last tag")
            return ReleasePlan(
                current=current, next=current.copy(), level=BumpLevel.NONE, commit_count=0
            )

        level = classify(
            commits,
            self.config.commits.patch_tokens,
            self.config.commits.minor_tokens,
            log=self.log,
        )
        next_version = current.copy().bump(level)
        self.log.info("Bump level: %s => next version: %s", level, next_version)
        return ReleasePlan(
            current=current, next=next_version, level=level, commit_count=len(commits)
        )

    def apply(self, plan: ReleasePlan, *, dry_run: bool = False) -> ReleaseResult:
        """Write plan.next into every configured manifest.

        Nothing is written when the plan's level is NONE. A manifest that
        cannot be updated aborts the run unless on_manifest_error is
        "skip", in which case it is recorded and the rest continue.
        """
        result = ReleaseResult(plan=plan)
        if not plan.is_release:
            self.log.info("No relevant commits found; nothing to do here")
            return result

        version = plan.next.to_string()
        for manifest in self.config.files:
            try:
                update = update_manifest(
                    manifest, self.base_dir, version, dry_run=dry_run, log=self.log
                )
            except _MANIFEST_ERRORS as e:
                if self.config.on_manifest_error == "abort":
                    raise
                self.log.warning("Skipping %s: %s", manifest.path, e)
                result.failures.append(ManifestFailure(manifest=manifest, error=e))
                continue
            result.updates.append(update)
        return result

    def run(self, commits: Sequence[CommitLike], *, dry_run: bool = False) -> ReleaseResult:
        return self.apply(self.plan(commits), dry_run=dry_run)
