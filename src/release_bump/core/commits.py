"""Conventional commit classification.

Each commit is resolved to a BumpLevel on its own; the release level is
the maximum over all commits since the last tag.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from release_bump.core.version import BumpLevel
from release_bump.logging import get_logger

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Sequence

BREAKING_MARKER = "BREAKING CHANGE:"

DEFAULT_PATCH_TOKENS = ("fix",)
DEFAULT_MINOR_TOKENS = ("feat", "feature")

logger = get_logger(__name__)


class CommitLike(Protocol):
    """Anything with a commit summary line and an optional body."""

    @property
    def summary(self) -> str: ...

    @property
    def body(self) -> str | None: ...


def classify_commit(
    commit: CommitLike,
    patch_tokens: Iterable[str],
    minor_tokens: Iterable[str],
    *,
    log: logging.Logger | None = None,
) -> BumpLevel:
    """Resolve a single commit to a bump level.

    A breaking-change marker in the body wins over any summary token,
    and patch tokens are checked before minor tokens.
    """
    log = log or logger
    summary = commit.summary
    if commit.body and BREAKING_MARKER in commit.body:
        log.debug("Found a breaking change in %r", summary)
        return BumpLevel.MAJOR
    if any(summary.startswith(token) for token in patch_tokens):
        log.debug("Found a patch level indicator in %r", summary)
        return BumpLevel.PATCH
    if any(summary.startswith(token) for token in minor_tokens):
        log.debug("Found a minor level indicator in %r", summary)
        return BumpLevel.MINOR
    return BumpLevel.NONE


def classify(
    commits: Sequence[CommitLike],
    patch_tokens: Iterable[str] = DEFAULT_PATCH_TOKENS,
    minor_tokens: Iterable[str] = DEFAULT_MINOR_TOKENS,
    *,
    log: logging.Logger | None = None,
) -> BumpLevel:
    """Calculate the bump level for a set of commits.

    Args:
        commits: Commits since the last release; must not be empty
        patch_tokens: Summary prefixes that trigger a patch bump
        minor_tokens: Summary prefixes that trigger a minor bump
        log: Logger to report per-commit decisions to

    Returns:
        The highest BumpLevel among the commits

    Raises:
        ValueError: If commits is empty
    """
    if not commits:
        raise ValueError("classify() requires at least one commit; check for no commits first")

    patch_tokens = tuple(patch_tokens)
    minor_tokens = tuple(minor_tokens)
    return max(classify_commit(c, patch_tokens, minor_tokens, log=log) for c in commits)
