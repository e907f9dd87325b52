"""Exception hierarchy for release-bump.

Every error raised by the package derives from ReleaseBumpError so the
CLI can report it uniformly. Errors tied to a manifest carry the file
path and the key or pattern that was attempted.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class ReleaseBumpError(Exception):
    """Base exception for release-bump."""


# =============================================================================
# Version errors
# =============================================================================


class ParseFailure(str, Enum):
    """Why a version string was rejected."""

    TOO_FEW_PARTS = "too few parts"
    TOO_MANY_PARTS = "too many parts"
    NON_NUMERIC_PART = "non-numeric part"


class VersionParseError(ReleaseBumpError):
    """A version string is not exactly three non-negative integers."""

    def __init__(self, text: str, reason: ParseFailure) -> None:
        self.text = text
        self.reason = reason
        super().__init__(
            f"Invalid version {text!r}: expected MAJOR.MINOR.PATCH, found {reason.value}"
        )


# =============================================================================
# Manifest errors
# =============================================================================


class LookupFailure(str, Enum):
    """Why a version field could not be located."""

    MISSING_FIELD = "field missing"
    NOT_AN_INDEX = "not an array index"
    INDEX_OUT_OF_BOUNDS = "index out of bounds"
    PAST_LEAF = "path continues past a leaf"
    NOT_A_STRING = "target is not a string"
    PATTERN_NOT_MATCHED = "no line matched the pattern"
    CAPTURE_MISSING = "pattern matched without a version capture"


class ManifestError(ReleaseBumpError):
    """Base class for errors scoped to a single manifest file."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | str | None = None,
        key: str | None = None,
    ) -> None:
        self.path = path
        self.key = key
        context = []
        if path is not None:
            context.append(f"file={path}")
        if key is not None:
            context.append(f"key={key}")
        if context:
            message = f"{message} ({', '.join(context)})"
        super().__init__(message)


class VersionNotFoundError(ManifestError):
    """The configured key or pattern did not locate a version field."""

    def __init__(
        self,
        reason: LookupFailure,
        detail: str = "",
        *,
        path: Path | str | None = None,
        key: str | None = None,
    ) -> None:
        self.reason = reason
        self.detail = detail
        message = f"Could not locate version: {reason.value}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, path=path, key=key)


class ManifestIOError(ManifestError):
    """Reading, writing or restoring permissions on a manifest failed."""


class DocumentFormatError(ManifestError):
    """A manifest failed to parse as its declared format."""


# =============================================================================
# Configuration errors
# =============================================================================


class ConfigError(ReleaseBumpError):
    """Base class for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """No configuration file was found."""


class ConfigValidationError(ConfigError):
    """The configuration file is malformed or has invalid values."""


# =============================================================================
# Git errors
# =============================================================================


class GitError(ReleaseBumpError):
    """A git command failed."""

    def __init__(self, message: str, stderr: str | None = None) -> None:
        self.stderr = stderr
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
