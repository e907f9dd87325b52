"""Semantic version handling.

Only plain MAJOR.MINOR.PATCH versions are supported; pre-release and
build metadata are rejected at parse time rather than truncated.
"""

from __future__ import annotations

from enum import IntEnum

from release_bump.exceptions import ParseFailure, VersionParseError


class BumpLevel(IntEnum):
    """Severity of a set of changes, ordered NONE < PATCH < MINOR < MAJOR."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    def __str__(self) -> str:
        return self.name.lower()


class SemanticVersion:
    """A mutable three-component semantic version."""

    __slots__ = ("major", "minor", "patch")

    def __init__(self, major: int = 0, minor: int = 0, patch: int = 0) -> None:
        if min(major, minor, patch) < 0:
            raise ValueError(f"Version components must be non-negative: {major}.{minor}.{patch}")
        self.major = major
        self.minor = minor
        self.patch = patch

    @classmethod
    def parse(cls, text: str) -> SemanticVersion:
        """Parse a version string.

        Args:
            text: Version string such as "1.2.3"

        Returns:
            Parsed SemanticVersion

        Raises:
            VersionParseError: If text is not exactly three dot-separated
                non-negative integers
        """
        parts = text.split(".")
        if len(parts) < 3:
            raise VersionParseError(text, ParseFailure.TOO_FEW_PARTS)
        if len(parts) > 3:
            raise VersionParseError(text, ParseFailure.TOO_MANY_PARTS)
        if not all(part.isascii() and part.isdigit() for part in parts):
            raise VersionParseError(text, ParseFailure.NON_NUMERIC_PART)
        major, minor, patch = (int(part) for part in parts)
        return cls(major, minor, patch)

    from_string = parse

    @classmethod
    def default(cls) -> SemanticVersion:
        """Version used when no manifest has been read yet."""
        return cls(0, 0, 0)

    def bump(self, level: BumpLevel) -> SemanticVersion:
        """Advance the version in place by the given level.

        Lower-significance components reset on minor and major bumps.
        """
        if level == BumpLevel.MAJOR:
            self.major += 1
            self.minor = 0
            self.patch = 0
        elif level == BumpLevel.MINOR:
            self.minor += 1
            self.patch = 0
        elif level == BumpLevel.PATCH:
            self.patch += 1
        return self

    def copy(self) -> SemanticVersion:
        return SemanticVersion(self.major, self.minor, self.patch)

    def to_string(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"SemanticVersion({self.major}, {self.minor}, {self.patch})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return (self.major, self.minor, self.patch) == (other.major, other.minor, other.patch)

    __hash__ = None  # type: ignore[assignment]
