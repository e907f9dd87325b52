"""Line-based version editing for manifests without a structured parser.

The manifest is handled as a list of lines. A pattern locates the first
line carrying the version (capture group 1 is the version itself) and
that one line is re-rendered; every other line is left untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_bump.exceptions import LookupFailure, VersionNotFoundError
from release_bump.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)

_VERSION = r"(\d+\.\d+\.\d+)"


@dataclass(frozen=True)
class LinePattern:
    """A version-locating regex and how to render a replacement.

    Without a template only the captured version is swapped out; with one
    the whole match is replaced by ``template.format(version=...)``.
    """

    name: str
    regex: re.Pattern[str]
    template: str | None = None

    @classmethod
    def compile(cls, pattern: str, name: str = "custom") -> LinePattern:
        return cls(name=name, regex=re.compile(pattern))

    def render(self, line: str, match: re.Match[str], version: str) -> str:
        if self.template is None:
            return line[: match.start(1)] + version + line[match.end(1) :]
        # leading indentation inside the match is kept
        matched = match.group(0)
        start = match.start() + len(matched) - len(matched.lstrip())
        return line[:start] + self.template.format(version=version) + line[match.end() :]


BUILTIN_PATTERNS: dict[str, LinePattern] = {
    "cargo": LinePattern(
        "cargo",
        re.compile(rf'^\s*version\s*=\s*"{_VERSION}"'),
        'version = "{version}"',
    ),
    "package-json": LinePattern(
        "package-json",
        re.compile(rf'"version"\s*:\s*"{_VERSION}"'),
        '"version": "{version}"',
    ),
    "pom": LinePattern(
        "pom",
        re.compile(rf"<version>{_VERSION}</version>"),
        "<version>{version}</version>",
    ),
    "python": LinePattern(
        "python",
        re.compile(rf"^\s*__version__\s*=\s*[\"']{_VERSION}[\"']"),
        '__version__ = "{version}"',
    ),
}


def resolve_pattern(key: str) -> LinePattern:
    """Return the built-in pattern named key, or compile key as a regex."""
    if key in BUILTIN_PATTERNS:
        return BUILTIN_PATTERNS[key]
    return LinePattern.compile(key)


@dataclass(frozen=True)
class LineMatch:
    index: int
    value: str
    match: re.Match[str]


def split_lines(content: str) -> list[str]:
    return content.splitlines()


def detect_newline(content: str) -> str:
    """Return the line separator used by content, CRLF or LF."""
    return "\r\n" if "\r\n" in content else "\n"


def find(lines: Sequence[str], pattern: LinePattern) -> LineMatch:
    """Find the first line matching pattern.

    Raises:
        VersionNotFoundError: PATTERN_NOT_MATCHED if no line matches,
            CAPTURE_MISSING if a line matches without capturing a version
    """
    for index, line in enumerate(lines):
        match = pattern.regex.search(line)
        if match is None:
            continue
        value = match.group(1) if pattern.regex.groups else None
        if value is None:
            raise VersionNotFoundError(LookupFailure.CAPTURE_MISSING, f"line {index + 1}")
        logger.debug("Matched %r at line %d", value, index + 1)
        return LineMatch(index=index, value=value, match=match)
    raise VersionNotFoundError(LookupFailure.PATTERN_NOT_MATCHED, pattern.regex.pattern)


def replace(lines: Sequence[str], index: int, new_line: str) -> list[str]:
    """Return a copy of lines with lines[index] replaced by new_line."""
    updated = list(lines)
    updated[index] = new_line
    return updated


def join_lines(lines: Sequence[str], newline: str = "\n") -> str:
    """Join lines into file content that always ends with a newline."""
    return newline.join([*lines, ""])
