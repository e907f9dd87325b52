"""Path-addressed access to structured manifests.

A manifest key such as ``package.version`` or ``workspace.members.0.version``
is split on dots and walked through the parsed document one element at a
time. Tables are indexed by field name, arrays by base-10 index; the same
walk is used for TOML (via tomlkit, which keeps comments and layout) and
JSON documents.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from release_bump.exceptions import DocumentFormatError, LookupFailure, VersionNotFoundError
from release_bump.logging import get_logger

logger = get_logger(__name__)

_INDENT_RE = re.compile(r"^([ \t]+)\S", re.MULTILINE)
_KEY_SEPARATOR_RE = re.compile(r'"([ \t]*:[ \t]*)')


class DocumentFormat(str, Enum):
    """Structured formats that have a parser."""

    TOML = "toml"
    JSON = "json"


@dataclass
class ParsedDocument:
    """A parsed manifest, owned by a single edit."""

    format: DocumentFormat
    root: Any
    source: str

    def dump(self) -> str:
        return dump_document(self)


def split_path(key: str) -> list[str]:
    return key.split(".")


def _step(node: Any, path: Sequence[str], index: int) -> tuple[Any, str | int]:
    """Resolve path[index] against node, returning the child and its key."""
    element = path[index]
    where = ".".join(path[: index + 1])

    if isinstance(node, Mapping):
        if element not in node:
            raise VersionNotFoundError(LookupFailure.MISSING_FIELD, where)
        return node[element], element

    if isinstance(node, Sequence) and not isinstance(node, str):
        if not (element.isascii() and element.isdigit()):
            raise VersionNotFoundError(LookupFailure.NOT_AN_INDEX, where)
        position = int(element, 10)
        if position >= len(node):
            raise VersionNotFoundError(
                LookupFailure.INDEX_OUT_OF_BOUNDS, f"{where} (length {len(node)})"
            )
        return node[position], position

    raise VersionNotFoundError(LookupFailure.PAST_LEAF, where)


def _read(node: Any, path: Sequence[str], index: int) -> str:
    if index == len(path):
        if not isinstance(node, str):
            raise VersionNotFoundError(
                LookupFailure.NOT_A_STRING, f"{'.'.join(path)} is {type(node).__name__}"
            )
        return str(node)
    child, _ = _step(node, path, index)
    return _read(child, path, index + 1)


def _write(node: Any, path: Sequence[str], index: int, value: str) -> Any:
    # The target is replaced from its parent, so the recursion hands the
    # replacement back up one level.
    if index == len(path):
        return value
    child, key = _step(node, path, index)
    replacement = _write(child, path, index + 1, value)
    if replacement is not child:
        node[key] = replacement
    return node


def read(root: Any, path: Sequence[str]) -> str:
    """Return the string scalar found at path.

    Raises:
        VersionNotFoundError: If the path cannot be followed or does not
            end at a string
    """
    value = _read(root, path, 0)
    logger.debug("Read %r at %s", value, ".".join(path))
    return value


def write(root: Any, path: Sequence[str], value: str) -> Any:
    """Replace the node at path with a string scalar and return the root.

    Only the target leaf is touched; sibling values and, for TOML,
    comments and whitespace are left as they were.

    Raises:
        VersionNotFoundError: If the path cannot be followed
    """
    if not path:
        raise VersionNotFoundError(LookupFailure.MISSING_FIELD, "empty path")
    if not isinstance(root, (MutableMapping, list)):
        raise VersionNotFoundError(LookupFailure.PAST_LEAF, "document root is a scalar")
    logger.debug("Writing %r at %s", value, ".".join(path))
    return _write(root, path, 0, value)


# =============================================================================
# Codecs
# =============================================================================


def _detect_json_indent(text: str) -> str | int | None:
    match = _INDENT_RE.search(text)
    if match is None:
        return None
    indent = match.group(1)
    if "\t" in indent:
        return "\t"
    return len(indent)


def _detect_json_separators(text: str, indent: str | int | None) -> tuple[str, str]:
    match = _KEY_SEPARATOR_RE.search(text)
    key_separator = match.group(1) if match else ": "
    if indent is not None:
        return ",", key_separator
    return ("," if key_separator == ":" else ", "), key_separator


def parse_document(text: str, fmt: DocumentFormat) -> ParsedDocument:
    """Parse manifest text in the given format.

    Raises:
        DocumentFormatError: If the text is not valid for the format
    """
    try:
        if fmt == DocumentFormat.TOML:
            root: Any = tomlkit.parse(text)
        else:
            root = json.loads(text)
    except (TOMLKitError, json.JSONDecodeError) as e:
        raise DocumentFormatError(f"Failed to parse {fmt.value} document: {e}") from e
    return ParsedDocument(format=fmt, root=root, source=text)


def dump_document(document: ParsedDocument) -> str:
    """Serialize a parsed document back to text."""
    if document.format == DocumentFormat.TOML:
        return tomlkit.dumps(document.root)

    source = document.source
    indent = _detect_json_indent(source)
    content = json.dumps(
        document.root,
        indent=indent,
        separators=_detect_json_separators(source, indent),
        ensure_ascii="\\u" in source,
    )
    newline = "\r\n" if "\r\n" in source else "\n"
    if newline != "\n":
        content = content.replace("\n", newline)
    if source.endswith("\n"):
        content += newline
    return content
