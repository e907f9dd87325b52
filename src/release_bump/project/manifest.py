"""Reading and updating the version of a configured manifest file.

Each manifest has one of three formats. ``toml`` and ``json`` manifests
are parsed and edited through their dotted key; ``text`` manifests are
edited line by line through a pattern.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from release_bump.exceptions import DocumentFormatError, VersionNotFoundError
from release_bump.logging import get_logger
from release_bump.project import document, lines
from release_bump.project.files import EditResult, atomic_write, read_manifest

if TYPE_CHECKING:
    import logging

    from release_bump.config.models import ManifestFile

logger = get_logger(__name__)


class ManifestFormat(str, Enum):
    TOML = "toml"
    JSON = "json"
    TEXT = "text"

    @property
    def is_structured(self) -> bool:
        return self is not ManifestFormat.TEXT


@dataclass(frozen=True)
class ManifestUpdate:
    """Outcome of updating one manifest."""

    path: Path
    old_value: str
    new_value: str
    changed: bool


def _resolve(manifest: ManifestFile, base_dir: Path) -> Path:
    path = Path(manifest.path)
    return path if path.is_absolute() else base_dir / path


def _with_context(error: Exception, manifest: ManifestFile, path: Path) -> Exception:
    if isinstance(error, VersionNotFoundError):
        return VersionNotFoundError(error.reason, error.detail, path=path, key=manifest.key)
    return DocumentFormatError(str(error), path=path, key=manifest.key)


def _read_value(manifest: ManifestFile, path: Path, content: str) -> str:
    """Locate the current version in a manifest's content."""
    fmt = ManifestFormat(manifest.format)
    try:
        if fmt.is_structured:
            parsed = document.parse_document(content, document.DocumentFormat(fmt.value))
            return document.read(parsed.root, document.split_path(manifest.key))
        pattern = lines.resolve_pattern(manifest.key)
        return lines.find(lines.split_lines(content), pattern).value
    except (VersionNotFoundError, DocumentFormatError) as e:
        raise _with_context(e, manifest, path) from e


def _render_update(
    manifest: ManifestFile, path: Path, content: str, version: str
) -> tuple[str, str]:
    """Render content with version in place of the current one.

    Returns the current value and the new content.
    """
    fmt = ManifestFormat(manifest.format)
    try:
        if fmt.is_structured:
            parsed = document.parse_document(content, document.DocumentFormat(fmt.value))
            key_path = document.split_path(manifest.key)
            current = document.read(parsed.root, key_path)
            document.write(parsed.root, key_path, version)
            return current, parsed.dump()

        pattern = lines.resolve_pattern(manifest.key)
        text_lines = lines.split_lines(content)
        found = lines.find(text_lines, pattern)
        new_line = pattern.render(text_lines[found.index], found.match, version)
        new_content = lines.join_lines(
            lines.replace(text_lines, found.index, new_line),
            lines.detect_newline(content),
        )
        return found.value, new_content
    except (VersionNotFoundError, DocumentFormatError) as e:
        raise _with_context(e, manifest, path) from e


def read_manifest_version(
    manifest: ManifestFile,
    base_dir: Path,
    *,
    log: logging.Logger | None = None,
) -> str:
    """Read the raw version string from a manifest.

    Raises:
        ManifestIOError: If the file cannot be read
        DocumentFormatError: If a structured manifest fails to parse
        VersionNotFoundError: If the key or pattern does not locate a version
    """
    log = log or logger
    path = _resolve(manifest, base_dir)
    content, _ = read_manifest(path)
    current = _read_value(manifest, path, content)
    log.debug("Found version %s in %s", current, path)
    return current


def update_manifest(
    manifest: ManifestFile,
    base_dir: Path,
    version: str,
    *,
    dry_run: bool = False,
    log: logging.Logger | None = None,
) -> ManifestUpdate:
    """Write version into a manifest.

    The file is left alone when its content would not change or when
    dry_run is set.

    Raises:
        ManifestIOError: If the file cannot be read or written
        DocumentFormatError: If a structured manifest fails to parse
        VersionNotFoundError: If the key or pattern does not locate a version
    """
    log = log or logger
    path = _resolve(manifest, base_dir)
    content, mode = read_manifest(path)
    current, new_content = _render_update(manifest, path, content, version)

    changed = new_content != content
    if not changed:
        log.info("%s already at %s", path, version)
    elif dry_run:
        log.info("Would update %s: %s -> %s", path, current, version)
    else:
        atomic_write(path, EditResult(content=new_content, mode=mode))
        log.info("Updated %s: %s -> %s", path, current, version)

    return ManifestUpdate(path=path, old_value=current, new_value=version, changed=changed)
