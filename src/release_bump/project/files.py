"""Manifest file I/O.

Writes go through a temporary file in the target's directory which is
then copied over the target, after which the original permission bits
are restored.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import stat
import tempfile
from dataclasses import dataclass
from typing import TYPE_CHECKING

from release_bump.exceptions import ManifestIOError
from release_bump.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

logger = get_logger(__name__)


@dataclass(frozen=True)
class EditResult:
    """New content for a manifest along with its original permission bits."""

    content: str
    mode: int


def read_manifest(path: Path) -> tuple[str, int]:
    """Read a manifest and its permission bits.

    Line endings are returned untranslated so that a CRLF manifest is
    written back with CRLF.

    Raises:
        ManifestIOError: If the file cannot be read, stat'ed or decoded as UTF-8
    """
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
        with path.open(encoding="utf-8", newline="") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestIOError(f"Failed to read manifest: {e}", path=path) from e
    return content, mode


def atomic_write(path: Path, result: EditResult) -> None:
    """Replace the content of path with result.content.

    Args:
        path: Manifest to overwrite
        result: Serialized content and permission bits to restore

    Raises:
        ManifestIOError: If any step of the write fails
    """
    try:
        tmp = tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            newline="",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
    except OSError as e:
        raise ManifestIOError(f"Failed to create temporary file: {e}", path=path) from e

    tmp_path = tmp.name
    try:
        with tmp:
            tmp.write(result.content)
            tmp.flush()
            os.fsync(tmp.fileno())
        shutil.copyfile(tmp_path, path)
        os.chmod(path, result.mode)
        logger.debug("Wrote %d bytes to %s (mode %o)", len(result.content), path, result.mode)
    except OSError as e:
        raise ManifestIOError(f"Failed to write manifest: {e}", path=path) from e
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_path)
