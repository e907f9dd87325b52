"""Locating and loading release-bump.toml."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from release_bump.config.models import ReleaseBumpConfig
from release_bump.exceptions import ConfigNotFoundError, ConfigValidationError
from release_bump.logging import get_logger

CONFIG_FILENAME = "release-bump.toml"

CONFIG_TEMPLATE = """\
# release-bump configuration

# Only tags starting with this prefix are considered releases.
tag_prefix = "v"

# Only commits touching this path (relative to the repository root) count.
subpath = "."

# What to do when a manifest cannot be updated: "abort" or "skip".
on_manifest_error = "abort"

[commits]
patch_tokens = ["fix"]
minor_tokens = ["feat", "feature"]

# The first file is the source of the current version. Paths are relative
# to the directory holding this file.
[[files]]
path = "pyproject.toml"
key = "project.version"
type = "toml"

# [[files]]
# path = "package.json"
# key = "version"
# type = "json"

# [[files]]
# path = "pom.xml"
# key = "pom"
# type = "text"
"""

logger = get_logger(__name__)


def find_config_file(start: Path | None = None) -> Path:
    """Find release-bump.toml in start or any of its parents.

    Raises:
        ConfigNotFoundError: If no configuration file is found
    """
    start = (start or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No {CONFIG_FILENAME} found in {start} or any parent directory")


def load_config_file(path: Path) -> dict[str, Any]:
    """Read and decode a TOML configuration file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Config file not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Failed to parse {path}: {e}") from e


def parse_config(data: dict[str, Any], source: Path | str = "<config>") -> ReleaseBumpConfig:
    """Validate raw configuration data.

    Raises:
        ConfigValidationError: If the data does not match the schema
    """
    try:
        return ReleaseBumpConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {source}:\n{e}") from e


def load_config(path: Path | None = None) -> ReleaseBumpConfig:
    """Load configuration from a file or by searching upwards from a directory.

    Args:
        path: Config file, directory to search from, or None for cwd

    Returns:
        Validated configuration
    """
    if path is not None and path.is_file():
        config_path = path
    else:
        config_path = find_config_file(path)

    logger.info("Parsing config file %s", config_path)
    config = parse_config(load_config_file(config_path), config_path)
    logger.debug("Parsed config: %r", config)
    return config
