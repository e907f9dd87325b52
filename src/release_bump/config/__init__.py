"""Configuration management for release-bump."""

from __future__ import annotations

from release_bump.config.loader import CONFIG_FILENAME, CONFIG_TEMPLATE, load_config
from release_bump.config.models import CommitsConfig, ManifestFile, ReleaseBumpConfig

__all__ = [
    "CONFIG_FILENAME",
    "CONFIG_TEMPLATE",
    "CommitsConfig",
    "ManifestFile",
    "ReleaseBumpConfig",
    "load_config",
]
