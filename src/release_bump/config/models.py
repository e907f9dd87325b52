"""Configuration models for release-bump.

The configuration lives in ``release-bump.toml``::

    tag_prefix = "v"
    subpath = "."

    [[files]]
    path = "Cargo.toml"
    key = "package.version"
    type = "toml"
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from release_bump.core.commits import DEFAULT_MINOR_TOKENS, DEFAULT_PATCH_TOKENS
from release_bump.project.lines import BUILTIN_PATTERNS
from release_bump.project.manifest import ManifestFormat


class ManifestFile(BaseModel):
    """A file whose version field is kept in sync with releases."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    path: str = Field(
        min_length=1,
        description="Path relative to the directory holding release-bump.toml",
    )
    key: str = Field(
        min_length=1,
        description="Dotted key for toml/json, pattern name or regex for text",
    )
    format: ManifestFormat = Field(alias="type")

    @model_validator(mode="after")
    def _check_text_pattern(self) -> ManifestFile:
        if self.format != ManifestFormat.TEXT or self.key in BUILTIN_PATTERNS:
            return self
        try:
            compiled = re.compile(self.key)
        except re.error as e:
            raise ValueError(f"Invalid pattern {self.key!r}: {e}") from e
        if compiled.groups < 1:
            raise ValueError(
                f"Pattern {self.key!r} needs a capture group for the version "
                f"(or use one of: {', '.join(sorted(BUILTIN_PATTERNS))})"
            )
        return self


class CommitsConfig(BaseModel):
    """Which commit summary prefixes trigger which bump."""

    patch_tokens: list[str] = Field(default_factory=lambda: list(DEFAULT_PATCH_TOKENS))
    minor_tokens: list[str] = Field(default_factory=lambda: list(DEFAULT_MINOR_TOKENS))

    @field_validator("patch_tokens", "minor_tokens")
    @classmethod
    def _no_empty_tokens(cls, value: list[str]) -> list[str]:
        # an empty prefix would match every commit
        if any(not token for token in value):
            raise ValueError("Tokens must not be empty strings")
        return value


class ReleaseBumpConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    tag_prefix: str = ""
    subpath: str = "."
    files: list[ManifestFile] = Field(default_factory=list)
    commits: CommitsConfig = Field(default_factory=CommitsConfig)
    on_manifest_error: Literal["abort", "skip"] = "abort"

    @property
    def tag_pattern(self) -> str:
        return f"{self.tag_prefix}*"
