"""Shared fixtures for release-bump tests."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

import pytest

from release_bump.config.models import ManifestFile, ReleaseBumpConfig
from release_bump.vcs.git import Commit

if TYPE_CHECKING:
    from pathlib import Path


CARGO_TOML = """\
# Workspace crate
[package]
name = "demo"
version = "1.2.3"  # managed by release-bump
edition = "2021"

[dependencies]
serde = { version = "1.0.0", features = ["derive"] }
"""

PACKAGE_JSON = """\
{
  "name": "demo",
  "version": "1.2.3",
  "private": true
}
"""

POM_XML = """\
<project>
  <modelVersion>4.0.0</modelVersion>
  <artifactId>demo</artifactId>
  <version>1.2.3</version>
</project>
"""


def make_commit(message: str, sha: str = "abc123") -> Commit:
    return Commit(sha, message, "Test", "test@test.com", datetime.now())


@pytest.fixture
def feat_commit() -> Commit:
    return make_commit("feat: add user authentication", "feat123")


@pytest.fixture
def fix_commit() -> Commit:
    return make_commit("fix(core): handle empty input", "fix123")


@pytest.fixture
def breaking_commit() -> Commit:
    return make_commit("fix: drop legacy API\n\nBREAKING CHANGE: old API removed", "brk123")


@pytest.fixture
def sample_commits(feat_commit: Commit, fix_commit: Commit) -> list[Commit]:
    return [
        feat_commit,
        fix_commit,
        make_commit("docs: update readme", "docs123"),
        make_commit("chore: bump deps", "chore123"),
    ]


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project with a Cargo.toml, package.json and pom.xml at 1.2.3."""
    (tmp_path / "Cargo.toml").write_text(CARGO_TOML)
    (tmp_path / "package.json").write_text(PACKAGE_JSON)
    (tmp_path / "pom.xml").write_text(POM_XML)
    return tmp_path


@pytest.fixture
def project_config() -> ReleaseBumpConfig:
    return ReleaseBumpConfig(
        tag_prefix="v",
        files=[
            ManifestFile(path="Cargo.toml", key="package.version", type="toml"),
            ManifestFile(path="package.json", key="version", type="json"),
            ManifestFile(path="pom.xml", key="pom", type="text"),
        ],
    )
