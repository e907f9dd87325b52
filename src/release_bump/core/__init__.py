"""Core business logic for release-bump.

This module contains the fundamental building blocks:
- Semantic version parsing and bumping
- Conventional commit classification
- Release orchestration across manifest files
"""

from __future__ import annotations

from release_bump.core.commits import classify, classify_commit
from release_bump.core.release import ReleaseOrchestrator, ReleasePlan, ReleaseResult
from release_bump.core.version import BumpLevel, SemanticVersion

__all__ = [
    # Version
    "BumpLevel",
    # Release
    "ReleaseOrchestrator",
    "ReleasePlan",
    "ReleaseResult",
    "SemanticVersion",
    # Commits
    "classify",
    "classify_commit",
]
