"""Tests for conventional commit classification."""

from __future__ import annotations

import pytest

from release_bump.core.commits import classify, classify_commit
from release_bump.core.version import BumpLevel, SemanticVersion
from release_bump.vcs.git import Commit
from tests.conftest import make_commit

PATCH = {"fix"}
MINOR = {"feat"}


class TestCommitMessage:
    """Tests for Commit.summary and Commit.body."""

    def test_summary_only(self):
        commit = make_commit("feat: add new feature")
        assert commit.summary == "feat: add new feature"
        assert commit.body is None

    def test_summary_and_body(self):
        commit = make_commit("feat: new feature\n\nBREAKING CHANGE: old API removed\n")
        assert commit.summary == "feat: new feature"
        assert commit.body == "BREAKING CHANGE: old API removed"


class TestClassifyCommit:
    """Tests for classify_commit()."""

    def test_fix_returns_patch(self, fix_commit: Commit):
        assert classify_commit(fix_commit, PATCH, MINOR) == BumpLevel.PATCH

    def test_feat_returns_minor(self, feat_commit: Commit):
        assert classify_commit(feat_commit, PATCH, MINOR) == BumpLevel.MINOR

    def test_breaking_body_returns_major(self, breaking_commit: Commit):
        """Breaking marker in the body overrides the summary token."""
        assert classify_commit(breaking_commit, PATCH, MINOR) == BumpLevel.MAJOR

    def test_breaking_in_summary_is_ignored(self):
        """Only the body is checked for the breaking marker."""
        commit = make_commit("docs: BREAKING CHANGE: nothing")
        assert classify_commit(commit, PATCH, MINOR) == BumpLevel.NONE

    def test_unmatched_returns_none(self):
        assert classify_commit(make_commit("docs: readme"), PATCH, MINOR) == BumpLevel.NONE

    def test_patch_checked_before_minor(self):
        """A summary starting with both tokens resolves to PATCH."""
        commit = make_commit("fixture: add test data")
        assert classify_commit(commit, {"fix"}, {"fixture"}) == BumpLevel.PATCH

    def test_prefix_not_whole_word(self):
        commit = make_commit("featurette: tiny feature")
        assert classify_commit(commit, PATCH, MINOR) == BumpLevel.MINOR

    def test_case_sensitive(self):
        commit = make_commit("Fix: capitalised")
        assert classify_commit(commit, PATCH, MINOR) == BumpLevel.NONE


class TestClassify:
    """Tests for classify()."""

    def test_empty_commits_raises(self):
        """An empty commit list has no defined bump level."""
        with pytest.raises(ValueError):
            classify([], PATCH, MINOR)

    def test_feat_takes_precedence_over_fix(self, feat_commit: Commit, fix_commit: Commit):
        assert classify([fix_commit, feat_commit], PATCH, MINOR) == BumpLevel.MINOR

    def test_breaking_takes_precedence(
        self, feat_commit: Commit, fix_commit: Commit, breaking_commit: Commit
    ):
        assert classify([feat_commit, breaking_commit, fix_commit], PATCH, MINOR) == BumpLevel.MAJOR

    def test_sample_commits(self, sample_commits: list[Commit]):
        assert classify(sample_commits, PATCH, MINOR) == BumpLevel.MINOR

    def test_adding_major_never_decreases(self, sample_commits: list[Commit]):
        before = classify(sample_commits, PATCH, MINOR)
        after = classify(
            [*sample_commits, make_commit("chore: x\n\nBREAKING CHANGE: y")], PATCH, MINOR
        )
        assert after >= before
        assert after == BumpLevel.MAJOR

    def test_default_tokens(self):
        """Defaults are fix for patch and feat/feature for minor."""
        assert classify([make_commit("feature: thing")]) == BumpLevel.MINOR
        assert classify([make_commit("fix: thing")]) == BumpLevel.PATCH

    def test_accepts_any_commit_like(self):
        class Message:
            summary = "feat: plain object"
            body = None

        assert classify([Message()], PATCH, MINOR) == BumpLevel.MINOR


class TestEndToEnd:
    """Classification followed by a version bump."""

    def test_fix_and_feat_bump_minor(self):
        commits = [make_commit("fix: a"), make_commit("feat: b")]
        level = classify(commits, {"fix"}, {"feat"})
        assert level == BumpLevel.MINOR
        assert str(SemanticVersion.parse("1.2.3").bump(level)) == "1.3.0"

    def test_breaking_change_bumps_major(self):
        commits = [make_commit("fix: a\n\nBREAKING CHANGE: x")]
        level = classify(commits, {"fix"}, {"feat"})
        assert level == BumpLevel.MAJOR
        assert str(SemanticVersion.parse("1.2.3").bump(level)) == "2.0.0"
