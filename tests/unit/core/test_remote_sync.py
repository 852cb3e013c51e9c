"""Tests for classify_remote_branch."""

from pathlib import Path

import pytest

from worktree_add.core.context import context_for_test
from worktree_add.core.errors import RemoteUnavailableError
from worktree_add.core.remote_sync import (
    RemoteBranchDiverged,
    RemoteBranchExists,
    RemoteBranchMissing,
    RemoteBranchUnknown,
    classify_remote_branch,
)
from worktree_add.gateway.feedback.fake import FakeStatusLogger
from worktree_add.gateway.git.fake import FakeGit
from worktree_add.gateway.git.types import DivergenceCounts, WorktreeInfo

LOCAL_SHA = "a" * 40
REMOTE_SHA = "b" * 40


def _classify(git: FakeGit, repo: Path, *, dry_run: bool = False):
    feedback = FakeStatusLogger()
    ctx = context_for_test(cwd=repo, git=git, feedback=feedback)
    result = classify_remote_branch(ctx, repo, "feature", dry_run=dry_run)
    return result, feedback


def test_local_and_remote_diverged_returns_exact_counts(tmp_path: Path) -> None:
    git = FakeGit(
        repo_root=tmp_path,
        local_branches={"feature": LOCAL_SHA},
        remote_branches={"feature": REMOTE_SHA},
        divergence={(LOCAL_SHA, REMOTE_SHA): DivergenceCounts(ahead=15, behind=1)},
    )

    result, feedback = _classify(git, tmp_path)

    assert result == RemoteBranchDiverged(divergence=DivergenceCounts(ahead=15, behind=1))
    assert result.status == "diverged"
    assert result.local_exists is True
    # Divergence is surfaced, not swallowed: no mutation, no "keeping local" warning
    assert git.force_updated_branches == []
    assert git.local_branches["feature"] == LOCAL_SHA
    assert feedback.warnings == []


def test_strictly_behind_fast_forwards_local_to_remote(tmp_path: Path) -> None:
    git = FakeGit(
        repo_root=tmp_path,
        local_branches={"feature": LOCAL_SHA},
        remote_branches={"feature": REMOTE_SHA},
        divergence={(LOCAL_SHA, REMOTE_SHA): DivergenceCounts(ahead=0, behind=2)},
    )

    result, _ = _classify(git, tmp_path)

    assert result == RemoteBranchExists(local_exists=True)
    assert git.force_updated_branches == [("feature", "refs/remotes/origin/feature")]
    assert git.local_branches["feature"] == REMOTE_SHA


def test_strictly_behind_skips_fast_forward_when_checked_out(tmp_path: Path) -> None:
    other = tmp_path / "other"
    git = FakeGit(
        repo_root=tmp_path,
        worktrees=[WorktreeInfo(path=other, branch="feature")],
        local_branches={"feature": LOCAL_SHA},
        remote_branches={"feature": REMOTE_SHA},
        divergence={(LOCAL_SHA, REMOTE_SHA): DivergenceCounts(ahead=0, behind=2)},
    )

    result, feedback = _classify(git, tmp_path)

    assert result == RemoteBranchExists(local_exists=True)
    assert git.force_updated_branches == []
    assert any("skipping fast-forward" in w for w in feedback.warnings)


def test_ahead_only_keeps_local_and_warns(tmp_path: Path) -> None:
    git = FakeGit(
        repo_root=tmp_path,
        local_branches={"feature": LOCAL_SHA},
        remote_branches={"feature": REMOTE_SHA},
        divergence={(LOCAL_SHA, REMOTE_SHA): DivergenceCounts(ahead=3, behind=0)},
    )

    result, feedback = _classify(git, tmp_path)

    assert result == RemoteBranchExists(local_exists=True)
    assert git.force_updated_branches == []
    assert feedback.warnings == [
        "Local branch 'feature' is ahead of origin/feature (ahead by 3); "
        "using existing local branch as-is."
    ]


def test_zero_counts_with_differing_heads_warns_about_reclone(tmp_path: Path) -> None:
    git = FakeGit(
        repo_root=tmp_path,
        local_branches={"feature": LOCAL_SHA},
        remote_branches={"feature": REMOTE_SHA},
    )

    result, feedback = _classify(git, tmp_path)

    assert result == RemoteBranchExists(local_exists=True)
    assert git.force_updated_branches == []
    assert len(feedback.warnings) == 1
    assert "re-cloning" in feedback.warnings[0]


def test_equal_heads_is_exists_without_compare(tmp_path: Path) -> None:
    git = FakeGit(
        repo_root=tmp_path,
        local_branches={"feature": LOCAL_SHA},
        remote_branches={"feature": LOCAL_SHA},
        compare_error="should not be called",
    )

    result, feedback = _classify(git, tmp_path)

    assert result == RemoteBranchExists(local_exists=True)
    assert feedback.warnings == []


def test_compare_failure_keeps_local(tmp_path: Path) -> None:
    git = FakeGit(
        repo_root=tmp_path,
        local_branches={"feature": LOCAL_SHA},
        remote_branches={"feature": REMOTE_SHA},
        compare_error="fatal: bad revision",
    )

    result, feedback = _classify(git, tmp_path)

    assert result == RemoteBranchExists(local_exists=True)
    assert "fatal: bad revision" in feedback.warnings[0]


def test_remote_query_failure_with_local_is_unknown(tmp_path: Path) -> None:
    git = FakeGit(
        repo_root=tmp_path,
        local_branches={"feature": LOCAL_SHA},
        remote_query_error="Failed to query\nfatal: unable to access 'https://example.com/'",
    )

    result, feedback = _classify(git, tmp_path)

    assert result == RemoteBranchUnknown(local_exists=True)
    assert git.fetched_branches == []
    assert "fatal: unable to access" in feedback.warnings[0]
    assert "Using existing local branch" in feedback.warnings[0]


def test_fetch_failure_with_local_is_unknown(tmp_path: Path) -> None:
    git = FakeGit(
        repo_root=tmp_path,
        local_branches={"feature": LOCAL_SHA},
        remote_branches={"feature": REMOTE_SHA},
        fetch_error="fatal: could not read from remote repository",
    )

    result, feedback = _classify(git, tmp_path)

    assert result == RemoteBranchUnknown(local_exists=True)
    assert git.local_branches["feature"] == LOCAL_SHA
    assert "origin status unknown" in feedback.warnings[0]


def test_remote_absent_is_missing(tmp_path: Path) -> None:
    git = FakeGit(repo_root=tmp_path, local_branches={"feature": LOCAL_SHA})

    result, _ = _classify(git, tmp_path)

    assert result == RemoteBranchMissing(local_exists=True)
    assert git.fetched_branches == []


def test_dry_run_with_local_and_remote_does_not_fetch(tmp_path: Path) -> None:
    git = FakeGit(
        repo_root=tmp_path,
        local_branches={"feature": LOCAL_SHA},
        remote_branches={"feature": REMOTE_SHA},
    )

    result, feedback = _classify(git, tmp_path, dry_run=True)

    assert result == RemoteBranchExists(local_exists=True)
    assert git.fetched_branches == []
    assert feedback.steps == ["Would fetch origin/feature"]
    assert len(feedback.details) == 1
    assert "cannot be checked without fetching" in feedback.details[0]


def test_no_local_remote_query_failure_is_unknown(tmp_path: Path) -> None:
    git = FakeGit(repo_root=tmp_path, remote_query_error="fatal: network down")

    result, feedback = _classify(git, tmp_path)

    assert result == RemoteBranchUnknown(local_exists=False)
    assert "Failed to reach origin" in feedback.warnings[0]


def test_no_local_remote_absent_is_missing(tmp_path: Path) -> None:
    git = FakeGit(repo_root=tmp_path)

    result, _ = _classify(git, tmp_path)

    assert result == RemoteBranchMissing(local_exists=False)


def test_no_local_remote_present_fetches(tmp_path: Path) -> None:
    git = FakeGit(repo_root=tmp_path, remote_branches={"feature": REMOTE_SHA})

    result, _ = _classify(git, tmp_path)

    assert result == RemoteBranchExists(local_exists=False)
    assert git.fetched_branches == [("origin", "feature")]


def test_no_local_dry_run_does_not_fetch(tmp_path: Path) -> None:
    git = FakeGit(repo_root=tmp_path, remote_branches={"feature": REMOTE_SHA})

    result, feedback = _classify(git, tmp_path, dry_run=True)

    assert result == RemoteBranchExists(local_exists=False)
    assert git.fetched_branches == []
    assert feedback.steps == ["Would fetch origin/feature"]


def test_no_local_fetch_failure_is_fatal(tmp_path: Path) -> None:
    git = FakeGit(
        repo_root=tmp_path,
        remote_branches={"feature": REMOTE_SHA},
        fetch_error="Failed to fetch\nfatal: couldn't find remote ref",
    )

    with pytest.raises(RemoteUnavailableError, match="Cannot proceed without a local branch"):
        _classify(git, tmp_path)
