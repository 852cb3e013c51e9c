"""Classify a local branch against its counterpart on origin.

The classifier queries whether the branch exists locally and on origin,
fetches the remote-tracking ref, compares the two heads and, when the local
branch is strictly behind, fast-forwards it. The result is one of four
variants; every call site must handle all of them.

A local branch acts as a safety net: when one exists, every remote-side
failure is downgraded to a warning. Without one, a failed fetch is fatal.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from worktree_add.core.context import WorktreeAddContext
from worktree_add.core.diagnostics import extract_diagnostic_line
from worktree_add.core.errors import RemoteUnavailableError
from worktree_add.gateway.git.types import DivergenceCounts

logger = logging.getLogger(__name__)

REMOTE_NAME = "origin"

RemoteSyncStatus = Literal["exists", "missing", "unknown", "diverged"]


@dataclass(frozen=True)
class RemoteBranchExists:
    """Origin has the branch (or did when queried, in dry-run)."""

    local_exists: bool

    @property
    def status(self) -> RemoteSyncStatus:
        return "exists"


@dataclass(frozen=True)
class RemoteBranchMissing:
    """Origin answered and does not have the branch."""

    local_exists: bool

    @property
    def status(self) -> RemoteSyncStatus:
        return "missing"


@dataclass(frozen=True)
class RemoteBranchUnknown:
    """Origin could not be queried or fetched; its state is not known."""

    local_exists: bool

    @property
    def status(self) -> RemoteSyncStatus:
        return "unknown"


@dataclass(frozen=True)
class RemoteBranchDiverged:
    """Local and origin both have commits the other lacks.

    Only produced when a local branch exists, so local_exists is always True.
    """

    divergence: DivergenceCounts
    local_exists: bool = True

    @property
    def status(self) -> RemoteSyncStatus:
        return "diverged"


RemoteSyncResult = (
    RemoteBranchExists | RemoteBranchMissing | RemoteBranchUnknown | RemoteBranchDiverged
)


def classify_remote_branch(
    ctx: WorktreeAddContext,
    repo_root: Path,
    branch: str,
    *,
    dry_run: bool,
) -> RemoteSyncResult:
    """Classify branch against origin, fast-forwarding local when strictly behind.

    Args:
        ctx: Run context
        repo_root: Root of the checkout the command was run from
        branch: Normalized branch name
        dry_run: Report what would be fetched instead of fetching

    Returns:
        One of the RemoteSyncResult variants

    Raises:
        RemoteUnavailableError: If origin has the branch, there is no local
            branch, and the fetch fails
    """
    if ctx.git.local_branch_exists(repo_root, branch):
        return _classify_with_local_branch(ctx, repo_root, branch, dry_run=dry_run)
    return _classify_without_local_branch(ctx, repo_root, branch, dry_run=dry_run)


def _classify_with_local_branch(
    ctx: WorktreeAddContext, repo_root: Path, branch: str, *, dry_run: bool
) -> RemoteSyncResult:
    feedback = ctx.feedback
    remote_ref = f"{REMOTE_NAME}/{branch}"

    try:
        remote_exists = ctx.git.remote_branch_exists(repo_root, REMOTE_NAME, branch)
    except RuntimeError as e:
        feedback.warn(
            f"Failed to query {REMOTE_NAME} for '{branch}': {extract_diagnostic_line(e)}. "
            "Using existing local branch. (If you expected a remote branch, "
            "double-check your network connection and branch name.)"
        )
        return RemoteBranchUnknown(local_exists=True)

    if not remote_exists:
        logger.debug("Branch %s not found on %s", branch, REMOTE_NAME)
        return RemoteBranchMissing(local_exists=True)

    if dry_run:
        feedback.step(f"Would fetch {remote_ref}")
        feedback.detail(
            f"Divergence between local '{branch}' and {remote_ref} cannot be checked "
            "without fetching; local may be fast-forwarded if it is behind."
        )
        return RemoteBranchExists(local_exists=True)

    feedback.step(f"Fetching {remote_ref} …")
    try:
        ctx.git.fetch_branch(repo_root, REMOTE_NAME, branch)
    except RuntimeError as e:
        feedback.warn(
            f"Failed to fetch {remote_ref}: {extract_diagnostic_line(e)}. "
            f"Using existing local branch ({REMOTE_NAME} status unknown)."
        )
        return RemoteBranchUnknown(local_exists=True)

    local_head = ctx.git.get_ref_head(repo_root, f"refs/heads/{branch}")
    remote_head = ctx.git.get_ref_head(repo_root, f"refs/remotes/{remote_ref}")
    if local_head is None or remote_head is None or local_head == remote_head:
        return RemoteBranchExists(local_exists=True)

    try:
        counts = ctx.git.count_ahead_behind(repo_root, local_head, remote_head)
    except RuntimeError as e:
        feedback.warn(
            f"Failed to compare local '{branch}' with {remote_ref}: "
            f"{extract_diagnostic_line(e)}. Using existing local branch as-is."
        )
        return RemoteBranchExists(local_exists=True)

    logger.debug("Branch %s is ahead by %d and behind by %d", branch, counts.ahead, counts.behind)

    if counts.ahead > 0 and counts.behind > 0:
        return RemoteBranchDiverged(divergence=counts)

    if counts.ahead > 0:
        feedback.warn(
            f"Local branch '{branch}' is ahead of {remote_ref} (ahead by {counts.ahead}); "
            "using existing local branch as-is."
        )
        return RemoteBranchExists(local_exists=True)

    if counts.behind == 0:
        # Shallow or corrupted refs can report 0/0 for differing heads.
        feedback.warn(
            f"Local branch '{branch}' differs from {remote_ref}, but Git reports no "
            "ahead/behind differences. Using existing local branch; if you encounter "
            "issues, try re-cloning the repository."
        )
        return RemoteBranchExists(local_exists=True)

    active_worktree = ctx.git.find_worktree_for_branch(repo_root, branch)
    if active_worktree is not None:
        feedback.warn(
            f"Local branch '{branch}' is checked out in {active_worktree}; "
            "skipping fast-forward."
        )
        return RemoteBranchExists(local_exists=True)

    feedback.detail(f"Fast-forwarding '{branch}' from {local_head} to {remote_head}.")
    feedback.step(f"Fast-forwarding local '{branch}' to {remote_ref} …")
    ctx.git.force_update_branch(repo_root, branch, f"refs/remotes/{remote_ref}")
    feedback.success(f"Fast-forwarded '{branch}' by {counts.behind} commit(s)")
    return RemoteBranchExists(local_exists=True)


def _classify_without_local_branch(
    ctx: WorktreeAddContext, repo_root: Path, branch: str, *, dry_run: bool
) -> RemoteSyncResult:
    feedback = ctx.feedback
    remote_ref = f"{REMOTE_NAME}/{branch}"

    try:
        remote_exists = ctx.git.remote_branch_exists(repo_root, REMOTE_NAME, branch)
    except RuntimeError as e:
        feedback.warn(
            f"Failed to reach {REMOTE_NAME} to check whether '{branch}' exists: "
            f"{extract_diagnostic_line(e)}. (If you expected a remote branch, "
            "double-check your network connection and branch name.)"
        )
        return RemoteBranchUnknown(local_exists=False)

    if not remote_exists:
        logger.debug("Branch %s not found locally or on %s", branch, REMOTE_NAME)
        return RemoteBranchMissing(local_exists=False)

    if dry_run:
        feedback.step(f"Would fetch {remote_ref}")
        return RemoteBranchExists(local_exists=False)

    feedback.step(f"Fetching {remote_ref} …")
    try:
        ctx.git.fetch_branch(repo_root, REMOTE_NAME, branch)
    except RuntimeError as e:
        raise RemoteUnavailableError(
            f"Failed to fetch {remote_ref}: {extract_diagnostic_line(e)}. "
            "Cannot proceed without a local branch.\n"
            "If you expected this to work, check your network/credentials and retry."
        ) from e
    return RemoteBranchExists(local_exists=False)
