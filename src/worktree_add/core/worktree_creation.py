"""Choose how to register the new worktree and register it."""

import logging
from enum import Enum
from pathlib import Path

from worktree_add.core.context import WorktreeAddContext
from worktree_add.core.remote_sync import REMOTE_NAME

logger = logging.getLogger(__name__)


class WorktreeCreationStrategy(Enum):
    """How the branch for the new worktree is obtained."""

    REUSE_LOCAL_BRANCH = "reuse-local-branch"
    TRACK_REMOTE_BRANCH = "track-remote-branch"
    CREATE_FROM_HEAD = "create-from-head"


def plan_creation_strategy(*, local_exists: bool, remote_exists: bool) -> WorktreeCreationStrategy:
    """Pick the strategy for a branch.

    remote_exists must only be True when origin was confirmed to have the
    branch; an unknown remote state counts as absent.
    """
    if local_exists:
        return WorktreeCreationStrategy.REUSE_LOCAL_BRANCH
    if remote_exists:
        return WorktreeCreationStrategy.TRACK_REMOTE_BRANCH
    return WorktreeCreationStrategy.CREATE_FROM_HEAD


def create_worktree(
    ctx: WorktreeAddContext,
    repo_root: Path,
    branch: str,
    destination: Path,
    strategy: WorktreeCreationStrategy,
    *,
    dry_run: bool,
) -> None:
    """Register a worktree at destination using strategy.

    In dry-run the git command is reported and nothing runs.

    Raises:
        RuntimeError: If git worktree add fails
    """
    logger.debug("Creating worktree for %s with strategy %s", branch, strategy.value)
    prefix = "Would run " if dry_run else ""

    if strategy is WorktreeCreationStrategy.REUSE_LOCAL_BRANCH:
        ctx.feedback.step(f"{prefix}git worktree add -- {destination} refs/heads/{branch}")
        if dry_run:
            return
        ctx.git.add_worktree(
            repo_root,
            destination,
            branch=branch,
            start_point=None,
            create_branch=False,
            track=False,
        )
    elif strategy is WorktreeCreationStrategy.TRACK_REMOTE_BRANCH:
        remote_ref = f"{REMOTE_NAME}/{branch}"
        ctx.feedback.step(
            f"{prefix}git worktree add --track -b {branch} -- {destination} {remote_ref}"
        )
        if dry_run:
            return
        ctx.git.add_worktree(
            repo_root,
            destination,
            branch=branch,
            start_point=remote_ref,
            create_branch=True,
            track=True,
        )
    else:
        ctx.feedback.step(f"{prefix}git worktree add -b {branch} -- {destination}")
        if dry_run:
            return
        ctx.git.add_worktree(
            repo_root,
            destination,
            branch=branch,
            start_point=None,
            create_branch=True,
            track=False,
        )

    ctx.feedback.success(f"Created worktree at {destination}")
