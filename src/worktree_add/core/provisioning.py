"""Provision a worktree for a branch as a rollback-on-failure sequence.

Steps: resolve the target, clear the destination, classify the branch
against origin, register the worktree, copy untracked files, set up the
project, open apps. Once the worktree is registered, any exception or an
interrupt removes it again before the error propagates.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import assert_never

from worktree_add.core.apps import AppLaunchOutcome, open_worktree_apps, resolve_apps
from worktree_add.core.branch_names import BranchRef, to_safe_path_segment
from worktree_add.core.config import APP_ENV_VAR, LoadedConfig, load_config
from worktree_add.core.context import WorktreeAddContext
from worktree_add.core.destination import resolve_destination_conflict
from worktree_add.core.errors import (
    BranchCheckedOutError,
    BranchDivergedError,
    BranchNameError,
    RemoteUnavailableError,
)
from worktree_add.core.project_setup import setup_project
from worktree_add.core.remote_sync import (
    REMOTE_NAME,
    RemoteBranchDiverged,
    RemoteBranchExists,
    RemoteBranchMissing,
    RemoteBranchUnknown,
    RemoteSyncResult,
    classify_remote_branch,
)
from worktree_add.core.untracked_copy import copy_untracked_files
from worktree_add.core.worktree_creation import (
    WorktreeCreationStrategy,
    create_worktree,
    plan_creation_strategy,
)

logger = logging.getLogger(__name__)

INTERRUPT_EXIT_CODE = 130


@dataclass(frozen=True)
class WorktreeTarget:
    """Where and for which branch the worktree will be created."""

    branch: str
    repo_root: Path
    destination: Path


@dataclass(frozen=True)
class WorktreeAddOptions:
    """Per-invocation options from the command line.

    apps is None when --app was not given at all.
    """

    apps: tuple[str, ...] | None = None
    offline: bool = False
    assume_yes: bool = False
    dry_run: bool = False
    interactive: bool = False


@dataclass(frozen=True)
class ProvisioningResult:
    """Summary of a completed run."""

    target: WorktreeTarget
    sync: RemoteSyncResult
    strategy: WorktreeCreationStrategy
    copied_files: list[str]
    app_outcomes: list[AppLaunchOutcome]
    dry_run: bool


class ProvisioningSession:
    """Run-scoped state deciding whether rollback has a worktree to remove.

    worktree_created flips once, after a real worktree add succeeds.
    Cleanup runs at most once per session.
    """

    def __init__(self, ctx: WorktreeAddContext, target: WorktreeTarget, *, dry_run: bool) -> None:
        self._ctx = ctx
        self._target = target
        self._dry_run = dry_run
        self._worktree_created = False
        self._cleaned_up = False
        self._interrupted = False

    @property
    def destination(self) -> Path:
        return self._target.destination

    @property
    def worktree_created(self) -> bool:
        return self._worktree_created

    def mark_worktree_created(self) -> None:
        if self._dry_run:
            return
        self._worktree_created = True

    def cleanup_if_needed(self, reason: str) -> None:
        """Remove the worktree registered by this run, warning on failure."""
        if not self._worktree_created or self._cleaned_up:
            return
        self._cleaned_up = True

        feedback = self._ctx.feedback
        feedback.warn(f'Cleaning up worktree at "{self.destination}" {reason}.')
        try:
            self._ctx.git.remove_worktree(self._target.repo_root, self.destination, force=True)
        except RuntimeError as e:
            feedback.warn(f'Failed to clean up worktree at "{self.destination}": {e}')

    def handle_interrupt(self) -> None:
        """Roll back and exit with the interrupt status.

        A second interrupt while the first is still being handled exits
        immediately without re-running cleanup.
        """
        if self._interrupted:
            raise SystemExit(INTERRUPT_EXIT_CODE)
        self._interrupted = True

        self._ctx.feedback.warn("Received SIGINT. Aborting.")
        self.cleanup_if_needed("after interruption")
        self._ctx.feedback.warn(f'Worktree setup may be incomplete at "{self.destination}".')
        raise SystemExit(INTERRUPT_EXIT_CODE)


def resolve_worktree_target(ctx: WorktreeAddContext, branch_raw: str) -> WorktreeTarget:
    """Normalize the branch and compute the sibling destination directory.

    Read-only: nothing is mutated here.

    Raises:
        BranchNameError: If the branch is empty after normalization
        BranchCheckedOutError: If a worktree already has the branch checked out
    """
    ref = BranchRef.parse(branch_raw)
    if not ref.normalized:
        raise BranchNameError(
            "Branch name is empty.\n"
            "Examples: `feature/foo`, `origin/feature/foo`, `refs/heads/feature/foo`.\n"
            f"Note: `{REMOTE_NAME}/` without a branch name is not valid."
        )
    branch = ref.normalized

    repo_root = ctx.git.get_repo_root(ctx.cwd)

    existing = ctx.git.find_worktree_for_branch(repo_root, branch)
    if existing is not None:
        raise BranchCheckedOutError(
            f"Branch '{branch}' is already checked out in: {existing}\n"
            "You cannot add another worktree for the same branch.\n"
            "Open that worktree instead or remove it before retrying."
        )

    worktrees = ctx.git.list_worktrees(repo_root)
    repo_name = worktrees[0].path.name if worktrees else repo_root.name
    destination = repo_root.parent / f"{repo_name}-{to_safe_path_segment(branch)}"
    logger.debug("Resolved %r to branch %s at %s", branch_raw, branch, destination)
    return WorktreeTarget(branch=branch, repo_root=repo_root, destination=destination)


def run_worktree_add(
    ctx: WorktreeAddContext, branch_raw: str, options: WorktreeAddOptions
) -> ProvisioningResult:
    """Provision a worktree for branch_raw.

    Raises:
        WorktreeAddError: For validation, connectivity, divergence and
            destination failures
        RuntimeError: If a git, install or hook command fails
        SystemExit: With status 130 when interrupted
    """
    target = resolve_worktree_target(ctx, branch_raw)
    config = load_config(target.repo_root)
    dry_run = options.dry_run

    session = ProvisioningSession(ctx, target, dry_run=dry_run)
    uninstall = ctx.interrupts.install(session.handle_interrupt)
    try:
        return _provision(ctx, target, config, options, session)
    except Exception:
        session.cleanup_if_needed("due to failure")
        raise
    finally:
        uninstall()


def _provision(
    ctx: WorktreeAddContext,
    target: WorktreeTarget,
    config: LoadedConfig,
    options: WorktreeAddOptions,
    session: ProvisioningSession,
) -> ProvisioningResult:
    dry_run = options.dry_run
    branch = target.branch

    resolve_destination_conflict(
        ctx,
        target.repo_root,
        target.destination,
        dry_run=dry_run,
        assume_yes=options.assume_yes,
        interactive=options.interactive,
    )

    sync = classify_remote_branch(ctx, target.repo_root, branch, dry_run=dry_run)
    match sync:
        case RemoteBranchExists() | RemoteBranchMissing():
            pass
        case RemoteBranchUnknown(local_exists=local_exists):
            if not local_exists and not options.offline:
                raise RemoteUnavailableError(
                    f"Could not reach {REMOTE_NAME} to check whether '{branch}' exists, "
                    "and the branch does not exist locally.\n"
                    "Refusing to create a new branch from HEAD in this ambiguous state.\n"
                    f"Re-run with --offline to force creating a new local '{branch}' "
                    "from the current HEAD."
                )
        case RemoteBranchDiverged(divergence=divergence):
            raise BranchDivergedError(
                _divergence_message(branch, divergence.ahead, divergence.behind),
                branch=branch,
                ahead=divergence.ahead,
                behind=divergence.behind,
            )
        case _:
            assert_never(sync)

    strategy = plan_creation_strategy(
        local_exists=sync.local_exists,
        remote_exists=isinstance(sync, RemoteBranchExists),
    )
    create_worktree(ctx, target.repo_root, branch, target.destination, strategy, dry_run=dry_run)
    session.mark_worktree_created()

    copied = copy_untracked_files(
        ctx,
        target.repo_root,
        target.destination,
        extra_excludes=config.copy_exclude,
        dry_run=dry_run,
    )

    setup_project(
        ctx,
        target.destination,
        config,
        dry_run=dry_run,
        manifest_dir=target.repo_root if dry_run else None,
    )

    apps = resolve_apps(options.apps, ctx.env.get(APP_ENV_VAR), config.apps)
    outcomes = open_worktree_apps(ctx, target.destination, apps, dry_run=dry_run)

    return ProvisioningResult(
        target=target,
        sync=sync,
        strategy=strategy,
        copied_files=copied,
        app_outcomes=outcomes,
        dry_run=dry_run,
    )


def _divergence_message(branch: str, ahead: int, behind: int) -> str:
    quoted = _single_quote(branch)
    quoted_old = _single_quote(f"{branch}-old")
    return (
        f"Local branch '{branch}' and {REMOTE_NAME}/{branch} have diverged "
        f"(ahead by {ahead} and behind by {behind}).\n"
        "Refusing to pick a side; resolve it manually, for example:\n"
        f"  git fetch {REMOTE_NAME} --prune\n"
        f"  git branch -m -- {quoted} {quoted_old}\n"
        f"  worktree-add -- {quoted}"
    )


def _single_quote(value: str) -> str:
    return "'" + value.replace("'", "'\\''") + "'"
