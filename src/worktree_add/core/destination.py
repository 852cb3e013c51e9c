"""Resolve a pre-existing destination directory before anything is mutated.

An existing directory is never deleted. With the user's consent it is moved
to the system trash, where it can be restored.
"""

import logging
from pathlib import Path

from worktree_add.core.config import is_ci_environment
from worktree_add.core.context import WorktreeAddContext
from worktree_add.core.diagnostics import extract_diagnostic_line
from worktree_add.core.errors import DestinationConflictError, ProvisioningCancelled

logger = logging.getLogger(__name__)


def resolve_destination_conflict(
    ctx: WorktreeAddContext,
    repo_root: Path,
    destination: Path,
    *,
    dry_run: bool,
    assume_yes: bool,
    interactive: bool,
) -> bool:
    """Make sure destination is free, moving an existing directory to trash.

    Gating, in order: assume_yes proceeds without asking; CI with
    interactive requested but no TTY refuses; interactive not requested
    refuses; no TTY refuses; otherwise the user is asked.

    Returns:
        True when the run may proceed. Refusals and cancellation raise.

    Raises:
        DestinationConflictError: If the conflict cannot be resolved, the move
            to trash fails, or the stale worktree registration cannot be removed
        ProvisioningCancelled: If the user declines the prompt
    """
    if not destination.exists():
        return True

    name = destination.name
    logger.debug("Destination %s already exists", destination)

    if not assume_yes:
        _check_prompt_allowed(ctx, destination, interactive=interactive)
        if not dry_run:
            prompt = (
                f"Directory '{name}' already exists. Move to trash and recreate? "
                "(You can restore it from your system trash if needed)"
            )
            if not ctx.console.confirm(prompt, default=False):
                raise ProvisioningCancelled("Operation cancelled.")

    if dry_run:
        ctx.feedback.step(f"Would move existing directory '{name}' to trash")
        return True

    registered_path = _find_registered_worktree(ctx, repo_root, destination)

    ctx.feedback.step(f"Moving existing directory '{name}' to trash...")
    try:
        ctx.trash.move_to_trash(destination)
    except OSError as e:
        ctx.feedback.detail(f"Error details: {e}")
        raise DestinationConflictError(f"Failed to move existing directory to trash: {e}") from e
    ctx.feedback.success("Directory moved to trash successfully")

    if registered_path is not None:
        ctx.feedback.step(f"Removing stale worktree registration for '{name}'...")
        try:
            ctx.git.remove_worktree_registration(repo_root, registered_path)
        except RuntimeError as e:
            raise DestinationConflictError(
                f"Moved '{name}' to trash, but failed to remove its stale worktree "
                f"registration: {extract_diagnostic_line(e)}\n"
                "Run `git worktree prune` in the repository before retrying."
            ) from e

    return True


def _check_prompt_allowed(ctx: WorktreeAddContext, destination: Path, *, interactive: bool) -> None:
    has_tty = ctx.console.is_stdin_interactive()
    exists_line = f"Destination directory already exists: {destination}"

    if is_ci_environment(ctx.env) and interactive and not has_tty:
        raise DestinationConflictError(
            f"{exists_line}\n"
            "Prompting is disabled in CI environments.\n"
            "Re-run with --yes to move it to trash without prompting."
        )
    if not interactive:
        raise DestinationConflictError(
            f"{exists_line}\n"
            "Re-run with --interactive to be asked before moving it to trash, "
            "or with --yes to move it to trash without prompting."
        )
    if not has_tty:
        raise DestinationConflictError(
            f"{exists_line}\n"
            "Cannot prompt for confirmation without a terminal.\n"
            "Re-run with --yes to move it to trash without prompting."
        )


def _find_registered_worktree(
    ctx: WorktreeAddContext, repo_root: Path, destination: Path
) -> Path | None:
    target = destination.resolve()
    for wt in ctx.git.list_worktrees(repo_root):
        if wt.path.resolve() == target:
            return wt.path
    return None
