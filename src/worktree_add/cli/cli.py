import logging
import traceback
from pathlib import Path

import click

from worktree_add.core.context import WorktreeAddContext, create_context
from worktree_add.core.diagnostics import extract_diagnostic_line
from worktree_add.core.errors import ProvisioningCancelled, WorktreeAddError
from worktree_add.core.provisioning import (
    INTERRUPT_EXIT_CODE,
    WorktreeAddOptions,
    run_worktree_add,
)
from worktree_add.output.output import machine_output, user_output

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.command("worktree-add", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="worktree-add")
@click.argument("branch")
@click.option(
    "-a",
    "--app",
    "apps",
    multiple=True,
    metavar="NAME",
    help="Open the new worktree in NAME (repeatable). Overrides WORKTREE_ADD_APP.",
)
@click.option(
    "--offline",
    is_flag=True,
    help="Create the branch from HEAD when origin cannot be reached.",
)
@click.option(
    "-y",
    "--yes",
    "assume_yes",
    is_flag=True,
    help="Move an existing destination directory to trash without prompting.",
)
@click.option("--dry-run", is_flag=True, help="Show what would happen without changing anything.")
@click.option(
    "--interactive",
    is_flag=True,
    help="Allow confirmation prompts when the destination already exists.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show every step and enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    branch: str,
    apps: tuple[str, ...],
    offline: bool,
    assume_yes: bool,
    dry_run: bool,
    interactive: bool,
    verbose: bool,
) -> None:
    """Create a worktree for BRANCH next to the current checkout.

    BRANCH may be given as `feature/foo`, `origin/feature/foo` or
    `refs/heads/feature/foo`. The worktree path is printed on stdout.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context(cwd=Path.cwd(), verbose=verbose, dry_run=dry_run)
    worktree_ctx: WorktreeAddContext = ctx.obj

    options = WorktreeAddOptions(
        # click reports an absent multiple option as an empty tuple
        apps=apps if apps else None,
        offline=offline,
        assume_yes=assume_yes,
        dry_run=dry_run,
        interactive=interactive,
    )

    try:
        result = run_worktree_add(worktree_ctx, branch, options)
    except KeyboardInterrupt as e:
        raise SystemExit(INTERRUPT_EXIT_CODE) from e
    except ProvisioningCancelled as e:
        user_output(str(e))
        raise SystemExit(0) from e
    except WorktreeAddError as e:
        user_output(click.style("Error: ", fg="red") + str(e))
        raise SystemExit(1) from e
    except Exception as e:
        if verbose:
            user_output(traceback.format_exc().rstrip())
        user_output(click.style("Error: ", fg="red") + extract_diagnostic_line(e))
        raise SystemExit(1) from e

    if not result.dry_run:
        machine_output(str(result.target.destination))


def main() -> None:
    """CLI entry point used by the `worktree-add` console script."""
    cli()
