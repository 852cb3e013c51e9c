"""Install dependencies and run post-create hooks inside a new worktree."""

import logging
from collections.abc import Mapping
from pathlib import Path

from worktree_add.core.config import LoadedConfig
from worktree_add.core.context import WorktreeAddContext
from worktree_add.gateway.package_manager.commands import load_package_json

logger = logging.getLogger(__name__)


def is_next_project(package_json: Mapping[str, object]) -> bool:
    """Check whether next is a dependency or dev dependency."""
    for key in ("dependencies", "devDependencies"):
        deps = package_json.get(key)
        if isinstance(deps, dict) and deps.get("next"):
            return True
    return False


def next_help_lists_typegen(help_output: str) -> bool:
    return any(line.lstrip().startswith("typegen ") for line in help_output.splitlines())


def setup_project(
    ctx: WorktreeAddContext,
    destination: Path,
    config: LoadedConfig,
    *,
    dry_run: bool,
    manifest_dir: Path | None = None,
) -> None:
    """Install dependencies, run next typegen if supported, then post-create commands.

    Args:
        ctx: Run context
        destination: The new worktree; commands run here
        config: Repository config carrying post-create commands
        dry_run: Report each step without running it
        manifest_dir: Where to read package.json from when it differs from
            destination (dry-run has no worktree yet, so the source checkout
            stands in for it)

    Raises:
        RuntimeError: If an install, typegen or post-create command fails
    """
    inspect_dir = manifest_dir if manifest_dir is not None else destination
    package_json = load_package_json(inspect_dir)
    if package_json is None:
        logger.debug("No package.json in %s; skipping dependency setup", inspect_dir)
    else:
        _install_dependencies(ctx, destination, inspect_dir, dry_run=dry_run)
        if is_next_project(package_json):
            _run_next_typegen(ctx, destination, dry_run=dry_run)

    _run_post_create_commands(ctx, destination, config, dry_run=dry_run)


def _install_dependencies(
    ctx: WorktreeAddContext, destination: Path, inspect_dir: Path, *, dry_run: bool
) -> None:
    pm = ctx.package_manager.detect(inspect_dir)
    label = pm if pm is not None else "npm"
    if dry_run:
        ctx.feedback.step(f"Would install dependencies with {label}")
        return
    ctx.feedback.step(f"Installing dependencies with {label} …")
    ctx.package_manager.install(destination)
    ctx.feedback.success("Dependencies installed")


def _run_next_typegen(ctx: WorktreeAddContext, destination: Path, *, dry_run: bool) -> None:
    if dry_run:
        ctx.feedback.step("Would run next typegen if supported")
        return

    ctx.feedback.step("Checking Next.js CLI typegen support …")
    try:
        help_output = ctx.package_manager.run_binary(destination, "next", ["--help"], capture=True)
    except RuntimeError as e:
        logger.debug("next --help failed: %s", e)
        help_output = ""

    if not next_help_lists_typegen(help_output):
        ctx.feedback.warn(
            "Skipping next typegen: installed Next.js CLI does not support this command."
        )
        return

    ctx.feedback.step("Running next typegen …")
    ctx.package_manager.run_binary(destination, "next", ["typegen"], capture=False)
    ctx.feedback.success("Generated Next.js types")


def _run_post_create_commands(
    ctx: WorktreeAddContext, destination: Path, config: LoadedConfig, *, dry_run: bool
) -> None:
    for command in config.post_create_commands:
        if dry_run:
            ctx.feedback.step(f"Would run post-create command: {command}")
            continue
        ctx.feedback.step(f"Running post-create command: {command}")
        ctx.shell.run_command(command, destination, shell=config.post_create_shell)
