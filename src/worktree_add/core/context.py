"""Run context holding every gateway the provisioning pipeline uses.

Created once at the CLI entry point and passed through the pipeline
explicitly, so the core never touches real processes, signals or terminals
directly. Tests build one from fakes with context_for_test().
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from worktree_add.core.config import NO_COLOR_ENV_VAR
from worktree_add.gateway.app_launcher.abc import AppLauncher
from worktree_add.gateway.app_launcher.fake import FakeAppLauncher
from worktree_add.gateway.app_launcher.real import RealAppLauncher
from worktree_add.gateway.console.abc import Console
from worktree_add.gateway.console.fake import FakeConsole
from worktree_add.gateway.console.real import RealConsole
from worktree_add.gateway.feedback.abc import StatusLogger
from worktree_add.gateway.feedback.fake import FakeStatusLogger
from worktree_add.gateway.feedback.real import ConsoleStatusLogger
from worktree_add.gateway.git.abc import Git
from worktree_add.gateway.git.fake import FakeGit
from worktree_add.gateway.git.real import RealGit
from worktree_add.gateway.interrupts.abc import InterruptHandlers
from worktree_add.gateway.interrupts.fake import FakeInterruptHandlers
from worktree_add.gateway.interrupts.real import RealInterruptHandlers
from worktree_add.gateway.package_manager.abc import PackageManager
from worktree_add.gateway.package_manager.fake import FakePackageManager
from worktree_add.gateway.package_manager.real import RealPackageManager
from worktree_add.gateway.shell.abc import Shell
from worktree_add.gateway.shell.fake import FakeShell
from worktree_add.gateway.shell.real import RealShell
from worktree_add.gateway.trash.abc import Trash
from worktree_add.gateway.trash.fake import FakeTrash
from worktree_add.gateway.trash.real import RealTrash


@dataclass(frozen=True)
class WorktreeAddContext:
    """Immutable context holding all dependencies for one invocation.

    Frozen to prevent accidental modification at runtime. Run-scoped mutable
    state (whether a worktree was registered) lives in ProvisioningSession,
    not here.
    """

    # Gateways
    git: Git
    console: Console
    feedback: StatusLogger
    trash: Trash
    package_manager: PackageManager
    shell: Shell
    app_launcher: AppLauncher
    interrupts: InterruptHandlers

    # Paths
    cwd: Path  # Current working directory at CLI invocation

    # Process environment snapshot (app fallback, CI detection)
    env: Mapping[str, str] = field(default_factory=dict)


def create_context(*, cwd: Path, verbose: bool, dry_run: bool) -> WorktreeAddContext:
    """Create the production context for a CLI invocation."""
    console = RealConsole()
    env = dict(os.environ)
    decorate = console.is_stderr_tty() and NO_COLOR_ENV_VAR not in env
    return WorktreeAddContext(
        git=RealGit(),
        console=console,
        feedback=ConsoleStatusLogger(verbose=verbose, dry_run=dry_run, decorate=decorate),
        trash=RealTrash(),
        package_manager=RealPackageManager(),
        shell=RealShell(),
        app_launcher=RealAppLauncher(),
        interrupts=RealInterruptHandlers(),
        cwd=cwd,
        env=env,
    )


def context_for_test(
    *,
    cwd: Path,
    git: Git | None = None,
    console: Console | None = None,
    feedback: StatusLogger | None = None,
    trash: Trash | None = None,
    package_manager: PackageManager | None = None,
    shell: Shell | None = None,
    app_launcher: AppLauncher | None = None,
    interrupts: InterruptHandlers | None = None,
    env: Mapping[str, str] | None = None,
) -> WorktreeAddContext:
    """Create a context backed by fakes; any gateway can be overridden.

    Example:
        >>> git = FakeGit(repo_root=tmp_path / "repo")
        >>> ctx = context_for_test(cwd=tmp_path / "repo", git=git)
    """
    return WorktreeAddContext(
        git=git if git is not None else FakeGit(repo_root=cwd),
        console=console if console is not None else FakeConsole(is_interactive=False),
        feedback=feedback if feedback is not None else FakeStatusLogger(),
        trash=trash if trash is not None else FakeTrash(),
        package_manager=package_manager if package_manager is not None else FakePackageManager(),
        shell=shell if shell is not None else FakeShell(),
        app_launcher=app_launcher if app_launcher is not None else FakeAppLauncher(),
        interrupts=interrupts if interrupts is not None else FakeInterruptHandlers(),
        cwd=cwd,
        env=dict(env) if env is not None else {},
    )
