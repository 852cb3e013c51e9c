"""Production Shell implementation using subprocess."""

from pathlib import Path

from worktree_add.gateway.shell.abc import Shell
from worktree_add.subprocess_utils import run_subprocess_streaming_to_stderr


class RealShell(Shell):
    """Production implementation using subprocess.

    Command output goes to stderr; stdout carries only the worktree path.
    """

    def run_command(self, command: str, cwd: Path, *, shell: str | None) -> None:
        argv = [shell, "-c", command] if shell else ["/bin/sh", "-c", command]
        run_subprocess_streaming_to_stderr(
            argv,
            operation_context=f"run post-create command `{command}`",
            cwd=cwd,
        )
