"""Real console implementation using isatty() and click prompts."""

import os
import sys

from worktree_add.gateway.console.abc import Console
from worktree_add.output.output import user_confirm


class RealConsole(Console):
    """Production implementation backed by the process's standard streams."""

    def is_stdin_interactive(self) -> bool:
        return sys.stdin.isatty()

    def is_stderr_tty(self) -> bool:
        return os.isatty(2)

    def confirm(self, prompt: str, *, default: bool) -> bool:
        return user_confirm(prompt, default=default)
