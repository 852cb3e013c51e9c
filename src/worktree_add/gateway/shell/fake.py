"""Fake Shell for testing."""

from pathlib import Path

from worktree_add.gateway.shell.abc import Shell


class FakeShell(Shell):
    """Records commands; fails the ones listed in failing_commands.

    Mutation Tracking:
    - commands_run: list[tuple[str, Path, str | None]] - (command, cwd, shell)
    """

    def __init__(self, *, failing_commands: dict[str, str] | None = None) -> None:
        self._failing_commands = failing_commands or {}
        self._commands_run: list[tuple[str, Path, str | None]] = []

    def run_command(self, command: str, cwd: Path, *, shell: str | None) -> None:
        self._commands_run.append((command, cwd, shell))
        if command in self._failing_commands:
            raise RuntimeError(self._failing_commands[command])

    @property
    def commands_run(self) -> list[tuple[str, Path, str | None]]:
        return self._commands_run.copy()
