"""Abstract interface for running configured shell commands."""

from abc import ABC, abstractmethod
from pathlib import Path


class Shell(ABC):
    """Runs user-configured command strings."""

    @abstractmethod
    def run_command(self, command: str, cwd: Path, *, shell: str | None) -> None:
        """Run command in cwd.

        Args:
            command: Command string, interpreted by the shell
            cwd: Working directory
            shell: Shell executable (None uses the platform default shell)

        Raises:
            RuntimeError: If the command exits non-zero
        """
        ...
