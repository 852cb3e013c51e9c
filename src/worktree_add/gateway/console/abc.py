"""Console operations abstraction for testing.

This module provides an ABC for TTY detection and yes/no prompts so tests
never depend on the state of the real terminal.
"""

from abc import ABC, abstractmethod


class Console(ABC):
    """Abstract console operations for dependency injection."""

    @abstractmethod
    def is_stdin_interactive(self) -> bool:
        """Check if stdin is connected to an interactive terminal (TTY)."""
        ...

    @abstractmethod
    def is_stderr_tty(self) -> bool:
        """Check if stderr is connected to a TTY."""
        ...

    @abstractmethod
    def confirm(self, prompt: str, *, default: bool) -> bool:
        """Ask a yes/no question and return the answer."""
        ...
