"""Abstract interface for opening a directory in a named application."""

from abc import ABC, abstractmethod
from pathlib import Path


class AppLauncher(ABC):
    """Best-effort, detached application launch."""

    @abstractmethod
    def open(self, path: Path, app: str) -> None:
        """Open path in app without waiting for the app to exit.

        Returns once the launch has been handed off to the OS.

        Raises:
            OSError: If the application cannot be started
        """
        ...
