"""Abstract status logger.

Four independent channels. Implementations may suppress step, success and
detail depending on configuration; warn is never suppressed.
"""

from abc import ABC, abstractmethod


class StatusLogger(ABC):
    """Abstract status logger for dependency injection."""

    @abstractmethod
    def step(self, message: str) -> None:
        """Announce an action that is starting (or would start in dry-run)."""
        ...

    @abstractmethod
    def success(self, message: str) -> None:
        """Report that an action completed."""
        ...

    @abstractmethod
    def detail(self, message: str) -> None:
        """Supplementary information about the current step."""
        ...

    @abstractmethod
    def warn(self, message: str) -> None:
        """Something the user should know about; always shown."""
        ...
