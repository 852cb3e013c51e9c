"""Abstract interface for interrupt (Ctrl-C) handling.

Keeps real process signals out of the provisioning logic so rollback on
interrupt can be tested by firing the handler directly.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable


class InterruptHandlers(ABC):
    """Installs a process-wide interrupt handler."""

    @abstractmethod
    def install(self, handler: Callable[[], None]) -> Callable[[], None]:
        """Install handler for the interrupt signal.

        Returns:
            A callable that restores the previous handler
        """
        ...
