"""Abstract interface for moving paths to the OS trash / recycle bin."""

from abc import ABC, abstractmethod
from pathlib import Path


class Trash(ABC):
    """Reversible deletion. Implementations must never delete permanently."""

    @abstractmethod
    def move_to_trash(self, path: Path) -> None:
        """Move path (file or directory) to a location the user can restore from.

        Raises:
            OSError: If the path cannot be moved
        """
        ...
