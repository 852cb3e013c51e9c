"""Abstract interface for installing and running project dependencies."""

from abc import ABC, abstractmethod
from pathlib import Path

from worktree_add.gateway.package_manager.commands import PackageManagerName


class PackageManager(ABC):
    """Abstract package manager operations for dependency injection."""

    @abstractmethod
    def detect(self, project_dir: Path) -> PackageManagerName | None:
        """Return the package manager the project uses, or None if unknown."""
        ...

    @abstractmethod
    def install(self, project_dir: Path) -> None:
        """Install dependencies, respecting the lockfile.

        Raises:
            RuntimeError: If the install command exits non-zero
        """
        ...

    @abstractmethod
    def run_binary(
        self, project_dir: Path, binary: str, args: list[str], *, capture: bool
    ) -> str:
        """Run a project-local binary through the package manager.

        Args:
            project_dir: Project directory (contains package.json)
            binary: Binary name (e.g. "next")
            args: Arguments passed to the binary
            capture: Capture and return stdout instead of streaming it

        Returns:
            Captured stdout, or "" when capture is False

        Raises:
            RuntimeError: If the command exits non-zero
        """
        ...
