"""Fake PackageManager for testing."""

from pathlib import Path

from worktree_add.gateway.package_manager.abc import PackageManager
from worktree_add.gateway.package_manager.commands import PackageManagerName


class FakePackageManager(PackageManager):
    """In-memory fake implementation.

    State Management:
    - detected: package manager reported by detect()
    - binary_outputs: dict[str, str] - binary name -> captured stdout
    - install_error: message of the RuntimeError raised by install()
    - binary_errors: dict[str, str] - binary name -> error message

    Mutation Tracking:
    - installs: list[Path]
    - binary_runs: list[tuple[Path, str, tuple[str, ...]]]
    """

    def __init__(
        self,
        *,
        detected: PackageManagerName | None = None,
        binary_outputs: dict[str, str] | None = None,
        install_error: str | None = None,
        binary_errors: dict[str, str] | None = None,
    ) -> None:
        self._detected = detected
        self._binary_outputs = binary_outputs or {}
        self._install_error = install_error
        self._binary_errors = binary_errors or {}
        self._installs: list[Path] = []
        self._binary_runs: list[tuple[Path, str, tuple[str, ...]]] = []

    def detect(self, project_dir: Path) -> PackageManagerName | None:
        return self._detected

    def install(self, project_dir: Path) -> None:
        self._installs.append(project_dir)
        if self._install_error is not None:
            raise RuntimeError(self._install_error)

    def run_binary(
        self, project_dir: Path, binary: str, args: list[str], *, capture: bool
    ) -> str:
        self._binary_runs.append((project_dir, binary, tuple(args)))
        if binary in self._binary_errors:
            raise RuntimeError(self._binary_errors[binary])
        if not capture:
            return ""
        return self._binary_outputs.get(binary, "")

    @property
    def installs(self) -> list[Path]:
        return self._installs.copy()

    @property
    def binary_runs(self) -> list[tuple[Path, str, tuple[str, ...]]]:
        return self._binary_runs.copy()
