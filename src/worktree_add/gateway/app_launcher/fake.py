"""Fake AppLauncher for testing."""

from pathlib import Path

from worktree_add.gateway.app_launcher.abc import AppLauncher


class FakeAppLauncher(AppLauncher):
    """Records launches; apps listed in failing_apps raise OSError.

    Mutation Tracking:
    - attempted: list[str] - every app open() was called with
    - opened: list[tuple[Path, str]] - successful launches
    """

    def __init__(self, *, failing_apps: dict[str, str] | None = None) -> None:
        self._failing_apps = failing_apps or {}
        self._attempted: list[str] = []
        self._opened: list[tuple[Path, str]] = []

    def open(self, path: Path, app: str) -> None:
        self._attempted.append(app)
        if app in self._failing_apps:
            raise OSError(self._failing_apps[app])
        self._opened.append((path, app))

    @property
    def attempted(self) -> list[str]:
        return self._attempted.copy()

    @property
    def opened(self) -> list[tuple[Path, str]]:
        return self._opened.copy()
