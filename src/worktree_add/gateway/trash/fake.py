"""Fake Trash for testing."""

import shutil
from pathlib import Path

from worktree_add.gateway.trash.abc import Trash


class FakeTrash(Trash):
    """Moves paths into a directory standing in for the OS trash.

    State Management:
    - trash_dir: where trashed paths end up (None keeps paths in place and
      only records the call)
    - error: message of an OSError to raise instead of moving

    Mutation Tracking:
    - trashed_paths: list[Path] - original locations, in call order
    """

    def __init__(self, *, trash_dir: Path | None = None, error: str | None = None) -> None:
        self._trash_dir = trash_dir
        self._error = error
        self._locations: dict[Path, Path | None] = {}

    def move_to_trash(self, path: Path) -> None:
        if self._error is not None:
            raise OSError(self._error)
        location: Path | None = None
        if self._trash_dir is not None:
            self._trash_dir.mkdir(parents=True, exist_ok=True)
            location = self._trash_dir / f"{len(self._locations)}-{path.name}"
            shutil.move(str(path), str(location))
        self._locations[path] = location

    def location_of(self, path: Path) -> Path | None:
        """Where a trashed path is kept, or None if it was never moved."""
        return self._locations.get(path)

    @property
    def trashed_paths(self) -> list[Path]:
        return list(self._locations)
