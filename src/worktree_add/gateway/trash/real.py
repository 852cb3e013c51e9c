"""Production Trash implementation using send2trash.

Platform behavior comes from send2trash:
- macOS: Finder trash
- Windows: Recycle Bin
- Linux: freedesktop.org trash (~/.local/share/Trash); on headless systems the
  directory still exists and files can be restored from it by hand
"""

from pathlib import Path

from send2trash import send2trash

from worktree_add.gateway.trash.abc import Trash


class RealTrash(Trash):
    """Production implementation backed by the OS trash."""

    def move_to_trash(self, path: Path) -> None:
        send2trash(str(path))
