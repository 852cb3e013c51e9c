"""Value types returned by the Git gateway."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class WorktreeInfo:
    """One entry of `git worktree list --porcelain`."""

    path: Path
    branch: str | None
    is_root: bool = False


@dataclass(frozen=True)
class DivergenceCounts:
    """Commits reachable from one branch tip but not the other.

    ahead: commits on the local branch missing from the remote-tracking ref
    behind: commits on the remote-tracking ref missing from the local branch
    """

    ahead: int
    behind: int
