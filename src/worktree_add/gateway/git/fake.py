"""Fake git operations for testing."""

from dataclasses import dataclass
from pathlib import Path

from worktree_add.gateway.git.abc import Git
from worktree_add.gateway.git.types import DivergenceCounts, WorktreeInfo


@dataclass(frozen=True)
class AddedWorktree:
    """Record of one add_worktree call."""

    path: Path
    branch: str
    start_point: str | None
    create_branch: bool
    track: bool


class FakeGit(Git):
    """In-memory fake implementation of git operations.

    State Management:
    - repo_root: Path returned by get_repo_root (None simulates "not a repository")
    - worktrees: list[WorktreeInfo] - registered worktrees, root first
    - local_branches: dict[str, str] - refs/heads/<name> -> SHA
    - remote_branches: dict[str, str] - branches on the remote server -> SHA
    - remote_tracking: dict[str, str] - refs/remotes/<remote>/<name> -> SHA
    - divergence: dict[tuple[str, str], DivergenceCounts] - (local, remote) SHA pair -> counts
    - head_sha: SHA that HEAD of the calling checkout points at
    - untracked_files: list[str] - paths returned by list_untracked_files

    Failure Injection (each is the stderr text of the simulated failure):
    - remote_query_error, fetch_error, compare_error, force_update_error,
      add_worktree_error, remove_worktree_error, remove_registration_error

    Mutation Tracking:
    - remote_queries: list[str]
    - fetched_branches: list[tuple[str, str]] - (remote, branch)
    - force_updated_branches: list[tuple[str, str]] - (branch, target_ref)
    - added_worktrees: list[AddedWorktree]
    - removed_worktrees: list[Path]
    - removed_registrations: list[Path]
    """

    def __init__(
        self,
        *,
        repo_root: Path | None = None,
        worktrees: list[WorktreeInfo] | None = None,
        local_branches: dict[str, str] | None = None,
        remote_branches: dict[str, str] | None = None,
        remote_tracking: dict[str, str] | None = None,
        divergence: dict[tuple[str, str], DivergenceCounts] | None = None,
        head_sha: str = "0000000000000000000000000000000000000000",
        untracked_files: list[str] | None = None,
        remote_query_error: str | None = None,
        fetch_error: str | None = None,
        compare_error: str | None = None,
        force_update_error: str | None = None,
        add_worktree_error: str | None = None,
        remove_worktree_error: str | None = None,
        remove_registration_error: str | None = None,
    ) -> None:
        self._repo_root = repo_root
        self._worktrees = list(worktrees or [])
        self._local_branches = dict(local_branches or {})
        self._remote_branches = dict(remote_branches or {})
        self._remote_tracking = dict(remote_tracking or {})
        self._divergence = dict(divergence or {})
        self._head_sha = head_sha
        self._untracked_files = list(untracked_files or [])

        self._remote_query_error = remote_query_error
        self._fetch_error = fetch_error
        self._compare_error = compare_error
        self._force_update_error = force_update_error
        self._add_worktree_error = add_worktree_error
        self._remove_worktree_error = remove_worktree_error
        self._remove_registration_error = remove_registration_error

        # Mutation tracking
        self._remote_queries: list[str] = []
        self._fetched_branches: list[tuple[str, str]] = []
        self._force_updated_branches: list[tuple[str, str]] = []
        self._added_worktrees: list[AddedWorktree] = []
        self._removed_worktrees: list[Path] = []
        self._removed_registrations: list[Path] = []

    def get_repo_root(self, cwd: Path) -> Path:
        if self._repo_root is None:
            raise RuntimeError(
                "Failed to determine repository root (exit code 128)\n"
                "fatal: not a git repository (or any of the parent directories): .git"
            )
        return self._repo_root

    def list_worktrees(self, repo_root: Path) -> list[WorktreeInfo]:
        return list(self._worktrees)

    def find_worktree_for_branch(self, repo_root: Path, branch: str) -> Path | None:
        for wt in self._worktrees:
            if wt.branch == branch:
                return wt.path
        return None

    def list_untracked_files(self, repo_root: Path) -> list[str]:
        return list(self._untracked_files)

    def local_branch_exists(self, repo_root: Path, branch: str) -> bool:
        return branch in self._local_branches

    def remote_branch_exists(self, repo_root: Path, remote: str, branch: str) -> bool:
        self._remote_queries.append(branch)
        if self._remote_query_error is not None:
            raise RuntimeError(self._remote_query_error)
        return branch in self._remote_branches

    def get_ref_head(self, repo_root: Path, ref: str) -> str | None:
        if ref == "HEAD":
            return self._head_sha
        if ref.startswith("refs/heads/"):
            return self._local_branches.get(ref.removeprefix("refs/heads/"))
        if ref.startswith("refs/remotes/origin/"):
            return self._remote_tracking.get(ref.removeprefix("refs/remotes/origin/"))
        if ref.startswith("origin/"):
            return self._remote_tracking.get(ref.removeprefix("origin/"))
        return self._local_branches.get(ref)

    def count_ahead_behind(
        self, repo_root: Path, local_sha: str, remote_sha: str
    ) -> DivergenceCounts:
        if self._compare_error is not None:
            raise RuntimeError(self._compare_error)
        return self._divergence.get((local_sha, remote_sha), DivergenceCounts(ahead=0, behind=0))

    def fetch_branch(self, repo_root: Path, remote: str, branch: str) -> None:
        self._fetched_branches.append((remote, branch))
        if self._fetch_error is not None:
            raise RuntimeError(self._fetch_error)
        if branch in self._remote_branches:
            self._remote_tracking[branch] = self._remote_branches[branch]

    def force_update_branch(self, repo_root: Path, branch: str, target_ref: str) -> None:
        if self._force_update_error is not None:
            raise RuntimeError(self._force_update_error)
        target_sha = self.get_ref_head(repo_root, target_ref)
        if target_sha is None:
            raise RuntimeError(f"fatal: not a valid object name: '{target_ref}'")
        self._local_branches[branch] = target_sha
        self._force_updated_branches.append((branch, target_ref))

    def add_worktree(
        self,
        repo_root: Path,
        path: Path,
        *,
        branch: str,
        start_point: str | None,
        create_branch: bool,
        track: bool,
    ) -> None:
        """Add a new worktree (mutates internal state and creates directory)."""
        if self._add_worktree_error is not None:
            raise RuntimeError(self._add_worktree_error)
        if create_branch:
            base_sha = self.get_ref_head(repo_root, start_point or "HEAD")
            self._local_branches[branch] = base_sha or self._head_sha
        self._worktrees.append(WorktreeInfo(path=path, branch=branch, is_root=False))
        # Create the worktree directory to simulate git worktree add behavior
        path.mkdir(parents=True, exist_ok=True)
        self._added_worktrees.append(
            AddedWorktree(
                path=path,
                branch=branch,
                start_point=start_point,
                create_branch=create_branch,
                track=track,
            )
        )

    def remove_worktree(self, repo_root: Path, path: Path, *, force: bool) -> None:
        """Remove a worktree (mutates internal state)."""
        self._removed_worktrees.append(path)
        if self._remove_worktree_error is not None:
            raise RuntimeError(self._remove_worktree_error)
        self._worktrees = [wt for wt in self._worktrees if wt.path != path]

    def remove_worktree_registration(self, repo_root: Path, path: Path) -> None:
        """Drop the registration for path only (mutates internal state)."""
        self._removed_registrations.append(path)
        if self._remove_registration_error is not None:
            raise RuntimeError(self._remove_registration_error)
        if not any(wt.path == path for wt in self._worktrees):
            raise RuntimeError(f"No worktree registration found for {path}")
        self._worktrees = [wt for wt in self._worktrees if wt.path != path]

    # Read-only properties for test assertions
    @property
    def local_branches(self) -> dict[str, str]:
        return dict(self._local_branches)

    @property
    def remote_queries(self) -> list[str]:
        return self._remote_queries.copy()

    @property
    def fetched_branches(self) -> list[tuple[str, str]]:
        return self._fetched_branches.copy()

    @property
    def force_updated_branches(self) -> list[tuple[str, str]]:
        return self._force_updated_branches.copy()

    @property
    def added_worktrees(self) -> list[AddedWorktree]:
        return self._added_worktrees.copy()

    @property
    def removed_worktrees(self) -> list[Path]:
        return self._removed_worktrees.copy()

    @property
    def removed_registrations(self) -> list[Path]:
        return self._removed_registrations.copy()
