"""Abstract interface for the git operations used to provision a worktree."""

from abc import ABC, abstractmethod
from pathlib import Path

from worktree_add.gateway.git.types import DivergenceCounts, WorktreeInfo


class Git(ABC):
    """Abstract interface for git operations.

    All implementations (real, fake) must implement this interface. Methods
    that can fail for reasons outside the caller's control (network, auth,
    a rejected ref update) raise RuntimeError with git's stderr in the message.
    """

    # ============================================================================
    # Repository & worktree queries
    # ============================================================================

    @abstractmethod
    def get_repo_root(self, cwd: Path) -> Path:
        """Return the top-level directory of the checkout containing cwd.

        Raises:
            RuntimeError: If cwd is not inside a git checkout
        """
        ...

    @abstractmethod
    def list_worktrees(self, repo_root: Path) -> list[WorktreeInfo]:
        """List all worktrees registered in the repository.

        The first entry is the main (root) worktree.
        """
        ...

    @abstractmethod
    def find_worktree_for_branch(self, repo_root: Path, branch: str) -> Path | None:
        """Return the worktree path where branch is checked out, or None."""
        ...

    @abstractmethod
    def list_untracked_files(self, repo_root: Path) -> list[str]:
        """List untracked and ignored files relative to repo_root.

        Equivalent to `git ls-files --others --ignored --exclude-standard -z`.
        """
        ...

    # ============================================================================
    # Branch & ref queries
    # ============================================================================

    @abstractmethod
    def local_branch_exists(self, repo_root: Path, branch: str) -> bool:
        """Check whether refs/heads/<branch> exists."""
        ...

    @abstractmethod
    def remote_branch_exists(self, repo_root: Path, remote: str, branch: str) -> bool:
        """Ask the remote whether it has refs/heads/<branch>.

        Raises:
            RuntimeError: If the remote cannot be queried (network, auth)
        """
        ...

    @abstractmethod
    def get_ref_head(self, repo_root: Path, ref: str) -> str | None:
        """Resolve a fully-qualified ref to a commit SHA, or None if it doesn't resolve."""
        ...

    @abstractmethod
    def count_ahead_behind(
        self, repo_root: Path, local_sha: str, remote_sha: str
    ) -> DivergenceCounts:
        """Count commits on each side of local_sha...remote_sha.

        Raises:
            RuntimeError: If git cannot compare the commits
        """
        ...

    # ============================================================================
    # Mutations
    # ============================================================================

    @abstractmethod
    def fetch_branch(self, repo_root: Path, remote: str, branch: str) -> None:
        """Update refs/remotes/<remote>/<branch> from the remote.

        Raises:
            RuntimeError: If the fetch fails
        """
        ...

    @abstractmethod
    def force_update_branch(self, repo_root: Path, branch: str, target_ref: str) -> None:
        """Point refs/heads/<branch> at target_ref (`git branch -f`)."""
        ...

    @abstractmethod
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
        """Register a new worktree at path.

        Args:
            repo_root: Path to the git repository root
            path: Destination directory of the new worktree
            branch: Branch to check out (or to create when create_branch)
            start_point: Ref the worktree is based on; None means the existing
                local branch (create_branch=False) or HEAD (create_branch=True)
            create_branch: True to create branch, False to check out existing
            track: Set up upstream tracking for the created branch
        """
        ...

    @abstractmethod
    def remove_worktree(self, repo_root: Path, path: Path, *, force: bool) -> None:
        """Remove the worktree at path and its registration."""
        ...

    @abstractmethod
    def remove_worktree_registration(self, repo_root: Path, path: Path) -> None:
        """Drop the registration of the worktree at path, leaving all others.

        Used after the worktree directory itself is gone. Raises RuntimeError
        when no registration points at path or it cannot be removed.
        """
        ...
