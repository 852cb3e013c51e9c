"""Production Git implementation using subprocess."""

import shutil
import subprocess
from pathlib import Path

from worktree_add.gateway.git.abc import Git
from worktree_add.gateway.git.types import DivergenceCounts, WorktreeInfo
from worktree_add.subprocess_utils import copied_env_for_git_subprocess, run_subprocess_with_context


class RealGit(Git):
    """Production implementation using subprocess.

    Branch names are user-controlled strings, so every command that takes
    one places it after an explicit `--` or inside a fully-qualified ref.
    """

    def get_repo_root(self, cwd: Path) -> Path:
        """Return the top-level directory of the checkout containing cwd."""
        result = run_subprocess_with_context(
            ["git", "rev-parse", "--show-toplevel"],
            operation_context="determine repository root",
            cwd=cwd,
        )
        return Path(result.stdout.strip())

    def list_worktrees(self, repo_root: Path) -> list[WorktreeInfo]:
        """List all worktrees in the repository."""
        result = run_subprocess_with_context(
            ["git", "worktree", "list", "--porcelain"],
            operation_context="list worktrees",
            cwd=repo_root,
        )

        worktrees: list[WorktreeInfo] = []
        current_path: Path | None = None
        current_branch: str | None = None

        for line in result.stdout.splitlines():
            line = line.strip()
            if line.startswith("worktree "):
                if current_path is not None:
                    worktrees.append(WorktreeInfo(path=current_path, branch=current_branch))
                current_path = Path(line.split(maxsplit=1)[1])
                current_branch = None
            elif line.startswith("branch "):
                if current_path is None:
                    continue
                branch_ref = line.split(maxsplit=1)[1]
                current_branch = branch_ref.removeprefix("refs/heads/")
            elif line == "" and current_path is not None:
                worktrees.append(WorktreeInfo(path=current_path, branch=current_branch))
                current_path = None
                current_branch = None

        if current_path is not None:
            worktrees.append(WorktreeInfo(path=current_path, branch=current_branch))

        # Mark first worktree as root (git guarantees this ordering)
        if worktrees:
            first = worktrees[0]
            worktrees[0] = WorktreeInfo(path=first.path, branch=first.branch, is_root=True)

        return worktrees

    def find_worktree_for_branch(self, repo_root: Path, branch: str) -> Path | None:
        """Find worktree path for given branch name."""
        for wt in self.list_worktrees(repo_root):
            if wt.branch == branch:
                return wt.path
        return None

    def list_untracked_files(self, repo_root: Path) -> list[str]:
        """List untracked and ignored files, NUL-separated for safe parsing."""
        result = run_subprocess_with_context(
            ["git", "ls-files", "--others", "--ignored", "--exclude-standard", "-z"],
            operation_context="list untracked files",
            cwd=repo_root,
        )
        return [entry for entry in result.stdout.split("\0") if entry]

    def local_branch_exists(self, repo_root: Path, branch: str) -> bool:
        """Check whether refs/heads/<branch> exists."""
        result = subprocess.run(
            ["git", "show-ref", "--verify", "--quiet", f"refs/heads/{branch}"],
            cwd=repo_root,
            capture_output=True,
            check=False,
        )
        return result.returncode == 0

    def remote_branch_exists(self, repo_root: Path, remote: str, branch: str) -> bool:
        """Ask the remote whether it has refs/heads/<branch>."""
        ref = f"refs/heads/{branch}"
        result = run_subprocess_with_context(
            ["git", "ls-remote", "--heads", remote, ref],
            operation_context=f"query remote '{remote}' for branch '{branch}'",
            cwd=repo_root,
            env=copied_env_for_git_subprocess(),
        )
        for line in result.stdout.splitlines():
            parts = line.split()
            if len(parts) == 2 and parts[1] == ref:
                return True
        return False

    def get_ref_head(self, repo_root: Path, ref: str) -> str | None:
        """Resolve ref to a commit SHA."""
        result = subprocess.run(
            ["git", "rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        sha = result.stdout.strip()
        return sha or None

    def count_ahead_behind(
        self, repo_root: Path, local_sha: str, remote_sha: str
    ) -> DivergenceCounts:
        """Count commits on each side using the symmetric difference."""
        result = run_subprocess_with_context(
            ["git", "rev-list", "--left-right", "--count", f"{local_sha}...{remote_sha}"],
            operation_context=f"compare {local_sha} with {remote_sha}",
            cwd=repo_root,
        )
        parts = result.stdout.split()
        ahead = _parse_count(parts[0] if len(parts) > 0 else "")
        behind = _parse_count(parts[1] if len(parts) > 1 else "")
        return DivergenceCounts(ahead=ahead, behind=behind)

    def fetch_branch(self, repo_root: Path, remote: str, branch: str) -> None:
        """Fetch a single branch into its remote-tracking ref."""
        refspec = f"+refs/heads/{branch}:refs/remotes/{remote}/{branch}"
        run_subprocess_with_context(
            ["git", "fetch", remote, "--", refspec],
            operation_context=f"fetch branch '{branch}' from remote '{remote}'",
            cwd=repo_root,
            env=copied_env_for_git_subprocess(),
        )

    def force_update_branch(self, repo_root: Path, branch: str, target_ref: str) -> None:
        """Point the local branch at target_ref."""
        run_subprocess_with_context(
            ["git", "branch", "-f", "--", branch, target_ref],
            operation_context=f"update branch '{branch}' to '{target_ref}'",
            cwd=repo_root,
        )

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
        """Add a new git worktree."""
        if not create_branch:
            ref = start_point or f"refs/heads/{branch}"
            cmd = ["git", "worktree", "add", "--", str(path), ref]
            context = f"add worktree for branch '{branch}' at {path}"
        else:
            cmd = ["git", "worktree", "add"]
            if track:
                cmd.append("--track")
            cmd.extend(["-b", branch, "--", str(path)])
            if start_point is not None:
                cmd.append(start_point)
            context = f"add worktree with new branch '{branch}' at {path}"

        run_subprocess_with_context(cmd, operation_context=context, cwd=repo_root)

    def remove_worktree(self, repo_root: Path, path: Path, *, force: bool) -> None:
        """Remove a worktree."""
        cmd = ["git", "worktree", "remove"]
        if force:
            cmd.append("--force")
        cmd.extend(["--", str(path)])
        run_subprocess_with_context(
            cmd,
            operation_context=f"remove worktree at {path}",
            cwd=repo_root,
        )

    def remove_worktree_registration(self, repo_root: Path, path: Path) -> None:
        """Delete the worktrees/<id> admin directory whose gitdir points at path.

        Unlike `git worktree prune`, other stale registrations are left alone.
        """
        admin_root = self._get_git_common_dir(repo_root) / "worktrees"
        target = path.resolve()
        admin_dirs = sorted(admin_root.iterdir()) if admin_root.is_dir() else []
        for admin_dir in admin_dirs:
            gitdir_file = admin_dir / "gitdir"
            if not gitdir_file.is_file():
                continue
            # gitdir holds "<worktree>/.git", relative to admin_dir when not absolute
            dot_git = Path(gitdir_file.read_text(encoding="utf-8").strip())
            if not dot_git.is_absolute():
                dot_git = admin_dir / dot_git
            if dot_git.parent.resolve() != target:
                continue
            try:
                shutil.rmtree(admin_dir)
            except OSError as e:
                raise RuntimeError(
                    f"Failed to remove worktree registration {admin_dir}: {e}"
                ) from e
            return
        raise RuntimeError(f"No worktree registration found for {path} in {admin_root}")

    def _get_git_common_dir(self, repo_root: Path) -> Path:
        result = run_subprocess_with_context(
            ["git", "rev-parse", "--git-common-dir"],
            operation_context="determine git common directory",
            cwd=repo_root,
        )
        git_dir = Path(result.stdout.strip())
        if not git_dir.is_absolute():
            git_dir = repo_root / git_dir
        return git_dir.resolve()


def _parse_count(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        return 0
