"""Shared helpers for integration tests that run the real git binary."""

import subprocess
from dataclasses import dataclass
from pathlib import Path

import pytest


def run_git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def configure_identity(repo: Path) -> None:
    run_git(repo, "config", "user.email", "test@example.com")
    run_git(repo, "config", "user.name", "Test User")
    run_git(repo, "config", "commit.gpgsign", "false")


def init_git_repo(repo: Path, default_branch: str) -> None:
    """Initialize a repository with one commit on default_branch."""
    run_git(repo, "init", "-b", default_branch)
    configure_identity(repo)
    commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    """Write name, commit it, and return the new HEAD SHA."""
    path = repo / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    run_git(repo, "add", name)
    run_git(repo, "commit", "-m", message)
    return run_git(repo, "rev-parse", "HEAD")


@dataclass(frozen=True)
class RemoteSetup:
    """A bare origin, a seed checkout that pushes to it, and a clone under test."""

    origin: Path
    seed: Path
    clone: Path


@pytest.fixture
def remote_setup(tmp_path: Path) -> RemoteSetup:
    origin = tmp_path / "origin.git"
    seed = tmp_path / "seed"
    clone = tmp_path / "work" / "repo"

    origin.mkdir()
    run_git(origin, "init", "--bare", "-b", "main")

    seed.mkdir()
    init_git_repo(seed, "main")
    run_git(seed, "remote", "add", "origin", str(origin))
    run_git(seed, "push", "origin", "main")

    clone.parent.mkdir()
    run_git(clone.parent, "clone", str(origin), clone.name)
    configure_identity(clone)

    return RemoteSetup(origin=origin, seed=seed, clone=clone)
