"""Tests for copying untracked files into a new worktree."""

from pathlib import Path

import pytest

from worktree_add.core.context import context_for_test
from worktree_add.core.untracked_copy import (
    DEFAULT_EXCLUDE_PATTERNS,
    copy_untracked_files,
    glob_to_regex,
    is_excluded,
)
from worktree_add.gateway.git.fake import FakeGit


@pytest.mark.parametrize(
    ("pattern", "path", "matches"),
    [
        ("node_modules/**", "node_modules/react/index.js", True),
        ("node_modules/**", "packages/a/node_modules/x.js", False),
        ("**/*.tsbuildinfo", "packages/a/tsconfig.tsbuildinfo", True),
        ("*.log", "app.log", True),
        ("*.log", "logs/app.log", False),
        ("file?.txt", "file1.txt", True),
        ("file?.txt", "file/.txt", False),
        ("a.b", "axb", False),
    ],
)
def test_glob_to_regex(pattern: str, path: str, matches: bool) -> None:
    assert bool(glob_to_regex(pattern).match(path)) is matches


def test_windows_separators_are_normalized() -> None:
    patterns = [glob_to_regex(p) for p in DEFAULT_EXCLUDE_PATTERNS]

    assert is_excluded("node_modules\\react\\index.js", patterns)


def test_copies_untracked_files_skipping_excluded(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    dest = tmp_path / "repo-feature"
    (repo / "config").mkdir(parents=True)
    (repo / "node_modules" / "x").mkdir(parents=True)
    (repo / ".env").write_text("SECRET=1\n", encoding="utf-8")
    (repo / "config" / "local.json").write_text("{}", encoding="utf-8")
    (repo / "node_modules" / "x" / "index.js").write_text("", encoding="utf-8")
    (repo / "debug.log").write_text("", encoding="utf-8")
    dest.mkdir()
    git = FakeGit(
        repo_root=repo,
        untracked_files=[".env", "config/local.json", "node_modules/x/index.js", "debug.log"],
    )
    ctx = context_for_test(cwd=repo, git=git)

    copied = copy_untracked_files(ctx, repo, dest, extra_excludes=["*.log"], dry_run=False)

    assert copied == [".env", "config/local.json"]
    assert (dest / ".env").read_text(encoding="utf-8") == "SECRET=1\n"
    assert (dest / "config" / "local.json").exists()
    assert not (dest / "node_modules").exists()
    assert not (dest / "debug.log").exists()


def test_dry_run_lists_without_copying(tmp_path: Path) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / ".env").write_text("", encoding="utf-8")
    dest = tmp_path / "repo-feature"
    git = FakeGit(repo_root=repo, untracked_files=[".env"])
    ctx = context_for_test(cwd=repo, git=git)

    copied = copy_untracked_files(ctx, repo, dest, extra_excludes=[], dry_run=True)

    assert copied == [".env"]
    assert not dest.exists()
