"""Copy untracked and ignored files from the source checkout into a new worktree."""

import logging
import re
import shutil
from collections.abc import Sequence
from pathlib import Path

from worktree_add.core.context import WorktreeAddContext

logger = logging.getLogger(__name__)

# Build outputs and dependency trees that are cheaper to regenerate than copy.
DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "node_modules/**",
    ".next/**",
    ".nuxt/**",
    ".output/**",
    "dist/**",
    "build/**",
    "**/*.tsbuildinfo",
    ".turbo/**",
    ".cache/**",
    "coverage/**",
    ".venv/**",
    "venv/**",
    "__pycache__/**",
    ".pytest_cache/**",
    "target/**",  # Rust
    ".dart_tool/**",  # Dart
)


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a glob into a regex anchored to the whole path.

    `**` matches anything including `/`; `*` and `?` never cross `/`.

    Examples:
        >>> bool(glob_to_regex("dist/**").match("dist/a/b.js"))
        True
        >>> bool(glob_to_regex("*.log").match("logs/app.log"))
        False
    """
    parts: list[str] = []
    index = 0
    while index < len(pattern):
        character = pattern[index]
        if character == "*":
            if pattern[index + 1 : index + 2] == "*":
                parts.append(".*")
                index += 2
                continue
            parts.append("[^/]*")
        elif character == "?":
            parts.append("[^/]")
        else:
            parts.append(re.escape(character))
        index += 1
    return re.compile("^" + "".join(parts) + "$")


def to_posix_path(value: str) -> str:
    return value.replace("\\", "/")


def is_excluded(relative_path: str, patterns: Sequence[re.Pattern[str]]) -> bool:
    posix_path = to_posix_path(relative_path)
    return any(regex.match(posix_path) for regex in patterns)


def copy_untracked_files(
    ctx: WorktreeAddContext,
    repo_root: Path,
    destination: Path,
    *,
    extra_excludes: Sequence[str],
    dry_run: bool,
) -> list[str]:
    """Copy every untracked file git reports, skipping excluded paths.

    Args:
        ctx: Run context
        repo_root: Source checkout
        destination: New worktree
        extra_excludes: Additional glob patterns from repository config
        dry_run: List what would be copied without copying

    Returns:
        Relative paths that were copied (or would be, in dry-run)
    """
    patterns = [glob_to_regex(p) for p in (*DEFAULT_EXCLUDE_PATTERNS, *extra_excludes)]
    entries = ctx.git.list_untracked_files(repo_root)

    selected = [entry for entry in entries if not is_excluded(entry, patterns)]
    logger.debug("Copying %d of %d untracked entries", len(selected), len(entries))
    if not selected:
        return []

    ctx.feedback.step(f"{'Would copy' if dry_run else 'Copying'} {len(selected)} untracked file(s)")
    for relative_path in selected:
        if dry_run:
            ctx.feedback.detail(f"would copy {relative_path}")
            continue
        source = repo_root / relative_path
        target = destination / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        if source.is_dir() and not source.is_symlink():
            shutil.copytree(source, target, symlinks=True, dirs_exist_ok=True)
        else:
            shutil.copy2(source, target, follow_symlinks=False)
        ctx.feedback.detail(f"copied {relative_path}")
    return selected
