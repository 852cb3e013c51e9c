"""Production PackageManager implementation using subprocess."""

import logging
import subprocess
from pathlib import Path

from worktree_add.gateway.package_manager.abc import PackageManager
from worktree_add.gateway.package_manager.commands import (
    PackageManagerName,
    binary_run_command,
    detect_package_manager,
    install_command,
    parse_major_version,
)
from worktree_add.subprocess_utils import (
    run_subprocess_streaming_to_stderr,
    run_subprocess_with_context,
)

logger = logging.getLogger(__name__)


class RealPackageManager(PackageManager):
    """Production implementation using subprocess."""

    def detect(self, project_dir: Path) -> PackageManagerName | None:
        return detect_package_manager(project_dir)

    def install(self, project_dir: Path) -> None:
        pm = self.detect(project_dir)
        yarn_major = _yarn_major_version(project_dir) if pm == "yarn" else None
        cmd = install_command(
            pm,
            has_package_lock=(project_dir / "package-lock.json").exists(),
            yarn_major=yarn_major,
        )
        logger.debug("Installing dependencies with %s", cmd.display())
        run_subprocess_streaming_to_stderr(
            cmd.argv,
            operation_context=f"run `{cmd.display()}`",
            cwd=project_dir,
        )

    def run_binary(
        self, project_dir: Path, binary: str, args: list[str], *, capture: bool
    ) -> str:
        cmd = binary_run_command(self.detect(project_dir), binary, args)
        operation_context = f"run `{cmd.display()}`"
        if not capture:
            run_subprocess_streaming_to_stderr(
                cmd.argv, operation_context=operation_context, cwd=project_dir
            )
            return ""
        result = run_subprocess_with_context(
            cmd.argv, operation_context=operation_context, cwd=project_dir
        )
        return result.stdout


def _yarn_major_version(project_dir: Path) -> int | None:
    try:
        result = subprocess.run(
            ["yarn", "--version"],
            cwd=project_dir,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None
    return parse_major_version(result.stdout)
