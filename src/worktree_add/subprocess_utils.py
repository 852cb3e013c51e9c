"""Subprocess helpers shared by the production gateways."""

import logging
import os
import subprocess
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

STDERR_FD = 2


def copied_env_for_git_subprocess() -> dict[str, str]:
    """Return a copy of the environment that keeps git from prompting.

    GIT_TERMINAL_PROMPT=0 makes git fail fast instead of blocking on a
    credential prompt that nobody can answer.
    """
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env


def run_subprocess_with_context(
    cmd: Sequence[str],
    *,
    operation_context: str,
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a command and raise a RuntimeError with context when it fails.

    Args:
        cmd: Command and arguments
        operation_context: Human description used in the error message
            (e.g. "fetch branch 'main' from remote 'origin'")
        cwd: Working directory for the command
        env: Environment override (defaults to the current environment)

    Returns:
        The completed process with text stdout and stderr

    Raises:
        RuntimeError: If the command cannot be started or exits non-zero.
            The message carries the captured stderr so callers can extract
            a diagnostic line from it.
    """
    logger.debug("Running %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
            env=dict(env) if env is not None else None,
        )
    except OSError as e:
        raise RuntimeError(f"Failed to {operation_context}: {e}") from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        message = f"Failed to {operation_context} (exit code {result.returncode})"
        if stderr:
            message = f"{message}\n{stderr}"
        raise RuntimeError(message)

    return result


def run_subprocess_streaming_to_stderr(
    cmd: Sequence[str],
    *,
    operation_context: str,
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> None:
    """Run a command with all of its output shown on stderr as it happens.

    The child's stdout is attached to file descriptor 2, so this process's
    stdout stays reserved for machine output. The child's stderr is echoed
    line by line and kept for the failure message.

    Raises:
        RuntimeError: If the command cannot be started or exits non-zero.
            The message carries the child's stderr.
    """
    logger.debug("Running %s (cwd=%s, stdout to stderr)", " ".join(cmd), cwd)
    try:
        process = subprocess.Popen(
            list(cmd),
            cwd=cwd,
            # fd 2 itself: sys.stderr may be a wrapper without a file descriptor
            stdout=STDERR_FD,
            stderr=subprocess.PIPE,
            text=True,
            bufsize=1,
            env=dict(env) if env is not None else None,
        )
    except OSError as e:
        raise RuntimeError(f"Failed to {operation_context}: {e}") from e

    stderr_output: list[str] = []
    with process:
        if process.stderr:
            for line in process.stderr:
                stderr_output.append(line)
                print(line, end="", file=sys.stderr)
                sys.stderr.flush()

    if process.returncode != 0:
        stderr = "".join(stderr_output).strip()
        message = f"Failed to {operation_context} (exit code {process.returncode})"
        if stderr:
            message = f"{message}\n{stderr}"
        raise RuntimeError(message)
