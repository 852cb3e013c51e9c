"""Console status logger writing to stderr."""

from dataclasses import dataclass

from worktree_add.gateway.feedback.abc import StatusLogger
from worktree_add.output.output import user_output


@dataclass(frozen=True)
class _Prefixes:
    step: str
    success: str
    warning: str
    detail: str


_DECORATED = _Prefixes(step="➤ ", success="✓ ", warning="⚠ ", detail="  • ")
_PLAIN = _Prefixes(step="", success="", warning="Warning: ", detail="  - ")


class ConsoleStatusLogger(StatusLogger):
    """Status logger for the terminal.

    - step and detail are shown in verbose or dry-run mode
    - success is shown in verbose mode only
    - warn is always shown
    - in dry-run mode every non-warning line starts with "DRY RUN: "
    """

    def __init__(self, *, verbose: bool, dry_run: bool, decorate: bool) -> None:
        self._verbose = verbose
        self._dry_run = dry_run
        self._prefixes = _DECORATED if decorate else _PLAIN

    def step(self, message: str) -> None:
        if not (self._verbose or self._dry_run):
            return
        user_output(f"{self._dry_run_prefix()}{self._prefixes.step}{message}")

    def success(self, message: str) -> None:
        if not self._verbose:
            return
        user_output(f"{self._dry_run_prefix()}{self._prefixes.success}{message}")

    def detail(self, message: str) -> None:
        if not (self._verbose or self._dry_run):
            return
        user_output(f"{self._dry_run_prefix()}{self._prefixes.detail}{message}")

    def warn(self, message: str) -> None:
        user_output(f"{self._prefixes.warning}{message}")

    def _dry_run_prefix(self) -> str:
        return "DRY RUN: " if self._dry_run else ""
