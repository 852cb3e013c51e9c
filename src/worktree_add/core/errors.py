"""Error taxonomy for worktree provisioning.

Core modules raise these; only the CLI turns them into exit codes.
"""


class WorktreeAddError(Exception):
    """Base class for failures reported to the user as a single message."""


class BranchNameError(WorktreeAddError, ValueError):
    """The requested branch name is empty or invalid."""


class BranchCheckedOutError(WorktreeAddError):
    """The branch is already checked out in another worktree."""


class RemoteUnavailableError(WorktreeAddError):
    """The remote could not be used and there is no local branch to fall back to."""


class BranchDivergedError(WorktreeAddError):
    """The local branch and its remote-tracking ref both have unique commits."""

    def __init__(self, message: str, *, branch: str, ahead: int, behind: int) -> None:
        super().__init__(message)
        self.branch = branch
        self.ahead = ahead
        self.behind = behind


class DestinationConflictError(WorktreeAddError):
    """The destination directory exists and could not be cleared."""


class ConfigError(WorktreeAddError):
    """The repository config file could not be loaded."""


class ProvisioningCancelled(WorktreeAddError):
    """The user declined a confirmation. Not a failure."""
