"""Fake Console implementation for testing."""

from worktree_add.gateway.console.abc import Console


class FakeConsole(Console):
    """In-memory fake that returns configured state and scripted answers.

    This class has NO public setup methods. All state is provided via constructor.

    Mutation Tracking:
    - prompts: list[str] - every prompt passed to confirm()
    """

    def __init__(
        self,
        *,
        is_interactive: bool,
        is_stderr_tty: bool | None = None,
        confirm_responses: list[bool] | None = None,
    ) -> None:
        """Create FakeConsole with configured TTY state.

        Args:
            is_interactive: Whether to report stdin as interactive (TTY)
            is_stderr_tty: Whether to report stderr as a TTY.
                If None, defaults to is_interactive.
            confirm_responses: Answers returned by confirm() in order.
                Asking more questions than scripted is a test bug.
        """
        self._is_interactive = is_interactive
        self._is_stderr_tty = is_stderr_tty if is_stderr_tty is not None else is_interactive
        self._confirm_responses = list(confirm_responses or [])
        self._prompts: list[str] = []

    def is_stdin_interactive(self) -> bool:
        return self._is_interactive

    def is_stderr_tty(self) -> bool:
        return self._is_stderr_tty

    def confirm(self, prompt: str, *, default: bool) -> bool:
        self._prompts.append(prompt)
        if not self._confirm_responses:
            raise AssertionError(f"FakeConsole received unexpected prompt: {prompt}")
        return self._confirm_responses.pop(0)

    @property
    def prompts(self) -> list[str]:
        return self._prompts.copy()
