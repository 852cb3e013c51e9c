"""Fake StatusLogger for testing."""

from worktree_add.gateway.feedback.abc import StatusLogger


class FakeStatusLogger(StatusLogger):
    """Records every message per channel, never suppresses anything.

    Mutation Tracking:
    - steps, successes, details, warnings: list[str]
    - messages: list[tuple[str, str]] - (channel, message) in call order
    """

    def __init__(self) -> None:
        self._messages: list[tuple[str, str]] = []

    def step(self, message: str) -> None:
        self._messages.append(("step", message))

    def success(self, message: str) -> None:
        self._messages.append(("success", message))

    def detail(self, message: str) -> None:
        self._messages.append(("detail", message))

    def warn(self, message: str) -> None:
        self._messages.append(("warn", message))

    def _channel(self, channel: str) -> list[str]:
        return [message for name, message in self._messages if name == channel]

    @property
    def messages(self) -> list[tuple[str, str]]:
        return self._messages.copy()

    @property
    def steps(self) -> list[str]:
        return self._channel("step")

    @property
    def successes(self) -> list[str]:
        return self._channel("success")

    @property
    def details(self) -> list[str]:
        return self._channel("detail")

    @property
    def warnings(self) -> list[str]:
        return self._channel("warn")
