"""Fake InterruptHandlers for testing."""

from collections.abc import Callable

from worktree_add.gateway.interrupts.abc import InterruptHandlers


class FakeInterruptHandlers(InterruptHandlers):
    """Keeps installed handlers in memory; fire() simulates Ctrl-C.

    Tests that need the interrupt mid-run call fire() from inside another
    fake's side effect.
    """

    def __init__(self) -> None:
        self._handlers: list[Callable[[], None]] = []
        self._install_count = 0

    def install(self, handler: Callable[[], None]) -> Callable[[], None]:
        self._handlers.append(handler)
        self._install_count += 1

        def uninstall() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return uninstall

    def fire(self) -> None:
        """Invoke the most recently installed handler."""
        if not self._handlers:
            raise AssertionError("No interrupt handler installed")
        self._handlers[-1]()

    @property
    def is_installed(self) -> bool:
        return bool(self._handlers)

    @property
    def install_count(self) -> int:
        return self._install_count
