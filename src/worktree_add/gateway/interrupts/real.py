"""Production InterruptHandlers backed by signal.SIGINT."""

import signal
from collections.abc import Callable
from types import FrameType

from worktree_add.gateway.interrupts.abc import InterruptHandlers


class RealInterruptHandlers(InterruptHandlers):
    """Must be used from the main thread (a restriction of the signal module)."""

    def install(self, handler: Callable[[], None]) -> Callable[[], None]:
        def _on_sigint(signum: int, frame: FrameType | None) -> None:
            handler()

        previous = signal.signal(signal.SIGINT, _on_sigint)

        def uninstall() -> None:
            signal.signal(signal.SIGINT, previous)

        return uninstall
