"""Production AppLauncher using detached subprocesses."""

import logging
import subprocess
import sys
from pathlib import Path

from worktree_add.gateway.app_launcher.abc import AppLauncher

logger = logging.getLogger(__name__)


class RealAppLauncher(AppLauncher):
    """Spawns the app detached from this process; never waits for it.

    The app name is passed as a single argv element (no shell), so arguments
    embedded in the name are not interpreted.
    """

    def open(self, path: Path, app: str) -> None:
        if sys.platform == "darwin":
            argv = ["open", "-a", app, str(path)]
        elif sys.platform == "win32":
            argv = ["cmd", "/c", "start", "", app, str(path)]
        else:
            argv = [app, str(path)]

        logger.debug("Launching %s", argv)
        subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
