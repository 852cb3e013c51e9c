"""Resolve which applications to open and open the new worktree in them."""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from worktree_add.core.context import WorktreeAddContext

logger = logging.getLogger(__name__)

_ARGUMENTS_PATTERN = re.compile(r"\s--?\S")

_ARGUMENTS_HINT = (
    " Note: application arguments are not supported; pass only the application "
    'name (for example, "code" instead of "code --wait").'
)


@dataclass(frozen=True)
class AppLaunchOutcome:
    """What happened when opening the worktree in one application."""

    app: str
    opened: bool
    reason: str | None = None


def resolve_apps(
    option_apps: Sequence[str] | None,
    env_value: str | None,
    config_apps: Sequence[str],
) -> list[str]:
    """Decide the app list from --app values, the env fallback and config.

    An explicit --app always wins, even when every value is blank, so
    `--app ""` disables launching. Otherwise the comma-separated env value
    is used, then the config list. Entries are trimmed, blanks dropped, and
    duplicates collapsed keeping first occurrence.

    Examples:
        >>> resolve_apps(None, "a,,b,a", [])
        ['a', 'b']
        >>> resolve_apps([""], "code", ["zed"])
        []
    """
    if option_apps is not None:
        return _dedupe_preserve_order(option_apps)
    if env_value is not None and env_value.strip():
        return _dedupe_preserve_order(env_value.split(","))
    return _dedupe_preserve_order(config_apps)


def get_unsafe_app_name_reason(app: str) -> str | None:
    """Return why an app name is rejected, or None if it is acceptable.

    Launches never go through a shell; this filter keeps control characters
    out of terminal output and rejects a few characters no real app name uses.
    """
    if ";" in app:
        return "contains ';'"
    if "|" in app:
        return "contains '|'"
    if "`" in app:
        return "contains '`'"
    for character in app:
        code_point = ord(character)
        if code_point <= 0x1F or 0x7F <= code_point <= 0x9F:
            return "contains control characters"
    return None


def open_worktree_apps(
    ctx: WorktreeAddContext,
    destination: Path,
    apps: Sequence[str],
    *,
    dry_run: bool,
) -> list[AppLaunchOutcome]:
    """Open destination in each app. Failures are warned about, never raised."""
    outcomes: list[AppLaunchOutcome] = []
    for app in apps:
        unsafe_reason = get_unsafe_app_name_reason(app)
        if unsafe_reason is not None:
            ctx.feedback.warn(f"Skipping app {app!r}: {unsafe_reason}.")
            outcomes.append(AppLaunchOutcome(app=app, opened=False, reason=unsafe_reason))
            continue

        if dry_run:
            ctx.feedback.step(f'Would open "{destination}" in "{app}"')
            outcomes.append(AppLaunchOutcome(app=app, opened=False, reason="dry run"))
            continue

        ctx.feedback.step(f'Opening "{app}" …')
        try:
            ctx.app_launcher.open(destination, app)
        except OSError as e:
            hint = _ARGUMENTS_HINT if _ARGUMENTS_PATTERN.search(app) else ""
            ctx.feedback.warn(f'Failed to open "{app}": {e}.{hint}')
            outcomes.append(AppLaunchOutcome(app=app, opened=False, reason=str(e)))
            continue

        logger.debug("Opened %s in %s", destination, app)
        outcomes.append(AppLaunchOutcome(app=app, opened=True))
    return outcomes


def _dedupe_preserve_order(apps: Sequence[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for raw in apps:
        app = raw.strip()
        if not app or app in seen:
            continue
        seen.add(app)
        result.append(app)
    return result
