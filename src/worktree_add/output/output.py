"""Output helpers that keep stdout reserved for machine-readable results.

Status and diagnostics go to stderr so that stdout can be captured by shell
integrations (``cd "$(worktree-add feature/x)"``).
"""

import sys

import click


def user_output(message: str = "", nl: bool = True, color: bool | None = None) -> None:
    """Write a human-facing message to stderr."""
    click.echo(message, nl=nl, err=True, color=color)


def machine_output(message: str = "", nl: bool = True) -> None:
    """Write a machine-readable result to stdout."""
    click.echo(message, nl=nl)


def user_confirm(prompt: str, *, default: bool = False) -> bool:
    """Ask a yes/no question on stderr.

    stderr is flushed first so buffered status lines appear above the prompt.
    """
    sys.stderr.flush()
    return click.confirm(prompt, default=default, err=True)
