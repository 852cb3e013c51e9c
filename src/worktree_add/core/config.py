"""Repository-level configuration for worktree provisioning."""

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from worktree_add.core.errors import ConfigError

CONFIG_DIR_NAME = ".worktree-add"
CONFIG_FILE_NAME = "config.toml"

# Comma-separated fallback app list, read only when --app is entirely absent.
APP_ENV_VAR = "WORKTREE_ADD_APP"
CI_ENV_VAR = "CI"
NO_COLOR_ENV_VAR = "NO_COLOR"


@dataclass(frozen=True)
class LoadedConfig:
    """In-memory representation of `.worktree-add/config.toml`."""

    apps: list[str] = field(default_factory=list)
    copy_exclude: list[str] = field(default_factory=list)
    post_create_commands: list[str] = field(default_factory=list)
    post_create_shell: str | None = None


def load_config(repo_root: Path) -> LoadedConfig:
    """Load config.toml from the repository's config directory if present.

    Example config:
      apps = ["code"]

      [copy]
      exclude = ["*.log", "tmp/**"]

      [post_create]
      shell = "bash"
      commands = [
        "make dev",
      ]

    Raises:
        ConfigError: If the file exists but is not valid TOML or has wrong types
    """
    cfg_path = repo_root / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    if not cfg_path.exists():
        return LoadedConfig()

    try:
        data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {cfg_path}: {e}") from e

    copy_section = _table(data, "copy", cfg_path)
    post = _table(data, "post_create", cfg_path)
    shell = post.get("shell")
    if shell is not None and not isinstance(shell, str):
        raise ConfigError(f"Invalid config file {cfg_path}: post_create.shell must be a string")

    return LoadedConfig(
        apps=_string_list(data, "apps", cfg_path),
        copy_exclude=_string_list(copy_section, "exclude", cfg_path),
        post_create_commands=_string_list(post, "commands", cfg_path),
        post_create_shell=shell,
    )


def is_ci_environment(env: Mapping[str, str]) -> bool:
    """Check whether the CI marker is set to a truthy value."""
    value = env.get(CI_ENV_VAR)
    if value is None:
        return False
    return value.strip().lower() not in ("", "0", "false")


def _table(data: Mapping[str, object], key: str, cfg_path: Path) -> Mapping[str, object]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"Invalid config file {cfg_path}: [{key}] must be a table")
    return value


def _string_list(data: Mapping[str, object], key: str, cfg_path: Path) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"Invalid config file {cfg_path}: {key} must be a list of strings")
    return list(value)
