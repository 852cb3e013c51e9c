"""Pure helpers for package manager detection and command construction."""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, get_args

PackageManagerName = Literal["npm", "yarn", "pnpm", "bun", "deno"]

# Checked in order; the first lockfile found wins.
LOCKFILES: tuple[tuple[str, PackageManagerName], ...] = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("bun.lock", "bun"),
    ("bun.lockb", "bun"),
    ("deno.lock", "deno"),
    ("package-lock.json", "npm"),
)


@dataclass(frozen=True)
class PackageManagerCommand:
    """A command line to run inside the project directory."""

    command: str
    args: tuple[str, ...]

    @property
    def argv(self) -> list[str]:
        return [self.command, *self.args]

    def display(self) -> str:
        return " ".join(self.argv).strip()


def load_package_json(project_dir: Path) -> dict | None:
    """Parse package.json, or return None when the project has none."""
    package_json_path = project_dir / "package.json"
    if not package_json_path.exists():
        return None
    data = json.loads(package_json_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        return None
    return data


def detect_package_manager(project_dir: Path) -> PackageManagerName | None:
    """Detect the package manager from the packageManager field, then lockfiles."""
    package_json = load_package_json(project_dir)
    if package_json is not None:
        field = package_json.get("packageManager")
        if isinstance(field, str):
            name = field.split("@", 1)[0].strip()
            if name in get_args(PackageManagerName):
                return name  # type: ignore[return-value]

    for lockfile, name in LOCKFILES:
        if (project_dir / lockfile).exists():
            return name
    return None


def parse_major_version(value: str) -> int | None:
    """Parse the leading major version number from a `--version` output."""
    match = re.match(r"^(\d+)", value.strip())
    if match is None:
        return None
    return int(match.group(1))


def install_command(
    pm: PackageManagerName | None,
    *,
    has_package_lock: bool,
    yarn_major: int | None,
) -> PackageManagerCommand:
    """Return the lockfile-respecting install command for a package manager."""
    match pm:
        case "pnpm":
            return PackageManagerCommand("pnpm", ("install", "--frozen-lockfile"))
        case "yarn":
            if yarn_major is not None and yarn_major >= 2:
                return PackageManagerCommand("yarn", ("install", "--immutable"))
            return PackageManagerCommand("yarn", ("install", "--frozen-lockfile"))
        case "bun":
            return PackageManagerCommand("bun", ("install", "--frozen-lockfile"))
        case "deno":
            return PackageManagerCommand("deno", ("install", "--frozen"))
        case "npm" | None:
            if has_package_lock:
                return PackageManagerCommand("npm", ("ci",))
            return PackageManagerCommand("npm", ("install",))


def binary_run_command(
    pm: PackageManagerName | None, binary: str, args: list[str]
) -> PackageManagerCommand:
    """Return the command that runs a project-local binary."""
    match pm:
        case "pnpm":
            return PackageManagerCommand("pnpm", ("exec", binary, *args))
        case "yarn":
            return PackageManagerCommand("yarn", (binary, *args))
        case "bun":
            return PackageManagerCommand("bun", ("x", binary, *args))
        case "npm" | "deno" | None:
            return PackageManagerCommand("npx", (binary, *args))
