"""Tests for package manager detection and command construction."""

import json
from pathlib import Path

import pytest

from worktree_add.gateway.package_manager.commands import (
    binary_run_command,
    detect_package_manager,
    install_command,
    load_package_json,
    parse_major_version,
)


def test_package_manager_field_wins_over_lockfile(tmp_path: Path) -> None:
    tmp_path.joinpath("package.json").write_text(
        json.dumps({"packageManager": "pnpm@9.1.0"}), encoding="utf-8"
    )
    tmp_path.joinpath("yarn.lock").write_text("", encoding="utf-8")

    assert detect_package_manager(tmp_path) == "pnpm"


def test_lockfile_order(tmp_path: Path) -> None:
    tmp_path.joinpath("package-lock.json").write_text("{}", encoding="utf-8")
    tmp_path.joinpath("bun.lockb").write_text("", encoding="utf-8")

    assert detect_package_manager(tmp_path) == "bun"


def test_unknown_package_manager_field_falls_back_to_lockfile(tmp_path: Path) -> None:
    tmp_path.joinpath("package.json").write_text(
        json.dumps({"packageManager": "mystery@1.0.0"}), encoding="utf-8"
    )
    tmp_path.joinpath("deno.lock").write_text("", encoding="utf-8")

    assert detect_package_manager(tmp_path) == "deno"


def test_nothing_detected(tmp_path: Path) -> None:
    assert detect_package_manager(tmp_path) is None
    assert load_package_json(tmp_path) is None


@pytest.mark.parametrize(
    ("pm", "has_lock", "yarn_major", "expected"),
    [
        ("pnpm", False, None, "pnpm install --frozen-lockfile"),
        ("yarn", False, 4, "yarn install --immutable"),
        ("yarn", False, 1, "yarn install --frozen-lockfile"),
        ("yarn", False, None, "yarn install --frozen-lockfile"),
        ("bun", False, None, "bun install --frozen-lockfile"),
        ("deno", False, None, "deno install --frozen"),
        ("npm", True, None, "npm ci"),
        ("npm", False, None, "npm install"),
        (None, True, None, "npm ci"),
    ],
)
def test_install_command(pm, has_lock: bool, yarn_major: int | None, expected: str) -> None:
    cmd = install_command(pm, has_package_lock=has_lock, yarn_major=yarn_major)
    assert cmd.display() == expected


@pytest.mark.parametrize(
    ("pm", "expected"),
    [
        ("pnpm", ["pnpm", "exec", "next", "typegen"]),
        ("yarn", ["yarn", "next", "typegen"]),
        ("bun", ["bun", "x", "next", "typegen"]),
        ("npm", ["npx", "next", "typegen"]),
        ("deno", ["npx", "next", "typegen"]),
        (None, ["npx", "next", "typegen"]),
    ],
)
def test_binary_run_command(pm, expected: list[str]) -> None:
    assert binary_run_command(pm, "next", ["typegen"]).argv == expected


def test_parse_major_version() -> None:
    assert parse_major_version("4.1.0\n") == 4
    assert parse_major_version("1.22.19") == 1
    assert parse_major_version("garbage") is None
