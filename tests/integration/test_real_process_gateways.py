"""Tests for the subprocess-backed shell, package manager and trash gateways."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from worktree_add.gateway.package_manager.real import RealPackageManager
from worktree_add.gateway.shell.real import RealShell
from worktree_add.gateway.trash.real import RealTrash

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses /bin/sh scripts")
linux_only = pytest.mark.skipif(sys.platform != "linux", reason="freedesktop trash layout")


@posix_only
def test_shell_output_goes_to_stderr(tmp_path: Path, capfd: pytest.CaptureFixture[str]) -> None:
    RealShell().run_command("echo to-stdout; echo to-stderr >&2", tmp_path, shell=None)

    out, err = capfd.readouterr()
    assert out == ""
    assert "to-stdout" in err
    assert "to-stderr" in err


@posix_only
def test_shell_runs_in_cwd_with_configured_shell(tmp_path: Path) -> None:
    RealShell().run_command("pwd > where.txt", tmp_path, shell="/bin/sh")

    assert Path((tmp_path / "where.txt").read_text(encoding="utf-8").strip()).resolve() == (
        tmp_path.resolve()
    )


@posix_only
def test_shell_failure_raises_with_stderr(
    tmp_path: Path, capfd: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(RuntimeError) as exc_info:
        RealShell().run_command(
            "echo fine; echo 'fatal: hook exploded' >&2; exit 4", tmp_path, shell=None
        )

    message = str(exc_info.value)
    assert "run post-create command" in message
    assert "exit code 4" in message
    assert "fatal: hook exploded" in message
    out, _ = capfd.readouterr()
    assert out == ""


def test_shell_missing_interpreter_raises(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError, match="run post-create command"):
        RealShell().run_command("true", tmp_path, shell=str(tmp_path / "no-such-shell"))


def _install_fake_pnpm(bin_dir: Path, monkeypatch: pytest.MonkeyPatch, *, exit_code: int) -> None:
    bin_dir.mkdir()
    script = bin_dir / "pnpm"
    script.write_text(
        f'#!/bin/sh\necho "pnpm $*"\necho "pnpm-warning" >&2\nexit {exit_code}\n',
        encoding="utf-8",
    )
    script.chmod(0o755)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")


def _pnpm_project(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    (project / "package.json").write_text("{}", encoding="utf-8")
    (project / "pnpm-lock.yaml").write_text("", encoding="utf-8")
    return project


@posix_only
def test_package_install_streams_to_stderr(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capfd: pytest.CaptureFixture[str]
) -> None:
    _install_fake_pnpm(tmp_path / "bin", monkeypatch, exit_code=0)
    project = _pnpm_project(tmp_path)

    RealPackageManager().install(project)

    out, err = capfd.readouterr()
    assert out == ""
    assert "pnpm install --frozen-lockfile" in err
    assert "pnpm-warning" in err


@posix_only
def test_run_binary_capture_returns_stdout(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capfd: pytest.CaptureFixture[str]
) -> None:
    _install_fake_pnpm(tmp_path / "bin", monkeypatch, exit_code=0)
    project = _pnpm_project(tmp_path)

    output = RealPackageManager().run_binary(project, "next", ["--help"], capture=True)

    assert output.strip() == "pnpm exec next --help"


@posix_only
def test_run_binary_without_capture_keeps_stdout_clean(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capfd: pytest.CaptureFixture[str]
) -> None:
    _install_fake_pnpm(tmp_path / "bin", monkeypatch, exit_code=0)
    project = _pnpm_project(tmp_path)

    output = RealPackageManager().run_binary(project, "next", ["typegen"], capture=False)

    out, err = capfd.readouterr()
    assert output == ""
    assert out == ""
    assert "pnpm exec next typegen" in err


@posix_only
def test_package_install_failure_raises_with_stderr(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capfd: pytest.CaptureFixture[str]
) -> None:
    _install_fake_pnpm(tmp_path / "bin", monkeypatch, exit_code=1)
    project = _pnpm_project(tmp_path)

    with pytest.raises(RuntimeError) as exc_info:
        RealPackageManager().install(project)

    assert "pnpm install --frozen-lockfile" in str(exc_info.value)
    assert "pnpm-warning" in str(exc_info.value)


@linux_only
def test_real_trash_moves_directory_into_freedesktop_trash(tmp_path: Path) -> None:
    # send2trash reads XDG_DATA_HOME at import time and uses the home trash only
    # for files on the same device as HOME, so both point into tmp_path
    data_home = tmp_path / "xdg"
    data_home.mkdir()
    victim = tmp_path / "repo-feature"
    victim.mkdir()
    (victim / "notes.txt").write_text("keep me\n", encoding="utf-8")

    env = os.environ.copy()
    env["HOME"] = str(tmp_path)
    env["XDG_DATA_HOME"] = str(data_home)
    subprocess.run(
        [
            sys.executable,
            "-c",
            "import sys; from pathlib import Path; "
            "from worktree_add.gateway.trash.real import RealTrash; "
            "RealTrash().move_to_trash(Path(sys.argv[1]))",
            str(victim),
        ],
        env=env,
        check=True,
    )

    assert not victim.exists()
    trashed = data_home / "Trash" / "files" / "repo-feature"
    assert (trashed / "notes.txt").read_text(encoding="utf-8") == "keep me\n"
    assert (data_home / "Trash" / "info" / "repo-feature.trashinfo").exists()


@linux_only
def test_real_trash_missing_path_raises_oserror(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        RealTrash().move_to_trash(tmp_path / "does-not-exist")
