"""Tests for FakeTrash."""

from pathlib import Path

import pytest

from worktree_add.gateway.trash.fake import FakeTrash


def test_moves_paths_into_trash_dir(tmp_path: Path) -> None:
    trash = FakeTrash(trash_dir=tmp_path / "trash")
    first = tmp_path / "a"
    second = tmp_path / "b"
    first.mkdir()
    second.write_text("x", encoding="utf-8")

    trash.move_to_trash(first)
    trash.move_to_trash(second)

    assert trash.trashed_paths == [first, second]
    assert trash.location_of(first) == tmp_path / "trash" / "0-a"
    assert trash.location_of(second) == tmp_path / "trash" / "1-b"
    assert not first.exists()
    assert (tmp_path / "trash" / "1-b").read_text(encoding="utf-8") == "x"


def test_error_raises_oserror(tmp_path: Path) -> None:
    trash = FakeTrash(error="Permission denied")

    with pytest.raises(OSError, match="Permission denied"):
        trash.move_to_trash(tmp_path)

    assert trash.trashed_paths == []
