"""Tests for candidate file enumeration."""

import os
from pathlib import Path

import pytest

from filesniff.ingestion import DirectoryScanner
from filesniff.scan import EnumerationError


def _tree(root: Path) -> None:
    (root / "b.txt").write_text("b", encoding="utf-8")
    (root / "a.txt").write_text("a", encoding="utf-8")
    (root / ".hidden").write_text("h", encoding="utf-8")
    nested = root / "nested"
    nested.mkdir()
    (nested / "c.txt").write_text("c", encoding="utf-8")
    organized = root / "OrganizedFiles" / "PNG"
    organized.mkdir(parents=True)
    (organized / "copy.png").write_bytes(b"\x89PNG")


def test_non_recursive_scan_lists_top_level_files_sorted(tmp_path: Path) -> None:
    _tree(tmp_path)

    found = DirectoryScanner(recursive=False).collect(tmp_path)

    assert [path.name for path in found] == [".hidden", "a.txt", "b.txt"]


def test_recursive_scan_descends_and_honours_exclusions(tmp_path: Path) -> None:
    _tree(tmp_path)

    scanner = DirectoryScanner(
        recursive=True, include_hidden=False, exclude_dirs={"OrganizedFiles"}
    )
    found = scanner.collect(tmp_path)

    assert [path.relative_to(tmp_path.resolve()).as_posix() for path in found] == [
        "a.txt",
        "b.txt",
        "nested/c.txt",
    ]


def test_file_root_yields_itself(tmp_path: Path) -> None:
    target = tmp_path / "single.bin"
    target.write_bytes(b"\x00\x01")

    assert DirectoryScanner(recursive=True).collect(target) == [target.resolve()]


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(EnumerationError):
        DirectoryScanner(recursive=False).collect(tmp_path / "nope")


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlinks_are_skipped_unless_followed(tmp_path: Path) -> None:
    real = tmp_path / "real.txt"
    real.write_text("data", encoding="utf-8")
    link = tmp_path / "link.txt"
    try:
        link.symlink_to(real)
    except OSError:
        pytest.skip("symlink creation not permitted")

    skipped = DirectoryScanner(recursive=False).collect(tmp_path)
    followed = DirectoryScanner(recursive=False, follow_symlinks=True).collect(tmp_path)

    assert [path.name for path in skipped] == ["real.txt"]
    assert [path.name for path in followed] == ["link.txt", "real.txt"]
