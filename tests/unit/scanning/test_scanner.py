from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

import pytest

from config import ScanSettings
from core.indexing import DirectoryScanner, is_supported_image
from core.indexing import scanner as scanner_module
from core.models import ScanErrorKind, WatchedSet


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


def _scanner(**kwargs) -> DirectoryScanner:
    return DirectoryScanner(ScanSettings(**kwargs))


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("x.jpg", True),
        ("x.JPEG", True),
        ("y.PNG", True),
        ("icon.ico", True),
        ("vector.Svg", True),
        ("scan.tif", True),
        ("z.txt", False),
        ("jpg", False),
        ("archive.jpg.zip", False),
        ("noext", False),
    ],
)
def test_is_supported_image_matches_extension_case_insensitively(name: str, expected: bool) -> None:
    assert is_supported_image(name) is expected


def test_scan_finds_images_recursively_and_ignores_other_files(tmp_path: Path) -> None:
    root = tmp_path / "a"
    x = _touch(root / "x.jpg")
    y = _touch(root / "sub" / "y.PNG")
    _touch(root / "sub" / "z.txt")
    watched = WatchedSet(roots=[root])

    report = _scanner().step(watched, now=0.0)

    assert report is not None
    assert report.ok
    assert set(watched.found) == {x, y}
    assert len(watched.found) == 2
    assert watched.last_scan_time == 0.0


def test_scan_order_is_deterministic_name_order(tmp_path: Path) -> None:
    for name in ("c.png", "a.png", "b/d.png", "b/a.png"):
        _touch(tmp_path / name)

    report = _scanner().scan([tmp_path])

    assert [path.relative_to(tmp_path).as_posix() for path in report.found] == [
        "a.png",
        "c.png",
        "b/a.png",
        "b/d.png",
    ]


def test_missing_root_is_skipped_and_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    present = _touch(tmp_path / "present" / "p.gif")
    missing = tmp_path / "missing"
    watched = WatchedSet(roots=[missing, tmp_path / "present"])

    with caplog.at_level(logging.WARNING, logger="core.indexing.scanner"):
        report = _scanner().step(watched, now=0.0)

    assert report is not None
    assert watched.found == (present,)
    assert [(issue.kind, issue.path) for issue in report.issues] == [
        (ScanErrorKind.DIRECTORY_MISSING, missing)
    ]
    assert "Directory does not exist" in caplog.text


def test_root_that_is_a_file_is_reported_as_missing_directory(tmp_path: Path) -> None:
    not_a_dir = _touch(tmp_path / "file.jpg")

    report = _scanner().scan([not_a_dir])

    assert report.found == ()
    assert report.issues[0].kind is ScanErrorKind.DIRECTORY_MISSING


def test_unreadable_subtree_is_skipped_without_aborting_the_pass(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    keep = _touch(tmp_path / "keep" / "k.bmp")
    _touch(tmp_path / "locked" / "hidden.bmp")
    top = _touch(tmp_path / "top.webp")
    locked = tmp_path / "locked"
    real_scandir = os.scandir

    def fake_scandir(path):
        if Path(path) == locked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(scanner_module.os, "scandir", fake_scandir)

    with caplog.at_level(logging.WARNING, logger="core.indexing.scanner"):
        report = _scanner().scan([tmp_path])

    assert set(report.found) == {keep, top}
    assert [(issue.kind, issue.path) for issue in report.issues] == [
        (ScanErrorKind.TRAVERSAL_IO_ERROR, locked)
    ]
    assert "Error scanning directory" in caplog.text


def test_second_scan_within_interval_is_a_no_op(tmp_path: Path) -> None:
    first = _touch(tmp_path / "first.jpg")
    watched = WatchedSet(roots=[tmp_path])
    scanner = _scanner(interval_seconds=5.0)

    assert scanner.step(watched, now=10.0) is not None
    _touch(tmp_path / "second.jpg")

    assert scanner.step(watched, now=14.9) is None
    assert watched.found == (first,)
    assert watched.last_scan_time == 10.0


def test_scan_runs_again_once_interval_has_elapsed(tmp_path: Path) -> None:
    first = _touch(tmp_path / "first.jpg")
    watched = WatchedSet(roots=[tmp_path])
    scanner = _scanner(interval_seconds=5.0)
    scanner.step(watched, now=10.0)
    second = _touch(tmp_path / "second.jpg")

    assert scanner.step(watched, now=15.0) is not None
    assert watched.found == (first, second)
    assert watched.last_scan_time == 15.0


def test_found_set_is_replaced_not_merged(tmp_path: Path) -> None:
    gone = _touch(tmp_path / "gone.png")
    stays = _touch(tmp_path / "stays.png")
    watched = WatchedSet(roots=[tmp_path])
    scanner = _scanner(interval_seconds=0)
    scanner.step(watched, now=0.0)

    gone.unlink()
    scanner.step(watched, now=1.0)

    assert watched.found == (stays,)


def test_removed_root_drops_its_files_on_next_scan(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    doomed = tmp_path / "doomed"
    _touch(doomed / "d.jpg")
    other = _touch(tmp_path / "other" / "o.jpg")
    watched = WatchedSet(roots=[doomed, tmp_path / "other"])
    scanner = _scanner(interval_seconds=0)
    scanner.step(watched, now=0.0)
    assert len(watched.found) == 2

    shutil.rmtree(doomed)
    with caplog.at_level(logging.WARNING, logger="core.indexing.scanner"):
        scanner.step(watched, now=1.0)

    assert watched.found == (other,)
    assert str(doomed) in caplog.text


def test_overlapping_roots_do_not_duplicate_files(tmp_path: Path) -> None:
    inner = _touch(tmp_path / "sub" / "inner.jpg")
    outer = _touch(tmp_path / "outer.jpg")

    report = _scanner().scan([tmp_path / "sub", tmp_path, tmp_path])

    assert report.found == (inner, outer)


def test_symlink_loop_is_visited_once(tmp_path: Path) -> None:
    image = _touch(tmp_path / "loop" / "img.png")
    try:
        os.symlink(tmp_path / "loop", tmp_path / "loop" / "again", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported here")

    report = _scanner().scan([tmp_path])

    assert report.found == (image,)
    assert report.ok


def test_symlink_alias_of_sibling_directory_lists_files_under_both_paths(tmp_path: Path) -> None:
    image = _touch(tmp_path / "a" / "x.jpg")
    try:
        os.symlink(tmp_path / "a", tmp_path / "link", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported here")

    report = _scanner().scan([tmp_path])

    assert report.found == (image, tmp_path / "link" / "x.jpg")
    assert report.ok


def test_loop_back_to_an_ancestor_is_cut_below_the_link(tmp_path: Path) -> None:
    top = _touch(tmp_path / "top.png")
    deep = _touch(tmp_path / "a" / "b" / "deep.png")
    try:
        os.symlink(tmp_path, tmp_path / "a" / "b" / "up", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported here")

    report = _scanner().scan([tmp_path])

    assert report.found == (top, deep)


def test_symlinked_directories_are_skipped_when_not_following(tmp_path: Path) -> None:
    real = _touch(tmp_path / "real" / "r.jpg")
    _touch(tmp_path / "elsewhere" / "e.jpg")
    try:
        os.symlink(tmp_path / "elsewhere", tmp_path / "real" / "link", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks are not supported here")

    report = _scanner(follow_symlinks=False).scan([tmp_path / "real"])

    assert report.found == (real,)


def test_max_depth_bounds_recursion(tmp_path: Path) -> None:
    level0 = _touch(tmp_path / "0.jpg")
    level1 = _touch(tmp_path / "a" / "1.jpg")
    _touch(tmp_path / "a" / "b" / "2.jpg")

    assert _scanner(max_depth=0).scan([tmp_path]).found == (level0,)
    assert _scanner(max_depth=1).scan([tmp_path]).found == (level0, level1)


def test_custom_extension_allow_list(tmp_path: Path) -> None:
    raw = _touch(tmp_path / "shot.CR2")
    _touch(tmp_path / "shot.jpg")

    report = _scanner(extensions={"cr2"}).scan([tmp_path])

    assert report.found == (raw,)


def test_relative_roots_are_stored_as_absolute_paths(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _touch(tmp_path / "pics" / "p.jpg")
    monkeypatch.chdir(tmp_path)

    report = _scanner().scan([Path("pics")])

    assert report.found == (tmp_path / "pics" / "p.jpg",)
    assert report.found[0].is_absolute()
