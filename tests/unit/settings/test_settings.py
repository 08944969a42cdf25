from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from config import AppSettings, DEFAULT_IMAGE_EXTENSIONS, GridSettings, ScanSettings


def test_defaults_match_reference_behaviour() -> None:
    settings = AppSettings()

    assert settings.scan.roots == []
    assert settings.scan.interval_seconds == 5.0
    assert settings.scan.extensions == DEFAULT_IMAGE_EXTENSIONS
    assert settings.grid.spacing == 2.5
    assert settings.grid.tile_size == 2.0
    assert settings.grid.evict_stale is False
    assert settings.grid.relayout_on_growth is False


def test_extensions_are_normalized_to_lowercase_dotted_suffixes() -> None:
    settings = ScanSettings(extensions={"JPG", ".Png", " webp ", ""})

    assert settings.extensions == {".jpg", ".png", ".webp"}


@pytest.mark.parametrize(
    "kwargs",
    [
        {"spacing": 0},
        {"spacing": -1.0},
        {"tile_size": 0},
    ],
)
def test_grid_settings_reject_non_positive_sizes(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        GridSettings(**kwargs)


def test_negative_scan_interval_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ScanSettings(interval_seconds=-1)


def test_from_env_reads_roots_interval_and_log_level(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    first = tmp_path / "one"
    second = tmp_path / "two"
    monkeypatch.setenv("PHOTOVIEW_ROOTS", os.pathsep.join([str(first), str(second)]))
    monkeypatch.setenv("PHOTOVIEW_SCAN_INTERVAL", "1.5")
    monkeypatch.setenv("PHOTOVIEW_LOG_LEVEL", "DEBUG")

    settings = AppSettings.from_env()

    assert settings.scan.roots == [first, second]
    assert settings.scan.interval_seconds == 1.5
    assert settings.log_level == "DEBUG"


def test_from_env_without_variables_keeps_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PHOTOVIEW_ROOTS", "PHOTOVIEW_SCAN_INTERVAL", "PHOTOVIEW_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    assert AppSettings.from_env() == AppSettings()
