from __future__ import annotations

import os
from pathlib import Path
from textwrap import dedent

import pytest

from isspot.config_loader import DEFAULT_CONFIG, load_config


def _write(tmp_path: Path, text: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(dedent(text).strip() + "\n", encoding="utf-8")
    return str(path)


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    cfg = load_config(str(tmp_path / "absent.yaml"))
    assert cfg["location"] == DEFAULT_CONFIG["location"]
    assert cfg["open_notify"]["poll_minutes"] == 10
    assert cfg["open_notify"]["passes"] is None
    assert cfg["daylight"]["enabled"] is True


def test_sections_merge_over_defaults(tmp_path: Path) -> None:
    cfg = load_config(
        _write(
            tmp_path,
            """
            location:
              latitude: 48.1
              longitude: 11.6
            open_notify:
              passes: 5
            """,
        )
    )
    assert cfg["location"] == {"latitude": 48.1, "longitude": 11.6, "altitude": 0.0}
    assert cfg["open_notify"]["passes"] == 5
    assert cfg["open_notify"]["timeout_seconds"] == DEFAULT_CONFIG["open_notify"]["timeout_seconds"]


def test_legacy_aliases_are_normalized(tmp_path: Path) -> None:
    cfg = load_config(
        _write(
            tmp_path,
            """
            location: {lat: -33.9, lng: 151.2, alt: 58}
            open_notify: {poll_mins: 0, n: "3"}
            display: {width: 320, height: 240}
            paths: {state_dir: "~/isspot-state"}
            """,
        )
    )
    assert cfg["location"] == {"latitude": -33.9, "longitude": 151.2, "altitude": 58.0}
    assert cfg["open_notify"]["poll_minutes"] == 0
    assert cfg["open_notify"]["passes"] == 3
    assert (cfg["display"]["w"], cfg["display"]["h"]) == (320, 240)
    assert cfg["paths"]["state_dir"] == os.path.expanduser("~/isspot-state")


def test_negative_poll_interval_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, "open_notify: {poll_minutes: -5}"))


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    cfg = load_config(_write(tmp_path, ""))
    assert cfg["logging"]["level"] == "INFO"


def test_display_defaults_and_font_paths(tmp_path: Path) -> None:
    cfg = load_config(_write(tmp_path, "display: {font_paths: ['~/fonts/a.ttf']}"))
    assert (cfg["display"]["w"], cfg["display"]["h"]) == (240, 320)
    assert (cfg["display"]["width"], cfg["display"]["height"]) == (240, 320)
    assert cfg["display"]["font_paths"] == ["~/fonts/a.ttf"]
    assert load_config(str(tmp_path / "absent.yaml"))["display"]["font_paths"] == []
