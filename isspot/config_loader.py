import json
import os
from copy import deepcopy
from typing import Any, Dict

import yaml


DEFAULT_DISPLAY_SIZE = (240, 320)

DEFAULT_CONFIG: Dict[str, Any] = {
    "location": {
        "latitude": 52.520008,
        "longitude": 13.404954,
        "altitude": 0.0,
    },
    "open_notify": {
        "base_url": "http://api.open-notify.org/iss/v1/",
        "passes": None,
        "timeout_seconds": 10.0,
        "poll_minutes": 10,
        "backoff_seconds": 5,
        "backoff_max_seconds": 300,
    },
    "daylight": {
        "enabled": True,
        "base_url": "https://api.sunrise-sunset.org/json",
        "timeout_seconds": 5.0,
        "refresh_seconds": 3600,
    },
    "display": {
        # w/h (or width/height) are backfilled in _normalize_display
        "refresh_seconds": 5,
        "font_paths": [],
    },
    "paths": {
        "state_dir": os.path.expanduser("~/.cache/isspot"),
        "render_file": "pass_panel.png",
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}


def _merge_section(dst: Dict[str, Any], key: str, overrides: Dict[str, Any]) -> None:
    base = deepcopy(DEFAULT_CONFIG.get(key, {}))
    if overrides:
        base.update(overrides)
    dst[key] = base


def _normalize_location(cfg: Dict[str, Any]) -> None:
    loc = cfg.get("location", {})
    # short aliases
    for short, full in (("lat", "latitude"), ("lon", "longitude"), ("lng", "longitude"), ("alt", "altitude")):
        if short in loc:
            loc[full] = loc.pop(short)
    for key in ("latitude", "longitude", "altitude"):
        loc[key] = float(loc[key])
    cfg["location"] = loc


def _normalize_open_notify(cfg: Dict[str, Any]) -> None:
    on = cfg.get("open_notify", {})
    # legacy key mapping
    if "poll_mins" in on:
        on["poll_minutes"] = on.pop("poll_mins")
    if "n" in on:
        on["passes"] = on.pop("n")
    on["poll_minutes"] = int(on["poll_minutes"])
    if on["poll_minutes"] < 0:
        raise ValueError(f"open_notify.poll_minutes must be >= 0: {on['poll_minutes']}")
    if on.get("passes") is not None:
        on["passes"] = int(on["passes"])
    cfg["open_notify"] = on


def _normalize_display(cfg: Dict[str, Any]) -> None:
    disp = cfg.get("display", {})
    # backfill width/height aliases
    w = disp.get("w") or disp.get("width")
    h = disp.get("h") or disp.get("height")
    disp["w"] = w or DEFAULT_DISPLAY_SIZE[0]
    disp["h"] = h or DEFAULT_DISPLAY_SIZE[1]
    disp.setdefault("width", disp["w"])
    disp.setdefault("height", disp["h"])
    disp["font_paths"] = list(disp.get("font_paths") or [])
    cfg["display"] = disp


def _normalize_paths(cfg: Dict[str, Any]) -> None:
    paths = cfg.get("paths", {})
    if "state_dir" in paths:
        paths["state_dir"] = os.path.expanduser(paths["state_dir"])
    cfg["paths"] = paths


def load_config(path: str) -> dict:
    raw: Dict[str, Any] = {}
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            # fallback: minimal JSON-compatible YAML
            raw = json.loads(text)

    cfg: Dict[str, Any] = {}
    for section in DEFAULT_CONFIG:
        _merge_section(cfg, section, raw.get(section) or {})

    # normalize legacy/alias keys
    _normalize_location(cfg)
    _normalize_open_notify(cfg)
    _normalize_display(cfg)
    _normalize_paths(cfg)

    return cfg
