"""
ISS pass panel
- Polls open-notify for the next ISS passes over the configured location
- Restricts answers to darkness when the daylight lookup is enabled
- Prints next/current pass on every refresh, optionally renders a 240x320 panel PNG
"""

import argparse
import os
import signal
import sys
import time
from datetime import datetime
from typing import List, Optional

from isspot.collectors.open_notify import OpenNotifyClient, PassFetchError
from isspot.config_loader import load_config
from isspot.logging_config import configure_logging, get_logger
from isspot.models import Failure, Loading, PassBoard, Spot, Success
from isspot.query import find_current, find_upcoming
from isspot.services.daylight_service import DaylightService
from isspot.services.pass_service import PassPoller, fetch_once
from isspot.ui.fonts import set_font_paths
from isspot.ui.pass_page import format_countdown, render_pass_page

logger = get_logger("isspot")

_stop = False


def _handle_signal(signum, frame):
    global _stop
    _stop = True


def state_path(cfg: dict, filename: str) -> str:
    d = cfg["paths"]["state_dir"]
    os.makedirs(d, exist_ok=True)
    return os.path.join(d, filename)


class PassTracker:
    """Folds poll outcomes into the last known pass list and builds PassBoards."""

    def __init__(self):
        self.spots: List[Spot] = []
        self.ok = False
        self.stale = True
        self.loading = True
        self.last_ok_ts = 0.0
        self.err = ""

    def apply(self, outcome) -> None:
        if isinstance(outcome, Loading):
            return
        self.loading = False
        if isinstance(outcome, Success):
            self.spots = list(outcome.spots)
            self.ok = True
            self.stale = False
            self.last_ok_ts = time.time()
            self.err = ""
        elif isinstance(outcome, Failure):
            # keep the last pass list, mark it stale
            self.stale = True
            self.err = outcome.message[:60]

    def board(self, now: datetime, daylight=None) -> PassBoard:
        return PassBoard(
            now=now,
            ok=self.ok,
            stale=self.stale,
            loading=self.loading,
            upcoming=find_upcoming(self.spots, daylight, now),
            current=find_current(self.spots, daylight, now),
            daylight=daylight,
            pass_count=len(self.spots),
            last_ok_ts=self.last_ok_ts,
            err=self.err,
        )


def describe(board: PassBoard) -> str:
    if board.loading:
        return "loading..."
    parts = []
    if board.current is not None:
        parts.append(f"VISIBLE NOW until {board.current.end_time:%H:%M:%S}")
    if board.upcoming is not None:
        up = board.upcoming
        parts.append(
            f"next {up.risetime:%Y-%m-%d %H:%M:%S} "
            f"(in {format_countdown(up.spottable(board.now))}, {int(up.duration.total_seconds())}s)"
        )
    if not parts:
        parts.append("no visible pass")
    if board.stale:
        parts.append(f"[stale: {board.err}]")
    return "  ".join(parts)


def build_daylight(cfg: dict) -> Optional[DaylightService]:
    dcfg = cfg["daylight"]
    if not dcfg["enabled"]:
        return None
    loc = cfg["location"]
    return DaylightService(
        loc["latitude"],
        loc["longitude"],
        refresh_seconds=dcfg["refresh_seconds"],
        base_url=dcfg["base_url"],
        timeout_s=dcfg["timeout_seconds"],
    )


def run_once(cfg: dict) -> int:
    loc, ocfg = cfg["location"], cfg["open_notify"]
    client = OpenNotifyClient(ocfg["base_url"], ocfg["timeout_seconds"])
    try:
        spots = fetch_once(loc["latitude"], loc["longitude"], loc["altitude"], ocfg["passes"], client=client,
                           backoff_seconds=ocfg["backoff_seconds"])
    except PassFetchError as e:
        logger.error("pass fetch failed: %s", e)
        return 1

    daylight = None
    service = build_daylight(cfg)
    if service:
        service.tick()
        daylight = service.snapshot()

    tracker = PassTracker()
    tracker.apply(Success(spots))
    print(describe(tracker.board(datetime.now().astimezone(), daylight)))
    for spot in spots:
        night = "" if daylight is None else (" night" if spot.at_night(daylight) else " day")
        print(f"  {spot.risetime:%Y-%m-%d %H:%M:%S}  {int(spot.duration.total_seconds()):4d}s{night}")
    return 0


def run_loop(cfg: dict, render: bool = False) -> int:
    loc, ocfg = cfg["location"], cfg["open_notify"]
    poller = PassPoller(
        loc["latitude"],
        loc["longitude"],
        loc["altitude"],
        ocfg["passes"],
        ocfg["poll_minutes"],
        client=OpenNotifyClient(ocfg["base_url"], ocfg["timeout_seconds"]),
        backoff_seconds=ocfg["backoff_seconds"],
        backoff_max_seconds=ocfg["backoff_max_seconds"],
    )
    channel = poller.start()
    daylight = build_daylight(cfg)
    tracker = PassTracker()
    render_p = state_path(cfg, cfg["paths"]["render_file"]) if render else None

    try:
        while not _stop:
            outcome = channel.drain()
            while outcome is not None:
                tracker.apply(outcome)
                outcome = channel.drain()

            if daylight:
                daylight.tick()
            board = tracker.board(datetime.now().astimezone(), daylight.snapshot() if daylight else None)
            logger.info(describe(board))

            if render_p:
                render_pass_page(board, cfg["display"]).save(render_p)

            time.sleep(cfg["display"]["refresh_seconds"])
    finally:
        poller.stop()
    return 0


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="isspot", description="Report visible ISS passes for a fixed location.")
    parser.add_argument("--config", default="config.yaml", help="YAML config file (default: ./config.yaml)")
    parser.add_argument("--once", action="store_true", help="fetch once, print the passes and exit")
    parser.add_argument("--render", action="store_true", help="write the panel PNG on every refresh")
    parser.add_argument("--log-level", default=None, help="override logging.level")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    cfg = load_config(args.config)
    configure_logging(args.log_level or cfg["logging"]["level"], cfg["logging"]["file"])
    set_font_paths(cfg["display"]["font_paths"])

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    if args.once:
        return run_once(cfg)
    return run_loop(cfg, render=args.render)


if __name__ == "__main__":
    sys.exit(main())
