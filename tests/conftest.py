from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Any

import requests

from isspot.models import Spot

UTC = timezone.utc


def at(day: int, hour: int, minute: int = 0, month: int = 6) -> datetime:
    """Aware UTC instant in 2021 (the scenario year used across tests)."""
    return datetime(2021, month, day, hour, minute, tzinfo=UTC)


def make_spot(rise: datetime, seconds: int = 600) -> Spot:
    return Spot(risetime=rise, duration=timedelta(seconds=seconds))


def wire_payload(*passes: tuple[int, int], message: str = "success") -> dict:
    """open-notify body for (risetime, duration) pairs."""
    return {
        "message": message,
        "request": {
            "altitude": 0,
            "datetime": 1622505600,
            "latitude": 52.52,
            "longitude": 13.4,
            "passes": len(passes),
        },
        "response": [{"risetime": r, "duration": d} for r, d in passes],
    }


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, reason: str = "OK", bad_json: bool = False):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self._bad_json = bad_json

    def json(self) -> Any:
        if self._bad_json:
            raise requests.exceptions.JSONDecodeError("Expecting value", "<html>", 0)
        return self._payload

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} {self.reason}")


class RecordingGet:
    """Stand-in for requests.get returning (or raising) queued results."""

    def __init__(self, *results: Any):
        self.results = list(results)
        self.calls: list[dict] = []

    def __call__(self, url: str, params: dict | None = None, timeout: float | None = None, **kwargs: Any):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, BaseException):
            raise result
        return result


class FakeClient:
    """Stand-in for OpenNotifyClient; each fetch pops the next result (last one repeats)."""

    def __init__(self, *results: Any, block: threading.Event | None = None):
        self.results = list(results)
        self.calls = 0
        self.block = block

    def fetch_spots(self, latitude, longitude, altitude=0.0, passes=None):
        self.calls += 1
        if self.block is not None:
            self.block.wait(5.0)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, BaseException):
            raise result
        return list(result)
