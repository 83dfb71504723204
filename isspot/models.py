from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Union


def from_utc_timestamp(t: int) -> datetime:
    """UTC epoch seconds -> aware datetime in the local zone."""
    return datetime.fromtimestamp(t, tz=timezone.utc).astimezone()


@dataclass(frozen=True)
class DayWindow:
    sunrise: datetime
    sunset: datetime

    @classmethod
    def from_epoch(cls, sunrise_utc: int, sunset_utc: int) -> "DayWindow":
        return cls(sunrise=from_utc_timestamp(sunrise_utc), sunset=from_utc_timestamp(sunset_utc))

    def is_night(self, instant: datetime) -> bool:
        # sunrise and sunset themselves count as daytime
        return instant < self.sunrise or instant > self.sunset


@dataclass(frozen=True)
class Spot:
    """One predicted overflight: rise time and visible duration."""

    risetime: datetime
    duration: timedelta

    def __post_init__(self):
        if self.duration < timedelta(0):
            raise ValueError(f"negative pass duration: {self.duration}")

    @property
    def end_time(self) -> datetime:
        return self.risetime + self.duration

    def spottable(self, now: datetime) -> timedelta:
        return self.risetime - now

    def is_spottable(self, now: datetime) -> bool:
        return self.risetime <= now < self.end_time

    def at_night(self, window: DayWindow) -> bool:
        return window.is_night(self.risetime)


# -----------------------------
# Poll outcomes
# -----------------------------

class Loading:
    """No successful poll cycle yet."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "LOADING"


LOADING = Loading()


@dataclass(frozen=True)
class Failure:
    message: str
    kind: str = "unknown"
    error: Optional[Exception] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Success:
    spots: List[Spot] = field(default_factory=list)


PollOutcome = Union[Loading, Failure, Success]


# -----------------------------
# open-notify wire schema
# -----------------------------

@dataclass(frozen=True)
class PassRecord:
    duration: int
    risetime: int

    def to_spot(self) -> Spot:
        return Spot(risetime=from_utc_timestamp(self.risetime), duration=timedelta(seconds=self.duration))


@dataclass(frozen=True)
class PassRequest:
    altitude: float
    datetime: int
    latitude: float
    longitude: float
    passes: int


@dataclass(frozen=True)
class OpenNotifyResponse:
    message: str
    request: PassRequest
    response: List[PassRecord]

    @classmethod
    def from_dict(cls, data: dict) -> "OpenNotifyResponse":
        req = data["request"]
        return cls(
            message=str(data["message"]),
            request=PassRequest(
                altitude=float(req["altitude"]),
                datetime=int(req["datetime"]),
                latitude=float(req["latitude"]),
                longitude=float(req["longitude"]),
                passes=int(req["passes"]),
            ),
            response=[
                PassRecord(duration=_non_negative(r["duration"]), risetime=int(r["risetime"]))
                for r in data["response"]
            ],
        )

    def to_spots(self) -> List[Spot]:
        return [r.to_spot() for r in self.response]


def _non_negative(value) -> int:
    v = int(value)
    if v < 0:
        raise ValueError(f"negative duration in response: {v}")
    return v


# -----------------------------
# Display state
# -----------------------------

@dataclass
class PassBoard:
    now: datetime
    ok: bool = False
    stale: bool = True
    loading: bool = True
    upcoming: Optional[Spot] = None
    current: Optional[Spot] = None
    daylight: Optional[DayWindow] = None
    pass_count: int = 0
    last_ok_ts: float = 0.0
    err: str = ""
