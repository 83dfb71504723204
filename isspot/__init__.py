from isspot.models import LOADING, DayWindow, Failure, Loading, PollOutcome, Spot, Success
from isspot.query import find_current, find_upcoming
from isspot.result_queue import ResultChannel
from isspot.services.pass_service import PassPoller, fetch_once, start

__all__ = [
    "LOADING",
    "DayWindow",
    "Failure",
    "Loading",
    "PassPoller",
    "PollOutcome",
    "ResultChannel",
    "Spot",
    "Success",
    "fetch_once",
    "find_current",
    "find_upcoming",
    "start",
]
