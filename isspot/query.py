from datetime import datetime
from typing import Iterable, Optional

from isspot.models import DayWindow, Spot


def find_upcoming(spots: Iterable[Spot], daylight: Optional[DayWindow], now: datetime) -> Optional[Spot]:
    """
    First spot rising after `now`, in list order (the list is never sorted).
    With a day window, spots rising in daylight are skipped and the scan goes on.
    """
    for spot in spots:
        if spot.risetime <= now:
            continue
        if daylight is None or spot.at_night(daylight):
            return spot
    return None


def find_current(spots: Iterable[Spot], daylight: Optional[DayWindow], now: datetime) -> Optional[Spot]:
    """
    Spot visible at `now`.

    Only the first spot whose window contains `now` is considered: if it rose in
    daylight the answer is None, the scan does not continue to later spots.
    """
    for spot in spots:
        if spot.is_spottable(now):
            if daylight is None or spot.at_night(daylight):
                return spot
            return None
    return None
