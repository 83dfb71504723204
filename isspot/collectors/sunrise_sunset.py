from datetime import date, datetime
from typing import Optional

import requests

from isspot.logging_config import get_logger
from isspot.models import DayWindow

DEFAULT_BASE_URL = "https://api.sunrise-sunset.org/json"

logger = get_logger(__name__)


def _parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00")).astimezone()


def fetch_day_window(latitude: float, longitude: float, on: Optional[date] = None,
                     base_url: str = DEFAULT_BASE_URL, timeout_s: float = 5.0) -> Optional[DayWindow]:
    params = {"lat": latitude, "lng": longitude, "formatted": 0}
    params["date"] = on.isoformat() if on is not None else "today"
    try:
        r = requests.get(base_url, params=params, timeout=timeout_s)
        r.raise_for_status()
        data = r.json()
        if data.get("status") != "OK":
            logger.warning("sunrise-sunset lookup failed: %s", data.get("status"))
            return None
        results = data.get("results", {})
        sunrise = _parse_time(results["sunrise"])
        sunset = _parse_time(results["sunset"])
    except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
        logger.warning("sunrise-sunset lookup failed: %s", e)
        return None
    if sunrise > sunset:
        # polar day/night edge cases come back inverted; not a usable window
        logger.warning("sunrise-sunset returned sunrise after sunset (%s > %s)", sunrise, sunset)
        return None
    return DayWindow(sunrise=sunrise, sunset=sunset)
