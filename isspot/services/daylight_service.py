import time
from typing import Optional

from isspot.collectors.sunrise_sunset import DEFAULT_BASE_URL, fetch_day_window
from isspot.models import DayWindow


class DaylightService:
    def __init__(self, latitude: float, longitude: float, refresh_seconds: float = 3600.0,
                 base_url: str = DEFAULT_BASE_URL, timeout_s: float = 5.0):
        self.latitude = latitude
        self.longitude = longitude
        self.refresh_seconds = refresh_seconds
        self.base_url = base_url
        self.timeout_s = timeout_s
        self._last_fetch: Optional[float] = None
        self._window: Optional[DayWindow] = None

    def tick(self) -> None:
        now = time.monotonic()
        if self._last_fetch is not None and now - self._last_fetch < self.refresh_seconds:
            return
        self._last_fetch = now
        window = fetch_day_window(self.latitude, self.longitude,
                                  base_url=self.base_url, timeout_s=self.timeout_s)
        # keep the previous window if the lookup failed
        if window:
            self._window = window

    def snapshot(self) -> Optional[DayWindow]:
        return self._window
