from typing import List, Optional

import requests

from isspot.models import OpenNotifyResponse, Spot

DEFAULT_BASE_URL = "http://api.open-notify.org/iss/v1/"
MAX_PASSES = 100

# inf durations overflow int(), huge risetimes overflow datetime
_DECODE_ERRORS = (ValueError, KeyError, TypeError, ArithmeticError, OSError)


class PassFetchError(Exception):
    kind = "unknown"


class TransportError(PassFetchError):
    """Connection refused, DNS failure, timeout."""

    kind = "transport"


class HttpStatusError(PassFetchError):
    kind = "status"

    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{status_code} {reason}".strip())


class DecodeError(PassFetchError):
    kind = "decode"


def validate_location(latitude: float, longitude: float, altitude: float, passes: Optional[int] = None) -> None:
    if not -90.0 <= latitude <= 90.0:
        raise ValueError(f"latitude out of range [-90, 90]: {latitude}")
    if not -180.0 <= longitude <= 180.0:
        raise ValueError(f"longitude out of range [-180, 180]: {longitude}")
    if not 0.0 <= altitude <= 10000.0:
        raise ValueError(f"altitude out of range [0, 10000]: {altitude}")
    if passes is not None and not 1 <= passes <= MAX_PASSES:
        raise ValueError(f"pass count out of range [1, {MAX_PASSES}]: {passes}")


class OpenNotifyClient:
    """
    open-notify ISS pass query:
    - URL: {base_url}?lat=..&lon=..&altitude=..[&n=..]
    - Response: {"message", "request": {...}, "response": [{"duration", "risetime"}, ...]}
    Only 200 OK counts as success.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout_s: float = 10.0):
        self.base_url = base_url.strip()
        self.timeout_s = timeout_s

    def params(self, latitude: float, longitude: float, altitude: float, passes: Optional[int] = None) -> dict:
        params = {"lat": latitude, "lon": longitude, "altitude": altitude}
        if passes is not None:
            params["n"] = passes
        return params

    def _get(self, params: dict) -> requests.Response:
        try:
            return requests.get(self.base_url, params=params, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

    def fetch(self, latitude: float, longitude: float, altitude: float = 0.0,
              passes: Optional[int] = None) -> OpenNotifyResponse:
        r = self._get(self.params(latitude, longitude, altitude, passes))
        if r.status_code != requests.codes.ok:
            raise HttpStatusError(r.status_code, r.reason or "")
        try:
            return OpenNotifyResponse.from_dict(r.json())
        except _DECODE_ERRORS as e:
            raise DecodeError(str(e) or e.__class__.__name__) from e

    def fetch_spots(self, latitude: float, longitude: float, altitude: float = 0.0,
                    passes: Optional[int] = None) -> List[Spot]:
        response = self.fetch(latitude, longitude, altitude, passes)
        # timestamps out of datetime's range only fail here
        try:
            return response.to_spots()
        except _DECODE_ERRORS as e:
            raise DecodeError(str(e) or e.__class__.__name__) from e
