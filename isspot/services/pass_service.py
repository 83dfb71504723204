import time
from threading import Event, Thread
from typing import List, Optional

from isspot.collectors.open_notify import OpenNotifyClient, PassFetchError, validate_location
from isspot.logging_config import get_logger
from isspot.models import LOADING, Failure, Spot, Success
from isspot.result_queue import ResultChannel

logger = get_logger(__name__)


class PassPoller:
    """
    Background worker that polls open-notify and publishes every outcome on `channel`.

    - LOADING is published before the first request.
    - Each cycle publishes exactly one Success or Failure.
    - Failures wait a capped exponential backoff before the next try.
    - poll_minutes == 0: the worker ends after the first Success.
      Otherwise it runs until stop() or process exit (daemon thread).
    """

    def __init__(
        self,
        latitude: float,
        longitude: float,
        altitude: float = 0.0,
        passes: Optional[int] = None,
        poll_minutes: int = 10,
        client: Optional[OpenNotifyClient] = None,
        backoff_seconds: float = 5.0,
        backoff_max_seconds: float = 300.0,
    ):
        validate_location(latitude, longitude, altitude, passes)
        if poll_minutes < 0:
            raise ValueError(f"poll_minutes must be >= 0: {poll_minutes}")
        self.latitude = latitude
        self.longitude = longitude
        self.altitude = altitude
        self.passes = passes
        self.poll_minutes = poll_minutes
        self.client = client or OpenNotifyClient()
        self.backoff_seconds = backoff_seconds
        self.backoff_max_seconds = backoff_max_seconds
        self.channel = ResultChannel()
        self._stop = Event()
        self._worker: Optional[Thread] = None

    def start(self) -> ResultChannel:
        if self._worker and self._worker.is_alive():
            return self.channel
        self._stop.clear()
        self._worker = Thread(target=self._worker_loop, name="isspot-poller", daemon=True)
        self._worker.start()
        return self.channel

    def stop(self, timeout: float = 1.0) -> None:
        self._stop.set()
        if self._worker:
            self._worker.join(timeout=timeout)

    @property
    def running(self) -> bool:
        return bool(self._worker and self._worker.is_alive())

    # internal
    def _worker_loop(self):
        self.channel.publish(LOADING)

        backoff = self.backoff_seconds
        while not self._stop.is_set():
            try:
                spots = self.client.fetch_spots(self.latitude, self.longitude, self.altitude, self.passes)
            except PassFetchError as e:
                logger.warning("pass fetch failed (%s): %s", e.kind, e)
                self.channel.publish(Failure(message=str(e), kind=e.kind, error=e))
                self._stop.wait(backoff)
                backoff = min(backoff * 2, self.backoff_max_seconds)
                continue
            except Exception as e:
                # keep the worker alive, whatever the client raised
                logger.exception("pass fetch crashed")
                self.channel.publish(Failure(message=str(e) or e.__class__.__name__, kind="unknown", error=e))
                self._stop.wait(backoff)
                backoff = min(backoff * 2, self.backoff_max_seconds)
                continue

            logger.info("fetched %d passes for %.4f,%.4f", len(spots), self.latitude, self.longitude)
            self.channel.publish(Success(spots))
            backoff = self.backoff_seconds
            if self.poll_minutes == 0:
                break
            self._stop.wait(self.poll_minutes * 60)


def start(latitude: float, longitude: float, altitude: float = 0.0, passes: Optional[int] = None,
          poll_minutes: int = 10, client: Optional[OpenNotifyClient] = None) -> PassPoller:
    poller = PassPoller(latitude, longitude, altitude, passes, poll_minutes, client=client)
    poller.start()
    return poller


def fetch_once(
    latitude: float,
    longitude: float,
    altitude: float = 0.0,
    passes: Optional[int] = None,
    client: Optional[OpenNotifyClient] = None,
    timeout: Optional[float] = None,
    backoff_seconds: float = 5.0,
) -> List[Spot]:
    """
    Run a one-shot poller and wait for its first Success or Failure.

    Returns the spots and raises TimeoutError if `timeout` seconds pass without
    an answer. A failure re-raises the client's TransportError, HttpStatusError
    or DecodeError; anything else becomes a plain PassFetchError. LOADING is
    never returned.
    """
    poller = PassPoller(latitude, longitude, altitude, passes, poll_minutes=0,
                        client=client, backoff_seconds=backoff_seconds)
    channel = poller.start()
    end = None if timeout is None else time.monotonic() + timeout
    try:
        while True:
            remaining = None if end is None else max(0.0, end - time.monotonic())
            outcome = channel.receive(timeout=remaining)
            if outcome is None:
                raise TimeoutError(f"no pass data within {timeout}s")
            if isinstance(outcome, Success):
                return outcome.spots
            if isinstance(outcome, Failure):
                if isinstance(outcome.error, PassFetchError):
                    raise outcome.error
                raise PassFetchError(outcome.message) from outcome.error
    finally:
        poller.stop()
