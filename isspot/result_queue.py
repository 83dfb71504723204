import time
from collections import deque
from threading import Condition
from typing import Optional

from isspot.models import PollOutcome


class ResultChannel:
    """
    FIFO of poll outcomes between one poller thread and its consumer.
    Nothing is overwritten or coalesced; each outcome is handed out once.
    """

    def __init__(self):
        self.q = deque()
        self._cond = Condition()

    def publish(self, outcome: PollOutcome) -> None:
        with self._cond:
            self.q.append(outcome)
            self._cond.notify_all()

    def drain(self) -> Optional[PollOutcome]:
        # never blocks
        with self._cond:
            if not self.q:
                return None
            return self.q.popleft()

    def receive(self, timeout: Optional[float] = None) -> Optional[PollOutcome]:
        """Block until an outcome is queued; None if `timeout` seconds pass first."""
        end = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while not self.q:
                if end is None:
                    self._cond.wait()
                    continue
                remaining = end - time.monotonic()
                if remaining <= 0:
                    return None
                self._cond.wait(remaining)
            return self.q.popleft()

    def __len__(self) -> int:
        with self._cond:
            return len(self.q)
