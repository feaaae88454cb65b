from __future__ import annotations

import threading
import time
from typing import Callable, Optional, Tuple

DEFAULT_WINDOW = 60.0


class RateLimiter:
    """
    At most `rate` permits per `window` seconds, one every window/rate
    seconds (bucket size 1). The first permit is immediate.
    """

    def __init__(
        self,
        rate: int,
        window: float = DEFAULT_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if rate < 1:
            raise ValueError(f"rate must be >= 1, got {rate}")
        self.rate = rate
        self.interval = window / rate
        self._clock = clock
        self._lock = threading.Lock()
        self._next = 0.0

    def _reserve(self) -> Tuple[float, float]:
        with self._lock:
            now = self._clock()
            at = max(now, self._next)
            self._next = at + self.interval
            return at - now, at

    def _release(self, at: float) -> None:
        with self._lock:
            if self._next == at + self.interval:
                self._next = at

    def acquire(self, cancel: Optional[threading.Event] = None) -> bool:
        """Block until a permit is available. False if `cancel` fired first."""
        if cancel is not None and cancel.is_set():
            return False
        delay, at = self._reserve()
        if delay <= 0:
            return True
        if cancel is None:
            time.sleep(delay)
            return True
        if cancel.wait(delay):
            self._release(at)
            return False
        return True
