import time
from dataclasses import dataclass
from threading import RLock
from typing import Callable


@dataclass
class RateWindow:
    count: int
    expires_at: float


class RateLimitStore:
    """Fixed-window request counter per client key."""

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = limit
        self._window = window_seconds
        self._clock = clock
        self._windows: dict[str, RateWindow] = {}
        self._lock = RLock()

    def hit(self, key: str) -> bool:
        """Count a request for ``key``; False when the client is over the limit."""
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)
            if window is None or now > window.expires_at:
                self._windows[key] = RateWindow(count=1, expires_at=now + self._window)
                return True

            if window.count >= self._limit:
                return False

            window.count += 1
            return True

    def sweep(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, window in self._windows.items() if now > window.expires_at]
            for key in expired:
                del self._windows[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)
