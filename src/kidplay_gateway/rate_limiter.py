"""In-memory sliding-window rate limiting keyed by client IP."""
from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable, Deque, Dict


class SlidingWindowLimiter:
    """Allow at most `limit` hits per `window_s` seconds for each key.

    Windows are shared across request threads, so every mutation happens under one lock.
    Keys whose window has emptied are swept at most once per window.
    """

    def __init__(self, limit: int, window_s: float, message: str, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_s = window_s
        self.message = message
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def hit(self, key: str) -> float | None:
        """Record a request. Returns None when allowed, else seconds until a slot frees up."""
        now = self._clock()
        cutoff = now - self.window_s
        with self._lock:
            if now - self._last_sweep >= self.window_s:
                self._sweep(cutoff)
                self._last_sweep = now
            window = self._hits.setdefault(key, deque())
            while window and window[0] <= cutoff:
                window.popleft()
            if len(window) >= self.limit:
                return max(0.0, window[0] + self.window_s - now)
            window.append(now)
            return None

    def _sweep(self, cutoff: float) -> None:
        stale = [key for key, window in self._hits.items() if not window or window[-1] <= cutoff]
        for key in stale:
            del self._hits[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
