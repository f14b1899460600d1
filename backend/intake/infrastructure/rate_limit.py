"""Sliding-Window Rate Limiter — per-client request budget over a rolling time window.

Invariants:
    - A client is admitted iff fewer than max_requests of its hits fall inside
      (now - window_seconds, now]
    - Rejected hits are not recorded: a throttled client recovers as soon as old hits age out
    - State is in-process only; each worker process enforces its own budget

Design Decisions:
    - Injected clock: tests advance time without sleeping
    - Empty per-client deques are dropped so memory tracks active clients only
"""

import time
from collections import deque
from collections.abc import Callable


class SlidingWindowRateLimiter:
    """Admission control for one route group."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        message: str,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.message = message
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}

    def _prune(self, client_key: str, now: float) -> deque[float]:
        hits = self._hits.get(client_key)
        if hits is None:
            return deque()
        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()
        if not hits:
            del self._hits[client_key]
        return hits

    def hit(self, client_key: str) -> float | None:
        """Record a request. Returns None if admitted, else seconds until a slot frees."""
        now = self._clock()
        hits = self._prune(client_key, now)
        if len(hits) >= self.max_requests:
            return max(0.0, hits[0] + self.window_seconds - now)
        self._hits.setdefault(client_key, hits).append(now)
        return None

    def reset(self) -> None:
        self._hits.clear()
