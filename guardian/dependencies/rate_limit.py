"""Per-caller sliding-window rate limit for SOS, contact and document writes.

Callers are keyed by user id, routes by their path template, so
``/documents/view/1`` and ``/documents/view/2`` share one bucket.
"""
import time
from collections import deque
from typing import Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from guardian.core.config import settings
from guardian.dependencies.auth import get_current_user


class SlidingWindowLimiter:
    def __init__(self):
        self._buckets: Dict[str, deque] = {}
        self._last_sweep = 0.0

    def __len__(self) -> int:
        return len(self._buckets)

    def hit(self, key: str, limit: int, window: float, now: Optional[float] = None) -> bool:
        """Record a request; False when ``key`` is already at ``limit``."""
        now = time.time() if now is None else now
        window_start = now - window
        if now - self._last_sweep >= window:
            self.sweep(window_start)
            self._last_sweep = now

        bucket = self._buckets.get(key)
        if bucket is None:
            bucket = self._buckets[key] = deque()
        while bucket and bucket[0] <= window_start:
            bucket.popleft()

        if len(bucket) >= limit:
            return False
        bucket.append(now)
        return True

    def sweep(self, window_start: float) -> None:
        """Drop buckets with no requests inside the window."""
        stale = [key for key, bucket in self._buckets.items() if not bucket or bucket[-1] <= window_start]
        for key in stale:
            del self._buckets[key]

    def reset(self) -> None:
        self._buckets.clear()
        self._last_sweep = 0.0


limiter = SlidingWindowLimiter()


async def rate_limit(request: Request, current_user = Depends(get_current_user)):
    if not settings.RATE_LIMIT_ENABLED:
        return True

    route = request.scope.get("route")
    path = getattr(route, "path", request.url.path)
    key = f"{current_user['sub']}:{request.method}:{path}"

    if not limiter.hit(key, settings.RATE_LIMIT_REQUESTS, settings.RATE_LIMIT_PERIOD_SECONDS):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests. Please slow down.",
        )
    return True
