"""Per-client request throttling.

Counts requests per client address in fixed windows. Redis holds the counters
when ``REDIS_URL`` is configured so every worker shares them; without Redis,
or once Redis becomes unreachable, counters live in this process.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Any

import redis

from inkwell.core.settings import settings

__all__ = ["RateLimitDecision", "RateLimitService", "get_rate_limit_service"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of counting one request against a client's window."""

    allowed: bool
    remaining: int
    reset_after: int


class RateLimitService:
    """Fixed-window request counter keyed by client address."""

    def __init__(
        self,
        *,
        max_requests: int,
        window_seconds: int,
        redis_client: Any | None = None,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._redis = redis_client
        self._counters: dict[str, list[int]] = {}
        self._next_sweep = 0
        self._lock = Lock()

    def hit(self, client_id: str) -> RateLimitDecision:
        """Count a request from ``client_id`` and decide whether to serve it."""
        count, reset_after = self._increment(f"ratelimit:{client_id}")
        remaining = max(0, self.max_requests - count)
        return RateLimitDecision(
            allowed=count <= self.max_requests,
            remaining=remaining,
            reset_after=reset_after,
        )

    def reset(self) -> None:
        """Forget every in-process counter."""
        with self._lock:
            self._counters.clear()

    def _increment(self, key: str) -> tuple[int, int]:
        if self._redis is not None:
            try:
                pipe = self._redis.pipeline()
                pipe.incr(key)
                pipe.expire(key, self.window_seconds, nx=True)
                pipe.ttl(key)
                count, _, ttl = pipe.execute()
                return int(count), max(int(ttl), 0)
            except redis.RedisError as err:
                logger.warning("Redis unavailable for rate limiting, using local counters: %s", err)
                self._redis = None

        now = int(time.time())
        with self._lock:
            if now >= self._next_sweep:
                self._sweep(now)
            entry = self._counters.get(key)
            if entry is None or entry[1] <= now:
                entry = [0, now + self.window_seconds]
                self._counters[key] = entry
            entry[0] += 1
            return entry[0], entry[1] - now

    def _sweep(self, now: int) -> None:
        # Caller holds the lock. Runs at most once per window.
        expired = [key for key, (_, resets_at) in self._counters.items() if resets_at <= now]
        for key in expired:
            del self._counters[key]
        self._next_sweep = now + self.window_seconds


def _build_default_service() -> RateLimitService:
    client = redis.from_url(settings.redis_url) if settings.redis_url else None
    return RateLimitService(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
        redis_client=client,
    )


_service: RateLimitService | None = None


def get_rate_limit_service() -> RateLimitService:
    """Return the shared rate limit service, creating it on first use."""
    global _service
    if _service is None:
        _service = _build_default_service()
    return _service
