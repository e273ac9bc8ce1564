from __future__ import annotations

import threading
import time
from typing import Any, Callable, Mapping, Optional


class Bucket:
    """Rate-limit window for one REST route, driven by response headers."""

    def __init__(self, key: str) -> None:
        self.key = key
        self.remaining = 1
        self.limit = 1
        self.reset_at = 0.0
        self.lock = threading.Lock()

    def wait_time(self, now: float) -> float:
        if self.remaining > 0 or now >= self.reset_at:
            return 0.0
        return self.reset_at - now


class RateLimiter:
    """Per-bucket REST limiter with a shared global lockout.

    ``acquire`` blocks until the bucket may send again and returns the bucket; the
    caller must hand response headers back through ``release``.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._buckets: dict[str, Bucket] = {}
        self.global_reset_at = 0.0

    def get_bucket(self, key: str) -> Bucket:
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                bucket = Bucket(key)
                self._buckets[key] = bucket
            return bucket

    def acquire(self, key: str) -> Bucket:
        bucket = self.get_bucket(key)
        bucket.lock.acquire()
        while True:
            now = self._clock()
            wait_s = max(bucket.wait_time(now), self.global_reset_at - now)
            if wait_s <= 0:
                break
            self._sleep(wait_s)
        if now >= bucket.reset_at:
            bucket.remaining = bucket.limit
        bucket.remaining -= 1
        return bucket

    def release(self, bucket: Bucket, headers: Optional[Mapping[str, Any]] = None) -> None:
        try:
            if headers:
                self._update(bucket, headers)
        finally:
            bucket.lock.release()

    def _update(self, bucket: Bucket, headers: Mapping[str, Any]) -> None:
        lowered = {str(k).lower(): v for k, v in headers.items()}
        now = self._clock()

        retry_after = _as_float(lowered.get("retry-after"))
        if retry_after is not None and _as_bool(lowered.get("x-ratelimit-global")):
            self.global_reset_at = now + retry_after
            return

        limit = _as_float(lowered.get("x-ratelimit-limit"))
        if limit is not None:
            bucket.limit = max(1, int(limit))
        remaining = _as_float(lowered.get("x-ratelimit-remaining"))
        if remaining is not None:
            bucket.remaining = int(remaining)
        reset_after = _as_float(lowered.get("x-ratelimit-reset-after"))
        if reset_after is None:
            reset_after = retry_after
        if reset_after is not None:
            bucket.reset_at = now + reset_after


def _as_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_bool(value: Any) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes"}
