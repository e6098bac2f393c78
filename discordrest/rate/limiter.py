"""Per-bucket and global rate limiting for REST requests."""

from __future__ import annotations

import re
import threading
import time
from collections.abc import Mapping
from dataclasses import dataclass, field

from .majors import parse_bucket_key

EXTRA_DELAY = 0.25
"""Seconds added to every reset time reported by the server."""

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_UINT_PATTERN = re.compile(r"[0-9]+")


class RateLimitTimeout(TimeoutError):
    """The rate limit would last past the caller's deadline."""

    def __init__(self, message: str = "rate: rate limit exceeds deadline") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class CustomRateLimit:
    """A fixed reset interval for every bucket whose key contains ``contains``."""

    contains: str
    reset: float


@dataclass
class _Bucket:
    custom: CustomRateLimit | None = None
    remaining: int = 1
    reset: float = 0.0
    last_reset: float = 0.0
    lock: threading.Lock = field(default_factory=threading.Lock)

    def try_unlock(self) -> None:
        try:
            self.lock.release()
        except RuntimeError:
            pass


def _parse_int(text: str) -> int:
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer syntax {text!r}")
    value = int(text)
    if not -(1 << 63) <= value < (1 << 63):
        raise ValueError(f"integer {text!r} out of range")
    return value


def _parse_uint(text: str) -> int:
    if not _UINT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid unsigned integer syntax {text!r}")
    value = int(text)
    if value >= 1 << 64:
        raise ValueError(f"unsigned integer {text!r} out of range")
    return value


class Limiter:
    """Rate limiter keyed by request path buckets.

    ``acquire`` locks a bucket and waits out any pending limit; ``release``
    reads the response headers and unlocks it.
    """

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix
        self.custom_limits: list[CustomRateLimit] = []
        self._global_until = 0.0
        self._buckets: dict[str, _Bucket] = {}
        self._buckets_lock = threading.Lock()

    def _bucket(self, path: str, store: bool) -> _Bucket | None:
        key = parse_bucket_key(path.removeprefix(self.prefix))
        with self._buckets_lock:
            bucket = self._buckets.get(key)
            if bucket is None and store:
                custom = next(
                    (limit for limit in self.custom_limits if limit.contains in key),
                    None,
                )
                bucket = _Bucket(custom=custom)
                self._buckets[key] = bucket
            return bucket

    def acquire(self, path: str, deadline: float | None = None) -> None:
        """Wait until a request to ``path`` may be made.

        ``deadline`` is an absolute Unix time; waiting past it raises.
        """
        bucket = self._bucket(path, True)

        if deadline is None:
            acquired = bucket.lock.acquire()
        else:
            acquired = bucket.lock.acquire(timeout=max(0.0, deadline - time.time()))
        if not acquired:
            raise TimeoutError("deadline exceeded while waiting for the bucket")

        now = time.time()
        if bucket.remaining == 0 and bucket.reset > now:
            until = bucket.reset
        else:
            until = self._global_until

        if until > now:
            if deadline is not None and until > deadline:
                bucket.lock.release()
                raise RateLimitTimeout()
            time.sleep(until - now)

        if bucket.remaining > 0:
            bucket.remaining -= 1

    def release(self, path: str, headers: Mapping[str, str] | None = None) -> None:
        """Record the rate-limit headers of a response and unlock its bucket."""
        bucket = self._bucket(path, False)
        if bucket is None:
            return

        try:
            if bucket.custom is not None:
                now = time.time()
                if now - bucket.last_reset >= bucket.custom.reset:
                    bucket.last_reset = now
                    bucket.reset = now + bucket.custom.reset
                return

            if headers is None:
                return

            fields = {str(key).lower(): str(value) for key, value in headers.items()}
            is_global = fields.get("x-ratelimit-global", "")
            remaining = fields.get("x-ratelimit-remaining", "")
            reset = fields.get("x-ratelimit-reset", "")
            retry_after = fields.get("retry-after", "")

            if retry_after:
                try:
                    seconds = _parse_int(retry_after)
                except ValueError as err:
                    raise ValueError(f"invalid retryAfter {retry_after!r}: {err}") from err
                at = time.time() + seconds
                if is_global:
                    self._global_until = at
                else:
                    bucket.reset = at
            elif reset:
                try:
                    unix = float(reset)
                except ValueError as err:
                    raise ValueError(f"invalid reset {reset}: {err}") from err
                bucket.reset = unix + EXTRA_DELAY

            if remaining:
                try:
                    bucket.remaining = _parse_uint(remaining)
                except ValueError as err:
                    raise ValueError(f"invalid remaining {remaining}: {err}") from err
        finally:
            bucket.try_unlock()