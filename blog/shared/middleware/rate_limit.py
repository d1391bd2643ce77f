# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
import time
from collections import defaultdict, deque
from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps

from flask import Request, current_app, request

from blog.shared.config import AppConfig
from blog.shared.errors import RateLimitedError
from blog.shared.logging import logger


@dataclass
class Bucket:
    timestamps: deque[float]


class InMemoryRateLimiter:
    def __init__(self, limit: int, window_seconds: float) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._buckets: dict[str, Bucket] = defaultdict(lambda: Bucket(deque(maxlen=self._limit)))
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        now = time.monotonic()
        with self._lock:
            bucket = self._buckets[key]
            # Drop old
            while bucket.timestamps and (now - bucket.timestamps[0]) > self._window:
                bucket.timestamps.popleft()
            if len(bucket.timestamps) >= self._limit:
                return False
            bucket.timestamps.append(now)
            return True


def _client_key(req: Request) -> str:
    forwarded = req.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    return forwarded or (req.remote_addr or "unknown")


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    """Throttle a view per client address.

    Settings are read from the application's ``AppConfig`` on first use, so the
    decorator can be applied at import time before any app exists.
    """

    def _limiter(name: str) -> InMemoryRateLimiter | None:
        config: AppConfig = current_app.config["BLOG_CONFIG"]
        limiters: dict[str, InMemoryRateLimiter | None] = current_app.extensions.setdefault(
            "blog.rate_limiters", {}
        )
        if name not in limiters:
            security = config.security
            limiters[name] = (
                InMemoryRateLimiter(
                    limit or security.rate_limit_requests,
                    window_seconds or security.rate_limit_window,
                )
                if security.enable_rate_limit
                else None
            )
        return limiters[name]

    def decorator(f: Callable):
        @wraps(f)
        def wrapper(*args, **kwargs):
            limiter = _limiter(f.__qualname__)
            if limiter is not None:
                key = f"{request.path}:{_client_key(request)}"
                if not limiter.allow(key):
                    logger.warning(f"rate_limit: rejected {request.method} {request.path}")
                    raise RateLimitedError()
            return f(*args, **kwargs)

        return wrapper

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
