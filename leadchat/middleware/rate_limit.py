"""
Rate limiting middleware

Caps requests per client IP over a fixed window on every /api/ route.
Counters live in process memory and reset when the window elapses.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from ..utils.debug_logger import debug_logger

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


@dataclass
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class FixedWindowRateLimiter:
    """Per-key request counter over fixed windows"""

    def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        # key -> (window start, hits in window)
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._next_prune = clock() + window_seconds

    def _prune(self, now: float) -> None:
        self._next_prune = now + self.window_seconds
        expired = [key for key, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for key in expired:
            del self._windows[key]

    def hit(self, key: str) -> RateLimitResult:
        """Record one request for key and report whether it is within the limit"""
        now = self.clock()
        if now >= self._next_prune:
            self._prune(now)

        window_start, count = self._windows.get(key, (now, 0))
        if now - window_start >= self.window_seconds:
            window_start, count = now, 0

        count += 1
        self._windows[key] = (window_start, count)

        return RateLimitResult(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(self.max_requests - count, 0),
            reset_after=window_start + self.window_seconds - now,
        )

    def reset(self) -> None:
        self._windows.clear()


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware that rejects requests over the per-IP limit with 429"""

    def __init__(self, app, limiter: FixedWindowRateLimiter, path_prefix: str = "/api/"):
        super().__init__(app)
        self.limiter = limiter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        result = self.limiter.hit(client_ip)
        request_id = getattr(request.state, "request_id", None)

        headers = {
            "X-RateLimit-Limit": str(result.limit),
            "X-RateLimit-Remaining": str(result.remaining),
        }

        if not result.allowed:
            retry_after = max(math.ceil(result.reset_after), 1)
            logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
            debug_logger.log_rate_limit(request_id, f"Rejected, retry after {retry_after}s", request)
            headers["Retry-After"] = str(retry_after)
            return JSONResponse(status_code=429, content={"error": RATE_LIMIT_MESSAGE}, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
