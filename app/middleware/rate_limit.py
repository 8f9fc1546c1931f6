"""
Rate limiting middleware.

Counts requests per client address inside a fixed window that starts on the
client's first request. Once the ceiling is exceeded the request is answered
with 429 and never reaches later stages.

Every response carries:
- X-RateLimit-Limit: Maximum requests allowed per window
- X-RateLimit-Remaining: Requests remaining in the current window
- X-RateLimit-Reset: When the window resets (Unix timestamp)
- Retry-After: Seconds until the client can retry (429 only)
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)

# Expired windows are swept after this many hits
PRUNE_EVERY = 1000


@dataclass
class RateLimitWindow:
    """Counter for one client"""
    count: int = 0
    started_at: float = 0.0


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    retry_after: int

    @property
    def headers(self) -> Dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(math.ceil(self.reset_at)),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.retry_after)
        return headers


class RateLimitStore:
    """
    In-memory, process-wide request counters keyed by client address.

    All mutation happens on the event loop between awaits, so no lock is
    taken.
    """

    def __init__(
        self,
        window_seconds: float = 15 * 60,
        max_requests: int = 100,
        clock: Callable[[], float] = time.time,
    ):
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self._clock = clock
        self._windows: Dict[str, RateLimitWindow] = {}
        self._hits_since_prune = 0

    def hit(self, key: str) -> RateLimitResult:
        """
        Record one request for ``key`` and decide whether it may proceed.

        The first ``max_requests`` hits of a window are allowed; every
        later hit in the same window is rejected.
        """
        now = self._clock()
        self._maybe_prune(now)

        window = self._windows.get(key)
        if window is None or now - window.started_at >= self.window_seconds:
            window = RateLimitWindow(count=0, started_at=now)
            self._windows[key] = window

        window.count += 1
        reset_at = window.started_at + self.window_seconds

        return RateLimitResult(
            allowed=window.count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - window.count),
            reset_at=reset_at,
            retry_after=max(1, math.ceil(reset_at - now)),
        )

    def reset(self, key: str | None = None) -> None:
        """Forget one client's counter, or all of them."""
        if key is None:
            self._windows.clear()
        else:
            self._windows.pop(key, None)

    def __len__(self) -> int:
        return len(self._windows)

    def _maybe_prune(self, now: float) -> None:
        self._hits_since_prune += 1
        if self._hits_since_prune < PRUNE_EVERY:
            return
        self._hits_since_prune = 0
        expired = [
            key for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware that enforces the per-address request ceiling."""

    def __init__(self, app, store: RateLimitStore):
        super().__init__(app)
        self.store = store

    async def dispatch(self, request: Request, call_next) -> Response:
        client_ip = request.client.host if request.client else "unknown"
        result = self.store.hit(client_ip)

        if not result.allowed:
            logger.warning(f"Rate limit exceeded for {client_ip}")
            response = RateLimitExceededError(result.retry_after).to_response()
        else:
            response = await call_next(request)

        for header, value in result.headers.items():
            response.headers[header] = value
        return response
