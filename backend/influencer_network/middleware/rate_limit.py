"""
Influencer Network Backend: Rate Limiting Middleware
=====================================================

What:  Per-IP sliding-window limit on /api/* requests.
How:   Keeps each IP's request timestamps for the current window in memory;
       once the window holds `max_requests` entries further requests get
       429 with Retry-After until the oldest entry ages out.

Algorithm: sliding window log
    1. Drop timestamps older than now - window
    2. len(remaining) >= limit → 429, retry after oldest + window - now
    3. Otherwise record now and continue

Excluded: health probes and API docs.

In-memory and per-process; authenticated routes additionally pass through
the per-user limiter in middleware/auth.py.
"""

import logging
import time
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from influencer_network.config import settings
from influencer_network.middleware.errors import error_response

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """In-memory sliding-window limiter keyed by client IP."""

    EXCLUDED_PATHS = {"/health", "/api/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.max_requests = max_requests or settings.rate_limit_requests
        self.window_seconds = window_seconds or settings.rate_limit_window
        self._clock = clock
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._seen = 0

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if not path.startswith(API_PREFIX) or path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = self._clock()
        window_start = now - self.window_seconds

        timestamps = [ts for ts in self._requests[client_ip] if ts > window_start]
        self._requests[client_ip] = timestamps

        if len(timestamps) >= self.max_requests:
            retry_after = int(timestamps[0] + self.window_seconds - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip, len(timestamps), self.window_seconds,
            )
            return error_response(
                request,
                status_code=429,
                error="rate_limit_exceeded",
                message="Too many requests from this IP, please try again later.",
                details={"retry_after": retry_after},
                headers={"Retry-After": str(retry_after)},
            )

        timestamps.append(now)

        self._seen += 1
        if self._seen % 1000 == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]
        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
