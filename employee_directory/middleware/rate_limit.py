"""
Employee Directory API - Rate Limit Headers Middleware
=======================================================

What:  Per-IP sliding window counter that reports usage in response headers.
How:   Keeps request timestamps per client IP for the last RATE_LIMIT_WINDOW
       seconds and sets:
           X-RateLimit-Limit      RATE_LIMIT_REQUESTS
           X-RateLimit-Remaining  requests left in the current window (>= 0)
           X-RateLimit-Reset      seconds until the oldest request leaves the window
       Requests over the limit are still served; the counter is advisory and
       only logs a warning.

In-memory and per-process: each uvicorn worker counts on its own.
"""

import logging
import time
from collections import defaultdict
from typing import Dict, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from employee_directory.config import settings

logger = logging.getLogger(__name__)


class RateLimitHeadersMiddleware(BaseHTTPMiddleware):
    """Counts requests per client IP and reports the count; never blocks a request."""

    EXCLUDED_PATHS = {"/health", "/api-docs", "/openapi.json"}
    CLEANUP_EVERY = 1000

    def __init__(
        self,
        app,
        limit: Optional[int] = None,
        window: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(app, **kwargs)
        self.limit = limit if limit is not None else settings.rate_limit_requests
        self.window = window if window is not None else settings.rate_limit_window
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._seen = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        window_start = now - self.window

        # ── Sliding window ────────────────────────────────────────────────
        timestamps = [ts for ts in self._requests[client_ip] if ts > window_start]
        timestamps.append(now)
        self._requests[client_ip] = timestamps

        remaining = max(self.limit - len(timestamps), 0)
        reset = int(timestamps[0] + self.window - now) + 1
        if len(timestamps) > self.limit:
            logger.warning(
                "Client %s is over the advisory limit: %d requests in %ds window",
                client_ip,
                len(timestamps),
                self.window,
            )

        self._seen += 1
        if self._seen % self.CLEANUP_EVERY == 0:
            self._cleanup_inactive_ips(window_start)

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.limit)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(reset)
        return response

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        """Drop IPs with no request inside the current window."""
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] < window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
