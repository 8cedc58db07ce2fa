"""
Notes API — Rate Limiting Middleware
======================================

What:  Per-client sliding window rate limiter.
How:   Keeps the timestamps of each client's recent requests; a request is
       rejected with 429 once the client already has `limit` requests inside
       the last `window` seconds.
When:  Inside RequestIDMiddleware and the access logger, so rejected requests
       are logged and their 429 body carries the request id.

Algorithm: Sliding Window Log
    1. Drop the client's timestamps older than now - window
    2. If the remaining count >= limit, reject with 429 + Retry-After
    3. Otherwise record now and pass the request on

Limits are held in process memory and apply per worker process.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from notes_api.config import settings
from notes_api.exceptions import RateLimitExceededError
from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

# Number of recorded requests between sweeps of idle clients.
CLEANUP_INTERVAL = 1000


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Args:
        limit:   Max requests per window (default: settings.rate_limit_requests)
        window:  Window length in seconds (default: settings.rate_limit_window)
        enabled: Pass everything through when False (default: settings.rate_limit_enabled)
        clock:   Returns the current time in seconds (default: time.monotonic)

    Excluded paths:
        /health, /docs, /openapi.json, /redoc
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(
        self,
        app,
        limit: Optional[int] = None,
        window: Optional[int] = None,
        enabled: Optional[bool] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.limit = limit if limit is not None else settings.rate_limit_requests
        self.window = window if window is not None else settings.rate_limit_window
        self.enabled = enabled if enabled is not None else settings.rate_limit_enabled
        self._clock = clock
        self._requests: Dict[str, Deque[float]] = defaultdict(deque)
        self._recorded = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self.enabled or request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"

        try:
            self.check(client_ip)
        except RateLimitExceededError as exc:
            logger.warning(
                "Rate limit exceeded for %s: %d requests in %ds window",
                client_ip,
                self.limit,
                self.window,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "details": exc.context,
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(exc.retry_after)},
            )

        return await call_next(request)

    def check(self, client_ip: str) -> None:
        """
        Record a request from `client_ip`.

        Raises:
            RateLimitExceededError: The client is over its limit; nothing is recorded.
        """
        now = self._clock()
        window_start = now - self.window

        timestamps = self._requests[client_ip]
        while timestamps and timestamps[0] <= window_start:
            timestamps.popleft()

        if len(timestamps) >= self.limit:
            retry_after = int(timestamps[0] + self.window - now) + 1
            raise RateLimitExceededError(retry_after=retry_after)

        timestamps.append(now)
        self._recorded += 1
        if self._recorded % CLEANUP_INTERVAL == 0:
            self._cleanup_inactive_clients(window_start)

    def _cleanup_inactive_clients(self, window_start: float) -> None:
        """Forget clients whose newest request is outside the window."""
        inactive = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive:
            del self._requests[ip]

        if inactive:
            logger.debug("Cleaned up %d inactive client entries", len(inactive))
