"""
BlockNotes — Rate Limiting Middleware
=======================================

What:  Per-IP sliding window limit on API requests.
How:   Each client IP keeps a deque of request timestamps; timestamps older
       than the window are dropped on every request, and a request is
       rejected with 429 once the deque holds `rate_limit_requests` entries.

State lives in process memory, so the limit is per worker.
"""

import logging
import time
from collections import deque
from typing import Deque, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from blocknotes.config import settings
from blocknotes.exceptions import RateLimitExceededError
from blocknotes.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Only /api/* paths are counted; health checks and the OpenAPI docs are
    always reachable.
    """

    SWEEP_EVERY = 1000

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
    ):
        super().__init__(app)
        self.max_requests = max_requests or settings.rate_limit_requests
        self.window_seconds = window_seconds or settings.rate_limit_window
        self._hits: Dict[str, Deque[float]] = {}
        self._seen = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not request.url.path.startswith("/api/"):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.monotonic()
        retry_after = self._register(client_ip, now)

        if retry_after is not None:
            exc = RateLimitExceededError(retry_after=retry_after)
            logger.warning(
                "Rate limit exceeded for %s: %d requests in %ds",
                client_ip,
                self.max_requests,
                self.window_seconds,
            )
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "details": exc.context,
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    def _register(self, client_ip: str, now: float) -> Optional[int]:
        """Record a hit; return seconds to wait if the client is over the limit."""
        hits = self._hits.setdefault(client_ip, deque())
        cutoff = now - self.window_seconds
        while hits and hits[0] <= cutoff:
            hits.popleft()

        if len(hits) >= self.max_requests:
            return int(hits[0] + self.window_seconds - now) + 1

        hits.append(now)
        self._seen += 1
        if self._seen % self.SWEEP_EVERY == 0:
            self._sweep(cutoff)
        return None

    def _sweep(self, cutoff: float) -> None:
        """Forget clients with no hits inside the current window."""
        idle = [ip for ip, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for ip in idle:
            del self._hits[ip]
        if idle:
            logger.debug("Dropped rate limit state for %d idle clients", len(idle))
