"""Request metrics collected per application instance."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


@dataclass
class RequestMetrics:
    """Counters for served requests.

    One instance lives on ``app.state.metrics``; tests create their own.
    """

    requests: int = 0
    errors: int = 0
    slow_requests: int = 0
    total_duration_ms: float = 0.0
    started_at: float = field(default_factory=time.monotonic)

    def record(self, duration_ms: float, *, failed: bool, slow: bool) -> None:
        self.requests += 1
        self.total_duration_ms += duration_ms
        if failed:
            self.errors += 1
        if slow:
            self.slow_requests += 1

    def reset(self) -> None:
        self.requests = 0
        self.errors = 0
        self.slow_requests = 0
        self.total_duration_ms = 0.0
        self.started_at = time.monotonic()

    def snapshot(self) -> dict[str, float | int]:
        uptime = max(time.monotonic() - self.started_at, 1e-9)
        avg = self.total_duration_ms / self.requests if self.requests else 0.0
        return {
            "requests": self.requests,
            "errors": self.errors,
            "slow_requests": self.slow_requests,
            "avg_duration_ms": round(avg, 2),
            "uptime_sec": int(uptime),
            "requests_per_minute": round(self.requests / (uptime / 60), 2),
        }


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """Time each API request and feed the app's ``RequestMetrics``."""

    def __init__(self, app, *, metrics: RequestMetrics, slow_request_ms: int) -> None:
        super().__init__(app)
        self._metrics = metrics
        self._slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # Health checks are frequent and uninteresting.
        if not request.url.path.startswith("/api/") or request.url.path == "/api/health":
            return await call_next(request)

        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            self._metrics.record(duration_ms, failed=True, slow=False)
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        slow = duration_ms > self._slow_request_ms
        if slow:
            logger.warning("Slow request: %s %s - %.0fms", request.method, request.url.path, duration_ms)
        self._metrics.record(duration_ms, failed=response.status_code >= 400, slow=slow)
        return response
