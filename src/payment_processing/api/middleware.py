import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Match

from payment_processing.infrastructure.metrics import (
    HTTP_REQUEST_DURATION,
    HTTP_REQUESTS_TOTAL,
)


logger = structlog.get_logger()


class MetricsMiddleware(BaseHTTPMiddleware):
    """HTTP middleware that collects Prometheus metrics per route."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        method = request.method
        path = self._route_path(request)
        start_time = time.perf_counter()
        status_code = "500"

        try:
            response = await call_next(request)
            status_code = str(response.status_code)
            return response
        finally:
            duration = time.perf_counter() - start_time
            HTTP_REQUEST_DURATION.labels(method=method, path=path, status_code=status_code).observe(duration)
            HTTP_REQUESTS_TOTAL.labels(method=method, path=path, status_code=status_code).inc()
            logger.debug(
                "http_request_completed",
                method=method,
                path=path,
                status_code=status_code,
                duration_ms=round(duration * 1000, 2),
            )

    @staticmethod
    def _route_path(request: Request) -> str:
        """Use the route template so path labels stay low-cardinality."""
        for route in request.app.router.routes:
            match, _ = route.matches(request.scope)
            if match == Match.FULL:
                return str(getattr(route, "path", request.url.path))
        return "unmatched"
