import asyncio
import contextlib
from typing import Any

import structlog
import uvicorn
from fastapi import FastAPI, Response, status
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from payment_processing.application.services import PaymentService


logger = structlog.get_logger()


def create_metrics_app(payment_service: PaymentService) -> FastAPI:
    """Create FastAPI application for the metrics and probe endpoints."""
    app = FastAPI(
        title="Payment Processing Metrics",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.get("/metrics", response_class=PlainTextResponse)
    async def metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST,
        )

    @app.get("/health")
    async def health(response: Response) -> dict[str, Any]:
        """
        Payment service health for liveness probes.

        Answers 503 when no enabled processor is left to take payments.
        """
        health_status = payment_service.get_health_status()
        enabled = [entry["type"] for entry in payment_service.get_processor_stats()["processors"] if entry["enabled"]]
        health_status["enabled_processors"] = enabled
        if not enabled:
            health_status["status"] = "DOWN"
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return health_status

    return app


class MetricsServer:
    """Serves metrics and service health on a port separate from the payment API."""

    def __init__(self, payment_service: PaymentService, host: str = "0.0.0.0", port: int = 9090) -> None:
        self._payment_service = payment_service
        self._host = host
        self._port = port
        self._server: uvicorn.Server | None = None
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the metrics server in the background."""
        config = uvicorn.Config(
            create_metrics_app(self._payment_service),
            host=self._host,
            port=self._port,
            log_level="warning",
            access_log=False,
        )
        self._server = uvicorn.Server(config)

        self._task = asyncio.create_task(self._server.serve())
        logger.info(
            "metrics_server_started",
            host=self._host,
            port=self._port,
            auditing_mode=type(self._payment_service.auditor).__name__,
        )

    async def stop(self) -> None:
        """Stop the metrics server, cancelling it if it does not exit within five seconds."""
        if self._server:
            self._server.should_exit = True

        if self._task:
            try:
                await asyncio.wait_for(self._task, timeout=5.0)
            except TimeoutError:
                logger.warning("metrics_server_stop_timeout")
                self._task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await self._task

        logger.info("metrics_server_stopped")
