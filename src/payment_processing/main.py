import asyncio

import structlog
import uvicorn

from payment_processing.api.app import create_app
from payment_processing.api.metrics_server import MetricsServer
from payment_processing.application.factory import build_payment_service
from payment_processing.config import settings
from payment_processing.logging import configure_logging


logger = structlog.get_logger()


async def main() -> None:
    configure_logging(
        level=settings.log_level,
        log_format=settings.log_format,
    )

    logger.info(
        "starting_payment_processing_service",
        environment=settings.environment,
        http_port=settings.http_port,
        metrics_port=settings.metrics_port,
        log_level=settings.log_level,
        metrics_enabled=settings.metrics_enabled,
        compliance_enabled=settings.compliance_enabled,
    )

    payment_service = build_payment_service(settings)
    app = create_app(payment_service)

    metrics_server: MetricsServer | None = None
    if settings.metrics_enabled:
        metrics_server = MetricsServer(
            payment_service,
            host=settings.metrics_host,
            port=settings.metrics_port,
        )
        await metrics_server.start()

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=settings.http_host,
            port=settings.http_port,
            log_level=settings.log_level.lower(),
            log_config=None,
        )
    )

    try:
        await server.serve()
    finally:
        logger.info("shutting_down")
        if metrics_server:
            await metrics_server.stop()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
