import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from payment_processing.api.middleware import MetricsMiddleware
from payment_processing.api.routes import router
from payment_processing.application.services import PaymentService


logger = structlog.get_logger()


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report request validation errors without echoing the rejected input.

    Rejected values such as a NaN amount cannot be written as strict JSON.
    """
    errors = [{"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]} for error in exc.errors()]
    logger.info("request_validation_failed", path=request.url.path, error_count=len(errors))
    return JSONResponse(
        status_code=422,
        content={"detail": errors},
    )


def create_app(payment_service: PaymentService) -> FastAPI:
    """Create the payment API bound to an already wired service."""
    app = FastAPI(
        title="Payment Processing Service",
        version="0.1.0",
    )
    app.state.payment_service = payment_service
    app.add_middleware(MetricsMiddleware)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.include_router(router)
    return app
