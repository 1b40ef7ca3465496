"""Application layer - payment orchestration and wiring."""

from payment_processing.application.factory import (
    build_auditor,
    build_payment_service,
    build_processors,
)
from payment_processing.application.services import PaymentService


__all__ = [
    "PaymentService",
    "build_auditor",
    "build_payment_service",
    "build_processors",
]
