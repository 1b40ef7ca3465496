from collections.abc import Mapping
from typing import Any

import structlog

from payment_processing.audit.base import Auditable
from payment_processing.domain.models import (
    Cancelled,
    Failed,
    PaymentMethod,
    PaymentResult,
    Pending,
    Success,
)


logger = structlog.get_logger("payment_processing.audit")


class PaymentAuditor(Auditable):
    """Writes the audit trail as structured log lines."""

    def audit_payment_attempt(self, method: PaymentMethod, amount: float) -> None:
        logger.info(
            "audit_payment_attempt",
            method=method.describe(),
            amount=amount,
            method_id=method.id,
        )

    def audit_payment_result(self, result: PaymentResult) -> None:
        match result:
            case Success():
                logger.info(
                    "audit_payment_succeeded",
                    transaction_id=result.transaction_id,
                    amount=result.amount,
                    fee=result.fee,
                    total=result.total,
                )
            case Failed():
                logger.warning(
                    "audit_payment_failed",
                    error_code=result.error_code,
                    error_message=result.error_message,
                    amount=result.amount,
                    retryable=result.is_retryable,
                )
            case Pending():
                logger.info(
                    "audit_payment_pending",
                    transaction_id=result.transaction_id,
                    amount=result.amount,
                    estimated_completion_ms=result.estimated_completion_time,
                )
            case Cancelled():
                logger.warning(
                    "audit_payment_cancelled",
                    reason=result.reason,
                    amount=result.amount,
                )

    def audit_security_event(self, event: str, details: Mapping[str, Any]) -> None:
        logger.warning("audit_security_event", security_event=event, details=dict(details))
