import asyncio
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

import structlog

from payment_processing.audit.base import Auditable
from payment_processing.domain.models import (
    BankAccount,
    CreditCard,
    DigitalWallet,
    Failed,
    PaymentMethod,
    PaymentResult,
    ProcessorType,
)
from payment_processing.infrastructure.metrics import (
    BATCH_SIZE,
    PAYMENT_REQUESTS_TOTAL,
    track_payment_duration,
)
from payment_processing.processors.base import PaymentProcessor


logger = structlog.get_logger()


DEFAULT_MAX_PAYMENT_AMOUNT = 100000.0
MIN_CARD_NUMBER_LENGTH = 13
ROUTING_NUMBER_LENGTH = 9


class PaymentService:
    def __init__(
        self,
        processors: Mapping[ProcessorType, PaymentProcessor],
        auditor: Auditable,
        max_payment_amount: float = DEFAULT_MAX_PAYMENT_AMOUNT,
    ) -> None:
        self._processors = dict(processors)
        self._auditor = auditor
        self._max_payment_amount = max_payment_amount

    @property
    def auditor(self) -> Auditable:
        return self._auditor

    @track_payment_duration
    async def process_payment(self, method: PaymentMethod, amount: float) -> PaymentResult:
        log = logger.bind(
            method_type=method.type_name,
            method_id=method.id,
            amount=amount,
        )
        log.debug("payment_received")

        try:
            self._auditor.audit_payment_attempt(method, amount)

            result = self._validate_payment_request(method, amount)
            if result is None:
                processor = self._processors.get(method.processor_type)
                if processor is None:
                    result = Failed(
                        error_code="NO_PROCESSOR",
                        error_message=f"No processor available for {method.type_name}",
                        payment_method=method,
                        amount=amount,
                    )
                else:
                    log.debug("processor_selected", processor=processor.processor_name)
                    result = await processor.execute_payment(method, amount)

            self._auditor.audit_payment_result(result)
        except Exception as e:
            log.error("payment_processing_failed", error=str(e), exc_info=True)
            result = Failed(
                error_code="PROCESSING_ERROR",
                error_message=f"Payment processing failed: {e}",
                payment_method=method,
                amount=amount,
            )
            self._auditor.audit_payment_result(result)

        error_code = result.error_code if isinstance(result, Failed) else ""
        PAYMENT_REQUESTS_TOTAL.labels(status=result.status.value, error_code=error_code).inc()
        log.info("payment_processed", status=result.status.value, error_code=error_code or None)

        return result

    async def process_batch_payments(
        self,
        payments: Sequence[tuple[PaymentMethod, float]],
    ) -> list[PaymentResult]:
        """
        Process every payment concurrently.

        Results keep the input order. Payments are independent: there is no
        concurrency limit and no atomicity across the batch.
        """
        BATCH_SIZE.observe(len(payments))
        logger.info("batch_started", size=len(payments))

        results = await asyncio.gather(*(self.process_payment(method, amount) for method, amount in payments))
        return list(results)

    def get_supported_payment_methods(self) -> set[str]:
        return {name for processor in self._processors.values() for name in processor.supported_methods}

    def get_processor_stats(self) -> dict[str, Any]:
        return {
            "total_processors": len(self._processors),
            "supported_methods": len(self.get_supported_payment_methods()),
            "processors": [
                {
                    "type": processor_type.value,
                    "name": processor.processor_name,
                    "enabled": processor.enabled,
                    "fee_rate": processor.fee_rate,
                    "max_amount": processor.max_amount,
                    "supported_methods": sorted(processor.supported_methods),
                }
                for processor_type, processor in self._processors.items()
            ],
        }

    def get_health_status(self) -> dict[str, Any]:
        return {
            "status": "UP",
            "processors_available": len(self._processors),
            "auditing_mode": type(self._auditor).__name__,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    def _validate_payment_request(self, method: PaymentMethod, amount: float) -> Failed | None:
        if not amount > 0:
            return self._declined(method, amount, "INVALID_AMOUNT", "Amount must be greater than zero")

        if amount > self._max_payment_amount:
            return self._declined(method, amount, "AMOUNT_TOO_LARGE", "Amount exceeds maximum allowed limit")

        if not method.is_active:
            return self._declined(method, amount, "INACTIVE_METHOD", "Payment method is not active")

        match method:
            case CreditCard():
                if method.is_expired:
                    return self._declined(method, amount, "CARD_EXPIRED", "Credit card has expired")
                if len(method.card_number) < MIN_CARD_NUMBER_LENGTH:
                    return self._declined(method, amount, "INVALID_CARD_NUMBER", "Invalid card number format")
            case BankAccount():
                if not method.has_sufficient_funds:
                    return self._declined(
                        method, amount, "INSUFFICIENT_FUNDS", "Bank account has insufficient funds"
                    )
                if len(method.routing_number) != ROUTING_NUMBER_LENGTH:
                    return self._declined(
                        method, amount, "INVALID_ROUTING_NUMBER", "Invalid routing number format"
                    )
            case DigitalWallet():
                if method.balance < amount:
                    return self._declined(
                        method,
                        amount,
                        "INSUFFICIENT_WALLET_BALANCE",
                        "Digital wallet has insufficient balance",
                    )
                if "@" not in method.email:
                    return self._declined(method, amount, "INVALID_EMAIL", "Invalid email address for wallet")

        return None

    @staticmethod
    def _declined(method: PaymentMethod, amount: float, error_code: str, error_message: str) -> Failed:
        logger.info("payment_declined", reason=error_code, method_type=method.type_name, amount=amount)
        return Failed(
            error_code=error_code,
            error_message=error_message,
            payment_method=method,
            amount=amount,
        )
