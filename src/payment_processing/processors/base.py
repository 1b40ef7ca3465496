import asyncio
import random
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import ClassVar

import structlog
from ulid import ULID

from payment_processing.config import ProcessorSettings
from payment_processing.domain.models import (
    BankAccount,
    CreditCard,
    DigitalWallet,
    Failed,
    PaymentMethod,
    PaymentResult,
    ProcessorType,
)


logger = structlog.get_logger()


TRANSACTION_PREFIXES = {
    ProcessorType.CREDIT_CARD: "CC",
    ProcessorType.BANK_TRANSFER: "BT",
    ProcessorType.DIGITAL_WALLET: "DW",
}


class PaymentProcessor(ABC):
    """
    Handles payments for one instrument type.

    Subclasses implement `process_payment`; callers go through
    `execute_payment`, which applies the processor amount limit and the
    generic instrument checks first.
    """

    processor_name: ClassVar[str]
    supported_methods: ClassVar[frozenset[str]]

    def __init__(
        self,
        settings: ProcessorSettings,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self._settings = settings
        self._rng = rng

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    @property
    def fee_rate(self) -> float:
        return self._settings.fee_rate

    @property
    def max_amount(self) -> float:
        return self._settings.max_amount

    @abstractmethod
    async def process_payment(self, method: PaymentMethod, amount: float) -> PaymentResult: ...

    def calculate_fee(self, amount: float) -> float:
        return amount * self.fee_rate

    def calculate_total(self, amount: float) -> float:
        return amount + self.calculate_fee(amount)

    def validate_payment_method(self, method: PaymentMethod) -> bool:
        if not method.is_active:
            return False

        match method:
            case CreditCard():
                return not method.is_expired
            case BankAccount():
                return method.has_sufficient_funds
            case DigitalWallet():
                return method.balance >= 0
            case _:
                return False

    def generate_transaction_id(self, method: PaymentMethod) -> str:
        return f"{TRANSACTION_PREFIXES[method.processor_type]}-{ULID()}"

    async def execute_payment(self, method: PaymentMethod, amount: float) -> PaymentResult:
        if amount > self.max_amount:
            return Failed(
                error_code="AMOUNT_EXCEEDS_LIMIT",
                error_message=f"Amount exceeds processor limit of {self.max_amount}",
                payment_method=method,
                amount=amount,
            )

        if not self.validate_payment_method(method):
            return Failed(
                error_code="VALIDATION_ERROR",
                error_message="Payment method validation failed",
                payment_method=method,
                amount=amount,
            )

        return await self.process_payment(method, amount)

    async def _simulate_network_latency(self) -> None:
        await asyncio.sleep(self._settings.processing_delay_seconds)

    def _simulated_failure(self) -> bool:
        return self._rng() < self._settings.failure_rate

    def _disabled(self, method: PaymentMethod, amount: float, label: str) -> Failed:
        logger.warning("processor_disabled", processor=self.processor_name)
        return Failed(
            error_code="PROCESSOR_DISABLED",
            error_message=f"{label} processing is disabled",
            payment_method=method,
            amount=amount,
        )

    def _unsupported(self, method: PaymentMethod, amount: float, label: str) -> Failed:
        return Failed(
            error_code="UNSUPPORTED_METHOD",
            error_message=f"{label} processor cannot handle {method.type_name}",
            payment_method=method,
            amount=amount,
        )
