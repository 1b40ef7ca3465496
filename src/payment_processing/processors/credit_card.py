from typing import ClassVar

from payment_processing.domain.models import (
    CreditCard,
    Failed,
    PaymentMethod,
    PaymentResult,
    Success,
)
from payment_processing.processors.base import PaymentProcessor


class CreditCardProcessor(PaymentProcessor):
    processor_name: ClassVar[str] = "CreditCardProcessor"
    supported_methods: ClassVar[frozenset[str]] = frozenset({"VISA", "MASTERCARD", "AMEX", "DISCOVER"})

    MIN_FEE: ClassVar[float] = 0.30
    MAX_FEE: ClassVar[float] = 50.0

    async def process_payment(self, method: PaymentMethod, amount: float) -> PaymentResult:
        if not isinstance(method, CreditCard):
            return self._unsupported(method, amount, "Credit card")

        if not self.enabled:
            return self._disabled(method, amount, "Credit card")

        await self._simulate_network_latency()

        if method.is_expired:
            return Failed(
                error_code="CARD_EXPIRED",
                error_message="Credit card has expired",
                payment_method=method,
                amount=amount,
            )

        if self._simulated_failure():
            return Failed(
                error_code="NETWORK_ERROR",
                error_message="Payment network temporarily unavailable",
                payment_method=method,
                amount=amount,
            )

        return Success(
            transaction_id=self.generate_transaction_id(method),
            amount=amount,
            fee=self.calculate_fee(amount),
            total=self.calculate_total(amount),
            payment_method=method,
        )

    def calculate_fee(self, amount: float) -> float:
        return min(max(amount * self.fee_rate, self.MIN_FEE), self.MAX_FEE)
