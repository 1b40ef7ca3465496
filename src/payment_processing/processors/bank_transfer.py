from typing import ClassVar

from payment_processing.domain.models import (
    BankAccount,
    Failed,
    PaymentMethod,
    PaymentResult,
    Pending,
    Success,
)
from payment_processing.processors.base import PaymentProcessor


class BankTransferProcessor(PaymentProcessor):
    processor_name: ClassVar[str] = "BankTransferProcessor"
    supported_methods: ClassVar[frozenset[str]] = frozenset({"CHECKING", "SAVINGS", "BUSINESS"})

    # Transfers above this go through the bank's out-of-band settlement window
    PENDING_THRESHOLD: ClassVar[float] = 5000.0
    SETTLEMENT_WINDOW_MS: ClassVar[int] = 24 * 60 * 60 * 1000
    STATUS_CHECK_URL: ClassVar[str] = "https://bank.example.com/status/{transaction_id}"

    async def process_payment(self, method: PaymentMethod, amount: float) -> PaymentResult:
        if not isinstance(method, BankAccount):
            return self._unsupported(method, amount, "Bank transfer")

        if not self.enabled:
            return self._disabled(method, amount, "Bank transfer")

        await self._simulate_network_latency()

        if not method.has_sufficient_funds or amount > method.balance:
            return Failed(
                error_code="INSUFFICIENT_FUNDS",
                error_message="Account has insufficient funds",
                payment_method=method,
                amount=amount,
            )

        if amount > self.PENDING_THRESHOLD:
            transaction_id = self.generate_transaction_id(method)
            return Pending(
                transaction_id=transaction_id,
                amount=amount,
                payment_method=method,
                estimated_completion_time=self.SETTLEMENT_WINDOW_MS,
                status_check_url=self.STATUS_CHECK_URL.format(transaction_id=transaction_id),
            )

        if self._simulated_failure():
            return Failed(
                error_code="BANK_NETWORK_ERROR",
                error_message="Bank network temporarily unavailable",
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
