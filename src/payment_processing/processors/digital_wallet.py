from typing import ClassVar

from payment_processing.domain.models import (
    DigitalWallet,
    Failed,
    PaymentMethod,
    PaymentResult,
    Success,
    WalletType,
)
from payment_processing.processors.base import PaymentProcessor


WALLET_LIMITS = {
    WalletType.PAYPAL: 2500.0,
    WalletType.APPLE_PAY: 10000.0,
    WalletType.GOOGLE_PAY: 5000.0,
    WalletType.VENMO: 1000.0,
}


class DigitalWalletProcessor(PaymentProcessor):
    processor_name: ClassVar[str] = "DigitalWalletProcessor"
    supported_methods: ClassVar[frozenset[str]] = frozenset({"PAYPAL", "APPLE_PAY", "GOOGLE_PAY", "VENMO"})

    async def process_payment(self, method: PaymentMethod, amount: float) -> PaymentResult:
        if not isinstance(method, DigitalWallet):
            return self._unsupported(method, amount, "Digital wallet")

        if not self.enabled:
            return self._disabled(method, amount, "Digital wallet")

        await self._simulate_network_latency()

        if method.balance < amount:
            return Failed(
                error_code="INSUFFICIENT_WALLET_BALANCE",
                error_message="Digital wallet has insufficient balance",
                payment_method=method,
                amount=amount,
            )

        if amount > WALLET_LIMITS[method.wallet_type]:
            return Failed(
                error_code="WALLET_LIMIT_EXCEEDED",
                error_message=f"Amount exceeds {method.wallet_type.display_name} limit",
                payment_method=method,
                amount=amount,
            )

        if self._simulated_failure():
            return Failed(
                error_code="WALLET_SERVICE_ERROR",
                error_message=f"{method.wallet_type.display_name} service temporarily unavailable",
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
