#!/usr/bin/env python3
"""Payment walkthrough script.

Runs a fixed set of payments through an in-process PaymentService, one
instrument at a time and then as a batch, and prints each outcome. With
compliance mode on (AUDIT__COMPLIANCE_MODE=true or ENVIRONMENT=production)
the compliance report is printed at the end.
"""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from payment_processing.application.factory import build_payment_service
from payment_processing.application.services import PaymentService
from payment_processing.audit.compliance_auditor import ComplianceAuditor
from payment_processing.config import settings
from payment_processing.domain.models import (
    AccountType,
    BankAccount,
    CardType,
    CreditCard,
    DigitalWallet,
    PaymentMethod,
    PaymentResult,
    WalletType,
)
from payment_processing.logging import configure_logging


def build_demo_payments() -> list[tuple[PaymentMethod, float]]:
    visa = CreditCard(
        id="demo-cc-001",
        card_number="4532123456789012",
        expiry_month=12,
        expiry_year=2099,
        card_type=CardType.VISA,
        holder_name="Demo User",
    )
    amex = CreditCard(
        id="demo-cc-002",
        card_number="378282246310005",
        expiry_month=6,
        expiry_year=2099,
        card_type=CardType.AMEX,
        holder_name="Demo User",
    )
    expired = CreditCard(
        id="demo-cc-003",
        card_number="4532123456789012",
        expiry_month=1,
        expiry_year=2020,
        card_type=CardType.VISA,
        holder_name="Demo User",
    )
    checking = BankAccount(
        id="demo-ba-001",
        account_number="123456789012",
        routing_number="987654321",
        account_type=AccountType.CHECKING,
        bank_name="Demo Bank",
        balance=25000.0,
    )
    venmo = DigitalWallet(
        id="demo-dw-001",
        wallet_type=WalletType.VENMO,
        email="demo@example.com",
        balance=2000.0,
    )
    paypal = DigitalWallet(
        id="demo-dw-002",
        wallet_type=WalletType.PAYPAL,
        email="demo@example.com",
        balance=500.0,
    )

    return [
        (visa, 100.0),
        (amex, 250.0),
        (expired, 100.0),
        (checking, 1200.0),
        (checking, 7500.0),
        (venmo, 750.0),
        (venmo, 1500.0),
        (paypal, 75.0),
        (paypal, 600.0),
        (paypal, -10.0),
    ]


async def run_demo(service: PaymentService, payments: list[tuple[PaymentMethod, float]]) -> list[PaymentResult]:
    results: list[PaymentResult] = []

    for method, amount in payments:
        result = await service.process_payment(method, amount)
        print(f"{method.describe():<32} {amount:>10.2f}  {result.summary()}")
        results.append(result)

    batch_results = await service.process_batch_payments(payments[:3])
    print(f"Batch of {len(batch_results)}: {[result.status.value for result in batch_results]}")

    return results


async def main() -> None:
    configure_logging(level="WARNING", log_format="console")

    service = build_payment_service(settings)
    await run_demo(service, build_demo_payments())

    auditor = service.auditor
    if isinstance(auditor, ComplianceAuditor):
        print()
        print(auditor.generate_compliance_report())


if __name__ == "__main__":
    asyncio.run(main())
