"""Shared pytest fixtures for payment processing tests."""

from unittest.mock import MagicMock

import pytest

from payment_processing.application.services import PaymentService
from payment_processing.audit.base import Auditable
from payment_processing.config import ProcessorSettings
from payment_processing.domain.models import (
    AccountType,
    BankAccount,
    CardType,
    CreditCard,
    DigitalWallet,
    ProcessorType,
    WalletType,
)
from payment_processing.processors import (
    BankTransferProcessor,
    CreditCardProcessor,
    DigitalWalletProcessor,
    PaymentProcessor,
)


def instant_settings(
    fee_rate: float = 0.0,
    max_amount: float = 10000.0,
    enabled: bool = True,
    failure_rate: float = 0.0,
) -> ProcessorSettings:
    """Processor settings with no simulated latency or random failures."""
    return ProcessorSettings(
        enabled=enabled,
        fee_rate=fee_rate,
        max_amount=max_amount,
        processing_delay_seconds=0.0,
        failure_rate=failure_rate,
    )


def create_credit_card(
    card_id: str = "test-cc-001",
    card_number: str = "4532123456789012",
    expiry_month: int = 12,
    expiry_year: int = 2099,
    card_type: CardType = CardType.VISA,
    is_active: bool = True,
) -> CreditCard:
    """Helper to create CreditCard with custom values."""
    return CreditCard(
        id=card_id,
        is_active=is_active,
        card_number=card_number,
        expiry_month=expiry_month,
        expiry_year=expiry_year,
        card_type=card_type,
        holder_name="Test User",
    )


def create_bank_account(
    account_id: str = "test-ba-001",
    balance: float = 10000.0,
    routing_number: str = "987654321",
    is_active: bool = True,
) -> BankAccount:
    """Helper to create BankAccount with custom values."""
    return BankAccount(
        id=account_id,
        is_active=is_active,
        account_number="123456789012",
        routing_number=routing_number,
        account_type=AccountType.CHECKING,
        bank_name="Test Bank",
        balance=balance,
    )


def create_digital_wallet(
    wallet_id: str = "test-dw-001",
    wallet_type: WalletType = WalletType.PAYPAL,
    balance: float = 500.0,
    email: str = "test@example.com",
    is_active: bool = True,
) -> DigitalWallet:
    """Helper to create DigitalWallet with custom values."""
    return DigitalWallet(
        id=wallet_id,
        is_active=is_active,
        wallet_type=wallet_type,
        email=email,
        balance=balance,
    )


@pytest.fixture
def credit_card() -> CreditCard:
    """Create valid VISA card expiring far in the future."""
    return create_credit_card()


@pytest.fixture
def bank_account() -> BankAccount:
    """Create checking account with $10,000 balance."""
    return create_bank_account()


@pytest.fixture
def digital_wallet() -> DigitalWallet:
    """Create PayPal wallet with $500 balance."""
    return create_digital_wallet()


@pytest.fixture
def credit_card_processor() -> CreditCardProcessor:
    """Create credit card processor with production fee rate."""
    return CreditCardProcessor(instant_settings(fee_rate=0.029, max_amount=10000.0))


@pytest.fixture
def bank_transfer_processor() -> BankTransferProcessor:
    """Create fee-free bank transfer processor."""
    return BankTransferProcessor(instant_settings(fee_rate=0.0, max_amount=50000.0))


@pytest.fixture
def digital_wallet_processor() -> DigitalWalletProcessor:
    """Create digital wallet processor with 3% fee."""
    return DigitalWalletProcessor(instant_settings(fee_rate=0.03, max_amount=10000.0))


@pytest.fixture
def processors(
    credit_card_processor: CreditCardProcessor,
    bank_transfer_processor: BankTransferProcessor,
    digital_wallet_processor: DigitalWalletProcessor,
) -> dict[ProcessorType, PaymentProcessor]:
    """Create the full processor mapping."""
    return {
        ProcessorType.CREDIT_CARD: credit_card_processor,
        ProcessorType.BANK_TRANSFER: bank_transfer_processor,
        ProcessorType.DIGITAL_WALLET: digital_wallet_processor,
    }


@pytest.fixture
def mock_auditor() -> MagicMock:
    """Create mock audit sink."""
    return MagicMock(spec=Auditable)


@pytest.fixture
def payment_service(
    processors: dict[ProcessorType, PaymentProcessor],
    mock_auditor: MagicMock,
) -> PaymentService:
    """Create PaymentService with deterministic processors and mock auditor."""
    return PaymentService(processors=processors, auditor=mock_auditor)
