"""Domain layer - payment instruments, results and audit records."""

from payment_processing.domain.exceptions import (
    DomainError,
    InvalidPaymentMethodError,
    UnsupportedMethodTypeError,
)
from payment_processing.domain.models import (
    AccountType,
    BankAccount,
    Cancelled,
    CardType,
    ComplianceEvent,
    ComplianceEventType,
    CreditCard,
    DigitalWallet,
    Failed,
    PaymentMethod,
    PaymentResult,
    Pending,
    ProcessorType,
    ResultStatus,
    Success,
    WalletType,
)


__all__ = [
    "AccountType",
    "BankAccount",
    "Cancelled",
    "CardType",
    "ComplianceEvent",
    "ComplianceEventType",
    "CreditCard",
    "DigitalWallet",
    "DomainError",
    "Failed",
    "InvalidPaymentMethodError",
    "PaymentMethod",
    "PaymentResult",
    "Pending",
    "ProcessorType",
    "ResultStatus",
    "Success",
    "UnsupportedMethodTypeError",
    "WalletType",
]
