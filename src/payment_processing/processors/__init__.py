"""Per-instrument payment processors."""

from payment_processing.processors.bank_transfer import BankTransferProcessor
from payment_processing.processors.base import PaymentProcessor
from payment_processing.processors.credit_card import CreditCardProcessor
from payment_processing.processors.digital_wallet import DigitalWalletProcessor


__all__ = [
    "BankTransferProcessor",
    "CreditCardProcessor",
    "DigitalWalletProcessor",
    "PaymentProcessor",
]
