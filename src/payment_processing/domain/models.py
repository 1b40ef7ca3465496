from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import Enum
from typing import ClassVar


class ProcessorType(Enum):
    CREDIT_CARD = "CREDIT_CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    DIGITAL_WALLET = "DIGITAL_WALLET"


class CardType(Enum):
    VISA = "VISA"
    MASTERCARD = "MASTERCARD"
    AMEX = "AMEX"
    DISCOVER = "DISCOVER"

    @property
    def display_name(self) -> str:
        return _CARD_DISPLAY_NAMES[self]


class AccountType(Enum):
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"
    BUSINESS = "BUSINESS"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class WalletType(Enum):
    PAYPAL = "PAYPAL"
    APPLE_PAY = "APPLE_PAY"
    GOOGLE_PAY = "GOOGLE_PAY"
    VENMO = "VENMO"

    @property
    def display_name(self) -> str:
        return _WALLET_DISPLAY_NAMES[self]


_CARD_DISPLAY_NAMES = {
    CardType.VISA: "Visa",
    CardType.MASTERCARD: "Mastercard",
    CardType.AMEX: "American Express",
    CardType.DISCOVER: "Discover",
}

_WALLET_DISPLAY_NAMES = {
    WalletType.PAYPAL: "PayPal",
    WalletType.APPLE_PAY: "Apple Pay",
    WalletType.GOOGLE_PAY: "Google Pay",
    WalletType.VENMO: "Venmo",
}


def _mask(value: str) -> str:
    return "*" * max(len(value) - 4, 0) + value[-4:]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, kw_only=True)
class PaymentMethod(ABC):
    """A payment instrument supplied by the caller for a single request."""

    processor_type: ClassVar[ProcessorType]

    id: str
    is_active: bool = True

    @property
    def type_name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def describe(self) -> str: ...


@dataclass(frozen=True, kw_only=True)
class CreditCard(PaymentMethod):
    processor_type: ClassVar[ProcessorType] = ProcessorType.CREDIT_CARD

    card_number: str
    expiry_month: int
    expiry_year: int
    card_type: CardType
    holder_name: str

    def __post_init__(self) -> None:
        if not 1 <= self.expiry_month <= 12:
            raise ValueError(f"Expiry month must be between 1 and 12, got {self.expiry_month}")

    @property
    def last_four_digits(self) -> str:
        return self.card_number[-4:]

    @property
    def masked_number(self) -> str:
        return _mask(self.card_number)

    @property
    def is_expired(self) -> bool:
        return self.is_expired_on(_utcnow().date())

    def is_expired_on(self, day: date) -> bool:
        """A card stays valid through the last day of its expiry month."""
        if self.expiry_month == 12:
            first_invalid_day = date(self.expiry_year + 1, 1, 1)
        else:
            first_invalid_day = date(self.expiry_year, self.expiry_month + 1, 1)
        return day >= first_invalid_day

    def describe(self) -> str:
        return f"Credit Card ({self.card_type.display_name})"


@dataclass(frozen=True, kw_only=True)
class BankAccount(PaymentMethod):
    processor_type: ClassVar[ProcessorType] = ProcessorType.BANK_TRANSFER

    account_number: str
    routing_number: str
    account_type: AccountType
    bank_name: str
    balance: float

    @property
    def masked_account_number(self) -> str:
        return _mask(self.account_number)

    @property
    def has_sufficient_funds(self) -> bool:
        return self.balance > 0

    def describe(self) -> str:
        return f"Bank Account ({self.account_type.display_name})"


@dataclass(frozen=True, kw_only=True)
class DigitalWallet(PaymentMethod):
    processor_type: ClassVar[ProcessorType] = ProcessorType.DIGITAL_WALLET

    wallet_type: WalletType
    email: str
    balance: float
    currency: str = "USD"

    @property
    def display_name(self) -> str:
        return f"{self.wallet_type.display_name} ({self.email})"

    def describe(self) -> str:
        return f"Digital Wallet ({self.wallet_type.display_name})"


class ResultStatus(Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    PENDING = "PENDING"
    CANCELLED = "CANCELLED"


RETRYABLE_ERROR_CODES = frozenset(
    {
        "NETWORK_ERROR",
        "TIMEOUT",
        "TEMPORARY_FAILURE",
        "INSUFFICIENT_FUNDS",
        "RATE_LIMITED",
    }
)

RETRY_DELAYS_MS = {
    "RATE_LIMITED": 60_000,
    "NETWORK_ERROR": 5_000,
    "TIMEOUT": 10_000,
}
DEFAULT_RETRY_DELAY_MS = 30_000


@dataclass(frozen=True, kw_only=True)
class PaymentResult(ABC):
    """Outcome of one processing attempt."""

    status: ClassVar[ResultStatus]

    amount: float
    timestamp: datetime = field(default_factory=_utcnow)

    @property
    def is_successful(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @abstractmethod
    def summary(self) -> str: ...


@dataclass(frozen=True, kw_only=True)
class Success(PaymentResult):
    status: ClassVar[ResultStatus] = ResultStatus.SUCCESS

    transaction_id: str
    fee: float
    total: float
    payment_method: PaymentMethod

    def summary(self) -> str:
        return f"Success: {self.transaction_id} - ${self.amount:,.2f}"


@dataclass(frozen=True, kw_only=True)
class Failed(PaymentResult):
    status: ClassVar[ResultStatus] = ResultStatus.FAILED

    error_code: str
    error_message: str
    payment_method: PaymentMethod | None = None

    @property
    def is_retryable(self) -> bool:
        return self.error_code in RETRYABLE_ERROR_CODES

    @property
    def retry_delay_ms(self) -> int:
        return RETRY_DELAYS_MS.get(self.error_code, DEFAULT_RETRY_DELAY_MS)

    def summary(self) -> str:
        return f"Failed: {self.error_code} - {self.error_message}"


@dataclass(frozen=True, kw_only=True)
class Pending(PaymentResult):
    status: ClassVar[ResultStatus] = ResultStatus.PENDING

    transaction_id: str
    payment_method: PaymentMethod
    estimated_completion_time: int
    status_check_url: str | None = None

    def summary(self) -> str:
        return f"Pending: {self.transaction_id} - Estimated completion: {self.estimated_completion_time}ms"


@dataclass(frozen=True, kw_only=True)
class Cancelled(PaymentResult):
    status: ClassVar[ResultStatus] = ResultStatus.CANCELLED

    reason: str
    payment_method: PaymentMethod | None = None

    def summary(self) -> str:
        return f"Cancelled: {self.reason}"


class ComplianceEventType(Enum):
    PAYMENT_ATTEMPT = "PAYMENT_ATTEMPT"
    PAYMENT_SUCCESS = "PAYMENT_SUCCESS"
    PAYMENT_FAILURE = "PAYMENT_FAILURE"
    SECURITY_EVENT = "SECURITY_EVENT"


@dataclass(frozen=True)
class ComplianceEvent:
    event_type: ComplianceEventType
    amount: float
    flags: tuple[str, ...]
    method_type: str
    timestamp: datetime = field(default_factory=_utcnow)
