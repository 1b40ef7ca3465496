class DomainError(Exception):
    """Base exception for domain errors."""


class InvalidPaymentMethodError(DomainError):
    """Raised when payment method data cannot describe a valid instrument."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid payment method field {field}: {reason}")


class UnsupportedMethodTypeError(DomainError):
    """Raised when a request names a payment method type with no instrument."""

    def __init__(self, method_type: str) -> None:
        self.method_type = method_type
        super().__init__(f"Unsupported payment method type: {method_type}")
