from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from payment_processing.domain.models import PaymentMethod, PaymentResult


class Auditable(ABC):
    """Sink for payment attempts, outcomes and security events."""

    @abstractmethod
    def audit_payment_attempt(self, method: PaymentMethod, amount: float) -> None: ...

    @abstractmethod
    def audit_payment_result(self, result: PaymentResult) -> None: ...

    @abstractmethod
    def audit_security_event(self, event: str, details: Mapping[str, Any]) -> None: ...
