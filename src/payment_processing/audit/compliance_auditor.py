from collections import Counter
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import structlog

from payment_processing.audit.base import Auditable
from payment_processing.domain.models import (
    CardType,
    ComplianceEvent,
    ComplianceEventType,
    CreditCard,
    DigitalWallet,
    Failed,
    PaymentMethod,
    PaymentResult,
    Success,
    WalletType,
)
from payment_processing.infrastructure.metrics import COMPLIANCE_FLAGS_TOTAL


logger = structlog.get_logger("payment_processing.audit")


LARGE_TRANSACTION_THRESHOLD = 10000.0
HIGH_RISK_WALLET_THRESHOLD = 500.0
RECENT_WINDOW = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ComplianceAuditor(Auditable):
    """
    Audit sink for compliance mode.

    Keeps every audited event in memory and tags attempts with heuristic
    flags. The event list lives as long as the process and is not guarded
    against concurrent appends.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._events: list[ComplianceEvent] = []

    @property
    def events(self) -> tuple[ComplianceEvent, ...]:
        return tuple(self._events)

    def audit_payment_attempt(self, method: PaymentMethod, amount: float) -> None:
        flags = self._attempt_flags(method, amount)
        self._record(ComplianceEventType.PAYMENT_ATTEMPT, amount, flags, method.type_name)

        if flags:
            logger.warning(
                "compliance_flags_raised",
                flags=list(flags),
                amount=amount,
                method_type=method.type_name,
            )

        logger.info(
            "compliance_payment_attempt",
            method_type=method.type_name,
            amount=amount,
            flag_count=len(flags),
        )

    def audit_payment_result(self, result: PaymentResult) -> None:
        match result:
            case Success():
                self._record(
                    ComplianceEventType.PAYMENT_SUCCESS,
                    result.amount,
                    (),
                    result.payment_method.type_name,
                )
                logger.info(
                    "compliance_payment_succeeded",
                    transaction_id=result.transaction_id,
                    amount=result.amount,
                )
            case Failed():
                flags = ("FRAUD_ATTEMPT",) if result.error_code == "FRAUD_DETECTED" else ()
                method_type = result.payment_method.type_name if result.payment_method else "Unknown"
                self._record(ComplianceEventType.PAYMENT_FAILURE, result.amount, flags, method_type)
                if flags:
                    logger.error(
                        "compliance_fraud_detected",
                        error_code=result.error_code,
                        amount=result.amount,
                    )
            case _:
                logger.debug("compliance_result_skipped", status=result.status.value)

    def audit_security_event(self, event: str, details: Mapping[str, Any]) -> None:
        amount = details.get("amount")
        method_type = details.get("method_type")
        self._record(
            ComplianceEventType.SECURITY_EVENT,
            float(amount) if isinstance(amount, int | float) else 0.0,
            ("SECURITY_INCIDENT",),
            method_type if isinstance(method_type, str) else "Unknown",
        )
        logger.error("compliance_security_event", security_event=event, details=dict(details))

    def generate_compliance_report(self) -> str:
        total = len(self._events)
        flagged = [event for event in self._events if event.flags]
        total_amount = sum(event.amount for event in self._events)
        flag_rate = len(flagged) / total * 100 if total else 0.0
        by_method_type = Counter(event.method_type for event in self._events)

        lines = [
            "=== COMPLIANCE REPORT ===",
            f"Report Generated: {self._clock().isoformat()}",
            f"Total Transactions: {total}",
            f"Flagged Transactions: {len(flagged)}",
            f"Flag Rate: {flag_rate:.2f}%",
            f"Total Amount Processed: ${total_amount:.2f}",
            "",
            "Flagged Events:",
            *(f"- {e.event_type.value}: {', '.join(e.flags)} (${e.amount:.2f})" for e in flagged),
            "",
            "Transaction Types:",
            *(f"- {method_type}: {count} transactions" for method_type, count in by_method_type.items()),
        ]
        return "\n".join(lines)

    def get_compliance_metrics(self) -> dict[str, Any]:
        cutoff = self._clock() - RECENT_WINDOW
        recent_flags = Counter(
            flag for event in self._events if event.timestamp > cutoff for flag in event.flags
        )
        return {
            "total_transactions": len(self._events),
            "flagged_transactions": sum(1 for event in self._events if event.flags),
            "total_amount": sum(event.amount for event in self._events),
            "recent_flags": dict(recent_flags),
        }

    def _attempt_flags(self, method: PaymentMethod, amount: float) -> tuple[str, ...]:
        flags: list[str] = []

        if amount > LARGE_TRANSACTION_THRESHOLD:
            flags.append("LARGE_TRANSACTION")

        # AMEX stands in for cross-border card detection
        if isinstance(method, CreditCard) and method.card_type == CardType.AMEX:
            flags.append("POTENTIAL_INTERNATIONAL")

        if (
            isinstance(method, DigitalWallet)
            and method.wallet_type == WalletType.VENMO
            and amount > HIGH_RISK_WALLET_THRESHOLD
        ):
            flags.append("HIGH_RISK_WALLET")

        return tuple(flags)

    def _record(
        self,
        event_type: ComplianceEventType,
        amount: float,
        flags: tuple[str, ...],
        method_type: str,
    ) -> None:
        self._events.append(
            ComplianceEvent(
                event_type=event_type,
                amount=amount,
                flags=flags,
                method_type=method_type,
                timestamp=self._clock(),
            )
        )
        for flag in flags:
            COMPLIANCE_FLAGS_TOTAL.labels(flag=flag).inc()
