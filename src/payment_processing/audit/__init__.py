"""Audit sinks for payment attempts and outcomes."""

from payment_processing.audit.base import Auditable
from payment_processing.audit.compliance_auditor import ComplianceAuditor
from payment_processing.audit.payment_auditor import PaymentAuditor


__all__ = [
    "Auditable",
    "ComplianceAuditor",
    "PaymentAuditor",
]
