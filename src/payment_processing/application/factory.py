import structlog

from payment_processing.application.services import PaymentService
from payment_processing.audit import Auditable, ComplianceAuditor, PaymentAuditor
from payment_processing.config import Settings
from payment_processing.domain.models import ProcessorType
from payment_processing.processors import (
    BankTransferProcessor,
    CreditCardProcessor,
    DigitalWalletProcessor,
    PaymentProcessor,
)


logger = structlog.get_logger()


def build_processors(settings: Settings) -> dict[ProcessorType, PaymentProcessor]:
    return {
        ProcessorType.CREDIT_CARD: CreditCardProcessor(settings.processors.credit_card),
        ProcessorType.BANK_TRANSFER: BankTransferProcessor(settings.processors.bank_transfer),
        ProcessorType.DIGITAL_WALLET: DigitalWalletProcessor(settings.processors.digital_wallet),
    }


def build_auditor(settings: Settings) -> Auditable:
    if settings.compliance_enabled:
        return ComplianceAuditor()
    return PaymentAuditor()


def build_payment_service(settings: Settings) -> PaymentService:
    processors = build_processors(settings)
    auditor = build_auditor(settings)

    logger.info(
        "payment_service_configured",
        environment=settings.environment,
        auditor=type(auditor).__name__,
        processors=[processor_type.value for processor_type in processors],
        max_payment_amount=settings.max_payment_amount,
    )

    return PaymentService(
        processors=processors,
        auditor=auditor,
        max_payment_amount=settings.max_payment_amount,
    )
