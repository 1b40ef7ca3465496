from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from ulid import ULID

from payment_processing.api.schemas import PaymentRequest, PaymentResponse, ProcessorsResponse
from payment_processing.application.services import PaymentService
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
    CreditCard,
    DigitalWallet,
    Failed,
    PaymentMethod,
    PaymentResult,
    Pending,
    ResultStatus,
    Success,
    WalletType,
)


logger = structlog.get_logger()

router = APIRouter(prefix="/api/payments", tags=["payments"])


HTTP_STATUS_MAP = {
    ResultStatus.SUCCESS: status.HTTP_200_OK,
    ResultStatus.PENDING: status.HTTP_202_ACCEPTED,
    ResultStatus.FAILED: status.HTTP_400_BAD_REQUEST,
    ResultStatus.CANCELLED: status.HTTP_409_CONFLICT,
}

DEFAULT_BANK_BALANCE = 10000.0
DEFAULT_WALLET_BALANCE = 1000.0


def get_payment_service(request: Request) -> PaymentService:
    service: PaymentService = request.app.state.payment_service
    return service


PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]


@router.get("/processors", response_model=ProcessorsResponse)
async def get_processors(service: PaymentServiceDep) -> ProcessorsResponse:
    return ProcessorsResponse(
        supported_methods=sorted(service.get_supported_payment_methods()),
        processor_stats=service.get_processor_stats(),
    )


@router.post("/process", response_model=PaymentResponse)
async def process_payment(
    payment_request: PaymentRequest,
    response: Response,
    service: PaymentServiceDep,
) -> PaymentResponse | JSONResponse:
    log = logger.bind(
        endpoint="process_payment",
        method_type=payment_request.method_type,
        amount=payment_request.amount,
    )
    log.info("request_received")

    method = _to_payment_method_or_400(payment_request)

    try:
        result = await service.process_payment(method, payment_request.amount)
    except Exception as e:
        log.error("request_failed", error=str(e), exc_info=True)
        error_response = PaymentResponse(
            success=False,
            status="ERROR",
            amount=payment_request.amount,
            error_code="PROCESSING_ERROR",
            error_message=f"Payment processing failed: {e}",
            timestamp=datetime.now(UTC),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response.model_dump(mode="json"),
        )

    response.status_code = HTTP_STATUS_MAP[result.status]
    return to_payment_response(result)


@router.post("/batch", response_model=list[PaymentResponse])
async def process_batch_payments(
    payment_requests: list[PaymentRequest],
    service: PaymentServiceDep,
) -> list[PaymentResponse]:
    logger.info("batch_request_received", size=len(payment_requests))

    payments = [(_to_payment_method_or_400(request), request.amount) for request in payment_requests]
    results = await service.process_batch_payments(payments)

    return [to_payment_response(result) for result in results]


@router.get("/health")
async def health_check(service: PaymentServiceDep) -> dict[str, Any]:
    return service.get_health_status()


@router.get("/methods/supported")
async def get_supported_payment_methods(service: PaymentServiceDep) -> list[str]:
    return sorted(service.get_supported_payment_methods())


def _to_payment_method_or_400(payment_request: PaymentRequest) -> PaymentMethod:
    try:
        return to_payment_method(payment_request)
    except DomainError as e:
        logger.info("invalid_payment_request", method_type=payment_request.method_type, error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


def to_payment_method(payment_request: PaymentRequest) -> PaymentMethod:
    data = payment_request.method_data
    method_type = payment_request.method_type.upper()

    try:
        match method_type:
            case "CREDIT_CARD":
                return CreditCard(
                    id=_optional_str(data, "id") or f"cc-{ULID()}",
                    is_active=_optional_bool(data, "is_active", True),
                    card_number=_required_str(data, "card_number"),
                    expiry_month=_required_int(data, "expiry_month"),
                    expiry_year=_required_int(data, "expiry_year"),
                    card_type=_enum_value(CardType, data, "card_type", CardType.VISA),
                    holder_name=_optional_str(data, "holder_name") or "Unknown",
                )
            case "BANK_ACCOUNT":
                return BankAccount(
                    id=_optional_str(data, "id") or f"ba-{ULID()}",
                    is_active=_optional_bool(data, "is_active", True),
                    account_number=_required_str(data, "account_number"),
                    routing_number=_required_str(data, "routing_number"),
                    account_type=_enum_value(AccountType, data, "account_type", AccountType.CHECKING),
                    bank_name=_optional_str(data, "bank_name") or "Unknown Bank",
                    balance=_optional_float(data, "balance", DEFAULT_BANK_BALANCE),
                )
            case "DIGITAL_WALLET":
                return DigitalWallet(
                    id=_optional_str(data, "id") or f"dw-{ULID()}",
                    is_active=_optional_bool(data, "is_active", True),
                    wallet_type=_enum_value(WalletType, data, "wallet_type", WalletType.PAYPAL),
                    email=_required_str(data, "email"),
                    balance=_optional_float(data, "balance", DEFAULT_WALLET_BALANCE),
                    currency=_optional_str(data, "currency") or "USD",
                )
            case _:
                raise UnsupportedMethodTypeError(payment_request.method_type)
    except ValueError as e:
        raise InvalidPaymentMethodError("method_data", str(e)) from e


def to_payment_response(result: PaymentResult) -> PaymentResponse:
    match result:
        case Success():
            return PaymentResponse(
                success=True,
                status=result.status.value,
                transaction_id=result.transaction_id,
                amount=result.amount,
                fee=result.fee,
                total=result.total,
                timestamp=result.timestamp,
            )
        case Failed():
            return PaymentResponse(
                success=False,
                status=result.status.value,
                amount=result.amount,
                error_code=result.error_code,
                error_message=result.error_message,
                timestamp=result.timestamp,
            )
        case Pending():
            return PaymentResponse(
                success=True,
                status=result.status.value,
                transaction_id=result.transaction_id,
                amount=result.amount,
                error_message="Payment is pending processing",
                status_check_url=result.status_check_url,
                timestamp=result.timestamp,
            )
        case Cancelled():
            return PaymentResponse(
                success=False,
                status=result.status.value,
                amount=result.amount,
                error_message=f"Payment cancelled: {result.reason}",
                timestamp=result.timestamp,
            )
    raise TypeError(f"Unknown payment result: {type(result).__name__}")


def _required_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidPaymentMethodError(key, "is required")
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidPaymentMethodError(key, "must be a string")
    return value


def _required_int(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        raise InvalidPaymentMethodError(key, "is required")
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidPaymentMethodError(key, "must be a number")
    return int(value)


def _optional_float(data: dict[str, Any], key: str, default: float) -> float:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidPaymentMethodError(key, "must be a number")
    return float(value)


def _optional_bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise InvalidPaymentMethodError(key, "must be a boolean")
    return value


def _enum_value[E: Enum](enum_cls: type[E], data: dict[str, Any], key: str, default: E) -> E:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise InvalidPaymentMethodError(key, "must be a string")
    try:
        return enum_cls[value.upper()]
    except KeyError as e:
        raise InvalidPaymentMethodError(key, f"unknown value {value}") from e
