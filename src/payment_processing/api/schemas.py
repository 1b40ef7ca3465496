from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class PaymentRequest(BaseModel):
    method_type: str = Field(description="CREDIT_CARD, BANK_ACCOUNT or DIGITAL_WALLET")
    method_data: dict[str, Any] = Field(default_factory=dict)
    amount: float = Field(allow_inf_nan=False)


class PaymentResponse(BaseModel):
    success: bool
    status: str
    transaction_id: str | None = None
    amount: float
    fee: float | None = None
    total: float | None = None
    error_code: str | None = None
    error_message: str | None = None
    status_check_url: str | None = None
    timestamp: datetime


class ProcessorsResponse(BaseModel):
    supported_methods: list[str]
    processor_stats: dict[str, Any]
