from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProcessorSettings(BaseModel):
    enabled: bool = True
    fee_rate: float = 0.0
    max_amount: float = 10000.0
    processing_delay_seconds: float = 0.1
    failure_rate: float = Field(default=0.0, ge=0.0, le=1.0)


# Per-processor defaults live on subclasses so a partial env override
# (e.g. PROCESSORS__CREDIT_CARD__FEE_RATE) keeps the remaining defaults.
class CreditCardSettings(ProcessorSettings):
    fee_rate: float = 0.029
    failure_rate: float = Field(default=0.05, ge=0.0, le=1.0)


class BankTransferSettings(ProcessorSettings):
    max_amount: float = 50000.0
    processing_delay_seconds: float = 0.5
    failure_rate: float = Field(default=0.02, ge=0.0, le=1.0)


class DigitalWalletSettings(ProcessorSettings):
    fee_rate: float = 0.03
    processing_delay_seconds: float = 0.2


class ProcessorsConfig(BaseModel):
    credit_card: CreditCardSettings = Field(default_factory=CreditCardSettings)
    bank_transfer: BankTransferSettings = Field(default_factory=BankTransferSettings)
    digital_wallet: DigitalWalletSettings = Field(default_factory=DigitalWalletSettings)


class AuditSettings(BaseModel):
    compliance_mode: bool = False


class RetrySettings(BaseModel):
    # Exposed for operators; no processor retries yet.
    max_attempts: int = 3
    delay_ms: int = 1000


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    environment: Literal["development", "test", "production"] = "development"

    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"

    http_host: str = "0.0.0.0"
    http_port: int = 8080

    # Metrics server settings
    metrics_enabled: bool = True
    metrics_host: str = "0.0.0.0"
    metrics_port: int = 9090

    # Global ceiling applied before any processor is consulted
    max_payment_amount: float = 100000.0

    processors: ProcessorsConfig = Field(default_factory=ProcessorsConfig)
    audit: AuditSettings = Field(default_factory=AuditSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)

    @property
    def compliance_enabled(self) -> bool:
        return self.audit.compliance_mode or self.environment == "production"


settings = Settings()
