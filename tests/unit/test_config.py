"""Unit tests for configuration settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from payment_processing.config import ProcessorSettings, Settings


class TestSettingsDefaults:
    """Tests for default configuration values."""

    def test_default_service_settings(self) -> None:
        settings = Settings()

        assert settings.environment == "development"
        assert settings.http_port == 8080
        assert settings.metrics_port == 9090
        assert settings.max_payment_amount == 100000.0

    def test_default_processor_settings(self) -> None:
        """Test each processor ships with its own fee and limit defaults."""
        processors = Settings().processors

        assert processors.credit_card.fee_rate == 0.029
        assert processors.credit_card.max_amount == 10000.0
        assert processors.credit_card.failure_rate == 0.05
        assert processors.bank_transfer.fee_rate == 0.0
        assert processors.bank_transfer.max_amount == 50000.0
        assert processors.bank_transfer.failure_rate == 0.02
        assert processors.digital_wallet.fee_rate == 0.03
        assert processors.digital_wallet.max_amount == 10000.0
        assert all(
            p.enabled for p in (processors.credit_card, processors.bank_transfer, processors.digital_wallet)
        )

    def test_default_retry_settings(self) -> None:
        settings = Settings()

        assert settings.retry.max_attempts == 3
        assert settings.retry.delay_ms == 1000

    def test_compliance_disabled_by_default(self) -> None:
        assert Settings().compliance_enabled is False


class TestSettingsFromEnv:
    """Tests for environment variable overrides."""

    def test_flat_settings_from_env(self) -> None:
        env_vars = {
            "HTTP_PORT": "9000",
            "MAX_PAYMENT_AMOUNT": "500.5",
            "LOG_FORMAT": "console",
        }

        with patch.dict(os.environ, env_vars, clear=False):
            settings = Settings()

            assert settings.http_port == 9000
            assert settings.max_payment_amount == 500.5
            assert settings.log_format == "console"

    def test_nested_processor_override_keeps_other_defaults(self) -> None:
        """Test a single nested variable overrides only that field."""
        with patch.dict(os.environ, {"PROCESSORS__CREDIT_CARD__FEE_RATE": "0.02"}, clear=False):
            settings = Settings()

            assert settings.processors.credit_card.fee_rate == 0.02
            assert settings.processors.credit_card.failure_rate == 0.05
            assert settings.processors.bank_transfer.max_amount == 50000.0

    def test_processor_can_be_disabled_from_env(self) -> None:
        with patch.dict(os.environ, {"PROCESSORS__DIGITAL_WALLET__ENABLED": "false"}, clear=False):
            settings = Settings()

            assert settings.processors.digital_wallet.enabled is False

    def test_compliance_mode_from_env(self) -> None:
        with patch.dict(os.environ, {"AUDIT__COMPLIANCE_MODE": "true"}, clear=False):
            assert Settings().compliance_enabled is True

    def test_production_enables_compliance(self) -> None:
        """Test production environment always audits in compliance mode."""
        with patch.dict(os.environ, {"ENVIRONMENT": "production"}, clear=False):
            assert Settings().compliance_enabled is True

    def test_unknown_environment_rejected(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "staging"}, clear=False), pytest.raises(ValidationError):
            Settings()


class TestProcessorSettings:
    """Tests for ProcessorSettings validation."""

    @pytest.mark.parametrize("failure_rate", [-0.1, 1.5])
    def test_failure_rate_bounds(self, failure_rate: float) -> None:
        with pytest.raises(ValidationError):
            ProcessorSettings(failure_rate=failure_rate)

    def test_failure_rate_edges_accepted(self) -> None:
        assert ProcessorSettings(failure_rate=0.0).failure_rate == 0.0
        assert ProcessorSettings(failure_rate=1.0).failure_rate == 1.0
