"""Unit tests for MetricsServer."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from payment_processing.api.metrics_server import MetricsServer, create_metrics_app
from payment_processing.application.services import PaymentService
from payment_processing.domain.models import ProcessorType
from payment_processing.processors import CreditCardProcessor, DigitalWalletProcessor
from tests.conftest import instant_settings


class TestCreateMetricsApp:
    """Tests for create_metrics_app factory function."""

    def test_creates_fastapi_app(self, payment_service: PaymentService) -> None:
        """Test factory creates FastAPI application."""
        app = create_metrics_app(payment_service)

        assert app.title == "Payment Processing Metrics"

    def test_disables_docs(self, payment_service: PaymentService) -> None:
        """Test factory disables documentation endpoints."""
        app = create_metrics_app(payment_service)

        assert app.docs_url is None
        assert app.redoc_url is None
        assert app.openapi_url is None

    def test_has_metrics_and_health_endpoints(self, payment_service: PaymentService) -> None:
        app = create_metrics_app(payment_service)

        routes = [route.path for route in app.routes]
        assert "/metrics" in routes
        assert "/health" in routes


class TestMetricsEndpoints:
    """Tests for /metrics and /health endpoints."""

    @pytest.fixture
    def app(self, payment_service: PaymentService) -> FastAPI:
        return create_metrics_app(payment_service)

    def test_metrics_returns_prometheus_format(self, app: FastAPI) -> None:
        """Test /metrics returns Prometheus format."""
        client = TestClient(app)
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]

    def test_metrics_includes_custom_metrics(self, app: FastAPI) -> None:
        """Test /metrics includes payment metrics."""
        # Import to register metrics
        from payment_processing.infrastructure import metrics  # noqa: F401

        client = TestClient(app)
        response = client.get("/metrics")

        assert "payment_duration_seconds" in response.text
        assert "payment_batch_size" in response.text

    def test_health_reports_payment_service(self, app: FastAPI, payment_service: PaymentService) -> None:
        """Test /health reports the service status and its enabled processors."""
        client = TestClient(app)
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "UP"
        assert body["processors_available"] == 3
        assert body["auditing_mode"] == type(payment_service.auditor).__name__
        assert sorted(body["enabled_processors"]) == ["BANK_TRANSFER", "CREDIT_CARD", "DIGITAL_WALLET"]
        assert "timestamp" in body

    def test_health_lists_only_enabled_processors(self) -> None:
        service = PaymentService(
            processors={
                ProcessorType.CREDIT_CARD: CreditCardProcessor(instant_settings()),
                ProcessorType.DIGITAL_WALLET: DigitalWalletProcessor(instant_settings(enabled=False)),
            },
            auditor=MagicMock(),
        )

        response = TestClient(create_metrics_app(service)).get("/health")

        assert response.status_code == 200
        assert response.json()["enabled_processors"] == ["CREDIT_CARD"]

    def test_health_down_without_enabled_processors(self) -> None:
        """Test /health answers 503 when nothing can take payments."""
        service = PaymentService(
            processors={
                ProcessorType.DIGITAL_WALLET: DigitalWalletProcessor(instant_settings(enabled=False)),
            },
            auditor=MagicMock(),
        )

        response = TestClient(create_metrics_app(service)).get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "DOWN"
        assert response.json()["enabled_processors"] == []


class TestMetricsServer:
    """Tests for MetricsServer class."""

    def test_init_with_default_values(self, payment_service: PaymentService) -> None:
        server = MetricsServer(payment_service)

        assert server._host == "0.0.0.0"
        assert server._port == 9090
        assert server._payment_service is payment_service

    def test_init_with_custom_values(self, payment_service: PaymentService) -> None:
        server = MetricsServer(payment_service, host="127.0.0.1", port=8081)

        assert server._host == "127.0.0.1"
        assert server._port == 8081

    @pytest.mark.asyncio
    async def test_start_creates_server(self, payment_service: PaymentService) -> None:
        """Test start creates uvicorn server with quiet logging."""
        server = MetricsServer(payment_service, host="127.0.0.1", port=19090)

        with (
            patch("payment_processing.api.metrics_server.uvicorn.Server") as mock_server_class,
            patch("payment_processing.api.metrics_server.uvicorn.Config") as mock_config,
        ):
            mock_server = MagicMock()
            mock_server.serve = AsyncMock()
            mock_server_class.return_value = mock_server

            await server.start()

            config_kwargs = mock_config.call_args.kwargs
            assert config_kwargs["host"] == "127.0.0.1"
            assert config_kwargs["port"] == 19090
            assert config_kwargs["log_level"] == "warning"
            assert config_kwargs["access_log"] is False

            await server.stop()

    @pytest.mark.asyncio
    async def test_start_logs_info(self, payment_service: PaymentService) -> None:
        server = MetricsServer(payment_service, host="127.0.0.1", port=19091)

        with (
            patch("payment_processing.api.metrics_server.uvicorn.Server") as mock_server_class,
            patch("payment_processing.api.metrics_server.logger") as mock_logger,
        ):
            mock_server = MagicMock()
            mock_server.serve = AsyncMock()
            mock_server_class.return_value = mock_server

            await server.start()

            mock_logger.info.assert_called_once_with(
                "metrics_server_started",
                host="127.0.0.1",
                port=19091,
                auditing_mode=type(payment_service.auditor).__name__,
            )

            await server.stop()

    @pytest.mark.asyncio
    async def test_stop_when_not_started(self, payment_service: PaymentService) -> None:
        """Test stop does nothing when not started."""
        server = MetricsServer(payment_service)

        await server.stop()

    @pytest.mark.asyncio
    async def test_stop_sets_should_exit_and_waits(self, payment_service: PaymentService) -> None:
        server = MetricsServer(payment_service)
        completed = False

        async def slow_task() -> None:
            nonlocal completed
            await asyncio.sleep(0.05)
            completed = True

        mock_uvicorn_server = MagicMock()
        server._server = mock_uvicorn_server
        server._task = asyncio.create_task(slow_task())

        await server.stop()

        assert mock_uvicorn_server.should_exit is True
        assert completed is True

    @pytest.mark.asyncio
    async def test_stop_cancels_on_timeout(self, payment_service: PaymentService) -> None:
        """Test stop cancels task on timeout."""
        server = MetricsServer(payment_service)
        server._server = MagicMock()
        server._task = asyncio.create_task(asyncio.sleep(100))

        with (
            patch("payment_processing.api.metrics_server.asyncio.wait_for", side_effect=TimeoutError),
            patch("payment_processing.api.metrics_server.logger") as mock_logger,
        ):
            await server.stop()

        assert server._task.cancelled()
        mock_logger.warning.assert_called_once_with("metrics_server_stop_timeout")

    @pytest.mark.asyncio
    async def test_stop_logs_info(self, payment_service: PaymentService) -> None:
        server = MetricsServer(payment_service)

        with patch("payment_processing.api.metrics_server.logger") as mock_logger:
            await server.stop()

            mock_logger.info.assert_called_once_with("metrics_server_stopped")

    @pytest.mark.asyncio
    async def test_start_stop_cycle(self, payment_service: PaymentService) -> None:
        server = MetricsServer(payment_service, host="127.0.0.1", port=19092)

        with patch("payment_processing.api.metrics_server.uvicorn.Server") as mock_server_class:
            mock_uvicorn_server = MagicMock()

            async def mock_serve() -> None:
                while not mock_uvicorn_server.should_exit:
                    await asyncio.sleep(0.01)

            mock_uvicorn_server.serve = mock_serve
            mock_uvicorn_server.should_exit = False
            mock_server_class.return_value = mock_uvicorn_server

            await server.start()
            assert server._task is not None

            await server.stop()

            assert mock_uvicorn_server.should_exit is True
            assert server._task.done()
