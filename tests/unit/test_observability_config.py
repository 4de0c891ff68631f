"""Unit tests for logging and OpenTelemetry configuration."""

import logging
import os
from unittest.mock import Mock, patch

import pytest
from pythonjsonlogger import jsonlogger

from restaurant_pos.observability import config


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        """Restore root logger handlers and level after each test."""
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    @patch.dict(os.environ, {}, clear=True)
    def test_installs_json_formatter(self) -> None:
        """Test that the root logger gets a single JSON handler."""
        config.configure_logging("DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, jsonlogger.JsonFormatter)

    @patch.dict(os.environ, {"LOG_LEVEL": "warning"}, clear=True)
    def test_env_overrides_argument(self) -> None:
        """Test that LOG_LEVEL takes precedence."""
        config.configure_logging("DEBUG")

        assert logging.getLogger().level == logging.WARNING


@pytest.mark.unit
class TestSetupObservability:
    """Tests for setup_observability."""

    @patch.dict(os.environ, {"OTEL_SERVICE_NAME": "till-1", "ENVIRONMENT": "prod"}, clear=True)
    def test_service_resource(self) -> None:
        """Test resource attributes."""
        resource = config.get_service_resource()

        assert resource.attributes["service.name"] == "till-1"
        assert resource.attributes["deployment.environment"] == "prod"

    @patch.dict(os.environ, {"ENVIRONMENT": "test"}, clear=True)
    @patch("restaurant_pos.observability.config.metrics.set_meter_provider")
    @patch("restaurant_pos.observability.config.trace.set_tracer_provider")
    @patch("restaurant_pos.observability.config.setup_metrics")
    @patch("restaurant_pos.observability.config.setup_tracing")
    def test_exporters_disabled_in_test_environment(
        self,
        mock_setup_tracing: Mock,
        mock_setup_metrics: Mock,
        mock_set_tracer: Mock,
        mock_set_meter: Mock,
    ) -> None:
        """Test that ENVIRONMENT=test never configures exporters."""
        config.setup_observability(enable_exporters=True)

        mock_setup_tracing.assert_not_called()
        mock_setup_metrics.assert_not_called()
        mock_set_tracer.assert_called_once()
        mock_set_meter.assert_called_once()

    @patch.dict(os.environ, {"ENVIRONMENT": "production"}, clear=True)
    @patch("restaurant_pos.observability.config.setup_metrics")
    @patch("restaurant_pos.observability.config.setup_tracing")
    def test_exporters_enabled(self, mock_setup_tracing: Mock, mock_setup_metrics: Mock) -> None:
        """Test that exporters are configured outside tests."""
        config.setup_observability(enable_exporters=True)

        mock_setup_tracing.assert_called_once()
        mock_setup_metrics.assert_called_once()
