"""Logging, OpenTelemetry tracing and metrics for the POS engine."""

from restaurant_pos.observability.config import configure_logging, setup_observability
from restaurant_pos.observability.decorators import traced

__all__ = ["setup_observability", "configure_logging", "traced"]
