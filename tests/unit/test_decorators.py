"""Unit tests for the tracing decorator."""

from unittest.mock import patch

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from restaurant_pos.observability.decorators import traced


@pytest.mark.unit
class TestTraced:
    """Test suite for the traced decorator."""

    @pytest.fixture
    def exporter(self) -> InMemorySpanExporter:
        """Route spans created by the decorator into memory."""
        exporter = InMemorySpanExporter()
        provider = TracerProvider()
        provider.add_span_processor(SimpleSpanProcessor(exporter))
        with patch(
            "restaurant_pos.observability.decorators.trace.get_tracer",
            side_effect=lambda name: provider.get_tracer(name),
        ):
            yield exporter

    def test_records_successful_span(self, exporter: InMemorySpanExporter) -> None:
        """Test span name and attributes on success."""

        @traced("compute_total")
        def compute_total(a: int, b: int) -> int:
            return a + b

        assert compute_total(2, 3) == 5

        (span,) = exporter.get_finished_spans()
        assert span.name == "compute_total"
        assert span.attributes["success"] is True
        assert span.attributes["function.name"] == "compute_total"
        assert span.attributes["service.name"] == "pos-engine"

    def test_defaults_span_name_to_function_name(self, exporter: InMemorySpanExporter) -> None:
        """Test the default span name."""

        @traced()
        def refresh() -> None:
            return None

        refresh()

        (span,) = exporter.get_finished_spans()
        assert span.name == "refresh"
        assert "function.name" not in span.attributes

    def test_records_exception_and_reraises(self, exporter: InMemorySpanExporter) -> None:
        """Test that failures are recorded on the span and propagated."""

        @traced("explode")
        def explode() -> None:
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            explode()

        (span,) = exporter.get_finished_spans()
        assert span.attributes["success"] is False
        assert span.attributes["error.type"] == "ValueError"
        assert span.attributes["error.message"] == "boom"
        assert any(event.name == "exception" for event in span.events)

    def test_preserves_function_metadata(self) -> None:
        """Test that functools.wraps keeps the wrapped name and docstring."""

        @traced()
        def documented() -> None:
            """Docstring."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring."
