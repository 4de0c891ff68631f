"""OpenTelemetry tracing decorators."""

import functools
from collections.abc import Callable
from typing import Any, TypeVar

from opentelemetry import trace

from restaurant_pos.observability.config import DEFAULT_SERVICE_NAME

F = TypeVar("F", bound=Callable[..., Any])


def traced(
    span_name: str | None = None, service_name: str = DEFAULT_SERVICE_NAME
) -> Callable[[F], F]:
    """Decorator to add OpenTelemetry tracing to a function.

    Creates a new span for the decorated function and records any exception
    raised before re-raising it.

    Args:
        span_name: Name for the span (defaults to function name if not provided)
        service_name: Service name for span attributes

    Returns:
        Decorated function with tracing

    Example:
        @traced("checkout")
        def checkout(self, customer_id: str) -> Order:
            ...
    """

    def decorator(func: F) -> F:
        name = span_name or func.__name__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            # Resolve the tracer per call so a provider set after import is honored
            tracer = trace.get_tracer(service_name)
            with tracer.start_as_current_span(name) as span:
                span.set_attribute("service.name", service_name)

                if span_name:
                    span.set_attribute("function.name", func.__name__)

                try:
                    result = func(*args, **kwargs)
                    span.set_attribute("success", True)
                    return result
                except Exception as e:
                    span.set_attribute("success", False)
                    span.set_attribute("error.type", type(e).__name__)
                    span.set_attribute("error.message", str(e))
                    span.record_exception(e)
                    raise

        return wrapper  # type: ignore

    return decorator
