"""Custom metrics for the POS engine."""

from decimal import Decimal

from opentelemetry import metrics

meter = metrics.get_meter("pos-engine")

checkout_success_counter = meter.create_counter(
    name="pos_checkout_success_total",
    description="Total number of committed checkouts",
    unit="1",
)

checkout_failure_counter = meter.create_counter(
    name="pos_checkout_failure_total",
    description="Total number of rejected checkouts by error type",
    unit="1",
)

checkout_duration_histogram = meter.create_histogram(
    name="pos_checkout_duration_seconds",
    description="Duration of the checkout critical section",
    unit="s",
)

revenue_counter = meter.create_counter(
    name="pos_revenue_total",
    description="Revenue committed through checkout",
    unit="1",
)

units_sold_counter = meter.create_counter(
    name="pos_units_sold_total",
    description="Units sold through checkout",
    unit="1",
)

receipt_failure_counter = meter.create_counter(
    name="pos_receipt_failure_total",
    description="Receipts that could not be produced after a committed checkout",
    unit="1",
)

persistence_failure_counter = meter.create_counter(
    name="pos_persistence_failure_total",
    description="Snapshots the persistence collaborator failed to save",
    unit="1",
)


def record_checkout_success(total: Decimal, units: int) -> None:
    """Record a committed checkout.

    Args:
        total: Order total
        units: Units sold across all lines
    """
    checkout_success_counter.add(1)
    revenue_counter.add(float(total))
    units_sold_counter.add(units)


def record_checkout_failure(error_type: str) -> None:
    """Record a rejected checkout.

    Args:
        error_type: Name of the error that rejected it
    """
    checkout_failure_counter.add(1, {"error_type": error_type})


def record_checkout_duration(duration_seconds: float) -> None:
    """Record how long the checkout critical section took."""
    checkout_duration_histogram.record(duration_seconds)


def record_receipt_failure() -> None:
    """Record a receipt that failed after checkout committed."""
    receipt_failure_counter.add(1)


def record_persistence_failure() -> None:
    """Record a snapshot the persistence collaborator did not save."""
    persistence_failure_counter.add(1)
