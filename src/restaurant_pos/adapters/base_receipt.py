"""Base class for receipt document writers.

A receipt writer consumes one finalized order after checkout has committed
and produces a durable document. It sits on a side channel: a failure is
reported through the return value and never rolls back the order.
"""

from abc import ABC, abstractmethod

from restaurant_pos.models.order_models import Order


class ReceiptWriter(ABC):
    """Abstract base class for receipt writers.

    - write_receipt returns None on failure
    - The checkout service logs and counts failures, nothing more
    """

    @abstractmethod
    def write_receipt(self, order: Order) -> str | None:
        """Produce the receipt document for an order.

        Args:
            order: Finalized order

        Returns:
            str: Location of the produced document, or None if writing failed
        """
        pass
