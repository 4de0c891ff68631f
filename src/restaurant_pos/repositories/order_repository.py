"""In-memory order ledger.

Orders are immutable once appended. The ledger can change an order's status
or administratively delete it, but never its lines or totals.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from restaurant_pos.errors import ValidationError
from restaurant_pos.models.order_models import Order, OrderStatusEnum

logger = logging.getLogger(__name__)


class OrderLedger:
    """Collection of finalized orders in append order."""

    def __init__(self, orders: Iterable[Order] = ()) -> None:
        """Initialize the ledger.

        Args:
            orders: Initial orders, e.g. from a persisted snapshot
        """
        self._orders: dict[str, Order] = {}
        for order in orders:
            self.append(order)

    def __len__(self) -> int:
        return len(self._orders)

    def append(self, order: Order) -> Order:
        """Append a finalized order.

        Raises:
            ValidationError: If the id is already in the ledger
        """
        if order.id in self._orders:
            raise ValidationError(f"Order id '{order.id}' already exists", field="id")
        self._orders[order.id] = order
        return order

    def update(self, order: Order) -> bool:
        """Replace an order by id.

        Only the status may differ from the stored order.

        Args:
            order: New version of the order

        Returns:
            bool: True if replaced, False if the id is unknown

        Raises:
            ValidationError: If lines, totals or other immutable fields changed
        """
        existing = self._orders.get(order.id)
        if existing is None:
            logger.info(f"Ignoring update of unknown order {order.id}")
            return False
        if not existing.same_contents(order):
            raise ValidationError(
                f"Order '{order.id}' is immutable except for its status", field="status"
            )
        self._orders[order.id] = order
        return True

    def update_status(self, order_id: str, status: OrderStatusEnum) -> bool:
        """Change the status of an order.

        Args:
            order_id: Order identifier
            status: New status

        Returns:
            bool: True if updated, False if the id is unknown
        """
        existing = self._orders.get(order_id)
        if existing is None:
            logger.info(f"Ignoring status update of unknown order {order_id}")
            return False
        self._orders[order_id] = existing.model_copy(update={"status": status})
        return True

    def remove(self, order_id: str) -> bool:
        """Administratively delete an order, False if the id is unknown."""
        if self._orders.pop(order_id, None) is None:
            logger.info(f"Ignoring delete of unknown order {order_id}")
            return False
        logger.warning(f"Order {order_id} deleted from ledger")
        return True

    def get(self, order_id: str) -> Order | None:
        """Retrieve an order by id, None if absent."""
        return self._orders.get(order_id)

    def list_orders(self) -> list[Order]:
        """List all orders in append order."""
        return list(self._orders.values())

    def by_customer(self, customer_id: str) -> list[Order]:
        """List the orders placed by one customer."""
        return [order for order in self._orders.values() if order.customer_id == customer_id]

    def in_range(self, start: datetime, end: datetime) -> list[Order]:
        """List orders created within ``[start, end]``, both ends inclusive."""
        return [order for order in self._orders.values() if start <= order.created_at <= end]

    def recent(self, limit: int = 5) -> list[Order]:
        """The ``limit`` most recently appended orders, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self.list_orders()[-limit:]))
