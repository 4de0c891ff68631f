"""Checkout: turns the working cart into a committed order."""

import logging
import time
from datetime import UTC, datetime

from restaurant_pos.adapters.base_receipt import ReceiptWriter
from restaurant_pos.errors import InvalidCheckoutError, PosError, ValidationError
from restaurant_pos.models.catalog_models import Customer
from restaurant_pos.models.order_models import Order
from restaurant_pos.observability import metrics
from restaurant_pos.observability.decorators import traced
from restaurant_pos.services.store_state import StoreState

logger = logging.getLogger(__name__)


class CheckoutService:
    """Coordinates the one operation that changes several stores together.

    A checkout appends the order to the ledger, bumps the customer's order
    counter, takes the sold units out of the catalog and clears the cart.
    Either all of it happens or none of it does: every check runs before the
    first mutation, inside the state's exclusive transaction scope.

    Stock is re-validated against the live catalog at commit time; a cart
    that would oversell any item is rejected with ``InsufficientStockError``.
    """

    def __init__(self, state: StoreState, receipt_writer: ReceiptWriter | None = None) -> None:
        """Initialize the CheckoutService.

        Args:
            state: Store aggregate holding catalog, customers, ledger and cart
            receipt_writer: Optional collaborator producing a receipt per order
        """
        self.state = state
        self.receipt_writer = receipt_writer

    @traced("checkout")
    def checkout(self, customer: Customer | None, now: datetime | None = None) -> Order:
        """Commit the current cart as an order for ``customer``.

        Steps, in order, all-or-nothing:
        1. Snapshot each cart line into an order line (cart prices)
        2. Compute subtotal, discount amount and total
        3. Build a completed order embedding a copy of the customer
        4. Append it to the ledger
        5. Increment the customer's order count
        6. Decrement catalog stock by the purchased quantities
        7. Clear the cart

        The receipt writer runs afterwards; its failure never undoes the order.

        Args:
            customer: Selected customer
            now: Creation instant (defaults to the current UTC time)

        Returns:
            Order: The committed order

        Raises:
            InvalidCheckoutError: If no customer is selected, the customer is
                unknown or the cart is empty
            InsufficientStockError: If any line exceeds the stock on hand
            ValidationError: If ``now`` is not timezone aware
        """
        started = time.perf_counter()
        try:
            order = self._commit(customer, now or datetime.now(UTC))
        except PosError as e:
            metrics.record_checkout_failure(type(e).__name__)
            logger.warning(f"Checkout rejected: {e}")
            raise
        finally:
            metrics.record_checkout_duration(time.perf_counter() - started)

        metrics.record_checkout_success(order.total, order.quantity_sold)
        logger.info(
            f"Order {order.id} committed for customer {order.customer_id}: "
            f"{len(order.items)} lines, total {order.total}"
        )

        self._write_receipt(order)
        return order

    def _commit(self, customer: Customer | None, now: datetime) -> Order:
        if now.tzinfo is None or now.utcoffset() is None:
            raise ValidationError("Checkout time must be timezone aware", field="created_at")

        state = self.state
        with state.transaction():
            cart = state.cart
            if customer is None:
                raise InvalidCheckoutError("No customer selected")
            if cart.is_empty:
                raise InvalidCheckoutError("Cart is empty")

            stored_customer = state.customers.get(customer.id)
            if stored_customer is None:
                raise InvalidCheckoutError(f"Customer '{customer.id}' does not exist")

            lines = cart.lines
            for line in lines:
                if line.food_item.id not in state.catalog:
                    logger.warning(
                        f"Item {line.food_item.id} left the catalog while in the cart, "
                        "selling it without a stock adjustment"
                    )
                state.catalog.check_available(line.food_item.id, line.quantity)

            order = Order.from_cart(
                lines=lines,
                discount_percentage=cart.discount_percentage,
                customer=stored_customer,
                created_at=now,
            )

            state.ledger.append(order)
            state.customers.increment_order_count(stored_customer.id)
            for line in lines:
                state.catalog.adjust_quantity(line.food_item.id, -line.quantity)
            cart.clear()

        return order

    def _write_receipt(self, order: Order) -> None:
        if self.receipt_writer is None:
            return

        try:
            location = self.receipt_writer.write_receipt(order)
        except Exception as e:
            logger.error(f"Receipt writer raised for order {order.id}: {e}")
            location = None

        if location is None:
            metrics.record_receipt_failure()
            logger.error(f"No receipt produced for order {order.id}, order stays committed")
