"""POS service: the intent API used by the front end.

Each method corresponds to one operator action. Mutations of the catalog,
customers or orders are followed by a full snapshot handed to the
persistence collaborator; cart changes are transient and not persisted.
"""

import logging
from datetime import UTC, datetime, tzinfo
from decimal import Decimal

from restaurant_pos.adapters.base_persistence import SnapshotStore
from restaurant_pos.adapters.base_receipt import ReceiptWriter
from restaurant_pos.errors import InvalidCheckoutError, ValidationError
from restaurant_pos.models.catalog_models import Customer, FoodItem
from restaurant_pos.models.order_models import CartLine, CartTotals, Order, OrderStatusEnum
from restaurant_pos.models.report_models import (
    AnnualSummary,
    CustomerSpend,
    DashboardStats,
    MonthlySummary,
)
from restaurant_pos.observability import metrics
from restaurant_pos.repositories.catalog_repository import DEFAULT_LOW_STOCK_THRESHOLD
from restaurant_pos.services import reporting_service
from restaurant_pos.services.checkout_service import CheckoutService
from restaurant_pos.services.store_state import StoreState, load_state

logger = logging.getLogger(__name__)


class PosService:
    """Front door for catalog, customer, cart, order and report operations."""

    def __init__(
        self,
        state: StoreState,
        persistence: SnapshotStore,
        receipt_writer: ReceiptWriter | None = None,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        report_timezone: tzinfo = UTC,
    ) -> None:
        """Initialize the PosService.

        Args:
            state: Store aggregate the service operates on
            persistence: Collaborator receiving a snapshot after each change
            receipt_writer: Optional collaborator producing receipts
            low_stock_threshold: Stock level below which items are flagged
            report_timezone: Time zone month and year windows are reckoned in
        """
        self.state = state
        self.persistence = persistence
        self.low_stock_threshold = low_stock_threshold
        self.report_timezone = report_timezone
        self.checkout_service = CheckoutService(state=state, receipt_writer=receipt_writer)

    @classmethod
    def from_persistence(
        cls,
        persistence: SnapshotStore,
        receipt_writer: ReceiptWriter | None = None,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
        report_timezone: tzinfo = UTC,
    ) -> "PosService":
        """Restore the saved state (or seed sample data) and build the service."""
        return cls(
            state=load_state(persistence),
            persistence=persistence,
            receipt_writer=receipt_writer,
            low_stock_threshold=low_stock_threshold,
            report_timezone=report_timezone,
        )

    # Catalog

    def add_food_item(self, item: FoodItem) -> FoodItem:
        """Add a catalog item and persist."""
        with self.state.transaction():
            added = self.state.catalog.add(item)
        self._persist()
        return added

    def update_food_item(self, item: FoodItem) -> bool:
        """Replace a catalog item by id; False if unknown."""
        with self.state.transaction():
            updated = self.state.catalog.update(item)
        if updated:
            self._persist()
        return updated

    def delete_food_item(self, item_id: str) -> bool:
        """Delete a catalog item; False if unknown."""
        with self.state.transaction():
            removed = self.state.catalog.remove(item_id)
        if removed:
            self._persist()
        return removed

    def remove_expired_items(self, now: datetime | None = None) -> list[FoodItem]:
        """Delete every expired catalog item and return them."""
        with self.state.transaction():
            removed = self.state.catalog.remove_expired(now or datetime.now(UTC))
        if removed:
            self._persist()
        return removed

    def search_items(
        self, term: str = "", category: str | None = None, include_category: bool = False
    ) -> list[FoodItem]:
        """Search the catalog by name or item code."""
        return self.state.catalog.search(term, category, include_category)

    def low_stock_items(self) -> list[FoodItem]:
        """Items below the configured low-stock threshold."""
        return self.state.catalog.find_low_stock(self.low_stock_threshold)

    def expired_items(self, now: datetime | None = None) -> list[FoodItem]:
        """Items whose expiration date has passed."""
        return self.state.catalog.find_expired(now or datetime.now(UTC))

    # Customers

    def add_customer(self, customer: Customer) -> Customer:
        """Add a customer and persist."""
        with self.state.transaction():
            added = self.state.customers.add(customer)
        self._persist()
        return added

    def update_customer(self, customer: Customer) -> bool:
        """Replace a customer by id; False if unknown."""
        with self.state.transaction():
            updated = self.state.customers.update(customer)
        if updated:
            self._persist()
        return updated

    def delete_customer(self, customer_id: str) -> bool:
        """Delete a customer; False if unknown."""
        with self.state.transaction():
            removed = self.state.customers.remove(customer_id)
        if removed:
            self._persist()
        return removed

    def search_customers(self, term: str) -> list[Customer]:
        """Search customers by name, contact number or email."""
        return self.state.customers.search(term)

    def customer_orders(self, customer_id: str) -> list[Order]:
        """Order history of one customer."""
        return self.state.customers.orders_for(customer_id, self.state.ledger)

    def reconcile_customer_order_counts(self) -> dict[str, int]:
        """Recompute customer order counters from the ledger and persist changes."""
        with self.state.transaction():
            corrected = self.state.customers.reconcile_order_counts(self.state.ledger)
        if corrected:
            self._persist()
        return corrected

    # Cart

    def add_to_cart(self, item_id: str, quantity: int = 1) -> CartLine:
        """Add units of a catalog item to the cart.

        Raises:
            ValidationError: If the item is not in the catalog
            OutOfStockError: If the item has no stock on hand
        """
        with self.state.transaction():
            item = self.state.catalog.get(item_id)
            if item is None:
                raise ValidationError(f"Item '{item_id}' is not in the catalog", field="item_id")
            return self.state.cart.add_item(item, quantity)

    def update_cart_quantity(self, item_id: str, quantity: int) -> CartLine | None:
        """Change a cart line's quantity; zero or less removes it."""
        with self.state.transaction():
            return self.state.cart.set_quantity(item_id, quantity)

    def remove_from_cart(self, item_id: str) -> bool:
        """Drop a cart line."""
        with self.state.transaction():
            return self.state.cart.remove_item(item_id)

    def set_discount(self, percentage: Decimal | int) -> Decimal:
        """Set the cart discount percentage (clamped to 0-100)."""
        with self.state.transaction():
            return self.state.cart.set_discount(percentage)

    def clear_cart(self) -> None:
        """Empty the cart and reset its discount."""
        with self.state.transaction():
            self.state.cart.clear()

    def cart_totals(self) -> CartTotals:
        """Subtotal, discount and total of the cart."""
        with self.state.transaction():
            return self.state.cart.totals()

    # Orders

    def checkout(self, customer_id: str | None, now: datetime | None = None) -> Order:
        """Commit the cart as an order for the selected customer and persist.

        Raises:
            InvalidCheckoutError: If no customer is selected, the customer is
                unknown or the cart is empty
            InsufficientStockError: If the cart oversells any item
        """
        if not customer_id:
            customer = None
        else:
            customer = self.state.customers.get(customer_id)
            if customer is None:
                raise InvalidCheckoutError(f"Customer '{customer_id}' does not exist")

        order = self.checkout_service.checkout(customer, now)
        self._persist()
        return order

    def update_order_status(self, order_id: str, status: OrderStatusEnum) -> bool:
        """Change an order's status; False if unknown."""
        with self.state.transaction():
            updated = self.state.ledger.update_status(order_id, status)
        if updated:
            self._persist()
        return updated

    def delete_order(self, order_id: str) -> bool:
        """Administratively delete an order; False if unknown."""
        with self.state.transaction():
            removed = self.state.ledger.remove(order_id)
        if removed:
            self._persist()
        return removed

    def recent_orders(self, limit: int = 5) -> list[Order]:
        """Most recent orders, newest first."""
        with self.state.transaction():
            return self.state.ledger.recent(limit)

    # Reports

    def monthly_summary(self, year: int, month: int) -> MonthlySummary:
        """Sales summary for one calendar month."""
        snapshot = self.state.snapshot()
        return reporting_service.monthly_summary(
            snapshot.orders, year, month, tz=self.report_timezone
        )

    def top_customers(
        self, limit: int = reporting_service.DEFAULT_TOP_CUSTOMERS
    ) -> list[CustomerSpend]:
        """Customers ranked by lifetime spend."""
        snapshot = self.state.snapshot()
        return reporting_service.top_customers(snapshot.customers, snapshot.orders, limit)

    def annual_summary(self, year: int) -> AnnualSummary:
        """Sales summary for one calendar year."""
        snapshot = self.state.snapshot()
        return reporting_service.annual_summary(snapshot.orders, year, tz=self.report_timezone)

    def dashboard_stats(self, now: datetime | None = None) -> DashboardStats:
        """Headline dashboard figures."""
        snapshot = self.state.snapshot()
        return reporting_service.dashboard_stats(
            snapshot.food_items, snapshot.customers, snapshot.orders, now or datetime.now(UTC)
        )

    def _persist(self) -> bool:
        saved = self.persistence.save(self.state.snapshot())
        if not saved:
            metrics.record_persistence_failure()
            logger.error("Persistence collaborator failed to save the snapshot")
        return saved
