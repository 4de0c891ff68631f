"""Owned aggregate of the catalog, customers, ledger and cart.

All mutations that must land together (checkout) run inside
``StoreState.transaction()``; snapshots for reporting and persistence are
taken under the same lock so readers never observe a half-applied checkout.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from decimal import Decimal

from restaurant_pos.adapters.base_persistence import SnapshotStore
from restaurant_pos.models.catalog_models import Customer, FoodItem
from restaurant_pos.models.snapshot_models import StoreSnapshot
from restaurant_pos.repositories.catalog_repository import CatalogStore
from restaurant_pos.repositories.customer_repository import CustomerStore
from restaurant_pos.repositories.order_repository import OrderLedger
from restaurant_pos.services.cart import Cart

logger = logging.getLogger(__name__)


class StoreState:
    """The POS working state, owned by one process."""

    def __init__(
        self,
        catalog: CatalogStore | None = None,
        customers: CustomerStore | None = None,
        ledger: OrderLedger | None = None,
        cart: Cart | None = None,
    ) -> None:
        """Initialize the state.

        Args:
            catalog: Catalog store, empty when omitted
            customers: Customer store, empty when omitted
            ledger: Order ledger, empty when omitted
            cart: Working cart, empty when omitted
        """
        self.catalog = catalog if catalog is not None else CatalogStore()
        self.customers = customers if customers is not None else CustomerStore()
        self.ledger = ledger if ledger is not None else OrderLedger()
        self.cart = cart if cart is not None else Cart()
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator["StoreState"]:
        """Exclusive update scope for multi-store mutations."""
        with self._lock:
            yield self

    def snapshot(self) -> StoreSnapshot:
        """Point-in-time copy of catalog, customers and orders."""
        with self._lock:
            return StoreSnapshot(
                food_items=tuple(self.catalog.list_items()),
                customers=tuple(self.customers.list_customers()),
                orders=tuple(self.ledger.list_orders()),
            )

    @classmethod
    def from_snapshot(cls, snapshot: StoreSnapshot) -> "StoreState":
        """Build a state seeded from a snapshot, with an empty cart."""
        return cls(
            catalog=CatalogStore(snapshot.food_items),
            customers=CustomerStore(snapshot.customers),
            ledger=OrderLedger(snapshot.orders),
        )


def sample_snapshot() -> StoreSnapshot:
    """Fixed sample dataset used when no saved state exists.

    Returns:
        StoreSnapshot: Three catalog items, one customer and no orders
    """
    return StoreSnapshot(
        food_items=(
            FoodItem(
                id="1",
                name="Classic Beef Burger",
                category="Burgers",
                price=Decimal("850"),
                quantity=25,
                item_code="BB001",
                expiration_date=datetime(2025, 2, 15, tzinfo=UTC),
            ),
            FoodItem(
                id="2",
                name="Chicken Submarine",
                category="Submarines",
                price=Decimal("750"),
                quantity=15,
                item_code="CS001",
                expiration_date=datetime(2025, 2, 10, tzinfo=UTC),
            ),
            FoodItem(
                id="3",
                name="Coca Cola",
                category="Beverages",
                price=Decimal("200"),
                quantity=50,
                item_code="CC001",
                expiration_date=datetime(2025, 6, 30, tzinfo=UTC),
            ),
        ),
        customers=(
            Customer(
                id="1",
                name="John Doe",
                contact_number="0771234567",
                email="john@email.com",
                address="123 Main St, Colombo",
                total_orders=5,
                created_at=datetime(2025, 1, 1, tzinfo=UTC),
            ),
        ),
        orders=(),
    )


def load_state(persistence: SnapshotStore) -> StoreState:
    """Restore the saved state, or seed the sample dataset if none exists.

    Args:
        persistence: Snapshot store to load from

    Returns:
        StoreState: The restored or seeded state
    """
    snapshot = persistence.load()
    if snapshot is None:
        logger.info("No saved snapshot found, seeding sample data")
        return StoreState.from_snapshot(sample_snapshot())

    logger.info(
        f"Loaded snapshot with {len(snapshot.food_items)} items, "
        f"{len(snapshot.customers)} customers, {len(snapshot.orders)} orders"
    )
    return StoreState.from_snapshot(snapshot)
