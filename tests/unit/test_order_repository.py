"""Unit tests for the order ledger."""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from restaurant_pos.errors import ValidationError
from restaurant_pos.models.catalog_models import Customer, FoodItem
from restaurant_pos.models.order_models import CartLine, Order, OrderStatusEnum
from restaurant_pos.repositories.order_repository import OrderLedger


@pytest.fixture
def orders(
    order_factory: Callable[..., Order], customer: Customer, burger: FoodItem
) -> list[Order]:
    """Fixture providing three orders one day apart."""
    start = datetime(2025, 1, 1, 10, tzinfo=UTC)
    return [order_factory(customer, [(burger, 1)], start + timedelta(days=n)) for n in range(3)]


@pytest.fixture
def ledger(orders: list[Order]) -> OrderLedger:
    """Fixture providing a ledger with three orders."""
    return OrderLedger(orders)


@pytest.mark.unit
class TestOrderLedger:
    """Test suite for OrderLedger."""

    def test_append_rejects_duplicate_id(self, ledger: OrderLedger, orders: list[Order]) -> None:
        """Test that order ids are unique."""
        with pytest.raises(ValidationError):
            ledger.append(orders[0])

        assert len(ledger) == 3

    def test_update_allows_status_change(self, ledger: OrderLedger, orders: list[Order]) -> None:
        """Test replacing an order whose only change is the status."""
        cancelled = orders[0].model_copy(update={"status": OrderStatusEnum.CANCELLED})

        assert ledger.update(cancelled) is True
        assert ledger.get(orders[0].id).status == OrderStatusEnum.CANCELLED

    def test_update_rejects_content_change(
        self, ledger: OrderLedger, orders: list[Order], burger: FoodItem, customer: Customer
    ) -> None:
        """Test that lines and totals are immutable."""
        rewritten = Order.from_cart(
            [CartLine(food_item=burger, quantity=3)],
            Decimal("0"),
            customer,
            orders[0].created_at,
            order_id=orders[0].id,
        )

        with pytest.raises(ValidationError):
            ledger.update(rewritten)

        assert ledger.get(orders[0].id) == orders[0]

    def test_update_unknown_id(
        self,
        order_factory: Callable[..., Order],
        customer: Customer,
        burger: FoodItem,
        now: datetime,
    ) -> None:
        """Test that updating an unknown order is a no-op."""
        empty = OrderLedger()

        assert empty.update(order_factory(customer, [(burger, 1)], now)) is False
        assert len(empty) == 0

    def test_update_status(self, ledger: OrderLedger, orders: list[Order]) -> None:
        """Test changing an order status by id."""
        assert ledger.update_status(orders[1].id, OrderStatusEnum.PENDING) is True
        assert ledger.get(orders[1].id).status == OrderStatusEnum.PENDING
        assert ledger.update_status("ord_missing", OrderStatusEnum.PENDING) is False

    def test_remove(self, ledger: OrderLedger, orders: list[Order]) -> None:
        """Test administrative deletion."""
        assert ledger.remove(orders[0].id) is True
        assert ledger.remove(orders[0].id) is False
        assert len(ledger) == 2

    def test_by_customer(
        self, ledger: OrderLedger, orders: list[Order], other_customer: Customer
    ) -> None:
        """Test filtering orders by customer."""
        assert ledger.by_customer("cust_1") == orders
        assert ledger.by_customer(other_customer.id) == []

    def test_in_range_is_inclusive(self, ledger: OrderLedger, orders: list[Order]) -> None:
        """Test that both range ends are inclusive."""
        selected = ledger.in_range(orders[0].created_at, orders[1].created_at)

        assert selected == orders[:2]

    def test_recent_newest_first(self, ledger: OrderLedger, orders: list[Order]) -> None:
        """Test recent orders ordering and limit."""
        assert ledger.recent(2) == [orders[2], orders[1]]
        assert ledger.recent() == list(reversed(orders))
        assert ledger.recent(0) == []
