"""Shared pytest fixtures and configuration for all tests."""

import os
from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal

import pytest

from restaurant_pos.models.catalog_models import Customer, FoodItem
from restaurant_pos.models.order_models import CartLine, Order

os.environ.setdefault("ENVIRONMENT", "test")


@pytest.fixture
def now() -> datetime:
    """Fixture providing a fixed reference instant."""
    return datetime(2025, 1, 20, 12, 0, tzinfo=UTC)


@pytest.fixture
def burger() -> FoodItem:
    """Fixture providing a burger with plenty of stock."""
    return FoodItem(
        id="item_burger",
        name="Classic Beef Burger",
        category="Burgers",
        price=Decimal("850"),
        quantity=25,
        item_code="BB001",
        expiration_date=datetime(2025, 2, 15, tzinfo=UTC),
    )


@pytest.fixture
def submarine() -> FoodItem:
    """Fixture providing a submarine with low stock."""
    return FoodItem(
        id="item_sub",
        name="Chicken Submarine",
        category="Submarines",
        price=Decimal("750"),
        quantity=5,
        item_code="CS001",
        expiration_date=datetime(2025, 1, 10, tzinfo=UTC),
    )


@pytest.fixture
def cola() -> FoodItem:
    """Fixture providing a beverage without an expiration date."""
    return FoodItem(
        id="item_cola",
        name="Coca Cola",
        category="Beverages",
        price=Decimal("200"),
        quantity=50,
        item_code="CC001",
    )


@pytest.fixture
def sold_out_item() -> FoodItem:
    """Fixture providing an item with no stock on hand."""
    return FoodItem(
        id="item_fries",
        name="French Fries",
        category="Sides",
        price=Decimal("400"),
        quantity=0,
        item_code="FF001",
    )


@pytest.fixture
def customer() -> Customer:
    """Fixture providing a customer with no orders yet."""
    return Customer(
        id="cust_1",
        name="Nimal Perera",
        contact_number="0771234567",
        email="nimal@example.com",
        address="12 Galle Road, Colombo",
        total_orders=0,
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )


@pytest.fixture
def other_customer() -> Customer:
    """Fixture providing a second customer."""
    return Customer(
        id="cust_2",
        name="Kamala Silva",
        contact_number="0719876543",
        total_orders=0,
        created_at=datetime(2025, 1, 2, tzinfo=UTC),
    )


@pytest.fixture
def order_factory() -> Callable[..., Order]:
    """Fixture providing a factory for completed orders.

    Usage: ``order_factory(customer, [(item, qty), ...], created_at, discount=0)``
    """
    counter = {"n": 0}

    def make_order(
        customer: Customer,
        lines: list[tuple[FoodItem, int]],
        created_at: datetime,
        discount: int | Decimal = 0,
    ) -> Order:
        counter["n"] += 1
        return Order.from_cart(
            lines=[CartLine(food_item=item, quantity=qty) for item, qty in lines],
            discount_percentage=Decimal(discount),
            customer=customer,
            created_at=created_at,
            order_id=f"ord_test{counter['n']:06d}",
        )

    return make_order
