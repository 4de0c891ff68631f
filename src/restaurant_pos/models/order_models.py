"""Cart and order models.

Order lines carry a copy of the food item as it was at the moment of sale,
and orders embed a copy of the customer, so later catalog or customer edits
never rewrite history.
"""

import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

from restaurant_pos.models.catalog_models import Customer, FoodItem
from restaurant_pos.models.money import ZERO, percentage_of, quantize_money


class OrderStatusEnum(str, Enum):
    """Enumeration of order status values."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CartLine(BaseModel):
    """A food item snapshot paired with the requested quantity."""

    model_config = ConfigDict(frozen=True)

    food_item: FoodItem = Field(..., description="Item as it was when added to the cart")
    quantity: int = Field(..., description="Requested quantity", ge=1)

    @property
    def subtotal(self) -> Decimal:
        """Line subtotal: snapshot price times quantity."""
        return quantize_money(self.food_item.price * self.quantity)


class CartTotals(BaseModel):
    """Subtotal, discount and total of a cart."""

    model_config = ConfigDict(frozen=True)

    subtotal: Decimal = ZERO
    discount_amount: Decimal = ZERO
    total: Decimal = ZERO

    @classmethod
    def compute(cls, subtotal: Decimal, discount_percentage: Decimal) -> "CartTotals":
        """Derive discount amount and total from a subtotal.

        Args:
            subtotal: Sum of line subtotals
            discount_percentage: Discount percentage, 0 to 100

        Returns:
            CartTotals: Amounts rounded to money precision
        """
        subtotal = quantize_money(subtotal)
        discount_amount = percentage_of(subtotal, discount_percentage)
        return cls(
            subtotal=subtotal,
            discount_amount=discount_amount,
            total=subtotal - discount_amount,
        )


class OrderLine(BaseModel):
    """Immutable line of a finalized order."""

    model_config = ConfigDict(frozen=True)

    food_item: FoodItem = Field(..., description="Item snapshot at the moment of sale")
    quantity: int = Field(..., description="Quantity sold", ge=1)
    subtotal: Decimal = Field(..., description="Price times quantity at the moment of sale")

    @model_validator(mode="after")
    def validate_subtotal(self) -> "OrderLine":
        """Ensure the stored subtotal matches price times quantity."""
        expected = quantize_money(self.food_item.price * self.quantity)
        if self.subtotal != expected:
            raise ValueError(f"subtotal {self.subtotal} does not match {expected}")
        return self

    @classmethod
    def from_cart_line(cls, line: CartLine) -> "OrderLine":
        """Freeze a cart line into an order line."""
        return cls(food_item=line.food_item, quantity=line.quantity, subtotal=line.subtotal)


class Order(BaseModel):
    """Finalized order.

    Lines and totals never change once the order exists; only ``status``
    may be updated through the ledger.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique order identifier", min_length=1)
    customer_id: str = Field(..., description="Customer the order belongs to")
    customer: Customer = Field(..., description="Customer snapshot at the moment of sale")
    items: tuple[OrderLine, ...] = Field(..., description="Ordered lines", min_length=1)
    subtotal: Decimal = Field(..., description="Sum of line subtotals", ge=0)
    discount_percentage: Decimal = Field(..., description="Discount percentage", ge=0, le=100)
    discount_amount: Decimal = Field(..., description="Subtotal times percentage / 100", ge=0)
    total: Decimal = Field(..., description="Subtotal minus discount amount", ge=0)
    created_at: AwareDatetime = Field(..., description="Creation instant")
    status: OrderStatusEnum = Field(default=OrderStatusEnum.COMPLETED, description="Order status")

    @model_validator(mode="after")
    def validate_totals(self) -> "Order":
        """Ensure the stored totals reconcile with the lines and discount."""
        expected = CartTotals.compute(
            sum((line.subtotal for line in self.items), ZERO), self.discount_percentage
        )
        if (self.subtotal, self.discount_amount, self.total) != (
            expected.subtotal,
            expected.discount_amount,
            expected.total,
        ):
            raise ValueError(
                f"order totals {self.subtotal}/{self.discount_amount}/{self.total} do not "
                f"reconcile with lines ({expected.subtotal}/{expected.discount_amount}/"
                f"{expected.total})"
            )
        return self

    @property
    def short_id(self) -> str:
        """Last six characters of the id, as printed on receipts."""
        return self.id[-6:]

    @property
    def quantity_sold(self) -> int:
        """Total units across all lines."""
        return sum(line.quantity for line in self.items)

    def same_contents(self, other: "Order") -> bool:
        """Check that everything except ``status`` matches another order."""
        return self.model_dump(exclude={"status"}) == other.model_dump(exclude={"status"})

    @classmethod
    def from_cart(
        cls,
        lines: list[CartLine],
        discount_percentage: Decimal,
        customer: Customer,
        created_at: datetime,
        order_id: str | None = None,
    ) -> "Order":
        """Snapshot cart lines and a customer into a completed order.

        Args:
            lines: Cart lines in insertion order
            discount_percentage: Discount applied to the subtotal
            customer: Customer record to embed
            created_at: Creation instant
            order_id: Explicit id, generated when omitted

        Returns:
            Order: The new completed order
        """
        order_lines = tuple(OrderLine.from_cart_line(line) for line in lines)
        totals = CartTotals.compute(
            sum((line.subtotal for line in order_lines), ZERO), discount_percentage
        )
        return cls(
            id=order_id or f"ord_{uuid.uuid4().hex[:12]}",
            customer_id=customer.id,
            customer=customer,
            items=order_lines,
            subtotal=totals.subtotal,
            discount_percentage=discount_percentage,
            discount_amount=totals.discount_amount,
            total=totals.total,
            created_at=created_at,
            status=OrderStatusEnum.COMPLETED,
        )
