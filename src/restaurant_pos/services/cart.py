"""Working cart used to assemble an order before checkout."""

import logging
from decimal import Decimal, InvalidOperation

from restaurant_pos.errors import OutOfStockError, ValidationError
from restaurant_pos.models.catalog_models import FoodItem
from restaurant_pos.models.money import HUNDRED, ZERO
from restaurant_pos.models.order_models import CartLine, CartTotals

logger = logging.getLogger(__name__)


class Cart:
    """Mutable in-progress order.

    Holds at most one line per food item id, in the order items were first
    added, plus a discount percentage applied to the whole cart. Each line
    keeps the food item exactly as it was when added; checkout prices the
    order from those snapshots.
    """

    def __init__(self) -> None:
        self._lines: dict[str, CartLine] = {}
        self._discount_percentage: Decimal = ZERO

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> list[CartLine]:
        """Cart lines in insertion order."""
        return list(self._lines.values())

    @property
    def discount_percentage(self) -> Decimal:
        """Discount percentage applied to the subtotal."""
        return self._discount_percentage

    @property
    def is_empty(self) -> bool:
        """Whether the cart has no lines."""
        return not self._lines

    def add_item(self, item: FoodItem, quantity: int = 1) -> CartLine:
        """Add units of an item, merging with an existing line.

        Args:
            item: Food item as currently shown in the catalog
            quantity: Units to add, at least 1

        Returns:
            CartLine: The new or merged line

        Raises:
            OutOfStockError: If the item has no stock on hand
            ValidationError: If quantity is below 1
        """
        if item.quantity <= 0:
            raise OutOfStockError(item.id, item.name)
        if quantity < 1:
            raise ValidationError("Cart quantity must be at least 1", field="quantity")

        existing = self._lines.get(item.id)
        if existing is not None:
            line = existing.model_copy(update={"quantity": existing.quantity + quantity})
        else:
            line = CartLine(food_item=item, quantity=quantity)
        self._lines[item.id] = line
        return line

    def set_quantity(self, item_id: str, quantity: int) -> CartLine | None:
        """Replace the quantity of a line, removing it when quantity <= 0.

        Stock is not checked here; checkout validates it.

        Returns:
            CartLine: The updated line, or None if removed or unknown
        """
        if quantity <= 0:
            self.remove_item(item_id)
            return None
        existing = self._lines.get(item_id)
        if existing is None:
            return None
        line = existing.model_copy(update={"quantity": quantity})
        self._lines[item_id] = line
        return line

    def remove_item(self, item_id: str) -> bool:
        """Drop a line, False if the item is not in the cart."""
        return self._lines.pop(item_id, None) is not None

    def set_discount(self, percentage: Decimal | int) -> Decimal:
        """Set the cart discount, clamped to ``[0, 100]``.

        Returns:
            Decimal: The percentage actually applied

        Raises:
            ValidationError: If the percentage is not a finite number
        """
        try:
            value = Decimal(percentage)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise ValidationError(f"Invalid discount {percentage!r}", field="discount") from e
        if not value.is_finite():
            raise ValidationError(f"Invalid discount {percentage!r}", field="discount")
        clamped = min(max(value, ZERO), HUNDRED)
        if clamped != value:
            logger.warning(f"Discount {value}% out of range, clamped to {clamped}%")
        self._discount_percentage = clamped
        return clamped

    def totals(self) -> CartTotals:
        """Subtotal, discount amount and total for the current lines."""
        subtotal = sum((line.subtotal for line in self._lines.values()), ZERO)
        return CartTotals.compute(subtotal, self._discount_percentage)

    def clear(self) -> None:
        """Empty the cart and reset the discount."""
        self._lines.clear()
        self._discount_percentage = ZERO
