"""Domain errors raised by the POS engine.

Every error is raised before any store is mutated, so callers can surface
them to the operator as a rejected action with no partial state change.
"""


class PosError(Exception):
    """Base class for all POS engine errors."""


class ValidationError(PosError, ValueError):
    """Input rejected at the boundary (missing field, negative price, duplicate code...)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human readable description of the problem
            field: Name of the offending field, if a single field is at fault
        """
        super().__init__(message)
        self.field = field


class OutOfStockError(PosError):
    """Raised when adding an item with no stock on hand to the cart."""

    def __init__(self, item_id: str, item_name: str) -> None:
        super().__init__(f"Item '{item_name}' ({item_id}) is out of stock")
        self.item_id = item_id
        self.item_name = item_name


class InvalidCheckoutError(PosError):
    """Raised when checkout is attempted without a customer or with an empty cart."""


class InsufficientStockError(PosError):
    """Raised when committing an order would take an item below zero stock."""

    def __init__(self, item_id: str, item_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for '{item_name}' ({item_id}): "
            f"requested {requested}, available {available}"
        )
        self.item_id = item_id
        self.item_name = item_name
        self.requested = requested
        self.available = available
