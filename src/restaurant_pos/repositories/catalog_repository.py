"""In-memory catalog store.

Updates and deletes of an unknown id are no-ops reported through the return
value (False/None) rather than exceptions; callers that need to know whether
an item exists should look it up first.
"""

import logging
from collections.abc import Iterable
from datetime import datetime

from restaurant_pos.errors import InsufficientStockError, ValidationError
from restaurant_pos.models.catalog_models import FoodItem

logger = logging.getLogger(__name__)

DEFAULT_LOW_STOCK_THRESHOLD = 10


class CatalogStore:
    """Store of food items keyed by id, kept in insertion order."""

    def __init__(self, items: Iterable[FoodItem] = ()) -> None:
        """Initialize the store.

        Args:
            items: Initial items, e.g. from a persisted snapshot
        """
        self._items: dict[str, FoodItem] = {}
        for item in items:
            self.add(item)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def add(self, item: FoodItem) -> FoodItem:
        """Add a new item to the catalog.

        Args:
            item: Item to add

        Returns:
            FoodItem: The stored item

        Raises:
            ValidationError: If the id or the item code is already in use
        """
        if item.id in self._items:
            raise ValidationError(f"Item id '{item.id}' already exists", field="id")
        self._check_unique_code(item)
        self._items[item.id] = item
        logger.debug(f"Added catalog item {item.id} ({item.item_code})")
        return item

    def update(self, item: FoodItem) -> bool:
        """Replace an existing item by id.

        Args:
            item: New version of the item

        Returns:
            bool: True if the item was replaced, False if the id is unknown

        Raises:
            ValidationError: If the item code collides with another item
        """
        if item.id not in self._items:
            logger.info(f"Ignoring update of unknown catalog item {item.id}")
            return False
        self._check_unique_code(item)
        self._items[item.id] = item
        return True

    def remove(self, item_id: str) -> bool:
        """Delete an item.

        Args:
            item_id: Item identifier

        Returns:
            bool: True if the item was deleted, False if the id is unknown
        """
        if self._items.pop(item_id, None) is None:
            logger.info(f"Ignoring delete of unknown catalog item {item_id}")
            return False
        return True

    def get(self, item_id: str) -> FoodItem | None:
        """Retrieve an item by id, None if absent."""
        return self._items.get(item_id)

    def list_items(self) -> list[FoodItem]:
        """List all items in insertion order."""
        return list(self._items.values())

    def find_expired(self, now: datetime) -> list[FoodItem]:
        """List items whose expiration date is strictly before ``now``."""
        return [item for item in self._items.values() if item.is_expired(now)]

    def find_low_stock(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[FoodItem]:
        """List items with fewer than ``threshold`` units on hand."""
        return [item for item in self._items.values() if item.quantity < threshold]

    def search(
        self, term: str = "", category: str | None = None, include_category: bool = False
    ) -> list[FoodItem]:
        """Filter items by a free-text term and an optional category.

        Args:
            term: Case-insensitive substring matched against name and item code
            category: Exact category to restrict to, None for all
            include_category: Also match ``term`` against the category name

        Returns:
            list: Matching items in insertion order
        """
        needle = term.strip().lower()
        results = []
        for item in self._items.values():
            if category and item.category != category:
                continue
            haystacks = [item.name, item.item_code]
            if include_category:
                haystacks.append(item.category)
            if needle and not any(needle in text.lower() for text in haystacks):
                continue
            results.append(item)
        return results

    def categories(self) -> list[str]:
        """Distinct categories in first-seen order."""
        return list(dict.fromkeys(item.category for item in self._items.values()))

    def remove_expired(self, now: datetime) -> list[FoodItem]:
        """Delete every expired item.

        Args:
            now: Reference instant

        Returns:
            list: The removed items
        """
        expired = self.find_expired(now)
        for item in expired:
            del self._items[item.id]
        if expired:
            logger.info(f"Removed {len(expired)} expired catalog items")
        return expired

    def check_available(self, item_id: str, requested: int) -> None:
        """Verify an item has at least ``requested`` units on hand.

        Unknown items pass, there is no stock left to protect.

        Raises:
            InsufficientStockError: If fewer units are on hand
        """
        item = self._items.get(item_id)
        if item is not None and item.quantity < requested:
            raise InsufficientStockError(item.id, item.name, requested, item.quantity)

    def adjust_quantity(self, item_id: str, delta: int) -> FoodItem | None:
        """Change an item's stock by ``delta`` units.

        Args:
            item_id: Item identifier
            delta: Units to add (negative to remove)

        Returns:
            FoodItem: The updated item, or None if the id is unknown

        Raises:
            InsufficientStockError: If the result would be negative
        """
        item = self._items.get(item_id)
        if item is None:
            return None
        new_quantity = item.quantity + delta
        if new_quantity < 0:
            raise InsufficientStockError(item.id, item.name, -delta, item.quantity)
        updated = item.model_copy(update={"quantity": new_quantity})
        self._items[item_id] = updated
        return updated

    def _check_unique_code(self, item: FoodItem) -> None:
        for existing in self._items.values():
            if existing.id != item.id and existing.item_code == item.item_code:
                raise ValidationError(
                    f"Item code '{item.item_code}' is already used by item '{existing.id}'",
                    field="item_code",
                )
