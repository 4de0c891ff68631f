"""Persistence snapshot model.

A snapshot is the full serializable state handed to the persistence
collaborator: the catalog, the customers and the order ledger. The cart is
transient and never persisted.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from restaurant_pos.models.catalog_models import Customer, FoodItem
from restaurant_pos.models.order_models import Order


class StoreSnapshot(BaseModel):
    """Point-in-time copy of catalog, customers and orders."""

    model_config = ConfigDict(frozen=True)

    food_items: tuple[FoodItem, ...] = Field(default=(), description="Catalog in store order")
    customers: tuple[Customer, ...] = Field(default=(), description="Customers in store order")
    orders: tuple[Order, ...] = Field(default=(), description="Orders in ledger order")

    def to_storage_item(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary.

        Returns:
            dict: Storage representation (decimals and datetimes as strings)
        """
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        """Serialize to a JSON document."""
        return json.dumps(self.to_storage_item(), indent=2)

    @classmethod
    def from_storage_item(cls, item: dict[str, Any]) -> "StoreSnapshot":
        """Create a StoreSnapshot from its storage representation.

        Missing collections are treated as empty.

        Args:
            item: Dictionary previously produced by ``to_storage_item``

        Returns:
            StoreSnapshot: Parsed snapshot
        """
        return cls(
            food_items=item.get("food_items", []),
            customers=item.get("customers", []),
            orders=item.get("orders", []),
        )
