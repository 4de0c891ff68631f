"""Catalog and customer models.

These models are immutable value objects. Stores replace a record with a
``model_copy(update=...)`` instead of mutating it in place, so any copy held
by a cart line or an order stays a faithful snapshot.
"""

import uuid
from datetime import UTC, datetime
from decimal import Decimal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from restaurant_pos.models.validation import build_model, require_text


class FoodItem(BaseModel):
    """Stock-keeping entry sold at the counter."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable identifier for the item", min_length=1)
    name: str = Field(..., description="Display name")
    category: str = Field(..., description="Catalog category (e.g., 'Burgers')")
    price: Decimal = Field(..., description="Unit price", ge=0, decimal_places=2)
    quantity: int = Field(..., description="Quantity on hand", ge=0)
    item_code: str = Field(..., description="Unique item code (e.g., 'BB001')")
    expiration_date: AwareDatetime | None = Field(None, description="Expiry instant")
    discount: Decimal | None = Field(
        None, description="Item level discount percentage (informational)", ge=0, le=100
    )

    @field_validator("name", "category", "item_code")
    @classmethod
    def validate_required_text(cls, v: str, info: ValidationInfo) -> str:
        """Reject blank names, categories and item codes."""
        return require_text(v, info.field_name)

    def is_expired(self, now: datetime) -> bool:
        """Check whether the item expired strictly before ``now``."""
        return self.expiration_date is not None and self.expiration_date < now

    @classmethod
    def create(
        cls,
        name: str,
        category: str,
        price: Decimal | int | str,
        quantity: int,
        item_code: str,
        expiration_date: datetime | None = None,
        discount: Decimal | int | None = None,
        item_id: str | None = None,
    ) -> "FoodItem":
        """Build a new catalog item from operator input.

        Args:
            name: Display name
            category: Catalog category
            price: Unit price, must be non-negative
            quantity: Initial stock, must be non-negative
            item_code: Unique item code
            expiration_date: Optional expiry instant (timezone aware)
            discount: Optional item discount percentage
            item_id: Explicit id, generated when omitted

        Returns:
            FoodItem: The validated item

        Raises:
            ValidationError: If any field is missing or out of range
        """
        return build_model(
            cls,
            id=item_id or f"item_{uuid.uuid4().hex[:12]}",
            name=name,
            category=category,
            price=price,
            quantity=quantity,
            item_code=item_code,
            expiration_date=expiration_date,
            discount=discount,
        )


class Customer(BaseModel):
    """Customer record with a denormalized completed-order counter."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable identifier for the customer", min_length=1)
    name: str = Field(..., description="Customer name")
    contact_number: str = Field(..., description="Contact phone number")
    email: str | None = Field(None, description="Email address")
    address: str | None = Field(None, description="Postal address")
    total_orders: int = Field(default=0, description="Completed orders placed", ge=0)
    created_at: AwareDatetime = Field(..., description="Creation instant")

    @field_validator("name", "contact_number")
    @classmethod
    def validate_required_text(cls, v: str, info: ValidationInfo) -> str:
        """Reject blank names and contact numbers."""
        return require_text(v, info.field_name)

    @field_validator("email", "address")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat blank optional text as absent."""
        if v is not None and not v.strip():
            return None
        return v

    @classmethod
    def create(
        cls,
        name: str,
        contact_number: str,
        email: str | None = None,
        address: str | None = None,
        created_at: datetime | None = None,
        customer_id: str | None = None,
    ) -> "Customer":
        """Build a new customer from operator input.

        Raises:
            ValidationError: If the name or contact number is missing
        """
        return build_model(
            cls,
            id=customer_id or f"cust_{uuid.uuid4().hex[:12]}",
            name=name,
            contact_number=contact_number,
            email=email,
            address=address,
            total_orders=0,
            created_at=created_at or datetime.now(UTC),
        )
