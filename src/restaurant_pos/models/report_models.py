"""Read-side report models produced by the reporting service."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from restaurant_pos.models.catalog_models import Customer


class ItemSales(BaseModel):
    """Units sold and revenue for one item name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Item name (grouping key)")
    quantity_sold: int = Field(..., description="Units sold", ge=0)
    revenue: Decimal = Field(..., description="Sum of line subtotals")


class MonthlySummary(BaseModel):
    """Sales for one calendar month."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(..., ge=1, le=12)
    total_revenue: Decimal = Field(..., description="Sum of order totals")
    total_orders: int = Field(..., ge=0)
    items_sold: list[ItemSales] = Field(
        default_factory=list, description="Items ranked by revenue, highest first"
    )

    @property
    def average_order_value(self) -> Decimal:
        """Mean order total, zero when there are no orders."""
        if self.total_orders == 0:
            return Decimal("0.00")
        return (self.total_revenue / self.total_orders).quantize(Decimal("0.01"))


class CustomerSpend(BaseModel):
    """Lifetime spend of one customer."""

    model_config = ConfigDict(frozen=True)

    customer: Customer
    total_orders: int = Field(..., ge=0)
    total_spent: Decimal


class MonthBreakdown(BaseModel):
    """One month of an annual summary."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, le=12)
    label: str = Field(..., description="English month name")
    revenue: Decimal
    orders: int = Field(..., ge=0)


class AnnualSummary(BaseModel):
    """Sales for one calendar year with a month-by-month breakdown."""

    model_config = ConfigDict(frozen=True)

    year: int
    total_revenue: Decimal
    total_orders: int = Field(..., ge=0)
    monthly_breakdown: list[MonthBreakdown] = Field(..., min_length=12, max_length=12)
    items_by_quantity: list[ItemSales] = Field(
        default_factory=list, description="Items ranked by units sold, highest first"
    )


class DashboardStats(BaseModel):
    """Headline figures for the dashboard."""

    model_config = ConfigDict(frozen=True)

    total_revenue: Decimal
    total_orders: int = Field(..., ge=0)
    total_customers: int = Field(..., ge=0)
    total_items: int = Field(..., ge=0)
    expired_items: int = Field(..., ge=0)
