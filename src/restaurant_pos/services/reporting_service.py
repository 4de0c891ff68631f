"""Sales reporting over the order history.

Every function here is pure: it reads the orders and customers it is given
and nothing else, so the same inputs always produce the same report. The POS
service feeds these functions a point-in-time snapshot of the stores.
"""

import calendar
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime, timedelta, tzinfo
from decimal import Decimal

from restaurant_pos.models.catalog_models import Customer, FoodItem
from restaurant_pos.models.money import ZERO
from restaurant_pos.models.order_models import Order
from restaurant_pos.models.report_models import (
    AnnualSummary,
    CustomerSpend,
    DashboardStats,
    ItemSales,
    MonthBreakdown,
    MonthlySummary,
)
from restaurant_pos.observability.decorators import traced

DEFAULT_TOP_CUSTOMERS = 10


def month_bounds(year: int, month: int, tz: tzinfo = UTC) -> tuple[datetime, datetime]:
    """First and last instant of a calendar month, both inclusive.

    Args:
        year: Calendar year
        month: Month number, 1 to 12
        tz: Time zone the month is reckoned in

    Returns:
        tuple: (start, end) where end is the last microsecond of the month
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    start = datetime(year, month, 1, tzinfo=tz)
    last_day = calendar.monthrange(year, month)[1]
    end = datetime(year, month, last_day, tzinfo=tz) + timedelta(days=1, microseconds=-1)
    return start, end


def year_bounds(year: int, tz: tzinfo = UTC) -> tuple[datetime, datetime]:
    """First and last instant of a calendar year, both inclusive."""
    return month_bounds(year, 1, tz)[0], month_bounds(year, 12, tz)[1]


def orders_between(orders: Iterable[Order], start: datetime, end: datetime) -> list[Order]:
    """Orders created within ``[start, end]``."""
    return [order for order in orders if start <= order.created_at <= end]


def total_revenue(orders: Iterable[Order]) -> Decimal:
    """Sum of order totals."""
    return sum((order.total for order in orders), ZERO)


def rank_items_by_revenue(orders: Iterable[Order]) -> list[ItemSales]:
    """Group order lines by item name, highest revenue first."""
    return sorted(_group_lines_by_name(orders), key=lambda row: row.revenue, reverse=True)


def rank_items_by_quantity(orders: Iterable[Order]) -> list[ItemSales]:
    """Group order lines by item name, most units sold first."""
    return sorted(_group_lines_by_name(orders), key=lambda row: row.quantity_sold, reverse=True)


@traced("monthly_summary")
def monthly_summary(
    orders: Sequence[Order], year: int, month: int, tz: tzinfo = UTC
) -> MonthlySummary:
    """Revenue, order count and item ranking for one month.

    Items are grouped by name, so differently identified items that share a
    name are reported together.

    Args:
        orders: Order history
        year: Calendar year
        month: Month number, 1 to 12
        tz: Time zone the month is reckoned in

    Returns:
        MonthlySummary: The month's figures
    """
    start, end = month_bounds(year, month, tz)
    month_orders = orders_between(orders, start, end)
    return MonthlySummary(
        year=year,
        month=month,
        total_revenue=total_revenue(month_orders),
        total_orders=len(month_orders),
        items_sold=rank_items_by_revenue(month_orders),
    )


@traced("top_customers")
def top_customers(
    customers: Sequence[Customer],
    orders: Sequence[Order],
    limit: int = DEFAULT_TOP_CUSTOMERS,
) -> list[CustomerSpend]:
    """Customers ranked by lifetime spend.

    Spend covers every order regardless of date. Ties keep the customers'
    store order.

    Args:
        customers: Customers in store order
        orders: Order history
        limit: Maximum number of customers to return

    Returns:
        list: Top ``limit`` customers, highest spend first
    """
    spend: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    for order in orders:
        spend[order.customer_id] = spend.get(order.customer_id, ZERO) + order.total
        counts[order.customer_id] = counts.get(order.customer_id, 0) + 1

    ranking = sorted(
        (
            CustomerSpend(
                customer=customer,
                total_orders=counts.get(customer.id, 0),
                total_spent=spend.get(customer.id, ZERO),
            )
            for customer in customers
        ),
        key=lambda row: row.total_spent,
        reverse=True,
    )
    return ranking[: max(limit, 0)]


@traced("annual_summary")
def annual_summary(orders: Sequence[Order], year: int, tz: tzinfo = UTC) -> AnnualSummary:
    """Year totals, a twelve month breakdown and items ranked by units sold.

    Args:
        orders: Order history
        year: Calendar year
        tz: Time zone the year is reckoned in

    Returns:
        AnnualSummary: The year's figures
    """
    start, end = year_bounds(year, tz)
    year_orders = orders_between(orders, start, end)

    breakdown = []
    for month in range(1, 13):
        month_start, month_end = month_bounds(year, month, tz)
        month_orders = orders_between(year_orders, month_start, month_end)
        breakdown.append(
            MonthBreakdown(
                month=month,
                label=calendar.month_name[month],
                revenue=total_revenue(month_orders),
                orders=len(month_orders),
            )
        )

    return AnnualSummary(
        year=year,
        total_revenue=total_revenue(year_orders),
        total_orders=len(year_orders),
        monthly_breakdown=breakdown,
        items_by_quantity=rank_items_by_quantity(year_orders),
    )


def dashboard_stats(
    food_items: Sequence[FoodItem],
    customers: Sequence[Customer],
    orders: Sequence[Order],
    now: datetime,
) -> DashboardStats:
    """Headline figures: revenue, orders, customers, items and expired items."""
    return DashboardStats(
        total_revenue=total_revenue(orders),
        total_orders=len(orders),
        total_customers=len(customers),
        total_items=len(food_items),
        expired_items=sum(1 for item in food_items if item.is_expired(now)),
    )


def _group_lines_by_name(orders: Iterable[Order]) -> list[ItemSales]:
    quantities: dict[str, int] = {}
    revenue: dict[str, Decimal] = {}
    for order in orders:
        for line in order.items:
            name = line.food_item.name
            quantities[name] = quantities.get(name, 0) + line.quantity
            revenue[name] = revenue.get(name, ZERO) + line.subtotal
    return [
        ItemSales(name=name, quantity_sold=quantities[name], revenue=revenue[name])
        for name in quantities
    ]
