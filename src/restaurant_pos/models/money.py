"""Money helpers shared by cart, order and report calculations."""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
CURRENCY_PREFIX = "Rs."


def quantize_money(amount: Decimal | int) -> Decimal:
    """Round an amount to two decimal places, half up.

    Args:
        amount: Raw amount

    Returns:
        Decimal: Amount with exactly two decimal places
    """
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def percentage_of(amount: Decimal, percentage: Decimal | int) -> Decimal:
    """Compute ``amount * percentage / 100`` rounded to money precision."""
    return quantize_money(Decimal(amount) * Decimal(percentage) / HUNDRED)


def format_currency(amount: Decimal | int) -> str:
    """Format an amount in the single display format used on receipts.

    Example:
        >>> format_currency(Decimal("1530"))
        'Rs. 1,530.00'
    """
    return f"{CURRENCY_PREFIX} {quantize_money(amount):,.2f}"
