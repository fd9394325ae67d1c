"""Currency formatting and selective totals over parsed items."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

from billsplit.domain.receipt import ParsedItem

CURRENCY_SYMBOL = "RM"
CENTS = Decimal("0.01")


def _as_decimal(amount: Decimal | int | float) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    # str() keeps 15.1 as 15.1 instead of its binary expansion
    return Decimal(str(amount))


def format_currency(amount: Decimal | int | float) -> str:
    """Render an amount as e.g. ``RM22.00``."""
    value = _as_decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    return f"{CURRENCY_SYMBOL}{value}"


def calculate_total(items: Iterable[ParsedItem], selected_ids: Iterable[int]) -> Decimal:
    """Sum ``price * qty`` over the items whose id is selected."""
    selected = set(selected_ids)
    return sum((item.line_total for item in items if item.id in selected), Decimal("0"))
