"""Format parsed receipt items as a shareable split summary."""

from decimal import Decimal

from billsplit.domain.receipt import ParsedItem

from .valuation import calculate_total, format_currency


def _format_quantity(qty: Decimal) -> str:
    """Render a quantity without trailing zeros ("2" rather than "2.0")."""
    if qty == qty.to_integral_value():
        return format(qty.to_integral_value(), "f")
    return format(qty.normalize(), "f")


def format_item_line(item: ParsedItem) -> str:
    """One summary line, e.g. ``- FLUGO CAPSULE 10S x1 = RM15.10``."""
    return f"- {item.name} x{_format_quantity(item.qty)} = {format_currency(item.line_total)}"


def format_split_message(items: list[ParsedItem], selected_ids: list[int] | set[int]) -> str | None:
    """
    Build the message listing the selected items and their total.

    Returns None when nothing is selected; callers are expected to tell the
    user to pick at least one item instead of sending an empty split.
    """
    selected = set(selected_ids)
    selected_items = [item for item in items if item.id in selected]
    if not selected_items:
        return None

    lines = ["Items to split:"]
    lines.extend(format_item_line(item) for item in selected_items)
    lines.append(f"Total = {format_currency(calculate_total(items, selected))}")
    return "\n".join(lines)
