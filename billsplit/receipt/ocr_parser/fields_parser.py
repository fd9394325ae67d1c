"""Name / quantity / price extraction for one candidate item group."""

import re
from decimal import Decimal

from billsplit.domain.receipt import ExtractedFields, OcrFragment

from .common import (
    BARE_INTEGER,
    DEFAULT_PARSER_CONFIG,
    LEADING_COUNT,
    NAME_STRIP_PATTERNS,
    PRICE_PATTERNS,
    QUANTITY_PATTERNS,
    TRAILING_PRICE,
    ParserConfig,
    _is_bare_number,
    _to_decimal,
)

ZERO = Decimal("0")
ONE = Decimal("1")


def _sorted_left_to_right(group: list[OcrFragment]) -> list[OcrFragment]:
    return sorted(group, key=lambda fragment: fragment.bounding.left)


def _extract_price(full_text: str) -> Decimal:
    """First match wins: RM amount, $ amount, trailing x.xx, any x.xx."""
    for pattern in PRICE_PATTERNS:
        match = pattern.search(full_text)
        if match:
            return _to_decimal(match.group(1))
    return ZERO


def _extract_quantity(full_text: str) -> Decimal:
    for pattern in QUANTITY_PATTERNS:
        match = pattern.search(full_text)
        if match:
            return _to_decimal(match.group(1))
    return ONE


def _extract_name(full_text: str) -> str:
    """Strip prices and quantity markers, leaving the item description."""
    name = full_text
    for pattern in NAME_STRIP_PATTERNS:
        name = pattern.sub("", name)
    name = LEADING_COUNT.sub("", name, count=1)
    name = re.sub(r"\s+", " ", name)
    return name.strip()


def _refine_from_columns(
    blocks: list[OcrFragment],
    qty: Decimal,
    price: Decimal,
    threshold: Decimal,
) -> tuple[Decimal, Decimal]:
    """
    Read qty/price from trailing column cells of a multi-fragment group.

    The last cell is a price when it is above the threshold (or nothing else
    gave a price), otherwise a quantity. A small integer just before it is
    the quantity.
    """
    last_text = blocks[-1].text.strip()
    if _is_bare_number(last_text):
        value = _to_decimal(last_text)
        if value > 0:
            if value <= threshold and not price:
                qty = value
            elif value > threshold or price == 0:
                price = value

    second_last_text = blocks[-2].text.strip()
    if BARE_INTEGER.match(second_last_text):
        value = _to_decimal(second_last_text).to_integral_value()
        if 0 < value <= threshold:
            qty = value

    return qty, price


def extract_item_fields(
    group: list[OcrFragment],
    config: ParserConfig | None = None,
) -> ExtractedFields:
    """
    Derive name, quantity and unit price from a candidate group.

    Receipts lay out name/qty/price in varying columns, so this tries explicit
    currency markers first, then positional column cells, and finally a
    trailing two-decimal number. Quantity defaults to 1; a price of 0 means
    unresolved.
    """
    config = config or DEFAULT_PARSER_CONFIG
    if not group:
        return ExtractedFields(name="", qty=ONE, price=ZERO)

    blocks = _sorted_left_to_right(group)
    full_text = " ".join(block.text for block in blocks).strip()

    price = _extract_price(full_text)
    qty = _extract_quantity(full_text)
    name = _extract_name(full_text)

    if len(blocks) > 1:
        qty, price = _refine_from_columns(blocks, qty, price, config.quantity_price_threshold)

    if price == 0:
        match = TRAILING_PRICE.search(full_text)
        if match:
            price = _to_decimal(match.group(1))

    return ExtractedFields(name=name, qty=qty, price=price)
