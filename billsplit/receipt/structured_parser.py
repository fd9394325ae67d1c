"""Prompt construction and schema coercion for the remote structured parser."""

from decimal import Decimal, InvalidOperation
from typing import Any

from billsplit.domain.receipt import StructuredItem, StructuredReceipt

RECEIPT_SCHEMA_KEYS = ("store", "date", "items", "total", "currency")

RECEIPT_PROMPT_TEMPLATE = '''You are a receipt parser. Convert the following OCR text into structured JSON:
OCR Text: """{ocr_text}"""

Return ONLY valid JSON with these exact keys:
{{
  "store": "string",
  "date": "YYYY-MM-DD",
  "items": [
    {{"name": "string", "quantity": number, "price": number}}
  ],
  "total": number,
  "currency": "string"
}}'''


def build_receipt_prompt(ocr_text: str) -> str:
    """Embed OCR text and the target schema in a single instruction."""
    return RECEIPT_PROMPT_TEMPLATE.format(ocr_text=ocr_text)


def _coerce_number(value: Any) -> Decimal | None:
    """Models return numbers as numbers, strings, or with currency prefixes."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        cleaned = str(value)
    elif isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        for prefix in ("RM", "$"):
            if cleaned.upper().startswith(prefix):
                cleaned = cleaned[len(prefix) :].strip()
    else:
        return None
    try:
        number = Decimal(cleaned)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def _coerce_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _coerce_item(value: Any) -> StructuredItem | None:
    if not isinstance(value, dict):
        return None
    return StructuredItem(
        name=_coerce_text(value.get("name")),
        quantity=_coerce_number(value.get("quantity")),
        price=_coerce_number(value.get("price")),
    )


def _coerce_items(values: Any) -> list[StructuredItem] | None:
    if not isinstance(values, list):
        return None
    items = [_coerce_item(value) for value in values]
    if any(item is None for item in items):
        return None
    return [item for item in items if item is not None]


def coerce_structured_receipt(value: Any) -> StructuredReceipt | None:
    """
    Fit a recovered JSON value to the structured receipt schema.

    A dict needs at least one schema key; a list must hold item objects and
    becomes a receipt with only items. Anything else is not a receipt.
    """
    if isinstance(value, list):
        items = _coerce_items(value)
        if not items:
            return None
        return StructuredReceipt(items=items)

    if not isinstance(value, dict) or not any(key in value for key in RECEIPT_SCHEMA_KEYS):
        return None

    items = _coerce_items(value.get("items", []))
    return StructuredReceipt(
        store=_coerce_text(value.get("store")),
        date=_coerce_text(value.get("date")),
        items=items or [],
        total=_coerce_number(value.get("total")),
        currency=_coerce_text(value.get("currency")),
    )
