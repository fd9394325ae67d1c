"""Shared constants and helpers for OCR receipt parsing."""

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

# Boilerplate words that mark a fragment as header/footer/summary text
HEADER_KEYWORDS: tuple[str, ...] = (
    "receipt",
    "invoice",
    "bill",
    "total",
    "subtotal",
    "tax",
    "gst",
    "vat",
    "date",
    "time",
    "store",
    "shop",
    "address",
    "phone",
    "thank",
    "visit",
    "cashier",
    "cash",
    "card",
    "payment",
    "change",
    "refund",
)

MIN_TEXT_LENGTH = 3  # Shorter fragments are OCR noise, not items
SAME_LINE_RATIO = 0.5  # Fraction of the taller box height still counted as "same line"
PROXIMITY_THRESHOLD = 200  # Pixels of horizontal distance for "nearby" fragments
QUANTITY_PRICE_THRESHOLD = 10  # Bare numbers up to this are read as quantity, above as price

# Bare number with at most one decimal point, e.g. "22", "22.00", "2."
BARE_NUMBER = re.compile(r"^\d+\.?\d*$")
# Integer, optionally written with zero decimals ("2", "2.0"), as OCR renders qty columns
BARE_INTEGER = re.compile(r"^\d+(?:\.0+)?$")

# Price patterns, most explicit first
PRICE_PATTERNS = (
    re.compile(r"RM\s*(\d+\.?\d*)", re.IGNORECASE),
    re.compile(r"\$\s*(\d+\.?\d*)"),
    re.compile(r"(\d+\.\d{2})\s*$"),
    re.compile(r"(\d+\.\d{2})"),
)

# Quantity patterns: "2 x 10", "x 2", leading "2 "
QUANTITY_PATTERNS = (
    re.compile(r"(\d+)\s*x\s*\d+", re.IGNORECASE),
    re.compile(r"x\s*(\d+)", re.IGNORECASE),
    re.compile(r"^(\d+)\s+"),
)

# Removed from the joined text, in order, to leave the item name
NAME_STRIP_PATTERNS = (
    re.compile(r"RM\s*\d+\.?\d*", re.IGNORECASE),
    re.compile(r"\$\s*\d+\.?\d*"),
    re.compile(r"\d+\.\d{2}"),
    re.compile(r"x\s*\d+", re.IGNORECASE),
)
LEADING_COUNT = re.compile(r"^\d+\s+")

TRAILING_PRICE = re.compile(r"(\d+\.\d{2})$")


@dataclass(frozen=True)
class ParserConfig:
    """Tunable thresholds for the heuristic receipt pipeline."""

    header_keywords: tuple[str, ...] = field(default=HEADER_KEYWORDS)
    min_text_length: int = MIN_TEXT_LENGTH
    same_line_ratio: float = SAME_LINE_RATIO
    proximity_threshold: float = PROXIMITY_THRESHOLD
    quantity_price_threshold: Decimal = Decimal(QUANTITY_PRICE_THRESHOLD)
    # Re-attach bare number fragments (qty/price columns) to the line they sit on
    attach_numeric_columns: bool = True


DEFAULT_PARSER_CONFIG = ParserConfig()


def _is_bare_number(text: str) -> bool:
    """Return True if text is only digits with at most one decimal point."""
    return BARE_NUMBER.match(text.strip()) is not None


def _to_decimal(text: str) -> Decimal:
    """Parse a regex-captured number; unparseable input counts as 0."""
    try:
        return Decimal(text)
    except InvalidOperation:
        return Decimal("0")
