"""Parse OCR fragments into purchasable receipt items."""

from decimal import Decimal
from typing import Any

from billsplit.domain.receipt import OcrFragment, ParsedItem
from billsplit.runtime.logging import get_logger

from .ocr_parser import (
    DEFAULT_PARSER_CONFIG,
    ParserConfig,
    attach_numeric_columns,
    extract_item_fields,
    filter_item_fragments,
    group_by_proximity,
    numeric_column_fragments,
)

logger = get_logger(__name__)


def to_fragments(ocr_result: Any) -> list[OcrFragment]:
    """Normalize the OCR collaborator's output into OcrFragment objects.

    Accepts OcrFragment instances or raw ``{"text", "bounding"}`` dicts;
    anything that is not a list yields no fragments.
    """
    if not isinstance(ocr_result, list):
        return []
    return [block if isinstance(block, OcrFragment) else OcrFragment.from_dict(block) for block in ocr_result]


def ocr_text(fragments: list[OcrFragment]) -> str:
    """Concatenate fragment texts with spaces, as sent to the remote parser."""
    return " ".join(fragment.text for fragment in fragments if fragment.text).strip()


def assemble_items(
    groups: list[list[OcrFragment]],
    config: ParserConfig | None = None,
) -> list[ParsedItem]:
    """
    Turn candidate groups into parsed items.

    Groups without a usable name and price are dropped; ids count accepted
    items only, so they are dense and start at 1.
    """
    config = config or DEFAULT_PARSER_CONFIG
    items: list[ParsedItem] = []
    for group in groups:
        fields = extract_item_fields(group, config)
        if not fields.name or fields.price == 0:
            logger.debug(
                "Dropped candidate group %r (name=%r, price=%s)",
                [fragment.text for fragment in group],
                fields.name,
                fields.price,
            )
            continue
        items.append(
            ParsedItem(
                id=len(items) + 1,
                name=fields.name,
                qty=fields.qty or Decimal("1"),
                price=fields.price,
            )
        )
    return items


def parse_receipt(ocr_result: Any, config: ParserConfig | None = None) -> list[ParsedItem]:
    """
    Parse an OCR fragment list into receipt items.

    This is a best-effort parser - results should be reviewed by a person
    before they are acted upon.

    Args:
        ocr_result: Fragments (OcrFragment or ``{"text", "bounding"}`` dicts)
        config: Optional thresholds; defaults to DEFAULT_PARSER_CONFIG

    Returns:
        Parsed items in group order; empty for empty or non-list input
    """
    config = config or DEFAULT_PARSER_CONFIG
    fragments = to_fragments(ocr_result)
    if not fragments:
        return []

    item_lines = filter_item_fragments(fragments, config)
    groups = group_by_proximity(item_lines, config)
    if config.attach_numeric_columns:
        groups = attach_numeric_columns(groups, numeric_column_fragments(fragments))

    items = assemble_items(groups, config)
    logger.debug(
        "Parsed %d items from %d fragments (%d item lines, %d groups)",
        len(items),
        len(fragments),
        len(item_lines),
        len(groups),
    )
    return items
