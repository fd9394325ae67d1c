"""Fragment-level filtering of receipt boilerplate."""

from billsplit.domain.receipt import OcrFragment

from .common import DEFAULT_PARSER_CONFIG, ParserConfig, _is_bare_number


def _has_header_keyword(text: str, config: ParserConfig) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in config.header_keywords)


def _is_item_text(text: str, config: ParserConfig) -> bool:
    """Return True if fragment text could belong to a purchasable item line."""
    if len(text) < config.min_text_length:
        return False
    # Bare numbers without context are not items
    if _is_bare_number(text):
        return False
    return not _has_header_keyword(text, config)


def _is_numeric_column(fragment: OcrFragment) -> bool:
    """Return True if the fragment is a bare qty/price cell rather than item text."""
    return _is_bare_number(fragment.text)


def filter_item_fragments(
    fragments: list[OcrFragment],
    config: ParserConfig | None = None,
) -> list[OcrFragment]:
    """
    Keep fragments that plausibly describe a receipt item.

    Drops short noise, bare numbers and anything carrying a header/footer
    keyword (totals, tax, payment, store metadata). The returned fragments
    are the input objects themselves, in input order.
    """
    config = config or DEFAULT_PARSER_CONFIG
    return [fragment for fragment in fragments if _is_item_text(fragment.text, config)]


def numeric_column_fragments(fragments: list[OcrFragment]) -> list[OcrFragment]:
    """Return bare number fragments (any length), in input order."""
    return [fragment for fragment in fragments if _is_numeric_column(fragment)]
