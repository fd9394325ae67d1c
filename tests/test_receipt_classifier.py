"""Tests for fragment-level boilerplate filtering."""

import pytest

from billsplit.domain.receipt import Bounding, OcrFragment
from billsplit.receipt.ocr_parser.classifier import filter_item_fragments, numeric_column_fragments
from billsplit.receipt.ocr_parser.common import ParserConfig


def _frag(text: str, top: float = 0, left: float = 0) -> OcrFragment:
    return OcrFragment(text=text, bounding=Bounding(top=top, left=left, width=100, height=40))


def test_keeps_item_text() -> None:
    fragment = _frag("PRODETECT INFLUENZA A/B TEST KIT 1S")
    assert filter_item_fragments([fragment]) == [fragment]


@pytest.mark.parametrize(
    "text",
    [
        "Total: RM150.00",
        "SUBTOTAL 44.00",
        "Cashier: Aminah",
        "THANK YOU, COME AGAIN",
        "Visa Card ****1234",
        "GST 6% 2.64",
        "Phone: 03-1234 5678",
    ],
)
def test_rejects_boilerplate_keywords(text: str) -> None:
    assert filter_item_fragments([_frag(text)]) == []


@pytest.mark.parametrize("text", ["22.00", "2.0", "150", "7.", " 12.50 "])
def test_rejects_bare_numbers(text: str) -> None:
    assert filter_item_fragments([_frag(text)]) == []


def test_rejects_short_fragments() -> None:
    assert filter_item_fragments([_frag("ab"), _frag("x")]) == []


def test_output_is_ordered_subset_of_input_objects() -> None:
    fragments = [
        _frag("Nasi Lemak RM8.50"),
        _frag("8.50"),
        _frag("Total RM8.50"),
        _frag("Teh Tarik x2 RM6.00"),
        _frag("ok"),
    ]

    kept = filter_item_fragments(fragments)

    assert kept == [fragments[0], fragments[3]]
    assert kept[0] is fragments[0]
    assert kept[1] is fragments[3]


def test_custom_keywords_replace_defaults() -> None:
    config = ParserConfig(header_keywords=("kopitiam",))
    fragments = [_frag("KOPITIAM ABC"), _frag("Total RM8.50")]

    assert filter_item_fragments(fragments, config) == [fragments[1]]


def test_numeric_column_fragments_include_short_numbers() -> None:
    fragments = [_frag("Milo Ais"), _frag("2"), _frag("6.40"), _frag("x2")]

    assert numeric_column_fragments(fragments) == [fragments[1], fragments[2]]
