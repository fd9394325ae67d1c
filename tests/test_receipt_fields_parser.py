"""Tests for per-group name/quantity/price extraction."""

from decimal import Decimal

import pytest

from billsplit.domain.receipt import Bounding, OcrFragment
from billsplit.receipt.ocr_parser.common import ParserConfig
from billsplit.receipt.ocr_parser.fields_parser import extract_item_fields


def _frag(text: str, left: float = 0, top: float = 0) -> OcrFragment:
    return OcrFragment(text=text, bounding=Bounding(top=top, left=left, width=100, height=40))


@pytest.mark.parametrize(
    ("text", "name", "qty", "price"),
    [
        ("Nasi Lemak RM8.50", "Nasi Lemak", Decimal("1"), Decimal("8.50")),
        ("Teh Tarik x2 3.00", "Teh Tarik", Decimal("2"), Decimal("3.00")),
        ("2 Roti Canai $4.00", "Roti Canai", Decimal("2"), Decimal("4.00")),
        ("3 x 5 Curry Puff 7.50", "Curry Puff", Decimal("3"), Decimal("7.50")),
    ],
)
def test_single_fragment_patterns(text: str, name: str, qty: Decimal, price: Decimal) -> None:
    fields = extract_item_fields([_frag(text)])

    assert fields.name == name
    assert fields.qty == qty
    assert fields.price == price


def test_currency_marker_wins_over_trailing_decimal() -> None:
    fields = extract_item_fields([_frag("Mee Goreng RM7.00 1.50")])

    assert fields.price == Decimal("7.00")


def test_column_cells_supply_qty_and_price() -> None:
    group = [
        _frag("PRODETECT INFLUENZA A/B TEST KIT 1S", left=628),
        _frag("2.0", left=1146),
        _frag("22.00", left=1358),
    ]

    fields = extract_item_fields(group)

    assert "PRODETECT INFLUENZA A/B TEST KIT 1S" in fields.name
    assert fields.qty == Decimal("2")
    assert fields.price == Decimal("22.00")


def test_fragments_are_read_left_to_right() -> None:
    group = [_frag("6.40", left=500), _frag("Milo Ais", left=0), _frag("2", left=300)]

    fields = extract_item_fields(group)

    assert fields.name.startswith("Milo Ais")
    assert fields.qty == Decimal("2")
    assert fields.price == Decimal("6.40")


def test_small_trailing_number_is_quantity_when_no_price() -> None:
    fields = extract_item_fields([_frag("Kopi O", left=0), _frag("3", left=400)])

    assert fields.qty == Decimal("3")
    assert fields.price == Decimal("0")


def test_large_trailing_number_is_price() -> None:
    fields = extract_item_fields([_frag("Durian Musang", left=0), _frag("45", left=400)])

    assert fields.qty == Decimal("1")
    assert fields.price == Decimal("45")


def test_threshold_is_configurable() -> None:
    config = ParserConfig(quantity_price_threshold=Decimal("50"))

    fields = extract_item_fields([_frag("Durian Musang", left=0), _frag("45", left=400)], config)

    assert fields.qty == Decimal("45")
    assert fields.price == Decimal("0")


def test_second_to_last_integer_over_threshold_is_not_quantity() -> None:
    group = [_frag("Beras Wangi", left=0), _frag("12", left=300), _frag("28.90", left=500)]

    fields = extract_item_fields(group)

    assert fields.qty == Decimal("1")
    assert fields.price == Decimal("28.90")


def test_trailing_price_fallback_after_zero_currency_amount() -> None:
    fields = extract_item_fields([_frag("Free Kuih RM0 1.50")])

    assert fields.name == "Free Kuih"
    assert fields.price == Decimal("1.50")


def test_unresolved_group_has_zero_price() -> None:
    fields = extract_item_fields([_frag("Kopi O Kosong")])

    assert fields.name == "Kopi O Kosong"
    assert fields.qty == Decimal("1")
    assert fields.price == Decimal("0")


def test_empty_group() -> None:
    fields = extract_item_fields([])

    assert fields.name == ""
    assert fields.price == Decimal("0")


def test_very_long_quantity_digits_do_not_raise() -> None:
    digits = "9" * 5000

    fields = extract_item_fields([_frag(f"Kopi x{digits} 3.00")])

    assert fields.name == "Kopi"
    assert fields.qty == Decimal(digits)
    assert fields.price == Decimal("3.00")


def test_very_long_integer_column_cell_is_not_quantity() -> None:
    group = [_frag("Kopi O", left=0), _frag("9" * 5000, left=300), _frag("3.00", left=500)]

    fields = extract_item_fields(group)

    assert fields.qty == Decimal("1")
    assert fields.price == Decimal("3.00")
