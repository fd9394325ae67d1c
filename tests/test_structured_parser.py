"""Tests for the remote parser prompt and schema coercion."""

from decimal import Decimal
from typing import Any

import pytest

from billsplit.domain.receipt import RemoteParseStatus, StructuredItem
from billsplit.receipt.structured_parser import build_receipt_prompt, coerce_structured_receipt


def test_prompt_embeds_text_and_schema() -> None:
    prompt = build_receipt_prompt("GUARDIAN PHARMACY Total RM22.00")

    assert 'OCR Text: """GUARDIAN PHARMACY Total RM22.00"""' in prompt
    assert "Return ONLY valid JSON" in prompt
    for key in ('"store"', '"date": "YYYY-MM-DD"', '"items"', '"quantity"', '"price"', '"total"', '"currency"'):
        assert key in prompt


def test_prompt_keeps_braces_in_ocr_text() -> None:
    prompt = build_receipt_prompt("Promo {10%} off")

    assert '"""Promo {10%} off"""' in prompt


def test_coerce_full_receipt() -> None:
    receipt = coerce_structured_receipt(
        {
            "store": " Guardian ",
            "date": "2024-03-01",
            "items": [
                {"name": "PRODETECT", "quantity": "2", "price": 22},
                {"name": "FLUGO", "quantity": 1, "price": "RM15.10"},
            ],
            "total": "1,059.10",
            "currency": "MYR",
        }
    )

    assert receipt is not None
    assert receipt.status == RemoteParseStatus.SUCCESS
    assert receipt.store == "Guardian"
    assert receipt.date == "2024-03-01"
    assert receipt.items == [
        StructuredItem(name="PRODETECT", quantity=Decimal("2"), price=Decimal("22")),
        StructuredItem(name="FLUGO", quantity=Decimal("1"), price=Decimal("15.10")),
    ]
    assert receipt.total == Decimal("1059.10")
    assert receipt.currency == "MYR"


def test_coerce_partial_receipt_fills_defaults() -> None:
    receipt = coerce_structured_receipt({"store": "Kopitiam ABC"})

    assert receipt is not None
    assert receipt.items == []
    assert receipt.total is None
    assert receipt.to_dict() == {
        "store": "Kopitiam ABC",
        "date": "",
        "items": [],
        "total": None,
        "currency": "",
    }


def test_unreadable_numbers_become_none() -> None:
    receipt = coerce_structured_receipt(
        {"total": "about twenty", "items": [{"name": "Kuih", "quantity": True, "price": "NaN"}]}
    )

    assert receipt is not None
    assert receipt.total is None
    assert receipt.items == [StructuredItem(name="Kuih", quantity=None, price=None)]


def test_top_level_item_list_becomes_items_only_receipt() -> None:
    receipt = coerce_structured_receipt([{"name": "Teh Tarik", "quantity": 2, "price": 3.0}])

    assert receipt is not None
    assert receipt.store == ""
    assert receipt.items == [StructuredItem(name="Teh Tarik", quantity=Decimal("2"), price=Decimal("3.0"))]


@pytest.mark.parametrize(
    "value",
    [
        None,
        42,
        "Guardian",
        {},
        {"shop": "Guardian", "sum": 22},
        [],
        [1, 2, 3],
        [{"name": "Teh Tarik"}, "Roti Canai"],
    ],
)
def test_values_that_are_not_receipts(value: Any) -> None:
    assert coerce_structured_receipt(value) is None
