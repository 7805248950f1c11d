"""End-to-end tests for receipt reconstruction from fragments."""

import dataclasses
from decimal import Decimal

import pytest
from myprice.domain.receipt import Fragment, OcrDocument, Receipt, ReceiptItem
from myprice.receipt.ocr_parser.common import ParserSettings
from myprice.receipt.ocr_parser.fields_parser import ClassifierState, ItemCandidate
from myprice.receipt.ocr_result_parser import HEURISTIC_CONFIDENCE_NOTES, assemble_receipt, parse_receipt


def _store_fragments() -> list[Fragment]:
    return [
        Fragment("STORE NAME", 97.0, top=0.05, left=0.1),
        Fragment("Milk $4.99", 95.0, top=0.30, left=0.1),
        Fragment("Subtotal $4.99", 96.0, top=0.50, left=0.1),
        Fragment("Tax $0.40", 96.0, top=0.55, left=0.1),
        Fragment("Total $5.39", 97.0, top=0.60, left=0.1),
    ]


def test_parse_receipt_store_scenario() -> None:
    receipt = parse_receipt(_store_fragments())

    assert receipt.vendor == "STORE NAME"
    assert receipt.date == ""
    assert receipt.items == (ReceiptItem(name="Milk", price=Decimal("4.99"), qty=1),)
    assert receipt.subtotal == Decimal("4.99")
    assert receipt.tax == Decimal("0.40")
    assert receipt.total == Decimal("5.39")
    assert receipt.confidence_notes == HEURISTIC_CONFIDENCE_NOTES
    assert receipt.anomalies == ()


def test_parse_receipt_ignores_input_order() -> None:
    fragments = _store_fragments()

    assert parse_receipt(reversed(fragments)) == parse_receipt(fragments)


def test_parse_receipt_accepts_document() -> None:
    document = OcrDocument(fragments=tuple(_store_fragments()), page_count=1, source="memory")

    assert parse_receipt(document) == parse_receipt(_store_fragments())


def test_parse_receipt_serializes_to_output_shape() -> None:
    data = parse_receipt(_store_fragments()).to_dict()

    assert data == {
        "vendor": "STORE NAME",
        "date": "",
        "items": [{"name": "Milk", "qty": 1, "price": 4.99}],
        "subtotal": 4.99,
        "tax": 0.4,
        "total": 5.39,
        "confidence_notes": HEURISTIC_CONFIDENCE_NOTES,
        "anomalies": [],
    }


def test_parse_receipt_with_no_fragments_returns_empty_receipt() -> None:
    receipt = parse_receipt([])

    assert receipt.vendor == ""
    assert receipt.items == ()
    assert receipt.total == Decimal("0.00")
    assert receipt.anomalies == ()
    assert receipt.confidence_notes == HEURISTIC_CONFIDENCE_NOTES


def test_parse_receipt_with_date_and_quantity() -> None:
    fragments = [
        Fragment("CORNER CAFE", 98.0, top=0.02, left=0.3),
        Fragment("03/15/2024 12:31 PM", 92.0, top=0.10, left=0.1),
        Fragment("2 x Latte $9.00", 93.0, top=0.20, left=0.1),
        Fragment("Muffin 3.25", 93.0, top=0.25, left=0.1),
        Fragment("TOTAL 12.25", 99.0, top=0.40, left=0.1),
    ]

    receipt = parse_receipt(fragments)

    assert receipt.vendor == "CORNER CAFE"
    assert receipt.date == "03/15/2024"
    assert receipt.items == (
        ReceiptItem(name="Latte", price=Decimal("9.00"), qty=2),
        ReceiptItem(name="Muffin", price=Decimal("3.25"), qty=1),
    )
    assert receipt.total == Decimal("12.25")


def test_receipt_is_frozen() -> None:
    receipt = parse_receipt(_store_fragments())

    with pytest.raises(dataclasses.FrozenInstanceError):
        receipt.vendor = "OTHER"  # type: ignore[misc]


def test_assemble_resolves_missing_quantity_to_one() -> None:
    state = ClassifierState(items=(ItemCandidate("Soap", Decimal("3.00")), ItemCandidate("Gum", Decimal("1.00"), "0")))

    receipt = assemble_receipt(state)

    assert [item.qty for item in receipt.items] == [1, 1]


def test_no_arithmetic_anomalies_by_default() -> None:
    fragments = _store_fragments()
    fragments[-1] = Fragment("Total $9.99", 97.0, top=0.60, left=0.1)

    assert parse_receipt(fragments).anomalies == ()


def test_arithmetic_check_reports_total_mismatch() -> None:
    fragments = _store_fragments()
    fragments[-1] = Fragment("Total $9.99", 97.0, top=0.60, left=0.1)

    receipt = parse_receipt(fragments, ParserSettings(check_arithmetic=True))

    assert receipt.anomalies == ("Subtotal 4.99 + tax 0.40 = 5.39, but total is 9.99",)


def test_arithmetic_check_reports_item_sum_mismatch() -> None:
    fragments = _store_fragments()
    fragments.insert(2, Fragment("Eggs $3.00", 95.0, top=0.35, left=0.1))

    receipt = parse_receipt(fragments, ParserSettings(check_arithmetic=True))

    assert receipt.anomalies == ("Item prices sum to 7.99, but subtotal is 4.99",)


def test_arithmetic_check_passes_consistent_receipt() -> None:
    receipt = parse_receipt(_store_fragments(), ParserSettings(check_arithmetic=True))

    assert receipt.anomalies == ()


def test_arithmetic_check_skips_missing_amounts() -> None:
    fragments = [f for f in _store_fragments() if not f.text.startswith("Tax")]

    receipt = parse_receipt(fragments, ParserSettings(check_arithmetic=True))

    assert receipt.tax == Decimal("0.00")
    assert receipt.anomalies == ()


def test_default_receipt_matches_empty_record() -> None:
    assert Receipt().to_dict()["items"] == []
