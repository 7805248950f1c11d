"""Tests for the single-pass field classifier."""

from decimal import Decimal

from myprice.domain.receipt import Fragment
from myprice.receipt.ocr_parser.common import ParserSettings
from myprice.receipt.ocr_parser.fields_parser import (
    ClassifierState,
    ItemCandidate,
    classify_fragment,
    classify_fragments,
)


def _frag(text: str, confidence: float = 80.0, top: float = 0.5, left: float = 0.1) -> Fragment:
    return Fragment(text=text, confidence=confidence, top=top, left=left)


def _classify(*texts: str) -> ClassifierState:
    return classify_fragments([_frag(text) for text in texts])


def test_vendor_is_first_confident_fragment() -> None:
    state = classify_fragments([_frag("~~", 99.0), _frag("Corner Market", 96.0), _frag("OTHER NAME", 99.0)])

    assert state.vendor == "Corner Market"
    assert state.vendor_found


def test_vendor_gate_by_position() -> None:
    fragments = [_frag(f"noise {i}", 40.0) for i in range(4)] + [_frag("BIG STORE", 99.9)]

    state = classify_fragments(fragments)

    assert state.vendor is None


def test_vendor_requires_confidence_above_threshold() -> None:
    assert classify_fragments([_frag("STORE NAME", 90.0)]).vendor is None
    assert classify_fragments([_frag("STORE NAME", 90.1)]).vendor == "STORE NAME"


def test_vendor_requires_more_than_three_characters() -> None:
    assert classify_fragments([_frag("ABC", 99.0)]).vendor is None
    assert classify_fragments([_frag(" ABCD ", 99.0)]).vendor == "ABCD"


def test_vendor_fragment_is_not_also_an_item() -> None:
    state = classify_fragments([_frag("SHOP $5.00", 99.0)])

    assert state.vendor == "SHOP $5.00"
    assert state.items == ()


def test_vendor_settings_are_honored() -> None:
    settings = ParserSettings(vendor_scan_limit=1, vendor_min_confidence=50.0)
    fragments = [_frag("~~", 99.0), _frag("Corner Market", 60.0)]

    assert classify_fragments(fragments, settings).vendor is None
    assert classify_fragments(fragments[1:], settings).vendor == "Corner Market"


def test_date_is_matched_substring_and_first_wins() -> None:
    state = _classify("Date: 03/15/2024 10:42", "Printed 2024-04-01")

    assert state.date == "03/15/2024"


def test_date_fragment_is_not_an_item() -> None:
    state = _classify("03/15/2024 12")

    assert state.date == "03/15/2024"
    assert state.items == ()


def test_summary_amounts_by_label() -> None:
    state = _classify("Subtotal $4.99", "Tax $0.40", "TOTAL $5.39")

    assert state.subtotal == Decimal("4.99")
    assert state.tax == Decimal("0.40")
    assert state.total == Decimal("5.39")
    assert state.items == ()


def test_subtotal_last_match_wins() -> None:
    state = _classify("Subtotal $4.00", "SUBTOTAL $5.00")

    assert state.subtotal == Decimal("5.00")


def test_split_subtotal_label_reads_as_total_by_default() -> None:
    state = _classify("Sub Total 4.99", "Total 5.39")

    assert state.subtotal is None
    assert state.total == Decimal("4.99")


def test_split_subtotal_labels_setting() -> None:
    settings = ParserSettings(split_subtotal_labels=True)
    fragments = [_frag("Sub Total 4.99"), _frag("SUB-TOTAL 5.00"), _frag("Total 5.39")]

    state = classify_fragments(fragments, settings)

    assert state.subtotal == Decimal("5.00")
    assert state.total == Decimal("5.39")


def test_tax_and_total_first_nonzero_match_wins() -> None:
    state = _classify("Tax $0.00", "Tax $0.40", "Tax $9.99", "Total $5.39", "Total Savings $1.00")

    assert state.tax == Decimal("0.40")
    assert state.total == Decimal("5.39")


def test_total_label_without_amount_leaves_total_unset() -> None:
    state = _classify("Total $")

    assert state.total is None
    assert state.items == ()


def test_line_items_keep_reading_order() -> None:
    state = _classify("Milk $4.99", "Thank you", "*Bread* 2.49")

    assert state.items == (
        ItemCandidate(name="Milk", price=Decimal("4.99")),
        ItemCandidate(name="Bread", price=Decimal("2.49")),
    )


def test_item_with_single_character_name_is_suppressed() -> None:
    state = _classify("$ .99", "A 1.50")

    assert state.items == ()


def test_zero_priced_line_is_not_an_item() -> None:
    state = _classify("Coupon $0.00")

    assert state.items == ()


def test_item_quantity_prefix_is_kept_as_token() -> None:
    state = _classify("2 x Milk $9.98")

    assert state.items == (ItemCandidate(name="Milk", price=Decimal("9.98"), qty_token="2"),)


def test_unmatched_fragments_are_skipped_but_counted() -> None:
    state = classify_fragment(ClassifierState(), _frag("Thank you for shopping"))

    assert state == ClassifierState(scanned=1)


def test_classifier_does_not_mutate_previous_state() -> None:
    start = ClassifierState()
    after = classify_fragment(start, _frag("Milk $4.99"))

    assert start.items == ()
    assert len(after.items) == 1
