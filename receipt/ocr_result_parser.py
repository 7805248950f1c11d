"""Reconstruct a structured Receipt from OCR fragments."""

import logging
from collections.abc import Iterable
from decimal import Decimal

from myprice.domain.receipt import ZERO_AMOUNT, Fragment, OcrDocument, Receipt, ReceiptItem

from .ocr_parser.common import DEFAULT_SETTINGS, ParserSettings, parse_quantity
from .ocr_parser.fields_parser import ClassifierState, ItemCandidate, classify_fragments
from .ocr_parser.ordering import order_fragments

logger = logging.getLogger(__name__)

HEURISTIC_CONFIDENCE_NOTES = "Parsed from OCR output with heuristic rules (no language model)"


def _resolve_item(candidate: ItemCandidate) -> ReceiptItem:
    """Turn a classifier item into a ReceiptItem, defaulting the quantity to 1."""
    return ReceiptItem(
        name=candidate.name,
        price=candidate.price,
        qty=parse_quantity(candidate.qty_token or ""),
    )


def _arithmetic_anomalies(
    subtotal: Decimal,
    tax: Decimal,
    total: Decimal,
    items: tuple[ReceiptItem, ...],
    tolerance: Decimal,
) -> list[str]:
    """
    Cross-check summary amounts.

    Only amounts that were actually found (non-zero) take part, so a receipt
    with no tax line is not flagged.
    """
    anomalies: list[str] = []

    if subtotal > 0 and tax > 0 and total > 0:
        expected = subtotal + tax
        if abs(expected - total) > tolerance:
            anomalies.append(f"Subtotal {subtotal} + tax {tax} = {expected}, but total is {total}")

    if subtotal > 0 and items:
        items_sum = sum((item.price for item in items), ZERO_AMOUNT)
        if abs(items_sum - subtotal) > tolerance:
            anomalies.append(f"Item prices sum to {items_sum}, but subtotal is {subtotal}")

    return anomalies


def assemble_receipt(state: ClassifierState, settings: ParserSettings = DEFAULT_SETTINGS) -> Receipt:
    """Freeze classifier state into the output Receipt."""
    items = tuple(_resolve_item(candidate) for candidate in state.items)
    subtotal = state.subtotal if state.subtotal is not None else ZERO_AMOUNT
    tax = state.tax if state.tax is not None else ZERO_AMOUNT
    total = state.total if state.total is not None else ZERO_AMOUNT

    anomalies: list[str] = []
    if settings.check_arithmetic:
        anomalies.extend(_arithmetic_anomalies(subtotal, tax, total, items, settings.arithmetic_tolerance))

    return Receipt(
        vendor=state.vendor or "",
        date=state.date or "",
        items=items,
        subtotal=subtotal,
        tax=tax,
        total=total,
        confidence_notes=HEURISTIC_CONFIDENCE_NOTES,
        anomalies=tuple(anomalies),
    )


def parse_receipt(
    source: OcrDocument | Iterable[Fragment],
    settings: ParserSettings | None = None,
) -> Receipt:
    """
    Parse OCR fragments into a Receipt.

    Fragments may arrive in any order; they are sorted into reading order
    first. Never raises on odd OCR text: fields that cannot be found keep
    their empty defaults.

    Args:
        source: An OcrDocument or a plain iterable of Fragments
        settings: Parser knobs; defaults to DEFAULT_SETTINGS

    Returns:
        The reconstructed Receipt
    """
    settings = settings or DEFAULT_SETTINGS
    fragments = source.fragments if isinstance(source, OcrDocument) else tuple(source)

    ordered = order_fragments(fragments, row_tolerance=settings.row_tolerance)
    state = classify_fragments(ordered, settings)
    receipt = assemble_receipt(state, settings)

    logger.info(
        "Parsed receipt: vendor=%r date=%r items=%d total=%s anomalies=%d",
        receipt.vendor,
        receipt.date,
        len(receipt.items),
        receipt.total,
        len(receipt.anomalies),
    )
    return receipt
