"""Vendor/date/summary amount/line item classification.

The classifier is a fold over fragments in reading order. Each step takes the
immutable ClassifierState built so far and returns the next one, so a parse
never shares state with another parse.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from decimal import Decimal
from functools import reduce

from myprice.domain.receipt import ZERO_AMOUNT, Fragment

from .common import (
    DEFAULT_SETTINGS,
    MIN_ITEM_NAME_LENGTH,
    ParserSettings,
    contains_price,
    extract_date,
    extract_item_name,
    find_price,
    normalize_price,
    normalize_vendor_name,
    split_quantity_prefix,
)

logger = logging.getLogger(__name__)

SUBTOTAL_KEYWORD = "subtotal"
# Extra subtotal spellings, only with ParserSettings.split_subtotal_labels
SPLIT_SUBTOTAL_KEYWORDS = ("sub total", "sub-total")
TAX_KEYWORD = "tax"
TOTAL_KEYWORD = "total"


@dataclass(frozen=True)
class ItemCandidate:
    """A line item as seen by the classifier, before quantity resolution."""

    name: str
    price: Decimal
    # Raw quantity text when the line states one explicitly, else None
    qty_token: str | None = None


@dataclass(frozen=True)
class ClassifierState:
    """Accumulated classifier decisions. None means "not found yet"."""

    vendor: str | None = None
    date: str | None = None
    subtotal: Decimal | None = None
    tax: Decimal | None = None
    total: Decimal | None = None
    items: tuple[ItemCandidate, ...] = ()
    scanned: int = 0  # Number of fragments consumed so far

    @property
    def vendor_found(self) -> bool:
        return self.vendor is not None

    @property
    def date_found(self) -> bool:
        return self.date is not None


def _is_vendor_candidate(state: ClassifierState, fragment: Fragment, settings: ParserSettings) -> bool:
    if state.vendor_found or state.scanned >= settings.vendor_scan_limit:
        return False
    if fragment.confidence <= settings.vendor_min_confidence:
        return False
    return len(normalize_vendor_name(fragment.text)) >= settings.vendor_min_length


def _has_subtotal_label(lowered: str, settings: ParserSettings) -> bool:
    if SUBTOTAL_KEYWORD in lowered:
        return True
    return settings.split_subtotal_labels and any(keyword in lowered for keyword in SPLIT_SUBTOTAL_KEYWORDS)


def _classify_amount(state: ClassifierState, text: str, settings: ParserSettings) -> ClassifierState:
    """Assign a priced line to subtotal, tax, total or a new line item."""
    price_match = find_price(text)
    amount = normalize_price(price_match.group()) if price_match else ZERO_AMOUNT
    lowered = text.lower()

    if _has_subtotal_label(lowered, settings):
        # Last labelled subtotal wins
        if amount > 0:
            logger.debug("Subtotal %s from %r", amount, text)
            return replace(state, subtotal=amount)
        return state

    if TAX_KEYWORD in lowered:
        if state.tax is None and amount > 0:
            logger.debug("Tax %s from %r", amount, text)
            return replace(state, tax=amount)
        return state

    if TOTAL_KEYWORD in lowered:
        if state.total is None and amount > 0:
            logger.debug("Total %s from %r", amount, text)
            return replace(state, total=amount)
        return state

    if amount <= 0:
        return state

    qty_token, name = split_quantity_prefix(extract_item_name(text, price_match))
    if len(name) < MIN_ITEM_NAME_LENGTH:
        logger.debug("Dropping priced line without a usable name: %r", text)
        return state

    item = ItemCandidate(name=name, price=amount, qty_token=qty_token)
    return replace(state, items=state.items + (item,))


def classify_fragment(
    state: ClassifierState,
    fragment: Fragment,
    settings: ParserSettings = DEFAULT_SETTINGS,
) -> ClassifierState:
    """
    Classify one fragment and return the updated state.

    Rules are tried in order and the first one that applies consumes the
    fragment:
    1. Vendor: one of the first few fragments, confident and long enough
    2. Date: the first date-shaped substring on the receipt
    3. Amount: labelled summary amount (subtotal/tax/total) or a line item
    Anything else is read and skipped.
    """
    if _is_vendor_candidate(state, fragment, settings):
        vendor = normalize_vendor_name(fragment.text)
        logger.debug("Vendor %r from fragment %d", vendor, state.scanned)
        return replace(state, vendor=vendor, scanned=state.scanned + 1)

    advanced = replace(state, scanned=state.scanned + 1)

    if not state.date_found:
        found_date = extract_date(fragment.text)
        if found_date is not None:
            logger.debug("Date %r from fragment %d", found_date, state.scanned)
            return replace(advanced, date=found_date)

    if contains_price(fragment.text):
        return _classify_amount(advanced, fragment.text, settings)

    return advanced


def classify_fragments(
    fragments: Iterable[Fragment],
    settings: ParserSettings = DEFAULT_SETTINGS,
) -> ClassifierState:
    """Run the classifier over fragments that are already in reading order."""
    return reduce(
        lambda state, fragment: classify_fragment(state, fragment, settings),
        fragments,
        ClassifierState(),
    )

