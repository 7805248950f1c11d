"""Shared value normalizers for OCR receipt parsing.

Every helper here fails soft: malformed OCR text maps to a default value
(zero amount, quantity 1, no date) instead of raising.
"""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from myprice.domain.receipt import ZERO_AMOUNT

CURRENCY_SYMBOLS = "$€£¥"
CENT = Decimal("0.01")
DEFAULT_QUANTITY = 1

# Vendor heuristics: the name is the first confident, non-trivial text near the top
VENDOR_SCAN_LIMIT = 3  # Only the first N fragments in reading order can be the vendor
VENDOR_MIN_CONFIDENCE = 90.0  # Confidence must be strictly above this
VENDOR_MIN_LENGTH = 4

MIN_ITEM_NAME_LENGTH = 2
ARITHMETIC_TOLERANCE = Decimal("0.02")


@dataclass(frozen=True)
class ParserSettings:
    """Tunable knobs for the heuristic parser."""

    vendor_scan_limit: int = VENDOR_SCAN_LIMIT
    vendor_min_confidence: float = VENDOR_MIN_CONFIDENCE
    vendor_min_length: int = VENDOR_MIN_LENGTH
    row_tolerance: float = 0.0  # 0 keeps the strict (top, left) sort
    check_arithmetic: bool = False
    split_subtotal_labels: bool = False  # Also read "Sub Total" and "Sub-Total" as subtotal
    arithmetic_tolerance: Decimal = ARITHMETIC_TOLERANCE


DEFAULT_SETTINGS = ParserSettings()

# Amount-shaped token: optional leading symbol, digits with optional comma
# grouping, optional fractional part. A bare fraction like ".99" also counts.
PRICE_SHAPE = re.compile(r"^(?:[$€£¥]\s*)?(?:\d[\d,]*(?:\.\d*)?|\.\d+)$")

# Same shape, searched inside a longer line such as "Tax  $1.42"
AMOUNT_PATTERN = re.compile(r"(?:[$€£¥]\s*)?(?:\d[\d,]*(?:\.\d+)?|\.\d+)")

_MONTH = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?"

# Tried in order; the first pattern with a match anywhere in the text wins.
DATE_PATTERNS = (
    # 03/15/2024, 3/5/24
    re.compile(r"(?<!\d)\d{1,2}/\d{1,2}/\d{2,4}(?!\d)"),
    # 03-15-2024
    re.compile(r"(?<!\d)\d{1,2}-\d{1,2}-\d{2,4}(?!\d)"),
    # 2024-03-15
    re.compile(r"(?<!\d)\d{4}-\d{2}-\d{2}(?!\d)"),
    # Mar 15, 2024
    re.compile(rf"\b{_MONTH}\s+\d{{1,2}},?\s+\d{{4}}(?!\d)", re.IGNORECASE),
    # 15 Mar 2024
    re.compile(rf"(?<!\d)\d{{1,2}}\s+{_MONTH}\s+\d{{4}}(?!\d)", re.IGNORECASE),
)

# "2 x Milk" - explicit count printed in front of the item name
QUANTITY_PREFIX = re.compile(r"^(\d{1,3})\s*[xX]\s+(?=\S)")


def normalize_price(token: str) -> Decimal:
    """
    Canonicalize a raw price token into a two-decimal amount.

    Strips surrounding whitespace, one leading currency symbol and comma
    grouping separators. Anything that does not parse as a finite,
    non-negative number becomes Decimal("0.00"), so callers must treat a
    zero amount as "not found".
    """
    cleaned = token.strip()
    if cleaned and cleaned[0] in CURRENCY_SYMBOLS:
        cleaned = cleaned[1:]
    cleaned = cleaned.strip().replace(",", "")
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        return ZERO_AMOUNT
    if not amount.is_finite() or amount < 0:
        return ZERO_AMOUNT
    try:
        # copy_abs() turns "-0" into a plain zero
        return amount.copy_abs().quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # Too many digits for the decimal context
        return ZERO_AMOUNT


def looks_like_price(token: str) -> bool:
    """Return True if the trimmed token is shaped like a currency amount."""
    return PRICE_SHAPE.match(token.strip()) is not None


def contains_price(text: str) -> bool:
    """Return True if text carries a currency symbol or an amount-shaped substring."""
    if any(symbol in text for symbol in CURRENCY_SYMBOLS):
        return True
    return AMOUNT_PATTERN.search(text) is not None


def find_price(text: str) -> re.Match[str] | None:
    """
    Locate the amount inside a line that may also carry a label.

    Preference order:
    1. An amount at the end of the line (prices are printed right-aligned)
    2. The first amount written with a currency symbol
    3. The first amount anywhere
    """
    candidates = [match for match in AMOUNT_PATTERN.finditer(text) if looks_like_price(match.group())]
    if not candidates:
        return None

    line_end = len(text.rstrip())
    for match in reversed(candidates):
        if match.end() == line_end:
            return match
    for match in candidates:
        if match.group()[0] in CURRENCY_SYMBOLS:
            return match
    return candidates[0]


def extract_date(text: str) -> str | None:
    """
    Return the first date-shaped substring of text, or None.

    This is normalization, not validation: "13/45/2024" is returned as is.
    """
    for pattern in DATE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group()
    return None


def normalize_vendor_name(text: str) -> str:
    """Trim a vendor name. Casing is kept as scanned."""
    return text.strip()


def normalize_item_name(text: str) -> str:
    """Trim an item name and drop the receipt '*' marker on either end."""
    cleaned = text.strip()
    if cleaned.startswith("*"):
        cleaned = cleaned[1:]
    if cleaned.endswith("*"):
        cleaned = cleaned[:-1]
    return cleaned.strip()


def extract_item_name(text: str, price_match: re.Match[str] | None) -> str:
    """Remove the matched price and any currency symbols from an item line."""
    if price_match is not None:
        text = f"{text[: price_match.start()]} {text[price_match.end() :]}"
    for symbol in CURRENCY_SYMBOLS:
        text = text.replace(symbol, "")
    return normalize_item_name(text)


def split_quantity_prefix(name: str) -> tuple[str | None, str]:
    """Split a leading "N x " count off an item name.

    Returns (quantity_token, remaining_name); quantity_token is None when the
    name carries no explicit count.
    """
    match = QUANTITY_PREFIX.match(name)
    if not match:
        return None, name
    return match.group(1), name[match.end() :].strip()


def parse_quantity(token: str) -> int:
    """
    Parse an item quantity.

    Empty, non-numeric, zero or negative tokens all give the default of 1;
    an explicit "1" and a missing quantity are indistinguishable here.
    """
    try:
        quantity = int(token.strip())
    except ValueError:
        return DEFAULT_QUANTITY
    if quantity < 1:
        return DEFAULT_QUANTITY
    return quantity
