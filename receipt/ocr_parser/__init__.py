"""Composable OCR receipt parser components."""

from .common import (
    DEFAULT_SETTINGS,
    ParserSettings,
    contains_price,
    extract_date,
    find_price,
    looks_like_price,
    normalize_item_name,
    normalize_price,
    normalize_vendor_name,
    parse_quantity,
)
from .fields_parser import ClassifierState, ItemCandidate, classify_fragment, classify_fragments
from .ordering import order_fragments

__all__ = [
    "ClassifierState",
    "DEFAULT_SETTINGS",
    "ItemCandidate",
    "ParserSettings",
    "classify_fragment",
    "classify_fragments",
    "contains_price",
    "extract_date",
    "find_price",
    "looks_like_price",
    "normalize_item_name",
    "normalize_price",
    "normalize_vendor_name",
    "order_fragments",
    "parse_quantity",
]
