"""Core domain models for the myprice project.

This module provides the data models used throughout the project:
- Fragment, OcrDocument: OCR provider input
- Receipt, ReceiptItem: Reconstructed receipt output

Usage:
    from myprice.domain import Fragment, OcrDocument, Receipt, ReceiptItem
"""

from myprice.domain.receipt import ZERO_AMOUNT, Fragment, OcrDocument, Receipt, ReceiptItem

__all__ = [
    "Fragment",
    "OcrDocument",
    "Receipt",
    "ReceiptItem",
    "ZERO_AMOUNT",
]
