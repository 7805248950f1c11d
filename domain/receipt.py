"""Data models for receipt reconstruction."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

ZERO_AMOUNT = Decimal("0.00")


@dataclass(frozen=True)
class Fragment:
    """One OCR-recognized text span with its page-relative position."""

    text: str
    confidence: float  # 0-100, as reported by the OCR engine
    top: float
    left: float
    width: float = 0.0
    height: float = 0.0

    @property
    def position(self) -> tuple[float, float]:
        return (self.top, self.left)


@dataclass(frozen=True)
class OcrDocument:
    """Fragments produced by the OCR provider for one document."""

    fragments: tuple[Fragment, ...] = ()
    page_count: int = 1
    source: str = ""  # Where the OCR output came from, e.g. a file path


@dataclass(frozen=True)
class ReceiptItem:
    """A single line item on a receipt."""

    name: str
    price: Decimal
    qty: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "qty": self.qty, "price": float(self.price)}


@dataclass(frozen=True)
class Receipt:
    """Reconstructed receipt record.

    Money fields use Decimal("0.00") and text fields use "" when the
    reconstruction found nothing for them.
    """

    vendor: str = ""
    date: str = ""
    items: tuple[ReceiptItem, ...] = ()
    subtotal: Decimal = ZERO_AMOUNT
    tax: Decimal = ZERO_AMOUNT
    total: Decimal = ZERO_AMOUNT
    confidence_notes: str = ""
    anomalies: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serializable shape shared by every reconstruction path."""
        return {
            "vendor": self.vendor,
            "date": self.date,
            "items": [item.to_dict() for item in self.items],
            "subtotal": float(self.subtotal),
            "tax": float(self.tax),
            "total": float(self.total),
            "confidence_notes": self.confidence_notes,
            "anomalies": list(self.anomalies),
        }
