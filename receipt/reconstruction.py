"""Receipt reconstruction strategies.

A strategy turns OCR output (plus, optionally, the receipt image) into a
Receipt. Every strategy returns the same Receipt shape, so callers can swap
one for another without touching how the result is consumed.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from myprice.domain.receipt import OcrDocument, Receipt

from .ocr_parser.common import DEFAULT_SETTINGS, ParserSettings
from .ocr_result_parser import parse_receipt


class ReceiptReconstructor(Protocol):
    """Capability: reconstruct a Receipt from OCR fragments and optional image context."""

    name: str

    def reconstruct(self, document: OcrDocument, image_path: Path | None = None) -> Receipt: ...


@dataclass(frozen=True)
class HeuristicReconstructor:
    """Deterministic rule-based reconstruction. Ignores the image."""

    settings: ParserSettings = field(default=DEFAULT_SETTINGS)
    name: str = "heuristic"

    def reconstruct(self, document: OcrDocument, image_path: Path | None = None) -> Receipt:
        return parse_receipt(document, self.settings)


def reconstruct_receipt(
    document: OcrDocument,
    reconstructor: ReceiptReconstructor | None = None,
    image_path: Path | None = None,
) -> Receipt:
    """Reconstruct with the given strategy, falling back to the heuristic one."""
    strategy = reconstructor if reconstructor is not None else HeuristicReconstructor()
    return strategy.reconstruct(document, image_path=image_path)
