"""Receipt parse workflow orchestration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from myprice.receipt.ocr_helpers import OcrDocumentError
from myprice.receipt.reconstruction import HeuristicReconstructor, ReceiptReconstructor
from myprice.runtime.receipt_storage import load_ocr_json, write_receipt_json

if TYPE_CHECKING:
    from myprice.domain.receipt import Receipt

ParseStatus = Literal[
    "file_not_found",
    "invalid_ocr_json",
    "parsed",
    "saved",
]


@dataclass(frozen=True)
class ReceiptParseRequest:
    """Inputs for running the receipt parse workflow."""

    ocr_path: Path
    reconstructor: ReceiptReconstructor | None = None
    image_path: Path | None = None
    save: bool = False
    output_path: Path | None = None


@dataclass(frozen=True)
class ReceiptParseResult:
    """Outcome from the receipt parse workflow."""

    status: ParseStatus
    receipt: Receipt | None = None
    output_path: Path | None = None
    error: str | None = None


def run_receipt_parse(request: ReceiptParseRequest) -> ReceiptParseResult:
    """Run parse flow: load OCR JSON -> reconstruct -> optionally write JSON."""
    if not request.ocr_path.exists():
        return ReceiptParseResult(
            status="file_not_found",
            error=f"OCR file not found: {request.ocr_path}",
        )

    try:
        document = load_ocr_json(request.ocr_path)
    except OcrDocumentError as exc:
        return ReceiptParseResult(
            status="invalid_ocr_json",
            error=str(exc),
        )

    reconstructor = request.reconstructor or HeuristicReconstructor()
    receipt = reconstructor.reconstruct(document, image_path=request.image_path)

    if not request.save and request.output_path is None:
        return ReceiptParseResult(status="parsed", receipt=receipt)

    output_path = write_receipt_json(receipt, request.output_path, source=str(request.ocr_path))
    return ReceiptParseResult(
        status="saved",
        receipt=receipt,
        output_path=output_path,
    )
