"""Pure OCR transformation helpers for receipt parsing.

Turns OCR provider payloads into the OcrDocument consumed by the parser.
Two payload shapes are accepted:

- AWS Textract ``detect-document-text`` output (``DocumentMetadata`` +
  ``Blocks``); only ``LINE`` blocks with text become fragments.
- The simplified shape produced by ``document_summary()``:
  ``{"page_count": 1, "lines": [{"text", "confidence", "top", "left"}]}``.
"""

from typing import Any

from myprice.domain.receipt import Fragment, OcrDocument

from .ocr_parser.ordering import order_fragments


class OcrDocumentError(ValueError):
    """Raised when an OCR payload does not have a usable document shape."""


def _clamp(value: float, min_val: float = 0.0, max_val: float = 1.0) -> float:
    return max(min_val, min(max_val, value))


def _as_float(value: Any, field_name: str) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise OcrDocumentError(f"Field {field_name!r} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise OcrDocumentError(f"Field {field_name!r} must be a number, got {value!r}") from e


def _page_count(value: Any) -> int:
    """Page count from the payload; anything unusable counts as one page."""
    try:
        pages = int(value)
    except (TypeError, ValueError, OverflowError):
        return 1
    return pages if pages >= 1 else 1


def _fragment_from_block(block: dict[str, Any]) -> Fragment:
    geometry = block.get("Geometry") or {}
    bbox = geometry.get("BoundingBox") or {}
    return Fragment(
        text=block["Text"],
        confidence=_clamp(_as_float(block.get("Confidence"), "Confidence"), 0.0, 100.0),
        top=_clamp(_as_float(bbox.get("Top"), "Top")),
        left=_clamp(_as_float(bbox.get("Left"), "Left")),
        width=_clamp(_as_float(bbox.get("Width"), "Width")),
        height=_clamp(_as_float(bbox.get("Height"), "Height")),
    )


def _fragment_from_line(line: dict[str, Any]) -> Fragment:
    return Fragment(
        text=line["text"],
        confidence=_clamp(_as_float(line.get("confidence"), "confidence"), 0.0, 100.0),
        top=_clamp(_as_float(line.get("top"), "top")),
        left=_clamp(_as_float(line.get("left"), "left")),
        width=_clamp(_as_float(line.get("width"), "width")),
        height=_clamp(_as_float(line.get("height"), "height")),
    )


def transform_textract_result(raw_result: Any, source: str = "") -> OcrDocument:
    """
    Transform an OCR payload into an OcrDocument.

    Fragments keep the provider's order; the parser sorts them itself.

    Raises:
        OcrDocumentError: If the payload is neither a Textract document nor
            the simplified lines shape.
    """
    if not isinstance(raw_result, dict):
        raise OcrDocumentError("OCR payload must be a JSON object")

    fragments: list[Fragment] = []
    if "Blocks" in raw_result:
        blocks = raw_result["Blocks"]
        if not isinstance(blocks, list):
            raise OcrDocumentError("'Blocks' must be a list")
        for block in blocks:
            if not isinstance(block, dict):
                raise OcrDocumentError("Every Textract block must be an object")
            text = block.get("Text")
            if block.get("BlockType") != "LINE" or not isinstance(text, str) or not text:
                continue
            fragments.append(_fragment_from_block(block))
        metadata = raw_result.get("DocumentMetadata") or {}
        page_count = _page_count(metadata.get("Pages", 1)) if isinstance(metadata, dict) else 1
    elif "lines" in raw_result:
        lines = raw_result["lines"]
        if not isinstance(lines, list):
            raise OcrDocumentError("'lines' must be a list")
        for line in lines:
            if not isinstance(line, dict):
                raise OcrDocumentError("Every line must be an object")
            text = line.get("text")
            if not isinstance(text, str) or not text:
                continue
            fragments.append(_fragment_from_line(line))
        page_count = _page_count(raw_result.get("page_count", 1))
    else:
        raise OcrDocumentError("Expected a Textract document with 'Blocks' or a 'lines' list")

    return OcrDocument(fragments=tuple(fragments), page_count=page_count, source=source)


def document_summary(document: OcrDocument) -> dict[str, Any]:
    """Return the simplified, reading-ordered view of a document."""
    lines = [
        {
            "text": fragment.text,
            "confidence": fragment.confidence,
            "top": fragment.top,
            "left": fragment.left,
        }
        for fragment in order_fragments(document.fragments)
    ]
    return {
        "page_count": document.page_count,
        "lines": lines,
        "total_lines": len(lines),
        "file_path": document.source,
    }
