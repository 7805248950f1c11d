"""Reading OCR JSON and writing reconstructed receipts.

Directory structure:
    output/
    └── <source stem>_receipt.json   - Reconstructed receipts
"""

import json
from pathlib import Path

from myprice.domain.receipt import OcrDocument, Receipt
from myprice.receipt.formatter import format_receipt_json
from myprice.receipt.ocr_helpers import OcrDocumentError, transform_textract_result
from myprice.runtime.logging import get_logger
from myprice.runtime.paths import get_paths

logger = get_logger(__name__)

OUTPUT_SUFFIX = "_receipt.json"


def load_ocr_json(path: Path) -> OcrDocument:
    """
    Read an OCR JSON file (Textract or simplified lines shape).

    Raises:
        OcrDocumentError: If the file cannot be read or is not a usable document.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise OcrDocumentError(f"Failed to read OCR file {path}: {e}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise OcrDocumentError(f"Failed to parse OCR JSON {path}: {e}") from e

    document = transform_textract_result(raw, source=str(path))
    logger.info("Loaded %d OCR lines from %s", len(document.fragments), path)
    return document


def generate_output_filename(source: str) -> str:
    """
    Generate the output filename for a receipt parsed from ``source``.

    Format: <source stem>_receipt.json. A Textract cache name like
    ``lunch_textract.json`` becomes ``lunch_receipt.json``.
    """
    stem = Path(source).stem if source else "receipt"
    stem = stem.removesuffix("_textract")
    stem = "".join(c if c.isalnum() or c in "-_" else "_" for c in stem).strip("_")
    return f"{stem or 'receipt'}{OUTPUT_SUFFIX}"


def write_receipt_json(receipt: Receipt, output_path: Path | None = None, source: str = "") -> Path:
    """
    Write a receipt as pretty-printed JSON.

    Args:
        receipt: The receipt to write
        output_path: Destination file. If None, writes into the project output/ dir
        source: Source document path, used to name the file when output_path is None

    Returns:
        Path to the written file
    """
    if output_path is None:
        paths = get_paths()
        paths.ensure_output_directory()
        output_path = paths.output / generate_output_filename(source)
    else:
        output_path.parent.mkdir(parents=True, exist_ok=True)

    content = format_receipt_json(receipt)
    output_path.write_text(content + "\n", encoding="utf-8")
    logger.info("Wrote receipt JSON to %s (%d bytes)", output_path, len(content) + 1)
    return output_path
