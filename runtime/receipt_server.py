"""FastAPI server that reconstructs receipts from posted OCR JSON."""

import json
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from myprice import __version__
from myprice.receipt.ocr_helpers import OcrDocumentError, document_summary, transform_textract_result
from myprice.receipt.reconstruction import HeuristicReconstructor
from myprice.runtime.logging import get_logger
from myprice.runtime.settings import load_parser_settings

logger = get_logger(__name__)

SERVICE_NAME = "myprice-api"

app = FastAPI(title="Receipt Analyzer")


def _json_error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": True, "message": message}, status_code=status_code)


@app.get("/api/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": SERVICE_NAME, "version": __version__}


@app.post("/api/analyze")
async def analyze_receipt(request: Request) -> JSONResponse:
    """Reconstruct a receipt from a Textract document (or simplified lines) in the body."""
    body = await request.body()
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return _json_error(f"Invalid JSON: {e}", 400)

    try:
        document = transform_textract_result(payload, source="request")
    except OcrDocumentError as e:
        logger.info("Rejected OCR payload: %s", e)
        return _json_error(str(e), 400)

    try:
        settings = load_parser_settings()
    except ValueError as e:
        logger.error("Invalid parser config: %s", e)
        return _json_error(f"Invalid parser config: {e}", 500)

    reconstructor = HeuristicReconstructor(settings=settings)
    receipt = reconstructor.reconstruct(document)

    return JSONResponse(
        {
            "textract": document_summary(document),
            "receipt": receipt.to_dict(),
            "source": "request",
            "reconstructor": reconstructor.name,
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8080)
