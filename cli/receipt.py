"""Receipt command handlers used by the unified CLI."""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from myprice.runtime import get_logger

logger = get_logger(__name__)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI server for receipt analysis."""
    import uvicorn

    from myprice.runtime import receipt_server as server

    print(f"Starting receipt server on {args.host}:{args.port}")
    print(f"Analyze endpoint: http://{args.host}:{args.port}/api/analyze")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)


def cmd_parse(args: argparse.Namespace) -> None:
    """Reconstruct a receipt from an OCR JSON file and print it."""
    from myprice.application.receipts.parse import ReceiptParseRequest, run_receipt_parse
    from myprice.receipt.formatter import format_receipt_json, format_receipt_summary
    from myprice.receipt.reconstruction import HeuristicReconstructor
    from myprice.runtime import load_parser_settings

    try:
        settings = load_parser_settings(args.config)
    except ValueError as e:
        logger.error("Invalid parser config: %s", e)
        print(f"Error: invalid parser config: {e}")
        sys.exit(1)

    if args.row_tolerance is not None:
        settings = replace(settings, row_tolerance=args.row_tolerance)
    if args.check_arithmetic:
        settings = replace(settings, check_arithmetic=True)

    result = run_receipt_parse(
        ReceiptParseRequest(
            ocr_path=Path(args.ocr_json),
            reconstructor=HeuristicReconstructor(settings=settings),
            save=args.save,
            output_path=Path(args.output) if args.output else None,
        )
    )

    if result.status in ("file_not_found", "invalid_ocr_json"):
        logger.error("%s", result.error)
        print(f"Error: {result.error}")
        sys.exit(1)

    receipt = result.receipt
    if receipt is None:
        print("Parse failed: missing receipt output.")
        sys.exit(1)

    if args.json:
        print(format_receipt_json(receipt))
    else:
        print("=" * 60)
        print("PARSED RECEIPT")
        print("=" * 60)
        print(format_receipt_summary(receipt))
        print("=" * 60)

    if result.output_path is not None:
        # stderr keeps --json output pipeable
        print(f"Saved receipt to: {result.output_path}", file=sys.stderr)
