#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_legacy_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Normalize command handlers that call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Receipt reconstruction CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <ocr_json>           Reconstruct a receipt from Textract/OCR JSON
  serve [--host] [--port]    Start the receipt analysis server

Notes:
  output/ = receipts written with --save
  config/parser.toml = optional [parser] settings
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Reconstruct a receipt from OCR JSON")
    parse_parser.add_argument("ocr_json", help="Path to Textract JSON or simplified lines JSON")
    output_group = parse_parser.add_mutually_exclusive_group()
    output_group.add_argument("-o", "--output", default=None, help="Write receipt JSON to this path")
    output_group.add_argument("--save", action="store_true", help="Write receipt JSON into output/")
    parse_parser.add_argument("--json", action="store_true", help="Print receipt as JSON instead of a summary")
    parse_parser.add_argument(
        "--row-tolerance",
        type=float,
        default=None,
        help="Treat fragments within this vertical distance as one row (default: 0, strict order)",
    )
    parse_parser.add_argument(
        "--check-arithmetic",
        action="store_true",
        help="Report anomalies when subtotal, tax, total and item prices disagree",
    )
    parse_parser.add_argument("--config", default=None, help="Parser settings TOML (default: config/parser.toml)")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start receipt analysis server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "parse":
        from myprice.cli.receipt import cmd_parse

        return _run_legacy_command(cmd_parse, args)
    elif args.command == "serve":
        from myprice.cli.receipt import cmd_serve

        return _run_legacy_command(cmd_serve, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
