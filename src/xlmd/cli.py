from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .api import convert_file
from .errors import XlmdError
from .model import ConvertOptions
from .parser.delimited import parse_delimited
from .render_markdown import render_workbook_markdown, write_workbook_markdown

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convert between .xlsx workbooks and Markdown tables")
    parser.add_argument("input", type=Path, nargs="?", help="Input .xlsx or .md file")
    parser.add_argument("-o", "--output", type=Path, help="Output .md or .xlsx file")
    parser.add_argument(
        "--paste",
        action="store_true",
        help="Read tab- or comma-delimited rows from stdin and emit a Markdown table",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of skipping unreadable worksheets",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.paste:
        if args.input is not None:
            parser.error("--paste reads from stdin and takes no input file")
        return _run_paste(args.output)

    if args.input is None or args.output is None:
        parser.error("both an input file and -o/--output are required")

    options = ConvertOptions(strict_worksheets=args.strict)
    try:
        workbook = convert_file(args.input, args.output, options=options)
    except XlmdError as exc:
        print(f"xlmd: {exc}", file=sys.stderr)
        return 1

    logger.info("Converted %s -> %s (%d sheet(s))", args.input, args.output, len(workbook.sheets))
    return 0


def _run_paste(output: Path | None) -> int:
    sheet = parse_delimited(sys.stdin.read())
    if not sheet.rows:
        print("xlmd: no data received", file=sys.stderr)
        return 1

    if output is None:
        sys.stdout.write(render_workbook_markdown([sheet]))
        return 0
    try:
        write_workbook_markdown([sheet], output)
    except XlmdError as exc:
        print(f"xlmd: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
