"""Command line front-end for the two-pass linker.

Usage:
  twopass input.txt
  twopass --json -o report.json < input.txt
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .linker import DEFAULT_SYMBOL_LENGTH, LinkerConfig, link_text
from .records import FormatError
from .report import format_json, format_report

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="twopass", description="Two-pass linker")
    ap.add_argument("input", nargs="?", default="-", help="Linker input file (default: stdin)")
    ap.add_argument("-o", "--output", help="Write the report to this file instead of stdout")
    ap.add_argument("--json", action="store_true", help="Emit the report as JSON")
    ap.add_argument(
        "--max-symbol-length",
        type=int,
        default=DEFAULT_SYMBOL_LENGTH,
        help="Nominal symbol name limit (default: %(default)s)",
    )
    ap.add_argument(
        "--strict-symbols",
        action="store_true",
        help="Reject symbol names longer than the limit instead of warning",
    )
    ap.add_argument("--log-level", default="WARNING")
    ap.add_argument("--log-file")
    return ap


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.log_file:
        Path(args.log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=args.log_file,
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="[%(asctime)s] %(levelname)s: %(message)s",
        force=True,
    )

    config = LinkerConfig(
        max_symbol_length=args.max_symbol_length,
        strict_symbol_names=args.strict_symbols,
    )
    try:
        text = _read_input(args.input)
        result = link_text(text, config)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except FormatError as exc:
        logger.debug("input rejected", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    rendered = format_json(result) + "\n" if args.json else format_report(result)
    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        print(f"Wrote {output}")
    else:
        sys.stdout.write(rendered)
    return 0


if __name__ == "__main__":
    sys.exit(main())
