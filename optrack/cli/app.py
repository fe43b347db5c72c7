"""Unified command line entry point using ``argparse``."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, TextIO

from optrack.formatting.trade_tables import legs_table, render, trade_table
from optrack.logutils import logger, setup_logging
from optrack.models import Trade
from optrack.parsing.result import ParseFailure
from optrack.parsing.trade_parser import TradeParser


def _read_lines(stream: TextIO) -> list[str]:
    return [line.strip() for line in stream if line.strip()]


def _print_trade(result: Trade, as_json: bool, out: TextIO) -> None:
    if as_json:
        out.write(json.dumps(result.to_dict(), indent=2) + "\n")
        return
    out.write(render(trade_table(result)) + "\n\n")
    out.write(render(legs_table(result)) + "\n\n")


def cmd_parse(inputs: Iterable[str], *, as_json: bool = False, out: TextIO | None = None) -> int:
    """Parse each input string and print the trade or a short error."""
    out = out or sys.stdout
    parser = TradeParser()
    failed = 0
    for raw in inputs:
        result = parser.parse(raw)
        if isinstance(result, ParseFailure):
            failed += 1
            out.write(f"❌ Could not parse trade ({result.message}): {raw}\n")
            continue
        _print_trade(result, as_json, out)
    return 1 if failed else 0


def cmd_batch(path: Path, *, out: TextIO | None = None) -> int:
    """Parse every non-empty line of ``path`` and report PASS/FAIL per line."""
    out = out or sys.stdout
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = _read_lines(f)
    except OSError as exc:
        logger.error(f"Cannot read {path}: {exc}")
        return 2

    parser = TradeParser()
    passed = failed = 0
    for raw in lines:
        result = parser.parse(raw)
        if isinstance(result, ParseFailure):
            failed += 1
            out.write(f"FAIL: {raw[:50]} ({result.reason.value})\n")
        else:
            passed += 1
            out.write(f"PASS: {result.symbol} {result.spread_type.value}\n")
    out.write(f"\n{passed} passed, {failed} failed\n")
    logger.info(f"Batch {path}: {passed} passed, {failed} failed")
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Options trade string parser")
    sub = parser.add_subparsers(dest="cmd")

    sub_parse = sub.add_parser("parse", help="Parse one or more order strings")
    sub_parse.add_argument(
        "trades", nargs="*", help="Order strings; read from stdin when omitted"
    )
    sub_parse.add_argument("--json", action="store_true", help="Print trade records as JSON")
    sub_parse.set_defaults(
        func=lambda a: cmd_parse(
            a.trades or _read_lines(sys.stdin), as_json=a.json
        )
    )

    sub_batch = sub.add_parser("batch", help="Check a file with one order string per line")
    sub_batch.add_argument("path", type=Path, help="Path to the text file")
    sub_batch.set_defaults(func=lambda a: cmd_batch(a.path))

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    setup_logging()
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
