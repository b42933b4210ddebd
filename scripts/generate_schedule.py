"""Print a class schedule table for a date range."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from cronograma.config import load_settings
from cronograma.dates import InvalidDateError, parse_date
from cronograma.holidays import RegistryUnavailable
from cronograma.schedule import generate_schedule
from cronograma.table import render_table, rows_to_csv


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--days",
        required=True,
        help='Comma-separated weekdays, e.g. "monday, wednesday"',
    )
    parser.add_argument("--start", required=True, help="First day (inclusive)")
    parser.add_argument("--end", required=True, help="Last day (exclusive)")
    parser.add_argument(
        "--repeat-month",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show the month on every row (default from CRONOGRAMA_REPEAT_MONTH)",
    )
    parser.add_argument("--holidays", help="Holiday registry path or URL")
    parser.add_argument("--section", help="Holiday section heading")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of ignoring an unreadable holiday registry",
    )
    parser.add_argument("--format", choices=("text", "csv"), default="text")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    try:
        start = parse_date(args.start)
        end = parse_date(args.end)
    except InvalidDateError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    settings = replace(
        settings,
        holidays_source=args.holidays or settings.holidays_source,
        holidays_section=args.section or settings.holidays_section,
        repeat_month=(
            settings.repeat_month if args.repeat_month is None else args.repeat_month
        ),
    )
    try:
        rows = generate_schedule(
            args.days,
            start,
            end,
            repeat_month=settings.repeat_month,
            resolver=settings.make_resolver(strict=args.strict),
        )
    except RegistryUnavailable as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(rows_to_csv(rows) if args.format == "csv" else render_table(rows))
    return 0


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    sys.exit(main())
