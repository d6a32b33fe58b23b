"""Internal CLI entry point for the ``datespan`` command.

This module is not part of the public API and may change without notice.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from itertools import islice
from typing import Any, NoReturn

from datespan._errors import DateRangeError
from datespan._period import _parse_date
from datespan._range import DateRange

logger = logging.getLogger(__name__)

DEFAULT_MAX_DATES = 366


def _fail(message: str) -> NoReturn:
    print(json.dumps({"error": message}, indent=4))
    sys.exit(1)


def _max_dates(override: int | None) -> int:
    """Resolve the ``--dates`` cap from the flag or ``DATESPAN_MAX_DATES``."""
    if override is not None:
        value = override
    else:
        raw = os.getenv("DATESPAN_MAX_DATES") or str(DEFAULT_MAX_DATES)
        try:
            value = int(raw)
        except ValueError:
            _fail(f"Invalid DATESPAN_MAX_DATES: expected an integer, got {raw!r}")
    if value < 0:
        _fail(f"Maximum number of dates must not be negative, got {value}")
    return value


def _evaluate(args: argparse.Namespace, max_dates: int) -> dict[str, Any]:
    date_range = DateRange.parse(args.range)
    if args.closed:
        date_range = DateRange.of_closed(date_range.start, date_range.end)

    result = date_range.describe()
    if args.contains:
        result["contains"] = date_range.contains(_parse_date(args.contains))
    if args.overlaps:
        result["overlaps"] = date_range.overlaps(DateRange.parse(args.overlaps))
    if args.intersection:
        other = DateRange.parse(args.intersection)
        result["intersection"] = str(date_range.intersection(other))
    if args.union:
        result["union"] = str(date_range.union(DateRange.parse(args.union)))
    if args.dates:
        result["dates"] = [d.isoformat() for d in islice(date_range.stream(), max_dates)]
        if date_range.length_in_days() > max_dates:
            logger.warning(
                f"Range {date_range} has {date_range.length_in_days()} dates, "
                f"showing the first {max_dates}"
            )
            result["truncated"] = True
    return result


def cli():
    """CLI entry point for the ``datespan`` command.

    Reads ``DATESPAN_MAX_DATES`` from the environment to cap ``--dates``
    output. If ``python-dotenv`` is installed, also loads ``.env`` from
    the current directory.
    """
    try:
        from dotenv import load_dotenv

        load_dotenv()
    except ImportError:
        pass

    parser = argparse.ArgumentParser(description="Calendar date range calculator")
    parser.add_argument(
        "range", help="Range text (e.g., 2012-07-28/2012-07-31 or P2D/2012-07-29)"
    )
    parser.add_argument(
        "--closed",
        action="store_true",
        help="Treat the end of RANGE as inclusive",
    )
    parser.add_argument("--contains", metavar="DATE", help="Check whether DATE is in RANGE")
    parser.add_argument("--overlaps", metavar="RANGE", help="Check overlap with RANGE")
    parser.add_argument(
        "--intersection", metavar="RANGE", help="Intersect with RANGE"
    )
    parser.add_argument("--union", metavar="RANGE", help="Union with RANGE")
    parser.add_argument(
        "--dates", action="store_true", help="List the dates in RANGE"
    )
    parser.add_argument(
        "--max-dates",
        type=int,
        default=None,
        help=f"Cap for --dates (default: $DATESPAN_MAX_DATES or {DEFAULT_MAX_DATES})",
    )

    args = parser.parse_args()
    max_dates = _max_dates(args.max_dates)

    try:
        result = _evaluate(args, max_dates)
    except (DateRangeError, ValueError) as err:
        _fail(str(err))

    print(json.dumps(result, indent=4))


if __name__ == "__main__":
    cli()
