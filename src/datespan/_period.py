"""Internal ISO-8601 period utilities for range text and date arithmetic.

This module is not part of the public API and may change without notice.
"""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Union

from dateutil.relativedelta import relativedelta

from datespan._errors import BoundaryError

Duration = Union[timedelta, relativedelta]

# Optional signed years, months, weeks and days, e.g. "P1Y2M3D", "p2w", "P-2D".
_PERIOD_RE = re.compile(
    r"P"
    r"(?:(?P<years>[-+]?[0-9]+)Y)?"
    r"(?:(?P<months>[-+]?[0-9]+)M)?"
    r"(?:(?P<weeks>[-+]?[0-9]+)W)?"
    r"(?:(?P<days>[-+]?[0-9]+)D)?",
    re.IGNORECASE,
)

# Extended calendar date only, e.g. "2012-07-27". No basic or week-date forms.
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

_TIME_FIELDS = ("hours", "minutes", "seconds", "microseconds")
_ABSOLUTE_FIELDS = ("year", "month", "day", "weekday", "hour", "minute", "second", "microsecond")


def _is_period_literal(token: str) -> bool:
    return token[:1] in ("P", "p")


def _parse_date(text: str) -> date:
    """Parse an ISO-8601 calendar date written as ``YYYY-MM-DD``.

    :raises ValueError: If *text* is in any other form or is not a real date.
    """
    if _DATE_RE.fullmatch(text) is None:
        raise ValueError(f"Invalid date format: {text!r}, expected YYYY-MM-DD")
    return date.fromisoformat(text)


def _parse_period(text: str) -> relativedelta:
    """Parse an ISO-8601 date-based period such as ``"P2D"`` or ``"P1Y2M"``.

    :param text: Period literal, case-insensitive.
    :return: Equivalent :class:`~dateutil.relativedelta.relativedelta`.
    :raises ValueError: If *text* is not a valid period literal.
    """
    match = _PERIOD_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"Invalid period format: {text!r}")
    parts = match.group("years", "months", "weeks", "days")
    if all(part is None for part in parts):
        raise ValueError(f"Invalid period format: {text!r} has no components")

    years, months, weeks, days = (int(part) if part else 0 for part in parts)
    return relativedelta(years=years, months=months, days=weeks * 7 + days)


def _format_days(days: int) -> str:
    """Format a day count as an ISO-8601 period, e.g. ``3`` -> ``"P3D"``."""
    return f"P{days}D"


def _check_duration(duration: Duration) -> None:
    """Reject durations that carry anything finer than whole days.

    :raises TypeError: If *duration* is not a ``timedelta`` or ``relativedelta``.
    :raises ValueError: If *duration* has time-of-day or absolute fields.
    """
    if isinstance(duration, timedelta):
        if duration.seconds or duration.microseconds:
            raise ValueError(f"Duration must be a whole number of days, got {duration!r}")
        return
    if isinstance(duration, relativedelta):
        if any(getattr(duration, name) for name in _TIME_FIELDS):
            raise ValueError(f"Duration must not have time-of-day fields, got {duration!r}")
        if any(getattr(duration, name) is not None for name in _ABSOLUTE_FIELDS):
            raise ValueError(f"Duration must be relative only, got {duration!r}")
        return
    raise TypeError(
        f"Duration must be a timedelta or relativedelta, got {type(duration).__name__}"
    )


def _is_negative(duration: Duration) -> bool:
    """True if any date component of *duration* is negative."""
    if isinstance(duration, timedelta):
        return duration.days < 0
    return duration.years < 0 or duration.months < 0 or duration.days < 0


def _plus(value: date, duration: Duration) -> date:
    """Add *duration* to *value*, raising :class:`BoundaryError` on overflow."""
    try:
        return value + duration
    except (OverflowError, ValueError) as err:
        raise BoundaryError(
            f"{value.isoformat()} plus {duration!r} is outside the supported dates"
        ) from err


def _minus(value: date, duration: Duration) -> date:
    """Subtract *duration* from *value*, raising :class:`BoundaryError` on overflow."""
    try:
        return value - duration
    except (OverflowError, ValueError) as err:
        raise BoundaryError(
            f"{value.isoformat()} minus {duration!r} is outside the supported dates"
        ) from err
