"""Internal date range implementation.

This module is not part of the public API. Import
:class:`~datespan.DateRange` from ``datespan`` directly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any, ClassVar, Union

from dateutil.relativedelta import relativedelta

from datespan._errors import (
    BoundaryError,
    NonOverlappingError,
    NullInputError,
    OrderError,
    ParseFormatError,
)
from datespan._period import (
    Duration,
    _check_duration,
    _format_days,
    _is_negative,
    _is_period_literal,
    _minus,
    _parse_date,
    _parse_period,
    _plus,
)

if TYPE_CHECKING:
    import pandas

logger = logging.getLogger(__name__)

MIN = date.min
MAX = date.max

_ONE_DAY = timedelta(days=1)

Bound = Union[date, Callable[[date], date]]


def _check_date(value: Any, name: str) -> date:
    # datetime is a date subclass, but ranges carry no time-of-day.
    if isinstance(value, datetime) or not isinstance(value, date):
        raise TypeError(f"{name} must be a datetime.date, got {type(value).__name__}")
    return value


class DateRange:
    """An immutable span of calendar dates.

    The start is inclusive and the end is exclusive, except that an end of
    :data:`MAX` means the range is unbounded above and contains ``MAX``
    itself. A range whose start equals its end is empty, but still marks
    a position on the calendar for ordering and overlap checks.

    Ranges compare and hash by ``(start, end)`` and are safe to use as
    dict keys or set members::

        >>> r = DateRange.parse("2012-07-28/2012-07-31")
        >>> r.end_inclusive
        datetime.date(2012, 7, 30)
        >>> date(2012, 7, 31) in r
        False

    :param start: First date of the range (inclusive).
    :param end: Date after the last date of the range (exclusive).
    :raises OrderError: If *start* is after *end*.
    :raises TypeError: If either bound is not a ``datetime.date``.
    """

    __slots__ = ("_start", "_end")

    ALL: ClassVar[DateRange]

    def __init__(self, start: date, end: date):
        _check_date(start, "start")
        _check_date(end, "end")
        if start > end:
            raise OrderError(
                f"Range start {start.isoformat()} is after end {end.isoformat()}"
            )
        self._start = start
        self._end = end

    # --- Construction ---

    @classmethod
    def of(cls, start: date, end: date | Duration) -> DateRange:
        """Create a range from a start date and an exclusive end or a duration.

        :param start: First date of the range (inclusive).
        :param end: Exclusive end date, or a ``timedelta``/``relativedelta``
            measured from *start*.
        :return: The new range.
        :raises OrderError: If the end is before *start* or the duration is
            negative.
        :raises BoundaryError: If *start* plus the duration is past ``MAX``.
        """
        if isinstance(end, (timedelta, relativedelta)):
            _check_date(start, "start")
            _check_duration(end)
            if _is_negative(end):
                raise OrderError(f"Duration must not be negative, got {end!r}")
            return cls(start, _plus(start, end))
        return cls(start, end)

    @classmethod
    def of_closed(cls, start: date, end_inclusive: date) -> DateRange:
        """Create a range from two inclusive bounds.

        An *end_inclusive* of ``MAX`` gives a range unbounded above.

        :param start: First date of the range (inclusive).
        :param end_inclusive: Last date of the range (inclusive).
        :return: The new range.
        :raises OrderError: If *end_inclusive* is before *start*.
        :raises BoundaryError: If *end_inclusive* is the day before ``MAX``,
            whose exclusive end would be the unbounded sentinel.
        """
        _check_date(start, "start")
        _check_date(end_inclusive, "end_inclusive")
        if end_inclusive < start:
            raise OrderError(
                f"Range start {start.isoformat()} is after "
                f"inclusive end {end_inclusive.isoformat()}"
            )
        if end_inclusive == MAX:
            return cls(start, MAX)
        end = end_inclusive + _ONE_DAY
        if end == MAX:
            raise BoundaryError(
                f"Inclusive end {end_inclusive.isoformat()} cannot be represented; "
                f"use {MAX.isoformat()} for a range without an upper bound"
            )
        return cls(start, end)

    @classmethod
    def of_empty(cls, at: date) -> DateRange:
        """Create the empty range positioned at *at*."""
        return cls(at, at)

    @classmethod
    def of_unbounded_start(cls, end: date) -> DateRange:
        """Create a range from ``MIN`` up to the exclusive *end*."""
        return cls(MIN, end)

    @classmethod
    def of_unbounded_end(cls, start: date) -> DateRange:
        """Create a range from *start* with no upper bound."""
        return cls(start, MAX)

    @classmethod
    def parse(cls, text: str) -> DateRange:
        """Parse ``"start/end"`` text.

        Either side may be an ISO-8601 period (``P2D``, ``p1w``, ``P1Y2M``)
        instead of a date, as long as the other side is a date:

        - ``"2012-07-27/2012-07-29"``: both bounds given.
        - ``"P2D/2012-07-29"``: the period is counted back from the end.
        - ``"2012-07-27/P2D"``: the period is counted forward from the start.

        :param text: Text to parse.
        :return: The parsed range.
        :raises NullInputError: If *text* is ``None``.
        :raises ParseFormatError: If *text* does not match the grammar.
        :raises OrderError: If the resolved start is after the end.
        :raises BoundaryError: If applying the period leaves the
            supported dates.
        """
        if text is None:
            raise NullInputError("Range text must not be None")
        if not isinstance(text, str):
            raise TypeError(f"Range text must be a str, got {type(text).__name__}")

        left, sep, right = text.partition("/")
        if not sep or not left or not right:
            raise ParseFormatError(
                f"Invalid range format: expected 'start/end', got {text!r}", text
            )

        left_is_period = _is_period_literal(left)
        right_is_period = _is_period_literal(right)
        if left_is_period and right_is_period:
            raise ParseFormatError(
                f"Invalid range format: {text!r} needs a date on at least one side",
                text,
            )

        try:
            if left_is_period:
                period = _parse_period(left)
                end = _parse_date(right)
            elif right_is_period:
                start = _parse_date(left)
                period = _parse_period(right)
            else:
                start = _parse_date(left)
                end = _parse_date(right)
        except ValueError as err:
            raise ParseFormatError(
                f"Invalid range format: {text!r} ({err})", text
            ) from err

        if left_is_period:
            logger.debug(f"Resolving {text!r} backwards from {end.isoformat()}")
            return cls(_minus(end, period), end)
        if right_is_period:
            logger.debug(f"Resolving {text!r} forwards from {start.isoformat()}")
            return cls.of(start, period)
        return cls(start, end)

    # --- Accessors ---

    @property
    def start(self) -> date:
        """First date of the range (inclusive)."""
        return self._start

    @property
    def end(self) -> date:
        """Exclusive end of the range, or ``MAX`` when unbounded above."""
        return self._end

    @property
    def end_inclusive(self) -> date:
        """Last date of the range.

        ``MAX`` for a range unbounded above. For an empty range this is the
        day before :attr:`start` (``MIN`` for the empty range at ``MIN``).
        """
        if self._end == MAX:
            return MAX
        if self._end == MIN:
            return MIN
        return self._end - _ONE_DAY

    @property
    def is_empty(self) -> bool:
        """True if the range contains no dates."""
        return self._start == self._end

    @property
    def is_unbounded_start(self) -> bool:
        """True if the range starts at ``MIN``."""
        return self._start == MIN

    @property
    def is_unbounded_end(self) -> bool:
        """True if the range ends at ``MAX``."""
        return self._end == MAX

    def with_start(self, start: Bound) -> DateRange:
        """Return a copy with a different start.

        :param start: New start date, or a function mapping the current
            start to the new one.
        :return: The adjusted range.
        :raises OrderError: If the new start is after the end.
        """
        value = start(self._start) if callable(start) else start
        return type(self)(value, self._end)

    def with_end(self, end: Bound) -> DateRange:
        """Return a copy with a different exclusive end.

        :param end: New end date, or a function mapping the current end
            to the new one.
        :return: The adjusted range.
        :raises OrderError: If the new end is before the start.
        """
        value = end(self._end) if callable(end) else end
        return type(self)(self._start, value)

    # --- Date predicates ---

    def contains(self, value: date) -> bool:
        """True if *value* is one of the dates in the range."""
        if self.is_empty:
            return False
        return self._start <= value and (value < self._end or self._end == MAX)

    def is_before(self, other: date | DateRange) -> bool:
        """True if the whole range comes before *other*.

        An empty range is before a date strictly after its position, and
        two empty ranges at the same position are not ordered.

        :param other: A date or another range.
        """
        if isinstance(other, DateRange):
            if self.is_empty and other.is_empty and self._start == other._start:
                return False
            return self._end <= other._start
        if self.is_empty:
            return self._start < other
        return self._end <= other

    def is_after(self, other: date | DateRange) -> bool:
        """True if the whole range comes after *other*.

        :param other: A date or another range.
        """
        if isinstance(other, DateRange):
            if self.is_empty and other.is_empty and self._start == other._start:
                return False
            return self._start >= other._end
        return self._start > other

    # --- Range predicates ---

    def encloses(self, other: DateRange) -> bool:
        """True if every date of *other* lies within this range.

        An empty *other* is enclosed only if its position is strictly
        inside this range, so an empty range at this range's exclusive
        end is not enclosed.
        """
        return (
            self._start <= other._start
            and other._start < self._end
            and other._end <= self._end
        )

    def abuts(self, other: DateRange) -> bool:
        """True if one range ends exactly where the other starts.

        The comparison is on the raw bounds, so a range unbounded above
        abuts the empty range at ``MAX`` even though it also overlaps it.
        """
        return self._end == other._start or other._end == self._start

    def overlaps(self, other: DateRange) -> bool:
        """True if the ranges share at least one date.

        An empty range overlaps a non-empty range that contains its
        position, and never overlaps another empty range.
        """
        if self.is_empty:
            return other.contains(self._start)
        if other.is_empty:
            return self.contains(other._start)
        return self._start < other._end and other._start < self._end

    def is_connected(self, other: DateRange) -> bool:
        """True if the ranges overlap or abut, so their union is a range."""
        return self.overlaps(other) or self.abuts(other)

    # --- Range algebra ---

    def intersection(self, other: DateRange) -> DateRange:
        """Return the dates common to both ranges.

        :raises NonOverlappingError: If the ranges do not overlap.
        """
        if not self.overlaps(other):
            raise NonOverlappingError(
                f"Ranges {self} and {other} do not overlap"
            )
        return type(self)(max(self._start, other._start), min(self._end, other._end))

    def union(self, other: DateRange) -> DateRange:
        """Return the range covering both ranges.

        :raises NonOverlappingError: If the ranges neither overlap nor abut.
        """
        if not self.is_connected(other):
            raise NonOverlappingError(
                f"Ranges {self} and {other} neither overlap nor abut"
            )
        return self.span(other)

    def span(self, other: DateRange) -> DateRange:
        """Return the smallest range enclosing both ranges, gaps included."""
        return type(self)(min(self._start, other._start), max(self._end, other._end))

    # --- Metrics and iteration ---

    def length_in_days(self) -> int:
        """Number of dates in the range, counting ``MAX`` when unbounded above."""
        if self.is_empty:
            return 0
        days = (self._end - self._start).days
        return days + 1 if self.is_unbounded_end else days

    def to_period(self) -> timedelta:
        """The range length as a ``timedelta`` of whole days."""
        return timedelta(days=self.length_in_days())

    def stream(self) -> Iterator[date]:
        """Yield every date in the range, in order.

        Each call returns a new iterator. Dates are produced lazily, so a
        range unbounded above can be iterated partially without
        materializing it.
        """
        if self.is_empty:
            return iter(())
        first = self._start.toordinal()
        last = self.end_inclusive.toordinal()
        return (date.fromordinal(n) for n in range(first, last + 1))

    def to_dataframe(self) -> pandas.DataFrame:
        """Convert the range to a :class:`pandas.DataFrame`, one row per date.

        Columns are ``date`` (``datetime.date`` objects) and
        ``iso_weekday`` (1 = Monday .. 7 = Sunday).

        Requires ``pandas`` (``pip install datespan[pandas]``).

        :return: DataFrame of the dates in the range.
        :raises ImportError: If pandas is not installed.
        :raises OverflowError: If the range is unbounded at either end.
        """
        try:
            import pandas as pd
        except ImportError as err:
            raise ImportError(
                "pandas is required for to_dataframe(). "
                "Install it with: pip install datespan[pandas]"
            ) from err

        if self.is_unbounded_start or self.is_unbounded_end:
            raise OverflowError(f"Cannot materialize unbounded range {self}")

        dates = list(self.stream())
        return pd.DataFrame(
            {"date": dates, "iso_weekday": [d.isoweekday() for d in dates]},
            columns=["date", "iso_weekday"],
        )

    def describe(self) -> dict[str, Any]:
        """Summarize the range as a JSON-serializable dict."""
        return {
            "range": str(self),
            "start": self._start.isoformat(),
            "end": self._end.isoformat(),
            "end_inclusive": self.end_inclusive.isoformat(),
            "length_in_days": self.length_in_days(),
            "period": _format_days(self.length_in_days()),
            "is_empty": self.is_empty,
            "is_unbounded_start": self.is_unbounded_start,
            "is_unbounded_end": self.is_unbounded_end,
        }

    # --- Dunder protocol ---

    def __contains__(self, item: object) -> bool:
        if isinstance(item, datetime) or not isinstance(item, date):
            return False
        return self.contains(item)

    def __iter__(self) -> Iterator[date]:
        return self.stream()

    def __len__(self) -> int:
        return self.length_in_days()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateRange):
            return NotImplemented
        return self._start == other._start and self._end == other._end

    def __hash__(self) -> int:
        return hash((self._start, self._end))

    def __reduce__(self) -> tuple[type[DateRange], tuple[date, date]]:
        return (type(self), (self._start, self._end))

    def __str__(self) -> str:
        return f"{self._start.isoformat()}/{self._end.isoformat()}"

    def __repr__(self) -> str:
        return f"DateRange({self._start!r}, {self._end!r})"


DateRange.ALL = DateRange(MIN, MAX)
