"""Immutable calendar date ranges with overlap, union and ordering algebra."""

from ._errors import (
    BoundaryError,
    DateRangeError,
    NonOverlappingError,
    NullInputError,
    OrderError,
    ParseFormatError,
)
from ._range import MAX, MIN, DateRange

__all__ = [
    "DateRange",
    "MIN",
    "MAX",
    "DateRangeError",
    "OrderError",
    "ParseFormatError",
    "NullInputError",
    "NonOverlappingError",
    "BoundaryError",
    "__version__",
]


def _get_version() -> str:
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("datespan")
    except PackageNotFoundError:
        return "unknown"


__version__ = _get_version()
del _get_version
