"""Internal exception hierarchy.

This module is not part of the public API. Import the exceptions
from ``datespan`` directly.
"""

from __future__ import annotations


class DateRangeError(Exception):
    """Base class for every error raised by ``datespan``."""


class OrderError(DateRangeError, ValueError):
    """A range would start after it ends, or a duration is negative."""


class ParseFormatError(DateRangeError, ValueError):
    """Text does not match the ``start/end`` grammar.

    :param message: Human readable description.
    :param text: The text that failed to parse.
    """

    def __init__(self, message: str, text: str | None = None):
        super().__init__(message)
        self.text = text


class NullInputError(DateRangeError, TypeError):
    """``None`` was passed where range text was expected."""


class NonOverlappingError(DateRangeError, ValueError):
    """Two ranges are not connected, so the operation is undefined."""


class BoundaryError(DateRangeError, ValueError):
    """Date arithmetic would leave the supported ``MIN``..``MAX`` span."""
