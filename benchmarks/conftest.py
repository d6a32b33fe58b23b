"""Shared fixtures for benchmarks: synthetic ranges at realistic sizes."""

from datetime import date, timedelta

import pytest

from datespan import DateRange

_ANCHOR = date(2020, 1, 1)


def make_ranges(n_ranges: int) -> list[DateRange]:
    """Simulate a calendar of n_ranges bookings, some touching, some overlapping."""
    return [
        DateRange.of(_ANCHOR + timedelta(days=i * 2), timedelta(days=(i % 5) + 2))
        for i in range(n_ranges)
    ]


def make_range_texts(n_ranges: int) -> list[str]:
    """Mix of date/date, period/date and date/period text forms."""
    texts = []
    for i, date_range in enumerate(make_ranges(n_ranges)):
        if i % 3 == 0:
            texts.append(str(date_range))
        elif i % 3 == 1:
            texts.append(f"P{date_range.length_in_days()}D/{date_range.end.isoformat()}")
        else:
            texts.append(f"{date_range.start.isoformat()}/p{date_range.length_in_days()}d")
    return texts


@pytest.fixture(params=[10, 100, 1000], ids=["10ranges", "100ranges", "1000ranges"])
def ranges(request):
    """Parametrized list-of-ranges fixture."""
    return make_ranges(request.param)


@pytest.fixture(params=[10, 100, 1000], ids=["10texts", "100texts", "1000texts"])
def range_texts(request):
    """Parametrized list-of-range-text fixture."""
    return make_range_texts(request.param)
