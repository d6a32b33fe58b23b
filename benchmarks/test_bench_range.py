"""Benchmarks for DateRange: pure CPU.

Measures text parsing, the pairwise predicate algebra, and date
streaming. These are the hot paths for callers that scan calendars
of bookings or materialize spans day by day.

Run:
    pytest benchmarks/test_bench_range.py -v --benchmark-sort=mean
"""

from datetime import date
from itertools import islice

from datespan import DateRange

# ---------------------------------------------------------------------------
# Parsing and formatting
# ---------------------------------------------------------------------------


class TestParsing:
    """Benchmark DateRange.parse across the three text forms."""

    def test_parse_all(self, benchmark, range_texts):
        benchmark(lambda: [DateRange.parse(text) for text in range_texts])

    def test_parse_dates_only(self, benchmark):
        benchmark(DateRange.parse, "2012-07-28/2012-07-31")

    def test_parse_period_first(self, benchmark):
        benchmark(DateRange.parse, "P2D/2012-07-29")

    def test_str(self, benchmark, ranges):
        benchmark(lambda: [str(r) for r in ranges])


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


class TestPredicates:
    """Benchmark pairwise overlap checks, the typical conflict scan."""

    def test_overlaps_pairwise(self, benchmark, ranges):
        sample = ranges[:50]
        benchmark(lambda: sum(a.overlaps(b) for a in sample for b in sample))

    def test_contains(self, benchmark, ranges):
        probe = date(2020, 6, 1)
        benchmark(lambda: [r.contains(probe) for r in ranges])

    def test_union_chain(self, benchmark, ranges):
        """Merge consecutive ranges until a gap appears."""

        def merge():
            merged = ranges[0]
            for r in ranges[1:]:
                if not merged.is_connected(r):
                    break
                merged = merged.union(r)
            return merged

        benchmark(merge)


# ---------------------------------------------------------------------------
# Streaming
# ---------------------------------------------------------------------------


class TestStream:
    """Benchmark day-by-day iteration."""

    def test_stream_year(self, benchmark):
        year = DateRange.of(date(2020, 1, 1), date(2021, 1, 1))
        benchmark(lambda: list(year.stream()))

    def test_stream_unbounded_prefix(self, benchmark):
        """Lazy iteration means a prefix of ALL costs the same as a bounded range."""
        benchmark(lambda: list(islice(DateRange.ALL.stream(), 366)))
