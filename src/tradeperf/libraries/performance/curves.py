"""Date-indexed profit curves.

A ProfitCurve maps calendar dates to PricePair values. Replay writes per-date
deltas into it; the cumulative views are derived afterwards for charting and
drawdown analysis.
"""

from datetime import date
from typing import Iterator

from tradeperf.libraries.performance.models import PricePair


class ProfitCurve:
    """
    Sparse date -> PricePair mapping.

    Indexing a date that has not been seen creates a zero pair in place, so
    replay code can accumulate without membership checks. Dates are never
    removed. Iteration is always in ascending date order regardless of the
    order in which dates were first touched.

    Example:
        >>> curve = ProfitCurve()
        >>> curve[date(2024, 1, 4)].add_market(10.0)
        >>> curve[date(2024, 1, 5)].add_market(-4.0)
        >>> [p.market for p in curve.accumulated()]
        [10.0, 6.0]
    """

    def __init__(self) -> None:
        self._points: dict[date, PricePair] = {}
        self._sorted_dates: list[date] | None = None

    def __getitem__(self, day: date) -> PricePair:
        pair = self._points.get(day)
        if pair is None:
            pair = PricePair()
            self._points[day] = pair
            self._sorted_dates = None
        return pair

    def get(self, day: date) -> PricePair | None:
        """Look up a date without materializing it."""
        return self._points.get(day)

    def __contains__(self, day: object) -> bool:
        return day in self._points

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[PricePair]:
        for day in self.dates:
            yield self._points[day]

    @property
    def dates(self) -> list[date]:
        """All dates in ascending order."""
        if self._sorted_dates is None:
            self._sorted_dates = sorted(self._points)
        return list(self._sorted_dates)

    def items(self) -> Iterator[tuple[date, PricePair]]:
        """(date, pair) tuples in ascending date order."""
        for day in self.dates:
            yield day, self._points[day]

    @property
    def first_date(self) -> date | None:
        dates = self.dates
        return dates[0] if dates else None

    @property
    def last_date(self) -> date | None:
        dates = self.dates
        return dates[-1] if dates else None

    def accumulated(self) -> "ProfitCurve":
        """
        Running total of both sides in date order.

        Returns:
            New curve where entry i is the sum of entries 0..i
        """
        result = ProfitCurve()
        total = PricePair()
        for day, pair in self.items():
            total = total + pair
            result._points[day] = total.copy()
        return result

    def book_accumulated(self) -> "ProfitCurve":
        """
        Running total of the book side only.

        The market side is copied through unchanged. Used for position
        values, where book entries are cost-basis deltas but market entries
        are already the day's full valuation.
        """
        result = ProfitCurve()
        book = 0.0
        for day, pair in self.items():
            book += pair.book
            result._points[day] = PricePair(pair.market, book)
        return result

    def merge(self, other: "ProfitCurve") -> None:
        """
        Add another curve into this one, date by date.

        Lets independently replayed partial curves (one per instrument) be
        combined into an aggregate.
        """
        for day, pair in other.items():
            target = self[day]
            target.add_market(pair.market)
            target.add_book(pair.book)

    def to_list(self) -> list[tuple[date, float, float]]:
        """(date, market, book) tuples for plotting or serialization."""
        return [(day, pair.market, pair.book) for day, pair in self.items()]

    def __repr__(self) -> str:
        return f"ProfitCurve(points={len(self)}, first={self.first_date}, last={self.last_date})"
