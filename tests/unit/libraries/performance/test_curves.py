"""Tests for ProfitCurve."""

from datetime import date

import pytest

from tradeperf.libraries.performance.curves import ProfitCurve
from tradeperf.libraries.performance.models import PricePair

D1, D2, D3 = date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)


@pytest.fixture
def curve() -> ProfitCurve:
    """Curve touched out of date order, as a multi-instrument replay does."""
    curve = ProfitCurve()
    curve[D2].add_market(5.0)
    curve[D1].add_market(10.0)
    curve[D1].add_book(2.0)
    curve[D3].add_book(-1.0)
    return curve


class TestProfitCurve:
    def test_indexing_materializes_zero_pair(self):
        curve = ProfitCurve()

        pair = curve[D1]

        assert pair == PricePair()
        assert D1 in curve
        assert len(curve) == 1

    def test_indexing_returns_same_pair(self):
        curve = ProfitCurve()

        curve[D1].add_market(1.0)
        curve[D1].add_market(2.0)

        assert curve[D1].market == 3.0

    def test_get_does_not_materialize(self):
        curve = ProfitCurve()

        assert curve.get(D1) is None
        assert D1 not in curve

    def test_iteration_is_in_date_order(self, curve):
        assert curve.dates == [D1, D2, D3]
        assert [pair.market for pair in curve] == [10.0, 5.0, 0.0]
        assert curve.first_date == D1
        assert curve.last_date == D3

    def test_empty_curve_has_no_dates(self):
        curve = ProfitCurve()

        assert curve.first_date is None
        assert curve.last_date is None
        assert list(curve) == []

    def test_accumulated_is_running_sum(self, curve):
        cumulative = curve.accumulated()

        assert cumulative.to_list() == [
            (D1, 10.0, 2.0),
            (D2, 15.0, 2.0),
            (D3, 15.0, 1.0),
        ]

    def test_accumulated_does_not_modify_source(self, curve):
        curve.accumulated()

        assert curve[D2] == PricePair(5.0, 0.0)

    def test_book_accumulated_keeps_market_per_date(self, curve):
        values = curve.book_accumulated()

        assert values.to_list() == [
            (D1, 10.0, 2.0),
            (D2, 5.0, 2.0),
            (D3, 0.0, 1.0),
        ]

    def test_merge_adds_partial_curves(self, curve):
        other = ProfitCurve()
        other[D1].add_market(1.0)
        other[date(2024, 1, 4)].add_book(3.0)

        curve.merge(other)

        assert curve[D1] == PricePair(11.0, 2.0)
        assert curve.last_date == date(2024, 1, 4)
        assert curve[date(2024, 1, 4)] == PricePair(0.0, 3.0)

    def test_merge_equals_shared_accumulation(self):
        shared = ProfitCurve()
        shared[D1].add_market(4.0)
        shared[D1].add_market(6.0)
        left, right = ProfitCurve(), ProfitCurve()
        left[D1].add_market(4.0)
        right[D1].add_market(6.0)

        left.merge(right)

        assert left.to_list() == shared.to_list()
