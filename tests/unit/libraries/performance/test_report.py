"""Tests for PerformanceReport derived statistics."""

import math
from datetime import date, timedelta

import pytest

from tradeperf.libraries.performance.calculators import TradeStatisticsCalculator
from tradeperf.libraries.performance.models import PeriodKey, PricePair, TradeEvent
from tradeperf.libraries.performance.report import PerformanceReport
from tradeperf.services.data.models import TimeFrame


def _trade(profit: float, close: date, holding_days: int = 4) -> TradeEvent:
    return TradeEvent(
        code="X",
        is_short=False,
        open_date=close - timedelta(days=holding_days),
        close_date=close,
        holding_days=holding_days,
        buy_notional=1000.0,
        sell_notional=1000.0 + profit,
    )


def _build(stats: TradeStatisticsCalculator, budget: float = 1000.0, recent_years: int = 5) -> PerformanceReport:
    return PerformanceReport.build(
        system_name="breakout",
        universe_name="nikkei",
        time_frame=TimeFrame.DAILY,
        first_date=date(2021, 1, 4),
        last_date=date(2023, 12, 29),
        stats=stats,
        running_trades=1,
        budget=budget,
        max_position=PricePair(market=1500.0, book=1200.0),
        max_drawdown=PricePair(market=-80.0, book=-40.0),
        recent_years=recent_years,
    )


@pytest.fixture
def stats() -> TradeStatisticsCalculator:
    """Three years of trades: +300 / -100 in 2021, +100 in 2022, -50 in 2023."""
    calculator = TradeStatisticsCalculator()
    calculator.add_trade(_trade(300.0, date(2021, 3, 1), holding_days=10))
    calculator.add_trade(_trade(-100.0, date(2021, 6, 1), holding_days=2))
    calculator.add_trade(_trade(100.0, date(2022, 2, 1), holding_days=6))
    calculator.add_trade(_trade(-50.0, date(2023, 9, 1), holding_days=4))
    return calculator


class TestPerformanceReport:
    def test_build_copies_run_metadata(self, stats):
        report = _build(stats)

        assert report.system_name == "breakout"
        assert report.universe_name == "nikkei"
        assert report.time_frame is TimeFrame.DAILY
        assert report.running_trades == 1
        assert report.market_max_position == 1500.0
        assert report.book_max_position == 1200.0
        assert report.market_max_drawdown == -80.0
        assert report.book_max_drawdown == -40.0

    def test_losing_side_is_total_minus_winning(self, stats):
        report = _build(stats)

        assert report.lose_count == 2
        assert report.lose_profit == pytest.approx(-150.0)
        assert report.lose_term == 6
        assert report.lose_ratio == pytest.approx(-0.15)

    def test_rates_and_averages(self, stats):
        report = _build(stats)

        assert report.win_rate == pytest.approx(0.5)
        assert report.lose_rate == pytest.approx(0.5)
        assert report.average_profit == pytest.approx(62.5)
        assert report.average_win_profit == pytest.approx(200.0)
        assert report.average_lose_profit == pytest.approx(-75.0)
        assert report.average_term == pytest.approx(5.5)
        assert report.average_win_term == pytest.approx(8.0)
        assert report.average_lose_term == pytest.approx(3.0)
        assert report.average_win_ratio == pytest.approx(0.2)
        assert report.average_lose_ratio == pytest.approx(-0.075)

    def test_profit_factor(self, stats):
        assert _build(stats).profit_factor == pytest.approx(400.0 / 150.0)

    def test_annual_returns(self, stats):
        report = _build(stats, budget=1000.0, recent_years=2)

        # 250 over 3 years
        assert report.annual_return == pytest.approx(250.0 / 3 / 1000.0)
        # 2022 and 2023 only
        assert report.recent_annual_return == pytest.approx(50.0 / 2 / 1000.0)

    def test_zero_budget_returns_are_nan(self, stats):
        report = _build(stats, budget=0.0)

        assert math.isnan(report.annual_return)
        assert math.isnan(report.recent_annual_return)

    def test_no_losing_trades(self):
        calculator = TradeStatisticsCalculator()
        calculator.add_trade(_trade(10.0, date(2024, 1, 5)))

        report = _build(calculator)

        assert report.lose_count == 0
        assert math.isnan(report.average_lose_profit)
        assert math.isnan(report.average_lose_term)
        assert math.isnan(report.profit_factor)

    def test_period_breakdowns(self, stats):
        report = _build(stats)

        assert sorted(report.years) == [2021, 2022, 2023]
        assert report.years[2021].total_profit == pytest.approx(200.0)
        assert report.months[PeriodKey(2021, 6)].lose_count == 1

    def test_months_of_year_in_calendar_order(self, stats):
        months = _build(stats).months_of(2022)

        assert [month for month, _ in months] == list(range(1, 13))
        assert months[1][1].trade_count == 1
        assert sum(m.trade_count for _, m in months) == 1

    def test_months_of_year_without_trades(self, stats):
        with pytest.raises(ValueError, match="2020"):
            _build(stats).months_of(2020)
