"""Unit tests for PerformanceService."""

from datetime import date

import pytest

from tests.builders import buy, day, make_bars, sell
from tradeperf.libraries.performance.errors import (
    CalculationCancelled,
    EmptyResultError,
    InvalidTradeLogError,
    MissingReferenceDataError,
)
from tradeperf.services.data.models import TimeFrame, Universe
from tradeperf.services.data.sources import InMemoryPriceSource, InMemoryTradeLog
from tradeperf.services.performance import (
    CancellationToken,
    IPerformanceService,
    PerformanceConfig,
    PerformanceService,
    RunStatus,
)


class RecordingReporter:
    def __init__(self) -> None:
        self.values: list[int] = []

    def report(self, percent: int) -> None:
        self.values.append(percent)


@pytest.fixture
def single_trade_service() -> PerformanceService:
    """One instrument: buy 10@10 then sell 10@12 over closes 10, 11, 12, 10."""
    prices = InMemoryPriceSource({"X": make_bars([10.0, 11.0, 12.0, 10.0])})
    log = InMemoryTradeLog([buy(0, 10, 10.0), sell(2, 10, 12.0)])
    return PerformanceService(prices, log)


class TestCalculate:
    """Completed runs."""

    def test_single_round_trip(self, single_trade_service):
        result = single_trade_service.calculate("breakout", Universe(name="test", codes=["X"]))
        report = result.report

        assert report.system_name == "breakout"
        assert report.universe_name == "test"
        assert report.trade_count == 1
        assert report.win_count == 1
        assert report.total_profit == pytest.approx(20.0)
        assert report.total_term == 2
        assert report.running_trades == 0
        assert report.first_date == day(0)
        assert report.last_date == day(3)

    def test_curve_statistics(self, single_trade_service):
        report = single_trade_service.calculate("breakout", Universe(name="test", codes=["X"])).report

        assert report.budget == pytest.approx(100.0)
        assert report.book_max_position == pytest.approx(100.0)
        assert report.market_max_position == pytest.approx(120.0)
        assert report.book_max_drawdown == 0.0
        assert report.market_max_drawdown == 0.0

    def test_returns_cumulative_profit_curve(self, single_trade_service):
        profits = single_trade_service.calculate("breakout", Universe(name="test", codes=["X"])).profits

        assert [pair.market for pair in profits] == pytest.approx([0.0, 10.0, 20.0, 20.0])
        assert [pair.book for pair in profits] == pytest.approx([0.0, 0.0, 20.0, 20.0])

    def test_open_position_counts_as_running_trade(self):
        prices = InMemoryPriceSource({"A": make_bars([10.0, 11.0, 12.0]), "B": make_bars([5.0, 6.0, 7.0])})
        log = InMemoryTradeLog([buy(0, 1, 10.0, code="A"), sell(1, 1, 11.0, code="A"), buy(2, 3, 7.0, code="B")])
        service = PerformanceService(prices, log)

        report = service.calculate("s", Universe(name="u", codes=["A", "B"])).report

        assert report.trade_count == 1
        assert report.running_trades == 1

    def test_trades_aggregated_in_close_date_order(self):
        closes = [10.0] * 5
        prices = InMemoryPriceSource({code: make_bars(closes) for code in "ABC"})
        log = InMemoryTradeLog(
            [
                buy(0, 1, 10.0, code="A"),
                sell(4, 1, 11.0, code="A"),
                buy(0, 1, 10.0, code="B"),
                sell(2, 1, 9.0, code="B"),
                buy(0, 1, 10.0, code="C"),
                sell(3, 1, 12.0, code="C"),
            ]
        )
        service = PerformanceService(prices, log)

        report = service.calculate("s", Universe(name="u", codes=["A", "B", "C"])).report

        # B loses on day 2, then C and A win on days 3 and 4
        assert report.max_win_streak == 2
        assert report.max_lose_streak == 1

    def test_instrument_without_prices_is_skipped(self, single_trade_service):
        reporter = RecordingReporter()

        result = single_trade_service.calculate(
            "breakout", Universe(name="test", codes=["MISSING", "X"]), progress=reporter
        )

        assert result.report.trade_count == 1
        assert reporter.values == [50, 100]

    def test_weekly_time_frame_uses_weekly_series(self):
        prices = InMemoryPriceSource(
            daily={"X": make_bars([1.0, 1.0, 1.0])},
            weekly={"X": make_bars([10.0, 20.0], start=date(2024, 1, 5))},
        )
        log = InMemoryTradeLog(
            [buy(0, 1, 10.0, start=date(2024, 1, 5)), sell(1, 1, 20.0, start=date(2024, 1, 5))]
        )
        service = PerformanceService(prices, log, PerformanceConfig(time_frame=TimeFrame.WEEKLY))

        report = service.calculate("s", Universe(name="u", codes=["X"])).report

        assert report.time_frame is TimeFrame.WEEKLY
        assert report.total_profit == pytest.approx(10.0)

    def test_recent_years_from_config(self):
        service = PerformanceService(
            InMemoryPriceSource({"X": make_bars([10.0, 11.0, 12.0, 10.0])}),
            InMemoryTradeLog([buy(0, 10, 10.0), sell(2, 10, 12.0)]),
            PerformanceConfig(recent_years=2),
        )

        report = service.calculate("s", Universe(name="u", codes=["X"])).report

        assert report.recent_years == 2
        assert report.recent_annual_return == pytest.approx(0.2)


class TestCalculateErrors:
    """Runs that do not complete."""

    def test_no_price_data(self):
        service = PerformanceService(InMemoryPriceSource(), InMemoryTradeLog())

        with pytest.raises(MissingReferenceDataError):
            service.calculate("s", Universe(name="u", codes=["X"]))

    def test_no_completed_trades(self):
        prices = InMemoryPriceSource({"X": make_bars([10.0, 11.0])})
        service = PerformanceService(prices, InMemoryTradeLog([buy(0, 1, 10.0)]))

        with pytest.raises(EmptyResultError, match="no trades"):
            service.calculate("s", Universe(name="u", codes=["X"]))

    def test_off_calendar_log_entry(self):
        prices = InMemoryPriceSource({"X": make_bars([10.0, 11.0])})
        service = PerformanceService(prices, InMemoryTradeLog([buy(7, 1, 10.0)]))

        with pytest.raises(InvalidTradeLogError):
            service.calculate("s", Universe(name="u", codes=["X"]))

    def test_cancelled_before_start(self, single_trade_service):
        token = CancellationToken()
        token.cancel()

        with pytest.raises(CalculationCancelled):
            single_trade_service.calculate("s", Universe(name="u", codes=["X"]), token=token)

    def test_cancelled_between_instruments(self):
        prices = InMemoryPriceSource({"A": make_bars([10.0, 11.0]), "B": make_bars([10.0, 11.0])})
        log = InMemoryTradeLog([buy(0, 1, 10.0, code="A"), sell(1, 1, 11.0, code="A")])
        service = PerformanceService(prices, log)
        token = CancellationToken()

        class CancelAtHalf:
            def __init__(self) -> None:
                self.values: list[int] = []

            def report(self, percent: int) -> None:
                self.values.append(percent)
                if percent >= 50:
                    token.cancel()

        reporter = CancelAtHalf()

        with pytest.raises(CalculationCancelled):
            service.calculate("s", Universe(name="u", codes=["A", "B"]), token=token, progress=reporter)

        assert reporter.values == [50]


class TestRun:
    """Terminal outcomes."""

    def test_completed(self, single_trade_service):
        outcome = single_trade_service.run("s", Universe(name="u", codes=["X"]))

        assert outcome.status is RunStatus.COMPLETED
        assert outcome.ok
        assert outcome.result is not None
        assert outcome.reason is None

    def test_failed_on_empty_result(self):
        prices = InMemoryPriceSource({"X": make_bars([10.0])})
        service = PerformanceService(prices, InMemoryTradeLog())

        outcome = service.run("s", Universe(name="u", codes=["X"]))

        assert outcome.status is RunStatus.FAILED
        assert not outcome.ok
        assert outcome.result is None
        assert "no trades" in outcome.reason

    def test_failed_on_missing_prices(self):
        outcome = PerformanceService(InMemoryPriceSource(), InMemoryTradeLog()).run("s", Universe(name="u"))

        assert outcome.status is RunStatus.FAILED
        assert outcome.reason == "No price data is available"

    def test_cancelled(self, single_trade_service):
        token = CancellationToken()
        token.cancel()

        outcome = single_trade_service.run("s", Universe(name="u", codes=["X"]), token=token)

        assert outcome.status is RunStatus.CANCELLED
        assert outcome.result is None
        assert outcome.reason == "Calculation was cancelled"


def test_service_satisfies_interface(single_trade_service):
    service: IPerformanceService = single_trade_service

    assert single_trade_service.config.recent_years == 5
    assert callable(service.calculate)
    assert callable(service.run)
