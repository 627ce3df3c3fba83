"""Performance service implementation.

Runs the full analysis for one (trading system, universe, time frame):

1. Replay each instrument against its price series into two shared curves
   (daily profit and daily position value), collecting completed trades.
2. Aggregate the trades in close-date order.
3. Derive max position, budget and drawdown from the finished curves.

The computation is synchronous and single-threaded. It checks the
cancellation token before every instrument and every date.
"""

from tradeperf.libraries.performance.calculators import PositionReplayCalculator, TradeStatisticsCalculator
from tradeperf.libraries.performance.curves import ProfitCurve
from tradeperf.libraries.performance.errors import (
    CalculationCancelled,
    EmptyResultError,
    MissingReferenceDataError,
    PerformanceError,
)
from tradeperf.libraries.performance.metrics import calculate_budget, calculate_drawdown, calculate_max_position
from tradeperf.libraries.performance.models import TradeEvent
from tradeperf.libraries.performance.report import PerformanceReport
from tradeperf.services.data.interface import IPriceSource, ITradeLogSource
from tradeperf.services.data.models import Universe
from tradeperf.services.performance.config import PerformanceConfig
from tradeperf.services.performance.control import (
    CancellationToken,
    IProgressReporter,
    LoggingProgressReporter,
    ProgressTracker,
)
from tradeperf.services.performance.models import PerformanceOutcome, PerformanceResult, RunStatus
from tradeperf.system import LoggerFactory

logger = LoggerFactory.get_logger()


class PerformanceService:
    """
    Performance analytics over a trading system's execution log.

    Price and log data are read through injected sources and must be fully
    available before the run starts.

    Example:
        >>> service = PerformanceService(
        ...     price_source=InMemoryPriceSource({"7203": bars}),
        ...     log_source=InMemoryTradeLog(entries),
        ...     config=PerformanceConfig(recent_years=3),
        ... )
        >>> result = service.calculate("breakout", Universe(name="nikkei225", codes=["7203"]))
        >>> result.report.profit_factor
        1.84
    """

    def __init__(
        self,
        price_source: IPriceSource,
        log_source: ITradeLogSource,
        config: PerformanceConfig | None = None,
    ) -> None:
        self._prices = price_source
        self._logs = log_source
        self._config = config or PerformanceConfig()

    @property
    def config(self) -> PerformanceConfig:
        return self._config

    def calculate(
        self,
        system_name: str,
        universe: Universe,
        token: CancellationToken | None = None,
        progress: IProgressReporter | None = None,
    ) -> PerformanceResult:
        """
        Analyze a trading system over a universe.

        Args:
            system_name: Trading system whose log is replayed
            universe: Instruments to replay (codes without prices are skipped)
            token: Cancellation token polled per instrument and per date
            progress: Receives percentage of instruments processed

        Returns:
            PerformanceResult with report and cumulative profit curve

        Raises:
            MissingReferenceDataError: If no price data exists at all
            EmptyResultError: If no trade was completed
            InvalidTradeLogError: If a log is out of order or off-calendar
            CalculationCancelled: If the token was cancelled
        """
        token = token or CancellationToken()
        time_frame = self._config.time_frame

        logger.info(
            "performance.run.started",
            system=system_name,
            universe=universe.name,
            instruments=len(universe.codes),
            time_frame=time_frame.value,
        )

        if not self._prices.has_data():
            logger.error("performance.run.failed", system=system_name, reason="no price data")
            raise MissingReferenceDataError("No price data is available")

        profits = ProfitCurve()
        position_values = ProfitCurve()
        trades: list[TradeEvent] = []
        running_trades = 0
        tracker = ProgressTracker(len(universe.codes), progress or LoggingProgressReporter())

        try:
            for code in universe.codes:
                token.raise_if_cancelled()

                bars = self._prices.get_prices(code, time_frame)
                if bars is None:
                    logger.debug("performance.instrument.skipped", code=code, reason="no price data")
                    tracker.advance()
                    continue

                replay = PositionReplayCalculator(code, profits, position_values, trades.append)
                replay.replay(bars, self._logs.get_log(code), checkpoint=token.raise_if_cancelled)
                if replay.is_open:
                    running_trades += 1

                logger.debug(
                    "performance.instrument.replayed",
                    code=code,
                    bars=len(bars),
                    trades=replay.trade_count,
                    open_position=replay.position,
                )
                tracker.advance()
        except CalculationCancelled:
            logger.warning("performance.run.cancelled", system=system_name, progress=tracker.percent)
            raise
        except PerformanceError as e:
            logger.error("performance.run.failed", system=system_name, reason=str(e))
            raise

        if not trades:
            logger.error("performance.run.failed", system=system_name, reason="no trades")
            raise EmptyResultError(f"System '{system_name}' completed no trades in '{universe.name}'")

        # Stable sort: same-day trades keep instrument order
        trades.sort(key=lambda trade: trade.close_date)
        stats = TradeStatisticsCalculator()
        for trade in trades:
            stats.add_trade(trade)
            logger.debug(
                "performance.trade.closed",
                code=trade.code,
                close_date=trade.close_date.isoformat(),
                side="short" if trade.is_short else "long",
                profit=trade.profit,
                ratio=trade.ratio,
                holding_days=trade.holding_days,
            )

        cumulative_values = position_values.book_accumulated()
        cumulative_profits = profits.accumulated()
        max_position = calculate_max_position(cumulative_values)
        budget = calculate_budget(cumulative_profits, cumulative_values)
        max_drawdown = calculate_drawdown(cumulative_profits)

        report = PerformanceReport.build(
            system_name=system_name,
            universe_name=universe.name,
            time_frame=time_frame,
            first_date=cumulative_profits.first_date,
            last_date=cumulative_profits.last_date,
            stats=stats,
            running_trades=running_trades,
            budget=budget,
            max_position=max_position,
            max_drawdown=max_drawdown,
            recent_years=self._config.recent_years,
        )

        logger.info(
            "performance.run.completed",
            system=system_name,
            trades=report.trade_count,
            running_trades=running_trades,
            total_profit=report.total_profit,
            budget=budget,
            book_max_drawdown=report.book_max_drawdown,
        )

        return PerformanceResult(report=report, profits=cumulative_profits)

    def run(
        self,
        system_name: str,
        universe: Universe,
        token: CancellationToken | None = None,
        progress: IProgressReporter | None = None,
    ) -> PerformanceOutcome:
        """
        Analyze a trading system and return a single terminal outcome.

        Cancellation and terminal failures are returned rather than raised;
        partial curves and counters are discarded in both cases.

        Returns:
            PerformanceOutcome with status completed, cancelled or failed
        """
        try:
            result = self.calculate(system_name, universe, token=token, progress=progress)
        except CalculationCancelled as e:
            return PerformanceOutcome(status=RunStatus.CANCELLED, reason=str(e))
        except PerformanceError as e:
            return PerformanceOutcome(status=RunStatus.FAILED, reason=str(e))
        return PerformanceOutcome(status=RunStatus.COMPLETED, result=result)
