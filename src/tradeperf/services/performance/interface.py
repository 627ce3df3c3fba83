"""Performance service interface (Protocol)."""

from typing import Protocol

from tradeperf.services.data.models import Universe
from tradeperf.services.performance.control import CancellationToken, IProgressReporter
from tradeperf.services.performance.models import PerformanceOutcome, PerformanceResult


class IPerformanceService(Protocol):
    """
    Performance analytics for one trading system over one universe.

    Core responsibilities:
    - Replay every instrument's trade log against its prices
    - Aggregate completed trades into statistics
    - Compute max position, budget and drawdown over the finished curves
    - Honour cooperative cancellation and report progress

    Example:
        >>> service: IPerformanceService = PerformanceService(prices, logs)
        >>> outcome = service.run("breakout", universe)
        >>> if outcome.ok:
        ...     print(outcome.result.report.win_rate)
    """

    def calculate(
        self,
        system_name: str,
        universe: Universe,
        token: CancellationToken | None = None,
        progress: IProgressReporter | None = None,
    ) -> PerformanceResult:
        """
        Run the analysis, raising on any non-completed outcome.

        Raises:
            MissingReferenceDataError: No price data at all
            EmptyResultError: No completed trades in the universe
            InvalidTradeLogError: Malformed trade log
            CalculationCancelled: Token was cancelled
        """
        ...

    def run(
        self,
        system_name: str,
        universe: Universe,
        token: CancellationToken | None = None,
        progress: IProgressReporter | None = None,
    ) -> PerformanceOutcome:
        """Run the analysis and fold every terminal state into an outcome."""
        ...
