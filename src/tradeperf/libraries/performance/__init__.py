"""Performance analytics library for trading system replays.

This library provides the building blocks of a performance run:

1. **Models** (`models.py`): Value types
   - PricePair: Market / book valuation pair
   - TradeEvent: One completed trade
   - YearStats / MonthStats: Period breakdowns keyed by year and PeriodKey

2. **Curves** (`curves.py`): Date-indexed ProfitCurve with cumulative views

3. **Metrics** (`metrics.py`): Pure calculation functions
   - Max position, budget (required capital), drawdown
   - Profit factor, annual returns

4. **Calculators** (`calculators.py`): Stateful incremental calculators
   - PositionReplayCalculator: Per-instrument position and valuation replay
   - TradeStatisticsCalculator: Running trade aggregates

5. **Report** (`report.py`): PerformanceReport result bundle

Usage:
    >>> from tradeperf.libraries.performance import ProfitCurve, PositionReplayCalculator
    >>> profits, values = ProfitCurve(), ProfitCurve()
    >>> PositionReplayCalculator("7203", profits, values, trades.append).replay(bars, log)
    >>> calculate_drawdown(profits.accumulated())

Design Principles:
    - Floats throughout, no rounding before presentation
    - Undefined ratios are NaN, never an exception
    - Market and book bases never mix
"""

from tradeperf.libraries.performance.calculators import PositionReplayCalculator, TradeStatisticsCalculator
from tradeperf.libraries.performance.curves import ProfitCurve
from tradeperf.libraries.performance.errors import (
    CalculationCancelled,
    EmptyResultError,
    InvalidTradeLogError,
    MissingReferenceDataError,
    PerformanceError,
)
from tradeperf.libraries.performance.metrics import (
    calculate_annual_return,
    calculate_budget,
    calculate_drawdown,
    calculate_max_position,
    calculate_profit_factor,
    calculate_recent_annual_return,
    safe_divide,
)
from tradeperf.libraries.performance.models import MonthStats, PeriodKey, PricePair, TradeEvent, YearStats
from tradeperf.libraries.performance.report import PerformanceReport

__all__ = [
    # Models
    "PricePair",
    "TradeEvent",
    "PeriodKey",
    "MonthStats",
    "YearStats",
    "ProfitCurve",
    "PerformanceReport",
    # Errors
    "PerformanceError",
    "MissingReferenceDataError",
    "EmptyResultError",
    "InvalidTradeLogError",
    "CalculationCancelled",
    # Metrics (pure functions)
    "safe_divide",
    "calculate_max_position",
    "calculate_budget",
    "calculate_drawdown",
    "calculate_profit_factor",
    "calculate_annual_return",
    "calculate_recent_annual_return",
    # Calculators (stateful)
    "PositionReplayCalculator",
    "TradeStatisticsCalculator",
]
