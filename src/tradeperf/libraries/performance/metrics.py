"""Performance metrics calculation functions.

Pure functions over finished profit curves and trade aggregates. They run once
after every instrument has been replayed.

Philosophy:
- Pure functions: same inputs always produce same outputs
- No side effects: don't modify inputs
- Undefined ratios are NaN, never an exception

Usage:
    >>> from tradeperf.libraries.performance import metrics
    >>> profits = daily_profits.accumulated()
    >>> values = position_values.book_accumulated()
    >>> metrics.calculate_budget(profits, values)
    >>> metrics.calculate_drawdown(profits)
    PricePair(market=-1250.0, book=-800.0)
"""

from typing import Mapping

from tradeperf.libraries.performance.curves import ProfitCurve
from tradeperf.libraries.performance.models import PricePair, safe_divide

__all__ = [
    "safe_divide",
    "calculate_max_position",
    "calculate_budget",
    "calculate_drawdown",
    "calculate_profit_factor",
    "calculate_annual_return",
    "calculate_recent_annual_return",
]


def calculate_max_position(position_values: ProfitCurve) -> PricePair:
    """
    Calculate the largest position held, on book and market bases.

    Args:
        position_values: Position value curve with book accumulated
            (see ProfitCurve.book_accumulated)

    Returns:
        Component-wise maximum over all dates (zero pair for an empty curve)
    """
    peak = PricePair()
    for value in position_values:
        peak = PricePair.max(peak, value)
    return peak


def calculate_budget(profits: ProfitCurve, position_values: ProfitCurve) -> float:
    """
    Calculate the capital required to carry every position.

    For each date the exposure is the book value of open positions minus the
    book profit realized so far; the budget is the largest such exposure.

    Args:
        profits: Cumulative profit curve
        position_values: Position value curve with book accumulated

    Returns:
        Required capital (never negative)

    Example:
        >>> # 1000 invested on day 1, 200 profit banked before 1200 is invested on day 9
        >>> calculate_budget(profits, values)
        1000.0
    """
    budget = 0.0
    for day, profit in profits.items():
        value = position_values.get(day)
        book_value = value.book if value is not None else 0.0
        budget = max(budget, book_value - profit.book)
    return budget


def calculate_drawdown(profits: ProfitCurve) -> PricePair:
    """
    Calculate maximum drawdown of a cumulative profit curve.

    Single pass keeping a running peak; the drawdown at each date is the
    distance below that peak. The peak starts at zero, so a curve that only
    ever loses is measured from the starting capital.

    Args:
        profits: Cumulative profit curve

    Returns:
        Deepest drawdown per basis (always <= 0)

    Example:
        >>> # cumulative market profit 0, 50, 20, 80, 30
        >>> calculate_drawdown(profits).market
        -50.0
    """
    peak = PricePair()
    trough = PricePair()
    for profit in profits:
        peak = PricePair.max(peak, profit)
        trough = PricePair.min(trough, profit - peak)
    return trough


def calculate_profit_factor(win_profit: float, lose_profit: float) -> float:
    """
    Calculate profit factor.

    Args:
        win_profit: Sum of profits of winning trades
        lose_profit: Sum of profits of losing trades (negative or zero)

    Returns:
        win_profit / |lose_profit|, NaN if there were no losses
    """
    return safe_divide(win_profit, -lose_profit)


def calculate_annual_return(total_profit: float, years: int, budget: float) -> float:
    """
    Calculate average yearly profit as a fraction of required capital.

    Args:
        total_profit: Net profit over the run
        years: Number of calendar years that saw at least one completed trade
        budget: Required capital

    Returns:
        (total_profit / years) / budget, NaN if either denominator is zero
    """
    return safe_divide(safe_divide(total_profit, years), budget)


def calculate_recent_annual_return(year_profits: Mapping[int, float], window: int, budget: float) -> float:
    """
    Calculate average yearly return over the most recent years.

    Divides by the number of years actually included, not by ``window``, so a
    history shorter than the window is not diluted.

    Args:
        year_profits: Net profit per calendar year
        window: Maximum number of most recent years to include
        budget: Required capital

    Returns:
        Average profit of the included years divided by budget
    """
    recent = sorted(year_profits, reverse=True)[:window]
    total = sum(year_profits[year] for year in recent)
    return safe_divide(safe_divide(total, len(recent)), budget)
