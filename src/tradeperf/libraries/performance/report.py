"""Performance report bundle.

Everything a formatter needs to render the performance summary of one run.
Raw counters are stored; averages and rates are derived properties so that
undefined values (no losing trades, no budget, ...) surface as NaN.
"""

from datetime import date

from pydantic import BaseModel, Field

from tradeperf.libraries.performance.calculators import TradeStatisticsCalculator
from tradeperf.libraries.performance.metrics import (
    calculate_annual_return,
    calculate_profit_factor,
    calculate_recent_annual_return,
    safe_divide,
)
from tradeperf.libraries.performance.models import MonthStats, PeriodKey, PricePair, YearStats
from tradeperf.services.data.models import TimeFrame


class PerformanceReport(BaseModel):
    """
    Complete statistics of one performance run.

    Generated after every instrument has been replayed and the curve
    calculators have run.
    """

    # Run metadata
    system_name: str
    universe_name: str
    time_frame: TimeFrame
    first_date: date | None
    last_date: date | None
    recent_years: int = Field(default=5, ge=1)

    # Trade counters
    trade_count: int
    win_count: int
    running_trades: int
    max_win_streak: int
    max_lose_streak: int

    # Ratio and term sums
    total_ratio: float
    win_ratio: float
    max_win_ratio: float
    max_loss_ratio: float
    total_term: int
    win_term: int

    # Profit sums
    total_profit: float
    win_profit: float
    max_win_profit: float
    max_loss_profit: float

    # Curve statistics
    budget: float
    book_max_position: float
    market_max_position: float
    book_max_drawdown: float
    market_max_drawdown: float

    # Period breakdowns
    years: dict[int, YearStats] = Field(default_factory=dict)
    months: dict[PeriodKey, MonthStats] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @classmethod
    def build(
        cls,
        *,
        system_name: str,
        universe_name: str,
        time_frame: TimeFrame,
        first_date: date | None,
        last_date: date | None,
        stats: TradeStatisticsCalculator,
        running_trades: int,
        budget: float,
        max_position: PricePair,
        max_drawdown: PricePair,
        recent_years: int = 5,
    ) -> "PerformanceReport":
        """Assemble a report from the trade aggregator and curve statistics."""
        return cls(
            system_name=system_name,
            universe_name=universe_name,
            time_frame=time_frame,
            first_date=first_date,
            last_date=last_date,
            recent_years=recent_years,
            trade_count=stats.trade_count,
            win_count=stats.win_count,
            running_trades=running_trades,
            max_win_streak=stats.max_win_streak,
            max_lose_streak=stats.max_lose_streak,
            total_ratio=stats.total_ratio,
            win_ratio=stats.win_ratio,
            max_win_ratio=stats.max_win_ratio,
            max_loss_ratio=stats.max_loss_ratio,
            total_term=stats.total_term,
            win_term=stats.win_term,
            total_profit=stats.total_profit,
            win_profit=stats.win_profit,
            max_win_profit=stats.max_win_profit,
            max_loss_profit=stats.max_loss_profit,
            budget=budget,
            book_max_position=max_position.book,
            market_max_position=max_position.market,
            book_max_drawdown=max_drawdown.book,
            market_max_drawdown=max_drawdown.market,
            years=stats.years,
            months=stats.months,
        )

    # Losing-side totals

    @property
    def lose_count(self) -> int:
        return self.trade_count - self.win_count

    @property
    def lose_ratio(self) -> float:
        return self.total_ratio - self.win_ratio

    @property
    def lose_term(self) -> int:
        return self.total_term - self.win_term

    @property
    def lose_profit(self) -> float:
        """Total loss of losing trades (negative or zero)."""
        return self.total_profit - self.win_profit

    # Rates and averages

    @property
    def win_rate(self) -> float:
        return safe_divide(self.win_count, self.trade_count)

    @property
    def lose_rate(self) -> float:
        return safe_divide(self.lose_count, self.trade_count)

    @property
    def average_ratio(self) -> float:
        return safe_divide(self.total_ratio, self.trade_count)

    @property
    def average_win_ratio(self) -> float:
        return safe_divide(self.win_ratio, self.win_count)

    @property
    def average_lose_ratio(self) -> float:
        return safe_divide(self.lose_ratio, self.lose_count)

    @property
    def average_term(self) -> float:
        return safe_divide(self.total_term, self.trade_count)

    @property
    def average_win_term(self) -> float:
        return safe_divide(self.win_term, self.win_count)

    @property
    def average_lose_term(self) -> float:
        return safe_divide(self.lose_term, self.lose_count)

    @property
    def average_profit(self) -> float:
        return safe_divide(self.total_profit, self.trade_count)

    @property
    def average_win_profit(self) -> float:
        return safe_divide(self.win_profit, self.win_count)

    @property
    def average_lose_profit(self) -> float:
        return safe_divide(self.lose_profit, self.lose_count)

    @property
    def profit_factor(self) -> float:
        return calculate_profit_factor(self.win_profit, self.lose_profit)

    @property
    def annual_return(self) -> float:
        """Average yearly profit over required capital."""
        return calculate_annual_return(self.total_profit, len(self.years), self.budget)

    @property
    def recent_annual_return(self) -> float:
        """Average yearly profit of the most recent ``recent_years`` years over required capital."""
        profits = {year: stats.total_profit for year, stats in self.years.items()}
        return calculate_recent_annual_return(profits, self.recent_years, self.budget)

    def months_of(self, year: int) -> list[tuple[int, MonthStats]]:
        """
        (month, stats) for the 12 months of a year, January first.

        Raises:
            ValueError: If no trade closed in ``year``
        """
        if year not in self.years:
            raise ValueError(f"No trades closed in {year}")
        return [(month, self.months[PeriodKey(year, month)]) for month in range(1, 13)]
