"""Performance data models.

Value types shared by the replay, the trade aggregator and the report:

- PricePair: Market (mark-to-market) and book (cost basis) values for one date
- TradeEvent: One completed trade (full close or the closing leg of a flip)
- PeriodKey: Composite (year, month) key for monthly statistics
- MonthStats / YearStats: Per-period trade aggregates
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import NamedTuple

from pydantic import BaseModel, Field


def safe_divide(numerator: float, denominator: float) -> float:
    """
    Divide, returning NaN instead of raising on a zero denominator.

    Ratios such as "average losing ratio" are undefined when there are no
    losing trades. The report keeps them as NaN and leaves rendering to the
    caller.

    Example:
        >>> safe_divide(1.0, 4.0)
        0.25
        >>> math.isnan(safe_divide(1.0, 0))
        True
    """
    if denominator == 0:
        return math.nan
    return numerator / denominator


@dataclass
class PricePair:
    """
    Two parallel valuations for one date.

    ``market`` is valued at market prices, ``book`` at cost basis. The two
    sides accumulate independently and are never mixed: every operator works
    field by field.

    Example:
        >>> pair = PricePair()
        >>> pair.add_market(100 * (11.0 - 10.0))
        >>> pair.add_book(-50.0)
        >>> pair
        PricePair(market=100.0, book=-50.0)
    """

    market: float = 0.0
    book: float = 0.0

    def add_market(self, value: float) -> None:
        """Accumulate into the market side."""
        self.market += value

    def add_book(self, value: float) -> None:
        """Accumulate into the book side."""
        self.book += value

    def copy(self) -> "PricePair":
        return PricePair(self.market, self.book)

    def __add__(self, other: "PricePair") -> "PricePair":
        return PricePair(self.market + other.market, self.book + other.book)

    def __sub__(self, other: "PricePair") -> "PricePair":
        return PricePair(self.market - other.market, self.book - other.book)

    @staticmethod
    def max(a: "PricePair", b: "PricePair") -> "PricePair":
        """Component-wise maximum."""
        return PricePair(max(a.market, b.market), max(a.book, b.book))

    @staticmethod
    def min(a: "PricePair", b: "PricePair") -> "PricePair":
        """Component-wise minimum."""
        return PricePair(min(a.market, b.market), min(a.book, b.book))


class PeriodKey(NamedTuple):
    """Calendar month key (month is 1-12)."""

    year: int
    month: int


class TradeEvent(BaseModel):
    """
    Completed trade emitted by the position replay.

    Fired when a position returns to flat or flips direction. On a flip the
    notional of the newly opened leg has already been removed from
    ``buy_notional``/``sell_notional``, so only the closed shares count.

    Attributes:
        code: Instrument code
        is_short: True if the closed position was short
        open_date: Date the closed position was opened
        close_date: Date of the closing execution
        holding_days: Calendar days between open and close
        buy_notional: Total bought value attributed to this trade
        sell_notional: Total sold value attributed to this trade
        daily_market: Market side of the aggregate profit curve on close_date
            at the moment the trade closed
        daily_book: Book side of the same snapshot
    """

    code: str
    is_short: bool
    open_date: date
    close_date: date
    holding_days: int = Field(..., ge=0)
    buy_notional: float
    sell_notional: float
    daily_market: float = 0.0
    daily_book: float = 0.0

    model_config = {"frozen": True}

    @property
    def profit(self) -> float:
        """Realized profit (sell minus buy, whatever the direction)."""
        return self.sell_notional - self.buy_notional

    @property
    def ratio(self) -> float:
        """
        Realized return ratio.

        Long trades use the buy notional as denominator, short trades the sell
        notional (the side that opened the position).
        """
        if self.is_short:
            return 1.0 - safe_divide(self.buy_notional, self.sell_notional)
        return safe_divide(self.sell_notional, self.buy_notional) - 1.0

    @property
    def is_winner(self) -> bool:
        """Break-even trades count as wins."""
        return self.profit >= 0

    @property
    def period_key(self) -> PeriodKey:
        return PeriodKey(self.close_date.year, self.close_date.month)


@dataclass
class MonthStats:
    """Trade aggregates for one calendar month."""

    trade_count: int = 0
    total_profit: float = 0.0
    win_count: int = 0
    win_profit_sum: float = 0.0
    lose_profit_sum: float = 0.0
    max_loss_ratio: float = 0.0  # Most negative ratio among losing trades

    def record(self, trade: TradeEvent) -> None:
        """Add one completed trade to the period."""
        profit = trade.profit
        self.trade_count += 1
        self.total_profit += profit
        if trade.is_winner:
            self.win_count += 1
            self.win_profit_sum += profit
        else:
            self.lose_profit_sum += profit
            self.max_loss_ratio = min(self.max_loss_ratio, trade.ratio)

    @property
    def lose_count(self) -> int:
        return self.trade_count - self.win_count

    @property
    def win_rate(self) -> float:
        """Winning share of trades (NaN for a period without trades)."""
        return safe_divide(self.win_count, self.trade_count)

    @property
    def profit_factor(self) -> float:
        """Winning profit over losing loss magnitude (NaN without losses)."""
        return abs(safe_divide(self.win_profit_sum, self.lose_profit_sum))


@dataclass
class YearStats(MonthStats):
    """
    Trade aggregates for one calendar year.

    Adds the deepest same-day market profit seen at a trade close during the
    year, together with the date it occurred.
    """

    max_market_drawdown: float = 0.0
    max_market_drawdown_date: date | None = None
