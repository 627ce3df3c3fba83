"""Stateful performance calculators.

Calculators keep running state and are fed incrementally during a run.

- PositionReplayCalculator: Replays one instrument's trade log against its
  price bars, writing daily deltas into shared profit and position value
  curves and emitting a TradeEvent for every completed trade.
- TradeStatisticsCalculator: Aggregates TradeEvents into global counters,
  win/lose streaks and per-year / per-month buckets.

Usage:
    >>> profits, values = ProfitCurve(), ProfitCurve()
    >>> trades: list[TradeEvent] = []
    >>> replay = PositionReplayCalculator("7203", profits, values, trades.append)
    >>> replay.replay(bars, log)
    >>> stats = TradeStatisticsCalculator()
    >>> for trade in trades:
    ...     stats.add_trade(trade)
    >>> stats.win_count
    3
"""

import math
from datetime import date
from typing import Callable, Sequence

from tradeperf.libraries.performance.curves import ProfitCurve
from tradeperf.libraries.performance.errors import InvalidTradeLogError
from tradeperf.libraries.performance.models import MonthStats, PeriodKey, PricePair, TradeEvent, YearStats
from tradeperf.services.data.models import LogEntry, OrderSide, PriceBar


class PositionReplayCalculator:
    """
    Replays one instrument's executions against its price history.

    Walks the bars in date order. For each date:

    1. Mark the open position to market (close minus previous known close).
    2. Value the open position at the last known high.
    3. Apply the day's log entries, updating position, average cost and the
       book sides of both curves, and fire a TradeEvent when a position is
       closed or flipped.

    Bars with a zero close suspend mark-to-market accrual; book accounting
    continues regardless.

    The curves are shared with other instruments' replays; this calculator
    only ever adds to them.
    """

    def __init__(
        self,
        code: str,
        profits: ProfitCurve,
        position_values: ProfitCurve,
        on_trade: Callable[[TradeEvent], None],
    ) -> None:
        """
        Initialize replay state for an instrument.

        Args:
            code: Instrument code (copied onto emitted trades)
            profits: Shared daily profit curve
            position_values: Shared daily position value curve
            on_trade: Sink for completed trades
        """
        self._code = code
        self._profits = profits
        self._position_values = position_values
        self._on_trade = on_trade

        self._position = 0
        self._average_cost = 0.0
        self._open_date: date | None = None
        self._total_buy = 0.0
        self._total_sell = 0.0
        self._prev_close = 0.0
        self._prev_high = 0.0
        self._trade_count = 0

    def replay(
        self,
        bars: Sequence[PriceBar],
        log: Sequence[LogEntry],
        checkpoint: Callable[[], None] | None = None,
    ) -> None:
        """
        Replay the full price series.

        Args:
            bars: Price bars in ascending date order
            log: Log entries in ascending date order, each dated on a bar date
            checkpoint: Called once per date before any work for that date;
                may raise to abort (cooperative cancellation)

        Raises:
            InvalidTradeLogError: If the log is out of order or references a
                date missing from the price series
        """
        self._validate_log(bars, log)

        log_index = 0
        for bar in bars:
            if checkpoint is not None:
                checkpoint()

            daily_profit = self._profits[bar.trade_date]
            daily_value = self._position_values[bar.trade_date]
            close = bar.close

            if self._position != 0 and close > 0 and self._prev_close > 0:
                daily_profit.add_market(self._position * (close - self._prev_close))
            if close > 0:
                self._prev_close = close
            if bar.high > 0:
                self._prev_high = bar.high
            daily_value.add_market(abs(self._position) * self._prev_high)

            while log_index < len(log) and log[log_index].trade_date == bar.trade_date:
                entry = log[log_index]
                log_index += 1
                if entry.quantity == 0:
                    continue
                self._apply(entry, close, daily_profit, daily_value)

    def _apply(self, entry: LogEntry, close: float, daily_profit: PricePair, daily_value: PricePair) -> None:
        """Apply one non-empty execution to the position."""
        quantity = entry.quantity
        price = entry.price
        notional = entry.notional
        prev_position = self._position

        if entry.side is OrderSide.BUY:
            self._position += quantity
            self._total_buy += notional
            if close > 0:
                # Part of today's move not covered by the close-to-close accrual
                daily_profit.add_market(quantity * (close - price))
        else:
            self._position -= quantity
            self._total_sell += notional
            if close > 0:
                daily_profit.add_market(quantity * (price - close))

        position = self._position
        size = abs(position)
        prev_size = abs(prev_position)

        if position * prev_position > 0:
            if size < prev_size:
                daily_value.add_book(-quantity * self._average_cost)
                daily_profit.add_book(quantity * math.copysign(1, position) * (price - self._average_cost))
            else:
                self._average_cost = (prev_size * self._average_cost + notional) / size
                daily_value.add_book(notional)
            return

        # Flat before, flat after, or direction changed: unwind the old position.
        daily_value.add_book(-prev_size * self._average_cost)
        daily_profit.add_book(prev_position * (price - self._average_cost))

        closed_open_date = self._open_date
        if position == 0:
            self._average_cost = 0.0
            self._open_date = None
        else:
            daily_value.add_book(size * price)
            self._average_cost = price
            self._open_date = entry.trade_date

        if closed_open_date is None:
            # Opened from flat
            return

        # On a flip the new leg is seeded at the fill price and taken out of
        # the closed trade's totals.
        closed_buy = self._total_buy
        closed_sell = self._total_sell
        self._total_buy = self._total_sell = 0.0
        if position > 0:
            self._total_buy = position * price
            closed_buy -= self._total_buy
        elif position < 0:
            self._total_sell = -position * price
            closed_sell -= self._total_sell

        self._trade_count += 1
        self._on_trade(
            TradeEvent(
                code=self._code,
                is_short=entry.side is OrderSide.BUY,
                open_date=closed_open_date,
                close_date=entry.trade_date,
                holding_days=(entry.trade_date - closed_open_date).days,
                buy_notional=closed_buy,
                sell_notional=closed_sell,
                daily_market=daily_profit.market,
                daily_book=daily_profit.book,
            )
        )

    def _validate_log(self, bars: Sequence[PriceBar], log: Sequence[LogEntry]) -> None:
        bar_dates = {bar.trade_date for bar in bars}
        previous: date | None = None
        for entry in log:
            if previous is not None and entry.trade_date < previous:
                raise InvalidTradeLogError(
                    f"{self._code}: log entry on {entry.trade_date} follows an entry on {previous}"
                )
            if entry.trade_date not in bar_dates:
                raise InvalidTradeLogError(f"{self._code}: no price bar for log entry on {entry.trade_date}")
            previous = entry.trade_date

    @property
    def code(self) -> str:
        return self._code

    @property
    def position(self) -> int:
        """Signed quantity held (positive long, negative short)."""
        return self._position

    @property
    def average_cost(self) -> float:
        """Volume-weighted entry price of the open position (0 when flat)."""
        return self._average_cost

    @property
    def open_date(self) -> date | None:
        """Date the open position was entered (None when flat)."""
        return self._open_date

    @property
    def is_open(self) -> bool:
        """True if a position is still held after the last bar."""
        return self._position != 0

    @property
    def trade_count(self) -> int:
        """Completed trades emitted so far."""
        return self._trade_count


class TradeStatisticsCalculator:
    """
    Tracks trade statistics incrementally.

    Maintains running counts and sums for win rate, average ratios and
    holding terms, consecutive wins/losses and per-period breakdowns.

    A trade with profit >= 0 is a win. Losing-trade sums are derived as
    totals minus winning sums.
    """

    def __init__(self) -> None:
        """Initialize trade statistics calculator."""
        self._trade_count = 0
        self._win_count = 0
        self._streak = 0  # > 0 consecutive wins, < 0 consecutive losses
        self._max_win_streak = 0
        self._max_lose_streak = 0
        self._total_ratio = 0.0
        self._win_ratio = 0.0
        self._total_term = 0
        self._win_term = 0
        self._total_profit = 0.0
        self._win_profit = 0.0
        self._max_win_ratio = 0.0
        self._max_loss_ratio = 0.0
        self._max_win_profit = 0.0
        self._max_loss_profit = 0.0
        self._years: dict[int, YearStats] = {}
        self._months: dict[PeriodKey, MonthStats] = {}

    def add_trade(self, trade: TradeEvent) -> None:
        """
        Add completed trade to statistics.

        Args:
            trade: TradeEvent, in close-date order
        """
        ratio = trade.ratio
        profit = trade.profit

        self._trade_count += 1
        self._total_ratio += ratio
        self._total_term += trade.holding_days
        self._total_profit += profit

        if trade.is_winner:
            self._win_count += 1
            self._streak = self._streak + 1 if self._streak > 0 else 1
            self._max_win_streak = max(self._max_win_streak, self._streak)
            self._win_ratio += ratio
            self._win_term += trade.holding_days
            self._win_profit += profit
            self._max_win_ratio = max(self._max_win_ratio, ratio)
            self._max_win_profit = max(self._max_win_profit, profit)
        else:
            self._streak = self._streak - 1 if self._streak < 0 else -1
            self._max_lose_streak = max(self._max_lose_streak, -self._streak)
            self._max_loss_ratio = min(self._max_loss_ratio, ratio)
            self._max_loss_profit = min(self._max_loss_profit, profit)

        self._record_period(trade)

    def _record_period(self, trade: TradeEvent) -> None:
        year = trade.close_date.year
        year_stats = self._years.get(year)
        if year_stats is None:
            year_stats = YearStats(
                max_market_drawdown=trade.daily_market if not trade.is_winner else 0.0,
                max_market_drawdown_date=trade.close_date,
            )
            self._years[year] = year_stats
            for month in range(1, 13):
                self._months[PeriodKey(year, month)] = MonthStats()
        elif trade.daily_market < year_stats.max_market_drawdown:
            year_stats.max_market_drawdown = trade.daily_market
            year_stats.max_market_drawdown_date = trade.close_date

        year_stats.record(trade)
        self._months[trade.period_key].record(trade)

    @property
    def trade_count(self) -> int:
        return self._trade_count

    @property
    def win_count(self) -> int:
        return self._win_count

    @property
    def lose_count(self) -> int:
        return self._trade_count - self._win_count

    @property
    def current_streak(self) -> int:
        """Signed length of the streak in progress (positive for wins)."""
        return self._streak

    @property
    def max_win_streak(self) -> int:
        return self._max_win_streak

    @property
    def max_lose_streak(self) -> int:
        return self._max_lose_streak

    @property
    def total_ratio(self) -> float:
        return self._total_ratio

    @property
    def win_ratio(self) -> float:
        return self._win_ratio

    @property
    def total_term(self) -> int:
        return self._total_term

    @property
    def win_term(self) -> int:
        return self._win_term

    @property
    def total_profit(self) -> float:
        return self._total_profit

    @property
    def win_profit(self) -> float:
        return self._win_profit

    @property
    def max_win_ratio(self) -> float:
        return self._max_win_ratio

    @property
    def max_loss_ratio(self) -> float:
        return self._max_loss_ratio

    @property
    def max_win_profit(self) -> float:
        return self._max_win_profit

    @property
    def max_loss_profit(self) -> float:
        return self._max_loss_profit

    @property
    def years(self) -> dict[int, YearStats]:
        """Per-year buckets keyed by calendar year."""
        return dict(self._years)

    @property
    def months(self) -> dict[PeriodKey, MonthStats]:
        """Per-month buckets; all 12 months exist for every year seen."""
        return dict(self._months)
