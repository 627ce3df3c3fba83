"""
Data Service Models - Price and Trade Log Contracts.

These models are the inputs of the performance engine. They are produced by
external collaborators (price history store, system executor logs) and are
consumed read-only by the replay.

CONTRACT MODELS:
- PriceBar: One instrument, one trading date
- LogEntry: One executed order from a trading system's log
- Universe: Named list of instrument codes to replay

Sentinels:
    A bar with close == 0 (or a missing bar) means "no trade / no data" for
    that date. The engine carries forward the last non-zero close and high.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field


class TimeFrame(str, Enum):
    """Bar period of a price series."""

    DAILY = "daily"
    WEEKLY = "weekly"


class OrderSide(str, Enum):
    """Side of an executed order."""

    BUY = "buy"
    SELL = "sell"


class PriceBar(BaseModel):
    """
    CONTRACT: Daily (or weekly) OHLC bar for one instrument.

    Zero prices are allowed and mean "no data": halted or untraded days keep
    their slot in the series so that dates line up with the trade log.

    Attributes:
        trade_date: Trading calendar date
        open: Opening price (0 = no data)
        high: High price (0 = no data)
        low: Low price (0 = no data)
        close: Closing price (0 = no trade on this date)

    Example:
        >>> bar = PriceBar(trade_date=date(2024, 1, 4), open=10.0, high=11.0, low=9.5, close=10.5)
        >>> bar.has_close
        True
    """

    trade_date: date = Field(..., description="Trading date")
    open: float = Field(default=0.0, ge=0, description="Open price")
    high: float = Field(default=0.0, ge=0, description="High price")
    low: float = Field(default=0.0, ge=0, description="Low price")
    close: float = Field(default=0.0, ge=0, description="Close price (0 = no trade)")

    model_config = {"frozen": True}

    @property
    def has_close(self) -> bool:
        """True if the bar carries a usable closing price."""
        return self.close > 0


class LogEntry(BaseModel):
    """
    CONTRACT: One executed order from a trading system's log.

    Quantities are unsigned; direction comes from ``side``. A zero quantity
    entry is a no-op for position accounting but still occupies its place in
    the log.

    Attributes:
        trade_date: Execution date (must match a bar date of the instrument)
        code: Instrument code
        side: Buy or sell
        quantity: Shares executed (unsigned)
        price: Execution price per share
    """

    trade_date: date
    code: str = Field(..., min_length=1)
    side: OrderSide
    quantity: int = Field(..., ge=0)
    price: float = Field(..., ge=0)

    model_config = {"frozen": True}

    @property
    def notional(self) -> float:
        """Executed value (quantity x price)."""
        return float(self.quantity) * self.price


class Universe(BaseModel):
    """Named list of instrument codes replayed by one performance run."""

    name: str
    codes: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.codes)
