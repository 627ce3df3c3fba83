"""Data contracts and sources consumed by the performance engine.

Key components:
- Models: PriceBar, LogEntry, Universe, TimeFrame, OrderSide
- Interfaces: IPriceSource, ITradeLogSource
- Sources: InMemoryPriceSource, InMemoryTradeLog
"""

from tradeperf.services.data.interface import IPriceSource, ITradeLogSource
from tradeperf.services.data.models import LogEntry, OrderSide, PriceBar, TimeFrame, Universe
from tradeperf.services.data.sources import InMemoryPriceSource, InMemoryTradeLog

__all__ = [
    "IPriceSource",
    "ITradeLogSource",
    "LogEntry",
    "OrderSide",
    "PriceBar",
    "TimeFrame",
    "Universe",
    "InMemoryPriceSource",
    "InMemoryTradeLog",
]
