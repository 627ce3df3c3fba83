"""TradePerf services package.

Services wire library components to their external collaborators through
Protocol interfaces using dependency injection.
"""

from tradeperf.services.data import IPriceSource, ITradeLogSource

__all__: list[str] = [
    "IPriceSource",
    "ITradeLogSource",
]
