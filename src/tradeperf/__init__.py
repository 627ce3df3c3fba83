"""
TradePerf - Trading System Performance Analytics

Replays executed trade logs against historical prices and summarizes the
results: profit curves, completed-trade statistics, drawdown and required
capital.
"""

from importlib.metadata import version

try:
    __version__ = version("tradeperf")
except Exception:
    __version__ = "0.0.0.dev"  # Fallback for development


__all__ = [
    "__version__",
]
