"""Performance service.

Orchestrates a performance run: instrument-by-instrument replay, trade
aggregation and curve statistics, with cooperative cancellation and progress
reporting.

Key components:
- PerformanceService: Main service implementation
- IPerformanceService: Protocol interface
- PerformanceConfig: Run settings
- CancellationToken / ProgressTracker: Run control
- PerformanceResult / PerformanceOutcome: Results

Example:
    >>> from tradeperf.services.performance import PerformanceService
    >>> service = PerformanceService(prices, logs)
    >>> outcome = service.run("breakout", universe, token=token)
    >>> outcome.status
    <RunStatus.COMPLETED: 'completed'>
"""

from tradeperf.services.performance.config import PerformanceConfig
from tradeperf.services.performance.control import (
    CancellationToken,
    IProgressReporter,
    LoggingProgressReporter,
    ProgressTracker,
)
from tradeperf.services.performance.interface import IPerformanceService
from tradeperf.services.performance.models import PerformanceOutcome, PerformanceResult, RunStatus
from tradeperf.services.performance.service import PerformanceService

__all__ = [
    "PerformanceService",
    "IPerformanceService",
    "PerformanceConfig",
    "CancellationToken",
    "IProgressReporter",
    "LoggingProgressReporter",
    "ProgressTracker",
    "PerformanceResult",
    "PerformanceOutcome",
    "RunStatus",
]
