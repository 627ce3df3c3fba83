"""Cancellation and progress reporting for long-running performance runs.

The run is a single synchronous computation. A supervising worker (usually on
another thread) cancels it through a CancellationToken; the run checks the
token at every instrument and every date, so it stops within one date step.
Progress flows the other way through an IProgressReporter.
"""

import threading
from typing import Protocol

from tradeperf.libraries.performance.errors import CalculationCancelled
from tradeperf.system import LoggerFactory

logger = LoggerFactory.get_logger()


class CancellationToken:
    """
    Cooperative cancellation flag.

    Example:
        >>> token = CancellationToken()
        >>> worker = threading.Thread(target=service.run, args=("breakout", universe), kwargs={"token": token})
        >>> worker.start()
        >>> token.cancel()  # from the supervising thread
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Safe to call from any thread, any number of times."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """
        Yield point for the run.

        Raises:
            CalculationCancelled: If cancellation has been requested
        """
        if self._event.is_set():
            raise CalculationCancelled("Calculation was cancelled")


class IProgressReporter(Protocol):
    """Receives completion percentages in [0, 100]."""

    def report(self, percent: int) -> None: ...


class LoggingProgressReporter:
    """Default reporter that writes progress to the debug log."""

    def report(self, percent: int) -> None:
        logger.debug("performance.progress", percent=percent)


class ProgressTracker:
    """
    Converts processed-instrument counts into percentages.

    Guarantees the reporter sees a non-decreasing sequence within [0, 100]
    and is not called twice for the same value.
    """

    def __init__(self, total: int, reporter: IProgressReporter) -> None:
        self._total = total
        self._done = 0
        self._last = -1
        self._reporter = reporter

    def advance(self, steps: int = 1) -> int:
        """
        Mark instruments as processed and report the new percentage.

        Returns:
            Current percentage
        """
        self._done = min(self._done + steps, self._total)
        percent = 100 if self._total == 0 else 100 * self._done // self._total
        if percent > self._last:
            self._last = percent
            self._reporter.report(percent)
        return max(self._last, 0)

    @property
    def percent(self) -> int:
        return max(self._last, 0)
