"""Result models for the performance service."""

from dataclasses import dataclass
from enum import Enum

from tradeperf.libraries.performance.curves import ProfitCurve
from tradeperf.libraries.performance.report import PerformanceReport


class RunStatus(str, Enum):
    """Terminal outcome of a performance run."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class PerformanceResult:
    """
    Output of a completed run.

    Attributes:
        report: Statistics bundle for the formatter
        profits: Cumulative profit curve (market and book) for charting
    """

    report: PerformanceReport
    profits: ProfitCurve


@dataclass(frozen=True)
class PerformanceOutcome:
    """
    Single terminal outcome of a run.

    Exactly one of ``result`` (completed) or ``reason`` (cancelled/failed)
    is set.
    """

    status: RunStatus
    result: PerformanceResult | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is RunStatus.COMPLETED
