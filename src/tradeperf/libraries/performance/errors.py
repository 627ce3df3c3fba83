"""Performance engine exceptions.

Terminal failures derive from PerformanceError and abort the whole run.
CalculationCancelled is not a PerformanceError.
"""


class PerformanceError(Exception):
    """Base exception for performance calculation failures."""

    pass


class MissingReferenceDataError(PerformanceError):
    """No price data exists at all for the run."""

    pass


class EmptyResultError(PerformanceError):
    """The replay produced no completed trades across the whole universe."""

    pass


class InvalidTradeLogError(PerformanceError):
    """A trade log entry is out of order or dated outside the price series."""

    pass


class CalculationCancelled(Exception):
    """Cooperative cancellation was observed at an instrument or date boundary."""

    pass
