"""Data source interfaces (Protocol).

The performance engine never loads files or talks to a database. It reads
fully materialized price series and trade logs through these ports so that
storage stays an external concern.
"""

from typing import Protocol, Sequence

from tradeperf.services.data.models import LogEntry, PriceBar, TimeFrame


class IPriceSource(Protocol):
    """
    Read access to historical price series.

    Example:
        >>> prices: IPriceSource = InMemoryPriceSource({"7203": bars})
        >>> prices.get_prices("7203", TimeFrame.DAILY)
    """

    def has_data(self) -> bool:
        """
        Whether any price data exists at all.

        Returns:
            False if the store is empty (the whole run must fail)
        """
        ...

    def get_prices(self, code: str, time_frame: TimeFrame) -> Sequence[PriceBar] | None:
        """
        Get the date-ordered price series for an instrument.

        Args:
            code: Instrument code
            time_frame: Daily or weekly bars

        Returns:
            Bars in ascending date order, or None if the instrument has no data
        """
        ...


class ITradeLogSource(Protocol):
    """Read access to a trading system's execution log."""

    def get_log(self, code: str) -> Sequence[LogEntry]:
        """
        Get the date-ordered log entries for an instrument.

        Args:
            code: Instrument code

        Returns:
            Entries in ascending date order (empty if the system never traded it)
        """
        ...
