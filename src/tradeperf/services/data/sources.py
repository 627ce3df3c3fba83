"""In-memory data sources.

Simple adapters over already-loaded data. Loaders for concrete storage
formats live outside this package and hand their results to these classes.
"""

from collections import defaultdict
from typing import Iterable, Mapping, Sequence

from tradeperf.services.data.models import LogEntry, PriceBar, TimeFrame


class InMemoryPriceSource:
    """
    Price source backed by dictionaries of bar lists.

    Example:
        >>> source = InMemoryPriceSource({"7203": bars})
        >>> source.get_prices("7203", TimeFrame.DAILY)
    """

    def __init__(
        self,
        daily: Mapping[str, Sequence[PriceBar]] | None = None,
        weekly: Mapping[str, Sequence[PriceBar]] | None = None,
    ) -> None:
        self._series: dict[TimeFrame, dict[str, list[PriceBar]]] = {
            TimeFrame.DAILY: {code: sorted(bars, key=lambda b: b.trade_date) for code, bars in (daily or {}).items()},
            TimeFrame.WEEKLY: {code: sorted(bars, key=lambda b: b.trade_date) for code, bars in (weekly or {}).items()},
        }

    def has_data(self) -> bool:
        return any(bars for series in self._series.values() for bars in series.values())

    def get_prices(self, code: str, time_frame: TimeFrame) -> Sequence[PriceBar] | None:
        bars = self._series[time_frame].get(code)
        if not bars:
            return None
        return bars


class InMemoryTradeLog:
    """
    Trade log source built from a flat list of log entries.

    Entries are grouped by instrument code and ordered by date. Entries that
    share a date keep their original relative order.
    """

    def __init__(self, entries: Iterable[LogEntry] = ()) -> None:
        grouped: dict[str, list[LogEntry]] = defaultdict(list)
        for entry in entries:
            grouped[entry.code].append(entry)
        self._logs = {code: sorted(items, key=lambda e: e.trade_date) for code, items in grouped.items()}

    def get_log(self, code: str) -> Sequence[LogEntry]:
        return self._logs.get(code, [])

    @property
    def codes(self) -> list[str]:
        """Instrument codes that appear in the log."""
        return sorted(self._logs)

    def __len__(self) -> int:
        return sum(len(items) for items in self._logs.values())
