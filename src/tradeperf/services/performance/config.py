"""Configuration for the performance service."""

from dataclasses import dataclass

from tradeperf.services.data.models import TimeFrame


@dataclass
class PerformanceConfig:
    """Performance run settings.

    Attributes:
        time_frame: Price series used for the replay (daily or weekly bars)
        recent_years: Number of most recent years averaged for the
            "recent annual return" figure

    Example:
        >>> config = PerformanceConfig(time_frame=TimeFrame.WEEKLY, recent_years=3)
    """

    time_frame: TimeFrame = TimeFrame.DAILY
    recent_years: int = 5

    def __post_init__(self) -> None:
        if self.recent_years < 1:
            raise ValueError(f"recent_years must be at least 1, got {self.recent_years}")
        self.time_frame = TimeFrame(self.time_frame)
