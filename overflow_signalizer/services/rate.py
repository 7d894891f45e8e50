"""Daily growth rate estimation for identifier sequences."""

from __future__ import annotations

from datetime import datetime, timedelta

from overflow_signalizer.models.sequences import SequenceDescriptor

DEFAULT_DAILY_RATE = 100_000
DEFAULT_WINDOW_DAYS = 7


class RateEstimator:
    """Estimate new identifiers per day from a trailing window of inserts.

    Sequences without a creation timestamp fall back to ``default_daily_rate``. The
    result is never below one, so callers can always divide by it.
    """

    def __init__(
        self,
        *,
        default_daily_rate: int = DEFAULT_DAILY_RATE,
        window_days: int = DEFAULT_WINDOW_DAYS,
    ) -> None:
        if window_days < 1:
            raise ValueError("window_days must be at least 1")
        self.default_daily_rate = default_daily_rate
        self.window_days = window_days

    def estimate(self, descriptor: SequenceDescriptor, reference: datetime | None) -> int:
        """Return the average daily insert count for the window ending at ``reference``."""

        if reference is None:
            return max(self.default_daily_rate, 1)

        start = reference - timedelta(days=self.window_days)
        amount = descriptor.count_created_between(start, reference)
        return max(amount // self.window_days, 1)
