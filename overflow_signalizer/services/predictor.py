"""Projection of remaining sequence capacity against a daily rate."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Projection:
    remaining_capacity: int
    days_to_overflow: int
    within_horizon: bool


class OverflowPredictor:
    """Decide whether a sequence runs out of values within ``horizon_days``."""

    def __init__(self, horizon_days: int = 60) -> None:
        if horizon_days < 0:
            raise ValueError("horizon_days must not be negative")
        self.horizon_days = horizon_days

    def project(self, current_value: int, ceiling: int, daily_rate: int) -> Projection:
        """Project days to overflow with integer arithmetic.

        A sequence already at (or past) its ceiling is within the horizon regardless
        of the rate, and no division takes place.
        """

        if daily_rate < 1:
            raise ValueError(f"daily_rate must be positive, got {daily_rate}")

        remaining = ceiling - current_value
        if remaining <= 0:
            return Projection(remaining_capacity=remaining, days_to_overflow=0, within_horizon=True)

        days = remaining // daily_rate
        return Projection(
            remaining_capacity=remaining,
            days_to_overflow=days,
            within_horizon=days <= self.horizon_days,
        )

    def within_horizon(self, current_value: int, ceiling: int, daily_rate: int) -> bool:
        return self.project(current_value, ceiling, daily_rate).within_horizon
