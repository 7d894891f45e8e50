"""Risk labels for projected sequences."""

from __future__ import annotations

from overflow_signalizer.models.sequences import RiskLevel


def classify_risk(remaining_capacity: int, within_horizon: bool) -> RiskLevel:
    if not within_horizon:
        return RiskLevel.SAFE
    if remaining_capacity <= 0:
        return RiskLevel.OVERFLOWED
    return RiskLevel.SOON
