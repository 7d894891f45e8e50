"""Pydantic schemas for overflow report responses."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

from .sequences import AnalysisReport, OverflowVerdict, RiskLevel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VerdictSchema(BaseModel):
    table: str = Field(..., description="Physical table name.")
    column: str = Field(..., description="Primary key column.")
    current_value: int = Field(..., description="Identifier of the most recent row.")
    ceiling: int = Field(..., description="Largest value the column type can hold.")
    daily_rate: int = Field(..., description="Estimated new identifiers per day.")
    remaining_capacity: int
    days_to_overflow: int
    risk: RiskLevel

    @classmethod
    def from_verdict(cls, verdict: OverflowVerdict) -> "VerdictSchema":
        return cls(
            table=verdict.table,
            column=verdict.column,
            current_value=verdict.current_value,
            ceiling=verdict.ceiling,
            daily_rate=verdict.daily_rate,
            remaining_capacity=verdict.remaining_capacity,
            days_to_overflow=verdict.days_to_overflow,
            risk=verdict.risk,
        )


class ReportResponse(BaseModel):
    status: Literal["ok", "overflow"]
    horizon_days: int
    generated_at: datetime = Field(default_factory=_utcnow)
    verdicts: list[VerdictSchema] = Field(default_factory=list)
    overflowed: list[str] = Field(default_factory=list)
    overflow_soon: list[str] = Field(default_factory=list)
    message: str | None = Field(default=None, description="Aggregate alert text when a breach exists.")

    @classmethod
    def from_report(cls, report: AnalysisReport) -> "ReportResponse":
        return cls(
            status="overflow" if report.has_breaches else "ok",
            horizon_days=report.horizon_days,
            verdicts=[VerdictSchema.from_verdict(verdict) for verdict in report.verdicts],
            overflowed=list(report.overflowed),
            overflow_soon=list(report.overflowing_soon),
            message=report.message() if report.has_breaches else None,
        )
