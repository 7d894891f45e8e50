"""Sequence overflow endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from overflow_signalizer.api import deps
from overflow_signalizer.errors import Overflow
from overflow_signalizer.models.reports import ReportResponse
from overflow_signalizer.models.sequences import SequenceDescriptor
from overflow_signalizer.services.runner import OverflowSignalizer

router = APIRouter()


@router.get(
    "/sequences/report",
    response_model=ReportResponse,
    status_code=status.HTTP_200_OK,
    summary="Analyse every configured sequence and signal breaches.",
)
def sequences_report(
    horizon_days: int | None = Query(default=None, ge=0),
    descriptors: list[SequenceDescriptor] = Depends(deps.get_descriptors),
    signalizer: OverflowSignalizer = Depends(deps.get_signalizer),
) -> ReportResponse:
    """Run the lenient analysis and return every verdict."""

    report = signalizer.analyse_lenient(descriptors, horizon_days)
    return ReportResponse.from_report(report)


@router.get(
    "/sequences/health",
    summary="Fail with 503 when a sequence is within the overflow horizon.",
)
def sequences_health(
    horizon_days: int | None = Query(default=None, ge=0),
    descriptors: list[SequenceDescriptor] = Depends(deps.get_descriptors),
    signalizer: OverflowSignalizer = Depends(deps.get_signalizer),
) -> dict[str, str]:
    """Strict analysis suitable for health checks and deployment gates."""

    try:
        signalizer.analyse_strict(descriptors, horizon_days)
    except Overflow as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message) from exc
    return {"status": "ok"}
