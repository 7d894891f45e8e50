"""Liveness route for the signalizer service."""

from fastapi import APIRouter, Depends

from overflow_signalizer.api import deps
from overflow_signalizer.core.config import AppSettings

health_router = APIRouter()


@health_router.get("/", summary="Liveness probe", tags=["health"])
def healthcheck(settings: AppSettings = Depends(deps.get_app_settings)) -> dict[str, str | int]:
    """Report that the process is up and which horizon sequence checks will use.

    The database is not touched here; ``/v1/sequences/health`` is the check that
    fails when a sequence nears its ceiling.
    """

    return {"status": "ok", "horizon_days": settings.horizon_days}
