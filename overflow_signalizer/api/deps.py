"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Depends

from overflow_signalizer.core.config import AppSettings, get_settings
from overflow_signalizer.core.db import get_session_factory
from overflow_signalizer.models.sequences import SequenceDescriptor
from overflow_signalizer.services.runner import OverflowSignalizer
from overflow_signalizer.services.signalizers import build_signalizer
from overflow_signalizer.sources import load_descriptors


def get_app_settings() -> AppSettings:
    """Expose application settings as a dependency."""

    return get_settings()


def get_descriptors(
    settings: AppSettings = Depends(get_app_settings),
) -> list[SequenceDescriptor]:
    """Resolve the configured model targets into sequence descriptors."""

    return list(load_descriptors(settings.models, get_session_factory()))


def get_signalizer(
    settings: AppSettings = Depends(get_app_settings),
) -> OverflowSignalizer:
    return OverflowSignalizer(
        signalizer=build_signalizer(settings),
        horizon_days=settings.horizon_days,
        default_daily_rate=settings.default_daily_rate,
        rate_window_days=settings.rate_window_days,
    )
