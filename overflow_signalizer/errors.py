"""Exceptions raised by the overflow analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.sequences import AnalysisReport


class OverflowSignalizerError(Exception):
    """Base class for signalizer errors."""


class UnsupportedType(OverflowSignalizerError):
    """A primary key's declared type has no known ceiling."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Unsupported primary key type: {type_name}")
        self.type_name = type_name


class Overflow(OverflowSignalizerError):
    """One or more sequences overflowed or will overflow within the horizon."""

    def __init__(self, message: str, report: AnalysisReport) -> None:
        super().__init__(message)
        self.message = message
        self.report = report
