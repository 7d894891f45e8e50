"""Primary key sequence overflow prediction."""

from .errors import Overflow, OverflowSignalizerError, UnsupportedType
from .models.sequences import (
    TYPE_CEILINGS,
    AnalysisReport,
    Entry,
    OverflowVerdict,
    RiskLevel,
    SequenceDescriptor,
    ceiling_for,
)
from .services.runner import OverflowSignalizer

__all__ = [
    "TYPE_CEILINGS",
    "AnalysisReport",
    "Entry",
    "Overflow",
    "OverflowSignalizer",
    "OverflowSignalizerError",
    "OverflowVerdict",
    "RiskLevel",
    "SequenceDescriptor",
    "UnsupportedType",
    "ceiling_for",
]
