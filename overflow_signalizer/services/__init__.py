"""Service exports."""

from . import classifier, predictor, rate, runner, signalizers

__all__ = ["classifier", "predictor", "rate", "runner", "signalizers"]
