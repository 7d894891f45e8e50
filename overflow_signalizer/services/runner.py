"""Overflow analysis across a caller-supplied set of sequences."""

from __future__ import annotations

import logging
from typing import Any, Iterable

import structlog

from overflow_signalizer.core.logging import get_logger
from overflow_signalizer.errors import Overflow, UnsupportedType
from overflow_signalizer.models.sequences import (
    AnalysisReport,
    OverflowVerdict,
    RiskLevel,
    SequenceDescriptor,
    require_ceiling,
)
from overflow_signalizer.services.classifier import classify_risk
from overflow_signalizer.services.predictor import OverflowPredictor
from overflow_signalizer.services.rate import DEFAULT_DAILY_RATE, DEFAULT_WINDOW_DAYS, RateEstimator
from overflow_signalizer.services.signalizers import Signalizer

_module_logger = get_logger(__name__)


def _as_event_logger(logger: Any) -> Any:
    """Wrap a plain stdlib logger so it accepts event names with keyword context."""

    if isinstance(logger, logging.Logger):
        return structlog.wrap_logger(
            logger,
            wrapper_class=structlog.stdlib.BoundLogger,
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.processors.KeyValueRenderer(key_order=["event"]),
            ],
        )
    return logger


def group_by_table(descriptors: Iterable[SequenceDescriptor]) -> dict[str, SequenceDescriptor]:
    """Keep the first descriptor seen for each physical table."""

    grouped: dict[str, SequenceDescriptor] = {}
    for descriptor in descriptors:
        grouped.setdefault(descriptor.table_name, descriptor)
    return grouped


class OverflowSignalizer:
    """Analyse sequences and either raise or signal when they near their ceiling.

    ``analyse_strict`` raises :class:`Overflow` once every table has been evaluated;
    ``analyse_lenient`` turns the same condition into a warning log and a call to the
    optional signalizer.
    """

    def __init__(
        self,
        *,
        logger: Any | None = None,
        signalizer: Signalizer | None = None,
        horizon_days: int = 60,
        default_daily_rate: int = DEFAULT_DAILY_RATE,
        rate_window_days: int = DEFAULT_WINDOW_DAYS,
    ) -> None:
        self.logger = _as_event_logger(logger) if logger is not None else _module_logger
        self.signalizer = signalizer
        self.horizon_days = horizon_days
        self.rate_estimator = RateEstimator(
            default_daily_rate=default_daily_rate,
            window_days=rate_window_days,
        )

    def analyse_strict(
        self,
        descriptors: Iterable[SequenceDescriptor],
        horizon_days: int | None = None,
    ) -> AnalysisReport:
        horizon = self.horizon_days if horizon_days is None else horizon_days
        predictor = OverflowPredictor(horizon)
        report = AnalysisReport(horizon_days=horizon)

        for table, descriptor in group_by_table(descriptors).items():
            verdict = self._analyse_table(table, descriptor, predictor)
            if verdict is not None:
                report.add(verdict)

        if report.has_breaches:
            raise Overflow(report.message(), report)
        return report

    def analyse_lenient(
        self,
        descriptors: Iterable[SequenceDescriptor],
        horizon_days: int | None = None,
    ) -> AnalysisReport:
        try:
            return self.analyse_strict(descriptors, horizon_days)
        except Overflow as exc:
            self._signalize(exc.message)
            return exc.report

    def _analyse_table(
        self,
        table: str,
        descriptor: SequenceDescriptor,
        predictor: OverflowPredictor,
    ) -> OverflowVerdict | None:
        if descriptor.is_abstract():
            self.logger.debug("sequence.skipped", table=table, reason="abstract")
            return None

        entry = descriptor.last_entry()
        if entry is None:
            self.logger.debug("sequence.skipped", table=table, reason="empty")
            return None

        column, sql_type = descriptor.primary_key_column()
        try:
            ceiling = require_ceiling(sql_type)
        except UnsupportedType as exc:
            self.logger.warning(
                "sequence.unsupported_type",
                table=table,
                column=column,
                sql_type=exc.type_name,
            )
            return None

        current_value = int(entry.identifier_value)
        rate = self.rate_estimator.estimate(descriptor, entry.created_at)
        projection = predictor.project(current_value, ceiling, rate)
        risk = classify_risk(projection.remaining_capacity, projection.within_horizon)

        if risk is RiskLevel.OVERFLOWED:
            self.logger.warning("sequence.overflowed", table=table, column=column)
        elif risk is RiskLevel.SOON:
            self.logger.warning(
                "sequence.overflow_soon",
                table=table,
                column=column,
                remaining=projection.remaining_capacity,
                days_to_overflow=projection.days_to_overflow,
            )
        else:
            self.logger.info(
                "sequence.safe",
                table=table,
                column=column,
                horizon_days=predictor.horizon_days,
            )

        return OverflowVerdict(
            table=table,
            column=column,
            current_value=current_value,
            ceiling=ceiling,
            daily_rate=rate,
            remaining_capacity=projection.remaining_capacity,
            days_to_overflow=projection.days_to_overflow,
            risk=risk,
        )

    def _signalize(self, message: str) -> None:
        self.logger.warning("overflow.signalized", summary=message)
        if self.signalizer is not None:
            self.signalizer.signalize(message)
