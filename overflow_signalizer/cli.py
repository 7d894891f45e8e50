"""Typer-based CLI for running overflow checks."""

from __future__ import annotations

from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.orm import sessionmaker

from overflow_signalizer.core.config import get_settings
from overflow_signalizer.core.db import build_engine
from overflow_signalizer.core.logging import setup_logging
from overflow_signalizer.errors import Overflow
from overflow_signalizer.models.sequences import AnalysisReport, RiskLevel
from overflow_signalizer.services.runner import OverflowSignalizer
from overflow_signalizer.services.signalizers import Signalizer, WebhookSignalizer, build_signalizer
from overflow_signalizer.sources import load_descriptors

app = typer.Typer(help="Predict primary key sequence overflow")
console = Console()

_RISK_STYLES = {
    RiskLevel.SAFE: "green",
    RiskLevel.SOON: "yellow",
    RiskLevel.OVERFLOWED: "bold red",
}


def _render_report(report: AnalysisReport) -> None:
    if not report.verdicts:
        console.print("No sequences analysed.")
        return

    table = Table(show_header=True, header_style="bold")
    for header in ("Table", "Column", "Current", "Ceiling", "Per day", "Days left", "Risk"):
        table.add_column(header)

    for verdict in report.verdicts:
        style = _RISK_STYLES[verdict.risk]
        table.add_row(
            verdict.table,
            verdict.column,
            f"{verdict.current_value:,}",
            f"{verdict.ceiling:,}",
            f"{verdict.daily_rate:,}",
            f"{verdict.days_to_overflow:,}",
            f"[{style}]{verdict.risk.value}[/{style}]",
        )

    console.print(table)


@app.callback()
def main() -> None:
    """Overflow signalizer utilities."""


@app.command()
def check(
    models: Optional[List[str]] = typer.Option(
        None,
        "--model",
        "-m",
        help="Import target 'package.module:Name' of a declarative base or model. Repeatable.",
    ),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="SQLAlchemy URL of the monitored database."),
    horizon_days: Optional[int] = typer.Option(None, "--horizon-days", min=0, help="Days ahead to treat overflow as actionable."),
    default_daily_rate: Optional[int] = typer.Option(
        None,
        "--default-daily-rate",
        min=1,
        help="Assumed inserts per day for tables without created_at.",
    ),
    strict: bool = typer.Option(True, "--strict/--lenient", help="Exit non-zero on breach, or only signal it."),
    webhook_url: Optional[str] = typer.Option(None, "--webhook-url", help="Incoming webhook notified in lenient mode."),
) -> None:
    """Analyse every sequence of the given models."""

    settings = get_settings()
    setup_logging(settings.log_level, json_output=False)

    targets = models or settings.models
    if not targets:
        typer.secho("No models given; pass --model or set MODELS.", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    engine = build_engine(database_url or settings.database_url)
    session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    signalizer: Signalizer | None
    if webhook_url:
        signalizer = WebhookSignalizer(webhook_url, timeout=settings.signalizer_timeout)
    else:
        signalizer = build_signalizer(settings)

    runner = OverflowSignalizer(
        signalizer=signalizer,
        horizon_days=settings.horizon_days if horizon_days is None else horizon_days,
        default_daily_rate=default_daily_rate or settings.default_daily_rate,
        rate_window_days=settings.rate_window_days,
    )

    try:
        descriptors = load_descriptors(targets, session_factory)
        typer.secho(f"Analysing {len(descriptors)} models...", fg=typer.colors.CYAN)

        if not strict:
            report = runner.analyse_lenient(descriptors)
            _render_report(report)
            if report.has_breaches:
                typer.secho(report.message(), fg=typer.colors.YELLOW)
            return

        try:
            report = runner.analyse_strict(descriptors)
        except Overflow as exc:
            _render_report(exc.report)
            typer.secho(exc.message, fg=typer.colors.RED)
            raise typer.Exit(code=1) from exc
    finally:
        engine.dispose()

    _render_report(report)
    typer.secho("No sequence overflows within the horizon.", fg=typer.colors.GREEN)


if __name__ == "__main__":  # pragma: no cover
    app()
