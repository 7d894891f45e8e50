from datetime import datetime, timedelta

import pytest
from typer.testing import CliRunner

from overflow_signalizer import cli
from overflow_signalizer.core.config import AppSettings

from sample_models import Order

INT_MAX = 2_147_483_647
TODAY = datetime(2024, 6, 1, 12, 0)

runner = CliRunner()


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch) -> None:
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)


def _seed(session, start_id: int) -> None:
    for offset in range(7):
        session.add(Order(id=start_id + offset, created_at=TODAY - timedelta(days=6 - offset)))
    session.commit()


def test_check_passes_far_from_ceiling(session, sqlite_url) -> None:
    _seed(session, start_id=1)

    result = runner.invoke(cli.app, ["check", "--model", "sample_models:Base", "--database-url", sqlite_url])

    assert result.exit_code == 0, result.output
    assert "No sequence overflows within the horizon." in result.output
    assert "orders" in result.output


def test_check_strict_exits_non_zero(session, sqlite_url) -> None:
    _seed(session, start_id=INT_MAX - 6)

    result = runner.invoke(
        cli.app,
        ["check", "--model", "sample_models:Order", "--database-url", sqlite_url, "--horizon-days", "10"],
    )

    assert result.exit_code == 1
    assert "Overflowed tables: [orders]. Overflow soon tables: []" in result.output


def test_check_lenient_signals_webhook(session, sqlite_url, monkeypatch) -> None:
    _seed(session, start_id=INT_MAX - 13)
    delivered: list[str] = []

    class RecordingSignalizer:
        def __init__(self, url: str, *, timeout: float) -> None:
            self.url = url

        def signalize(self, message: str) -> None:
            delivered.append(message)

    monkeypatch.setattr(cli, "WebhookSignalizer", RecordingSignalizer)

    result = runner.invoke(
        cli.app,
        [
            "check",
            "--model",
            "sample_models:Order",
            "--database-url",
            sqlite_url,
            "--horizon-days",
            "10",
            "--lenient",
            "--webhook-url",
            "https://hooks.example.test/overflow",
        ],
    )

    assert result.exit_code == 0, result.output
    assert delivered == ["Overflowed tables: []. Overflow soon tables: [orders]"]


def test_check_requires_models(monkeypatch) -> None:
    monkeypatch.setattr(cli, "get_settings", lambda: AppSettings(models=[]))

    result = runner.invoke(cli.app, ["check"])

    assert result.exit_code == 1
    assert "No models given" in result.output
