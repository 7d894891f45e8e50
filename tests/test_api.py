from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from overflow_signalizer.api import deps
from overflow_signalizer.core.config import AppSettings
from overflow_signalizer.main import create_app
from overflow_signalizer.models.sequences import Entry
from overflow_signalizer.services.runner import OverflowSignalizer

INT_MAX = 2_147_483_647
NOW = datetime(2024, 6, 1)


@pytest.fixture
def client_factory(stub_logger, stub_signalizer):
    def _build(descriptors: list) -> TestClient:
        application = create_app()
        application.dependency_overrides[deps.get_descriptors] = lambda: descriptors
        application.dependency_overrides[deps.get_signalizer] = lambda: OverflowSignalizer(
            logger=stub_logger,
            signalizer=stub_signalizer,
            horizon_days=10,
        )
        return TestClient(application)

    return _build


def test_healthcheck_reports_configured_horizon() -> None:
    application = create_app()
    application.dependency_overrides[deps.get_app_settings] = lambda: AppSettings(_env_file=None, horizon_days=21)
    client = TestClient(application)

    response = client.get("/v1/health/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "horizon_days": 21}


def test_sequences_health_ok(client_factory, make_sequence) -> None:
    client = client_factory([make_sequence("orders", last=Entry(7, NOW), created_count=7)])

    response = client.get("/v1/sequences/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_sequences_health_fails_on_breach(client_factory, make_sequence, stub_signalizer) -> None:
    client = client_factory([make_sequence("orders", last=Entry(INT_MAX - 6, NOW), created_count=7)])

    response = client.get("/v1/sequences/health")

    assert response.status_code == 503
    assert response.json() == {"detail": "Overflowed tables: []. Overflow soon tables: [orders]"}
    assert stub_signalizer.messages == []


def test_sequences_health_accepts_horizon(client_factory, make_sequence) -> None:
    client = client_factory([make_sequence("orders", last=Entry(INT_MAX - 6, NOW), created_count=7)])

    response = client.get("/v1/sequences/health", params={"horizon_days": 5})

    assert response.status_code == 200


def test_sequences_report_signals_breaches(client_factory, make_sequence, stub_signalizer) -> None:
    client = client_factory(
        [
            make_sequence("orders", last=Entry(INT_MAX, NOW), created_count=7),
            make_sequence("users", last=Entry(1, NOW), created_count=7),
            make_sequence("empty", last=None),
        ]
    )

    response = client.get("/v1/sequences/report")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "overflow"
    assert payload["horizon_days"] == 10
    assert payload["overflowed"] == ["orders"]
    assert payload["overflow_soon"] == []
    assert payload["message"] == "Overflowed tables: [orders]. Overflow soon tables: []"
    assert [verdict["table"] for verdict in payload["verdicts"]] == ["orders", "users"]
    assert [verdict["risk"] for verdict in payload["verdicts"]] == ["overflowed", "safe"]
    assert stub_signalizer.messages == [payload["message"]]


def test_sequences_report_without_breaches(client_factory, make_sequence, stub_signalizer) -> None:
    client = client_factory([make_sequence("users", last=Entry(1, NOW), created_count=7)])

    payload = client.get("/v1/sequences/report").json()

    assert payload["status"] == "ok"
    assert payload["message"] is None
    assert stub_signalizer.messages == []


def test_root_metadata() -> None:
    client = TestClient(create_app())
    payload = client.get("/").json()
    assert payload["service"] == "Overflow Signalizer"
