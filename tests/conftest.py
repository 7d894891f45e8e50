from __future__ import annotations

from datetime import datetime
from typing import Any

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from overflow_signalizer.models.sequences import Entry

from sample_models import Base


class StubSequence:
    """In-memory sequence descriptor that records the queries it receives."""

    def __init__(
        self,
        table_name: str,
        *,
        last: Entry | None = None,
        column: tuple[str, str] = ("id", "integer"),
        abstract: bool = False,
        created_count: int = 0,
        error: Exception | None = None,
    ) -> None:
        self.table_name = table_name
        self._last = last
        self._column = column
        self._abstract = abstract
        self.created_count = created_count
        self.error = error
        self.count_calls: list[tuple[datetime, datetime]] = []
        self.last_entry_calls = 0

    def is_abstract(self) -> bool:
        return self._abstract

    def primary_key_column(self) -> tuple[str, str]:
        return self._column

    def last_entry(self) -> Entry | None:
        self.last_entry_calls += 1
        if self.error is not None:
            raise self.error
        return self._last

    def count_created_between(self, start: datetime, end: datetime) -> int:
        self.count_calls.append((start, end))
        return self.created_count


class StubLogger:
    """Collects structlog-style calls as (level, event, context) tuples."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def _record(self, level: str, event: str, **kwargs: Any) -> None:
        self.records.append((level, event, kwargs))

    def debug(self, event: str, **kwargs: Any) -> None:
        self._record("debug", event, **kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        self._record("info", event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._record("warning", event, **kwargs)

    def events(self, level: str | None = None) -> list[str]:
        return [event for lvl, event, _ in self.records if level is None or lvl == level]


class StubSignalizer:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def signalize(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def stub_logger() -> StubLogger:
    return StubLogger()


@pytest.fixture
def stub_signalizer() -> StubSignalizer:
    return StubSignalizer()


@pytest.fixture
def make_sequence():
    return StubSequence


@pytest.fixture
def sqlite_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'monitored.db'}"


@pytest.fixture
def session_factory(sqlite_url):
    engine = create_engine(sqlite_url)
    Base.metadata.create_all(engine)
    try:
        yield sessionmaker(bind=engine, expire_on_commit=False)
    finally:
        engine.dispose()


@pytest.fixture
def session(session_factory) -> Session:
    with session_factory() as db_session:
        yield db_session
