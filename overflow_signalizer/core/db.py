"""Database utilities for the monitored data source."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from .config import get_settings

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def resolve_database_url(raw_url: str, *, base_dir: Path | None = None) -> str:
    """Anchor relative SQLite paths at ``base_dir`` (the working directory by default)."""

    url = make_url(raw_url)
    if "sqlite" not in url.drivername or not url.database or url.database == ":memory:":
        return raw_url

    db_path = Path(url.database)
    if not db_path.is_absolute():
        db_path = ((base_dir or Path.cwd()) / db_path).resolve()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    url = url.set(database=str(db_path))
    return url.render_as_string(hide_password=False)


def build_engine(raw_url: str) -> Engine:
    return create_engine(resolve_database_url(raw_url), echo=False)


def get_engine() -> Engine:
    """Return a singleton engine for the configured database."""

    global _engine
    if _engine is None:
        _engine = build_engine(get_settings().database_url)
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """Create or return the shared session factory."""

    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory

