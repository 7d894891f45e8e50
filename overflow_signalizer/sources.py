"""SQLAlchemy-backed sequence descriptors."""

from __future__ import annotations

import importlib
import re
from datetime import datetime
from typing import Any, Iterable, Iterator

from sqlalchemy import Column, func, inspect as sa_inspect, select
from sqlalchemy.orm import DeclarativeBase, Mapper, Session, sessionmaker

from .models.sequences import Entry

CREATED_AT_COLUMN = "created_at"

_TYPE_ARGS_PATTERN = re.compile(r"\(.*?\)")


class ModelSequence:
    """Expose a declarative model's primary key as a trackable sequence.

    Every call opens a short-lived session from ``session_factory``; database errors
    are left to propagate to the caller.
    """

    def __init__(self, model: type, session_factory: sessionmaker[Session]) -> None:
        self.model = model
        self.session_factory = session_factory
        self._mapper: Mapper[Any] | None = sa_inspect(model, raiseerr=False)

    def __repr__(self) -> str:
        return f"ModelSequence({self.model.__name__}, table={self.table_name!r})"

    @property
    def table_name(self) -> str:
        if self._mapper is None:
            name = getattr(self.model, "__tablename__", None)
            return name if isinstance(name, str) else self.model.__name__
        return self._mapper.local_table.name

    def is_abstract(self) -> bool:
        return self._mapper is None

    def _require_mapper(self) -> Mapper[Any]:
        if self._mapper is None:
            raise TypeError(f"{self.model.__name__} is not a mapped class")
        return self._mapper

    def _primary_key(self) -> Column[Any]:
        return self._require_mapper().primary_key[0]

    def _created_at(self) -> Column[Any] | None:
        return self._require_mapper().local_table.c.get(CREATED_AT_COLUMN)

    def primary_key_column(self) -> tuple[str, str]:
        column = self._primary_key()
        with self.session_factory() as session:
            dialect = session.get_bind().dialect
        compiled = column.type.compile(dialect=dialect)
        return column.name, _TYPE_ARGS_PATTERN.sub("", compiled).strip().lower()

    def last_entry(self) -> Entry | None:
        pk = self._primary_key()
        created_at = self._created_at()
        columns = [pk] if created_at is None else [pk, created_at]

        stmt = select(*columns).order_by(pk.desc()).limit(1)
        with self.session_factory() as session:
            row = session.execute(stmt).first()

        if row is None:
            return None
        return Entry(
            identifier_value=row[0],
            created_at=row[1] if created_at is not None else None,
        )

    def count_created_between(self, start: datetime, end: datetime) -> int:
        created_at = self._created_at()
        if created_at is None:
            raise TypeError(f"{self.model.__name__} has no {CREATED_AT_COLUMN} column")

        stmt = (
            select(func.count())
            .select_from(self._require_mapper().local_table)
            .where(created_at.between(start, end))
        )
        with self.session_factory() as session:
            return int(session.execute(stmt).scalar_one())


def iter_model_classes(base: type) -> Iterator[type]:
    """Yield subclasses of ``base`` depth first in definition order."""

    seen: set[type] = set()
    stack = list(reversed(base.__subclasses__()))
    while stack:
        cls = stack.pop()
        if cls in seen:
            continue
        seen.add(cls)
        yield cls
        stack.extend(reversed(cls.__subclasses__()))


def _import_target(target: str) -> Any:
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise ValueError(f"Model target must look like 'package.module:Name', got {target!r}")

    obj: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        obj = getattr(obj, part)
    return obj


def _is_declarative_base(obj: Any) -> bool:
    if not isinstance(obj, type):
        return False
    if DeclarativeBase in obj.__bases__:
        return True
    return sa_inspect(obj, raiseerr=False) is None and hasattr(obj, "registry")


def load_descriptors(
    targets: Iterable[str],
    session_factory: sessionmaker[Session],
) -> list[ModelSequence]:
    """Build descriptors for the import targets, expanding declarative bases."""

    descriptors: list[ModelSequence] = []
    for target in targets:
        obj = _import_target(target)
        if _is_declarative_base(obj):
            models = list(iter_model_classes(obj))
        else:
            models = [obj]
        descriptors.extend(ModelSequence(model, session_factory) for model in models)
    return descriptors
