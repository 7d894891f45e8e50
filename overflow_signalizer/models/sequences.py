"""Sequence descriptors, type ceilings and analysis results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Protocol, runtime_checkable

from ..errors import UnsupportedType

TYPE_CEILINGS: Mapping[str, int] = MappingProxyType(
    {
        "smallint": 32_767,
        "integer": 2_147_483_647,
        "bigint": 9_223_372_036_854_775_807,
    }
)


def _normalize_type_name(type_name: str) -> str:
    return type_name.strip().lower()


def ceiling_for(type_name: str) -> int | None:
    """Return the largest value ``type_name`` can hold, or None when unsupported."""

    return TYPE_CEILINGS.get(_normalize_type_name(type_name))


def require_ceiling(type_name: str) -> int:
    ceiling = ceiling_for(type_name)
    if ceiling is None:
        raise UnsupportedType(type_name)
    return ceiling


class RiskLevel(str, Enum):
    SAFE = "safe"
    SOON = "soon"
    OVERFLOWED = "overflowed"


@dataclass(frozen=True, slots=True)
class Entry:
    """Most recent row of a sequence.

    ``identifier_value`` is the raw key as read; it is only treated as a number once
    the column type is known to have a ceiling.
    """

    identifier_value: Any
    created_at: datetime | None = None


@runtime_checkable
class SequenceDescriptor(Protocol):
    """Read-only view of a trackable sequence supplied by the caller."""

    @property
    def table_name(self) -> str: ...

    def is_abstract(self) -> bool: ...

    def primary_key_column(self) -> tuple[str, str]: ...

    def last_entry(self) -> Entry | None: ...

    def count_created_between(self, start: datetime, end: datetime) -> int: ...


@dataclass(frozen=True, slots=True)
class OverflowVerdict:
    table: str
    column: str
    current_value: int
    ceiling: int
    daily_rate: int
    remaining_capacity: int
    days_to_overflow: int
    risk: RiskLevel


def _render_names(names: list[str]) -> str:
    return "[" + ", ".join(names) + "]"


@dataclass(slots=True)
class AnalysisReport:
    """Verdicts of a single run, with breaches partitioned in discovery order."""

    horizon_days: int
    verdicts: list[OverflowVerdict] = field(default_factory=list)
    overflowed: list[str] = field(default_factory=list)
    overflowing_soon: list[str] = field(default_factory=list)

    def add(self, verdict: OverflowVerdict) -> None:
        self.verdicts.append(verdict)
        if verdict.risk is RiskLevel.OVERFLOWED:
            self.overflowed.append(verdict.table)
        elif verdict.risk is RiskLevel.SOON:
            self.overflowing_soon.append(verdict.table)

    @property
    def has_breaches(self) -> bool:
        return bool(self.overflowed or self.overflowing_soon)

    def message(self) -> str:
        """Render the aggregate alert text."""

        return (
            f"Overflowed tables: {_render_names(self.overflowed)}. "
            f"Overflow soon tables: {_render_names(self.overflowing_soon)}"
        )
