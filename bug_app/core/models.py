"""Domain data models for filter clauses, query snapshots, and query results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .config import DEFAULT_COMBINATOR, DEFAULT_SORT_DIRECTION, DEFAULT_SORT_FIELD

# Records are opaque payload objects (usually dicts decoded from JSON).
Record = Any


@dataclass(frozen=True, slots=True)
class FilterClause:
    id: int
    field: str = ""
    value: str = ""
    combinator: str = DEFAULT_COMBINATOR

    @property
    def is_active(self) -> bool:
        return bool(self.field) and bool(self.value)

    def label(self) -> str:
        return f"{self.field}: {self.value}"


@dataclass(frozen=True, slots=True)
class QuerySnapshot:
    """Immutable view of the query state handed to readers."""

    search_text: str = ""
    clauses: tuple[FilterClause, ...] = ()
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: str = DEFAULT_SORT_DIRECTION

    @property
    def active_clauses(self) -> tuple[FilterClause, ...]:
        return tuple(c for c in self.clauses if c.is_active)

    @property
    def has_active_filters(self) -> bool:
        return any(c.is_active for c in self.clauses)

    @property
    def is_default_sort(self) -> bool:
        return self.sort_field == DEFAULT_SORT_FIELD and self.sort_direction == DEFAULT_SORT_DIRECTION


@dataclass(slots=True)
class QueryResult:
    filtered: list[Record] = field(default_factory=list)
    sorted: list[Record] = field(default_factory=list)
    # Only populated when grouping was requested
    grouped: dict[str, list[Record]] | None = None

    @property
    def group_counts(self) -> Mapping[str, int]:
        if not self.grouped:
            return {}
        return {key: len(items) for key, items in self.grouped.items()}
