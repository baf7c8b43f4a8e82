"""Shared, user-editable query state for the list and search views.

One ``QueryStore`` is created per session and passed to every view that needs
it. Writers go through the mutation methods below, which are serialized by a
lock; readers take an immutable ``QuerySnapshot`` and never see a half-applied
update.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from typing import Any

from bug_app.core.config import (
    COMBINATORS,
    DEFAULT_COMBINATOR,
    DEFAULT_SORT_DIRECTION,
    DEFAULT_SORT_FIELD,
    FILTER_FIELDS,
    SORT_DIRECTIONS,
    SORT_FIELDS,
)
from bug_app.core.errors import QueryStateError
from bug_app.core.models import FilterClause, QuerySnapshot

logger = logging.getLogger(__name__)

Listener = Callable[[QuerySnapshot], None]

# The placeholder clause always uses this id so a reset is recognizable
SEED_CLAUSE_ID = 1

_UPDATABLE = frozenset({"field", "value", "combinator"})
# "" is the unset field of a fresh clause
_CLAUSE_FIELDS = frozenset(FILTER_FIELDS) | frozenset(SORT_FIELDS) | {""}


def _seed_clause() -> FilterClause:
    return FilterClause(id=SEED_CLAUSE_ID)


def _check_clause(field: str, combinator: str) -> None:
    if not isinstance(field, str) or field not in _CLAUSE_FIELDS:
        raise QueryStateError(f"Unknown filter field: {field!r}")
    if combinator not in COMBINATORS:
        raise QueryStateError(f"Unknown combinator: {combinator!r}")


class QueryStore:
    def __init__(self, snapshot: QuerySnapshot | None = None):
        self._lock = threading.RLock()
        self._ids = itertools.count(SEED_CLAUSE_ID + 1)
        self._listeners: list[Listener] = []
        self._snapshot = snapshot or QuerySnapshot(clauses=(_seed_clause(),))
        if not self._snapshot.clauses:
            self._snapshot = replace(self._snapshot, clauses=(_seed_clause(),))
        highest = max(c.id for c in self._snapshot.clauses)
        if highest > SEED_CLAUSE_ID:
            self._ids = itertools.count(highest + 1)

    # ------------------ Reads ------------------
    @property
    def snapshot(self) -> QuerySnapshot:
        return self._snapshot

    @property
    def search_text(self) -> str:
        return self._snapshot.search_text

    @property
    def clauses(self) -> tuple[FilterClause, ...]:
        return self._snapshot.clauses

    @property
    def sort_field(self) -> str:
        return self._snapshot.sort_field

    @property
    def sort_direction(self) -> str:
        return self._snapshot.sort_direction

    @property
    def has_active_filters(self) -> bool:
        return self._snapshot.has_active_filters

    # ------------------ Subscriptions ------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for committed updates; returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, snapshot: QuerySnapshot) -> QuerySnapshot:
        # Caller holds the lock
        self._snapshot = snapshot
        return snapshot

    def _notify(self, snapshot: QuerySnapshot) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(snapshot)
            except Exception as exc:
                logger.warning("Query state listener %r failed: %s", listener, exc)

    def _apply(self, change: Callable[[QuerySnapshot], QuerySnapshot]) -> QuerySnapshot:
        with self._lock:
            snapshot = self._commit(change(self._snapshot))
        self._notify(snapshot)
        return snapshot

    # ------------------ Search / sort ------------------
    def set_search_text(self, text: str) -> QuerySnapshot:
        """Replace the search text verbatim (trimmed only when searching)."""
        return self._apply(lambda s: replace(s, search_text="" if text is None else str(text)))

    def set_sort_field(self, field: str) -> QuerySnapshot:
        return self._apply(lambda s: replace(s, sort_field=field))

    def set_sort_direction(self, direction: str) -> QuerySnapshot:
        if direction not in SORT_DIRECTIONS:
            raise QueryStateError(f"Unknown sort direction: {direction!r}")
        return self._apply(lambda s: replace(s, sort_direction=direction))

    # ------------------ Clauses ------------------
    def add_clause(self) -> FilterClause:
        with self._lock:
            clause = FilterClause(id=next(self._ids), combinator=DEFAULT_COMBINATOR)
            snapshot = self._commit(replace(self._snapshot, clauses=self._snapshot.clauses + (clause,)))
        self._notify(snapshot)
        return clause

    def remove_clause(self, clause_id: int) -> QuerySnapshot:
        """Remove a clause; removing the last one re-seeds an empty placeholder."""

        def change(s: QuerySnapshot) -> QuerySnapshot:
            remaining = tuple(c for c in s.clauses if c.id != clause_id)
            if not remaining:
                logger.debug("Removed last filter clause, re-seeding placeholder")
                remaining = (_seed_clause(),)
            return replace(s, clauses=remaining)

        return self._apply(change)

    def update_clause(self, clause_id: int, changes: Mapping[str, Any] | None = None, **fields: Any) -> FilterClause:
        """Shallow-merge ``changes`` into the clause with ``clause_id``."""
        merged = dict(changes or {})
        merged.update(fields)
        unknown = set(merged) - _UPDATABLE
        if unknown:
            raise QueryStateError(f"Cannot update clause attribute(s): {sorted(unknown)}")
        for key in ("field", "value"):
            if key in merged and merged[key] is None:
                merged[key] = ""
        _check_clause(merged.get("field", ""), merged.get("combinator", DEFAULT_COMBINATOR))

        with self._lock:
            clauses = list(self._snapshot.clauses)
            for index, clause in enumerate(clauses):
                if clause.id == clause_id:
                    updated = replace(clause, **merged)
                    clauses[index] = updated
                    break
            else:
                raise QueryStateError(f"No filter clause with id {clause_id!r}")
            snapshot = self._commit(replace(self._snapshot, clauses=tuple(clauses)))
        self._notify(snapshot)
        return updated

    def update_clauses(self, clauses: Iterable[FilterClause]) -> QuerySnapshot:
        """Replace the whole clause list (an empty list re-seeds the placeholder)."""
        new_clauses = tuple(clauses)
        for clause in new_clauses:
            _check_clause(clause.field, clause.combinator)

        def change(s: QuerySnapshot) -> QuerySnapshot:
            if not new_clauses:
                return replace(s, clauses=(_seed_clause(),))
            highest = max(c.id for c in new_clauses)
            self._ids = itertools.count(max(highest + 1, next(self._ids)))
            return replace(s, clauses=new_clauses)

        return self._apply(change)

    def reset_clauses(self) -> QuerySnapshot:
        return self._apply(lambda s: replace(s, clauses=(_seed_clause(),)))

    def reset_all(self) -> QuerySnapshot:
        return self._apply(
            lambda s: QuerySnapshot(
                search_text="",
                clauses=(_seed_clause(),),
                sort_field=DEFAULT_SORT_FIELD,
                sort_direction=DEFAULT_SORT_DIRECTION,
            )
        )
