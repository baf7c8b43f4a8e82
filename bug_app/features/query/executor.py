"""Search, filter, sort and group bug records from a query snapshot.

Both list views go through the same pipeline:

1. search: free text against title, description, people, status, priority, tags
2. filter: every active clause must hold (see predicates.matches_all)
3. sort: locale-aware, stable, on the lower-cased sort field
4. group (search view only): ordered buckets keyed by the sort field

No stage raises past this module. Records are never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import cmp_to_key

from bug_app.core.collation import collation_key, ensure_collation
from bug_app.core.config import (
    DEFAULT_GROUP_LABEL,
    FIELD_DUE_DATE,
    GROUP_FALLBACK_LABELS,
    SORT_ASCENDING,
)
from bug_app.core.dates import format_date_label
from bug_app.core.models import FilterClause, QueryResult, QuerySnapshot, Record

from .accessor import get_attr, get_path, resolve_text
from .predicates import inert_combinators, matches_all
from .state import QueryStore

logger = logging.getLogger(__name__)


def _snapshot_of(state: QueryStore | QuerySnapshot) -> QuerySnapshot:
    if isinstance(state, QueryStore):
        return state.snapshot
    return state


# ------------------ Stage 1: search ------------------
def _lower(value) -> str | None:
    # Non-string values raise here on purpose: the record is then left out.
    if value is None:
        return None
    return value.lower()


def _search_tags(record: Record) -> list[str]:
    # Same rule as the other searched fields: a non-string tag excludes the record.
    tags = get_attr(record, "tags")
    if tags is None:
        return []
    if isinstance(tags, str):
        return [t.strip().lower() for t in tags.split(",") if t.strip()]
    if not isinstance(tags, (list, tuple)):
        raise TypeError(f"tags of type {type(tags).__name__} are not searchable")
    return [_lower(tag) for tag in tags if tag is not None]


def _search_hit(record: Record, query: str) -> bool:
    candidates = (
        get_attr(record, "title"),
        get_attr(record, "description"),
        get_path(record, "assignedTo", "name"),
        get_path(record, "assignee", "name"),
        get_path(record, "assignee", "username"),
        get_path(record, "createdBy", "name"),
        get_attr(record, "status"),
        get_attr(record, "priority"),
    )
    for value in candidates:
        text = _lower(value)
        if text is not None and query in text:
            return True
    return any(query in text for text in _search_tags(record))


def search_records(records: Iterable[Record], search_text: str) -> list[Record]:
    """Keep records whose text fields contain ``search_text`` (case-insensitive)."""
    try:
        items = list(records)
    except TypeError as exc:
        logger.error("Search input is not a collection: %s", exc)
        return records
    query = (search_text or "").strip().lower()
    if not query:
        return items
    out: list[Record] = []
    for record in items:
        try:
            if _search_hit(record, query):
                out.append(record)
        except Exception as exc:
            logger.warning("Error searching record, excluding it: %s", exc)
    return out


# ------------------ Stage 2: filter ------------------
def filter_records(records: Iterable[Record], clauses: Iterable[FilterClause]) -> list[Record]:
    """Keep records satisfying every active clause; no active clause keeps all."""
    items = list(records)
    active = [c for c in clauses if c.is_active]
    if not active:
        return items
    ignored = inert_combinators(active)
    if ignored:
        logger.debug("OR combinator ignored on clause id(s) %s", [c.id for c in ignored])
    return [record for record in items if matches_all(record, active)]


def search_and_filter(records: Iterable[Record], state: QueryStore | QuerySnapshot) -> list[Record]:
    """Stages 1 and 2 together; returns ``records`` untouched on a collection error."""
    snapshot = _snapshot_of(state)
    try:
        searched = search_records(records, snapshot.search_text)
        return filter_records(searched, snapshot.clauses)
    except Exception as exc:
        logger.error("Error filtering records, returning input unchanged: %s", exc)
        return records


# ------------------ Stage 3: sort ------------------
def _sort_key(text: str) -> tuple[str, str]:
    try:
        return collation_key(text)
    except Exception as exc:
        logger.warning("Cannot build collation key for %r, sorting on raw text: %s", text, exc)
        return text, text


def _compare_keys(left: tuple[str, str], right: tuple[str, str]) -> int:
    try:
        return (left > right) - (left < right)
    except Exception as exc:
        logger.warning("Error comparing %r and %r, treating as equal: %s", left, right, exc)
        return 0


def sort_records(records: Iterable[Record], sort_field: str, sort_direction: str) -> list[Record]:
    """Stable, locale-aware sort on the lower-cased ``sort_field`` text.

    ``Ascending`` gives natural order; anything else sorts descending. Ties
    keep their input order in both directions.
    """
    try:
        ensure_collation()
        decorated = [(_sort_key(resolve_text(record, sort_field).lower()), record) for record in records]
        if sort_direction == SORT_ASCENDING:
            compare = cmp_to_key(lambda a, b: _compare_keys(a[0], b[0]))
        else:
            compare = cmp_to_key(lambda a, b: _compare_keys(b[0], a[0]))
        return [record for _, record in sorted(decorated, key=compare)]
    except Exception as exc:
        logger.error("Error sorting records, returning input unchanged: %s", exc)
        return records


# ------------------ Stage 4: group ------------------
def group_key(record: Record, group_field: str) -> str:
    """Label of the bucket ``record`` falls into when grouped by ``group_field``."""
    fallback = GROUP_FALLBACK_LABELS.get(group_field)
    if fallback is None:
        return DEFAULT_GROUP_LABEL
    value = resolve_text(record, group_field)
    if not value:
        return fallback
    if group_field == FIELD_DUE_DATE:
        return format_date_label(value)
    return value


def group_records(records: Iterable[Record], group_field: str) -> dict[str, list[Record]]:
    """Partition ``records`` into buckets ordered by first occurrence."""
    grouped: dict[str, list[Record]] = {}
    for record in records:
        grouped.setdefault(group_key(record, group_field), []).append(record)
    return grouped


# ------------------ Pipeline ------------------
def execute(
    records: Iterable[Record],
    state: QueryStore | QuerySnapshot,
    *,
    group: bool = False,
) -> QueryResult:
    """Run search, filter, sort and (optionally) group over ``records``."""
    snapshot = _snapshot_of(state)
    if records is None:
        return QueryResult(grouped={} if group else None)
    try:
        items = list(records)
    except TypeError:
        logger.error("Query input of type %s is not iterable, returning it unchanged", type(records).__name__)
        return QueryResult(filtered=records, sorted=records, grouped=None)

    filtered = search_and_filter(items, snapshot)
    ordered = sort_records(filtered, snapshot.sort_field, snapshot.sort_direction)
    grouped = group_records(ordered, snapshot.sort_field) if group else None
    logger.debug(
        "Query matched %d record(s), sorted by %s %s",
        len(ordered),
        snapshot.sort_field,
        snapshot.sort_direction,
    )
    return QueryResult(filtered=list(filtered), sorted=list(ordered), grouped=grouped)


def process_records(records: Iterable[Record], state: QueryStore | QuerySnapshot) -> dict[str, list[Record]]:
    """Filter, sort and group in one call."""
    result = execute(records, state, group=True)
    return result.grouped or {}
