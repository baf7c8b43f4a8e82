"""Per-clause matching rules for the filter panel."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bug_app.core.config import (
    COMBINATOR_OR,
    FIELD_PRIORITY,
    FIELD_STATUS,
    FIELD_TAGS,
    STRICT_ABSENCE_FIELDS,
)
from bug_app.core.models import FilterClause, Record

from .accessor import Unexpected, as_text, is_empty, resolve, tag_list

logger = logging.getLogger(__name__)


def _equals(field_value, needle: str) -> bool:
    if isinstance(field_value, list):
        return any(v.lower() == needle for v in field_value)
    return as_text(field_value).lower() == needle


def _contains(field_value, needle: str) -> bool:
    if isinstance(field_value, list):
        return any(needle in v.lower() for v in field_value)
    return needle in as_text(field_value).lower()


def matches(record: Record, clause: FilterClause) -> bool:
    """Return True when ``record`` satisfies one active ``clause``.

    A record with no value for the clause field passes, except for Status and
    Priority where absence fails the clause. A value of a shape the accessor
    does not understand, and any evaluation error, is logged and counts as a
    pass.
    """
    try:
        field_value = resolve(record, clause.field)
        if is_empty(field_value):
            return clause.field not in STRICT_ABSENCE_FIELDS
        if isinstance(field_value, Unexpected):
            logger.warning(
                "Unexpected %s value of type %s, letting the record through",
                clause.field,
                type(field_value.raw).__name__,
            )
            return True

        needle = str(clause.value).lower()
        if clause.field in (FIELD_STATUS, FIELD_PRIORITY):
            return _equals(field_value, needle)
        if clause.field == FIELD_TAGS:
            return any(needle in tag.lower() for tag in tag_list(record))
        # Assignee, Created by and date fields all match on containment
        return _contains(field_value, needle)
    except Exception as exc:
        logger.warning("Error applying %s filter to record: %s", clause.field, exc)
        return True


def matches_all(record: Record, clauses: Iterable[FilterClause]) -> bool:
    """Every active clause must hold.

    Combinators are kept on the clauses for display only; an ``OR`` does not
    change the result.
    """
    return all(matches(record, clause) for clause in clauses if clause.is_active)


def inert_combinators(clauses: Iterable[FilterClause]) -> list[FilterClause]:
    """Active clauses (after the first) whose ``OR`` combinator is ignored."""
    active = [c for c in clauses if c.is_active]
    return [c for c in active[1:] if c.combinator == COMBINATOR_OR]
