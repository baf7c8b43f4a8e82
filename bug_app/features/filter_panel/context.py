"""Pure helpers backing the filter panel and action bar (no UI toolkit)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from bug_app.core.config import COMBINATORS, DATE_FIELDS, FILTER_FIELDS, SORT_DIRECTIONS, SORT_FIELDS
from bug_app.core.field_config import get_field_options
from bug_app.core.models import FilterClause
from bug_app.features.query.state import QueryStore


@dataclass(slots=True)
class ClauseRow:
    clause: FilterClause
    show_combinator: bool
    uses_date_picker: bool
    value_options: list[str] = field(default_factory=list)


@dataclass(slots=True)
class FilterPanelContext:
    rows: list[ClauseRow]
    field_choices: Sequence[str] = FILTER_FIELDS
    combinator_choices: Sequence[str] = COMBINATORS
    sort_field_choices: Sequence[str] = SORT_FIELDS
    sort_direction_choices: Sequence[str] = SORT_DIRECTIONS
    has_active_filters: bool = False


def build_filter_panel_context(store: QueryStore) -> FilterPanelContext:
    snapshot = store.snapshot
    rows = []
    for index, clause in enumerate(snapshot.clauses):
        rows.append(
            ClauseRow(
                clause=clause,
                # The first clause has no predecessor to combine with
                show_combinator=index > 0,
                uses_date_picker=clause.field in DATE_FIELDS,
                value_options=get_field_options(clause.field) if clause.field else [],
            )
        )
    return FilterPanelContext(rows=rows, has_active_filters=snapshot.has_active_filters)


def select_field(store: QueryStore, clause_id: int, field_name: str) -> FilterClause:
    """Point a clause at a new field; the old value no longer applies."""
    return store.update_clause(clause_id, field=field_name, value="")
