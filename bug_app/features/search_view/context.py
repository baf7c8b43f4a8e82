"""Pure helpers to build the global search results view (no UI toolkit)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from bug_app.core.config import SETTINGS, AppSettings
from bug_app.core.mappers import extract_bug_list
from bug_app.core.models import QuerySnapshot, Record
from bug_app.features.query.executor import execute
from bug_app.features.query.state import QueryStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SearchResultsContext:
    """Context data for the Search Results page."""

    search_text: str
    group_field: str
    sort_direction: str
    records: list[Record] = field(default_factory=list)
    groups: dict[str, list[Record]] = field(default_factory=dict)
    group_counts: dict[str, int] = field(default_factory=dict)
    expanded_groups: set[str] = field(default_factory=set)
    active_filter_labels: list[str] = field(default_factory=list)
    is_customized: bool = False

    @property
    def total(self) -> int:
        return len(self.records)


def initial_expanded_groups(group_keys: list[str], settings: AppSettings = SETTINGS) -> set[str]:
    """Expand everything for a few groups, otherwise only the first ones."""
    if len(group_keys) <= settings.expand_all_threshold:
        return set(group_keys)
    return set(group_keys[: settings.expand_first_n])


def toggle_group(expanded: set[str], group_key: str) -> set[str]:
    """Return a new expanded set with ``group_key`` flipped."""
    out = set(expanded)
    if group_key in out:
        out.remove(group_key)
    else:
        out.add(group_key)
    return out


def build_search_context(
    payload: Any,
    state: QueryStore | QuerySnapshot,
    settings: AppSettings = SETTINGS,
) -> SearchResultsContext:
    """Build context for the Search Results page.

    ``payload`` is the team-wide bug endpoint response; records are searched,
    filtered, sorted and grouped by the current sort field.
    """
    snapshot = state.snapshot if isinstance(state, QueryStore) else state
    records = extract_bug_list(payload)
    if not records:
        logger.debug("Search view received no records")

    result = execute(records, snapshot, group=True)
    groups = result.grouped or {}
    return SearchResultsContext(
        search_text=snapshot.search_text,
        group_field=snapshot.sort_field,
        sort_direction=snapshot.sort_direction,
        records=result.sorted,
        groups=groups,
        group_counts=dict(result.group_counts),
        expanded_groups=initial_expanded_groups(list(groups), settings),
        active_filter_labels=[c.label() for c in snapshot.active_clauses],
        is_customized=bool(snapshot.search_text) or snapshot.has_active_filters or not snapshot.is_default_sort,
    )
