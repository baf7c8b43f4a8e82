"""Record query engine: field access, filter clauses, search, sort and grouping."""

from bug_app.features.query.accessor import Unexpected, as_text, resolve, resolve_text, tag_list
from bug_app.features.query.executor import (
    execute,
    filter_records,
    group_key,
    group_records,
    process_records,
    search_and_filter,
    search_records,
    sort_records,
)
from bug_app.features.query.predicates import matches, matches_all
from bug_app.features.query.state import QueryStore

__all__ = [
    "QueryStore",
    "Unexpected",
    "as_text",
    "execute",
    "filter_records",
    "group_key",
    "group_records",
    "matches",
    "matches_all",
    "process_records",
    "resolve",
    "resolve_text",
    "search_and_filter",
    "search_records",
    "sort_records",
    "tag_list",
]
