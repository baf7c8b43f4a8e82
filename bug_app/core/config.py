"""Central configuration, constants, and shared field definitions."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# =============================================================================
# Locale / Time Settings
# =============================================================================
TIMEZONE = "UTC"
DATE_LABEL_FORMAT = "%Y-%m-%d"
# LC_COLLATE used for sorting; "" takes the locale from the environment
COLLATION_LOCALE = ""

# =============================================================================
# Logical Field Names
# These are the names shown in the filter panel and the group-by menu. Records
# may store each of them in several physical shapes (see query/accessor.py).
# =============================================================================
FIELD_STATUS = "Status"
FIELD_ASSIGNEE = "Assignee"
FIELD_PRIORITY = "Priority"
FIELD_TAGS = "Tags"
FIELD_DUE_DATE = "Due date"
FIELD_START_DATE = "Start date"
FIELD_TASK_TYPE = "Task type"
FIELD_CREATED_BY = "Created by"
FIELD_DATE_CLOSED = "Date closed"
FIELD_DATE_CREATED = "Date created"

# Fields offered in the filter panel, in display order
FILTER_FIELDS: Sequence[str] = (
    FIELD_STATUS,
    FIELD_PRIORITY,
    FIELD_TAGS,
    FIELD_ASSIGNEE,
    FIELD_CREATED_BY,
    FIELD_START_DATE,
    FIELD_DUE_DATE,
    FIELD_DATE_CREATED,
    FIELD_DATE_CLOSED,
)

# Fields offered in the group-by / sort menu
SORT_FIELDS: Sequence[str] = (
    FIELD_ASSIGNEE,
    FIELD_STATUS,
    FIELD_PRIORITY,
    FIELD_TAGS,
    FIELD_DUE_DATE,
    FIELD_TASK_TYPE,
    FIELD_CREATED_BY,
    FIELD_DATE_CLOSED,
    FIELD_DATE_CREATED,
)

# Filter values for these fields come from a date picker
DATE_FIELDS: frozenset[str] = frozenset(
    {
        FIELD_START_DATE,
        FIELD_DUE_DATE,
        FIELD_DATE_CREATED,
        FIELD_DATE_CLOSED,
    }
)

# A record missing one of these fields fails a clause on it; every other field
# passes when absent.
STRICT_ABSENCE_FIELDS: frozenset[str] = frozenset({FIELD_STATUS, FIELD_PRIORITY})

# =============================================================================
# Sorting and Combinators
# =============================================================================
SORT_ASCENDING = "Ascending"
SORT_DESCENDING = "Descending"
SORT_DIRECTIONS: Sequence[str] = (SORT_ASCENDING, SORT_DESCENDING)

COMBINATOR_AND = "AND"
COMBINATOR_OR = "OR"
COMBINATORS: Sequence[str] = (COMBINATOR_AND, COMBINATOR_OR)

DEFAULT_SORT_FIELD = FIELD_ASSIGNEE
DEFAULT_SORT_DIRECTION = SORT_DESCENDING
DEFAULT_COMBINATOR = COMBINATOR_AND

# =============================================================================
# Grouping Labels
# Used when a record has no value for the group-by field. Fields missing from
# this mapping have no grouping rule and collapse into DEFAULT_GROUP_LABEL.
# =============================================================================
GROUP_FALLBACK_LABELS: dict[str, str] = {
    FIELD_STATUS: "No Status",
    FIELD_ASSIGNEE: "Unassigned",
    FIELD_PRIORITY: "No Priority",
    FIELD_TAGS: "No Tags",
    FIELD_CREATED_BY: "Unknown",
    FIELD_DUE_DATE: "No Due Date",
}
DEFAULT_GROUP_LABEL = "All Bugs"

# =============================================================================
# Workflow Status Configuration
# =============================================================================
# Canonical board columns, each one a per-status list view
STATUS_ORDER: Sequence[str] = ("open", "in progress", "resolved", "closed")

# Status used for local drafts created without one
DEFAULT_DRAFT_STATUS = "open"

# =============================================================================
# Filter Panel Value Options (fallback when fields.yaml is absent)
# Date fields use a date picker and have no predefined options.
# =============================================================================
FIELD_VALUE_OPTIONS: dict[str, list[str]] = {
    FIELD_STATUS: ["open", "in-progress", "resolved", "closed"],
    FIELD_PRIORITY: ["low", "medium", "high", "critical"],
    FIELD_TAGS: ["frontend", "backend", "bug", "feature", "ui", "api"],
    FIELD_ASSIGNEE: [],
    FIELD_CREATED_BY: [],
    FIELD_START_DATE: [],
    FIELD_DUE_DATE: [],
    FIELD_DATE_CREATED: [],
    FIELD_DATE_CLOSED: [],
}

# =============================================================================
# Table Columns
# Ordered (column name, logical field) pairs for tabular views.
# =============================================================================
TABLE_COLUMNS: Sequence[tuple[str, str]] = (
    ("status", FIELD_STATUS),
    ("priority", FIELD_PRIORITY),
    ("assignee", FIELD_ASSIGNEE),
    ("created_by", FIELD_CREATED_BY),
    ("tags", FIELD_TAGS),
    ("due_date", FIELD_DUE_DATE),
    ("created", FIELD_DATE_CREATED),
)


@dataclass(slots=True)
class AppSettings:
    max_table_rows: int = 1000
    # Search results: expand every group when there are at most this many,
    # otherwise only the first ``expand_first_n``.
    expand_all_threshold: int = 3
    expand_first_n: int = 2


SETTINGS = AppSettings()
