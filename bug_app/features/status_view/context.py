"""Pure helpers to build the per-status board columns (no UI toolkit)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from bug_app.core.config import DEFAULT_DRAFT_STATUS, SETTINGS, STATUS_ORDER
from bug_app.core.mappers import extract_bug_list, records_to_dataframe
from bug_app.core.models import QuerySnapshot, Record
from bug_app.core.status import same_status, status_label
from bug_app.features.query.accessor import get_attr
from bug_app.features.query.executor import search_and_filter, sort_records
from bug_app.features.query.state import QueryStore


@dataclass(slots=True)
class StatusSectionContext:
    """Context data for one status column of the board."""

    status: str
    records: list[Record] = field(default_factory=list)
    table: pd.DataFrame = field(default_factory=pd.DataFrame)
    server_count: int = 0
    draft_count: int = 0

    @property
    def count(self) -> int:
        return len(self.records)


def partition_by_status(records: Iterable[Record], status: str, default: str | None = None) -> list[Record]:
    """Records whose normalized status equals ``status``.

    ``default`` stands in for records that carry no status at all (including
    placeholder text such as "null").
    """
    out = []
    for record in records:
        raw = status_label(get_attr(record, "status"))
        if not raw and default is not None:
            raw = default
        if raw and same_status(raw, status):
            out.append(record)
    return out


def build_status_context(
    server_payload: Any,
    drafts: Iterable[Record] | None,
    status: str,
    state: QueryStore | QuerySnapshot,
) -> StatusSectionContext:
    """Build context for one status column.

    Parameters
    ----------
    server_payload : Any
        Response of the bug endpoint (list, ``{"data": [...]}`` or ``{"bugs": [...]}``).
    drafts : iterable of records, optional
        Locally drafted bugs not yet persisted; drafts without a status belong
        to the default draft column.
    status : str
        Column status, compared after normalization.
    state : QueryStore or QuerySnapshot
        Shared search/filter/sort state.

    Returns
    -------
    StatusSectionContext
        Server records first, then drafts, searched, filtered and sorted.
    """
    server = partition_by_status(extract_bug_list(server_payload), status)
    local = partition_by_status(list(drafts or []), status, default=DEFAULT_DRAFT_STATUS)

    snapshot = state.snapshot if isinstance(state, QueryStore) else state
    filtered = search_and_filter(server + local, snapshot)
    ordered = sort_records(filtered, snapshot.sort_field, snapshot.sort_direction)

    return StatusSectionContext(
        status=status,
        records=ordered,
        table=records_to_dataframe(ordered[: SETTINGS.max_table_rows]),
        server_count=len(server),
        draft_count=len(local),
    )


def build_board(
    server_payload: Any,
    drafts: Iterable[Record] | None,
    state: QueryStore | QuerySnapshot,
    statuses: Sequence[str] = STATUS_ORDER,
) -> dict[str, StatusSectionContext]:
    """Build every column of the board from one snapshot of the query state."""
    snapshot = state.snapshot if isinstance(state, QueryStore) else state
    draft_list = list(drafts or [])
    return {status: build_status_context(server_payload, draft_list, status, snapshot) for status in statuses}
