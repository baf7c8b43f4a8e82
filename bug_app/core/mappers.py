"""Mapping raw bug API payloads into record lists and display DataFrames."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import pandas as pd

from bug_app.features.query.accessor import get_attr, resolve_text

from .config import DATE_FIELDS, FIELD_STATUS, GROUP_FALLBACK_LABELS, TABLE_COLUMNS
from .dates import format_date_label
from .models import Record
from .status import status_label


def extract_bug_list(payload: Any) -> list[Record]:
    """Pull the record list out of a bug endpoint response.

    The endpoints answer with a bare list, ``{"data": [...]}`` or
    ``{"bugs": [...]}``. Anything else yields an empty list.
    """
    if isinstance(payload, list):
        return list(payload)
    if isinstance(payload, dict):
        for key in ("data", "bugs"):
            value = payload.get(key)
            if isinstance(value, list):
                return list(value)
    return []


def record_key(record: Record) -> str | None:
    """Stable list key: server records carry ``_id``, drafts carry ``id``."""
    for name in ("_id", "id"):
        value = get_attr(record, name)
        if value is not None and value != "":
            return str(value)
    return None


def _cell(record: Record, field: str) -> str:
    text = resolve_text(record, field)
    if field == FIELD_STATUS:
        text = status_label(text)
    if not text:
        return GROUP_FALLBACK_LABELS.get(field, "")
    if field in DATE_FIELDS:
        return format_date_label(text)
    return text


def records_to_dataframe(
    records: Iterable[Record],
    columns: Sequence[tuple[str, str]] = TABLE_COLUMNS,
) -> pd.DataFrame:
    """Build a display table, one row per record in input order.

    ``columns`` is a sequence of (column name, logical field) pairs. ``key``
    and ``title`` are always the first two columns.
    """
    rows = []
    for record in records:
        row = {
            "key": record_key(record),
            "title": str(get_attr(record, "title") or ""),
        }
        for name, field in columns:
            row[name] = _cell(record, field)
        rows.append(row)
    names = ["key", "title"] + [name for name, _ in columns]
    return pd.DataFrame(rows, columns=names)
