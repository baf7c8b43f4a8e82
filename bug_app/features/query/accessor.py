"""Resolve logical fields (Status, Assignee, ...) from heterogeneous bug records.

The same logical field can be stored in several shapes depending on which
endpoint produced the record, or whether it is a local draft:

- assignee as ``"alice"``, ``{"name": "Alice"}``, ``{"username": "alice"}``,
  a list of such objects, or not at all
- created-by as a string or an object
- tags as a list or a single comma-delimited string

Every function here is total and never raises. A missing field resolves to
None; a field present in a shape nothing here understands (an object where a
string was expected) resolves to ``Unexpected`` so callers can tell it apart
from absence.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from bug_app.core.config import (
    FIELD_ASSIGNEE,
    FIELD_CREATED_BY,
    FIELD_DATE_CLOSED,
    FIELD_DATE_CREATED,
    FIELD_DUE_DATE,
    FIELD_PRIORITY,
    FIELD_STATUS,
    FIELD_TAGS,
    FIELD_TASK_TYPE,
)
from bug_app.core.models import Record

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Unexpected:
    """A field present in a shape no extractor understands (e.g. an object status)."""

    raw: Any


# absent (None) | str | list[str] | Unexpected
FieldValue = str | list[str] | Unexpected | None

DEFAULT_TASK_TYPE = "Bug"


def get_attr(obj: Any, name: str) -> Any:
    """Read ``name`` from a mapping key or an object attribute."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    if isinstance(obj, (str, bytes, int, float, list, tuple)):
        return None
    return getattr(obj, name, None)


def get_path(obj: Any, *names: str) -> Any:
    """Follow ``names`` through nested mappings/objects, None on any gap."""
    current = obj
    for name in names:
        current = get_attr(current, name)
        if current is None:
            return None
    return current


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def _first_present(*values: Any) -> Any:
    for value in values:
        if not is_empty(value):
            return value
    return None


def _person_name(value: Any) -> FieldValue:
    """Coerce a person-ish leftover into a name, list of names, or None."""
    if is_empty(value):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        names = [_person_name(item) for item in value]
        flat = [n for n in names if isinstance(n, str) and n]
        return flat or None
    name = _first_present(get_attr(value, "name"), get_attr(value, "username"))
    if isinstance(name, str):
        return name
    if isinstance(value, (int, float)):
        return str(value)
    # An object with no usable name
    return None


def _scalar_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _scalar(value: Any) -> FieldValue:
    if is_empty(value):
        return None
    if isinstance(value, (list, tuple)):
        items = [_scalar_text(v) for v in value if not is_empty(v)]
        if any(item is None for item in items):
            return Unexpected(value)
        return items or None
    text = _scalar_text(value)
    return Unexpected(value) if text is None else text


def tag_list(record: Record) -> list[str]:
    """Return a record's tags as a list, splitting delimited strings."""
    tags = get_attr(record, "tags")
    if is_empty(tags):
        return []
    if isinstance(tags, str):
        return [t.strip() for t in tags.split(",") if t.strip()]
    if isinstance(tags, (list, tuple)):
        return [t if isinstance(t, str) else str(t) for t in tags if t is not None]
    return [str(tags)]


# ------------------ Per-field extractors ------------------
def _status(record: Record) -> FieldValue:
    return _scalar(get_attr(record, "status"))


def _assignee(record: Record) -> FieldValue:
    assigned_to = get_attr(record, "assignedTo")
    assignee = get_attr(record, "assignee")
    value = _first_present(
        get_attr(assigned_to, "name"),
        get_attr(assigned_to, "username"),
        get_attr(assignee, "name"),
        get_attr(assignee, "username"),
        get_attr(record, "assignedName"),
        assigned_to,
        assignee,
    )
    return _person_name(value)


def _priority(record: Record) -> FieldValue:
    return _scalar(get_attr(record, "priority"))


def _tags(record: Record) -> FieldValue:
    tags = get_attr(record, "tags")
    if isinstance(tags, (list, tuple)):
        joined = ", ".join(str(t) for t in tags if t is not None)
        return joined or None
    return _scalar(tags)


def _due_date(record: Record) -> FieldValue:
    return _scalar(get_attr(record, "dueDate"))


def _task_type(record: Record) -> FieldValue:
    return _scalar(get_attr(record, "type")) or DEFAULT_TASK_TYPE


def _created_by(record: Record) -> FieldValue:
    created_by = get_attr(record, "createdBy")
    value = _first_present(
        get_attr(created_by, "name"),
        get_attr(created_by, "username"),
        created_by,
    )
    return _person_name(value)


def _date_closed(record: Record) -> FieldValue:
    return _scalar(get_attr(record, "closedDate"))


def _date_created(record: Record) -> FieldValue:
    return _scalar(get_attr(record, "createdAt"))


EXTRACTORS: dict[str, Callable[[Record], FieldValue]] = {
    FIELD_STATUS: _status,
    FIELD_ASSIGNEE: _assignee,
    FIELD_PRIORITY: _priority,
    FIELD_TAGS: _tags,
    FIELD_DUE_DATE: _due_date,
    FIELD_TASK_TYPE: _task_type,
    FIELD_CREATED_BY: _created_by,
    FIELD_DATE_CLOSED: _date_closed,
    FIELD_DATE_CREATED: _date_created,
}


def resolve(record: Record, field: str) -> FieldValue:
    """Resolve the logical ``field`` of ``record``.

    Unknown field names resolve to ``""``. Any error raised while probing the
    record (e.g. a property that raises) is logged and treated as absent.
    """
    extractor = EXTRACTORS.get(field)
    if extractor is None:
        return ""
    try:
        return extractor(record)
    except Exception as exc:
        logger.debug("Could not resolve %r on record: %s", field, exc)
        return None


def as_text(value: FieldValue) -> str:
    """Flatten a resolved value to a single string ("" when absent or unexpected)."""
    if value is None or isinstance(value, Unexpected):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def resolve_text(record: Record, field: str) -> str:
    return as_text(resolve(record, field))
