"""Status normalization utilities.

Status strings arrive with inconsistent casing and separators depending on
where a record came from ("In_Progress", "in progress", " OPEN "). The list
views bucket records by the normalized form produced here.
"""

from __future__ import annotations

import re

_SEPARATORS = re.compile(r"[_\s]+")
# Text some exporters write in place of a missing status
_PLACEHOLDERS = frozenset({"nan", "none", "null", "undefined"})


def normalize_status(value) -> str:
    """Lower-case a status and collapse underscore/whitespace runs.

    Parameters
    ----------
    value : Any
        Raw status value; ``None`` and non-strings are accepted.

    Returns
    -------
    str
        Normalized status, or ``""`` when the value is empty.

    Examples
    --------
    >>> normalize_status("In_Progress")
    'in progress'
    >>> normalize_status(None)
    ''
    """
    if value is None:
        return ""
    return _SEPARATORS.sub(" ", str(value).lower()).strip()


def same_status(left, right) -> bool:
    """True when two raw status values normalize to the same bucket."""
    return normalize_status(left) == normalize_status(right)


def status_label(value) -> str:
    """Status as shown in tables, or ``""`` when the record has none.

    Exporters sometimes write a missing status as the text "null" or "None";
    those placeholders count as no status.

    Examples
    --------
    >>> status_label(" In_Progress ")
    'In_Progress'
    >>> status_label("null")
    ''
    """
    if value is None:
        return ""
    text = str(value).strip()
    return "" if text.lower() in _PLACEHOLDERS else text
