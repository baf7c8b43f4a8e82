"""Exceptions raised for invalid query-state updates."""

from __future__ import annotations


class QueryStateError(ValueError):
    """A mutation request that the query state cannot represent.

    Raised for caller mistakes (unknown sort direction, unknown combinator,
    unknown clause id). Malformed *records* never raise.
    """
