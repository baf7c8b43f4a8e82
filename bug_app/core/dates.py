"""Timestamp parsing helpers shared by grouping and tabular views."""

from __future__ import annotations

import pandas as pd
import pytz

from .config import DATE_LABEL_FORMAT, TIMEZONE


def normalize_timestamp(value, target_tz=None) -> pd.Timestamp | None:
    """Normalize a timestamp-like value into ``target_tz`` (default: TIMEZONE).

    Naive values are assumed to be UTC. Returns None when the input cannot be
    parsed.
    """
    if value is None or value == "":
        return None
    if target_tz is None:
        target_tz = pytz.timezone(TIMEZONE)
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    try:
        if getattr(ts, "tzinfo", None) is None:
            ts = ts.tz_localize(pytz.UTC)
        return ts.tz_convert(target_tz)
    except (TypeError, ValueError, AttributeError):
        return None


def format_date_label(value, target_tz=None) -> str:
    """Render a date-ish value as a calendar date, or pass it through as text."""
    ts = normalize_timestamp(value, target_tz)
    if ts is None:
        return "" if value is None else str(value)
    return ts.strftime(DATE_LABEL_FORMAT)
