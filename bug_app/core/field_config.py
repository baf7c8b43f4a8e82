"""Load and expose filter-panel value options from YAML (with fallbacks)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from .config import FIELD_VALUE_OPTIONS

logger = logging.getLogger(__name__)

_CACHE: dict[str, list[str]] | None = None


def _defaults() -> dict[str, list[str]]:
    return {name: list(values) for name, values in FIELD_VALUE_OPTIONS.items()}


def load_field_options(base_path: str | Path | None = None) -> dict[str, list[str]]:
    global _CACHE
    if _CACHE is not None:
        return _CACHE
    base = Path(base_path or Path(__file__).resolve().parent.parent)
    yaml_path = base / "fields.yaml"
    if not yaml_path.exists():
        _CACHE = _defaults()
        return _CACHE
    try:
        data = yaml.safe_load(yaml_path.read_text()) or {}
        options = data.get("options") or {}
        merged = _defaults()
        for name, values in options.items():
            if isinstance(values, list):
                merged[str(name)] = [str(v) for v in values if v is not None]
        _CACHE = merged
        return _CACHE
    except (OSError, yaml.YAMLError, AttributeError) as exc:
        logger.warning("Could not read %s, using built-in field options: %s", yaml_path, exc)
        _CACHE = _defaults()
        return _CACHE


def get_field_options(field: str) -> list[str]:
    options = load_field_options()
    return options.get(field, [])


def reset_cache() -> None:
    global _CACHE
    _CACHE = None
