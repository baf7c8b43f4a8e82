"""Locale-aware sort keys for display strings.

Accented letters sort next to their base letter ("éclair" between "apple" and
"fig") even when the process runs under the "C" collation, because the
primary key drops combining marks before collating.
"""

from __future__ import annotations

import locale
import logging
import threading
import unicodedata

from .config import COLLATION_LOCALE

logger = logging.getLogger(__name__)

_LOCK = threading.Lock()
_CONFIGURED = False


def set_collation_locale(name: str = COLLATION_LOCALE) -> str | None:
    """Switch ``LC_COLLATE`` to ``name`` ("" picks the environment's locale).

    Returns the active collation locale, or None when ``name`` is not
    installed (the previous collation stays in effect).
    """
    global _CONFIGURED
    with _LOCK:
        try:
            active = locale.setlocale(locale.LC_COLLATE, name)
        except locale.Error as exc:
            logger.warning("Collation locale %r unavailable, keeping current one: %s", name, exc)
            return None
        finally:
            _CONFIGURED = True
        logger.debug("Collation locale set to %s", active)
        return active


def ensure_collation() -> None:
    """Apply COLLATION_LOCALE once per process."""
    if not _CONFIGURED:
        set_collation_locale(COLLATION_LOCALE)


def fold_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(text: str) -> tuple[str, str]:
    """Primary key on the accent-folded text, ties broken on the full text."""
    return locale.strxfrm(fold_accents(text)), locale.strxfrm(text)
