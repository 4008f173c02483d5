# strintern/normalize.py
"""Key normalization for the canonical table.

A key is always an exact `str` holding the value's content, never the value
object itself, so a table key cannot keep a canonical instance alive.
"""

from __future__ import annotations

import unicodedata
from typing import Callable, Optional

Normalizer = Callable[[str], str]

UNICODE_FORMS = ("NFC", "NFD", "NFKC", "NFKD")


def normalize(value: str) -> str:
    """Return the lookup key for `value` (exact-str copy of its content)."""
    if not isinstance(value, str):
        raise TypeError(f"Can only intern string objects, got {type(value).__name__}")
    if type(value) is str:
        return value
    return str.__str__(value)


def make_normalizer(form: Optional[str] = None) -> Normalizer:
    """Build a normalizer; `form` selects a Unicode normalization applied before keying."""
    if form is None or str(form).strip().lower() in {"", "none"}:
        return normalize

    wanted = str(form).strip().upper()
    if wanted not in UNICODE_FORMS:
        raise ValueError(
            f"Unknown normalization form '{form}'. Available: none, {', '.join(UNICODE_FORMS)}"
        )

    def _unicode_normalize(value: str) -> str:
        return unicodedata.normalize(wanted, normalize(value))

    _unicode_normalize.form = wanted  # type: ignore[attr-defined]
    return _unicode_normalize
