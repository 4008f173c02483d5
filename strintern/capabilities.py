# strintern/capabilities.py
"""Process-wide capability flags consulted by the strategy selector.

Exposed functions:
- host_has_native_intern() -> bool   canonicalization already done by the host
- host_supports_weak_refs() -> bool  weak references with callbacks available
- supports_weak_refs(value_type)     whether instances of a type are weakly referenceable

The two host flags are read once per process and cached; call
`reset_capabilities()` to force a re-read (tests only).
"""

from __future__ import annotations

import os
import weakref
from functools import lru_cache

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def parse_flag(raw: str | None, default: bool) -> bool:
    """Parse an on/off environment value; unset or blank means `default`."""
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(
        f"Invalid boolean flag {raw!r}. Use one of: {', '.join(sorted(_TRUTHY | _FALSY))}"
    )


@lru_cache(maxsize=None)
def host_has_native_intern() -> bool:
    """True when values reaching `intern` are already canonical (STRINTERN_NATIVE_INTERN)."""
    return parse_flag(os.environ.get("STRINTERN_NATIVE_INTERN"), default=False)


@lru_cache(maxsize=None)
def host_supports_weak_refs() -> bool:
    """True when weak handles with reclamation callbacks can be used.

    STRINTERN_WEAK_REFS=0 forces the strongly-retaining fallback.
    """
    available = hasattr(weakref, "ref") and callable(weakref.ref)
    return available and parse_flag(os.environ.get("STRINTERN_WEAK_REFS"), default=True)


def supports_weak_refs(value_type: type) -> bool:
    # exact str has no weakref slot; subclasses without __slots__ do
    return getattr(value_type, "__weakrefoffset__", 0) != 0


def reset_capabilities() -> None:
    host_has_native_intern.cache_clear()
    host_supports_weak_refs.cache_clear()
