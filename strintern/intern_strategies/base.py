# strintern/intern_strategies/base.py
"""Shared table plumbing for the retaining and reclaiming strategies."""

from __future__ import annotations

import threading
from typing import Any, Dict

from strintern.normalize import Normalizer, normalize


def _new_stats() -> Dict[str, int]:
    return {"hits": 0, "misses": 0, "reclaimed": 0, "replaced": 0, "pinned": 0}


class CanonicalTable:
    """Key -> canonical entry map with a single lock around check-then-insert.

    Subclasses implement `intern` and `_resolve(entry)`.
    """

    mode = "base"

    def __init__(self, normalizer: Normalizer = normalize):
        self._normalize = normalizer
        self._table: Dict[str, Any] = {}
        # re-entrant: a reclamation callback may run on this thread mid-insert
        self._lock = threading.RLock()
        self.stats = _new_stats()

    def intern(self, value: str) -> str:
        raise NotImplementedError

    def _key(self, value: str) -> str:
        key = self._normalize(value)
        # a str subclass key would keep its canonical instance alive
        if type(key) is not str:
            key = str.__str__(key)
        return key

    def _resolve(self, entry: Any) -> Any:
        return entry

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, str):
            return False
        with self._lock:
            entry = self._table.get(self._key(value))
            return entry is not None and self._resolve(entry) is not None

    def live_size(self) -> int:
        """Entries whose canonical instance is still alive."""
        with self._lock:
            return sum(1 for entry in list(self._table.values()) if self._resolve(entry) is not None)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            out = dict(self.stats)
            out["table_size"] = len(self._table)
        out["live_size"] = self.live_size()
        return out

    def __repr__(self) -> str:
        return f"<{type(self).__name__} entries={len(self._table)}>"
