"""
Strategy: retaining
Behavior: strong-reference canonical table for hosts without weak references.
         - First time we see a key: miss -> the value itself becomes canonical.
         - Next time: hit -> return the stored instance.
Entries are never removed; the table grows with the number of distinct keys
ever interned.
"""

from __future__ import annotations

from strintern.intern_strategies.base import CanonicalTable
from strintern.normalize import Normalizer, normalize


class RetainingTable(CanonicalTable):
    mode = "retaining"

    def intern(self, value: str) -> str:
        key = self._key(value)
        with self._lock:
            result = self._table.get(key)
            if result is not None:
                self.stats["hits"] += 1
                return result
            self.stats["misses"] += 1
            self._table[key] = value
            return value


def build(normalizer: Normalizer = normalize) -> RetainingTable:
    return RetainingTable(normalizer)
