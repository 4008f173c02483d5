"""
Strategy: reclaiming
Behavior: weak-reference canonical table.
         - Hit: the entry's weak handle still resolves -> return that instance.
         - Miss (absent or dead entry): the value itself becomes canonical and is
           registered with a reclamation callback carrying its key.
         - When a canonical instance becomes unreachable the callback removes its
           entry, but only if the entry still refers to that instance.
Values whose type cannot be weakly referenced (exact `str`) are pinned: held
strongly and never reclaimed.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, Callable

from strintern.capabilities import supports_weak_refs
from strintern.intern_strategies.base import CanonicalTable
from strintern.normalize import Normalizer, normalize

logger = logging.getLogger(__name__)


class ReclaimingTable(CanonicalTable):
    mode = "reclaiming"

    def intern(self, value: str) -> str:
        key = self._key(value)
        with self._lock:
            entry = self._table.get(key)
            if entry is not None:
                result = self._resolve(entry)
                if result is not None:
                    self.stats["hits"] += 1
                    return result
                # referent gone, callback not yet run
                self.stats["replaced"] += 1
            self.stats["misses"] += 1
            if supports_weak_refs(type(value)):
                self._table[key] = weakref.ref(value, self._reclaimer(key))
            else:
                self.stats["pinned"] += 1
                self._table[key] = value
            return value

    def _resolve(self, entry: Any) -> Any:
        if isinstance(entry, weakref.ref):
            return entry()
        return entry

    def _reclaimer(self, key: str) -> Callable[[weakref.ref], None]:
        # the callback must not keep the table alive
        selfref = weakref.ref(self)

        def _reclaim(dead: weakref.ref) -> None:
            table = selfref()
            if table is not None:
                table._on_reclaim(key, dead)

        return _reclaim

    def _on_reclaim(self, key: str, dead: weakref.ref) -> None:
        with self._lock:
            if self._table.get(key) is not dead:
                logger.debug("stale reclamation for %r ignored", key)
                return
            del self._table[key]
            self.stats["reclaimed"] += 1
        logger.debug("reclaimed canonical entry %r", key)


def build(normalizer: Normalizer = normalize) -> ReclaimingTable:
    return ReclaimingTable(normalizer)
