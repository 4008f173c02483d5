# strintern/selector.py
"""Capability selector: pick the intern strategy once and freeze it.

    Strategy = PASSTHROUGH | RECLAIMING | RETAINING

- native intern available            -> PASSTHROUGH (identity, no table)
- otherwise, weak references usable  -> RECLAIMING
- otherwise                          -> RETAINING

`InternRuntime` is the explicit handle holding the chosen strategy, its table
and the bound `intern` function. The process-wide runtime is created on the
first call to `intern()` / `get_runtime()` and kept until process exit.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Tuple

from strintern import capabilities
from strintern.config import InternSettings
from strintern.intern_strategies import load_strategy
from strintern.intern_strategies.base import _new_stats
from strintern.intern_strategies.passthrough import identity
from strintern.normalize import Normalizer, make_normalizer, normalize

logger = logging.getLogger(__name__)

InternFn = Callable[[str], str]


class Strategy(str, Enum):
    PASSTHROUGH = "passthrough"
    RECLAIMING = "reclaiming"
    RETAINING = "retaining"


def select_strategy(
    native_intern: Optional[bool] = None, weak_refs: Optional[bool] = None
) -> Strategy:
    """Resolve the strategy; `None` arguments read the process-wide capability flags."""
    if native_intern is None:
        native_intern = capabilities.host_has_native_intern()
    if native_intern:
        return Strategy.PASSTHROUGH
    if weak_refs is None:
        weak_refs = capabilities.host_supports_weak_refs()
    return Strategy.RECLAIMING if weak_refs else Strategy.RETAINING


def build_intern(strategy: Strategy, normalizer: Normalizer = normalize) -> Tuple[InternFn, Any]:
    """Return `(intern_fn, table)`; the table is None for PASSTHROUGH."""
    strategy = Strategy(strategy)
    if strategy is Strategy.PASSTHROUGH:
        return identity, None
    table = load_strategy(strategy.value).build(normalizer)
    return table.intern, table


@dataclass(frozen=True)
class InternRuntime:
    strategy: Strategy
    intern: InternFn
    table: Any = None
    normalizer: Normalizer = normalize

    @classmethod
    def create(cls, settings: Optional[InternSettings] = None) -> "InternRuntime":
        settings = settings or InternSettings()
        if settings.mode == "auto":
            strategy = select_strategy(settings.native_intern, settings.weak_refs)
        else:
            strategy = Strategy(settings.mode)
        normalizer = make_normalizer(settings.normalization)
        fn, table = build_intern(strategy, normalizer)
        logger.debug("intern strategy selected: %s", strategy.value)
        return cls(strategy=strategy, intern=fn, table=table, normalizer=normalizer)

    def stats(self) -> dict:
        if self.table is None:
            return dict(_new_stats(), table_size=0, live_size=0)
        return self.table.snapshot()


_RUNTIME: Optional[InternRuntime] = None
_INTERN: Optional[InternFn] = None
_RUNTIME_LOCK = threading.Lock()


def get_runtime() -> InternRuntime:
    """The process-wide runtime, created from the environment on first use."""
    global _RUNTIME, _INTERN
    runtime = _RUNTIME
    if runtime is None:
        with _RUNTIME_LOCK:
            if _RUNTIME is None:
                _RUNTIME = InternRuntime.create(InternSettings.from_env())
                _INTERN = _RUNTIME.intern
            runtime = _RUNTIME
    return runtime


def intern(value: str) -> str:
    """Return the canonical instance for `value`'s content."""
    fn = _INTERN
    if fn is None:
        fn = get_runtime().intern
    return fn(value)


def _reset_runtime() -> None:
    # tests only
    global _RUNTIME, _INTERN
    with _RUNTIME_LOCK:
        _RUNTIME = None
        _INTERN = None
