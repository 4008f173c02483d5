"""
Simple loader that returns the module implementing the chosen intern mode.

Usage:
    from strintern.intern_strategies import load_strategy
    strat = load_strategy(mode)        # 'passthrough' | 'retaining' | 'reclaiming'
    table = strat.build()              # None for passthrough
    out = table.intern(value)
    print(table.stats)                 # {'hits': X, 'misses': Y, ...}
"""

from importlib import import_module
from types import ModuleType

STRATEGY_NAMES = ("passthrough", "retaining", "reclaiming")


def load_strategy(mode: str) -> ModuleType:
    normalized = (mode or "passthrough").strip().lower()
    if normalized not in STRATEGY_NAMES:
        normalized = "passthrough"
    return import_module(f".{normalized}", package=__name__)
