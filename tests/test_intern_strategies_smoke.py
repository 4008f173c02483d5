import importlib

from strintern import RuntimeString
from strintern.intern_strategies import load_strategy

MODES = ["retaining", "reclaiming"]


def test_import_and_interface():
    for mode in MODES:
        mod = importlib.import_module(f"strintern.intern_strategies.{mode}")
        assert hasattr(mod, "build")
        table = mod.build()
        assert hasattr(table, "intern")
        assert isinstance(table.stats, dict)
        assert {"hits", "misses"} <= set(table.stats.keys())


def test_stats_progress():
    for mode in MODES:
        table = load_strategy(mode).build()
        h0, m0 = table.stats["hits"], table.stats["misses"]
        r1 = table.intern(RuntimeString("hello"))
        r2 = table.intern(RuntimeString("hello"))
        h1, m1 = table.stats["hits"], table.stats["misses"]
        assert (h1 - h0, m1 - m0) == (1, 1)
        assert r1 is r2


def test_loader_basic():
    for mode in ["passthrough", "retaining", "reclaiming", "INVALID", ""]:
        mod = load_strategy(mode)
        assert hasattr(mod, "build")
    assert load_strategy("INVALID").__name__.endswith(".passthrough")
    assert load_strategy(" Reclaiming ").__name__.endswith(".reclaiming")
