# tests/unit/test_selector.py
import pytest

import strintern
from strintern import InternRuntime, InternSettings, RuntimeString, Strategy, select_strategy
from strintern.intern_strategies.passthrough import identity
from strintern.intern_strategies.reclaiming import ReclaimingTable
from strintern.intern_strategies.retaining import RetainingTable
from strintern import selector
from strintern.selector import build_intern, get_runtime


class TestSelectStrategy:

    @pytest.mark.parametrize(
        "native, weak, expected",
        [
            (True, True, Strategy.PASSTHROUGH),
            (True, False, Strategy.PASSTHROUGH),
            (False, True, Strategy.RECLAIMING),
            (False, False, Strategy.RETAINING),
        ],
    )
    def test_explicit_flags(self, native, weak, expected):
        assert select_strategy(native, weak) is expected

    def test_defaults_read_capabilities(self):
        assert select_strategy() is Strategy.RECLAIMING

    def test_native_flag_from_env(self, monkeypatch):
        monkeypatch.setenv("STRINTERN_NATIVE_INTERN", "1")
        assert select_strategy() is Strategy.PASSTHROUGH

    def test_weak_refs_disabled_from_env(self, monkeypatch):
        monkeypatch.setenv("STRINTERN_WEAK_REFS", "off")
        assert select_strategy() is Strategy.RETAINING


class TestBuildIntern:

    def test_passthrough_has_no_table(self):
        fn, table = build_intern(Strategy.PASSTHROUGH)
        assert fn is identity
        assert table is None

    @pytest.mark.parametrize(
        "strategy, table_type",
        [(Strategy.RETAINING, RetainingTable), (Strategy.RECLAIMING, ReclaimingTable)],
    )
    def test_table_strategies(self, strategy, table_type):
        fn, table = build_intern(strategy)
        assert isinstance(table, table_type)
        value = RuntimeString("abc")
        assert fn(value) is value
        assert fn(RuntimeString("abc")) is value

    def test_accepts_plain_names(self):
        _, table = build_intern("retaining")
        assert isinstance(table, RetainingTable)


class TestInternRuntime:

    def test_auto_mode_uses_capabilities(self):
        runtime = InternRuntime.create(InternSettings(native_intern=False, weak_refs=False))
        assert runtime.strategy is Strategy.RETAINING

    def test_explicit_mode_wins(self):
        runtime = InternRuntime.create(InternSettings(mode="reclaiming", native_intern=True))
        assert runtime.strategy is Strategy.RECLAIMING

    def test_passthrough_returns_argument_and_no_growth(self, fresh_str):
        runtime = InternRuntime.create(InternSettings(native_intern=True))
        a, b = fresh_str("same"), fresh_str("same")
        assert runtime.intern(a) is a
        assert runtime.intern(b) is b
        assert runtime.table is None
        assert runtime.stats()["table_size"] == 0

    def test_normalization_setting(self):
        runtime = InternRuntime.create(InternSettings(mode="retaining", normalization="NFKC"))
        wide = runtime.intern(RuntimeString("ＡＢ"))  # fullwidth "AB"
        assert runtime.intern(RuntimeString("AB")) is wide

    def test_stats_from_table(self):
        runtime = InternRuntime.create(InternSettings(mode="retaining"))
        runtime.intern(RuntimeString("abc"))
        runtime.intern(RuntimeString("abc"))
        stats = runtime.stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["table_size"] == 1


class TestProcessWideIntern:

    def test_canonical_uniqueness(self):
        a = strintern.intern(RuntimeString("abc"))
        b = strintern.intern(RuntimeString("abc"))
        assert a is b
        assert get_runtime().strategy is Strategy.RECLAIMING
        assert len(get_runtime().table) == 1

    def test_runtime_created_once(self):
        assert get_runtime() is get_runtime()

    def test_selection_not_re_evaluated(self, monkeypatch):
        first = get_runtime()
        monkeypatch.setenv("STRINTERN_NATIVE_INTERN", "true")
        strintern.intern(RuntimeString("late"))
        assert get_runtime() is first
        assert get_runtime().strategy is Strategy.RECLAIMING

    def test_native_intern_is_identity(self, monkeypatch, fresh_str):
        monkeypatch.setenv("STRINTERN_NATIVE_INTERN", "yes")
        v = fresh_str("value")
        assert strintern.intern(v) is v
        assert get_runtime().table is None

    def test_mode_from_env(self, monkeypatch, fresh_str):
        monkeypatch.setenv("STRINTERN_MODE", "retaining")
        a = strintern.intern(fresh_str("abc"))
        assert strintern.intern(fresh_str("abc")) is a
        assert get_runtime().strategy is Strategy.RETAINING

    def test_plain_str_in_reclaiming_mode(self, fresh_str):
        a = strintern.intern(fresh_str("plain"))
        assert strintern.intern(fresh_str("plain")) is a
        assert get_runtime().table.stats["pinned"] == 1


def test_stats_shape_same_for_every_mode():
    shapes = {
        mode: set(InternRuntime.create(InternSettings(mode=mode)).stats())
        for mode in ["passthrough", "retaining", "reclaiming"]
    }
    assert shapes["passthrough"] == shapes["retaining"] == shapes["reclaiming"]
    passthrough_stats = InternRuntime.create(InternSettings(mode="passthrough")).stats()
    assert all(v == 0 for v in passthrough_stats.values())


def test_process_wide_intern_binds_function_once(monkeypatch):
    strintern.intern(RuntimeString("first"))
    bound = selector._INTERN
    assert bound is get_runtime().intern

    def fail():
        raise AssertionError("runtime looked up again")

    monkeypatch.setattr(selector, "get_runtime", fail)
    value = RuntimeString("second")
    assert strintern.intern(value) is value
    assert selector._INTERN is bound
