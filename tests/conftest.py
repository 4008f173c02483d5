import pytest

from strintern import capabilities, selector

_ENV_VARS = (
    "STRINTERN_MODE",
    "STRINTERN_NORMALIZATION",
    "STRINTERN_NATIVE_INTERN",
    "STRINTERN_WEAK_REFS",
)


@pytest.fixture(autouse=True)
def clean_process_state(monkeypatch):
    """Every test starts without STRINTERN_* overrides and with no process-wide runtime."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    capabilities.reset_capabilities()
    selector._reset_runtime()
    yield
    capabilities.reset_capabilities()
    selector._reset_runtime()


@pytest.fixture
def fresh_str():
    """Factory for new exact-str objects with the given content (len > 1)."""
    def _fresh(text: str) -> str:
        return text.encode("utf-8").decode("utf-8")
    return _fresh
