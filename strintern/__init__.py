"""strintern: process-wide string canonicalization (interning) cache.

    from strintern import intern
    a = intern(some_string)
    b = intern(equal_string_from_elsewhere)
    assert a is b
"""

from strintern.config import InternSettings, load_settings
from strintern.normalize import make_normalizer, normalize
from strintern.selector import InternRuntime, Strategy, get_runtime, intern, select_strategy
from strintern.values import RuntimeString

__all__ = [
    "InternRuntime",
    "InternSettings",
    "RuntimeString",
    "Strategy",
    "get_runtime",
    "intern",
    "load_settings",
    "make_normalizer",
    "normalize",
    "select_strategy",
]
