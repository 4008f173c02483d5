# strintern/intern_strategies/passthrough.py

"""
Strategy: passthrough

Interning is already done by the host, so every value is returned unchanged
and no table is ever allocated.
"""

from __future__ import annotations

from strintern.normalize import Normalizer, normalize


def identity(value: str) -> str:
    return value


def build(normalizer: Normalizer = normalize) -> None:
    """
    No table for this strategy.

    Args:
        normalizer: Accepted for a uniform `build` signature (unused here).
    """
    return None
