# strintern/values.py
"""String value types handed to `intern`."""

from __future__ import annotations


class RuntimeString(str):
    """A `str` produced at runtime (e.g. by generated code) that can be weakly referenced.

    Exact `str` instances carry no weak-reference slot in CPython, so only
    values of this type (or other weak-referenceable `str` subclasses) can be
    reclaimed by the reclaiming table once nothing else holds them.
    """

    def __repr__(self) -> str:
        return f"RuntimeString({str.__repr__(self)})"

