# strintern/workloads/synthetic.py
from __future__ import annotations

import random
from pathlib import Path
from typing import Any, Dict, List, Optional

from strintern.values import RuntimeString


VALUE_KINDS = ("runtime", "str")
SOURCES = ("synthetic", "file")


def _fresh(text: str, value_kind: str) -> str:
    if value_kind == "runtime":
        return RuntimeString(text)
    # bytes round-trip always allocates a new exact str (len > 1)
    return text.encode("utf-8").decode("utf-8")


def generate(
    count: int,
    vocabulary: int,
    seed: int = 0,
    skew: float = 1.0,
    value_kind: str = "runtime",
    prefix: str = "sym_",
) -> List[str]:
    """
    Build a deterministic list of freshly allocated string values.

    - Draws `count` symbols from a vocabulary of `vocabulary` distinct names
    - Symbol ranks follow a Zipf-like distribution with exponent `skew`
      (0 = uniform); rank 1 is the most frequent
    - Every element is a new object, so equal content never shares identity
      before interning
    """
    if count < 0 or vocabulary <= 0:
        raise ValueError(f"count must be >= 0 and vocabulary > 0 (got {count}, {vocabulary})")
    if value_kind not in VALUE_KINDS:
        raise ValueError(f"Unknown value kind '{value_kind}'. Available: {', '.join(VALUE_KINDS)}")

    rng = random.Random(seed)
    weights = [1.0 / ((rank + 1) ** skew) for rank in range(vocabulary)]
    picks = rng.choices(range(vocabulary), weights=weights, k=count)
    return [_fresh(f"{prefix}{idx:06d}", value_kind) for idx in picks]


def load_lines(path: str | Path, start: int = 0, limit: Optional[int] = None,
               value_kind: str = "runtime") -> List[str]:
    """
    Whitespace-separated tokens of a UTF-8 text file as fresh values.

    Returns tokens[start : start+limit] (all remaining tokens when limit is None).
    """
    if value_kind not in VALUE_KINDS:
        raise ValueError(f"Unknown value kind '{value_kind}'. Available: {', '.join(VALUE_KINDS)}")
    tokens: List[str] = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            tokens.extend(line.split())

    n = len(tokens)
    s = max(0, int(start or 0))
    e = n if limit is None else min(n, s + max(0, int(limit)))
    return [_fresh(t, value_kind) for t in tokens[s:e]]


def load(cfg: Dict[str, Any]) -> List[str]:
    """
    Build the workload described by an experiment's `workload:` section.

      source: synthetic | file
      synthetic -> count, vocabulary, seed, skew, value_kind
      file      -> path, start, limit, value_kind
    """
    source = str(cfg.get("source", "synthetic")).strip().lower()
    value_kind = str(cfg.get("value_kind", "runtime")).strip().lower()

    if source == "synthetic":
        return generate(
            count=int(cfg.get("count", 1000)),
            vocabulary=int(cfg.get("vocabulary", 100)),
            seed=int(cfg.get("seed", 0)),
            skew=float(cfg.get("skew", 1.0)),
            value_kind=value_kind,
        )
    if source == "file":
        if not cfg.get("path"):
            raise ValueError("workload.path is required for source=file")
        limit = cfg.get("limit")
        return load_lines(
            cfg["path"],
            start=int(cfg.get("start", 0)),
            limit=None if limit is None else int(limit),
            value_kind=value_kind,
        )
    raise ValueError(f"Unknown workload source '{source}'. Available: {', '.join(SOURCES)}")
