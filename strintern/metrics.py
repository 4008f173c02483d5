# strintern/metrics.py
"""Lightweight metrics helpers for intern benchmarks.

Exposed pure functions:
- latency_stats(samples) -> {"mean": float, "p95": float, "p99": float}
- hit_rate(hits, total) -> float
- throughput(num_requests, elapsed) -> float
- dedup_ratio(total, distinct) -> float
- identity_violations(keys, results) -> int

Identity violations:
  For every key, all results returned for it must be the same object. The
  count is the number of keys that were answered with more than one identity.
  Callers must keep `results` alive while counting, otherwise `id()` values
  can be reused.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Sequence
import math


# ----------- tiny internal helpers (pure) ------------

def _percentile(sorted_vals: List[float], p: float) -> float:
    """Nearest-rank percentile for 0 < p <= 100. Returns 0.0 on empty input."""
    if not sorted_vals:
        return 0.0
    if p <= 0:
        return float(sorted_vals[0])
    if p >= 100:
        return float(sorted_vals[-1])
    k = math.ceil((p / 100.0) * len(sorted_vals)) - 1  # nearest-rank index
    return float(sorted_vals[max(0, min(k, len(sorted_vals) - 1))])

def _mean(xs: Iterable[float]) -> float:
    s = 0.0
    n = 0
    for v in xs:
        s += float(v)
        n += 1
    return s / n if n else 0.0


# -------------------- public API ---------------------

def latency_stats(samples: Iterable[float]) -> Dict[str, float]:
    """Compute mean, p95, p99 (seconds) from an iterable of latency samples (sec)."""
    vals = sorted(float(x) for x in samples)
    return {
        "mean": _mean(vals),
        "p95": _percentile(vals, 95),
        "p99": _percentile(vals, 99),
    }

def hit_rate(hits: int, total: int) -> float:
    """Return hits/total as float; 0.0 when total == 0."""
    return float(hits) / total if total > 0 else 0.0

def throughput(num_requests: int, elapsed: float) -> float:
    """Requests per second; 0.0 when elapsed <= 0."""
    return float(num_requests) / elapsed if elapsed > 0 else 0.0

def dedup_ratio(total: int, distinct: int) -> float:
    """Fraction of values that collapsed onto an existing canonical instance."""
    if total <= 0:
        return 0.0
    return 1.0 - float(min(distinct, total)) / total

def identity_violations(keys: Sequence[str], results: Sequence[object]) -> int:
    """Number of keys that were answered with more than one object identity."""
    if len(keys) != len(results):
        raise ValueError(f"keys/results length mismatch: {len(keys)} != {len(results)}")
    seen: Dict[str, set] = {}
    for key, result in zip(keys, results):
        seen.setdefault(key, set()).add(id(result))
    return sum(1 for ids in seen.values() if len(ids) > 1)
