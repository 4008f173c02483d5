from __future__ import annotations

"""Runner Core - strintern benchmark runner

Drives one workload through one intern strategy:
  - load YAML config (run, intern, workload, output)
  - build a fresh InternRuntime for the requested mode (or capability-selected)
  - build the workload (synthetic Zipf symbols or tokens from a file)
  - intern every value, timing each call, keeping a window of results alive
  - aggregate hit/miss/reclamation counters and identity checks, write result JSON
"""

import argparse
import gc
import json
import time
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import Any, Deque, Dict, List, Optional, Tuple

import yaml
from tqdm import tqdm

from strintern import metrics
from strintern.config import InternSettings
from strintern.intern_strategies import STRATEGY_NAMES
from strintern.selector import InternRuntime
from strintern.workloads import synthetic


# ---------------------------
# Strategy Loading
# ---------------------------

def _build_runtime(intern_cfg: Dict[str, Any]) -> InternRuntime:
    """
    Build a private runtime for this run.

    Raises:
        ImportError: If the requested mode has no strategy module
    """
    mode = str(intern_cfg.get("mode") or "auto").strip().lower()
    if mode != "auto" and mode not in STRATEGY_NAMES:
        raise ImportError(
            f"Intern strategy '{mode}' not found. "
            f"Available strategies: auto, {', '.join(STRATEGY_NAMES)}."
        )
    return InternRuntime.create(InternSettings.from_mapping(intern_cfg))


def _parse_retain(value: Any) -> Optional[int]:
    """`all` (or missing) keeps every result alive; an int keeps the last N."""
    if value is None or str(value).strip().lower() == "all":
        return None
    n = int(value)
    if n < 0:
        raise ValueError(f"workload.retain must be 'all' or >= 0 (got {value})")
    return n


# ---------------------------
# Public API
# ---------------------------

def main(config_path: str) -> None:
    """Load YAML config, run one experiment, and write JSON results.

    Args:
        config_path: Path to experiments/experiment.yaml
    """
    cfg = _read_yaml(config_path)

    result = run_once(cfg)

    out_dir = Path((cfg.get("output") or {}).get("dir", "results/raw"))
    out_dir.mkdir(parents=True, exist_ok=True)

    run_id = result["run_id"]
    pattern = (cfg.get("output") or {}).get("filename_pattern", "{run_id}.json")
    out_path = out_dir / pattern.format(run_id=run_id)

    out_path.write_text(json.dumps(result, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"[runner] Wrote results to {out_path}")


def run_once(cfg: Dict[str, Any], progress: bool = True) -> Dict[str, Any]:
    """Execute one experiment according to the given config.

    Expects keys: run, intern, workload, output.

    Returns:
        Dict matching schema/result.schema.json.
    """
    t_start = time.perf_counter()

    # --- Strategy ---
    intern_cfg = cfg.get("intern", {}) or {}
    runtime = _build_runtime(intern_cfg)
    print(f"[runner] Intern strategy: {runtime.strategy.value}")

    # --- Workload ---
    wl_cfg = cfg.get("workload", {}) or {}
    values = synthetic.load(wl_cfg)
    retain = _parse_retain(wl_cfg.get("retain", "all"))
    total = len(values)

    if total == 0:
        return _empty_result(cfg, runtime)

    print(f"[runner] Interning {total} values")

    # --- Main loop ---
    keep: Deque[Tuple[str, str]] = deque(maxlen=retain)
    latencies: List[float] = []
    keys: set = set()

    with tqdm(total=total, desc=f"Interning ({runtime.strategy.value})", unit="values",
              ncols=80, disable=not progress) as pbar:
        # pop values so the workload list does not keep originals alive
        values.reverse()
        while values:
            value = values.pop()
            t0 = time.perf_counter()
            out = runtime.intern(value)
            latencies.append(time.perf_counter() - t0)

            key = runtime.normalizer(value)
            keys.add(key)
            if retain != 0:
                keep.append((key, out))
            del value, out
            pbar.update(1)

    elapsed = time.perf_counter() - t_start
    gc.collect()

    # --- Aggregates ---
    stats = runtime.stats()
    distinct = len(keys)
    kept_keys = [k for k, _ in keep]
    kept_results = [r for _, r in keep]
    violations = metrics.identity_violations(kept_keys, kept_results)
    lat_stats = metrics.latency_stats(latencies)
    hits = stats.get("hits", 0)

    print(f"[runner] Completed {total} interns in {elapsed:.2f}s")
    print(f"[runner] Hit rate: {metrics.hit_rate(hits, total):.2%} ({hits}/{total})")
    print(f"[runner] Distinct keys: {distinct}, table size: {stats.get('table_size', 0)}")
    print(f"[runner] Identity violations: {violations}")

    result: Dict[str, Any] = _result_header(cfg, runtime)
    result["metrics"] = {
        "total_values": total,
        "distinct_keys": distinct,
        "hits": hits,
        "misses": stats.get("misses", 0),
        "reclaimed": stats.get("reclaimed", 0),
        "replaced": stats.get("replaced", 0),
        "pinned": stats.get("pinned", 0),
        "table_size": stats.get("table_size", 0),
        "live_size": stats.get("live_size", 0),
        "hit_rate": metrics.hit_rate(hits, total),
        "dedup_ratio": metrics.dedup_ratio(total, distinct),
        "identity_violations": violations,
        "latency_mean_sec": round(lat_stats.get("mean", 0.0), 9),
        "latency_p95_sec": round(lat_stats.get("p95", 0.0), 9),
        "latency_p99_sec": round(lat_stats.get("p99", 0.0), 9),
        "throughput_ops": round(metrics.throughput(total, elapsed), 6),
    }
    return result


# ---------------------------
# Helpers
# ---------------------------

def _read_yaml(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _result_header(cfg: Dict[str, Any], runtime: InternRuntime) -> Dict[str, Any]:
    wl_cfg = cfg.get("workload", {}) or {}
    intern_cfg = cfg.get("intern", {}) or {}
    return {
        "run_id": str((cfg.get("run") or {}).get("id") or f"run-{int(time.time())}"),
        "timestamp": datetime.now().isoformat(timespec="seconds"),
        "intern": {
            "mode": str(intern_cfg.get("mode") or "auto"),
            "strategy": runtime.strategy.value,
            "normalization": intern_cfg.get("normalization"),
        },
        "workload": {
            "source": wl_cfg.get("source", "synthetic"),
            "value_kind": wl_cfg.get("value_kind", "runtime"),
            "count": wl_cfg.get("count"),
            "vocabulary": wl_cfg.get("vocabulary"),
            "skew": wl_cfg.get("skew"),
            "seed": wl_cfg.get("seed"),
            "path": wl_cfg.get("path"),
            "retain": wl_cfg.get("retain", "all"),
        },
    }


def _empty_result(cfg: Dict[str, Any], runtime: InternRuntime) -> Dict[str, Any]:
    """Produce a valid result dict when the workload is empty."""
    result = _result_header(cfg, runtime)
    result["metrics"] = {
        "total_values": 0,
        "distinct_keys": 0,
        "hits": 0,
        "misses": 0,
        "reclaimed": 0,
        "replaced": 0,
        "pinned": 0,
        "table_size": 0,
        "live_size": 0,
        "hit_rate": 0.0,
        "dedup_ratio": 0.0,
        "identity_violations": 0,
        "latency_mean_sec": 0.0,
        "latency_p95_sec": 0.0,
        "latency_p99_sec": 0.0,
        "throughput_ops": 0.0,
    }
    return result


# ---------------------------
# CLI
# ---------------------------

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run one strintern benchmark experiment")
    parser.add_argument(
        "config",
        nargs="?",
        default="experiments/experiment.yaml",
        help="Path to the experiment YAML file",
    )
    args = parser.parse_args()
    main(args.config)
