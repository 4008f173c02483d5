#!/usr/bin/env python3
"""
scripts/aggregate.py — Intern Benchmark Aggregator

Scans results/raw/*.json and produces results/tables/summary.csv with one row
per run, for comparing strategies on hit rate, table growth and reclamation.

Format: current strintern.runner JSON format only (fails fast on schema mismatches).
"""

from __future__ import annotations

import argparse
import glob
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List

try:
    import pandas as pd  # type: ignore
except ImportError:
    print(
        "❌ pandas is required for aggregation. Install it with:\n"
        "    pip install pandas\n",
        file=sys.stderr,
    )
    sys.exit(1)


REQUIRED_TOP_LEVEL = ["run_id", "timestamp", "intern", "workload", "metrics"]
REQUIRED_METRICS = ["total_values", "distinct_keys", "hits", "misses", "reclaimed",
                    "table_size", "live_size", "hit_rate", "dedup_ratio",
                    "identity_violations", "latency_mean_sec", "throughput_ops"]


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Aggregate strintern benchmark results"
    )
    parser.add_argument(
        "--raw-dir",
        default="results/raw",
        help="Directory containing raw result JSON files"
    )
    parser.add_argument(
        "--output",
        default="results/tables/summary.csv",
        help="Output CSV file path"
    )
    return parser.parse_args()


def _validate_result_schema(data: Dict[str, Any], filepath: str) -> None:
    """
    Validate that JSON has the fields this aggregator reads.
    Fails fast with clear error messages for missing required fields.
    """
    for field in REQUIRED_TOP_LEVEL:
        if field not in data:
            raise ValueError(f"Missing required field '{field}' in {filepath}")
    for field in ["mode", "strategy"]:
        if field not in data["intern"]:
            raise ValueError(f"Missing intern.{field} in {filepath}")
    for field in REQUIRED_METRICS:
        if field not in data["metrics"]:
            raise ValueError(f"Missing metrics.{field} in {filepath}")


def _derived_metrics(metrics: Dict[str, Any]) -> Dict[str, float]:
    """Table growth relative to the working set."""
    distinct = metrics["distinct_keys"]
    table_size = metrics["table_size"]
    live_size = metrics["live_size"]

    # >1 means the table holds more keys than are still referenced
    retention_factor = table_size / live_size if live_size > 0 else float(table_size > 0)
    table_fill = table_size / distinct if distinct > 0 else 0.0
    stale_entries = max(0, table_size - live_size)

    return {
        "retention_factor": retention_factor,
        "table_fill": table_fill,
        "stale_entries": stale_entries,
    }


def process_result_file(filepath: str) -> Dict[str, Any] | None:
    """Process a single result JSON file into a row dict."""
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)

        _validate_result_schema(data, filepath)

        intern = data["intern"]
        workload = data["workload"]
        metrics = data["metrics"]

        row = {
            # Experiment identification
            "run_id": data["run_id"],
            "timestamp": data["timestamp"],
            "mode": intern["mode"],
            "strategy": intern["strategy"],
            "normalization": intern.get("normalization"),

            # Workload
            "source": workload.get("source"),
            "value_kind": workload.get("value_kind"),
            "vocabulary": workload.get("vocabulary"),
            "skew": workload.get("skew"),
            "retain": workload.get("retain"),
        }
        row.update({field: metrics[field] for field in REQUIRED_METRICS})
        row["latency_p95_sec"] = metrics.get("latency_p95_sec")
        row.update(_derived_metrics(metrics))
        row["result_file"] = os.path.relpath(filepath)
        return row

    except json.JSONDecodeError as e:
        print(f"❌ Invalid JSON in {filepath}: {e}", file=sys.stderr)
        return None
    except (OSError, ValueError, KeyError) as e:
        print(f"❌ Error processing {filepath}: {e}", file=sys.stderr)
        return None


def aggregate(raw_dir: str) -> "pd.DataFrame":
    """Build the summary table; empty DataFrame when nothing usable is found."""
    json_files = sorted(glob.glob(os.path.join(raw_dir, "*.json")))
    rows: List[Dict[str, Any]] = []
    for filepath in json_files:
        row = process_result_file(filepath)
        if row:
            rows.append(row)
    return pd.DataFrame(rows)


def main() -> None:
    args = _parse_args()

    if not glob.glob(os.path.join(args.raw_dir, "*.json")):
        print(f"❌ No JSON files found in {args.raw_dir}", file=sys.stderr)
        sys.exit(1)

    df = aggregate(args.raw_dir)
    if df.empty:
        print("❌ No valid result files found", file=sys.stderr)
        sys.exit(1)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)

    print(f"✅ Aggregated {len(df)} runs to {args.output}")
    print(f"   Columns: {len(df.columns)}")
    summary = df.groupby("strategy")[["hit_rate", "table_size", "reclaimed"]].mean()
    print(summary.to_string())


if __name__ == "__main__":
    main()
