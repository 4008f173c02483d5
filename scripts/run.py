#!/usr/bin/env python3
"""
scripts/run.py
Thin wrapper to execute a single experiment via strintern.runner.main().

Usage (from project root):
  python scripts/run.py --config experiments/experiment.yaml

Notes:
- Adds the project root to sys.path so an uninstalled checkout works too.
- Does not compute metrics itself; runner handles everything and writes JSON.
"""

from __future__ import annotations

import argparse
import os
import sys


def _add_root_to_path() -> None:
    # scripts/ -> project_root
    scripts_dir = os.path.dirname(os.path.abspath(__file__))
    project_root = os.path.dirname(scripts_dir)
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


def _parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Run a strintern benchmark experiment")
    ap.add_argument(
        "--config",
        default="experiments/experiment.yaml",
        help="Path to experiment config (YAML)",
    )
    return ap.parse_args()


def main() -> None:
    _add_root_to_path()
    # Import only after sys.path is fixed
    from strintern.runner import main as runner_main

    ns = _parse_args()
    runner_main(ns.config)


if __name__ == "__main__":
    main()
