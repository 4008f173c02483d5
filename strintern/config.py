# strintern/config.py
"""Interning settings.

Settings come from one of three places:
- environment variables (process-wide default runtime)
- the `intern:` section of an experiment YAML (runner)
- a standalone YAML file

    intern:
      mode: auto            # auto | passthrough | retaining | reclaiming
      normalization: none   # none | NFC | NFD | NFKC | NFKD
      native_intern: false  # overrides the host capability flag when set
      weak_refs: true       # overrides the host capability flag when set
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from strintern.capabilities import parse_flag

MODES = ("auto", "passthrough", "retaining", "reclaiming")


@dataclass(frozen=True)
class InternSettings:
    mode: str = "auto"
    normalization: Optional[str] = None
    native_intern: Optional[bool] = None
    weak_refs: Optional[bool] = None

    def __post_init__(self) -> None:
        if self.mode not in MODES:
            raise ValueError(f"Unknown intern mode '{self.mode}'. Available: {', '.join(MODES)}")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "InternSettings":
        data = data or {}
        mode = str(data.get("mode") or "auto").strip().lower()
        normalization = data.get("normalization")
        if normalization is not None and str(normalization).strip().lower() in {"", "none"}:
            normalization = None
        return cls(
            mode=mode,
            normalization=normalization,
            native_intern=_optional_bool(data.get("native_intern")),
            weak_refs=_optional_bool(data.get("weak_refs")),
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InternSettings":
        """Mode and normalization from STRINTERN_*; capability flags stay with `capabilities`."""
        env = os.environ if environ is None else environ
        return cls.from_mapping(
            {
                "mode": env.get("STRINTERN_MODE"),
                "normalization": env.get("STRINTERN_NORMALIZATION"),
            }
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "normalization": self.normalization,
            "native_intern": self.native_intern,
            "weak_refs": self.weak_refs,
        }


def load_settings(path: str | Path) -> InternSettings:
    """Read settings from a YAML file, either bare or under an `intern:` key."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if "intern" in data:
        data = data["intern"] or {}
    return InternSettings.from_mapping(data)


def _optional_bool(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    return parse_flag(str(value), default=False)
