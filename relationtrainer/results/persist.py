from __future__ import annotations

"""JSON persistence of user settings between runs.

Document shape:
{
  "schema": 1,
  "settings": {"enabled_modes": [...], "depth": 3, "cipher": true, ...}
}

Missing, unreadable or malformed files are treated as absent: callers get an
empty override set and the built-in defaults apply.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict

from ..config.config import SessionConfig

SCHEMA = 1


def _warn(msg: str) -> None:
    print(f"WARNING: {msg}", file=sys.stderr)


def load_settings(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}
    try:
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        _warn(f"Ignoring unreadable settings file {p} ({exc})")
        return {}
    if not isinstance(data, dict) or data.get("schema") != SCHEMA:
        _warn(f"Ignoring settings file {p} with unknown layout")
        return {}
    settings = data.get("settings")
    if not isinstance(settings, dict):
        _warn(f"Ignoring settings file {p} without a settings mapping")
        return {}
    return settings


def save_settings(path: str | Path, config: SessionConfig) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump({"schema": SCHEMA, "settings": config.to_dict()}, f, indent=2)


def apply_settings(config: SessionConfig, settings: Dict[str, Any]) -> SessionConfig:
    """Overlay persisted settings; values that fail validation are dropped as a whole."""
    try:
        return config.with_overrides(settings)
    except (TypeError, ValueError) as exc:
        _warn(f"Persisted settings rejected ({exc}); using defaults")
        return config
