from __future__ import annotations

"""Curated human-friendly setting presets.

Presets are flat SessionConfig overrides layered on top of the loaded
configuration, so a user can pick a sensible difficulty without many flags.
"""

from typing import Any, Dict

from ..config.config import SessionConfig

PRESETS: Dict[str, Dict[str, Any]] = {
    "beginner": {
        "enabled_modes": ["linear", "distinction", "hierarchy"],
        "depth": 2,
        "max_depth": 4,
        "session_seconds": 120,
        "question_timer": False,
        "blind": False,
        "cipher": False,
        "transformation": False,
        "interference": False,
    },
    "default": {
        "enabled_modes": ["linear", "distinction", "hierarchy", "spatial2d", "spatial3d"],
        "depth": 2,
        "max_depth": None,
        "session_seconds": 180,
        "question_timer": False,
    },
    "advanced": {
        "enabled_modes": ["linear", "distinction", "hierarchy", "spatial2d", "spatial3d"],
        "depth": 3,
        "max_depth": None,
        "session_seconds": 300,
        "question_timer": True,
        "question_seconds": 20,
        "blind": True,
        "cipher": True,
        "transformation": True,
        "deictic": True,
        "movement": True,
        "interference": True,
    },
}


def apply_preset(config: SessionConfig, name: str) -> SessionConfig:
    """Return config with the named preset applied.

    Raises:
        KeyError: if the preset is unknown.
    """
    try:
        overrides = PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown preset: {name} (choose from {', '.join(PRESETS)})") from None
    return config.with_overrides(overrides)
