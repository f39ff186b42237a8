from __future__ import annotations

"""Minimal tracing helpers (Explain Mode).

Enable with the --explain CLI flag; emits terse, one-line JSON records at
session milestones so a run can be followed from the terminal.
"""

import json
import sys
from typing import Any, Callable, Dict, Optional, TextIO

_ENABLED = False
_STREAM: Optional[TextIO] = None
_HOOK: Optional[Callable[[str, Dict[str, Any]], None]] = None


def enable(flag: bool = True, stream: Optional[TextIO] = None) -> None:
    global _ENABLED, _STREAM
    _ENABLED = bool(flag)
    _STREAM = stream


def enabled() -> bool:
    return _ENABLED


def set_hook(hook: Optional[Callable[[str, Dict[str, Any]], None]]) -> None:
    """Receive every traced event as (event, payload), even when printing is off."""
    global _HOOK
    _HOOK = hook


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    data = payload or {}
    if _HOOK is not None:
        _HOOK(event, data)
    if not _ENABLED:
        return
    out = _STREAM or sys.stdout
    try:
        line = json.dumps(data, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        line = "{}"
    print(f"[EXPLAIN] {event} :: {line}", file=out)
