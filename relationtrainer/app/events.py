from __future__ import annotations

"""Tiny pub/sub event bus between the controller and its collaborators.

Events: phase_changed, trial_ready, answered, notice, session_finished.
"""

from typing import Any, Callable, Dict, List

from .explain import trace as xtrace


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: str, handler: Callable[[Any], None]) -> None:
        self._subs.setdefault(event, []).append(handler)

    def unsubscribe(self, event: str, handler: Callable[[Any], None]) -> None:
        handlers = self._subs.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: str, payload: Any = None) -> None:
        for h in list(self._subs.get(event, [])):
            try:
                h(payload)
            except Exception as exc:
                # a failing listener must not break the session actor
                xtrace("listener_failed", {"event": event, "error": repr(exc)})
