from __future__ import annotations

"""Cancellable timers for the single-threaded session actor.

Each category (session, question, interference) owns at most one task.
Nothing runs on its own: the owner calls advance_to(now) and due callbacks
fire in due-time order on the caller's thread.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

SESSION = "session"
QUESTION = "question"
INTERFERENCE = "interference"


@dataclass(eq=False)
class TimerTask:
    category: str
    callback: Callable[[], None]
    due: float
    interval: Optional[float] = None
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def periodic(self) -> bool:
        return self.interval is not None


class TimerWheel:
    def __init__(self) -> None:
        self._tasks: Dict[str, TimerTask] = {}
        self.now = 0.0

    def every(self, category: str, interval: float, callback: Callable[[], None], now: Optional[float] = None) -> TimerTask:
        if interval <= 0:
            raise ValueError("interval must be positive")
        start = self.now if now is None else now
        return self._install(TimerTask(category, callback, start + interval, interval))

    def once(self, category: str, delay: float, callback: Callable[[], None], now: Optional[float] = None) -> TimerTask:
        start = self.now if now is None else now
        return self._install(TimerTask(category, callback, start + max(0.0, delay)))

    def _install(self, task: TimerTask) -> TimerTask:
        self.cancel(task.category)
        self._tasks[task.category] = task
        return task

    def cancel(self, category: str) -> None:
        task = self._tasks.pop(category, None)
        if task is not None:
            task.cancel()

    def cancel_all(self) -> None:
        for category in list(self._tasks):
            self.cancel(category)

    def cancel_except(self, keep: Iterable[str]) -> None:
        keep = set(keep)
        for category in list(self._tasks):
            if category not in keep:
                self.cancel(category)

    def active(self) -> List[str]:
        return sorted(self._tasks)

    def is_active(self, category: str) -> bool:
        return category in self._tasks

    def advance_to(self, now: float) -> int:
        """Fire every task due at or before now; returns the number of firings."""
        fired = 0
        while True:
            due = [t for t in self._tasks.values() if t.due <= now]
            if not due:
                break
            task = min(due, key=lambda t: t.due)
            self.now = task.due
            if task.periodic:
                task.due += task.interval  # type: ignore[operator]
            else:
                self._tasks.pop(task.category, None)
            task.callback()
            fired += 1
        self.now = max(self.now, now)
        return fired
