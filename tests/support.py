from __future__ import annotations

"""Shared helpers for the test suite."""

from typing import Dict, Set, Tuple

from relationtrainer.lexicon.keywords import STEP_VECTORS
from relationtrainer.modes.base_mode import Trial
from relationtrainer.modes.geometry import Vec, add


class ManualClock:
    """Deterministic stand-in for time.monotonic."""

    def __init__(self, start: float = 100.0) -> None:
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> float:
        self.t += seconds
        return self.t


def greater_pairs(trial: Trial, up: str, down: str) -> Set[Tuple[int, int]]:
    """Transitive closure of 'x ranks above y' read off the premises alone."""
    edges = set()
    for p in trial.premises:
        if p.relation == up:
            edges.add((p.subject, p.obj))
        elif p.relation == down:
            edges.add((p.obj, p.subject))
    closure = set(edges)
    changed = True
    while changed:
        changed = False
        for a, b in list(closure):
            for c, d in list(closure):
                if b == c and (a, d) not in closure:
                    closure.add((a, d))
                    changed = True
    return closure


def positions_from_premises(trial: Trial) -> Dict[int, Vec]:
    """Rebuild item coordinates from spatial step premises."""
    steps = sorted(trial.premises, key=lambda p: p.subject)
    pos: Dict[int, Vec] = {0: (0, 0, 0)}
    for p in steps:
        pos[p.subject] = add(pos[p.obj], STEP_VECTORS[p.relation])
    return pos
