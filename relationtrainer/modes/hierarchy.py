from __future__ import annotations

"""Hierarchy (containment) mode."""

from typing import List, Sequence, Tuple

from .base_mode import BaseMode, Mode, Premise, Question


class HierarchyMode(BaseMode):
    """Item i contains item i+1, so a lower index sits further out."""

    mode = Mode.HIERARCHY

    def build(self, items: Sequence[str]) -> Tuple[List[Premise], Question, bool]:
        premises: List[Premise] = []
        for i in range(len(items) - 1):
            if self.rng.random() < 0.5:
                premises.append(self._premise(items, i, "contains", i + 1))
            else:
                premises.append(self._premise(items, i + 1, "inside", i))

        a, b = self._pick_pair(len(items))
        relation = self.rng.choice(("inside", "contains"))
        answer = a > b if relation == "inside" else a < b
        return premises, self._question(items, a, (relation,), b), answer
