from __future__ import annotations

"""Linear ordering mode."""

from typing import List, Sequence, Tuple

from .base_mode import BaseMode, Mode, Premise, Question


class LinearMode(BaseMode):
    """Chain of greater/less premises over one latent total order.

    Item i+1 is greater than item i. Each link is phrased either way round,
    so the shown premises are rephrasings of the same order and the answer
    follows from the indices alone.
    """

    mode = Mode.LINEAR

    def build(self, items: Sequence[str]) -> Tuple[List[Premise], Question, bool]:
        premises: List[Premise] = []
        for i in range(len(items) - 1):
            if self.rng.random() < 0.5:
                premises.append(self._premise(items, i + 1, "greater", i))
            else:
                premises.append(self._premise(items, i, "less", i + 1))

        a, b = self._pick_pair(len(items))
        relation = self.rng.choice(("greater", "less"))
        answer = a > b if relation == "greater" else a < b
        return premises, self._question(items, a, (relation,), b), answer
