from __future__ import annotations

"""Distinction (same/opposite) mode."""

from typing import List, Sequence, Tuple

from .base_mode import BaseMode, Mode, Premise, Question


def propagate_labels(first: bool, relations: Sequence[str]) -> List[bool]:
    """Binary label of every item, following same/opposite links from item 0."""
    labels = [first]
    for rel in relations:
        labels.append(labels[-1] if rel == "same" else not labels[-1])
    return labels


class DistinctionMode(BaseMode):
    mode = Mode.DISTINCTION

    def build(self, items: Sequence[str]) -> Tuple[List[Premise], Question, bool]:
        relations = [self.rng.choice(("same", "opposite")) for _ in range(len(items) - 1)]
        labels = propagate_labels(self.rng.random() < 0.5, relations)
        premises = [self._premise(items, i, rel, i + 1) for i, rel in enumerate(relations)]

        a, b = self._pick_pair(len(items))
        relation = self.rng.choice(("same", "opposite"))
        same = labels[a] == labels[b]
        answer = same if relation == "same" else not same
        return premises, self._question(items, a, (relation,), b), answer
