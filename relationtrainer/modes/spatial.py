from __future__ import annotations

"""Spatial modes (2D and 3D).

Items are placed by unit steps, each step stated as a premise between
consecutive items. The question style is picked with fixed precedence:
movement, then deictic (both 2D only and gated by probability), then the
default absolute relation.
"""

from typing import List, Optional, Sequence, Tuple

from ..errors import DegenerateGeometryError
from ..lexicon.phrasing import Phrasebook
from ..util.randomness import coin
from .base_mode import BaseMode, Mode, Premise, Question
from .deictic import deictic_question
from .geometry import PLANAR_STEPS, SPATIAL_STEPS, Descriptor, Vec, all_descriptors, descriptor, place_items
from .movement import movement_question

MAX_DISTRACTOR_DRAWS = 50


class SpatialMode(BaseMode):
    dims = 2

    def _steps(self) -> Sequence[str]:
        return PLANAR_STEPS if self.dims == 2 else SPATIAL_STEPS

    def build(self, items: Sequence[str]) -> Tuple[List[Premise], Question, bool]:
        positions, steps = place_items(self.rng, len(items), self._steps())
        premises = [self._premise(items, i + 1, step, i) for i, step in enumerate(steps)]

        picked: Optional[Tuple[Question, bool]] = None
        if self.dims == 2 and self.ctx.movement and coin(self.rng, self.ctx.movement_probability):
            picked = self._try(movement_question, items, positions)
        if picked is None and self.dims == 2 and self.ctx.deictic and len(items) >= 3:
            if coin(self.rng, self.ctx.deictic_probability):
                picked = self._try(deictic_question, items, positions)
        if picked is None:
            picked = self._relation_question(items, positions)
        question, answer = picked
        return premises, question, answer

    def _try(self, builder, items: Sequence[str], positions: Sequence[Vec]) -> Optional[Tuple[Question, bool]]:
        try:
            return builder(self.rng, items, positions, self.phrases)
        except DegenerateGeometryError:
            return None

    def _relation_question(self, items: Sequence[str], positions: Sequence[Vec]) -> Tuple[Question, bool]:
        a, b = self._pick_pair(len(items))
        truth = descriptor(positions[a], positions[b])
        if self.rng.random() < 0.5:
            return self._question(items, a, truth, b), True
        asked = self._distractor(items[a], truth, items[b])
        return self._question(items, a, asked, b), False

    def _distractor(self, subject: str, truth: Descriptor, obj: str) -> Descriptor:
        """A descriptor whose wording differs from the true one."""
        scratch = Phrasebook(self.phrases.cipher)
        true_text = scratch.question(subject, truth, obj)
        options = [d for d in all_descriptors(self.dims) if d != truth]
        for _ in range(MAX_DISTRACTOR_DRAWS):
            cand = self.rng.choice(options)
            if scratch.question(subject, cand, obj) != true_text:
                return cand
        raise DegenerateGeometryError("no distinct distractor wording available")


class Spatial2DMode(SpatialMode):
    mode = Mode.SPATIAL_2D
    dims = 2


class Spatial3DMode(SpatialMode):
    mode = Mode.SPATIAL_3D
    dims = 3
