from __future__ import annotations

"""Modifier pipeline applied after a mode has built its trial.

Movement and deictic framing are chosen inside spatial generation and cipher
substitution happens while text is phrased; this module tags those, attaches
the session-level flags, and applies the transformation (night inversion)
last so it flips the final answer exactly once.
"""

import random
from dataclasses import dataclass, replace
from typing import List

from ..phases import Phase
from ..util.randomness import coin
from .base_mode import Trial

TRANSFORMATION_PROBABILITY = 0.5


def invert(trial: Trial) -> Trial:
    """Night condition: the expected answer is reversed."""
    if trial.inverted:
        raise ValueError("trial is already inverted")
    return replace(
        trial,
        answer=not trial.answer,
        inverted=True,
        modifiers=trial.modifiers + ("transformation",),
    )


@dataclass
class ModifierPipeline:
    rng: random.Random
    transformation_probability: float = TRANSFORMATION_PROBABILITY

    def apply(
        self,
        trial: Trial,
        *,
        blind: bool = False,
        cipher: bool = False,
        interference: bool = False,
        transformation: bool = False,
        key_changed: bool = False,
    ) -> Trial:
        modifiers: List[str] = list(trial.modifiers)
        if blind:
            modifiers.append("blind")
        if cipher:
            modifiers.append("cipher")
        if trial.question.style in ("deictic", "movement"):
            modifiers.append(trial.question.style)
        if interference:
            modifiers.append("interference")
        out = replace(
            trial,
            modifiers=tuple(modifiers),
            blind=blind,
            interference=interference,
            key_changed=key_changed and cipher,
        )
        if transformation and coin(self.rng, self.transformation_probability):
            out = invert(out)
        return out


def first_phase(trial: Trial) -> Phase:
    """Where a round starts: memorization, then interference, then the question."""
    if trial.blind or trial.key_changed:
        return Phase.PREMISE_MEMORIZE
    return phase_after_memorize(trial)


def phase_after_memorize(trial: Trial) -> Phase:
    return Phase.INTERFERENCE if trial.interference else Phase.QUESTION
