from __future__ import annotations

"""Base mode abstractions and the trial data model."""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..lexicon.phrasing import Phrasebook


class Mode(str, Enum):
    LINEAR = "linear"
    DISTINCTION = "distinction"
    HIERARCHY = "hierarchy"
    SPATIAL_2D = "spatial2d"
    SPATIAL_3D = "spatial3d"


@dataclass(frozen=True)
class Premise:
    """subject <relation> obj, by item index."""

    subject: int
    relation: str
    obj: int
    text: str


@dataclass(frozen=True)
class Question:
    subject: int
    relation: Tuple[str, ...]
    obj: Optional[int]
    text: str
    style: str = "relation"
    # setup lines read before the question (walk instructions, vantage point)
    narrative: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Trial:
    mode: Mode
    depth: int
    items: Tuple[str, ...]
    premises: Tuple[Premise, ...]
    question: Question
    answer: bool
    modifiers: Tuple[str, ...] = ()
    inverted: bool = False
    blind: bool = False
    interference: bool = False
    key_changed: bool = False
    cipher_keys: Tuple[Tuple[str, str], ...] = ()


@dataclass
class ModeContext:
    """Per-trial generation context handed to a mode."""

    rng: random.Random
    phrasebook: Phrasebook = field(default_factory=Phrasebook)
    deictic: bool = False
    deictic_probability: float = 0.5
    movement: bool = False
    movement_probability: float = 0.5
    scramble_premises: bool = False


class BaseMode:
    """Abstract base for modes: build premises, a question and its answer."""

    mode: Mode

    def __init__(self, ctx: ModeContext) -> None:
        self.ctx = ctx
        self.rng = ctx.rng
        self.phrases = ctx.phrasebook

    def build(self, items: Sequence[str]) -> Tuple[List[Premise], Question, bool]:
        raise NotImplementedError

    def generate(self, items: Sequence[str]) -> Trial:
        if len(items) < 2:
            raise ValueError("a trial needs at least two items")
        premises, question, answer = self.build(items)
        if self.ctx.scramble_premises:
            self.rng.shuffle(premises)
        return Trial(
            mode=self.mode,
            depth=len(items) - 1,
            items=tuple(items),
            premises=tuple(premises),
            question=question,
            answer=answer,
            cipher_keys=self.phrases.used_keys(),
        )

    def _premise(self, items: Sequence[str], subject: int, relation: str, obj: int) -> Premise:
        text = self.phrases.statement(items[subject], (relation,), items[obj])
        return Premise(subject=subject, relation=relation, obj=obj, text=text)

    def _question(self, items: Sequence[str], subject: int, relation: Sequence[str], obj: int) -> Question:
        text = self.phrases.question(items[subject], relation, items[obj])
        return Question(subject=subject, relation=tuple(relation), obj=obj, text=text)

    def _pick_pair(self, n: int) -> Tuple[int, int]:
        a, b = self.rng.sample(range(n), 2)
        return a, b
