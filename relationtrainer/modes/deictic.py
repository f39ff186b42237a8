from __future__ import annotations

"""Perspective (deictic) questions: left/right as seen by an in-scene observer."""

import random
from typing import Sequence, Tuple

from ..errors import DegenerateGeometryError
from ..lexicon.phrasing import Phrasebook
from .base_mode import Question
from .geometry import Vec, sub

EPSILON = 1e-9


def perspective_relation(facing: Tuple[int, int], query: Tuple[int, int], eps: float = EPSILON) -> str:
    """left/right from the cross product; front/behind when collinear."""
    fx, fy = facing
    qx, qy = query
    if (fx, fy) == (0, 0) or (qx, qy) == (0, 0):
        raise DegenerateGeometryError("observer shares a cell with another item")
    cross = fx * qy - fy * qx
    if abs(cross) > eps:
        return "left" if cross > 0 else "right"
    dot = fx * qx + fy * qy
    if dot > 0:
        return "front"
    if dot < 0:
        return "behind"
    raise DegenerateGeometryError("no direction can be determined")


def deictic_question(
    rng: random.Random,
    items: Sequence[str],
    positions: Sequence[Vec],
    phrases: Phrasebook,
) -> Tuple[Question, bool]:
    observer, facing, query = rng.sample(range(len(items)), 3)
    fv = sub(positions[facing], positions[observer])
    qv = sub(positions[query], positions[observer])
    relation = perspective_relation(fv[:2], qv[:2])

    asked = rng.choice(("left", "right"))
    narrative = (f"You are at {items[observer]}, facing {items[facing]}.",)
    question = Question(
        subject=query,
        relation=(asked,),
        obj=observer,
        text=phrases.question(items[query], (asked,), "you"),
        style="deictic",
        narrative=narrative,
    )
    return question, asked == relation
