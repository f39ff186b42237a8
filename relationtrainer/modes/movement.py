from __future__ import annotations

"""Path integration: walk/turn instructions, then an egocentric question."""

import random
from typing import List, Sequence, Tuple

from ..errors import DegenerateGeometryError
from ..lexicon.keywords import EGOCENTRIC, HEADINGS
from ..lexicon.phrasing import Phrasebook
from .base_mode import Question
from .geometry import HEADING_VECTORS, Vec

MAX_WALK = 3


def egocentric_relation(rel: Tuple[int, int], heading: Tuple[int, int]) -> str:
    """front/behind/left/right of a relative vector in a walker's local frame.

    Ties go to front/behind when the lateral offset does not exceed the
    forward offset in magnitude.
    """
    hx, hy = heading
    vx, vy = rel
    forward = vx * hx + vy * hy
    lateral = vx * hy - vy * hx
    if forward == 0 and lateral == 0:
        raise DegenerateGeometryError("target coincides with the walker")
    if abs(lateral) <= abs(forward):
        return "front" if forward > 0 else "behind"
    return "right" if lateral > 0 else "left"


def walk(
    rng: random.Random, start: Tuple[int, int], heading: int, n_instructions: int
) -> Tuple[Tuple[int, int], int, List[Tuple[str, object]]]:
    """Apply random instructions; headings index HEADINGS (clockwise)."""
    x, y = start
    instructions: List[Tuple[str, object]] = []
    for _ in range(n_instructions):
        if rng.random() < 0.5:
            k = rng.randint(1, MAX_WALK)
            hx, hy = HEADING_VECTORS[HEADINGS[heading]]
            x, y = x + hx * k, y + hy * k
            instructions.append(("walk", k))
        else:
            turn = rng.choice(("left", "right"))
            heading = (heading + (1 if turn == "right" else -1)) % len(HEADINGS)
            instructions.append(("turn", turn))
    return (x, y), heading, instructions


def movement_question(
    rng: random.Random,
    items: Sequence[str],
    positions: Sequence[Vec],
    phrases: Phrasebook,
) -> Tuple[Question, bool]:
    n = len(items)
    start = rng.randrange(n)
    heading0 = rng.randrange(len(HEADINGS))
    (x, y), heading, instructions = walk(rng, positions[start][:2], heading0, rng.randint(2, 4))

    candidates = [i for i in range(n) if positions[i][:2] != (x, y)]
    if not candidates:
        raise DegenerateGeometryError("every item lies under the walker")
    target = rng.choice(candidates)
    tx, ty = positions[target][:2]
    relation = egocentric_relation((tx - x, ty - y), HEADING_VECTORS[HEADINGS[heading]])

    if rng.random() < 0.5:
        asked = relation
    else:
        asked = rng.choice([r for r in EGOCENTRIC if r != relation])

    narrative = [f"You stand at {items[start]} facing {phrases.word(HEADINGS[heading0])}."]
    for kind, value in instructions:
        if kind == "walk":
            narrative.append(f"Walk {value} step{'s' if value != 1 else ''}.")
        else:
            narrative.append(f"Turn {phrases.word(str(value))}.")
    text = phrases.question(items[target], (asked,), "you")
    question = Question(
        subject=target,
        relation=(asked,),
        obj=None,
        text=text,
        style="movement",
        narrative=tuple(narrative),
    )
    return question, asked == relation
