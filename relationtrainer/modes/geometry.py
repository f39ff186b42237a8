from __future__ import annotations

"""Grid geometry for the spatial modes."""

import random
from typing import Dict, List, Sequence, Tuple

from ..lexicon.keywords import COMPASS, SAME_LOCATION, VERTICAL, STEP_VECTORS, compass_for, inverse_of

Vec = Tuple[int, int, int]
Descriptor = Tuple[str, ...]

PLANAR_STEPS: Tuple[str, ...] = ("north", "south", "east", "west")
SPATIAL_STEPS: Tuple[str, ...] = PLANAR_STEPS + ("above", "below")

HEADING_VECTORS: Dict[str, Tuple[int, int]] = {
    "north": (0, 1),
    "east": (1, 0),
    "south": (0, -1),
    "west": (-1, 0),
}


def add(a: Vec, b: Vec) -> Vec:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Vec, b: Vec) -> Vec:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def place_items(rng: random.Random, n: int, directions: Sequence[str]) -> Tuple[List[Vec], List[str]]:
    """Place n items by unit steps; returns positions and the step taken to reach each.

    Steps prefer unoccupied cells; when every neighbour is taken any direction
    is allowed and two items may share a cell.
    """
    positions: List[Vec] = [(0, 0, 0)]
    occupied = {positions[0]}
    steps: List[str] = []
    for _ in range(n - 1):
        prev = positions[-1]
        free = [d for d in directions if add(prev, STEP_VECTORS[d]) not in occupied]
        step = rng.choice(free or list(directions))
        pos = add(prev, STEP_VECTORS[step])
        positions.append(pos)
        occupied.add(pos)
        steps.append(step)
    return positions, steps


def descriptor(a: Vec, b: Vec) -> Descriptor:
    """Where a is relative to b, from the signs of a - b."""
    dx, dy, dz = sub(a, b)
    parts: List[str] = []
    horizontal = compass_for(dx, dy)
    if horizontal:
        parts.append(horizontal)
    if dz > 0:
        parts.append("above")
    elif dz < 0:
        parts.append("below")
    return tuple(parts) if parts else (SAME_LOCATION,)


def invert_descriptor(desc: Descriptor) -> Descriptor:
    if desc == (SAME_LOCATION,):
        return desc
    return tuple(inverse_of(k) for k in desc)


def all_descriptors(dims: int) -> List[Descriptor]:
    """Every non-degenerate descriptor a question may ask about."""
    out: List[Descriptor] = [(c,) for c in COMPASS]
    if dims == 3:
        out += [(v,) for v in VERTICAL]
        out += [(c, v) for c in COMPASS for v in VERTICAL]
    return out
