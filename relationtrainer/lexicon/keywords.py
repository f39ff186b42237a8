from __future__ import annotations

"""Relation keyword vocabulary shared by every mode.

The vocabulary is ordered so that each family occupies a contiguous block.
The cipher relies on that layout: a contiguous block no longer than the token
pool always maps to distinct tokens.
"""

from typing import Dict, Tuple

COMPASS: Tuple[str, ...] = (
    "north",
    "south",
    "east",
    "west",
    "north-east",
    "north-west",
    "south-east",
    "south-west",
)
VERTICAL: Tuple[str, ...] = ("above", "below")
EGOCENTRIC: Tuple[str, ...] = ("front", "behind", "left", "right")
LINEAR: Tuple[str, ...] = ("greater", "less")
DISTINCTION: Tuple[str, ...] = ("same", "opposite")
HIERARCHY: Tuple[str, ...] = ("contains", "inside")

VOCABULARY: Tuple[str, ...] = COMPASS + VERTICAL + EGOCENTRIC + LINEAR + DISTINCTION + HIERARCHY

# Keywords that can appear together in one round
FAMILIES: Dict[str, Tuple[str, ...]] = {
    "spatial": COMPASS + VERTICAL + EGOCENTRIC,
    "linear": LINEAR,
    "distinction": DISTINCTION,
    "hierarchy": HIERARCHY,
}

SAME_LOCATION = "same location"

_INVERSES: Dict[str, str] = {
    "north": "south",
    "east": "west",
    "north-east": "south-west",
    "north-west": "south-east",
    "above": "below",
    "front": "behind",
    "left": "right",
    "greater": "less",
    "contains": "inside",
    "same": "same",
    "opposite": "opposite",
}
_INVERSES.update({v: k for k, v in list(_INVERSES.items())})

# Unit vectors (dx, dy, dz) for the directions a spatial step can take
STEP_VECTORS: Dict[str, Tuple[int, int, int]] = {
    "north": (0, 1, 0),
    "south": (0, -1, 0),
    "east": (1, 0, 0),
    "west": (-1, 0, 0),
    "above": (0, 0, 1),
    "below": (0, 0, -1),
}

HEADINGS: Tuple[str, ...] = ("north", "east", "south", "west")


def inverse_of(keyword: str) -> str:
    """Return the keyword describing the same relation from the other side."""
    return _INVERSES[keyword]


def compass_for(dx: int, dy: int) -> str | None:
    """Compass keyword for the signs of a horizontal delta (None when zero)."""
    ns = "north" if dy > 0 else ("south" if dy < 0 else "")
    ew = "east" if dx > 0 else ("west" if dx < 0 else "")
    if ns and ew:
        return f"{ns}-{ew}"
    return ns or ew or None
