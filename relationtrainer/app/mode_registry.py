from __future__ import annotations

"""Mode registry and metadata.

Expose metadata for each reasoning mode and construct mode instances via a
simple factory.
"""

from dataclasses import dataclass
from typing import Dict, List, Type

from ..modes.base_mode import BaseMode, Mode, ModeContext
from ..modes.distinction import DistinctionMode
from ..modes.hierarchy import HierarchyMode
from ..modes.linear import LinearMode
from ..modes.spatial import Spatial2DMode, Spatial3DMode


@dataclass(frozen=True)
class ModeMeta:
    id: str
    name: str
    description: str
    supports_deictic: bool = False
    supports_movement: bool = False


_MODES: Dict[Mode, Type[BaseMode]] = {
    Mode.LINEAR: LinearMode,
    Mode.DISTINCTION: DistinctionMode,
    Mode.HIERARCHY: HierarchyMode,
    Mode.SPATIAL_2D: Spatial2DMode,
    Mode.SPATIAL_3D: Spatial3DMode,
}


def list_modes() -> List[ModeMeta]:
    return [
        ModeMeta(
            id=Mode.LINEAR.value,
            name="Linear",
            description="Chain of greater/less statements over one ordering.",
        ),
        ModeMeta(
            id=Mode.DISTINCTION.value,
            name="Distinction",
            description="Same/opposite statements; decide whether two items match.",
        ),
        ModeMeta(
            id=Mode.HIERARCHY.value,
            name="Hierarchy",
            description="Containment chain; decide which item is inside which.",
        ),
        ModeMeta(
            id=Mode.SPATIAL_2D.value,
            name="Space 2D",
            description="Compass steps on a plane; relate two items.",
            supports_deictic=True,
            supports_movement=True,
        ),
        ModeMeta(
            id=Mode.SPATIAL_3D.value,
            name="Space 3D",
            description="Compass and vertical steps; relate two items in space.",
        ),
    ]


def get_mode(mode_id: str) -> ModeMeta:
    for m in list_modes():
        if m.id == mode_id:
            return m
    raise KeyError(f"Unknown mode id: {mode_id}")


def make_mode(mode_id: str, ctx: ModeContext) -> BaseMode:
    """Factory that builds the concrete mode for one trial."""
    try:
        mode = Mode(mode_id)
    except ValueError:
        raise KeyError(f"Unknown mode id: {mode_id}") from None
    return _MODES[mode](ctx)
