from .base_mode import BaseMode, Mode, ModeContext, Premise, Question, Trial
from .distinction import DistinctionMode
from .hierarchy import HierarchyMode
from .linear import LinearMode
from .spatial import Spatial2DMode, Spatial3DMode

__all__ = [
    "BaseMode",
    "Mode",
    "ModeContext",
    "Premise",
    "Question",
    "Trial",
    "DistinctionMode",
    "HierarchyMode",
    "LinearMode",
    "Spatial2DMode",
    "Spatial3DMode",
]
