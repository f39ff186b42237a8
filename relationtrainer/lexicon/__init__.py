from .keywords import (
    COMPASS,
    DISTINCTION,
    EGOCENTRIC,
    FAMILIES,
    HIERARCHY,
    LINEAR,
    SAME_LOCATION,
    VERTICAL,
    VOCABULARY,
    inverse_of,
)
from .cipher import CipherMap, CipherSubstitution
from .phrasing import Phrasebook
from .symbols import SYMBOL_STYLES, SymbolProvider

__all__ = [
    "COMPASS",
    "DISTINCTION",
    "EGOCENTRIC",
    "FAMILIES",
    "HIERARCHY",
    "LINEAR",
    "SAME_LOCATION",
    "VERTICAL",
    "VOCABULARY",
    "inverse_of",
    "CipherMap",
    "CipherSubstitution",
    "Phrasebook",
    "SYMBOL_STYLES",
    "SymbolProvider",
]
