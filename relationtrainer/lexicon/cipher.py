from __future__ import annotations

"""Session-scoped substitution of relation keywords with nonsense tokens."""

import random
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from ..util.randomness import coin
from .keywords import FAMILIES, VOCABULARY

NONSENSE_POOL: Tuple[str, ...] = (
    "zofu",
    "kib",
    "mafo",
    "trel",
    "quop",
    "vasp",
    "glim",
    "dorn",
    "yeb",
    "snaf",
    "plok",
    "wumi",
    "rast",
    "jev",
    "fint",
    "huzz",
    "cleb",
    "nopo",
    "brak",
    "teff",
    "zung",
    "miv",
    "gosk",
    "prell",
)

POOL_SIZE = 16

_LARGEST_FAMILY = max(len(v) for v in FAMILIES.values())


@dataclass(frozen=True)
class CipherMap:
    """One generated key: keyword -> token, plus the generation counter."""

    mapping: Mapping[str, str]
    generation: int = 0

    def token(self, keyword: str) -> Optional[str]:
        return self.mapping.get(keyword)

    def keys_for(self, keywords: Iterable[str]) -> List[Tuple[str, str]]:
        """(keyword, token) pairs for the mapped keywords, in first-use order."""
        out: List[Tuple[str, str]] = []
        seen = set()
        for kw in keywords:
            tok = self.mapping.get(kw)
            if tok is None or kw in seen:
                continue
            seen.add(kw)
            out.append((kw, tok))
        return out

    def is_injective_over(self, keywords: Iterable[str]) -> bool:
        mapped = {kw: self.mapping[kw] for kw in keywords if kw in self.mapping}
        return len(set(mapped.values())) == len(mapped)


@dataclass
class CipherSubstitution:
    """Owns the current key and regenerates it on demand.

    Tokens are assigned cyclically over a shuffled pool that is smaller than
    the vocabulary, so the map is only injective within a keyword family.
    """

    rng: random.Random
    pool_size: int = POOL_SIZE
    current: Optional[CipherMap] = field(default=None)

    def __post_init__(self) -> None:
        if not _LARGEST_FAMILY <= self.pool_size <= len(NONSENSE_POOL):
            raise ValueError(
                f"pool_size must be between {_LARGEST_FAMILY} and {len(NONSENSE_POOL)}"
            )

    def regenerate(self) -> CipherMap:
        pool = self.rng.sample(NONSENSE_POOL, self.pool_size)
        mapping = {kw: pool[i % self.pool_size] for i, kw in enumerate(VOCABULARY)}
        generation = 0 if self.current is None else self.current.generation + 1
        self.current = CipherMap(mapping=MappingProxyType(mapping), generation=generation)
        return self.current

    def maybe_rotate(self, probability: float) -> bool:
        """Regenerate the key with the given probability; True when it changed."""
        if self.current is None:
            self.regenerate()
            return True
        if coin(self.rng, probability):
            self.regenerate()
            return True
        return False
