from __future__ import annotations

"""Item symbol provider.

Items are opaque tokens: the engines only rely on their identity and on the
index at which they were handed out.
"""

import itertools
import random
import string
from typing import List, Tuple

SYMBOL_STYLES = ("letters", "syllables", "numbers")

_CONSONANTS = "BDFGKLMNPRSTVZ"
_VOWELS = "AEIOU"


def _letter_pool() -> List[str]:
    letters = list(string.ascii_uppercase)
    # two-letter names extend the pool past 26 items
    return letters + [a + b for a, b in itertools.product(letters, repeat=2) if a != b]


def _syllable_pool() -> List[str]:
    return [c1 + v + c2 for c1, v, c2 in itertools.product(_CONSONANTS, _VOWELS, _CONSONANTS)]


def _number_pool() -> List[str]:
    return [str(n) for n in range(10, 1000)]


_POOLS = {
    "letters": _letter_pool,
    "syllables": _syllable_pool,
    "numbers": _number_pool,
}


class SymbolProvider:
    """Hands out N distinct symbols per trial in the configured style."""

    def __init__(self, rng: random.Random, style: str = "letters") -> None:
        if style not in _POOLS:
            raise ValueError(f"Unknown symbol style: {style}")
        self.rng = rng
        self.style = style
        self._pool = _POOLS[style]()

    def take(self, n: int) -> Tuple[str, ...]:
        if n < 1:
            raise ValueError("need at least one item")
        if n > len(self._pool):
            raise ValueError(f"style '{self.style}' supports at most {len(self._pool)} items")
        if self.style == "letters" and n <= 26:
            return tuple(self.rng.sample(self._pool[:26], n))
        return tuple(self.rng.sample(self._pool, n))
