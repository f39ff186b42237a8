from __future__ import annotations

"""Plain-text phrasing of premises and questions.

Text carries no presentation markup. When a cipher key is active every
relation keyword is looked up in it; keywords without a token (for example
"same location") stay as they are.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from .cipher import CipherMap
from .keywords import SAME_LOCATION

# keyword -> (statement phrase, question phrase)
_PHRASES: Dict[str, Tuple[str, str]] = {
    "greater": ("is greater than", "greater than"),
    "less": ("is less than", "less than"),
    "same": ("is the same as", "the same as"),
    "opposite": ("is opposite of", "opposite of"),
    "contains": ("contains", "contain"),
    "inside": ("is inside", "inside"),
    "above": ("is above", "above"),
    "below": ("is below", "below"),
    "front": ("is in front of", "in front of"),
    "behind": ("is behind", "behind"),
    "left": ("is left of", "left of"),
    "right": ("is right of", "right of"),
    SAME_LOCATION: ("is at the same location as", "at the same location as"),
}


def _natural(keywords: Sequence[str], question: bool) -> str:
    if len(keywords) == 1 and keywords[0] in _PHRASES:
        return _PHRASES[keywords[0]][1 if question else 0]
    parts = []
    for kw in keywords:
        if kw in _PHRASES:
            parts.append(_PHRASES[kw][1])
        else:
            parts.append(f"{kw} of")
    joined = " and ".join(parts)
    return joined if question else f"is {joined}"


class Phrasebook:
    """Renders relation text for one trial and records the keywords it used."""

    def __init__(self, cipher: Optional[CipherMap] = None) -> None:
        self.cipher = cipher
        self._used: List[str] = []

    def word(self, keyword: str) -> str:
        """Keyword as it should appear in text (cipher token when mapped)."""
        if self.cipher is not None:
            token = self.cipher.token(keyword)
            if token is not None:
                if keyword not in self._used:
                    self._used.append(keyword)
                return token
        return keyword

    def _ciphered(self, keywords: Sequence[str]) -> Optional[str]:
        if self.cipher is None:
            return None
        if not all(self.cipher.token(kw) for kw in keywords):
            return None
        return " ".join(self.word(kw) for kw in keywords)

    def statement(self, subject: str, keywords: Sequence[str], obj: str) -> str:
        ciphered = self._ciphered(keywords)
        if ciphered is not None:
            return f"{subject} {ciphered} {obj}"
        return f"{subject} {_natural(keywords, question=False)} {obj}"

    def question(self, subject: str, keywords: Sequence[str], obj: str) -> str:
        ciphered = self._ciphered(keywords)
        if ciphered is not None:
            return f"Is {subject} {ciphered} {obj}?"
        if list(keywords) == ["contains"]:
            return f"Does {subject} contain {obj}?"
        return f"Is {subject} {_natural(keywords, question=True)} {obj}?"

    def used_keys(self) -> Tuple[Tuple[str, str], ...]:
        """(keyword, token) pairs that appeared in the rendered text."""
        if self.cipher is None:
            return ()
        return tuple(self.cipher.keys_for(self._used))
