from __future__ import annotations

"""Session phases."""

from enum import Enum


class Phase(str, Enum):
    SETUP = "setup"
    PREMISE_MEMORIZE = "premise_memorize"
    INTERFERENCE = "interference"
    QUESTION = "question"
    RESULT = "result"
    SESSION_END = "session_end"


IN_SESSION = frozenset(
    {Phase.PREMISE_MEMORIZE, Phase.INTERFERENCE, Phase.QUESTION, Phase.RESULT}
)
