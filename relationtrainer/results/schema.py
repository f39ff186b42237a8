from __future__ import annotations

"""Result records handed to review screens and the history store."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional, Tuple

ANSWER_YES = "yes"
ANSWER_NO = "no"
ANSWER_TIMEOUT = "timeout"


@dataclass(frozen=True)
class TrialLogEntry:
    """One answered (or timed-out) round."""

    round: int
    mode: str
    depth: int
    question: str
    expected: bool
    given: str
    correct: bool
    reaction_s: float
    modifiers: Tuple[str, ...] = ()
    inverted: bool = False
    answered_at: Optional[datetime] = None


@dataclass(frozen=True)
class HistoryRecord:
    """Summary of one finished session; never mutated after creation."""

    timestamp: datetime
    score: int
    accuracy: float
    questions: int
    correct: int
    highest_depth: int
    avg_rt_s: Optional[float]
    duration_s: int
    depth_rt_s: Dict[int, float] = field(default_factory=dict)
    modes: Tuple[str, ...] = ()
    modifiers: Tuple[str, ...] = ()
