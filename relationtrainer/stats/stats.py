from __future__ import annotations

"""Session scoring, adaptive depth and reaction-time aggregation."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, Iterable, Optional, Tuple

from ..phases import Phase
from ..results.schema import HistoryRecord, TrialLogEntry

MIN_DEPTH = 2
POINTS_PER_DEPTH = 10
WRONG_PENALTY = 20
STREAK_STEP = 3


@dataclass(frozen=True)
class SessionState:
    phase: Phase = Phase.SETUP
    score: int = 0
    streak: int = 0
    max_streak: int = 0
    depth: int = MIN_DEPTH
    highest_depth: int = MIN_DEPTH
    attempted: int = 0
    correct: int = 0
    rt_total_s: float = 0.0
    # depth -> (total seconds, count)
    rt_by_depth: Dict[int, Tuple[float, int]] = field(default_factory=dict)
    elapsed_s: int = 0
    remaining_s: Optional[int] = None
    round: int = 0
    interference_misses: int = 0
    log: Tuple[TrialLogEntry, ...] = ()
    started_at: Optional[datetime] = None

    @property
    def accuracy(self) -> float:
        if self.attempted == 0:
            return 0.0
        return 100.0 * self.correct / self.attempted


def new_session_state(depth: int, remaining_s: Optional[int], started_at: Optional[datetime] = None) -> SessionState:
    """Create a fresh state for a session starting at the given depth."""
    depth = max(MIN_DEPTH, int(depth))
    return SessionState(
        depth=depth,
        highest_depth=depth,
        remaining_s=remaining_s,
        started_at=started_at or datetime.now(timezone.utc),
    )


def apply_answer(
    state: SessionState,
    *,
    correct: bool,
    reaction_s: float,
    auto_progress: bool,
    max_depth: Optional[int] = None,
) -> SessionState:
    """Score one answered or timed-out question.

    Correct: +depth*10, streak+1, and one level deeper on every third
    consecutive hit when auto-progress is on. Wrong: -20 floored at 0, streak
    reset, and one level shallower (never below 2) when auto-progress is on.
    Reaction time is bucketed at the depth the question was asked at.
    """
    depth = state.depth
    total, count = state.rt_by_depth.get(depth, (0.0, 0))
    buckets = dict(state.rt_by_depth)
    buckets[depth] = (total + reaction_s, count + 1)

    if correct:
        streak = state.streak + 1
        score = state.score + depth * POINTS_PER_DEPTH
        new_depth = depth
        if auto_progress and streak % STREAK_STEP == 0:
            new_depth = depth + 1
            if max_depth is not None:
                new_depth = max(depth, min(new_depth, max_depth))
    else:
        streak = 0
        score = max(0, state.score - WRONG_PENALTY)
        new_depth = depth
        if auto_progress and depth > MIN_DEPTH:
            new_depth = depth - 1

    return replace(
        state,
        score=score,
        streak=streak,
        max_streak=max(state.max_streak, streak),
        depth=new_depth,
        highest_depth=max(state.highest_depth, new_depth),
        attempted=state.attempted + 1,
        correct=state.correct + (1 if correct else 0),
        rt_total_s=state.rt_total_s + reaction_s,
        rt_by_depth=buckets,
    )


def mean_reaction_by_depth(buckets: Dict[int, Tuple[float, int]]) -> Dict[int, float]:
    return {d: round(t / c, 3) for d, (t, c) in sorted(buckets.items()) if c > 0}


def summarize(
    state: SessionState,
    *,
    modes: Iterable[str],
    modifiers: Iterable[str],
    ended_at: Optional[datetime] = None,
) -> HistoryRecord:
    """Freeze a finished session into a HistoryRecord."""
    avg = round(state.rt_total_s / state.attempted, 3) if state.attempted else None
    return HistoryRecord(
        timestamp=ended_at or datetime.now(timezone.utc),
        score=state.score,
        accuracy=round(state.accuracy, 1),
        questions=state.attempted,
        correct=state.correct,
        highest_depth=state.highest_depth,
        avg_rt_s=avg,
        duration_s=state.elapsed_s,
        depth_rt_s=mean_reaction_by_depth(state.rt_by_depth),
        modes=tuple(modes),
        modifiers=tuple(modifiers),
    )


def format_summary(record: HistoryRecord) -> str:
    """Return a human-readable summary of a finished session."""
    lines = [
        f"Score: {record.score}",
        f"Correct: {record.correct}/{record.questions} ({record.accuracy:.1f}%)",
        f"Highest depth: {record.highest_depth}",
        f"Duration: {record.duration_s}s",
    ]
    if record.avg_rt_s is not None:
        lines.append(f"Mean reaction time: {record.avg_rt_s:.2f}s")
    for d, rt in sorted(record.depth_rt_s.items()):
        lines.append(f"  depth {d}: {rt:.2f}s")
    return "\n".join(lines)
