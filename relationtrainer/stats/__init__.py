from .stats import (
    MIN_DEPTH,
    SessionState,
    apply_answer,
    format_summary,
    mean_reaction_by_depth,
    new_session_state,
    summarize,
)

__all__ = [
    "MIN_DEPTH",
    "SessionState",
    "apply_answer",
    "format_summary",
    "mean_reaction_by_depth",
    "new_session_state",
    "summarize",
]
