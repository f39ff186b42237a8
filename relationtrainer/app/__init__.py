from .mode_registry import ModeMeta, get_mode, list_modes, make_mode
from .session_controller import Feedback, InterferenceState, SessionController, SessionSnapshot
from .timers import TimerWheel
from .trial_generator import TrialGenerator

__all__ = [
    "Feedback",
    "InterferenceState",
    "ModeMeta",
    "SessionController",
    "SessionSnapshot",
    "TimerWheel",
    "TrialGenerator",
    "get_mode",
    "list_modes",
    "make_mode",
]
