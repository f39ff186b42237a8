from __future__ import annotations

"""Session controller: the phase state machine behind a training session.

SETUP -> PREMISE_MEMORIZE -> INTERFERENCE -> QUESTION -> RESULT -> next round
or SESSION_END. All inputs and timer ticks are handled on the caller's thread;
timers only fire from pump(). Before every phase entry the timers that are
not valid in the destination phase are cancelled.
"""

import random
import sys
import time
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Dict, FrozenSet, List, Optional, Set, Tuple

from ..config.config import SessionConfig
from ..errors import ConfigLockedError, InvalidTransitionError, NoModesEnabledError
from ..modes.base_mode import Trial
from ..modes.modifiers import first_phase, phase_after_memorize
from ..phases import IN_SESSION, Phase
from ..results.schema import ANSWER_NO, ANSWER_TIMEOUT, ANSWER_YES, HistoryRecord, TrialLogEntry
from ..stats.stats import SessionState, apply_answer, new_session_state, summarize
from ..util.randomness import make_rng
from .events import EventBus
from .explain import trace as xtrace
from .timers import INTERFERENCE, QUESTION, SESSION, TimerWheel
from .trial_generator import TrialGenerator

INTERFERENCE_COLORS: Tuple[str, ...] = ("red", "green", "blue", "yellow")

VALID_TIMERS: Dict[Phase, FrozenSet[str]] = {
    Phase.SETUP: frozenset(),
    Phase.PREMISE_MEMORIZE: frozenset({SESSION}),
    Phase.INTERFERENCE: frozenset({SESSION, INTERFERENCE}),
    Phase.QUESTION: frozenset({SESSION, QUESTION}),
    Phase.RESULT: frozenset({SESSION}),
    Phase.SESSION_END: frozenset(),
}

_MID_ROUND = frozenset({Phase.PREMISE_MEMORIZE, Phase.INTERFERENCE, Phase.QUESTION})


@dataclass(frozen=True)
class InterferenceState:
    target: str
    current: str
    misses: int = 0
    hit: bool = False


@dataclass(frozen=True)
class Feedback:
    correct: bool
    given: str
    expected: bool

    @property
    def timed_out(self) -> bool:
        return self.given == ANSWER_TIMEOUT


@dataclass(frozen=True)
class SessionSnapshot:
    """Phase-consistent view for the presentation layer."""

    phase: Phase
    trial: Optional[Trial]
    premises_visible: bool
    question_visible: bool
    score: int
    streak: int
    depth: int
    elapsed_s: int
    remaining_s: Optional[int]
    question_remaining_s: Optional[int]
    time_up: bool
    feedback: Optional[Feedback]
    interference: Optional[InterferenceState]
    cipher_keys: Tuple[Tuple[str, str], ...]


class SessionController:
    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        bus: Optional[EventBus] = None,
        history_sink: Optional[Callable[[HistoryRecord], None]] = None,
        generator: Optional[TrialGenerator] = None,
    ) -> None:
        self._config = config or SessionConfig()
        self.rng = rng if rng is not None else make_rng(self._config.seed)
        self.clock = clock
        self.bus = bus or EventBus()
        self.history_sink = history_sink
        self.generator = generator or TrialGenerator(self.rng)
        self.history: List[HistoryRecord] = []

        self._timers = TimerWheel()
        self._timers.now = self.clock()
        self._state = SessionState()
        self._session_config = self._config
        self._round_config = self._config
        self._trial: Optional[Trial] = None
        self._feedback: Optional[Feedback] = None
        self._interference: Optional[InterferenceState] = None
        self._question_shown_at = 0.0
        self._question_remaining: Optional[int] = None
        self._pumping = False
        self._modes_seen: Set[str] = set()
        self._modifiers_seen: Set[str] = set()

    # --- read side ---

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def trial(self) -> Optional[Trial]:
        return self._trial

    def active_timers(self) -> List[str]:
        return self._timers.active()

    def time_up(self) -> bool:
        return (
            self._session_config.session_timer
            and self._state.remaining_s is not None
            and self._state.remaining_s <= 0
        )

    def snapshot(self) -> SessionSnapshot:
        phase = self.phase
        trial = self._trial
        premises_visible = trial is not None and (
            not trial.blind or phase in (Phase.PREMISE_MEMORIZE, Phase.RESULT)
        )
        return SessionSnapshot(
            phase=phase,
            trial=trial,
            premises_visible=premises_visible,
            question_visible=trial is not None and phase in (Phase.QUESTION, Phase.RESULT),
            score=self._state.score,
            streak=self._state.streak,
            depth=self._state.depth,
            elapsed_s=self._state.elapsed_s,
            remaining_s=self._state.remaining_s,
            question_remaining_s=self._question_remaining if phase == Phase.QUESTION else None,
            time_up=self.time_up(),
            feedback=self._feedback if phase == Phase.RESULT else None,
            interference=self._interference if phase == Phase.INTERFERENCE else None,
            cipher_keys=trial.cipher_keys if trial is not None else (),
        )

    # --- configuration ---

    def update_config(self, **changes) -> SessionConfig:
        """Mutate settings between rounds; the next round picks them up."""
        if self.phase in _MID_ROUND:
            raise ConfigLockedError(f"settings are locked during {self.phase.value}")
        if "enabled_modes" in changes:
            changes["enabled_modes"] = tuple(changes["enabled_modes"])
        self._config = replace(self._config, **changes)
        return self._config

    # --- inputs ---

    def start_session(self) -> bool:
        """Begin a session; False (and a notice) when no mode is enabled."""
        self._require("start_session", Phase.SETUP)
        if not self._config.enabled_modes:
            self._reject("Enable at least one mode to start.")
            return False

        cfg = self._config
        now = self.clock()
        self._session_config = cfg
        self._state = new_session_state(cfg.depth, cfg.session_seconds if cfg.session_timer else None)
        self._feedback = None
        self._modes_seen = set()
        self._modifiers_seen = set()
        self.generator.start_session(cfg)
        self._timers.now = now
        self._timers.every(SESSION, 1.0, self._on_session_tick, now=now)
        xtrace("session_started", {"depth": cfg.depth, "modes": list(cfg.enabled_modes)})
        self._start_round()
        return True

    def finish_memorization(self) -> None:
        self._require("finish_memorization", Phase.PREMISE_MEMORIZE)
        assert self._trial is not None
        self._enter(phase_after_memorize(self._trial))

    def acknowledge_interference(self) -> bool:
        """True on a hit; a miss is counted and the phase does not change."""
        self._require("acknowledge_interference", Phase.INTERFERENCE)
        assert self._interference is not None
        if self._interference.hit:
            return True
        if self._interference.current != self._interference.target:
            self._interference = replace(self._interference, misses=self._interference.misses + 1)
            self._state = replace(self._state, interference_misses=self._state.interference_misses + 1)
            xtrace("interference_miss", {"target": self._interference.target, "current": self._interference.current})
            return False
        self._interference = replace(self._interference, hit=True)
        delay = self._round_config.interference_hit_delay_ms / 1000.0
        self._timers.once(INTERFERENCE, delay, self._on_interference_done, now=self._now())
        return True

    def answer(self, yes: bool) -> TrialLogEntry:
        self._require("answer", Phase.QUESTION)
        return self._resolve(ANSWER_YES if yes else ANSWER_NO)

    def next_round(self) -> bool:
        """Start the next round, or end the session once its time is up."""
        self._require("next_round", Phase.RESULT)
        if self.time_up():
            self._finish()
            return False
        if not self._config.enabled_modes:
            self._reject("Enable at least one mode to continue.")
            return False
        self._start_round()
        return True

    def end_session(self) -> HistoryRecord:
        self._require("end_session", Phase.RESULT)
        return self._finish()

    def abort(self) -> None:
        """Drop the session without recording it."""
        if self.phase not in IN_SESSION:
            raise InvalidTransitionError("abort", self.phase.value)
        self._timers.cancel_all()
        xtrace("session_aborted", {"round": self._state.round})
        self._reset()

    def return_to_setup(self) -> None:
        self._require("return_to_setup", Phase.SESSION_END)
        self._reset()

    def pump(self, now: Optional[float] = None) -> int:
        """Fire due timers; the event loop calls this as time passes."""
        self._pumping = True
        try:
            return self._timers.advance_to(self.clock() if now is None else now)
        finally:
            self._pumping = False

    # --- internals ---

    def _now(self) -> float:
        """Virtual time while timers fire, wall clock for user inputs."""
        return self._timers.now if self._pumping else self.clock()

    def _require(self, action: str, *phases: Phase) -> None:
        if self.phase not in phases:
            raise InvalidTransitionError(action, self.phase.value)

    def _reject(self, message: str) -> None:
        xtrace("start_rejected", {"reason": message, "phase": self.phase.value})
        self.bus.emit("notice", message)

    def _reset(self) -> None:
        self._trial = None
        self._feedback = None
        self._interference = None
        self._question_remaining = None
        self._enter(Phase.SETUP)
        self._state = SessionState(phase=Phase.SETUP, depth=self._config.depth, highest_depth=self._config.depth)

    def _enter(self, phase: Phase) -> None:
        self._timers.cancel_except(VALID_TIMERS[phase])
        previous = self.phase
        self._state = replace(self._state, phase=phase)
        if phase == Phase.QUESTION:
            self._begin_question()
        elif phase == Phase.INTERFERENCE:
            self._begin_interference()
        xtrace("phase_changed", {"from": previous.value, "to": phase.value, "round": self._state.round})
        self.bus.emit("phase_changed", phase)

    def _start_round(self) -> None:
        self._round_config = self._config
        try:
            trial = self.generator.generate(
                self._round_config, self._state.depth, first_round=self._state.round == 0
            )
        except NoModesEnabledError as exc:
            self._reject(str(exc))
            return
        self._trial = trial
        self._feedback = None
        self._state = replace(self._state, round=self._state.round + 1)
        self._modes_seen.add(trial.mode.value)
        self._modifiers_seen.update(self._round_config.modifier_names())
        self.bus.emit("trial_ready", trial)
        self._enter(first_phase(trial))

    def _begin_question(self) -> None:
        now = self._now()
        self._question_shown_at = now
        self._question_remaining = None
        if self._round_config.question_timer:
            self._question_remaining = self._round_config.question_seconds
            self._timers.every(QUESTION, 1.0, self._on_question_tick, now=now)

    def _begin_interference(self) -> None:
        """Target colour is fixed for the phase; the shown colour is redrawn every tick."""
        self._interference = InterferenceState(
            target=self.rng.choice(INTERFERENCE_COLORS),
            current=self.rng.choice(INTERFERENCE_COLORS),
        )
        tick = self._round_config.interference_tick_ms / 1000.0
        self._timers.every(INTERFERENCE, tick, self._on_interference_tick, now=self._now())

    def _resolve(self, given: str) -> TrialLogEntry:
        assert self._trial is not None
        trial = self._trial
        reaction = max(0.0, self._now() - self._question_shown_at)
        correct = given != ANSWER_TIMEOUT and (given == ANSWER_YES) == trial.answer
        entry = TrialLogEntry(
            round=self._state.round,
            mode=trial.mode.value,
            depth=self._state.depth,
            question=trial.question.text,
            expected=trial.answer,
            given=given,
            correct=correct,
            reaction_s=round(reaction, 3),
            modifiers=trial.modifiers,
            inverted=trial.inverted,
            answered_at=datetime.now(timezone.utc),
        )
        state = apply_answer(
            self._state,
            correct=correct,
            reaction_s=reaction,
            auto_progress=self._round_config.auto_progress,
            max_depth=self._round_config.max_depth,
        )
        self._state = replace(state, log=state.log + (entry,))
        self._feedback = Feedback(correct=correct, given=given, expected=trial.answer)
        xtrace("answered", {"round": entry.round, "given": given, "correct": correct, "rt": entry.reaction_s})
        self._enter(Phase.RESULT)
        self.bus.emit("answered", entry)
        return entry

    def _finish(self) -> HistoryRecord:
        self._timers.cancel_all()
        record = summarize(
            self._state,
            modes=sorted(self._modes_seen),
            modifiers=[m for m in self._session_config.modifier_names() if m in self._modifiers_seen],
        )
        self.history.append(record)
        self._enter(Phase.SESSION_END)
        xtrace("session_ended", {"score": record.score, "questions": record.questions})
        if self.history_sink is not None:
            try:
                self.history_sink(record)
            except Exception as exc:
                print(f"WARNING: could not store session history ({exc})", file=sys.stderr)
        self.bus.emit("session_finished", record)
        return record

    # --- timer callbacks ---

    def _on_session_tick(self) -> None:
        remaining = self._state.remaining_s
        if self._session_config.session_timer and remaining is not None and remaining > 0:
            remaining -= 1
        self._state = replace(self._state, elapsed_s=self._state.elapsed_s + 1, remaining_s=remaining)

    def _on_question_tick(self) -> None:
        if self._question_remaining is None:
            return
        self._question_remaining -= 1
        if self._question_remaining <= 0:
            self._resolve(ANSWER_TIMEOUT)

    def _on_interference_tick(self) -> None:
        if self._interference is None or self._interference.hit:
            return
        self._interference = replace(self._interference, current=self.rng.choice(INTERFERENCE_COLORS))

    def _on_interference_done(self) -> None:
        self._enter(Phase.QUESTION)
