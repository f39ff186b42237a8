from __future__ import annotations

"""Trial generator: one enabled mode per round, then the modifier pipeline."""

import random
from typing import Optional

from ..config.config import SessionConfig
from ..errors import NoModesEnabledError
from ..lexicon.cipher import CipherSubstitution
from ..lexicon.phrasing import Phrasebook
from ..lexicon.symbols import SymbolProvider
from ..modes.base_mode import ModeContext, Trial
from ..modes.modifiers import ModifierPipeline
from .explain import trace as xtrace
from .mode_registry import make_mode


class TrialGenerator:
    """Builds fully determined trials from a config snapshot.

    All randomness comes from the injected rng, so a seeded generator
    reproduces the same sequence of trials.
    """

    def __init__(self, rng: random.Random, cipher: Optional[CipherSubstitution] = None) -> None:
        self.rng = rng
        self.cipher = cipher if cipher is not None else CipherSubstitution(rng)
        self.pipeline = ModifierPipeline(rng)
        self._symbols: Optional[SymbolProvider] = None

    def _symbol_provider(self, style: str) -> SymbolProvider:
        if self._symbols is None or self._symbols.style != style:
            self._symbols = SymbolProvider(self.rng, style)
        return self._symbols

    def start_session(self, config: SessionConfig) -> None:
        """Fresh cipher key for a new session."""
        if config.cipher:
            self.cipher.regenerate()

    def generate(self, config: SessionConfig, depth: int, *, first_round: bool = False) -> Trial:
        if not config.enabled_modes:
            raise NoModesEnabledError("no mode is enabled")
        mode_id = self.rng.choice(sorted(config.enabled_modes))

        key_changed = False
        cipher_map = None
        if config.cipher:
            if first_round or self.cipher.current is None:
                if self.cipher.current is None:
                    self.cipher.regenerate()
                key_changed = True
            else:
                key_changed = self.cipher.maybe_rotate(config.key_change_probability)
            cipher_map = self.cipher.current
            if key_changed:
                xtrace("key_changed", {"generation": cipher_map.generation})

        items = self._symbol_provider(config.symbol_style).take(depth + 1)
        ctx = ModeContext(
            rng=self.rng,
            phrasebook=Phrasebook(cipher_map),
            deictic=config.deictic,
            deictic_probability=config.deictic_probability,
            movement=config.movement,
            movement_probability=config.movement_probability,
            scramble_premises=config.scramble_premises,
        )
        trial = make_mode(mode_id, ctx).generate(items)
        trial = self.pipeline.apply(
            trial,
            blind=config.blind,
            cipher=config.cipher,
            interference=config.interference,
            transformation=config.transformation,
            key_changed=key_changed,
        )
        xtrace(
            "trial_generated",
            {"mode": mode_id, "depth": depth, "modifiers": list(trial.modifiers), "answer": trial.answer},
        )
        return trial
