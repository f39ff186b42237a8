import random
import unittest

from relationtrainer.app.trial_generator import TrialGenerator
from relationtrainer.config.config import SessionConfig
from relationtrainer.errors import NoModesEnabledError
from relationtrainer.modes import LinearMode, ModeContext
from relationtrainer.modes.modifiers import ModifierPipeline, first_phase, invert
from relationtrainer.phases import Phase


def _trial(seed: int = 0):
    return LinearMode(ModeContext(rng=random.Random(seed))).generate(("A", "B", "C"))


class ModifierPipelineTests(unittest.TestCase):
    def test_transformation_flips_once(self) -> None:
        base = _trial()
        pipeline = ModifierPipeline(random.Random(0), transformation_probability=1.0)
        out = pipeline.apply(base, transformation=True)
        self.assertTrue(out.inverted)
        self.assertEqual(out.answer, not base.answer)
        self.assertEqual(out.modifiers.count("transformation"), 1)
        with self.assertRaises(ValueError):
            invert(out)

    def test_no_transformation_keeps_answer(self) -> None:
        base = _trial()
        out = ModifierPipeline(random.Random(0), transformation_probability=0.0).apply(base, transformation=True)
        self.assertFalse(out.inverted)
        self.assertEqual(out.answer, base.answer)

    def test_first_phase_routing(self) -> None:
        pipeline = ModifierPipeline(random.Random(0))
        self.assertEqual(first_phase(pipeline.apply(_trial())), Phase.QUESTION)
        self.assertEqual(first_phase(pipeline.apply(_trial(), blind=True)), Phase.PREMISE_MEMORIZE)
        self.assertEqual(first_phase(pipeline.apply(_trial(), interference=True)), Phase.INTERFERENCE)
        keyed = pipeline.apply(_trial(), cipher=True, key_changed=True)
        self.assertEqual(first_phase(keyed), Phase.PREMISE_MEMORIZE)
        # key_changed without cipher is ignored
        self.assertEqual(first_phase(pipeline.apply(_trial(), key_changed=True)), Phase.QUESTION)

    def test_tags_in_order(self) -> None:
        out = ModifierPipeline(random.Random(0)).apply(_trial(), blind=True, cipher=True, interference=True)
        self.assertEqual(out.modifiers, ("blind", "cipher", "interference"))


class TrialGeneratorTests(unittest.TestCase):
    def test_no_modes(self) -> None:
        gen = TrialGenerator(random.Random(0))
        with self.assertRaises(NoModesEnabledError):
            gen.generate(SessionConfig(enabled_modes=()), 2)

    def test_only_enabled_modes_and_depth(self) -> None:
        gen = TrialGenerator(random.Random(0))
        cfg = SessionConfig(enabled_modes=("hierarchy", "spatial3d"))
        for _ in range(30):
            trial = gen.generate(cfg, 4)
            self.assertIn(trial.mode.value, cfg.enabled_modes)
            self.assertEqual(trial.depth, 4)
            self.assertEqual(len(trial.items), 5)

    def test_cipher_first_round_shows_key(self) -> None:
        gen = TrialGenerator(random.Random(5))
        cfg = SessionConfig(enabled_modes=("linear",), cipher=True, key_change_probability=0.0)
        gen.start_session(cfg)
        first = gen.generate(cfg, 2, first_round=True)
        self.assertTrue(first.key_changed)
        self.assertIn("cipher", first.modifiers)
        self.assertTrue(first.cipher_keys)
        second = gen.generate(cfg, 2)
        self.assertFalse(second.key_changed)

    def test_seeded_runs_repeat(self) -> None:
        cfg = SessionConfig(transformation=True, deictic=True, movement=True)
        gen_a, gen_b = TrialGenerator(random.Random(11)), TrialGenerator(random.Random(11))
        a = [gen_a.generate(cfg, 3) for _ in range(5)]
        b = [gen_b.generate(cfg, 3) for _ in range(5)]
        self.assertEqual(a, b)


if __name__ == "__main__":
    unittest.main()
