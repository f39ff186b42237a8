import contextlib
import io
import random
import tempfile
import unittest
from pathlib import Path

from relationtrainer.app.presets import PRESETS, apply_preset
from relationtrainer.app.session_controller import SessionController
from relationtrainer.config.config import SessionConfig, load_config, session_config_from, validate_config
from relationtrainer.results.persist import apply_settings, load_settings, save_settings

from .support import ManualClock


class LoadConfigTests(unittest.TestCase):
    def test_defaults_build_a_session_config(self) -> None:
        config = session_config_from(validate_config(load_config()))
        self.assertEqual(config, SessionConfig())

    def test_malformed_yaml_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "broken.yml"
            path.write_text("modes: [unclosed\n  - : :", encoding="utf-8")
            err = io.StringIO()
            with contextlib.redirect_stderr(err):
                cfg = validate_config(load_config(str(path)))
            self.assertIn("WARNING", err.getvalue())
            self.assertEqual(session_config_from(cfg), SessionConfig())

    def test_invalid_values_are_corrected(self) -> None:
        raw = {
            "modes": {"enabled": ["linear", "bogus"]},
            "session": {"depth": 1},
            "modifiers": {"deictic_probability": 3},
            "symbols": {"style": "emoji"},
        }
        with contextlib.redirect_stderr(io.StringIO()):
            cfg = validate_config(raw)
        config = session_config_from(cfg)
        self.assertEqual(config.enabled_modes, ("linear",))
        self.assertEqual(config.depth, 2)
        self.assertEqual(config.deictic_probability, 0.5)
        self.assertEqual(config.symbol_style, "letters")

    def test_session_config_validation(self) -> None:
        with self.assertRaises(ValueError):
            SessionConfig(depth=1)
        with self.assertRaises(ValueError):
            SessionConfig(enabled_modes=("nope",))

    def test_modifier_names_order(self) -> None:
        config = SessionConfig(transformation=True, blind=True, interference=True)
        self.assertEqual(config.modifier_names(), ("blind", "interference", "transformation"))


class PresetTests(unittest.TestCase):
    def test_presets_apply(self) -> None:
        for name in PRESETS:
            self.assertIsInstance(apply_preset(SessionConfig(), name), SessionConfig)
        advanced = apply_preset(SessionConfig(), "advanced")
        self.assertTrue(advanced.cipher)
        self.assertEqual(advanced.depth, 3)

    def test_unknown_preset(self) -> None:
        with self.assertRaises(KeyError):
            apply_preset(SessionConfig(), "expert")


class SettingsPersistenceTests(unittest.TestCase):
    def test_save_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "settings.json"
            saved = SessionConfig(enabled_modes=("spatial2d",), depth=4, cipher=True)
            save_settings(path, saved)
            self.assertEqual(apply_settings(SessionConfig(), load_settings(path)), saved)

    def test_missing_and_malformed_files(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "settings.json"
            self.assertEqual(load_settings(path), {})
            path.write_text("{not json", encoding="utf-8")
            with contextlib.redirect_stderr(io.StringIO()):
                self.assertEqual(load_settings(path), {})

    def test_invalid_settings_keep_current_config(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            out = apply_settings(SessionConfig(), {"depth": 0})
        self.assertEqual(out, SessionConfig())

    def test_mistyped_settings_keep_current_config(self) -> None:
        bad_values = [
            {"session_seconds": "abc"},
            {"depth": 2.5},
            {"blind": "yes"},
            {"deictic_probability": 1.5},
            {"interference_tick_ms": 0},
            {"max_depth": 1},
            {"enabled_modes": 7},
        ]
        for settings in bad_values:
            with contextlib.redirect_stderr(io.StringIO()):
                out = apply_settings(SessionConfig(), settings)
            self.assertEqual(out, SessionConfig(), msg=str(settings))

    def test_mistyped_settings_do_not_break_a_session(self) -> None:
        clock = ManualClock()
        with contextlib.redirect_stderr(io.StringIO()):
            config = apply_settings(SessionConfig(enabled_modes=("linear",)), {"session_seconds": "abc"})
        ctrl = SessionController(config, rng=random.Random(1), clock=clock)
        ctrl.start_session()
        clock.advance(2.0)
        ctrl.pump()
        self.assertEqual(ctrl.state.remaining_s, 178)


if __name__ == "__main__":
    unittest.main()
