import contextlib
import io
import random
import unittest

from relationtrainer.app import explain
from relationtrainer.app.events import EventBus
from relationtrainer.app.session_controller import SessionController
from relationtrainer.config.config import SessionConfig

from .support import ManualClock


class EventBusTests(unittest.TestCase):
    def test_subscribe_and_unsubscribe(self) -> None:
        bus = EventBus()
        seen = []
        bus.subscribe("notice", seen.append)
        bus.emit("notice", "first")
        bus.unsubscribe("notice", seen.append)
        bus.emit("notice", "second")
        self.assertEqual(seen, ["first"])
        # unknown handlers are ignored
        bus.unsubscribe("notice", seen.append)

    def test_failing_listener_is_isolated(self) -> None:
        bus = EventBus()
        seen = []

        def broken(payload):
            raise RuntimeError("boom")

        bus.subscribe("answered", broken)
        bus.subscribe("answered", seen.append)
        bus.emit("answered", 1)
        self.assertEqual(seen, [1])


class ExplainTests(unittest.TestCase):
    def tearDown(self) -> None:
        explain.set_hook(None)
        explain.enable(False)

    def test_hook_receives_session_milestones(self) -> None:
        events = []
        explain.set_hook(lambda event, payload: events.append(event))
        ctrl = SessionController(
            SessionConfig(enabled_modes=("linear",)), rng=random.Random(3), clock=ManualClock()
        )
        ctrl.start_session()
        ctrl.abort()
        self.assertEqual(events[0], "session_started")
        self.assertIn("trial_generated", events)
        self.assertIn("phase_changed", events)
        self.assertIn("session_aborted", events)

    def test_enable_prints_json_lines(self) -> None:
        self.assertFalse(explain.enabled())
        out = io.StringIO()
        explain.enable(True, stream=out)
        self.assertTrue(explain.enabled())
        explain.trace("key_changed", {"generation": 2})
        self.assertEqual(out.getvalue().strip(), '[EXPLAIN] key_changed :: {"generation":2}')

    def test_disabled_trace_is_silent(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            explain.trace("answered", {"round": 1})
        self.assertEqual(out.getvalue(), "")


if __name__ == "__main__":
    unittest.main()
