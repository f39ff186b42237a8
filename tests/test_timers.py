import unittest

from relationtrainer.app.timers import QUESTION, SESSION, TimerWheel


class TimerWheelTests(unittest.TestCase):
    def test_periodic_fires_per_interval(self) -> None:
        wheel = TimerWheel()
        ticks = []
        wheel.every(SESSION, 1.0, lambda: ticks.append(wheel.now), now=0.0)
        self.assertEqual(wheel.advance_to(3.5), 3)
        self.assertEqual(ticks, [1.0, 2.0, 3.0])
        self.assertEqual(wheel.now, 3.5)

    def test_once_fires_a_single_time(self) -> None:
        wheel = TimerWheel()
        fired = []
        wheel.once(QUESTION, 0.4, lambda: fired.append(True), now=0.0)
        wheel.advance_to(10.0)
        self.assertEqual(fired, [True])
        self.assertFalse(wheel.is_active(QUESTION))

    def test_cancel_except_and_replace(self) -> None:
        wheel = TimerWheel()
        fired = []
        wheel.every(SESSION, 1.0, lambda: fired.append(SESSION), now=0.0)
        wheel.every(QUESTION, 1.0, lambda: fired.append("old"), now=0.0)
        wheel.every(QUESTION, 1.0, lambda: fired.append(QUESTION), now=0.0)
        wheel.cancel_except({SESSION})
        self.assertEqual(wheel.active(), [SESSION])
        wheel.advance_to(1.0)
        self.assertEqual(fired, [SESSION])

    def test_callback_cancelling_other_task(self) -> None:
        wheel = TimerWheel()
        fired = []
        wheel.once(SESSION, 1.0, lambda: wheel.cancel(QUESTION), now=0.0)
        wheel.once(QUESTION, 2.0, lambda: fired.append(QUESTION), now=0.0)
        wheel.advance_to(5.0)
        self.assertEqual(fired, [])

    def test_interval_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            TimerWheel().every(SESSION, 0, lambda: None)


if __name__ == "__main__":
    unittest.main()
