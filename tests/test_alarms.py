import unittest

from nephrosim.core.state import Parameter
from nephrosim.monitors.alarms import AlarmSystem


def params(value):
    return {"K": Parameter(value, "mEq/L", (3.5, 5.0), 0)}


class TestAlarmSystem(unittest.TestCase):
    def test_immediate_alarm(self):
        alarms = AlarmSystem()
        self.assertEqual(alarms.update(params(6.0)), {"K": {"low": False, "high": True}})
        self.assertEqual(alarms.update(params(3.0)), {"K": {"low": True, "high": False}})
        self.assertEqual(alarms.update(params(4.0)), {})

    def test_bounds_do_not_alarm(self):
        alarms = AlarmSystem()
        self.assertEqual(alarms.update(params(5.0)), {})
        self.assertEqual(alarms.update(params(3.5)), {})

    def test_delay_window(self):
        """Alarm only after the value stays out of range for delay + 1 samples."""
        alarms = AlarmSystem(delays={"K": 2})
        self.assertEqual(alarms.update(params(6.0)), {})
        self.assertEqual(alarms.update(params(6.0)), {})
        self.assertIn("K", alarms.update(params(6.0)))

        # One normal sample clears it and restarts the window
        self.assertEqual(alarms.update(params(4.0)), {})
        self.assertEqual(alarms.update(params(6.0)), {})

    def test_overwrite_between_ticks(self):
        alarms = AlarmSystem(delays={"K": 1})
        alarms.update(params(6.0))
        self.assertIn("K", alarms.update(params(6.0)))

        # Treatment between ticks replaces the newest sample
        self.assertEqual(alarms.update(params(4.5), new_sample=False), {})
        self.assertEqual(len(alarms.buffers["K"]), 2)

    def test_reset(self):
        alarms = AlarmSystem()
        alarms.update(params(6.0))
        alarms.reset()
        self.assertEqual(alarms.active_alarms, {})
        self.assertEqual(alarms.buffers, {})
