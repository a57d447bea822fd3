"""Tests for inclusivo/haptics.py."""

from __future__ import annotations

import unittest

from inclusivo.haptics import HapticFeedback
from inclusivo.settings import AccessibilitySettings
from tests.fakes import FakeVibrator


class TestHapticFeedback(unittest.TestCase):
    def setUp(self):
        self.settings = AccessibilitySettings()
        self.vibrator = FakeVibrator()
        self.haptics = HapticFeedback(self.vibrator, lambda: self.settings)

    def test_presets(self):
        self.haptics.tap()
        self.haptics.success()
        self.haptics.error()
        self.haptics.long_press()
        self.haptics.confirm()
        self.assertEqual(
            self.vibrator.patterns,
            [50, [100, 50, 100], [200, 100, 200], [50, 50, 50], 200],
        )

    def test_disabled_vibration_is_a_noop(self):
        self.settings = AccessibilitySettings(vibration_enabled=False)
        self.assertFalse(self.haptics.tap())
        self.assertEqual(self.vibrator.patterns, [])

    def test_setting_read_on_every_call(self):
        self.assertTrue(self.haptics.tap())
        self.settings = self.settings.merge({"vibration_enabled": False})
        self.assertFalse(self.haptics.tap())
        self.assertEqual(len(self.vibrator.patterns), 1)

    def test_missing_vibrator(self):
        haptics = HapticFeedback(None, AccessibilitySettings)
        self.assertFalse(haptics.available)
        self.assertFalse(haptics.vibrate([10, 20]))


if __name__ == "__main__":
    unittest.main()
