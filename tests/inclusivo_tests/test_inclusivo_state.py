"""Tests for inclusivo/state.py (AccessibilityStateStore)."""

from __future__ import annotations

import json
import unittest

from inclusivo.presentation import PresentationState
from inclusivo.settings import SettingsError, UserProfile, VisualSettings
from inclusivo.state import AccessibilityStateStore, SettingsChange, SettingsGroup
from inclusivo.storage import MemoryKeyValueStore, PersistedSettings
from tests.fakes import FakeVoiceEngine


def make_store(kv=None, engine=None) -> AccessibilityStateStore:
    return AccessibilityStateStore(
        PersistedSettings(kv if kv is not None else MemoryKeyValueStore()),
        presentation=PresentationState(),
        engine=engine,
    )


class TestInitialLoad(unittest.TestCase):
    def test_first_run_creates_and_persists_default_profile(self):
        kv = MemoryKeyValueStore()
        store = make_store(kv)
        self.assertEqual(store.user.name, "Juan Pérez")
        self.assertEqual(json.loads(kv.get("profile"))["id"], "1")
        self.assertFalse(store.is_authenticated)

    def test_loads_persisted_values(self):
        kv = MemoryKeyValueStore({
            "visual-settings": json.dumps({"high_contrast": True, "font_size": 1.5, "animations_enabled": True}),
            "auth-flag": "true",
        })
        store = make_store(kv)
        self.assertTrue(store.visual_settings.high_contrast)
        self.assertTrue(store.is_authenticated)

    def test_initial_visual_settings_applied_to_presentation(self):
        kv = MemoryKeyValueStore({
            "visual-settings": json.dumps({"high_contrast": True, "font_size": 2.0, "animations_enabled": False}),
        })
        store = make_store(kv)
        self.assertTrue(store.presentation.high_contrast)
        self.assertTrue(store.presentation.reduce_motion)
        self.assertEqual(store.presentation.font_scale, 2.0)


class TestUpdates(unittest.TestCase):
    def setUp(self):
        self.kv = MemoryKeyValueStore()
        self.store = make_store(self.kv)
        self.changes = []
        self.store.subscribe(self.changes.append)

    def test_voice_update_merges_persists_and_broadcasts(self):
        voice = self.store.update_voice_settings({"speed": 1.5})
        self.assertEqual(voice.speed, 1.5)
        self.assertEqual(voice.pitch, 1.0)
        self.assertEqual(json.loads(self.kv.get("voice-settings"))["speed"], 1.5)
        self.assertEqual(self.changes, [SettingsChange(SettingsGroup.VOICE, voice)])

    def test_visual_update_toggles_presentation(self):
        self.store.update_visual_settings({"high_contrast": True, "animations_enabled": True, "font_size": 1.25})
        p = self.store.presentation
        self.assertTrue(p.high_contrast)
        self.assertFalse(p.reduce_motion)
        self.assertEqual(p.variables["--user-font-size"], "1.25")

        self.store.update_visual_settings({"high_contrast": False, "animations_enabled": False})
        self.assertFalse(p.high_contrast)
        self.assertTrue(p.reduce_motion)

    def test_accessibility_and_notification_updates(self):
        self.store.update_accessibility_settings({"vibration_enabled": False})
        self.store.update_notification_settings({"grades": False})
        self.assertFalse(json.loads(self.kv.get("accessibility-settings"))["vibration_enabled"])
        self.assertFalse(json.loads(self.kv.get("notification-settings"))["grades"])
        self.assertEqual([c.group for c in self.changes], [SettingsGroup.ACCESSIBILITY, SettingsGroup.NOTIFICATIONS])

    def test_invalid_patch_changes_nothing(self):
        before = self.kv.get("visual-settings")
        with self.assertRaises(SettingsError):
            self.store.update_visual_settings({"font_size": 10})
        self.assertEqual(self.store.visual_settings, VisualSettings())
        self.assertEqual(self.kv.get("visual-settings"), before)
        self.assertEqual(self.changes, [])

    def test_persisted_values_survive_reload(self):
        self.store.update_voice_settings({"pitch": 1.2})
        self.store.set_authenticated(True)
        reloaded = make_store(self.kv)
        self.assertEqual(reloaded.voice_settings.pitch, 1.2)
        self.assertTrue(reloaded.is_authenticated)

    def test_set_user(self):
        profile = UserProfile(id="9", name="Ana", email="ana@u.edu", program="Math", level="1st")
        self.store.set_user(profile)
        self.assertEqual(json.loads(self.kv.get("profile"))["id"], "9")
        self.store.set_user(None)
        self.assertIsNone(self.store.user)
        # Clearing the in-memory user keeps the last persisted profile
        self.assertEqual(json.loads(self.kv.get("profile"))["id"], "9")
        self.assertEqual([c.group for c in self.changes], [SettingsGroup.PROFILE, SettingsGroup.PROFILE])

    def test_set_authenticated_persists_flag(self):
        self.store.set_authenticated(True)
        self.assertEqual(self.kv.get("auth-flag"), "true")
        self.store.set_authenticated(False)
        self.assertEqual(self.kv.get("auth-flag"), "false")


class TestObservers(unittest.TestCase):
    def test_unsubscribe(self):
        store = make_store()
        seen = []
        unsubscribe = store.subscribe(seen.append)
        store.update_voice_settings({"speed": 1.1})
        unsubscribe()
        unsubscribe()
        store.update_voice_settings({"speed": 1.2})
        self.assertEqual(len(seen), 1)

    def test_failing_observer_does_not_stop_broadcast(self):
        store = make_store()
        seen = []

        def boom(change):
            raise RuntimeError("observer failed")

        store.subscribe(boom)
        store.subscribe(seen.append)
        with self.assertLogs("inclusivo.state", level="ERROR"):
            store.update_visual_settings({"high_contrast": True})
        self.assertEqual(len(seen), 1)


class TestSpeechDelegation(unittest.TestCase):
    def test_speak_uses_latest_voice_settings(self):
        engine = FakeVoiceEngine()
        store = make_store(engine=engine)
        store.update_voice_settings({"speed": 0.75, "pitch": 1.25})
        store.speak("Next class in ten minutes")
        self.assertEqual((engine.spoken[0].rate, engine.spoken[0].pitch), (0.75, 1.25))
        engine.start()
        self.assertTrue(store.is_speaking)
        store.stop_speaking()
        self.assertFalse(store.is_speaking)

    def test_speak_without_engine_is_harmless(self):
        store = make_store()
        with self.assertLogs("inclusivo.speech", level="WARNING"):
            self.assertIsNone(store.speak("hello"))
        self.assertFalse(store.is_speaking)


if __name__ == "__main__":
    unittest.main()
