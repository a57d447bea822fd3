"""Tests for inclusivo/storage.py key-value backends and typed settings persistence."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from inclusivo.settings import (
    AccessibilitySettings,
    InteractionMode,
    VisualSettings,
    VoiceSettings,
    default_profile,
)
from inclusivo.storage import JsonFileKeyValueStore, MemoryKeyValueStore, PersistedSettings


class TestJsonFileKeyValueStore(unittest.TestCase):
    def test_set_get_remove(self):
        with tempfile.TemporaryDirectory() as tmp:
            store = JsonFileKeyValueStore(Path(tmp) / "settings")
            self.assertIsNone(store.get("voice-settings"))
            store.set("voice-settings", '{"speed": 1.5}')
            self.assertTrue((Path(tmp) / "settings" / "voice-settings.json").exists())
            self.assertEqual(store.get("voice-settings"), '{"speed": 1.5}')
            store.remove("voice-settings")
            self.assertIsNone(store.get("voice-settings"))
            store.remove("voice-settings")

    def test_rejects_path_like_keys(self):
        store = JsonFileKeyValueStore(tempfile.mkdtemp())
        with self.assertRaises(ValueError):
            store.get("../escape")


class TestPersistedSettings(unittest.TestCase):
    def setUp(self):
        self.kv = MemoryKeyValueStore()
        self.persisted = PersistedSettings(self.kv)

    def test_missing_entries_fall_back_to_defaults(self):
        self.assertEqual(self.persisted.load_voice(), VoiceSettings())
        self.assertEqual(self.persisted.load_visual(), VisualSettings())
        self.assertIsNone(self.persisted.load_profile())
        self.assertFalse(self.persisted.load_auth())
        self.assertEqual(self.kv.snapshot(), {})

    def test_round_trip_of_each_group(self):
        self.persisted.save_voice(VoiceSettings(speed=1.5, pitch=0.8, auto_read=False))
        self.persisted.save_accessibility(AccessibilitySettings(interaction_mode="voice", vibration_intensity=3))
        self.persisted.save_auth(True)

        self.assertEqual(self.persisted.load_voice().speed, 1.5)
        self.assertEqual(self.persisted.load_accessibility().interaction_mode, InteractionMode.VOICE)
        self.assertTrue(self.persisted.load_auth())
        self.assertEqual(self.kv.get("auth-flag"), "true")
        self.assertEqual(json.loads(self.kv.get("accessibility-settings"))["interaction_mode"], "voice")

    def test_profile_round_trip_keeps_created_at(self):
        profile = default_profile()
        self.persisted.save_profile(profile)
        loaded = self.persisted.load_profile()
        self.assertEqual(loaded, profile)

    def test_malformed_json_is_reset_to_defaults(self):
        self.kv.set("visual-settings", "{not json")
        with self.assertLogs("inclusivo.storage", level="WARNING"):
            visual = self.persisted.load_visual()
        self.assertEqual(visual, VisualSettings())
        self.assertEqual(json.loads(self.kv.get("visual-settings")), VisualSettings().to_dict())

    def test_out_of_range_value_is_reset(self):
        self.kv.set("voice-settings", json.dumps({"speed": 9, "pitch": 1.0, "auto_read": True}))
        with self.assertLogs("inclusivo.storage", level="WARNING"):
            self.assertEqual(self.persisted.load_voice(), VoiceSettings())

    def test_unknown_keys_are_reset(self):
        self.kv.set("voice-settings", json.dumps({"volume": 11}))
        with self.assertLogs("inclusivo.storage", level="WARNING"):
            self.assertEqual(self.persisted.load_voice(), VoiceSettings())

    def test_malformed_profile_is_removed(self):
        self.kv.set("profile", json.dumps({"name": "No id"}))
        with self.assertLogs("inclusivo.storage", level="WARNING"):
            self.assertIsNone(self.persisted.load_profile())
        self.assertIsNone(self.kv.get("profile"))

    def test_non_boolean_auth_flag_is_reset(self):
        self.kv.set("auth-flag", '"yes"')
        with self.assertLogs("inclusivo.storage", level="WARNING"):
            self.assertFalse(self.persisted.load_auth())
        self.assertEqual(self.kv.get("auth-flag"), "false")


if __name__ == "__main__":
    unittest.main()
