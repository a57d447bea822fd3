"""Tests for inclusivo/notifications.py."""

from __future__ import annotations

import itertools
import unittest

from inclusivo.catalog import load_notifications
from inclusivo.models import NotificationDraft, NotificationPriority, NotificationType
from inclusivo.notifications import NotificationStore, priority_color, type_icon
from inclusivo.settings import NotificationSettings
from tests.fakes import FrozenClock
from tests.fixtures import at

NOW = at(0, "13:00")


def seeded_store(**kwargs) -> NotificationStore:
    return NotificationStore(load_notifications(now=NOW), clock=FrozenClock(NOW), **kwargs)


class TestNotificationQueries(unittest.TestCase):
    def setUp(self):
        self.store = seeded_store()

    def test_all_newest_first(self):
        self.assertEqual([n.id for n in self.store.all()], ["2", "1", "4", "5", "6", "3"])

    def test_unread_keeps_insertion_order(self):
        self.assertEqual([n.id for n in self.store.unread()], ["1", "2", "3"])
        self.assertEqual(self.store.unread_count(), 3)

    def test_filters_accept_enum_or_string(self):
        self.assertEqual([n.id for n in self.store.by_priority("high")], ["1", "4"])
        self.assertEqual([n.id for n in self.store.by_type(NotificationType.ACADEMIC)], ["4", "6"])

    def test_unknown_filter_value_raises(self):
        with self.assertRaises(ValueError):
            self.store.by_priority("urgent")

    def test_get(self):
        self.assertEqual(self.store.get("5").type, NotificationType.EMERGENCY)
        self.assertIsNone(self.store.get("404"))


class TestNotificationMutations(unittest.TestCase):
    def setUp(self):
        ids = (f"n{i}" for i in itertools.count(1))
        self.store = seeded_store(id_factory=lambda: next(ids))

    def test_mark_read(self):
        self.store.mark_read("1")
        self.assertTrue(self.store.get("1").read)
        self.assertEqual(self.store.unread_count(), 2)

    def test_mark_read_unknown_is_noop(self):
        self.store.mark_read("404")
        self.assertEqual(self.store.unread_count(), 3)

    def test_mark_all_read_is_idempotent(self):
        self.store.mark_all_read()
        self.assertEqual(self.store.unread_count(), 0)
        self.store.mark_all_read()
        self.assertEqual(self.store.unread_count(), 0)
        self.assertEqual(len(self.store.all()), 6)

    def test_delete(self):
        self.store.delete("2")
        self.assertIsNone(self.store.get("2"))
        self.store.delete("2")
        self.assertEqual(len(self.store.all()), 5)

    def test_add_prepends_with_fresh_id_and_clock_timestamp(self):
        draft = NotificationDraft(
            type=NotificationType.REMINDER,
            priority=NotificationPriority.LOW,
            title="Library",
            message="Your book is due tomorrow",
        )
        added = self.store.add(draft)
        self.assertEqual(added.id, "n1")
        self.assertEqual(added.timestamp, NOW)
        self.assertFalse(added.read)
        self.assertEqual(self.store.unread()[0].id, "n1")
        self.assertEqual(self.store.all()[0].id, "n1")

    def test_add_skips_colliding_ids(self):
        ids = iter(["1", "2", "fresh"])
        store = seeded_store(id_factory=lambda: next(ids))
        added = store.add(NotificationDraft(type="grade", priority="high", title="t", message="m"))
        self.assertEqual(added.id, "fresh")


class TestVisibleFor(unittest.TestCase):
    def setUp(self):
        self.store = seeded_store()

    def test_defaults_show_everything(self):
        self.assertEqual(len(self.store.visible_for(NotificationSettings())), 6)

    def test_academic_toggle_hides_academic_and_reminders(self):
        visible = self.store.visible_for(NotificationSettings(academic=False))
        self.assertEqual([n.id for n in visible], ["1", "5", "3"])

    def test_grades_toggle(self):
        visible = self.store.visible_for(NotificationSettings(grades=False))
        self.assertNotIn("1", [n.id for n in visible])

    def test_emergencies_always_visible(self):
        visible = self.store.visible_for(NotificationSettings(enabled=False))
        self.assertEqual([n.id for n in visible], ["5"])


class TestPresentationLookups(unittest.TestCase):
    def test_priority_colors(self):
        self.assertEqual(priority_color("critical"), "destructive")
        self.assertEqual(priority_color(NotificationPriority.LOW), "success")

    def test_type_icons(self):
        self.assertEqual(type_icon("emergency"), "AlertTriangle")
        self.assertEqual(type_icon(NotificationType.GRADE), "Star")


if __name__ == "__main__":
    unittest.main()
