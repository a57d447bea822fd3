"""Tests for core/date_utils.py."""

from __future__ import annotations

import datetime as _dt
import unittest

from core.date_utils import at_time, format_hhmm, minutes_between, normalize_day, parse_hhmm, weekday_name


class TestDayNames(unittest.TestCase):
    def test_normalize_day(self):
        self.assertEqual(normalize_day("wed"), "Wednesday")
        self.assertEqual(normalize_day(" THURS "), "Thursday")
        self.assertIsNone(normalize_day("someday"))
        self.assertIsNone(normalize_day(""))

    def test_weekday_name(self):
        self.assertEqual(weekday_name(_dt.date(2024, 1, 15)), "Monday")
        self.assertEqual(weekday_name(_dt.datetime(2024, 1, 21, 9, 0)), "Sunday")


class TestClockTimes(unittest.TestCase):
    def test_parse_hhmm(self):
        self.assertEqual(parse_hhmm("08:05"), (8, 5))
        self.assertEqual(parse_hhmm("23:59"), (23, 59))

    def test_parse_hhmm_rejects_unpadded_and_out_of_range(self):
        for bad in ("8:05", "24:00", "12:60", "noon", ""):
            with self.assertRaises(ValueError):
                parse_hhmm(bad)

    def test_at_time_and_format(self):
        moment = at_time(_dt.date(2024, 1, 15), "14:30")
        self.assertEqual(moment, _dt.datetime(2024, 1, 15, 14, 30))
        self.assertEqual(format_hhmm(moment), "14:30")

    def test_minutes_between_floors(self):
        start = _dt.datetime(2024, 1, 15, 13, 0, 30)
        self.assertEqual(minutes_between(start, _dt.datetime(2024, 1, 15, 14, 0)), 59)
        self.assertEqual(minutes_between(start, _dt.datetime(2024, 1, 15, 13, 0)), -1)
        self.assertEqual(minutes_between(start, start), 0)


if __name__ == "__main__":
    unittest.main()
