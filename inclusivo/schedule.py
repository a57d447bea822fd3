"""Weekly schedule, today's classes and next-class lookup over a fixed roster."""
from __future__ import annotations

import datetime as _dt
import logging
from typing import Callable, Dict, Iterable, List, Optional

from core.date_utils import WEEKDAYS, at_time, format_hhmm, minutes_between, normalize_day, weekday_name

from .models import ClassSession

LOG = logging.getLogger(__name__)

Clock = Callable[[], _dt.datetime]
WeeklySchedule = Dict[str, List[ClassSession]]


def _by_start(sessions: Iterable[ClassSession]) -> List[ClassSession]:
    # Zero-padded HH:MM sorts correctly as text
    return sorted(sessions, key=lambda s: s.start_time)


class ScheduleEngine:
    """Read-only views over the class roster.

    The engine keeps no timers; callers re-query ``next_class`` and
    ``time_until_next_class`` on their own refresh cadence.
    """

    def __init__(self, sessions: Iterable[ClassSession], clock: Optional[Clock] = None) -> None:
        self._sessions: List[ClassSession] = list(sessions)
        self._clock: Clock = clock or _dt.datetime.now

    @property
    def sessions(self) -> List[ClassSession]:
        return list(self._sessions)

    def now(self) -> _dt.datetime:
        return self._clock()

    def weekly_schedule(self) -> WeeklySchedule:
        """All seven weekday buckets (Monday first), each sorted by start time."""
        buckets: WeeklySchedule = {day: [] for day in WEEKDAYS}
        for session in self._sessions:
            buckets[session.day].append(session)
        return {day: _by_start(items) for day, items in buckets.items()}

    def classes_by_day(self, day: str) -> List[ClassSession]:
        canonical = normalize_day(day)
        if canonical is None:
            return []
        return _by_start(s for s in self._sessions if s.day == canonical)

    def today_classes(self) -> List[ClassSession]:
        return self.classes_by_day(weekday_name(self.now()))

    def get_class(self, class_id: str) -> Optional[ClassSession]:
        for session in self._sessions:
            if session.id == class_id:
                return session
        return None

    def next_class(self) -> Optional[ClassSession]:
        """First class today that has not started, else the first class of the next non-empty day.

        The scan wraps Sunday -> Monday and ends on today's weekday one week
        later, so only an empty roster yields None.
        """
        now = self.now()
        current = format_hhmm(now)
        for session in self.today_classes():
            if session.start_time > current:
                return session

        today_index = now.weekday()
        for offset in range(1, len(WEEKDAYS) + 1):
            day = WEEKDAYS[(today_index + offset) % len(WEEKDAYS)]
            classes = self.classes_by_day(day)
            if classes:
                return classes[0]
        return None

    def time_until_next_class(self) -> Optional[int]:
        """Minutes from now until the next class's start time applied to today's date.

        Negative when that start time is already behind the clock, i.e. the
        class is in progress. A class counts as started at its start minute:
        at exactly 14:00:00 a 14:00 class is no longer "next", and when it is
        the only one on the roster its next-week occurrence yields 0.
        """
        session = self.next_class()
        if session is None:
            return None
        now = self.now()
        starts = at_time(now.date(), session.start_time, tzinfo=now.tzinfo)
        minutes = minutes_between(now, starts)
        LOG.debug("Next class %s (%s %s) in %d min", session.id, session.day, session.start_time, minutes)
        return minutes
