"""In-memory notification collection with read-state, filters and settings-aware views."""
from __future__ import annotations

import datetime as _dt
import logging
import uuid
from dataclasses import asdict
from typing import Callable, Iterable, List, Optional, Union

from . import constants as C
from .models import Notification, NotificationDraft, NotificationPriority, NotificationType
from .settings import NotificationSettings

LOG = logging.getLogger(__name__)

Clock = Callable[[], _dt.datetime]
IdFactory = Callable[[], str]

# Types silenced by each NotificationSettings toggle (emergency never is)
_ACADEMIC_TYPES = (NotificationType.ACADEMIC, NotificationType.REMINDER)
_GRADE_TYPES = (NotificationType.GRADE,)


def _new_id() -> str:
    return uuid.uuid4().hex[:12]


def _newest_first(items: Iterable[Notification]) -> List[Notification]:
    return sorted(items, key=lambda n: n.timestamp, reverse=True)


def priority_color(priority: Union[NotificationPriority, str]) -> str:
    return C.PRIORITY_COLORS[NotificationPriority(priority).value]


def type_icon(kind: Union[NotificationType, str]) -> str:
    return C.TYPE_ICONS[NotificationType(kind).value]


class NotificationStore:
    """Notifications kept in insertion order, read out newest first."""

    def __init__(
        self,
        notifications: Iterable[Notification] = (),
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> None:
        self._items: List[Notification] = list(notifications)
        self._clock: Clock = clock or _dt.datetime.now
        self._new_id: IdFactory = id_factory or _new_id

    def all(self) -> List[Notification]:
        return _newest_first(self._items)

    def get(self, notification_id: str) -> Optional[Notification]:
        for n in self._items:
            if n.id == notification_id:
                return n
        return None

    def unread(self) -> List[Notification]:
        return [n for n in self._items if not n.read]

    def unread_count(self) -> int:
        return sum(1 for n in self._items if not n.read)

    def by_priority(self, priority: Union[NotificationPriority, str]) -> List[Notification]:
        wanted = NotificationPriority(priority)
        return [n for n in self._items if n.priority == wanted]

    def by_type(self, kind: Union[NotificationType, str]) -> List[Notification]:
        wanted = NotificationType(kind)
        return [n for n in self._items if n.type == wanted]

    def mark_read(self, notification_id: str) -> None:
        n = self.get(notification_id)
        if n is not None:
            n.read = True

    def mark_all_read(self) -> None:
        for n in self._items:
            n.read = True

    def delete(self, notification_id: str) -> None:
        before = len(self._items)
        self._items = [n for n in self._items if n.id != notification_id]
        if len(self._items) != before:
            LOG.debug("Deleted notification %s", notification_id)

    def add(self, draft: NotificationDraft) -> Notification:
        """Assign a fresh id and prepend; a missing timestamp means now."""
        fields = asdict(draft)
        if fields.get("timestamp") is None:
            fields["timestamp"] = self._clock()
        existing = {n.id for n in self._items}
        new_id = self._new_id()
        while new_id in existing:
            new_id = self._new_id()
        notification = Notification(id=new_id, **fields)
        self._items.insert(0, notification)
        LOG.debug("Added %s notification %s", notification.type.value, new_id)
        return notification

    def visible_for(self, settings: NotificationSettings) -> List[Notification]:
        """Notifications the user opted into; emergencies always pass."""
        def allowed(n: Notification) -> bool:
            if n.type == NotificationType.EMERGENCY:
                return True
            if not settings.enabled:
                return False
            if not settings.academic and n.type in _ACADEMIC_TYPES:
                return False
            if not settings.grades and n.type in _GRADE_TYPES:
                return False
            return True

        return _newest_first(n for n in self._items if allowed(n))
