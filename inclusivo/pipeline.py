"""Inclusivo pipeline components (schedule, route, locations, notifications, settings, speech, documents).

Each command is a request dataclass, a ``SafeProcessor`` that runs it
against the wired ``App`` and a ``BaseProducer`` that renders the result
through the shared ``OutputWriter``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from core.cli_errors import NotFoundError, UsageError
from core.cli_output import OutputFormat
from core.date_utils import normalize_day, weekday_name
from core.pipeline import BaseProducer, RequestConsumer, SafeProcessor

from .app import App
from .documents import OcrBusyError
from .models import ClassSession, Location, Notification, OcrResult, Route, ScannedDocument
from .notifications import type_icon
from .settings import SettingsError

_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?\d+\.\d*$|^-?\.\d+$")
_TRUE = {"true", "yes", "on"}
_FALSE = {"false", "no", "off"}

SETTINGS_GROUPS = ("voice", "visual", "accessibility", "notifications")


def _coerce(value: str) -> Any:
    low = value.strip().lower()
    if low in _TRUE:
        return True
    if low in _FALSE:
        return False
    if _INT_RE.match(low):
        return int(low)
    if _FLOAT_RE.match(low):
        return float(low)
    return value


def parse_patch(pairs: Sequence[str]) -> Dict[str, Any]:
    """Turn ``key=value`` strings into a settings patch with typed values."""
    patch: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip().replace("-", "_")
        if not sep or not key:
            raise UsageError(f"Expected key=value, got {pair!r}", hint="e.g. speed=1.5 high_contrast=true")
        patch[key] = _coerce(value)
    return patch


def format_session(session: ClassSession) -> str:
    return (
        f"{session.start_time}-{session.end_time}  {session.subject} "
        f"({session.type.value}, {session.building} {session.room}) - {session.professor}"
    )


# -----------------------------------------------------------------------------
# Schedule
# -----------------------------------------------------------------------------


@dataclass
class ScheduleRequest:
    view: str = "week"  # week | today | next | day
    day: Optional[str] = None


ScheduleRequestConsumer = RequestConsumer[ScheduleRequest]


@dataclass
class ScheduleResult:
    view: str
    days: Dict[str, List[ClassSession]] = field(default_factory=dict)
    next_class: Optional[ClassSession] = None
    minutes_until: Optional[int] = None


class ScheduleProcessor(SafeProcessor[ScheduleRequest, ScheduleResult]):
    def __init__(self, app: App) -> None:
        self.app = app

    def _process_safe(self, payload: ScheduleRequest) -> ScheduleResult:
        engine = self.app.schedule
        if payload.view == "week":
            return ScheduleResult(view="week", days=engine.weekly_schedule())
        if payload.view == "today":
            today = weekday_name(engine.now())
            return ScheduleResult(view="today", days={today: engine.today_classes()})
        if payload.view == "day":
            day = normalize_day(payload.day or "")
            if day is None:
                raise UsageError(f"Unknown weekday: {payload.day}")
            return ScheduleResult(view="day", days={day: engine.classes_by_day(day)})
        if payload.view == "next":
            return ScheduleResult(
                view="next",
                next_class=engine.next_class(),
                minutes_until=engine.time_until_next_class(),
            )
        raise UsageError(f"Unknown schedule view: {payload.view}")


class ScheduleProducer(BaseProducer):
    def _produce_success(self, payload: ScheduleResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        w = self.writer
        if payload.view == "next":
            if w.structured:
                w.print_data({"next_class": payload.next_class, "minutes_until": payload.minutes_until})
                return
            s = payload.next_class
            if s is None:
                w.print("No classes scheduled")
                return
            w.print(f"Next: {s.subject} on {s.day} at {s.start_time} ({s.building} {s.room})")
            if payload.minutes_until is not None and payload.minutes_until >= 0:
                w.print(f"Starts in {payload.minutes_until} min")
            return

        if w.structured:
            w.print_data(payload.days)
            return
        if w.config.format == OutputFormat.TABLE:
            rows = [
                {"day": day, "start": s.start_time, "end": s.end_time, "subject": s.subject, "room": f"{s.building} {s.room}"}
                for day, sessions in payload.days.items()
                for s in sessions
            ]
            w.print_data(rows, headers=["day", "start", "end", "subject", "room"])
            return
        for day, sessions in payload.days.items():
            w.print(day)
            if not sessions:
                w.print("  (no classes)")
            for s in sessions:
                w.print(f"  {format_session(s)}")


# -----------------------------------------------------------------------------
# Route
# -----------------------------------------------------------------------------


@dataclass
class RouteRequest:
    origin: str
    destination: str
    speak: bool = False


RouteRequestConsumer = RequestConsumer[RouteRequest]


class RouteProcessor(SafeProcessor[RouteRequest, Route]):
    def __init__(self, app: App) -> None:
        self.app = app

    def _process_safe(self, payload: RouteRequest) -> Route:
        route = self.app.router.calculate_route(payload.origin, payload.destination)
        if route is None:
            missing = [i for i in (payload.origin, payload.destination) if self.app.router.get_location(i) is None]
            raise NotFoundError(
                f"Unknown location id: {', '.join(missing)}",
                hint="Run 'inclusivo locations list' to see ids",
            )
        if payload.speak:
            self.app.state.speak(" ".join(step.instruction + "." for step in route.steps), interrupt=True)
        return route


class RouteProducer(BaseProducer):
    def _produce_success(self, payload: Route, diagnostics: Optional[Dict[str, Any]]) -> None:
        w = self.writer
        if w.structured:
            w.print_data(payload)
            return
        w.print(f"{payload.origin.name} -> {payload.destination.name}: {payload.distance} m, about {payload.estimated_time} min")
        for n, step in enumerate(payload.steps, start=1):
            line = f"{n}. {step.instruction}"
            if step.distance:
                line += f" ({step.distance} m)"
            if step.landmark:
                line += f" [{step.landmark}]"
            w.print(line)


# -----------------------------------------------------------------------------
# Locations
# -----------------------------------------------------------------------------


@dataclass
class LocationsRequest:
    action: str = "list"  # list | search | favorites
    query: Optional[str] = None


LocationsRequestConsumer = RequestConsumer[LocationsRequest]


class LocationsProcessor(SafeProcessor[LocationsRequest, List[Location]]):
    def __init__(self, app: App) -> None:
        self.app = app

    def _process_safe(self, payload: LocationsRequest) -> List[Location]:
        router = self.app.router
        if payload.action == "search":
            return router.search(payload.query or "")
        if payload.action == "favorites":
            return router.favorites()
        return router.all_locations()


class LocationsProducer(BaseProducer):
    def _produce_success(self, payload: List[Location], diagnostics: Optional[Dict[str, Any]]) -> None:
        w = self.writer
        if w.structured:
            w.print_data(payload)
            return
        if not payload:
            w.print("No locations found")
            return
        if w.config.format == OutputFormat.TABLE:
            rows = [
                {
                    "id": loc.id,
                    "name": loc.name,
                    "building": loc.building,
                    "floor": loc.floor,
                    "type": loc.type.value,
                    "accessible": "yes" if loc.accessibility.wheelchair_accessible else "no",
                }
                for loc in payload
            ]
            w.print_data(rows)
            return
        for loc in payload:
            flags = [name for name, on in (
                ("wheelchair", loc.accessibility.wheelchair_accessible),
                ("elevator", loc.accessibility.has_elevator),
                ("braille", loc.accessibility.has_braille_signage),
            ) if on]
            access = f" [{', '.join(flags)}]" if flags else ""
            w.print(f"[{loc.id}] {loc.name} - {loc.building}, floor {loc.floor} ({loc.type.value}){access}")


# -----------------------------------------------------------------------------
# Notifications
# -----------------------------------------------------------------------------


@dataclass
class NotificationsRequest:
    action: str = "list"  # list | read | read-all | delete
    notification_id: Optional[str] = None
    unread_only: bool = False
    priority: Optional[str] = None
    type: Optional[str] = None
    include_muted: bool = False


NotificationsRequestConsumer = RequestConsumer[NotificationsRequest]


@dataclass
class NotificationsResult:
    items: List[Notification]
    unread_count: int
    message: Optional[str] = None


class NotificationsProcessor(SafeProcessor[NotificationsRequest, NotificationsResult]):
    def __init__(self, app: App) -> None:
        self.app = app

    def _require(self, notification_id: Optional[str]) -> str:
        if not notification_id or self.app.notifications.get(notification_id) is None:
            raise NotFoundError(f"Notification not found: {notification_id}")
        return notification_id

    def _process_safe(self, payload: NotificationsRequest) -> NotificationsResult:
        store = self.app.notifications
        message = None
        if payload.action == "read":
            store.mark_read(self._require(payload.notification_id))
            message = f"Marked {payload.notification_id} as read"
        elif payload.action == "read-all":
            store.mark_all_read()
            message = "Marked all notifications as read"
        elif payload.action == "delete":
            store.delete(self._require(payload.notification_id))
            message = f"Deleted {payload.notification_id}"

        if payload.include_muted:
            items = store.all()
        else:
            items = store.visible_for(self.app.state.notification_settings)
        if payload.unread_only:
            items = [n for n in items if not n.read]
        if payload.priority:
            items = [n for n in items if n.priority.value == payload.priority]
        if payload.type:
            items = [n for n in items if n.type.value == payload.type]
        return NotificationsResult(items=items, unread_count=store.unread_count(), message=message)


class NotificationsProducer(BaseProducer):
    def _produce_success(self, payload: NotificationsResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        w = self.writer
        if w.structured:
            w.print_data(payload)
            return
        if payload.message:
            w.print(payload.message)
        w.print(f"{payload.unread_count} unread")
        for n in payload.items:
            marker = " " if n.read else "*"
            stamp = n.timestamp.strftime("%Y-%m-%d %H:%M")
            w.print(f"{marker} [{n.id}] {stamp} {type_icon(n.type)}/{n.priority.value}: {n.title}")
            w.print(f"    {n.message}")


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------


@dataclass
class SettingsRequest:
    action: str = "show"  # show | set
    group: Optional[str] = None
    patch: Dict[str, Any] = field(default_factory=dict)


SettingsRequestConsumer = RequestConsumer[SettingsRequest]


class SettingsProcessor(SafeProcessor[SettingsRequest, Dict[str, Any]]):
    def __init__(self, app: App) -> None:
        self.app = app

    def _snapshot(self) -> Dict[str, Any]:
        state = self.app.state
        return {
            "profile": state.user.to_dict() if state.user else None,
            "authenticated": state.is_authenticated,
            "voice": state.voice_settings.to_dict(),
            "visual": state.visual_settings.to_dict(),
            "accessibility": state.accessibility_settings.to_dict(),
            "notifications": state.notification_settings.to_dict(),
        }

    def _process_safe(self, payload: SettingsRequest) -> Dict[str, Any]:
        if payload.action == "set":
            if payload.group not in SETTINGS_GROUPS:
                raise UsageError(f"Unknown settings group: {payload.group}", hint=f"One of: {', '.join(SETTINGS_GROUPS)}")
            if not payload.patch:
                raise UsageError("Nothing to update", hint="Pass one or more key=value pairs")
            update = {
                "voice": self.app.state.update_voice_settings,
                "visual": self.app.state.update_visual_settings,
                "accessibility": self.app.state.update_accessibility_settings,
                "notifications": self.app.state.update_notification_settings,
            }[payload.group]
            try:
                update(payload.patch)
            except SettingsError as exc:
                raise UsageError(str(exc)) from exc

        snapshot = self._snapshot()
        if payload.group:
            if payload.group not in snapshot:
                raise UsageError(f"Unknown settings group: {payload.group}")
            return {payload.group: snapshot[payload.group]}
        return snapshot


class SettingsProducer(BaseProducer):
    def _produce_success(self, payload: Dict[str, Any], diagnostics: Optional[Dict[str, Any]]) -> None:
        w = self.writer
        if w.structured:
            w.print_data(payload)
            return
        for group, values in payload.items():
            if isinstance(values, dict):
                w.print(f"{group}:")
                w.print_dict(values, indent=2)
            else:
                w.print(f"{group}: {values}")


# -----------------------------------------------------------------------------
# Speech
# -----------------------------------------------------------------------------


@dataclass
class SpeakRequest:
    text: str
    interrupt: bool = False


SpeakRequestConsumer = RequestConsumer[SpeakRequest]


@dataclass
class SpeakResult:
    spoken: bool
    text: str


class SpeakProcessor(SafeProcessor[SpeakRequest, SpeakResult]):
    def __init__(self, app: App) -> None:
        self.app = app

    def _process_safe(self, payload: SpeakRequest) -> SpeakResult:
        if not payload.text.strip():
            raise UsageError("Nothing to say")
        handle = self.app.state.speak(payload.text, interrupt=payload.interrupt)
        if handle is not None and handle.done() and not handle.cancelled():
            # Surface engine failures as command errors
            handle.result()
        return SpeakResult(spoken=handle is not None, text=payload.text)


class SpeakProducer(BaseProducer):
    def _produce_success(self, payload: SpeakResult, diagnostics: Optional[Dict[str, Any]]) -> None:
        w = self.writer
        if w.structured:
            w.print_data(payload)
        elif not payload.spoken:
            w.print_warning("Speech output is disabled; nothing was spoken")


# -----------------------------------------------------------------------------
# Documents
# -----------------------------------------------------------------------------


@dataclass
class DocumentsRequest:
    action: str = "list"  # list | search | read | ocr
    query: Optional[str] = None
    document_id: Optional[str] = None
    image_path: Optional[Path] = None
    timeout: Optional[float] = None


DocumentsRequestConsumer = RequestConsumer[DocumentsRequest]


class DocumentsProcessor(SafeProcessor[DocumentsRequest, Any]):
    def __init__(self, app: App) -> None:
        self.app = app

    def _process_safe(self, payload: DocumentsRequest) -> Any:
        library = self.app.documents
        if payload.action == "search":
            return library.search(payload.query or "")
        if payload.action == "read":
            doc = library.get(payload.document_id or "")
            if doc is None:
                raise NotFoundError(f"Document not found: {payload.document_id}")
            library.read_aloud(doc.id, self.app.speech)
            return [doc]
        if payload.action == "ocr":
            return self._ocr(payload)
        return library.all()

    def _ocr(self, payload: DocumentsRequest) -> OcrResult:
        if payload.image_path is None:
            raise UsageError("An image path is required for OCR")
        if not payload.image_path.exists():
            raise NotFoundError(f"Image not found: {payload.image_path}")
        data = payload.image_path.read_bytes()
        try:
            future = self.app.ocr.perform(data)
        except OcrBusyError as exc:
            raise UsageError(str(exc)) from exc
        timeout = payload.timeout if payload.timeout is not None else self.app.ocr.delay + 5.0
        return future.result(timeout=timeout)


class DocumentsProducer(BaseProducer):
    def _produce_success(self, payload: Any, diagnostics: Optional[Dict[str, Any]]) -> None:
        w = self.writer
        if w.structured:
            w.print_data(payload)
            return
        if isinstance(payload, OcrResult):
            w.print(payload.text)
            w.print(f"(confidence {payload.confidence:.0%}, language {payload.language})")
            return
        docs: List[ScannedDocument] = payload
        if not docs:
            w.print("No documents found")
            return
        for doc in docs:
            tags = f" [{', '.join(doc.tags)}]" if doc.tags else ""
            w.print(f"[{doc.id}] {doc.title}{tags} ({doc.created_at:%Y-%m-%d})")

