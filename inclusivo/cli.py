"""Inclusivo CLI.

Commands:
  schedule     Weekly schedule, today's classes, next class
  route        Step-by-step route between two locations
  locations    List, search and favorite campus locations
  notifications List and manage notifications
  settings     Show or update accessibility settings
  speak        Read text aloud through the voice engine
  documents    Scanned documents and OCR
"""
from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from core.cli_framework import CLIApp
from core.cli_output import OutputWriter
from core.pipeline import run_pipeline

from . import __version__
from .app import App, build_app
from .config import load_app_config
from .constants import SCHEDULE_REFRESH_SECONDS
from .pipeline import (
    DocumentsProcessor,
    DocumentsProducer,
    DocumentsRequest,
    LocationsProcessor,
    LocationsProducer,
    LocationsRequest,
    NotificationsProcessor,
    NotificationsProducer,
    NotificationsRequest,
    RouteProcessor,
    RouteProducer,
    RouteRequest,
    ScheduleProcessor,
    ScheduleProducer,
    ScheduleRequest,
    SettingsProcessor,
    SettingsProducer,
    SettingsRequest,
    SpeakProcessor,
    SpeakProducer,
    SpeakRequest,
    parse_patch,
)
from .storage import MemoryKeyValueStore

LOG = logging.getLogger(__name__)

app = CLIApp(
    "inclusivo",
    "Accessible campus assistant: schedule, navigation, notifications and speech.",
    version=__version__,
    epilog="Settings persist under ~/.config/inclusivo/settings unless --memory is given.",
)
app.global_argument("--config", help="Path to config YAML (default: $INCLUSIVO_CONFIG or ~/.config/inclusivo/config.yaml)")
app.global_argument("--memory", action="store_true", help="Keep settings in memory only (nothing is written)")


def _load_app(args: argparse.Namespace) -> App:
    config = load_app_config(getattr(args, "config", None))
    store = MemoryKeyValueStore() if getattr(args, "memory", False) else None
    return build_app(config, store=store)


def _writer(args: argparse.Namespace) -> OutputWriter:
    return getattr(args, "_output", None) or OutputWriter()


# =============================================================================
# Schedule
# =============================================================================

schedule_group = app.group("schedule", help="Class schedule views")


@schedule_group.command("week", help="Show all seven days")
def cmd_schedule_week(args: argparse.Namespace) -> int:
    a = _load_app(args)
    return run_pipeline(ScheduleRequest(view="week"), ScheduleProcessor(a), ScheduleProducer(_writer(args)))


@schedule_group.command("today", help="Show today's classes")
@schedule_group.argument("--day", help="Show this weekday instead of today (e.g. Mon, Tuesday)")
def cmd_schedule_today(args: argparse.Namespace) -> int:
    a = _load_app(args)
    request = ScheduleRequest(view="day", day=args.day) if args.day else ScheduleRequest(view="today")
    return run_pipeline(request, ScheduleProcessor(a), ScheduleProducer(_writer(args)))


@schedule_group.command("next", help="Show the next class and minutes until it starts")
@schedule_group.argument("--watch", action="store_true", help="Refresh until interrupted")
@schedule_group.argument("--interval", type=float, default=SCHEDULE_REFRESH_SECONDS, help="Refresh interval in seconds (with --watch)")
def cmd_schedule_next(args: argparse.Namespace) -> int:
    a = _load_app(args)
    processor = ScheduleProcessor(a)
    producer = ScheduleProducer(_writer(args))
    if not args.watch:
        return run_pipeline(ScheduleRequest(view="next"), processor, producer)
    try:
        while True:
            rc = run_pipeline(ScheduleRequest(view="next"), processor, producer)
            if rc != 0:
                return rc
            time.sleep(args.interval)
    except KeyboardInterrupt:
        return 0


# =============================================================================
# Route + locations
# =============================================================================


@app.command("route", help="Step-by-step route between two location ids")
@app.argument("origin", help="Origin location id")
@app.argument("destination", help="Destination location id")
@app.argument("--speak", action="store_true", help="Read the steps aloud")
def cmd_route(args: argparse.Namespace) -> int:
    a = _load_app(args)
    request = RouteRequest(origin=args.origin, destination=args.destination, speak=args.speak)
    return run_pipeline(request, RouteProcessor(a), RouteProducer(_writer(args)))


locations_group = app.group("locations", help="Campus location directory")


@locations_group.command("list", help="List all locations")
def cmd_locations_list(args: argparse.Namespace) -> int:
    a = _load_app(args)
    return run_pipeline(LocationsRequest(action="list"), LocationsProcessor(a), LocationsProducer(_writer(args)))


@locations_group.command("search", help="Search by name, building or room")
@locations_group.argument("query")
def cmd_locations_search(args: argparse.Namespace) -> int:
    a = _load_app(args)
    request = LocationsRequest(action="search", query=args.query)
    return run_pipeline(request, LocationsProcessor(a), LocationsProducer(_writer(args)))


@locations_group.command("favorites", help="Frequent classrooms and libraries")
def cmd_locations_favorites(args: argparse.Namespace) -> int:
    a = _load_app(args)
    return run_pipeline(LocationsRequest(action="favorites"), LocationsProcessor(a), LocationsProducer(_writer(args)))


# =============================================================================
# Notifications
# =============================================================================

notifications_group = app.group("notifications", help="Academic notifications")


def _notifications(args: argparse.Namespace, action: str, notification_id: Optional[str] = None) -> int:
    a = _load_app(args)
    request = NotificationsRequest(
        action=action,
        notification_id=notification_id,
        unread_only=getattr(args, "unread", False),
        priority=getattr(args, "priority", None),
        type=getattr(args, "type", None),
        include_muted=getattr(args, "all", False),
    )
    return run_pipeline(request, NotificationsProcessor(a), NotificationsProducer(_writer(args)))


@notifications_group.command("list", help="List notifications, newest first")
@notifications_group.argument("--unread", action="store_true", help="Only unread")
@notifications_group.argument("--priority", choices=["low", "medium", "high", "critical"])
@notifications_group.argument("--type", choices=["academic", "grade", "emergency", "reminder", "material"])
@notifications_group.argument("--all", action="store_true", help="Include types muted in notification settings")
def cmd_notifications_list(args: argparse.Namespace) -> int:
    return _notifications(args, "list")


@notifications_group.command("read", help="Mark one notification as read")
@notifications_group.argument("id")
def cmd_notifications_read(args: argparse.Namespace) -> int:
    return _notifications(args, "read", args.id)


@notifications_group.command("read-all", help="Mark every notification as read")
def cmd_notifications_read_all(args: argparse.Namespace) -> int:
    return _notifications(args, "read-all")


@notifications_group.command("delete", help="Delete one notification")
@notifications_group.argument("id")
def cmd_notifications_delete(args: argparse.Namespace) -> int:
    return _notifications(args, "delete", args.id)


# =============================================================================
# Settings
# =============================================================================

settings_group = app.group("settings", help="Accessibility settings")


@settings_group.command("show", help="Show the profile and settings groups")
@settings_group.argument("group", nargs="?", help="profile, voice, visual, accessibility or notifications")
def cmd_settings_show(args: argparse.Namespace) -> int:
    a = _load_app(args)
    request = SettingsRequest(action="show", group=args.group)
    return run_pipeline(request, SettingsProcessor(a), SettingsProducer(_writer(args)))


@settings_group.command("set", help="Update a settings group with key=value pairs")
@settings_group.argument("group", choices=["voice", "visual", "accessibility", "notifications"])
@settings_group.argument("pairs", nargs="+", metavar="key=value")
def cmd_settings_set(args: argparse.Namespace) -> int:
    patch = parse_patch(args.pairs)
    a = _load_app(args)
    request = SettingsRequest(action="set", group=args.group, patch=patch)
    return run_pipeline(request, SettingsProcessor(a), SettingsProducer(_writer(args)))


# =============================================================================
# Speech
# =============================================================================


@app.command("speak", help="Read text aloud with the current voice settings")
@app.argument("text", nargs="+")
@app.argument("--interrupt", action="store_true", help="Cancel anything already speaking")
def cmd_speak(args: argparse.Namespace) -> int:
    a = _load_app(args)
    request = SpeakRequest(text=" ".join(args.text), interrupt=args.interrupt)
    return run_pipeline(request, SpeakProcessor(a), SpeakProducer(_writer(args)))


# =============================================================================
# Documents
# =============================================================================

documents_group = app.group("documents", help="Scanned documents and OCR")


@documents_group.command("list", help="List documents, newest first")
def cmd_documents_list(args: argparse.Namespace) -> int:
    a = _load_app(args)
    return run_pipeline(DocumentsRequest(action="list"), DocumentsProcessor(a), DocumentsProducer(_writer(args)))


@documents_group.command("search", help="Search titles, content and tags")
@documents_group.argument("query")
def cmd_documents_search(args: argparse.Namespace) -> int:
    a = _load_app(args)
    request = DocumentsRequest(action="search", query=args.query)
    return run_pipeline(request, DocumentsProcessor(a), DocumentsProducer(_writer(args)))


@documents_group.command("read", help="Read a document aloud")
@documents_group.argument("id")
def cmd_documents_read(args: argparse.Namespace) -> int:
    a = _load_app(args)
    request = DocumentsRequest(action="read", document_id=args.id)
    return run_pipeline(request, DocumentsProcessor(a), DocumentsProducer(_writer(args)))


@documents_group.command("ocr", help="Extract text from an image")
@documents_group.argument("image", help="Path to an image file")
def cmd_documents_ocr(args: argparse.Namespace) -> int:
    a = _load_app(args)
    request = DocumentsRequest(action="ocr", image_path=Path(args.image))
    return run_pipeline(request, DocumentsProcessor(a), DocumentsProducer(_writer(args)))


def main(argv: Optional[List[str]] = None) -> int:
    return app.run(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
