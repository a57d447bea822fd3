"""Static mock data: class roster, location directory, seed notifications/documents.

Bundled YAML files live in ``inclusivo/data``; each loader accepts an optional
path so a config file can point at a different roster or directory.
"""
from __future__ import annotations

import datetime as _dt
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.yamlio import Pathish, load_mapping

from .models import (
    ClassSession,
    Location,
    LocationAccessibility,
    Notification,
    ScannedDocument,
)

LOG = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent / "data"


def bundled_path(name: str) -> Path:
    return DATA_DIR / name


def _entries(path: Pathish, key: str) -> List[Dict[str, Any]]:
    data = load_mapping(path)
    items = data.get(key) or []
    if not isinstance(items, list):
        raise ValueError(f"Invalid catalog {path}: '{key}' must be a list")
    LOG.debug("Loaded %d %s from %s", len(items), key, path)
    return items


_TIME_FIELDS = ("start_time", "end_time")


def _clock_time(value: Any) -> Any:
    # YAML 1.1 reads an unquoted 14:00 as the base-60 integer 840
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value < 24 * 60:
        return f"{value // 60:02d}:{value % 60:02d}"
    return value


def _age_to_timestamp(item: Dict[str, Any], now: _dt.datetime) -> _dt.datetime:
    if "age_minutes" in item:
        return now - _dt.timedelta(minutes=float(item.pop("age_minutes")))
    raw = item.pop("timestamp", None)
    if raw is None:
        return now
    if isinstance(raw, _dt.datetime):
        return raw
    return _dt.datetime.fromisoformat(str(raw))


def load_roster(path: Optional[Pathish] = None) -> List[ClassSession]:
    src = path or bundled_path("roster.yaml")
    sessions: List[ClassSession] = []
    for raw in _entries(src, "sessions"):
        try:
            item = {k: _clock_time(v) if k in _TIME_FIELDS else v for k, v in raw.items()}
            sessions.append(ClassSession(**{k: str(v) if v is not None else v for k, v in item.items()}))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid class session in {src}: {exc}") from exc
    return sessions


def load_locations(path: Optional[Pathish] = None) -> List[Location]:
    src = path or bundled_path("locations.yaml")
    locations: List[Location] = []
    for raw in _entries(src, "locations"):
        item = dict(raw)
        access = LocationAccessibility(**(item.pop("accessibility", None) or {}))
        room = item.pop("room", None)
        try:
            locations.append(
                Location(
                    id=str(item.pop("id")),
                    room=str(room) if room is not None else None,
                    accessibility=access,
                    **item,
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid location in {src}: {exc}") from exc
    return locations


def load_notifications(path: Optional[Pathish] = None, now: Optional[_dt.datetime] = None) -> List[Notification]:
    src = path or bundled_path("notifications.yaml")
    now = now or _dt.datetime.now()
    out: List[Notification] = []
    for raw in _entries(src, "notifications"):
        item = dict(raw)
        try:
            timestamp = _age_to_timestamp(item, now)
            out.append(Notification(id=str(item.pop("id")), timestamp=timestamp, **item))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid notification in {src}: {exc}") from exc
    return out


def load_documents(path: Optional[Pathish] = None, now: Optional[_dt.datetime] = None) -> List[ScannedDocument]:
    src = path or bundled_path("documents.yaml")
    now = now or _dt.datetime.now()
    out: List[ScannedDocument] = []
    for raw in _entries(src, "documents"):
        item = dict(raw)
        try:
            created_at = _age_to_timestamp(item, now)
            out.append(ScannedDocument(id=str(item.pop("id")), created_at=created_at, **item))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid document in {src}: {exc}") from exc
    return out
