"""Domain records: class sessions, locations, routes, notifications, documents."""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from core.date_utils import parse_hhmm, normalize_day


class SessionType(str, Enum):
    LECTURE = "lecture"
    LAB = "lab"
    SEMINAR = "seminar"


class LocationType(str, Enum):
    CLASSROOM = "classroom"
    CAFETERIA = "cafeteria"
    LIBRARY = "library"
    OFFICE = "office"
    BATHROOM = "bathroom"
    ENTRANCE = "entrance"
    OTHER = "other"


class Direction(str, Enum):
    STRAIGHT = "straight"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class NotificationType(str, Enum):
    ACADEMIC = "academic"
    GRADE = "grade"
    EMERGENCY = "emergency"
    REMINDER = "reminder"
    MATERIAL = "material"


class NotificationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass(frozen=True)
class ClassSession:
    """One weekly class meeting. Times are zero-padded 24h "HH:MM"."""

    id: str
    subject: str
    professor: str
    room: str
    building: str
    start_time: str
    end_time: str
    day: str
    type: SessionType = SessionType.LECTURE
    color: Optional[str] = None

    def __post_init__(self) -> None:
        parse_hhmm(self.start_time)
        parse_hhmm(self.end_time)
        day = normalize_day(self.day)
        if day is None:
            raise ValueError(f"Unknown weekday for class {self.id}: {self.day!r}")
        # Accept abbreviations but always store the canonical name
        object.__setattr__(self, "day", day)
        object.__setattr__(self, "type", SessionType(self.type))


@dataclass(frozen=True)
class LocationAccessibility:
    wheelchair_accessible: bool = False
    has_elevator: bool = False
    has_braille_signage: bool = False


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    building: str
    floor: int
    type: LocationType = LocationType.OTHER
    room: Optional[str] = None
    accessibility: LocationAccessibility = field(default_factory=LocationAccessibility)

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", LocationType(self.type))
        object.__setattr__(self, "floor", int(self.floor))


@dataclass(frozen=True)
class NavigationStep:
    instruction: str
    distance: int
    direction: Direction = Direction.STRAIGHT
    landmark: Optional[str] = None


@dataclass(frozen=True)
class Route:
    origin: Location
    destination: Location
    distance: int
    estimated_time: int
    steps: List[NavigationStep]


@dataclass
class Notification:
    id: str
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    timestamp: _dt.datetime
    read: bool = False
    action_url: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.type = NotificationType(self.type)
        self.priority = NotificationPriority(self.priority)


@dataclass
class NotificationDraft:
    """A notification before the store assigns it an id."""

    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    timestamp: Optional[_dt.datetime] = None
    read: bool = False
    action_url: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ScannedDocument:
    id: str
    title: str
    content: str
    created_at: _dt.datetime
    tags: List[str] = field(default_factory=list)
    language: str = "es"
    subject: Optional[str] = None
    image_url: Optional[str] = None


@dataclass
class DocumentDraft:
    title: str
    content: str
    tags: List[str] = field(default_factory=list)
    language: str = "es"
    subject: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(frozen=True)
class OcrResult:
    text: str
    confidence: float
    language: str
