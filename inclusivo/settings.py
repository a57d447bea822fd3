"""User profile and the four accessibility settings groups.

Every group is a frozen dataclass validated in ``__post_init__``. Updates go
through ``merge(patch)``, a shallow merge of a partial mapping that returns a
new, re-validated instance. ``from_dict``/``to_dict`` are the JSON shapes
written by the persisted settings store.
"""
from __future__ import annotations

import datetime as _dt
from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

G = TypeVar("G", bound="SettingsGroupBase")


class SettingsError(ValueError):
    """Raised for unknown keys or out-of-range values in a settings group."""


class InteractionMode(str, Enum):
    VOICE = "voice"
    GESTURES = "gestures"
    BOTH = "both"


def _require_range(name: str, value: Any, low: float, high: float) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SettingsError(f"{name} must be a number, got {value!r}")
    if not (low <= float(value) <= high):
        raise SettingsError(f"{name} must be between {low} and {high}, got {value}")


def _require_bool(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise SettingsError(f"{name} must be true or false, got {value!r}")


class SettingsGroupBase:
    """Shared merge/serialization behaviour for the settings dataclasses."""

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}  # type: ignore[arg-type]

    @classmethod
    def from_dict(cls: Type[G], data: Mapping[str, Any]) -> G:
        """Build from a persisted mapping; unknown keys are rejected."""
        if not isinstance(data, Mapping):
            raise SettingsError(f"{cls.__name__} must be a mapping, got {type(data).__name__}")
        unknown = set(data) - cls.field_names()
        if unknown:
            raise SettingsError(f"Unknown {cls.__name__} keys: {', '.join(sorted(unknown))}")
        return cls(**dict(data))  # type: ignore[call-arg]

    def merge(self: G, patch: Mapping[str, Any]) -> G:
        unknown = set(patch) - self.field_names()
        if unknown:
            raise SettingsError(f"Unknown {type(self).__name__} keys: {', '.join(sorted(unknown))}")
        return replace(self, **dict(patch))  # type: ignore[type-var]

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)  # type: ignore[call-overload]
        for k, v in out.items():
            if isinstance(v, Enum):
                out[k] = v.value
        return out


@dataclass(frozen=True)
class VoiceSettings(SettingsGroupBase):
    speed: float = 1.0
    pitch: float = 1.0
    auto_read: bool = True

    def __post_init__(self) -> None:
        _require_range("speed", self.speed, 0.5, 2.0)
        _require_range("pitch", self.pitch, 0.5, 1.5)
        _require_bool("auto_read", self.auto_read)


@dataclass(frozen=True)
class VisualSettings(SettingsGroupBase):
    high_contrast: bool = False
    font_size: float = 1.0
    animations_enabled: bool = False

    def __post_init__(self) -> None:
        _require_bool("high_contrast", self.high_contrast)
        _require_range("font_size", self.font_size, 1.0, 3.0)
        _require_bool("animations_enabled", self.animations_enabled)


@dataclass(frozen=True)
class AccessibilitySettings(SettingsGroupBase):
    interaction_mode: InteractionMode = InteractionMode.BOTH
    braille_enabled: bool = False
    vibration_enabled: bool = True
    vibration_intensity: int = 2

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "interaction_mode", InteractionMode(self.interaction_mode))
        except ValueError as exc:
            raise SettingsError(f"interaction_mode must be voice, gestures or both, got {self.interaction_mode!r}") from exc
        _require_bool("braille_enabled", self.braille_enabled)
        _require_bool("vibration_enabled", self.vibration_enabled)
        if isinstance(self.vibration_intensity, bool) or self.vibration_intensity not in (1, 2, 3):
            raise SettingsError(f"vibration_intensity must be 1, 2 or 3, got {self.vibration_intensity!r}")


@dataclass(frozen=True)
class NotificationSettings(SettingsGroupBase):
    enabled: bool = True
    academic: bool = True
    grades: bool = True
    emergency: bool = True

    def __post_init__(self) -> None:
        _require_bool("enabled", self.enabled)
        _require_bool("academic", self.academic)
        _require_bool("grades", self.grades)
        # Emergency alerts cannot be switched off
        object.__setattr__(self, "emergency", True)


@dataclass
class UserProfile:
    id: str
    name: str
    email: str
    program: str
    level: str
    created_at: _dt.datetime = field(default_factory=_dt.datetime.now)
    photo_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserProfile":
        if not isinstance(data, Mapping):
            raise SettingsError(f"UserProfile must be a mapping, got {type(data).__name__}")
        created = data.get("created_at")
        try:
            created_at = _dt.datetime.fromisoformat(created) if created else _dt.datetime.now()
            return cls(
                id=str(data["id"]),
                name=str(data["name"]),
                email=str(data["email"]),
                program=str(data["program"]),
                level=str(data["level"]),
                created_at=created_at,
                photo_url=data.get("photo_url"),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise SettingsError(f"Invalid user profile: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        out = asdict(self)
        out["created_at"] = self.created_at.isoformat()
        return out


def default_profile(now: Optional[_dt.datetime] = None) -> UserProfile:
    return UserProfile(
        id="1",
        name="Juan Pérez",
        email="juan.perez@universidad.edu",
        program="Software Engineering",
        level="6th semester",
        created_at=now or _dt.datetime.now(),
    )
