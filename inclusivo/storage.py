"""Persisted settings store.

A tiny key-value layer (string keys, JSON text values) plus a typed
``PersistedSettings`` facade that loads and saves the profile, the four
settings groups and the auth flag.

Writes are immediate and synchronous. Entries that are missing fall back to
defaults; entries that are malformed JSON or fail validation are discarded,
logged and overwritten with the default.
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Protocol, Type, TypeVar, Union

from . import constants as C
from .settings import (
    AccessibilitySettings,
    NotificationSettings,
    SettingsError,
    SettingsGroupBase,
    UserProfile,
    VisualSettings,
    VoiceSettings,
)

LOG = logging.getLogger(__name__)

G = TypeVar("G", bound=SettingsGroupBase)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(Protocol):
    """String-to-string persistence, like a browser's localStorage."""

    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Process-local store for tests and ephemeral runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)


class JsonFileKeyValueStore:
    """One ``<key>.json`` file per entry under a directory."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(os.path.expanduser(str(directory)))

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid settings key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        os.replace(tmp, path)

    def remove(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


class PersistedSettings:
    """Typed load/save of each persisted entry over a KeyValueStore."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    # -- generic ---------------------------------------------------------

    def _read_json(self, key: str) -> Any:
        """Decoded JSON for key, None if absent; raises ValueError when malformed."""
        raw = self.store.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def _write_json(self, key: str, value: Any) -> None:
        self.store.set(key, json.dumps(value, ensure_ascii=False))
        LOG.debug("Persisted %s", key)

    def _load(self, key: str, parse: Callable[[Any], Any], default: Callable[[], Any]) -> Any:
        try:
            data = self._read_json(key)
            if data is None:
                return default()
            return parse(data)
        except (ValueError, SettingsError) as exc:
            # json.JSONDecodeError and SettingsError are both ValueErrors
            LOG.warning("Discarding malformed %s entry (%s); resetting to defaults", key, exc)
            value = default()
            if value is None:
                self.store.remove(key)
            else:
                self._write_json(key, value.to_dict() if hasattr(value, "to_dict") else value)
            return value

    def _load_group(self, key: str, cls: Type[G]) -> G:
        return self._load(key, cls.from_dict, cls)

    # -- profile ---------------------------------------------------------

    def load_profile(self) -> Optional[UserProfile]:
        return self._load(C.KEY_PROFILE, UserProfile.from_dict, lambda: None)

    def save_profile(self, profile: UserProfile) -> None:
        self._write_json(C.KEY_PROFILE, profile.to_dict())

    # -- settings groups -------------------------------------------------

    def load_voice(self) -> VoiceSettings:
        return self._load_group(C.KEY_VOICE, VoiceSettings)

    def save_voice(self, value: VoiceSettings) -> None:
        self._write_json(C.KEY_VOICE, value.to_dict())

    def load_visual(self) -> VisualSettings:
        return self._load_group(C.KEY_VISUAL, VisualSettings)

    def save_visual(self, value: VisualSettings) -> None:
        self._write_json(C.KEY_VISUAL, value.to_dict())

    def load_accessibility(self) -> AccessibilitySettings:
        return self._load_group(C.KEY_ACCESSIBILITY, AccessibilitySettings)

    def save_accessibility(self, value: AccessibilitySettings) -> None:
        self._write_json(C.KEY_ACCESSIBILITY, value.to_dict())

    def load_notifications(self) -> NotificationSettings:
        return self._load_group(C.KEY_NOTIFICATIONS, NotificationSettings)

    def save_notifications(self, value: NotificationSettings) -> None:
        self._write_json(C.KEY_NOTIFICATIONS, value.to_dict())

    # -- auth flag -------------------------------------------------------

    def load_auth(self) -> bool:
        def parse(data: Any) -> bool:
            if not isinstance(data, bool):
                raise SettingsError(f"auth flag must be true or false, got {data!r}")
            return data

        return self._load(C.KEY_AUTH, parse, lambda: False)

    def save_auth(self, flag: bool) -> None:
        self._write_json(C.KEY_AUTH, bool(flag))
