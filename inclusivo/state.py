"""Process-wide accessibility state: profile, settings groups and auth flag.

``AccessibilityStateStore`` is the single owner of the user's preferences.
Every update is merged, persisted synchronously and then broadcast to the
subscribed observers as a ``SettingsChange``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional

from .constants import DEFAULT_LOCALE
from .presentation import PresentationState
from .settings import (
    AccessibilitySettings,
    NotificationSettings,
    UserProfile,
    VisualSettings,
    VoiceSettings,
    default_profile,
)
from .speech import SpeechController, SpeechHandle, VoiceEngine
from .storage import PersistedSettings

LOG = logging.getLogger(__name__)


class SettingsGroup(str, Enum):
    PROFILE = "profile"
    VOICE = "voice"
    VISUAL = "visual"
    ACCESSIBILITY = "accessibility"
    NOTIFICATIONS = "notifications"
    AUTH = "auth"


@dataclass(frozen=True)
class SettingsChange:
    group: SettingsGroup
    value: Any


Observer = Callable[[SettingsChange], None]


class AccessibilityStateStore:
    def __init__(
        self,
        persisted: PersistedSettings,
        presentation: Optional[PresentationState] = None,
        engine: Optional[VoiceEngine] = None,
        locale: str = DEFAULT_LOCALE,
    ) -> None:
        self._persisted = persisted
        self.presentation = presentation or PresentationState()
        self._observers: List[Observer] = []

        profile = persisted.load_profile()
        if profile is None:
            profile = default_profile()
            persisted.save_profile(profile)
            LOG.info("Created default profile for %s", profile.email)
        self._user: Optional[UserProfile] = profile
        self._voice = persisted.load_voice()
        self._visual = persisted.load_visual()
        self._accessibility = persisted.load_accessibility()
        self._notifications = persisted.load_notifications()
        self._authenticated = persisted.load_auth()

        self.presentation.apply_visual_settings(self._visual)
        self.speech = SpeechController(engine, lambda: self._voice, locale=locale)

    # -- read access -----------------------------------------------------

    @property
    def user(self) -> Optional[UserProfile]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    @property
    def voice_settings(self) -> VoiceSettings:
        return self._voice

    @property
    def visual_settings(self) -> VisualSettings:
        return self._visual

    @property
    def accessibility_settings(self) -> AccessibilitySettings:
        return self._accessibility

    @property
    def notification_settings(self) -> NotificationSettings:
        return self._notifications

    # -- observers -------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; the returned callable unsubscribes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _broadcast(self, group: SettingsGroup, value: Any) -> None:
        change = SettingsChange(group, value)
        for observer in list(self._observers):
            try:
                observer(change)
            except Exception:
                LOG.exception("Settings observer failed for %s change", group.value)

    # -- updates ---------------------------------------------------------

    def update_voice_settings(self, patch: Mapping[str, Any]) -> VoiceSettings:
        self._voice = self._voice.merge(patch)
        self._persisted.save_voice(self._voice)
        self._broadcast(SettingsGroup.VOICE, self._voice)
        return self._voice

    def update_visual_settings(self, patch: Mapping[str, Any]) -> VisualSettings:
        self._visual = self._visual.merge(patch)
        self._persisted.save_visual(self._visual)
        self.presentation.apply_visual_settings(self._visual)
        self._broadcast(SettingsGroup.VISUAL, self._visual)
        return self._visual

    def update_accessibility_settings(self, patch: Mapping[str, Any]) -> AccessibilitySettings:
        self._accessibility = self._accessibility.merge(patch)
        self._persisted.save_accessibility(self._accessibility)
        self._broadcast(SettingsGroup.ACCESSIBILITY, self._accessibility)
        return self._accessibility

    def update_notification_settings(self, patch: Mapping[str, Any]) -> NotificationSettings:
        self._notifications = self._notifications.merge(patch)
        self._persisted.save_notifications(self._notifications)
        self._broadcast(SettingsGroup.NOTIFICATIONS, self._notifications)
        return self._notifications

    def set_user(self, profile: Optional[UserProfile]) -> None:
        """Replace the profile; None only clears the in-memory copy."""
        self._user = profile
        if profile is not None:
            self._persisted.save_profile(profile)
        self._broadcast(SettingsGroup.PROFILE, profile)

    def set_authenticated(self, flag: bool) -> None:
        self._authenticated = bool(flag)
        self._persisted.save_auth(self._authenticated)
        self._broadcast(SettingsGroup.AUTH, self._authenticated)

    # -- speech ----------------------------------------------------------

    def speak(self, text: str, interrupt: bool = False) -> Optional[SpeechHandle]:
        return self.speech.speak(text, interrupt=interrupt)

    def stop_speaking(self) -> None:
        self.speech.stop()

    @property
    def is_speaking(self) -> bool:
        return self.speech.is_speaking
