"""Wire the services together once per process."""
from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .catalog import load_documents, load_locations, load_notifications, load_roster
from .config import AppConfig
from .documents import DocumentLibrary, OcrService
from .haptics import HapticFeedback, Vibrator
from .navigation import NavigationRouter
from .notifications import NotificationStore
from .presentation import PresentationState
from .schedule import ScheduleEngine
from .speech import ConsoleVoiceEngine, SpeechController, VoiceEngine
from .state import AccessibilityStateStore
from .storage import JsonFileKeyValueStore, KeyValueStore, PersistedSettings

LOG = logging.getLogger(__name__)


@dataclass
class App:
    config: AppConfig
    state: AccessibilityStateStore
    schedule: ScheduleEngine
    router: NavigationRouter
    notifications: NotificationStore
    documents: DocumentLibrary
    ocr: OcrService
    haptics: HapticFeedback

    @property
    def speech(self) -> SpeechController:
        return self.state.speech

    @property
    def presentation(self) -> PresentationState:
        return self.state.presentation


def build_app(
    config: AppConfig,
    store: Optional[KeyValueStore] = None,
    clock: Optional[Callable[[], _dt.datetime]] = None,
    engine: Optional[VoiceEngine] = None,
    vibrator: Optional[Vibrator] = None,
) -> App:
    """Build every service from config; arguments override the real backends."""
    clock = clock or _dt.datetime.now
    now = clock()
    if store is None:
        store = JsonFileKeyValueStore(config.settings_dir)
    if engine is None and config.speech:
        engine = ConsoleVoiceEngine()

    state = AccessibilityStateStore(PersistedSettings(store), engine=engine, locale=config.locale)
    app = App(
        config=config,
        state=state,
        schedule=ScheduleEngine(load_roster(config.roster), clock=clock),
        router=NavigationRouter(load_locations(config.locations)),
        notifications=NotificationStore(load_notifications(config.notifications, now=now), clock=clock),
        documents=DocumentLibrary(load_documents(config.documents, now=now), clock=clock),
        ocr=OcrService(delay=config.ocr_delay_seconds),
        haptics=HapticFeedback(vibrator, lambda: state.accessibility_settings),
    )
    LOG.debug(
        "App ready: %d classes, %d locations, %d notifications",
        len(app.schedule.sessions),
        len(app.router.all_locations()),
        len(app.notifications.all()),
    )
    return app
