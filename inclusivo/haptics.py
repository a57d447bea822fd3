"""Vibration feedback presets gated by the accessibility settings."""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Sequence, Union

from . import constants as C
from .settings import AccessibilitySettings

LOG = logging.getLogger(__name__)

Pattern = Union[int, Sequence[int]]


class Vibrator(Protocol):
    def vibrate(self, pattern: Pattern) -> None: ...


class HapticFeedback:
    def __init__(
        self,
        vibrator: Optional[Vibrator],
        settings: Callable[[], AccessibilitySettings],
    ) -> None:
        self._vibrator = vibrator
        self._settings = settings

    @property
    def available(self) -> bool:
        return self._vibrator is not None

    def vibrate(self, pattern: Pattern) -> bool:
        """Run one pattern; False when skipped (no vibrator or vibration disabled)."""
        if self._vibrator is None:
            LOG.debug("No vibrator available; skipping pattern %s", pattern)
            return False
        if not self._settings().vibration_enabled:
            return False
        self._vibrator.vibrate(pattern if isinstance(pattern, int) else list(pattern))
        return True

    def tap(self) -> bool:
        return self.vibrate(C.HAPTIC_TAP)

    def success(self) -> bool:
        return self.vibrate(C.HAPTIC_SUCCESS)

    def error(self) -> bool:
        return self.vibrate(C.HAPTIC_ERROR)

    def long_press(self) -> bool:
        return self.vibrate(C.HAPTIC_LONG_PRESS)

    def confirm(self) -> bool:
        return self.vibrate(C.HAPTIC_CONFIRM)
