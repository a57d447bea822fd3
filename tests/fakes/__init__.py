"""Shared fake/mock objects for testing.

Centralized location for fakes used across test suites.

Modules:
    speech  - FakeVoiceEngine that records utterances and fires callbacks on demand
    haptics - FakeVibrator recording vibration patterns
    clock   - FrozenClock, a settable replacement for datetime.now
"""

from __future__ import annotations

from tests.fakes.clock import FrozenClock
from tests.fakes.haptics import FakeVibrator
from tests.fakes.speech import FakeVoiceEngine

__all__ = [
    "FakeVoiceEngine",
    "FakeVibrator",
    "FrozenClock",
]
