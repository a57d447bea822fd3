"""Fake voice engine for speech tests.

Utterances are recorded but never started automatically; tests drive the
callbacks with ``start()``, ``finish()`` and ``fail()``, the way a real
engine would fire them later from its own event loop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from inclusivo.speech import Utterance


@dataclass
class FakeVoiceEngine:
    """Configurable fake engine.

    Example usage:
        engine = FakeVoiceEngine()
        handle = controller.speak("hello")
        engine.start(); engine.finish()
        assert handle.done()

    With ``auto_complete=True`` every utterance starts and ends inside
    ``speak`` like the console engine does.
    """

    auto_complete: bool = False
    spoken: List[Utterance] = field(default_factory=list)
    cancel_calls: int = 0
    current: Optional[Utterance] = None

    def speak(self, utterance: Utterance) -> None:
        self.spoken.append(utterance)
        self.current = utterance
        if self.auto_complete:
            self.start()
            self.finish()

    def cancel_all(self) -> None:
        self.cancel_calls += 1
        self.current = None

    # -- test drivers -----------------------------------------------------

    def start(self, utterance: Optional[Utterance] = None) -> None:
        u = utterance or self.current
        if u is not None and u.on_start:
            u.on_start()

    def finish(self, utterance: Optional[Utterance] = None) -> None:
        u = utterance or self.current
        if u is None:
            return
        if u is self.current:
            self.current = None
        if u.on_end:
            u.on_end()

    def fail(self, message: str = "synthesis-failed", utterance: Optional[Utterance] = None) -> None:
        u = utterance or self.current
        if u is None:
            return
        if u is self.current:
            self.current = None
        if u.on_error:
            u.on_error(message)

    @property
    def texts(self) -> List[str]:
        return [u.text for u in self.spoken]
