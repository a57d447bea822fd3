"""Speech feedback: one voice engine, one audible utterance at a time.

``SpeechController.speak`` returns a ``SpeechHandle`` wrapping a
``concurrent.futures.Future``. The controller keeps its own FIFO of pending
handles and hands the engine a single utterance at a time, so cancelling a
queued handle never disturbs the one being spoken. ``interrupt=True`` and
``stop()`` cancel the active handle and everything queued behind it.

Rate and pitch come from the voice settings provider when ``speak`` is
called, never from a value captured earlier.
"""
from __future__ import annotations

import logging
import sys
from collections import deque
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional, Protocol, TextIO

from .constants import DEFAULT_LOCALE
from .settings import VoiceSettings

LOG = logging.getLogger(__name__)


class SpeechError(RuntimeError):
    """The voice engine reported an error for an utterance."""


@dataclass
class Utterance:
    """One unit of synthesized speech plus the engine callback triple."""

    text: str
    rate: float
    pitch: float
    locale: str
    on_start: Optional[Callable[[], None]] = None
    on_end: Optional[Callable[[], None]] = None
    on_error: Optional[Callable[[str], None]] = None


class VoiceEngine(Protocol):
    def speak(self, utterance: Utterance) -> None: ...
    def cancel_all(self) -> None: ...


class SpeechHandle:
    """Cancellable result of a ``speak`` call."""

    def __init__(self, utterance: Utterance, controller: "SpeechController") -> None:
        self.utterance = utterance
        self.future: "Future[None]" = Future()
        self._controller = controller

    @property
    def text(self) -> str:
        return self.utterance.text

    def done(self) -> bool:
        return self.future.done()

    def cancelled(self) -> bool:
        return self.future.cancelled()

    def cancel(self) -> bool:
        return self._controller.cancel(self)

    def result(self, timeout: Optional[float] = None) -> None:
        """Block until spoken; raises CancelledError or SpeechError."""
        return self.future.result(timeout=timeout)


class SpeechController:
    def __init__(
        self,
        engine: Optional[VoiceEngine],
        voice_settings: Callable[[], VoiceSettings],
        locale: str = DEFAULT_LOCALE,
    ) -> None:
        self._engine = engine
        self._voice_settings = voice_settings
        self.locale = locale
        self._active: Optional[SpeechHandle] = None
        self._queue: Deque[SpeechHandle] = deque()
        self._speaking = False

    @property
    def available(self) -> bool:
        return self._engine is not None

    @property
    def is_speaking(self) -> bool:
        return self._speaking

    @property
    def active(self) -> Optional[SpeechHandle]:
        return self._active

    def pending(self) -> List[SpeechHandle]:
        return list(self._queue)

    def speak(self, text: str, interrupt: bool = False, locale: Optional[str] = None) -> Optional[SpeechHandle]:
        if self._engine is None:
            LOG.warning("Speech synthesis not supported; skipping utterance")
            return None
        if interrupt:
            self._cancel_everything()

        voice = self._voice_settings()
        handle = SpeechHandle(
            Utterance(text=text, rate=voice.speed, pitch=voice.pitch, locale=locale or self.locale),
            self,
        )
        self._queue.append(handle)
        LOG.debug("Queued utterance (%d chars, interrupt=%s)", len(text), interrupt)
        if self._active is None:
            self._advance()
        return handle

    def stop(self) -> None:
        if self._engine is None:
            return
        self._cancel_everything()

    def cancel(self, handle: SpeechHandle) -> bool:
        """Cancel one handle; True if it was still pending or active."""
        if handle.done() or self._engine is None:
            return False
        if handle is self._active:
            self._active = None
            self._speaking = False
            handle.future.cancel()
            self._engine.cancel_all()
            self._advance()
            return True
        try:
            self._queue.remove(handle)
        except ValueError:
            return False
        handle.future.cancel()
        return True

    # -- internals -------------------------------------------------------

    def _cancel_everything(self) -> None:
        handles = ([self._active] if self._active else []) + list(self._queue)
        self._active = None
        self._queue.clear()
        for handle in handles:
            handle.future.cancel()
        self._speaking = False
        if self._engine is not None:
            self._engine.cancel_all()
        if handles:
            LOG.debug("Cancelled %d utterance(s)", len(handles))

    def _advance(self) -> None:
        while self._active is None and self._queue:
            handle = self._queue.popleft()
            self._active = handle
            utterance = handle.utterance
            utterance.on_start = lambda h=handle: self._on_start(h)
            utterance.on_end = lambda h=handle: self._on_end(h)
            utterance.on_error = lambda msg, h=handle: self._on_error(h, msg)
            try:
                self._engine.speak(utterance)  # type: ignore[union-attr]
            except Exception as exc:
                self._on_error(handle, str(exc))

    def _on_start(self, handle: SpeechHandle) -> None:
        if handle is self._active:
            self._speaking = True

    def _on_end(self, handle: SpeechHandle) -> None:
        if handle is not self._active:
            return
        self._active = None
        self._speaking = False
        handle.future.set_result(None)
        self._advance()

    def _on_error(self, handle: SpeechHandle, message: str) -> None:
        if handle is not self._active:
            return
        LOG.warning("Speech engine error: %s", message)
        self._active = None
        self._speaking = False
        handle.future.set_exception(SpeechError(message))
        self._advance()


class ConsoleVoiceEngine:
    """Voice engine that 'speaks' by writing each utterance as a line of text."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout

    def speak(self, utterance: Utterance) -> None:
        if utterance.on_start:
            utterance.on_start()
        try:
            print(
                f"[speech {utterance.locale} rate={utterance.rate:g} pitch={utterance.pitch:g}] {utterance.text}",
                file=self.stream,
            )
        except OSError as exc:
            if utterance.on_error:
                utterance.on_error(str(exc))
            return
        if utterance.on_end:
            utterance.on_end()

    def cancel_all(self) -> None:
        # Utterances complete synchronously; nothing is ever in flight
        return None
