"""Scanned document library and the OCR stub."""
from __future__ import annotations

import datetime as _dt
import logging
import threading
import uuid
from concurrent.futures import Future
from dataclasses import asdict, replace
from typing import Any, Callable, Iterable, List, Mapping, Optional

from . import constants as C
from .models import DocumentDraft, OcrResult, ScannedDocument
from .speech import SpeechController, SpeechHandle

LOG = logging.getLogger(__name__)

Clock = Callable[[], _dt.datetime]

_IMMUTABLE_FIELDS = {"id", "created_at"}


def document_locale(language: str) -> str:
    return C.DOCUMENT_LOCALES.get(language, C.DEFAULT_LOCALE)


class DocumentLibrary:
    def __init__(
        self,
        documents: Iterable[ScannedDocument] = (),
        clock: Optional[Clock] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._docs: List[ScannedDocument] = list(documents)
        self._clock: Clock = clock or _dt.datetime.now
        self._new_id = id_factory or (lambda: uuid.uuid4().hex[:12])

    def all(self) -> List[ScannedDocument]:
        return sorted(self._docs, key=lambda d: d.created_at, reverse=True)

    def get(self, document_id: str) -> Optional[ScannedDocument]:
        for doc in self._docs:
            if doc.id == document_id:
                return doc
        return None

    def search(self, query: str) -> List[ScannedDocument]:
        needle = (query or "").lower()
        return [
            doc
            for doc in self.all()
            if needle in doc.title.lower()
            or needle in doc.content.lower()
            or any(needle in tag.lower() for tag in doc.tags)
        ]

    def save(self, draft: DocumentDraft) -> ScannedDocument:
        existing = {d.id for d in self._docs}
        new_id = self._new_id()
        while new_id in existing:
            new_id = self._new_id()
        doc = ScannedDocument(id=new_id, created_at=self._clock(), **asdict(draft))
        self._docs.insert(0, doc)
        LOG.debug("Saved document %s (%s)", doc.id, doc.title)
        return doc

    def update(self, document_id: str, patch: Mapping[str, Any]) -> Optional[ScannedDocument]:
        doc = self.get(document_id)
        if doc is None:
            return None
        changes = {k: v for k, v in patch.items() if k not in _IMMUTABLE_FIELDS}
        updated = replace(doc, **changes)
        self._docs = [updated if d.id == document_id else d for d in self._docs]
        return updated

    def delete(self, document_id: str) -> None:
        self._docs = [d for d in self._docs if d.id != document_id]

    def read_aloud(self, document_id: str, speech: SpeechController) -> Optional[SpeechHandle]:
        """Speak the document content, interrupting whatever is playing."""
        doc = self.get(document_id)
        if doc is None:
            return None
        return speech.speak(doc.content, interrupt=True, locale=document_locale(doc.language))

    def stop_reading(self, speech: SpeechController) -> None:
        speech.stop()


class OcrBusyError(RuntimeError):
    """An OCR request is already pending."""


class OcrCancelledError(RuntimeError):
    """The pending OCR request was dropped."""


class OcrService:
    """Simulated OCR: resolves a fixed result after a delay on a single timer."""

    def __init__(self, delay: float = C.OCR_DELAY_SECONDS) -> None:
        self.delay = delay
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._future: Optional["Future[OcrResult]"] = None

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._future is not None and not self._future.done()

    def perform(self, image_data: bytes) -> "Future[OcrResult]":
        with self._lock:
            if self._future is not None and not self._future.done():
                raise OcrBusyError("An OCR request is already in progress")
            future: "Future[OcrResult]" = Future()
            future.set_running_or_notify_cancel()
            timer = threading.Timer(self.delay, self._complete, args=(future,))
            timer.daemon = True
            self._future, self._timer = future, timer
        LOG.debug("OCR started on %d bytes (delay %.1fs)", len(image_data or b""), self.delay)
        timer.start()
        return future

    def _complete(self, future: "Future[OcrResult]") -> None:
        with self._lock:
            if future is not self._future or future.done():
                return
            self._future = self._timer = None
        future.set_result(OcrResult(C.OCR_STUB_TEXT, C.OCR_STUB_CONFIDENCE, C.OCR_STUB_LANGUAGE))

    def cancel(self) -> bool:
        """Drop the pending request; its future fails with OcrCancelledError."""
        with self._lock:
            future, timer = self._future, self._timer
            self._future = self._timer = None
        if future is None or future.done():
            return False
        if timer is not None:
            timer.cancel()
        future.set_exception(OcrCancelledError("OCR request cancelled"))
        return True

