"""Shared consumer/processor/producer scaffolding for CLI commands."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Protocol, TypeVar

from .cli_output import OutputWriter


PayloadT = TypeVar("PayloadT")
ResultT = TypeVar("ResultT")
RequestT = TypeVar("RequestT")
T = TypeVar("T")
R = TypeVar("R")


@dataclass
class ResultEnvelope(Generic[ResultT]):
    status: str
    payload: Optional[ResultT] = None
    diagnostics: Optional[dict[str, Any]] = None

    def ok(self) -> bool:
        return self.status.lower() == "success"

    def unwrap(self) -> ResultT:
        """Return payload or raise ValueError. Use after ok() check."""
        if self.payload is None:
            msg = (self.diagnostics or {}).get("message", "No payload")
            raise ValueError(msg)
        return self.payload

    @property
    def exit_code(self) -> int:
        if self.ok():
            return 0
        return int((self.diagnostics or {}).get("code", 2))


class Consumer(Protocol[PayloadT]):
    def consume(self) -> PayloadT:
        ...


class RequestConsumer(Generic[RequestT], Consumer[RequestT]):
    """Consumer that hands back the request object it was built with."""

    def __init__(self, request: RequestT) -> None:
        self._request = request

    def consume(self) -> RequestT:  # pragma: no cover - trivial
        return self._request


class BaseProducer:
    """Base class for producers: failures are reported, successes delegated.

    Subclasses override `_produce_success()`; output goes through the
    injected `OutputWriter` so the `--output` format is honoured.
    """

    def __init__(self, writer: Optional[OutputWriter] = None) -> None:
        self.writer = writer or OutputWriter()

    def produce(self, result: ResultEnvelope) -> None:
        if not result.ok():
            msg = (result.diagnostics or {}).get("message")
            if msg:
                self.writer.print_error(msg)
            return
        if result.payload is not None:
            self._produce_success(result.unwrap(), result.diagnostics)

    def _produce_success(self, payload: Any, diagnostics: Optional[Dict[str, Any]]) -> None:
        raise NotImplementedError("Subclass must implement _produce_success")


class SafeProcessor(Generic[T, R]):
    """Processor that turns exceptions into error envelopes.

    Subclasses implement `_process_safe()`. Exceptions carrying a `code`
    attribute (the CLIError family) keep that code in the diagnostics.
    """

    def process(self, payload: T) -> ResultEnvelope[R]:
        try:
            result = self._process_safe(payload)
            return ResultEnvelope(status="success", payload=result)
        except Exception as e:
            diagnostics: Dict[str, Any] = {"message": str(e)}
            code = getattr(e, "code", None)
            if isinstance(code, int):
                diagnostics["code"] = int(code)
            return ResultEnvelope(status="error", diagnostics=diagnostics)

    def _process_safe(self, payload: T) -> R:
        raise NotImplementedError("Subclass must implement _process_safe")


def run_pipeline(request: Any, processor: Any, producer: Any) -> int:
    """Process a request, produce its output, return the CLI exit code."""
    envelope = processor.process(RequestConsumer(request).consume())
    producer.produce(envelope)
    return envelope.exit_code
