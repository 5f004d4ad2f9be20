"""Instrumentation hooks around every Kibana call.

A transport opts in by implementing :class:`Instrumented`; the dispatcher
then opens a scope per call, reports path parts and the request body, and
closes the scope once the response has been handled.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, runtime_checkable

import httpx
from opentelemetry import context as otel_context
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode

from core.logging_config import get_logger

logger = get_logger(__name__)

TRACER_NAME = "kibana-client"


@runtime_checkable
class Instrumentation(Protocol):
    def start(self, endpoint: str) -> Any:
        ...

    def close(self, scope: Any) -> None:
        ...

    def record_error(self, scope: Any, err: BaseException) -> None:
        ...

    def record_path_part(self, scope: Any, name: str, value: str) -> None:
        ...

    def record_request_body(self, scope: Any, endpoint: str, body: Optional[bytes]) -> None:
        ...

    def before_request(self, request: httpx.Request, endpoint: str) -> None:
        ...

    def after_request(self, request: httpx.Request, system: str, path: str) -> None:
        ...


@runtime_checkable
class Instrumented(Protocol):
    """Optional transport capability exposing its instrumentation."""

    def instrumentation_enabled(self) -> Optional[Instrumentation]:
        ...


@dataclass(slots=True)
class _SpanScope:
    span: trace.Span
    token: Any = None


class OpenTelemetryInstrumentation:
    """Client spans named after the endpoint (``spaces.get``, ``fleet.agents.list``...)."""

    def __init__(
        self,
        tracer_provider: Optional[trace.TracerProvider] = None,
        capture_body: bool = False,
        version: str = "",
    ) -> None:
        self.tracer = trace.get_tracer(TRACER_NAME, version or None, tracer_provider=tracer_provider)
        self.capture_body = capture_body

    def start(self, endpoint: str) -> _SpanScope:
        span = self.tracer.start_span(
            endpoint, kind=SpanKind.CLIENT, attributes={"db.operation": endpoint}
        )
        token = otel_context.attach(trace.set_span_in_context(span))
        return _SpanScope(span=span, token=token)

    def close(self, scope: _SpanScope) -> None:
        if scope.token is not None:
            otel_context.detach(scope.token)
            scope.token = None
        scope.span.end()

    def record_error(self, scope: _SpanScope, err: BaseException) -> None:
        if scope.span.is_recording():
            scope.span.record_exception(err)
            scope.span.set_status(Status(StatusCode.ERROR, str(err)))

    def record_path_part(self, scope: _SpanScope, name: str, value: str) -> None:
        if scope.span.is_recording():
            scope.span.set_attribute(f"kibana.path_parts.{name}", value)

    def record_request_body(self, scope: _SpanScope, endpoint: str, body: Optional[bytes]) -> None:
        if not self.capture_body or not body or not scope.span.is_recording():
            return
        scope.span.set_attribute("kibana.request.body", body.decode("utf-8", errors="replace"))

    def before_request(self, request: httpx.Request, endpoint: str) -> None:
        span = trace.get_current_span()
        if span.is_recording():
            span.set_attribute("http.request.method", request.method)

    def after_request(self, request: httpx.Request, system: str, path: str) -> None:
        span = trace.get_current_span()
        if not span.is_recording():
            return
        span.set_attribute("db.system", system)
        span.set_attribute("url.path", path)
        if request.url.host:
            span.set_attribute("url.full", str(request.url))
            span.set_attribute("server.address", request.url.host)
            if request.url.port:
                span.set_attribute("server.port", request.url.port)


@dataclass(slots=True)
class _LogScope:
    endpoint: str
    started: float = field(default_factory=time.perf_counter)
    failed: bool = False


class LoggingInstrumentation:
    """Emit one structured log event per call."""

    def start(self, endpoint: str) -> _LogScope:
        return _LogScope(endpoint=endpoint)

    def close(self, scope: _LogScope) -> None:
        logger.info(
            "kibana.call",
            endpoint=scope.endpoint,
            duration_ms=round((time.perf_counter() - scope.started) * 1000, 2),
            failed=scope.failed,
        )

    def record_error(self, scope: _LogScope, err: BaseException) -> None:
        scope.failed = True
        logger.warning("kibana.call.error", endpoint=scope.endpoint, error=str(err))

    def record_path_part(self, scope: _LogScope, name: str, value: str) -> None:
        return

    def record_request_body(self, scope: _LogScope, endpoint: str, body: Optional[bytes]) -> None:
        return

    def before_request(self, request: httpx.Request, endpoint: str) -> None:
        logger.debug("kibana.request", endpoint=endpoint, method=request.method, path=request.url.path)

    def after_request(self, request: httpx.Request, system: str, path: str) -> None:
        return
