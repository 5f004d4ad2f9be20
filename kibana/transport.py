"""Default HTTP transport: base URLs, auth, retries, metrics and debug logging."""
from __future__ import annotations

import base64
import logging
import platform
import ssl
import sys
import time
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

import httpx
from prometheus_client import CollectorRegistry, Counter, Histogram
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_none,
)

from core.config import KibanaSettings
from core.logging_config import get_logger
from kbapi.instrumentation import Instrumentation

from .version import VERSION

logger = get_logger(__name__)

USER_AGENT = "kibana-client-python/{} ({}; Python {})".format(
    VERSION, platform.system() or sys.platform, platform.python_version()
)

RetryPredicate = Callable[[httpx.Request, BaseException], bool]


@runtime_checkable
class Measurable(Protocol):
    def metrics(self) -> Dict[str, Any]:
        ...


class RetryableStatusError(Exception):
    """A response status listed in ``retry_on_status``; triggers another attempt."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"retryable status {status_code}")
        self.status_code = status_code


class _Metrics:
    def __init__(self) -> None:
        # per-transport registry so several clients never collide
        self.registry = CollectorRegistry()
        self.requests = Counter(
            "kibana_client_requests", "Requests sent to Kibana", registry=self.registry
        )
        self.failures = Counter(
            "kibana_client_failures", "Requests that failed at the transport level", registry=self.registry
        )
        self.responses = Counter(
            "kibana_client_responses", "Responses by status code", ["status"], registry=self.registry
        )
        self.latency = Histogram(
            "kibana_client_request_duration_ms", "Round trip latency ms",
            buckets=(5, 10, 50, 100, 500, 1000, 5000, 30000), registry=self.registry,
        )

    def snapshot(self) -> Dict[str, Any]:
        responses: Dict[int, int] = {}
        for metric in self.responses.collect():
            for sample in metric.samples:
                if sample.name.endswith("_total"):
                    responses[int(sample.labels["status"])] = int(sample.value)
        return {
            "requests": int(self.registry.get_sample_value("kibana_client_requests_total") or 0),
            "failures": int(self.registry.get_sample_value("kibana_client_failures_total") or 0),
            "responses": responses,
        }


def _ssl_context(settings: KibanaSettings, ca_cert: Optional[bytes]) -> Any:
    if not settings.verify_certs:
        return False
    if ca_cert is None and settings.ca_cert_path:
        with open(settings.ca_cert_path, "rb") as fh:
            ca_cert = fh.read()
    if ca_cert is None:
        return True
    ctx = ssl.create_default_context()
    ctx.load_verify_locations(cadata=ca_cert.decode("ascii"))
    return ctx


def _auth_header(settings: KibanaSettings) -> Optional[str]:
    if settings.api_key:
        return f"ApiKey {settings.api_key}"
    if settings.username:
        token = base64.b64encode(f"{settings.username}:{settings.password or ''}".encode("utf-8"))
        return "Basic " + token.decode("ascii")
    return None


class HTTPTransport:
    """Sends relative requests to one of the configured Kibana URLs.

    URLs are picked round-robin and their path prefix is kept, so
    ``https://host/kibana`` plus ``/api/status`` reaches ``/kibana/api/status``.

    Transport errors are retried by default. ``retry_on_error`` replaces that
    rule with a predicate called with the request and the raised exception.
    """

    def __init__(
        self,
        settings: KibanaSettings,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        client: Optional[httpx.AsyncClient] = None,
        instrumentation: Optional[Instrumentation] = None,
        ca_cert: Optional[bytes] = None,
        retry_on_error: Optional[RetryPredicate] = None,
    ) -> None:
        self.settings = settings
        self.retry_on_error = retry_on_error
        self.urls: List[httpx.URL] = [httpx.URL(u.rstrip("/")) for u in settings.url]
        self._next = 0
        self._instrumentation = instrumentation
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(settings.timeout_seconds),
            verify=_ssl_context(settings, ca_cert),
        )
        self._headers: Dict[str, str] = {"User-Agent": USER_AGENT, **settings.headers}
        auth = _auth_header(settings)
        if auth:
            self._headers["Authorization"] = auth
        self._retry_on_status = frozenset(settings.retry_on_status)
        self._metrics = _Metrics() if settings.enable_metrics else None

    def instrumentation_enabled(self) -> Optional[Instrumentation]:
        return self._instrumentation

    def metrics(self) -> Dict[str, Any]:
        if self._metrics is None:
            return {"requests": 0, "failures": 0, "responses": {}}
        return self._metrics.snapshot()

    @property
    def registry(self) -> Optional[CollectorRegistry]:
        return self._metrics.registry if self._metrics else None

    def _pick_url(self) -> httpx.URL:
        url = self.urls[self._next % len(self.urls)]
        self._next += 1
        return url

    def _prepare(self, request: httpx.Request, relative: bytes) -> None:
        base = self._pick_url()
        raw_path = base.raw_path.rstrip(b"/") + relative
        request.url = base.copy_with(raw_path=raw_path)
        request.headers["Host"] = request.url.netloc.decode("ascii")
        for name, value in self._headers.items():
            if name not in request.headers:
                request.headers[name] = value

    async def _send_once(self, request: httpx.Request, relative: bytes) -> httpx.Response:
        self._prepare(request, relative)
        started = time.perf_counter()
        if self._metrics:
            self._metrics.requests.inc()
        try:
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as exc:
            if self._metrics:
                self._metrics.failures.inc()
            if self.settings.enable_debug_logger:
                logger.debug("kibana.http.error", method=request.method, url=str(request.url), error=str(exc))
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        if self._metrics:
            self._metrics.responses.labels(status=str(response.status_code)).inc()
            self._metrics.latency.observe(elapsed_ms)
        if self.settings.enable_debug_logger:
            logger.debug(
                "kibana.http",
                method=request.method,
                url=str(request.url),
                status_code=response.status_code,
                elapsed_ms=round(elapsed_ms, 2),
            )
        return response

    def _should_retry_error(self, request: httpx.Request, exc: BaseException) -> bool:
        if self.retry_on_error is not None:
            return self.retry_on_error(request, exc)
        return isinstance(exc, httpx.TransportError)

    def _retrying(self, request: httpx.Request) -> AsyncRetrying:
        backoff = self.settings.retry_backoff_seconds
        return AsyncRetrying(
            reraise=True,
            stop=stop_after_attempt(self.settings.max_retries + 1),
            wait=wait_exponential(multiplier=backoff, min=backoff, max=backoff * 8) if backoff else wait_none(),
            retry=retry_if_exception_type(RetryableStatusError)
            | retry_if_exception(lambda exc: self._should_retry_error(request, exc)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )

    async def perform(self, request: httpx.Request) -> httpx.Response:
        # path and query as built by the dispatcher; each attempt may pick another url
        relative = request.url.raw_path
        if self.settings.disable_retry or self.settings.max_retries <= 0:
            return await self._send_once(request, relative)

        async for attempt in self._retrying(request):
            with attempt:
                response = await self._send_once(request, relative)
                if (
                    response.status_code in self._retry_on_status
                    and attempt.retry_state.attempt_number <= self.settings.max_retries
                ):
                    await response.aclose()
                    raise RetryableStatusError(response.status_code)
                return response

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
