"""Kibana client: the API bound to a configured transport."""
from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from core.config import KibanaSettings, get_settings
from kbapi.api import API
from kbapi.exceptions import KibanaError
from kbapi.instrumentation import Instrumentation, Instrumented, OpenTelemetryInstrumentation
from kbapi.transport import Transport

from .transport import HTTPTransport, Measurable, RetryPredicate
from .version import VERSION


class XSRFTransport:
    """Adds the ``kbn-xsrf`` header Kibana requires, then delegates."""

    def __init__(
        self,
        transport: Transport,
        xsrf_header_value: str = "true",
        instrumentation: Optional[Instrumentation] = None,
    ) -> None:
        self.transport = transport
        self.xsrf_header_value = xsrf_header_value
        self._instrumentation = instrumentation

    async def perform(self, request: httpx.Request) -> httpx.Response:
        request.headers["kbn-xsrf"] = self.xsrf_header_value
        return await self.transport.perform(request)

    def instrumentation_enabled(self) -> Optional[Instrumentation]:
        if self._instrumentation is not None:
            return self._instrumentation
        if isinstance(self.transport, Instrumented):
            return self.transport.instrumentation_enabled()
        return None


class Client(API):
    """Kibana API bound to a configured transport.

    ``Client()`` reads :class:`~core.config.KibanaSettings` from the
    environment; pass ``transport`` to use any :class:`~kbapi.transport.Transport`
    (a mock in tests) or ``http_transport`` to swap the httpx transport under
    the default :class:`~kibana.transport.HTTPTransport`.
    """

    def __init__(
        self,
        settings: Optional[KibanaSettings] = None,
        *,
        transport: Optional[Transport] = None,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
        instrumentation: Optional[Instrumentation] = None,
        retry_on_error: Optional[RetryPredicate] = None,
    ) -> None:
        self.settings = settings or get_settings()
        if instrumentation is None and self.settings.tracing_enabled:
            instrumentation = OpenTelemetryInstrumentation(
                capture_body=self.settings.trace_capture_body, version=VERSION
            )
        if transport is None:
            transport = HTTPTransport(
                self.settings,
                transport=http_transport,
                instrumentation=instrumentation,
                retry_on_error=retry_on_error,
            )
        self._transport = transport
        super().__init__(XSRFTransport(transport, self.settings.xsrf_header_value, instrumentation))

    def instrumentation_enabled(self) -> Optional[Instrumentation]:
        return self.transport.instrumentation_enabled()

    def metrics(self) -> Dict[str, Any]:
        if not isinstance(self._transport, Measurable):
            raise KibanaError("transport is missing method metrics()")
        return self._transport.metrics()

    async def aclose(self) -> None:
        close = getattr(self._transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
