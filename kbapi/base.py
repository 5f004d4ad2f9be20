"""Request dispatch shared by every Kibana endpoint.

Each endpoint method builds its path, query and body, then hands them to
:meth:`BaseAPI.perform`, which runs the common sequence: instrumentation
scope, request build, options, transport call and response decoding.
"""
from __future__ import annotations

import time
from typing import Any, Callable, Dict, Mapping, Optional, Sequence
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .exceptions import (
    RequestValidationError,
    ResponseDecodeError,
    ResponseReadError,
    SerializationError,
    error_for_status,
)
from .instrumentation import Instrumentation, Instrumented
from .ndjson import NDJSONResponse, split_ndjson
from .response import APIResponse
from .serialization import dumps, loads
from .transport import RequestOption, Transport


SuccessRule = Callable[[int], bool]


def only_200(status_code: int) -> bool:
    return status_code == 200


def below_299(status_code: int) -> bool:
    return status_code < 299


_adapters: Dict[Any, TypeAdapter] = {}


def _adapter(result: Any) -> TypeAdapter:
    try:
        adapter = _adapters.get(result)
    except TypeError:
        # unhashable annotation metadata
        return TypeAdapter(result)
    if adapter is None:
        adapter = _adapters[result] = TypeAdapter(result)
    return adapter


def format_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple, set)):
        return ",".join(format_query_value(v) for v in value)
    if isinstance(value, dict):
        return dumps(value).decode("utf-8")
    return str(value)


def build_query(params: Any) -> Dict[str, str]:
    """Flatten a params model or mapping into query string values, skipping unset ones."""
    if params is None:
        return {}
    if isinstance(params, BaseModel):
        params = params.model_dump(mode="json", by_alias=True, exclude_none=True)
    return {k: format_query_value(v) for k, v in params.items() if v is not None}


def require(req: Any, message: str = "request cannot be nil") -> None:
    """Reject a missing request (or required value) before any network call."""
    if req is None or (isinstance(req, (str, bytes)) and not req):
        raise RequestValidationError(message)


class BaseAPI:
    """Holds the transport and runs requests through the dispatch template."""

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def _instrumentation(self) -> Optional[Instrumentation]:
        if isinstance(self.transport, Instrumented):
            return self.transport.instrumentation_enabled()
        return None

    async def perform(
        self,
        endpoint: str,
        method: str,
        path: str,
        *,
        path_params: Optional[Mapping[str, Any]] = None,
        params: Any = None,
        body: Any = None,
        files: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        content_type: Optional[str] = None,
        result: Any = None,
        success: SuccessRule = only_200,
        ndjson: bool = False,
        stream: bool = False,
        options: Sequence[RequestOption] = (),
    ) -> APIResponse:
        instrument = self._instrumentation()
        scope = instrument.start(endpoint) if instrument else None
        try:
            if path_params:
                path = path.format(**{k: quote(str(v), safe="") for k, v in path_params.items()})
                if instrument:
                    for name, value in path_params.items():
                        instrument.record_path_part(scope, name, str(value))
            request = self._build_request(method, path, params, body, files, data, content_type)

            for option in options:
                option(request)

            if instrument:
                instrument.before_request(request, endpoint)
                instrument.record_request_body(scope, endpoint, request.content or None)

            started = time.perf_counter()
            try:
                response = await self.transport.perform(request)
            finally:
                if instrument:
                    instrument.after_request(request, "kibana", path)

            return await self._handle_response(
                response, started, result=result, success=success, ndjson=ndjson, stream=stream
            )
        except Exception as exc:
            if instrument:
                instrument.record_error(scope, exc)
            raise
        finally:
            if instrument:
                instrument.close(scope)

    def _build_request(
        self,
        method: str,
        path: str,
        params: Any,
        body: Any,
        files: Optional[Mapping[str, Any]],
        data: Optional[Mapping[str, Any]],
        content_type: Optional[str] = None,
    ) -> httpx.Request:
        query = build_query(params)
        headers = {}
        content = None
        if files is not None or data is not None:
            form = {k: format_query_value(v) for k, v in (data or {}).items() if v is not None}
            try:
                request = httpx.Request(method, path, params=query, files=files, data=form or None)
                request.read()
            except (TypeError, ValueError) as e:
                raise SerializationError(f"failed to encode multipart body: {e}") from e
            return request
        if isinstance(body, (bytes, bytearray)):
            content = bytes(body)
            headers["Content-Type"] = content_type or "application/octet-stream"
        elif body is not None:
            content = dumps(body)
            headers["Content-Type"] = content_type or "application/json"
        return httpx.Request(method, path, params=query, headers=headers, content=content)

    async def _handle_response(
        self,
        response: httpx.Response,
        started: float,
        *,
        result: Any,
        success: SuccessRule,
        ndjson: bool,
        stream: bool,
    ) -> APIResponse:
        response_class = NDJSONResponse if ndjson else APIResponse
        api_response = response_class(
            status_code=response.status_code,
            headers=dict(response.headers),
            request_id=response.headers.get("x-request-id"),
        )
        if stream and success(response.status_code):
            api_response.stream = response
            api_response.elapsed_ms = (time.perf_counter() - started) * 1000
            return api_response

        try:
            raw = await response.aread()
        except httpx.HTTPError as e:
            api_response.elapsed_ms = (time.perf_counter() - started) * 1000
            raise ResponseReadError(f"failed to read response body: {e}", api_response) from e
        finally:
            await response.aclose()
        api_response.raw_body = raw
        api_response.elapsed_ms = (time.perf_counter() - started) * 1000

        if not success(response.status_code):
            try:
                api_response.error = loads(raw)
            except ValueError:
                api_response.error = raw.decode("utf-8", errors="replace")
            raise error_for_status(response.status_code, api_response.error, api_response)

        if ndjson:
            api_response.body = split_ndjson(raw)
            return api_response
        if result is bytes:
            api_response.body = raw
            return api_response
        if not raw.strip():
            return api_response
        try:
            payload = loads(raw)
            if payload is None:
                # JSON null decodes like an empty body
                return api_response
            api_response.body = payload if result is None else _adapter(result).validate_python(payload)
        except (ValueError, ValidationError) as e:
            raise ResponseDecodeError(f"failed to decode response body: {e}", api_response) from e
        return api_response


class Namespace:
    """Group of endpoint methods sharing one API."""

    def __init__(self, api: BaseAPI) -> None:
        self._api = api

