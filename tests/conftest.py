"""Pytest fixtures shared by the client tests.

``MockTransport`` stands in for the HTTP layer: it records every request and
answers from a queue of canned responses (or raises a canned error).
"""
import json
from typing import Any, List, Optional

import httpx
import pytest

from kbapi import API


class MockTransport:
    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._responses: List[Any] = []
        self.error: Optional[BaseException] = None

    def respond(self, status_code: int = 200, body: Any = None, *, content: Optional[bytes] = None, headers=None):
        if content is None:
            content = b"" if body is None else json.dumps(body).encode("utf-8")
        self._responses.append((status_code, content, headers or {}))
        return self

    def fail(self, error: BaseException):
        self.error = error
        return self

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)

    async def perform(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        status_code, content, headers = self._responses.pop(0) if self._responses else (200, b"", {})
        return httpx.Response(status_code, content=content, headers=headers, request=request)


class RecordingInstrumentation:
    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def start(self, endpoint):
        self.calls.append(("start", endpoint))
        return endpoint

    def close(self, scope):
        self.calls.append(("close", scope))

    def record_error(self, scope, err):
        self.calls.append(("record_error", err))

    def record_path_part(self, scope, name, value):
        self.calls.append(("record_path_part", name, value))

    def record_request_body(self, scope, endpoint, body):
        self.calls.append(("record_request_body", body))

    def before_request(self, request, endpoint):
        self.calls.append(("before_request", endpoint))

    def after_request(self, request, system, path):
        self.calls.append(("after_request", system, path))

    def names(self) -> List[str]:
        return [c[0] for c in self.calls]


class InstrumentedMockTransport(MockTransport):
    def __init__(self, instrumentation) -> None:
        super().__init__()
        self.instrumentation = instrumentation

    def instrumentation_enabled(self):
        return self.instrumentation


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def api(transport) -> API:
    return API(transport)


@pytest.fixture
def recorder() -> RecordingInstrumentation:
    return RecordingInstrumentation()


@pytest.fixture
def instrumented_api(recorder):
    mock = InstrumentedMockTransport(recorder)
    return API(mock), mock


@pytest.fixture
def make_instrumented_api():
    def factory(instrumentation):
        mock = InstrumentedMockTransport(instrumentation)
        return API(mock), mock
    return factory
