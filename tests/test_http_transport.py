import base64

import httpx
import pytest

from core.config import KibanaSettings
from kbapi import KibanaError, ServerError
from kbapi.spaces import SpacesGetRequest
from kibana import Client, HTTPTransport
from kibana.transport import USER_AGENT


def _settings(**overrides):
    values = {"url": ["http://kibana.local:5601"], "max_retries": 2}
    values.update(overrides)
    return KibanaSettings(**values)


class Recorder:
    def __init__(self, *responses):
        self.requests = []
        self.responses = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.responses.pop(0) if self.responses else httpx.Response(200, json={})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.mark.asyncio
async def test_base_path_and_default_headers():
    handler = Recorder(httpx.Response(200, json={"name": "kibana"}))
    settings = _settings(url=["https://kibana.local/kibana/"], api_key="c2VjcmV0", headers={"X-Team": "ops"})

    async with Client(settings, http_transport=httpx.MockTransport(handler)) as client:
        resp = await client.status.get()

    request = handler.requests[0]
    assert str(request.url) == "https://kibana.local/kibana/api/status"
    assert request.headers["Authorization"] == "ApiKey c2VjcmV0"
    assert request.headers["User-Agent"] == USER_AGENT
    assert request.headers["kbn-xsrf"] == "true"
    assert request.headers["X-Team"] == "ops"
    assert resp.body.name == "kibana"


@pytest.mark.asyncio
async def test_basic_auth_and_query_kept():
    handler = Recorder(httpx.Response(200, json=[]))
    settings = _settings(username="elastic", password="changeme", xsrf_header_value="reporting")

    async with Client(settings, http_transport=httpx.MockTransport(handler)) as client:
        from kbapi.spaces import SpacesGetAllParams, SpacesGetAllRequest

        await client.spaces.get_all(SpacesGetAllRequest(params=SpacesGetAllParams(purpose="any")))

    request = handler.requests[0]
    token = base64.b64encode(b"elastic:changeme").decode("ascii")
    assert request.headers["Authorization"] == f"Basic {token}"
    assert request.headers["kbn-xsrf"] == "reporting"
    assert request.url.path == "/api/spaces/space"
    assert request.url.params["purpose"] == "any"


@pytest.mark.asyncio
async def test_explicit_header_wins_over_default():
    from kbapi import with_header

    handler = Recorder(httpx.Response(200, json={}))
    async with Client(_settings(api_key="k"), http_transport=httpx.MockTransport(handler)) as client:
        await client.status.get(None, with_header("Authorization", "Bearer other"))

    assert handler.requests[0].headers["Authorization"] == "Bearer other"


@pytest.mark.asyncio
async def test_retries_on_configured_status():
    handler = Recorder(httpx.Response(503, text="unavailable"), httpx.Response(200, json={"id": "ops"}))

    async with Client(_settings(enable_metrics=True), http_transport=httpx.MockTransport(handler)) as client:
        resp = await client.spaces.get(SpacesGetRequest(id="ops"))
        metrics = client.metrics()

    assert resp.body.id == "ops"
    assert len(handler.requests) == 2
    assert all(r.url.path == "/api/spaces/space/ops" for r in handler.requests)
    assert metrics["requests"] == 2
    assert metrics["failures"] == 0
    assert metrics["responses"] == {503: 1, 200: 1}


@pytest.mark.asyncio
async def test_retry_exhaustion_returns_last_response():
    handler = Recorder(*[httpx.Response(502, text="bad gateway") for _ in range(3)])

    async with Client(_settings(max_retries=2), http_transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ServerError) as exc_info:
            await client.spaces.get(SpacesGetRequest(id="ops"))

    assert exc_info.value.status_code == 502
    assert exc_info.value.error == "bad gateway"
    assert len(handler.requests) == 3


@pytest.mark.asyncio
async def test_connection_errors_are_retried():
    handler = Recorder(httpx.ConnectError("refused"), httpx.Response(200, json={"id": "ops"}))

    async with Client(_settings(enable_metrics=True), http_transport=httpx.MockTransport(handler)) as client:
        resp = await client.spaces.get(SpacesGetRequest(id="ops"))
        metrics = client.metrics()

    assert resp.status_code == 200
    assert metrics["failures"] == 1


@pytest.mark.asyncio
async def test_disable_retry_sends_once():
    handler = Recorder(httpx.ConnectError("refused"))

    async with Client(_settings(disable_retry=True), http_transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(httpx.ConnectError):
            await client.spaces.get(SpacesGetRequest(id="ops"))

    assert len(handler.requests) == 1


@pytest.mark.asyncio
async def test_round_robin_over_urls():
    handler = Recorder()
    settings = _settings(url=["http://kb1:5601", "http://kb2:5601"])

    async with Client(settings, http_transport=httpx.MockTransport(handler)) as client:
        for _ in range(3):
            await client.status.get()

    assert [r.url.host for r in handler.requests] == ["kb1", "kb2", "kb1"]


@pytest.mark.asyncio
async def test_metrics_disabled_reports_zero():
    transport = HTTPTransport(_settings(), transport=httpx.MockTransport(Recorder()))
    assert transport.metrics() == {"requests": 0, "failures": 0, "responses": {}}
    assert transport.registry is None
    await transport.aclose()


@pytest.mark.asyncio
async def test_metrics_require_measurable_transport(transport):
    client = Client(_settings(), transport=transport)
    with pytest.raises(KibanaError, match="missing method metrics"):
        client.metrics()


@pytest.mark.asyncio
async def test_client_with_custom_transport_adds_xsrf(transport):
    client = Client(_settings(), transport=transport)
    transport.respond(200, {"id": "ops"})
    await client.spaces.get(SpacesGetRequest(id="ops"))
    assert transport.last.headers["kbn-xsrf"] == "true"
    assert client.instrumentation_enabled() is None


@pytest.mark.asyncio
async def test_retry_on_error_predicate_can_refuse():
    handler = Recorder(httpx.ConnectError("refused"), httpx.Response(200, json={"id": "ops"}))
    seen = []

    def never(request, exc):
        seen.append((request.method, type(exc)))
        return False

    async with Client(_settings(), http_transport=httpx.MockTransport(handler), retry_on_error=never) as client:
        with pytest.raises(httpx.ConnectError):
            await client.spaces.get(SpacesGetRequest(id="ops"))

    assert len(handler.requests) == 1
    assert seen == [("GET", httpx.ConnectError)]


@pytest.mark.asyncio
async def test_retry_on_error_predicate_does_not_affect_status_retries():
    handler = Recorder(
        httpx.Response(503, json={"error": "busy"}),
        httpx.ConnectError("refused"),
        httpx.Response(200, json={"id": "ops"}),
    )

    def only_connect_errors(request, exc):
        return isinstance(exc, httpx.ConnectError)

    async with Client(
        _settings(), http_transport=httpx.MockTransport(handler), retry_on_error=only_connect_errors
    ) as client:
        resp = await client.spaces.get(SpacesGetRequest(id="ops"))

    assert resp.body.id == "ops"
    assert len(handler.requests) == 3
