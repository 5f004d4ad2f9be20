import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import SpanKind, StatusCode

from kbapi import NotFoundError, OpenTelemetryInstrumentation
from kbapi.connectors import ConnectorsCreateRequest, ServerLogConnector
from kbapi.spaces import SpacesGetRequest


@pytest.fixture
def exporter():
    return InMemorySpanExporter()


@pytest.fixture
def traced(exporter, make_instrumented_api):
    def factory(capture_body=False):
        provider = TracerProvider()
        provider.add_span_processor(SimpleSpanProcessor(exporter))
        return make_instrumented_api(
            OpenTelemetryInstrumentation(tracer_provider=provider, capture_body=capture_body, version="0.1.0")
        )
    return factory


@pytest.mark.asyncio
async def test_span_per_call(exporter, traced):
    api, mock = traced()
    mock.respond(200, {"id": "ops"})

    await api.spaces.get(SpacesGetRequest(id="ops"))

    (span,) = exporter.get_finished_spans()
    assert span.name == "spaces.get"
    assert span.kind == SpanKind.CLIENT
    assert span.attributes["kibana.path_parts.id"] == "ops"
    assert span.attributes["http.request.method"] == "GET"
    assert span.attributes["db.system"] == "kibana"
    assert span.attributes["url.path"] == "/api/spaces/space/ops"
    assert "kibana.request.body" not in span.attributes


@pytest.mark.asyncio
async def test_span_records_api_error(exporter, traced):
    api, mock = traced()
    mock.respond(404, {"message": "not found"})

    with pytest.raises(NotFoundError):
        await api.spaces.get(SpacesGetRequest(id="missing"))

    (span,) = exporter.get_finished_spans()
    assert span.status.status_code == StatusCode.ERROR
    assert span.events[0].name == "exception"


@pytest.mark.asyncio
async def test_request_body_captured_when_enabled(exporter, traced):
    api, mock = traced(capture_body=True)
    mock.respond(200, {"id": "c", "name": "log", "connector_type_id": ".server-log"})

    await api.connectors.create(ConnectorsCreateRequest(body=ServerLogConnector(name="log")))

    (span,) = exporter.get_finished_spans()
    assert span.name == "connectors.create"
    assert '"name":"log"' in span.attributes["kibana.request.body"]
