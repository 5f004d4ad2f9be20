import json

import pytest

from kbapi import NDJSONResponse
from kbapi.models import SavedObjectRef
from kbapi.ndjson import clean_line, split_ndjson
from kbapi.saved_objects import (
    ExportBody,
    ImportParams,
    RetryOperation,
    SavedObjectExportRequest,
    SavedObjectImportRequest,
    SavedObjectResolveImportsRequest,
)

EXPORT = (
    b'{"id":"dash-1","type":"dashboard","attributes":{"title":"Ops"}}\n'
    b'\n'
    b',{"id":"vis-1","type":"visualization","attributes":{}}\n'
    b'{"exportedCount":2,"missingRefCount":0,"missingReferences":[]}\n'
)


def test_clean_line_strips_leading_comma():
    assert clean_line(b'  ,{"a":1}\r ') == b'{"a":1}'


def test_split_skips_blank_lines():
    records = split_ndjson(EXPORT)
    assert len(records) == 3
    assert records[1] == b'{"id":"vis-1","type":"visualization","attributes":{}}'


@pytest.mark.asyncio
async def test_export_returns_records(api, transport):
    transport.respond(200, content=EXPORT)

    resp = await api.saved_objects.export(
        SavedObjectExportRequest(body=ExportBody(objects=[SavedObjectRef(id="dash-1", type="dashboard")]))
    )

    assert isinstance(resp, NDJSONResponse)
    assert transport.last.url.path == "/api/saved_objects/_export"
    assert transport.last.headers["Content-Type"] == "application/json"
    assert transport.last_json() == {"objects": [{"id": "dash-1", "type": "dashboard"}]}
    records = resp.records()
    assert [r.get("id") for r in records] == ["dash-1", "vis-1", None]
    assert records[-1]["exportedCount"] == 2


@pytest.mark.asyncio
async def test_export_write_to_file(api, transport, tmp_path):
    transport.respond(200, content=EXPORT)
    resp = await api.saved_objects.export(SavedObjectExportRequest(body=ExportBody(type="dashboard")))

    target = tmp_path / "export.ndjson"
    resp.write_to_file(target)

    lines = target.read_bytes().split(b"\n")
    assert lines[-1] == b""
    assert [json.loads(line)["id"] for line in lines[:2]] == ["dash-1", "vis-1"]


@pytest.mark.asyncio
async def test_streamed_export_yields_records(api, transport):
    transport.respond(200, content=EXPORT)
    resp = await api.saved_objects.export(SavedObjectExportRequest(body=ExportBody(type="dashboard")), stream=True)

    assert resp.stream is not None
    assert resp.body is None
    records = [record async for record in resp.aiter_records()]
    assert len(records) == 3


@pytest.mark.asyncio
async def test_streamed_export_error_is_buffered(api, transport):
    transport.respond(400, {"message": "bad type"})
    from kbapi import BadRequestError

    with pytest.raises(BadRequestError):
        await api.saved_objects.export(SavedObjectExportRequest(body=ExportBody(type="nope")), stream=True)


@pytest.mark.asyncio
async def test_import_sends_multipart_file(api, transport):
    transport.respond(200, {"success": True, "successCount": 2})

    resp = await api.saved_objects.import_(
        SavedObjectImportRequest(file=EXPORT, params=ImportParams(overwrite=True))
    )

    request = transport.last
    assert request.url.path == "/api/saved_objects/_import"
    assert request.url.params["overwrite"] == "true"
    assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert b'name="file"; filename="export.ndjson"' in request.content
    assert b"dash-1" in request.content
    assert resp.body.success is True
    assert resp.body.success_count == 2


@pytest.mark.asyncio
async def test_resolve_import_errors_sends_retries(api, transport):
    transport.respond(200, {"success": True})

    await api.saved_objects.resolve_import_errors(
        SavedObjectResolveImportsRequest(
            file=EXPORT,
            retries=[RetryOperation(id="dash-1", type="dashboard", overwrite=True)],
        )
    )

    assert b'name="retries[0]"' in transport.last.content
    assert b'{"id":"dash-1","type":"dashboard","overwrite":true}' in transport.last.content


@pytest.mark.asyncio
async def test_import_rejects_missing_request(api, transport):
    from kbapi import RequestValidationError

    with pytest.raises(RequestValidationError):
        await api.saved_objects.import_(None)
    assert transport.requests == []
