import pytest

from kbapi import RequestValidationError
from kbapi.alerting import AlertingMuteRequest
from kbapi.cases import CasesAttachFileRequest
from kbapi.logstash import LogstashPutPipelineRequest, PipelineBody, PipelineSettings
from kbapi.ml import MLSyncSavedObjectsParams, MLSyncSavedObjectsRequest
from kbapi.short_url import ShortURLCreateBody, ShortURLCreateRequest, ShortURLResolveRequest


@pytest.mark.asyncio
async def test_alert_mute_path(api, transport):
    transport.respond(204)

    resp = await api.alerting.mute(AlertingMuteRequest(rule_id="rule 1", alert_id="host-a"))

    assert transport.last.method == "POST"
    assert transport.last.url.raw_path == b"/api/alerting/rule/rule%201/alert/host-a/_mute"
    assert resp.body is None


@pytest.mark.asyncio
async def test_alert_mute_requires_both_ids(api, transport):
    with pytest.raises(RequestValidationError, match="alert id is required"):
        await api.alerting.mute(AlertingMuteRequest(rule_id="r", alert_id=""))
    assert transport.requests == []


@pytest.mark.asyncio
async def test_case_file_attachment_is_multipart(api, transport):
    transport.respond(200, {
        "id": "case-1", "version": "WzEsMV0=", "title": "t", "description": "d",
        "owner": "securitySolution", "status": "open", "totalComment": 1,
    })

    resp = await api.cases.attach_file(CasesAttachFileRequest(id="case-1", file=b"\x89PNG", filename="shot.png"))

    request = transport.last
    assert request.url.path == "/api/cases/case-1/files"
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b'filename="shot.png"' in request.content
    assert b'name="filename"' in request.content
    assert resp.body.total_comment == 1


@pytest.mark.asyncio
async def test_logstash_put_uses_dotted_settings(api, transport):
    transport.respond(204)

    await api.logstash.put(LogstashPutPipelineRequest(
        id="ingest",
        body=PipelineBody(
            pipeline="input { stdin {} } output { stdout {} }",
            settings=PipelineSettings(pipeline_workers=2, queue_type="persisted"),
        ),
    ))

    assert transport.last.method == "PUT"
    assert transport.last_json()["settings"] == {"pipeline.workers": 2, "queue.type": "persisted"}


@pytest.mark.asyncio
async def test_short_url_create_and_resolve(api, transport):
    transport.respond(200, {"id": "abc", "slug": "my-dash", "accessCount": 0})
    transport.respond(200, {"id": "abc", "slug": "my-dash", "accessCount": 3})

    await api.short_url.create(ShortURLCreateRequest(body=ShortURLCreateBody(
        locator_id="DASHBOARD_APP_LOCATOR", params={"dashboardId": "d1"}, slug="my-dash",
    )))
    assert transport.last_json() == {
        "locatorId": "DASHBOARD_APP_LOCATOR", "params": {"dashboardId": "d1"}, "slug": "my-dash",
    }

    resolved = await api.short_url.resolve(ShortURLResolveRequest(slug="my-dash"))
    assert transport.last.url.path == "/api/short_url/_slug/my-dash"
    assert resolved.body.access_count == 3


@pytest.mark.asyncio
async def test_ml_sync_simulate(api, transport):
    transport.respond(200, {"savedObjectsCreated": {"anomaly-detector": {"job-1": {"success": True}}}})

    resp = await api.ml.sync_saved_objects(MLSyncSavedObjectsRequest(params=MLSyncSavedObjectsParams(simulate=True)))

    assert transport.last.url.path == "/api/ml/saved_objects/sync"
    assert transport.last.url.params["simulate"] == "true"
    assert resp.body.saved_objects_created.anomaly_detector["job-1"].success is True


@pytest.mark.asyncio
async def test_task_manager_health(api, transport):
    transport.respond(200, {"id": "5b2de169", "status": "OK", "timestamp": "2024-01-01T00:00:00Z"})
    resp = await api.task_manager.health()
    assert transport.last.url.path == "/api/task_manager/_health"
    assert resp.body.status == "OK"
