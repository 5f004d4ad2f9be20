import pytest

from kbapi import RequestValidationError
from kbapi.security_detections import (
    CreateRuleRequest,
    ExportRulesBody,
    ExportRulesRequest,
    PreviewAlertsRequest,
    QueryRule,
    RuleIdRef,
    RuleRefParams,
    RuleRefRequest,
)
from kbapi.security_exceptions import (
    CreateItemRequest,
    EntryMatch,
    EntryNested,
    ExceptionItemBody,
    ExportListParams,
    ExportListRequest,
)

RULE = {
    "id": "r-1", "rule_id": "custom-1", "type": "query", "name": "Suspicious login",
    "description": "d", "risk_score": 47, "severity": "medium", "query": "event.action:login",
}


def _query_rule(**extra):
    return QueryRule(name="Suspicious login", description="d", risk_score=47, severity="medium",
                     query="event.action:login", **extra)


@pytest.mark.asyncio
async def test_create_rule(api, transport):
    transport.respond(200, RULE)

    resp = await api.security_detections.create_rule(CreateRuleRequest(body=_query_rule(from_="now-6m")))

    assert transport.last.url.path == "/api/detection_engine/rules"
    body = transport.last_json()
    assert body["type"] == "query"
    assert body["from"] == "now-6m"
    assert isinstance(resp.body, QueryRule)
    assert resp.body.rule_id == "custom-1"


@pytest.mark.asyncio
async def test_get_rule_needs_an_identifier(api, transport):
    with pytest.raises(RequestValidationError, match="either id or rule_id is required"):
        await api.security_detections.get_rule(RuleRefRequest())
    assert transport.requests == []

    transport.respond(200, RULE)
    await api.security_detections.get_rule(RuleRefRequest(params=RuleRefParams(rule_id="custom-1")))
    assert transport.last.url.params["rule_id"] == "custom-1"


@pytest.mark.asyncio
async def test_export_all_rules_sends_no_body(api, transport):
    transport.respond(200, content=b'{"rule_id":"a"}\n{"exported_rules_count":1}\n')

    resp = await api.security_detections.export_rules()

    assert transport.last.url.path == "/api/detection_engine/rules/_export"
    assert transport.last.content == b""
    assert len(resp.records()) == 2


@pytest.mark.asyncio
async def test_export_selected_rules(api, transport):
    transport.respond(200, content=b'{"rule_id":"a"}\n')
    await api.security_detections.export_rules(
        ExportRulesRequest(body=ExportRulesBody(objects=[RuleIdRef(rule_id="a")]))
    )
    assert transport.last_json() == {"objects": [{"rule_id": "a"}]}


@pytest.mark.asyncio
async def test_preview_flattens_rule_into_body(api, transport):
    transport.respond(200, {"isAborted": False, "previewId": "pv-1", "logs": []})

    resp = await api.security_detections.preview_alerts(
        PreviewAlertsRequest(rule=_query_rule(), invocation_count=1, timeframe_end="2024-01-01T00:00:00Z")
    )

    body = transport.last_json()
    assert body["type"] == "query"
    assert body["invocationCount"] == 1
    assert body["timeframeEnd"] == "2024-01-01T00:00:00Z"
    assert "rule" not in body
    assert resp.body.preview_id == "pv-1"


@pytest.mark.asyncio
async def test_create_exception_item_with_nested_entries(api, transport):
    transport.respond(200, {
        "id": "i-1", "name": "allow admin", "description": "d", "type": "simple",
        "entries": [
            {"type": "match", "field": "user.name", "operator": "included", "value": "admin"},
            {"type": "nested", "field": "process.parent",
             "entries": [{"type": "exists", "field": "name", "operator": "included"}]},
        ],
    })

    resp = await api.security_exceptions.create_item(CreateItemRequest(body=ExceptionItemBody(
        list_id="endpoint_list",
        name="allow admin",
        description="d",
        entries=[
            EntryMatch(field="user.name", value="admin"),
            EntryNested.model_validate({
                "field": "process.parent",
                "entries": [{"type": "exists", "field": "name"}],
            }),
        ],
    )))

    sent = transport.last_json()
    assert sent["entries"][0] == {"type": "match", "field": "user.name", "operator": "included", "value": "admin"}
    assert sent["entries"][1]["entries"][0]["type"] == "exists"
    assert isinstance(resp.body.entries[1], EntryNested)


@pytest.mark.asyncio
async def test_export_exception_list(api, transport):
    transport.respond(200, content=b'{"list_id":"l"}\n{"exported_exception_list_count":1}\n')

    resp = await api.security_exceptions.export_list(
        ExportListRequest(params=ExportListParams(id="abc", list_id="l", namespace_type="single"))
    )

    assert transport.last.url.path == "/api/exception_lists/_export"
    assert transport.last.url.params["namespace_type"] == "single"
    assert resp.records()[0]["list_id"] == "l"
