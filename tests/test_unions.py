"""Polymorphic payloads resolved by their ``type`` discriminator."""
import pytest
from pydantic import ValidationError

from kbapi.connectors import (
    ConnectorsCreateRequest,
    ConnectorsUpdateRequest,
    IndexConfig,
    IndexConnector,
    ServerLogConnector,
)
from kbapi.fleet.agents import AgentActionBody, CreateAgentActionRequest, SettingsAction, StandardAction
from kbapi.fleet.outputs import CreateOutputRequest, KafkaOutput, LogstashOutput, RemoteElasticsearchOutput
from kbapi.security_ai_assistant import DocumentEntry, IndexEntry, KnowledgeBaseEntryIdRequest
from kbapi.security_detections import (
    EQLRule,
    MachineLearningRule,
    QueryRule,
    Threshold,
    ThresholdRule,
    parse_rule,
)


@pytest.mark.asyncio
async def test_connector_create_without_id(api, transport):
    transport.respond(200, {"id": "c-1", "name": "docs", "connector_type_id": ".index"})

    resp = await api.connectors.create(
        ConnectorsCreateRequest(body=IndexConnector(name="docs", config=IndexConfig(index="audit")))
    )

    assert transport.last.url.path == "/api/actions/connector"
    assert transport.last_json() == {
        "name": "docs",
        "connector_type_id": ".index",
        "config": {"index": "audit"},
    }
    assert resp.body.id == "c-1"


@pytest.mark.asyncio
async def test_connector_create_with_id(api, transport):
    transport.respond(200, {"id": "my-log", "name": "log", "connector_type_id": ".server-log"})
    await api.connectors.create(ConnectorsCreateRequest(id="my-log", body=ServerLogConnector(name="log")))
    assert transport.last.url.path == "/api/actions/connector/my-log"


@pytest.mark.asyncio
async def test_connector_update_omits_type(api, transport):
    transport.respond(200, {"id": "c-1", "name": "renamed", "connector_type_id": ".index"})

    await api.connectors.update(
        ConnectorsUpdateRequest(
            id="c-1",
            body=IndexConnector(name="renamed", config=IndexConfig(index="audit", refresh=True)),
        )
    )

    assert transport.last.method == "PUT"
    body = transport.last_json()
    assert "connector_type_id" not in body
    assert body["config"] == {"index": "audit", "refresh": True}


def test_connector_body_resolves_from_wire():
    req = ConnectorsCreateRequest.model_validate(
        {"body": {"name": "docs", "connector_type_id": ".index", "config": {"index": "a"}}}
    )
    assert isinstance(req.body, IndexConnector)


def test_parse_rule_by_type():
    rule = parse_rule(
        b'{"type":"eql","name":"r","description":"d","risk_score":21,"severity":"low",'
        b'"query":"process where true","from":"now-6m"}'
    )
    assert isinstance(rule, EQLRule)
    assert rule.from_ == "now-6m"
    assert rule.to_wire()["from"] == "now-6m"


def test_parse_rule_unknown_type():
    with pytest.raises(ValueError, match="unknown rule type"):
        parse_rule({"type": "mystery", "name": "r"})


def test_parse_rule_rejects_non_object():
    with pytest.raises(ValueError):
        parse_rule("[]")


def test_threshold_field_names():
    assert Threshold(field="host.name", value=5).field_names() == ["host.name"]
    assert Threshold(field=["a", "b"], value=5).field_names() == ["a", "b"]
    assert Threshold(field="", value=5).field_names() == []
    assert Threshold(value=5).field_names() == []


def test_machine_learning_job_ids():
    single = parse_rule({
        "type": "machine_learning", "name": "ml", "description": "d", "risk_score": 50,
        "severity": "medium", "anomaly_threshold": 75, "machine_learning_job_id": "job-1",
    })
    assert isinstance(single, MachineLearningRule)
    assert single.job_ids() == ["job-1"]
    many = single.model_copy(update={"machine_learning_job_id": ["a", "b"]})
    assert many.job_ids() == ["a", "b"]


@pytest.mark.asyncio
async def test_rule_list_decodes_each_type(api, transport):
    base = {"name": "r", "description": "d", "risk_score": 1, "severity": "low"}
    transport.respond(200, {
        "page": 1, "perPage": 20, "per_page": 20, "total": 2,
        "data": [
            {**base, "type": "query", "query": "*"},
            {**base, "type": "threshold", "query": "*", "threshold": {"field": [], "value": 10}},
        ],
    })

    resp = await api.security_detections.list_rules()

    assert [type(r) for r in resp.body.data] == [QueryRule, ThresholdRule]
    assert resp.body.data[1].threshold.field_names() == []


def test_agent_action_variants():
    settings = AgentActionBody.model_validate({"action": {"type": "SETTINGS", "data": {"log_level": "debug"}}})
    assert isinstance(settings.action, SettingsAction)
    assert settings.action.data.log_level == "debug"

    unenroll = AgentActionBody.model_validate({"action": {"type": "UNENROLL"}})
    assert isinstance(unenroll.action, StandardAction)

    with pytest.raises(ValidationError):
        AgentActionBody.model_validate({"action": {"type": "REBOOT"}})


@pytest.mark.asyncio
async def test_agent_action_create(api, transport):
    transport.respond(200, {"item": {"id": "act-1", "type": "UNENROLL"}})

    resp = await api.fleet.agent_actions.create(
        CreateAgentActionRequest(agent_id="agent-1", body=AgentActionBody(action=StandardAction(type="UNENROLL")))
    )

    assert transport.last.url.path == "/api/fleet/agents/agent-1/actions"
    assert transport.last_json() == {"action": {"type": "UNENROLL"}}
    assert resp.body.item.id == "act-1"


@pytest.mark.asyncio
async def test_output_create_and_list(api, transport):
    transport.respond(200, {"item": {"id": "ls", "name": "ls", "type": "logstash", "hosts": ["ls:5044"]}})
    transport.respond(200, {
        "items": [
            {"id": "k", "name": "kafka", "type": "kafka", "hosts": ["k:9092"], "topic": "logs"},
            {"id": "r", "name": "remote", "type": "remote_elasticsearch", "hosts": ["https://es:9200"]},
        ],
        "total": 2, "page": 1, "perPage": 20,
    })

    created = await api.fleet.outputs.create(CreateOutputRequest(body=LogstashOutput(name="ls", hosts=["ls:5044"])))
    assert transport.last_json() == {"name": "ls", "hosts": ["ls:5044"], "type": "logstash"}
    assert isinstance(created.body.item, LogstashOutput)

    listed = await api.fleet.outputs.list()
    assert [type(o) for o in listed.body.items] == [KafkaOutput, RemoteElasticsearchOutput]
    assert listed.body.items[0].topic == "logs"
    assert listed.body.per_page == 20


@pytest.mark.asyncio
async def test_knowledge_base_entry_variants(api, transport):
    transport.respond(200, {
        "id": "e1", "type": "document", "name": "runbook", "kbResource": "user",
        "source": "api", "text": "restart the pod", "global": True,
    })
    transport.respond(200, {
        "id": "e2", "type": "index", "name": "alerts", "description": "d", "field": "message",
        "index": "logs-*", "queryDescription": "search logs",
    })

    doc = await api.security_ai_assistant.get_knowledge_base_entry(KnowledgeBaseEntryIdRequest(id="e1"))
    idx = await api.security_ai_assistant.get_knowledge_base_entry(KnowledgeBaseEntryIdRequest(id="e2"))

    assert transport.last.url.path == "/api/security_ai_assistant/knowledge_base/entries/e2"
    assert isinstance(doc.body, DocumentEntry)
    assert doc.body.global_ is True
    assert doc.body.kb_resource == "user"
    assert isinstance(idx.body, IndexEntry)
    assert idx.body.query_description == "search logs"
