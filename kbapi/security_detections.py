"""Detection engine rules and alerts (``/api/detection_engine``).

Rule payloads are polymorphic on ``type``; :data:`Rule` is the tagged union
used for request bodies and responses, and :func:`parse_rule` decodes a
single raw rule. Rule exports come back as NDJSON, rule imports upload an
NDJSON file.
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field, TypeAdapter
from typing_extensions import Annotated

from .base import Namespace, below_299, require
from .models import KibanaModel, Params
from .ndjson import NDJSONResponse
from .response import APIResponse
from .saved_objects import NDJSON_FILENAME
from .serialization import loads
from .transport import RequestOption

OSQUERY_ACTION = ".osquery"
ENDPOINT_ACTION = ".endpoint"

RULE_TYPES = (
    "query", "eql", "esql", "threshold", "threat_match",
    "machine_learning", "new_terms", "saved_query",
)


class InternalRuleSource(KibanaModel):
    type: Literal["internal"] = "internal"


class ExternalRuleSource(KibanaModel):
    type: Literal["external"] = "external"
    is_customized: bool = False


RuleSource = Annotated[Union[InternalRuleSource, ExternalRuleSource], Field(discriminator="type")]


class ECSMappingValue(KibanaModel):
    """Either a source ``field`` or a literal ``value`` (string or list)."""
    field: Optional[str] = None
    value: Optional[Union[str, List[str]]] = None


class OsqueryQuery(KibanaModel):
    id: str
    query: str
    platform: Optional[str] = None
    version: Optional[str] = None
    removed: Optional[bool] = None
    snapshot: Optional[bool] = None
    ecs_mapping: Optional[Dict[str, ECSMappingValue]] = None


class OsqueryParams(KibanaModel):
    query: Optional[str] = None
    pack_id: Optional[str] = None
    saved_query_id: Optional[str] = None
    timeout: Optional[int] = None
    queries: Optional[List[OsqueryQuery]] = None
    ecs_mapping: Optional[Dict[str, ECSMappingValue]] = None


class OsqueryResponseAction(KibanaModel):
    action_type_id: Literal[".osquery"] = OSQUERY_ACTION
    params: OsqueryParams


class ProcessesConfig(KibanaModel):
    field: str
    overwrite: Optional[bool] = None


class EndpointActionParams(KibanaModel):
    """``isolate`` takes only a comment; ``kill-process``/``suspend-process`` also need ``config``."""
    command: str
    comment: Optional[str] = None
    config: Optional[ProcessesConfig] = None


class EndpointResponseAction(KibanaModel):
    action_type_id: Literal[".endpoint"] = ENDPOINT_ACTION
    params: EndpointActionParams


ResponseAction = Annotated[
    Union[OsqueryResponseAction, EndpointResponseAction], Field(discriminator="action_type_id")
]


class RuleActionFrequency(KibanaModel):
    notify_when: str = Field(alias="notifyWhen")
    summary: bool
    throttle: Optional[str] = None


class RuleAction(KibanaModel):
    """Connector action attached to a rule; ``params`` depend on the connector type."""
    action_type_id: str
    id: str
    params: Dict[str, Any] = Field(default_factory=dict)
    group: Optional[str] = None
    uuid: Optional[str] = None
    frequency: Optional[RuleActionFrequency] = None
    alerts_filter: Optional[Dict[str, Any]] = None


class RuleExceptionList(KibanaModel):
    id: str
    list_id: str
    namespace_type: str
    type: str


class RiskScoreMapping(KibanaModel):
    field: str
    operator: str = "equals"
    value: str = ""
    risk_score: Optional[int] = None


class SeverityMapping(KibanaModel):
    field: str
    operator: str = "equals"
    severity: str
    value: str


class ThreatTechnique(KibanaModel):
    id: str
    name: str
    reference: str
    subtechnique: Optional[List[Dict[str, Any]]] = None


class Threat(KibanaModel):
    framework: str
    tactic: Dict[str, Any]
    technique: Optional[List[ThreatTechnique]] = None


class RelatedIntegration(KibanaModel):
    package: str
    version: str
    integration: Optional[str] = None


class RequiredField(KibanaModel):
    name: str
    type: str
    ecs: Optional[bool] = None


class InvestigationFields(KibanaModel):
    field_names: List[str]


class AlertSuppressionDuration(KibanaModel):
    unit: str
    value: int


class AlertSuppression(KibanaModel):
    group_by: Optional[List[str]] = None
    duration: Optional[AlertSuppressionDuration] = None
    missing_fields_strategy: Optional[str] = None


class RuleBase(KibanaModel):
    """Fields shared by every rule type; server-populated ones are optional."""

    name: str
    description: str
    risk_score: int
    severity: str

    id: Optional[str] = None
    rule_id: Optional[str] = None
    enabled: Optional[bool] = None
    interval: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    max_signals: Optional[int] = None
    version: Optional[int] = None
    revision: Optional[int] = None
    author: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    references: Optional[List[str]] = None
    false_positives: Optional[List[str]] = None
    license: Optional[str] = None
    note: Optional[str] = None
    setup: Optional[str] = None
    building_block_type: Optional[str] = None
    rule_name_override: Optional[str] = None
    timestamp_override: Optional[str] = None
    timestamp_override_fallback_disabled: Optional[bool] = None
    timeline_id: Optional[str] = None
    timeline_title: Optional[str] = None
    namespace: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None
    outcome: Optional[str] = None
    alias_target_id: Optional[str] = None
    alias_purpose: Optional[str] = None
    actions: Optional[List[RuleAction]] = None
    throttle: Optional[str] = None
    exceptions_list: Optional[List[RuleExceptionList]] = None
    risk_score_mapping: Optional[List[RiskScoreMapping]] = None
    severity_mapping: Optional[List[SeverityMapping]] = None
    threat: Optional[List[Threat]] = None
    related_integrations: Optional[List[RelatedIntegration]] = None
    required_fields: Optional[List[RequiredField]] = None
    investigation_fields: Optional[InvestigationFields] = None
    response_actions: Optional[List[ResponseAction]] = None
    rule_source: Optional[RuleSource] = None

    immutable: Optional[bool] = None
    created_at: Optional[str] = None
    created_by: Optional[str] = None
    updated_at: Optional[str] = None
    updated_by: Optional[str] = None
    execution_summary: Optional[Dict[str, Any]] = None

    def add_response_action(self, action: Union[OsqueryResponseAction, EndpointResponseAction]) -> None:
        if self.response_actions is None:
            self.response_actions = []
        self.response_actions.append(action)

    def osquery_actions(self) -> List[OsqueryResponseAction]:
        return [a for a in self.response_actions or [] if isinstance(a, OsqueryResponseAction)]

    def endpoint_actions(self) -> List[EndpointResponseAction]:
        return [a for a in self.response_actions or [] if isinstance(a, EndpointResponseAction)]

    @property
    def is_external(self) -> bool:
        return isinstance(self.rule_source, ExternalRuleSource)

    @property
    def is_customized(self) -> bool:
        return isinstance(self.rule_source, ExternalRuleSource) and self.rule_source.is_customized


class _IndexedRule(RuleBase):
    index: Optional[List[str]] = None
    data_view_id: Optional[str] = None
    filters: Optional[List[Dict[str, Any]]] = None


class QueryRule(_IndexedRule):
    type: Literal["query"] = "query"
    query: Optional[str] = None
    language: Optional[str] = None
    saved_id: Optional[str] = None
    alert_suppression: Optional[AlertSuppression] = None


class SavedQueryRule(_IndexedRule):
    type: Literal["saved_query"] = "saved_query"
    saved_id: str
    query: Optional[str] = None
    language: Optional[str] = None
    alert_suppression: Optional[AlertSuppression] = None


class EQLRule(_IndexedRule):
    type: Literal["eql"] = "eql"
    query: str
    language: Literal["eql"] = "eql"
    event_category_override: Optional[str] = None
    tiebreaker_field: Optional[str] = None
    timestamp_field: Optional[str] = None
    alert_suppression: Optional[AlertSuppression] = None


class ESQLRule(RuleBase):
    type: Literal["esql"] = "esql"
    query: str
    language: Literal["esql"] = "esql"
    alert_suppression: Optional[AlertSuppression] = None


class ThresholdCardinality(KibanaModel):
    field: str
    value: int


class Threshold(KibanaModel):
    """``field`` is a single field name or a list of them (possibly empty)."""

    field: Union[str, List[str]] = Field(default_factory=list)
    value: int
    cardinality: Optional[List[ThresholdCardinality]] = None

    def field_names(self) -> List[str]:
        if isinstance(self.field, str):
            return [self.field] if self.field else []
        return list(self.field)


class ThresholdRule(_IndexedRule):
    type: Literal["threshold"] = "threshold"
    query: str
    language: Optional[str] = None
    threshold: Threshold
    saved_id: Optional[str] = None
    alert_suppression: Optional[Dict[str, Any]] = None


class ThreatMatchRule(_IndexedRule):
    type: Literal["threat_match"] = "threat_match"
    query: str
    language: Optional[str] = None
    threat_query: str
    threat_index: List[str]
    threat_mapping: List[Dict[str, Any]]
    threat_filters: Optional[List[Dict[str, Any]]] = None
    threat_indicator_path: Optional[str] = None
    threat_language: Optional[str] = None
    concurrent_searches: Optional[int] = None
    items_per_search: Optional[int] = None
    saved_id: Optional[str] = None
    alert_suppression: Optional[AlertSuppression] = None


class MachineLearningRule(RuleBase):
    type: Literal["machine_learning"] = "machine_learning"
    anomaly_threshold: int
    machine_learning_job_id: Union[str, List[str]]
    alert_suppression: Optional[AlertSuppression] = None

    def job_ids(self) -> List[str]:
        if isinstance(self.machine_learning_job_id, str):
            return [self.machine_learning_job_id]
        return list(self.machine_learning_job_id)


class NewTermsRule(_IndexedRule):
    type: Literal["new_terms"] = "new_terms"
    query: str
    language: Optional[str] = None
    new_terms_fields: List[str]
    history_window_start: str
    alert_suppression: Optional[AlertSuppression] = None


Rule = Annotated[
    Union[
        QueryRule, EQLRule, ESQLRule, ThresholdRule, ThreatMatchRule,
        MachineLearningRule, NewTermsRule, SavedQueryRule,
    ],
    Field(discriminator="type"),
]

_rule_adapter = TypeAdapter(Rule)


def parse_rule(data: Union[bytes, str, Dict[str, Any]]) -> RuleBase:
    """Decode one rule payload into the model matching its ``type``."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    if isinstance(data, bytes):
        data = loads(data)
    if not isinstance(data, dict):
        raise ValueError("error determining rule type: payload is not an object")
    rule_type = data.get("type")
    if rule_type not in RULE_TYPES:
        raise ValueError(f"unknown rule type: {rule_type}")
    return _rule_adapter.validate_python(data)


class RulePatch(KibanaModel):
    """Partial rule update; any rule field may be passed as an extra field."""
    id: Optional[str] = None
    rule_id: Optional[str] = None


class RuleRefParams(Params):
    id: Optional[str] = None
    rule_id: Optional[str] = None


class RuleRefRequest(KibanaModel):
    params: RuleRefParams = Field(default_factory=RuleRefParams)


class CreateRuleRequest(KibanaModel):
    body: Rule


class UpdateRuleRequest(KibanaModel):
    body: Rule


class PatchRuleRequest(KibanaModel):
    body: RulePatch


class ListRulesParams(Params):
    fields: Optional[List[str]] = None
    filter: Optional[str] = None
    sort_field: Optional[str] = None
    sort_order: Optional[str] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    gaps_range_start: Optional[str] = None
    gaps_range_end: Optional[str] = None


class ListRulesRequest(KibanaModel):
    params: ListRulesParams = Field(default_factory=ListRulesParams)


class RuleList(KibanaModel):
    data: List[Rule] = Field(default_factory=list)
    page: int = 0
    per_page: int = 0
    total: int = 0


class BulkActionParams(Params):
    dry_run: Optional[bool] = None


class BulkActionBody(KibanaModel):
    """``action`` is one of delete, disable, enable, export, duplicate, edit, run."""
    action: str
    ids: Optional[List[str]] = None
    query: Optional[str] = None
    edit: Optional[List[Dict[str, Any]]] = None
    duplicate: Optional[Dict[str, Any]] = None
    run: Optional[Dict[str, Any]] = None


class BulkActionRequest(KibanaModel):
    params: BulkActionParams = Field(default_factory=BulkActionParams)
    body: BulkActionBody


class BulkActionResult(KibanaModel):
    success: Optional[bool] = None
    rules_count: Optional[int] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)


class RuleIdRef(KibanaModel):
    rule_id: str


class ExportRulesBody(KibanaModel):
    objects: List[RuleIdRef]


class ExportRulesParams(Params):
    exclude_export_details: Optional[bool] = None
    file_name: Optional[str] = None


class ExportRulesRequest(KibanaModel):
    """Without a body every rule is exported."""
    params: ExportRulesParams = Field(default_factory=ExportRulesParams)
    body: Optional[ExportRulesBody] = None


class ImportRulesParams(Params):
    overwrite: Optional[bool] = None
    overwrite_exceptions: Optional[bool] = None
    overwrite_action_connectors: Optional[bool] = None
    as_new_list: Optional[bool] = None


class ImportRulesRequest(KibanaModel):
    params: ImportRulesParams = Field(default_factory=ImportRulesParams)
    file: bytes


class ImportRulesResult(KibanaModel):
    success: bool = False
    success_count: int = 0
    rules_count: int = 0
    errors: List[Dict[str, Any]] = Field(default_factory=list)
    exceptions_success: Optional[bool] = None
    exceptions_success_count: Optional[int] = None
    exceptions_errors: List[Dict[str, Any]] = Field(default_factory=list)
    action_connectors_success: Optional[bool] = None
    action_connectors_success_count: Optional[int] = None
    action_connectors_errors: List[Dict[str, Any]] = Field(default_factory=list)


class Assignees(KibanaModel):
    add: List[str] = Field(default_factory=list)
    remove: List[str] = Field(default_factory=list)


class AssignUsersBody(KibanaModel):
    assignees: Assignees
    ids: List[str]


class AssignUsersRequest(KibanaModel):
    body: AssignUsersBody


class UpdateByQueryResult(KibanaModel):
    """Elasticsearch ``_update_by_query`` summary returned by alert updates."""
    took: Optional[int] = None
    timed_out: Optional[bool] = None
    total: Optional[int] = None
    updated: Optional[int] = None
    deleted: Optional[int] = None
    batches: Optional[int] = None
    noops: Optional[int] = None
    version_conflicts: Optional[int] = None
    retries: Optional[Dict[str, Any]] = None
    throttled_millis: Optional[int] = None
    requests_per_second: Optional[float] = None
    throttled_until_millis: Optional[int] = None
    failures: List[Any] = Field(default_factory=list)


class SetAlertStatusBody(KibanaModel):
    """Select alerts either by ``signal_ids`` or by an Elasticsearch ``query``."""
    status: str
    signal_ids: Optional[List[str]] = None
    query: Optional[Dict[str, Any]] = None
    conflicts: Optional[str] = None


class SetAlertStatusRequest(KibanaModel):
    body: SetAlertStatusBody


class AlertTags(KibanaModel):
    tags_to_add: List[str] = Field(default_factory=list)
    tags_to_remove: List[str] = Field(default_factory=list)


class UpdateTagsBody(KibanaModel):
    tags: AlertTags
    ids: Optional[List[str]] = None
    query: Optional[Dict[str, Any]] = None


class UpdateTagsRequest(KibanaModel):
    body: UpdateTagsBody


class SearchAlertsBody(KibanaModel):
    query: Optional[Dict[str, Any]] = None
    aggs: Optional[Dict[str, Any]] = None
    fields: Optional[List[Any]] = None
    runtime_mappings: Optional[Dict[str, Any]] = None
    size: Optional[int] = None
    sort: Optional[List[Any]] = None
    track_total_hits: Optional[bool] = None
    source: Optional[Union[bool, str, List[str]]] = Field(default=None, alias="_source")


class SearchAlertsRequest(KibanaModel):
    body: SearchAlertsBody


class SearchAlertsResult(KibanaModel):
    took: int = 0
    timed_out: bool = False
    shards: Dict[str, Any] = Field(default_factory=dict, alias="_shards")
    hits: Dict[str, Any] = Field(default_factory=dict)
    aggregations: Optional[Dict[str, Any]] = None


class PreviewAlertsParams(Params):
    enable_logged_requests: Optional[bool] = None


class PreviewAlertsRequest(KibanaModel):
    """Run ``rule`` over ``invocation_count`` intervals ending at ``timeframe_end``."""
    params: PreviewAlertsParams = Field(default_factory=PreviewAlertsParams)
    rule: Rule
    invocation_count: int
    timeframe_end: str


class PreviewLoggedRequest(KibanaModel):
    description: Optional[str] = None
    duration: Optional[int] = None
    request: Optional[str] = None
    request_type: Optional[str] = None


class PreviewLog(KibanaModel):
    duration: int = 0
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    started_at: Optional[str] = Field(default=None, alias="startedAt")
    requests: List[PreviewLoggedRequest] = Field(default_factory=list)


class PreviewResult(KibanaModel):
    is_aborted: bool = Field(default=False, alias="isAborted")
    preview_id: Optional[str] = Field(default=None, alias="previewId")
    logs: List[PreviewLog] = Field(default_factory=list)


class AlertsIndex(KibanaModel):
    name: str
    index_mapping_outdated: Optional[bool] = None


class PrebuiltStatus(KibanaModel):
    rules_custom_installed: int = 0
    rules_installed: int = 0
    rules_not_installed: int = 0
    rules_not_updated: int = 0
    timelines_installed: int = 0
    timelines_not_installed: int = 0
    timelines_not_updated: int = 0


class PrebuiltInstallResult(KibanaModel):
    rules_installed: int = 0
    rules_updated: int = 0
    timelines_installed: int = 0
    timelines_updated: int = 0


class Privileges(KibanaModel):
    username: Optional[str] = None
    is_authenticated: bool = False
    has_encryption_key: bool = False
    has_all_requested: Optional[bool] = None
    cluster: Dict[str, bool] = Field(default_factory=dict)
    index: Dict[str, Dict[str, bool]] = Field(default_factory=dict)
    application: Dict[str, Any] = Field(default_factory=dict)


_ENGINE = "/api/detection_engine"
_RULES = _ENGINE + "/rules"
_SIGNALS = _ENGINE + "/signals"


def _require_rule_ref(ref: Any) -> None:
    require(ref.id or ref.rule_id, "either id or rule_id is required")


class SecurityDetections(Namespace):

    async def create_rule(self, req: Optional[CreateRuleRequest], *options: RequestOption) -> APIResponse[Rule]:
        require(req)
        return await self._api.perform(
            "security_detections.create_rule", "POST", _RULES,
            body=req.body, result=Rule, success=below_299, options=options,
        )

    async def get_rule(self, req: Optional[RuleRefRequest], *options: RequestOption) -> APIResponse[Rule]:
        require(req)
        _require_rule_ref(req.params)
        return await self._api.perform(
            "security_detections.get_rule", "GET", _RULES,
            params=req.params, result=Rule, success=below_299, options=options,
        )

    async def update_rule(self, req: Optional[UpdateRuleRequest], *options: RequestOption) -> APIResponse[Rule]:
        """Replace a rule; the body must carry ``id`` or ``rule_id``."""
        require(req)
        _require_rule_ref(req.body)
        return await self._api.perform(
            "security_detections.update_rule", "PUT", _RULES,
            body=req.body, result=Rule, success=below_299, options=options,
        )

    async def patch_rule(self, req: Optional[PatchRuleRequest], *options: RequestOption) -> APIResponse[Rule]:
        require(req)
        _require_rule_ref(req.body)
        return await self._api.perform(
            "security_detections.patch_rule", "PATCH", _RULES,
            body=req.body, result=Rule, success=below_299, options=options,
        )

    async def delete_rule(self, req: Optional[RuleRefRequest], *options: RequestOption) -> APIResponse[Rule]:
        require(req)
        _require_rule_ref(req.params)
        return await self._api.perform(
            "security_detections.delete_rule", "DELETE", _RULES,
            params=req.params, result=Rule, success=below_299, options=options,
        )

    async def list_rules(
        self, req: Optional[ListRulesRequest] = None, *options: RequestOption
    ) -> APIResponse[RuleList]:
        req = req or ListRulesRequest()
        return await self._api.perform(
            "security_detections.list_rules", "GET", _RULES + "/_find",
            params=req.params, result=RuleList, success=below_299, options=options,
        )

    async def bulk_action_rules(
        self, req: Optional[BulkActionRequest], *options: RequestOption
    ) -> APIResponse[BulkActionResult]:
        require(req)
        return await self._api.perform(
            "security_detections.bulk_action_rules", "POST", _RULES + "/_bulk_action",
            params=req.params, body=req.body, result=BulkActionResult, success=below_299, options=options,
        )

    async def export_rules(
        self,
        req: Optional[ExportRulesRequest] = None,
        *options: RequestOption,
        stream: bool = False,
    ) -> NDJSONResponse:
        """Export rules as NDJSON; the last record is the export summary unless excluded."""
        req = req or ExportRulesRequest()
        return await self._api.perform(
            "security_detections.export_rules", "POST", _RULES + "/_export",
            params=req.params, body=req.body, ndjson=True, stream=stream,
            success=below_299, options=options,
        )

    async def import_rules(
        self, req: Optional[ImportRulesRequest], *options: RequestOption
    ) -> APIResponse[ImportRulesResult]:
        require(req)
        return await self._api.perform(
            "security_detections.import_rules", "POST", _RULES + "/_import",
            params=req.params,
            files={"file": (NDJSON_FILENAME, req.file, "application/ndjson")},
            result=ImportRulesResult, success=below_299, options=options,
        )

    async def preview_alerts(
        self, req: Optional[PreviewAlertsRequest], *options: RequestOption
    ) -> APIResponse[PreviewResult]:
        require(req)
        body = _rule_adapter.dump_python(req.rule, mode="json", by_alias=True, exclude_none=True)
        body["invocationCount"] = req.invocation_count
        body["timeframeEnd"] = req.timeframe_end
        return await self._api.perform(
            "security_detections.preview_alerts", "POST", _RULES + "/preview",
            params=req.params, body=body, result=PreviewResult, success=below_299, options=options,
        )

    async def get_status_prebuilt(self, *options: RequestOption) -> APIResponse[PrebuiltStatus]:
        return await self._api.perform(
            "security_detections.get_status_prebuilt", "GET", _RULES + "/prepackaged/_status",
            result=PrebuiltStatus, success=below_299, options=options,
        )

    async def install_prebuilt(self, *options: RequestOption) -> APIResponse[PrebuiltInstallResult]:
        return await self._api.perform(
            "security_detections.install_prebuilt", "PUT", _RULES + "/prepackaged",
            result=PrebuiltInstallResult, success=below_299, options=options,
        )

    async def list_tags(self, *options: RequestOption) -> APIResponse[List[str]]:
        return await self._api.perform(
            "security_detections.list_tags", "GET", _ENGINE + "/tags",
            result=List[str], success=below_299, options=options,
        )

    async def assign_users(
        self, req: Optional[AssignUsersRequest], *options: RequestOption
    ) -> APIResponse[UpdateByQueryResult]:
        require(req)
        return await self._api.perform(
            "security_detections.assign_users", "POST", _SIGNALS + "/assignees",
            body=req.body, result=UpdateByQueryResult, success=below_299, options=options,
        )

    async def set_alert_status(
        self, req: Optional[SetAlertStatusRequest], *options: RequestOption
    ) -> APIResponse[UpdateByQueryResult]:
        require(req)
        return await self._api.perform(
            "security_detections.set_alert_status", "POST", _SIGNALS + "/status",
            body=req.body, result=UpdateByQueryResult, success=below_299, options=options,
        )

    async def update_tags(
        self, req: Optional[UpdateTagsRequest], *options: RequestOption
    ) -> APIResponse[UpdateByQueryResult]:
        require(req)
        return await self._api.perform(
            "security_detections.update_tags", "POST", _SIGNALS + "/tags",
            body=req.body, result=UpdateByQueryResult, success=below_299, options=options,
        )

    async def search_alerts(
        self, req: Optional[SearchAlertsRequest], *options: RequestOption
    ) -> APIResponse[SearchAlertsResult]:
        require(req)
        return await self._api.perform(
            "security_detections.search_alerts", "POST", _SIGNALS + "/search",
            body=req.body, result=SearchAlertsResult, success=below_299, options=options,
        )

    async def get_index(self, *options: RequestOption) -> APIResponse[AlertsIndex]:
        return await self._api.perform(
            "security_detections.get_index", "GET", _ENGINE + "/index",
            result=AlertsIndex, success=below_299, options=options,
        )

    async def create_index(self, *options: RequestOption) -> APIResponse[Dict[str, Any]]:
        return await self._api.perform(
            "security_detections.create_index", "POST", _ENGINE + "/index",
            result=Dict[str, Any], success=below_299, options=options,
        )

    async def delete_index(self, *options: RequestOption) -> APIResponse[Dict[str, Any]]:
        return await self._api.perform(
            "security_detections.delete_index", "DELETE", _ENGINE + "/index",
            result=Dict[str, Any], success=below_299, options=options,
        )

    async def get_privileges(self, *options: RequestOption) -> APIResponse[Privileges]:
        return await self._api.perform(
            "security_detections.get_privileges_space", "GET", _ENGINE + "/privileges",
            result=Privileges, success=below_299, options=options,
        )
