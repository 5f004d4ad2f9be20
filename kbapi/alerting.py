"""Alerting rules (``/api/alerting``)."""
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import Namespace, below_299, require
from .models import KibanaModel, Params, SavedObjectRef
from .response import APIResponse
from .transport import RequestOption


class Schedule(KibanaModel):
    interval: str


class AlertDelay(KibanaModel):
    active: float


class Frequency(KibanaModel):
    notify_when: str
    summary: bool = False
    throttle: Optional[str] = None


class AlertsFilterTimeframe(KibanaModel):
    days: List[int] = Field(default_factory=list)
    hours: Dict[str, str] = Field(default_factory=dict)
    timezone: Optional[str] = None


class AlertsFilter(KibanaModel):
    query: Optional[Dict[str, Any]] = None
    timeframe: Optional[AlertsFilterTimeframe] = None


class RuleAction(KibanaModel):
    id: str
    group: Optional[str] = None
    params: Dict[str, Any] = Field(default_factory=dict)
    frequency: Optional[Frequency] = None
    alerts_filter: Optional[AlertsFilter] = None
    use_alert_data_for_template: Optional[bool] = None
    uuid: Optional[str] = None
    connector_type_id: Optional[str] = None


class ExecutionError(KibanaModel):
    message: str
    reason: str


class ExecutionStatus(KibanaModel):
    status: str
    last_execution_date: Optional[str] = None
    last_duration: Optional[float] = None
    error: Optional[ExecutionError] = None
    warning: Optional[ExecutionError] = None


class AlertsCount(KibanaModel):
    active: Optional[float] = None
    ignored: Optional[float] = None
    new: Optional[float] = None
    recovered: Optional[float] = None


class LastRun(KibanaModel):
    outcome: str
    alerts_count: Optional[AlertsCount] = None
    outcome_msg: Optional[List[str]] = None
    outcome_order: Optional[float] = None
    warning: Optional[str] = None


class Rule(KibanaModel):
    id: str
    name: str
    rule_type_id: str
    consumer: str
    enabled: bool = False
    tags: List[str] = Field(default_factory=list)
    params: Dict[str, Any] = Field(default_factory=dict)
    actions: List[RuleAction] = Field(default_factory=list)
    schedule: Optional[Schedule] = None
    running: Optional[bool] = None
    mute_all: bool = False
    muted_alert_ids: List[str] = Field(default_factory=list)
    throttle: Optional[str] = None
    notify_when: Optional[str] = None
    revision: Optional[int] = None
    alert_delay: Optional[AlertDelay] = None
    last_run: Optional[LastRun] = None
    next_run: Optional[str] = None
    execution_status: Optional[ExecutionStatus] = None
    scheduled_task_id: Optional[str] = None
    api_key_owner: Optional[str] = None
    api_key_created_by_user: Optional[bool] = None
    created_at: Optional[str] = None
    created_by: Optional[str] = None
    updated_at: Optional[str] = None
    updated_by: Optional[str] = None


class RuleCreateBody(KibanaModel):
    name: str
    rule_type_id: str
    consumer: str
    schedule: Schedule
    params: Dict[str, Any] = Field(default_factory=dict)
    tags: Optional[List[str]] = None
    actions: Optional[List[RuleAction]] = None
    alert_delay: Optional[AlertDelay] = None
    enabled: Optional[bool] = None
    throttle: Optional[str] = None
    notify_when: Optional[str] = None


class RuleUpdateBody(KibanaModel):
    name: str
    schedule: Schedule
    params: Dict[str, Any] = Field(default_factory=dict)
    tags: Optional[List[str]] = None
    actions: Optional[List[RuleAction]] = None
    alert_delay: Optional[AlertDelay] = None
    throttle: Optional[str] = None
    notify_when: Optional[str] = None


class AlertingCreateRequest(KibanaModel):
    id: str = ""
    body: RuleCreateBody


class AlertingUpdateRequest(KibanaModel):
    id: str
    body: RuleUpdateBody


class AlertingRuleRequest(KibanaModel):
    """Request addressing a single rule by id."""
    id: str


class AlertingMuteRequest(KibanaModel):
    rule_id: str
    alert_id: str


class AlertingListParams(Params):
    per_page: Optional[int] = None
    page: Optional[int] = None
    search: Optional[str] = None
    default_search_operator: Optional[str] = None
    search_fields: Optional[List[str]] = None
    sort_field: Optional[str] = None
    sort_order: Optional[str] = None
    has_reference: Optional[SavedObjectRef] = None
    fields: Optional[List[str]] = None
    filter: Optional[str] = None
    filter_consumers: Optional[List[str]] = None


class AlertingListRequest(KibanaModel):
    params: AlertingListParams = Field(default_factory=AlertingListParams)


class RuleList(KibanaModel):
    data: List[Rule] = Field(default_factory=list)
    page: int = 0
    per_page: int = 0
    total: int = 0


class HealthState(KibanaModel):
    status: Optional[str] = None
    timestamp: Optional[str] = None


class AlertingFrameworkHealth(KibanaModel):
    decryption_health: Optional[HealthState] = None
    execution_health: Optional[HealthState] = None
    read_health: Optional[HealthState] = None


class AlertingHealth(KibanaModel):
    alerting_framework_health: Optional[AlertingFrameworkHealth] = None
    has_permanent_encryption_key: Optional[bool] = None
    is_sufficiently_secure: Optional[bool] = None


class ActionGroup(KibanaModel):
    id: str
    name: str


class RuleType(KibanaModel):
    id: str
    name: str
    category: Optional[str] = None
    producer: Optional[str] = None
    action_groups: List[ActionGroup] = Field(default_factory=list)
    action_variables: Optional[Dict[str, Any]] = None
    alerts: Optional[Dict[str, Any]] = None
    authorized_consumers: Dict[str, Dict[str, bool]] = Field(default_factory=dict)
    default_action_group_id: Optional[str] = None
    does_set_recovery_context: Optional[bool] = None
    enabled_in_license: Optional[bool] = None
    has_alerts_mappings: Optional[bool] = None
    has_fields_for_a_a_d: Optional[bool] = None
    is_exportable: Optional[bool] = None
    minimum_license_required: Optional[str] = None
    recovery_action_group: Optional[ActionGroup] = None
    rule_task_timeout: Optional[str] = None


_RULE = "/api/alerting/rule/{id}"


class Alerting(Namespace):

    async def create(self, req: Optional[AlertingCreateRequest], *options: RequestOption) -> APIResponse[Rule]:
        """Create a rule; an empty ``id`` lets Kibana generate one."""
        require(req)
        path = _RULE if req.id else "/api/alerting/rule"
        return await self._api.perform(
            "alerting.create", "POST", path,
            path_params={"id": req.id} if req.id else None,
            body=req.body, result=Rule, options=options,
        )

    async def get(self, req: Optional[AlertingRuleRequest], *options: RequestOption) -> APIResponse[Rule]:
        require(req)
        require(req.id, "rule id is required")
        return await self._api.perform(
            "alerting.get", "GET", _RULE, path_params={"id": req.id}, result=Rule, options=options,
        )

    async def update(self, req: Optional[AlertingUpdateRequest], *options: RequestOption) -> APIResponse[Rule]:
        require(req)
        require(req.id, "rule id is required")
        return await self._api.perform(
            "alerting.update", "PUT", _RULE,
            path_params={"id": req.id}, body=req.body, result=Rule, options=options,
        )

    async def delete(self, req: Optional[AlertingRuleRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        require(req.id, "rule id is required")
        return await self._api.perform(
            "alerting.delete", "DELETE", _RULE,
            path_params={"id": req.id}, success=below_299, options=options,
        )

    async def _rule_action(self, endpoint: str, suffix: str, req: Optional[AlertingRuleRequest], options) -> APIResponse[None]:
        require(req)
        require(req.id, "rule id is required")
        return await self._api.perform(
            endpoint, "POST", _RULE + suffix,
            path_params={"id": req.id}, success=below_299, options=options,
        )

    async def enable(self, req: Optional[AlertingRuleRequest], *options: RequestOption) -> APIResponse[None]:
        return await self._rule_action("alerting.enable", "/_enable", req, options)

    async def disable(self, req: Optional[AlertingRuleRequest], *options: RequestOption) -> APIResponse[None]:
        return await self._rule_action("alerting.disable", "/_disable", req, options)

    async def mute_all(self, req: Optional[AlertingRuleRequest], *options: RequestOption) -> APIResponse[None]:
        return await self._rule_action("alerting.mute_all", "/_mute_all", req, options)

    async def unmute_all(self, req: Optional[AlertingRuleRequest], *options: RequestOption) -> APIResponse[None]:
        return await self._rule_action("alerting.unmute_all", "/_unmute_all", req, options)

    async def update_api_key(self, req: Optional[AlertingRuleRequest], *options: RequestOption) -> APIResponse[None]:
        return await self._rule_action("alerting.update_api_key", "/_update_api_key", req, options)

    async def _alert_action(self, endpoint: str, suffix: str, req: Optional[AlertingMuteRequest], options) -> APIResponse[None]:
        require(req)
        require(req.rule_id, "rule id is required")
        require(req.alert_id, "alert id is required")
        return await self._api.perform(
            endpoint, "POST", "/api/alerting/rule/{rule_id}/alert/{alert_id}" + suffix,
            path_params={"rule_id": req.rule_id, "alert_id": req.alert_id},
            success=below_299, options=options,
        )

    async def mute(self, req: Optional[AlertingMuteRequest], *options: RequestOption) -> APIResponse[None]:
        return await self._alert_action("alerting.mute", "/_mute", req, options)

    async def unmute(self, req: Optional[AlertingMuteRequest], *options: RequestOption) -> APIResponse[None]:
        return await self._alert_action("alerting.unmute", "/_unmute", req, options)

    async def list(self, req: Optional[AlertingListRequest] = None, *options: RequestOption) -> APIResponse[RuleList]:
        req = req or AlertingListRequest()
        return await self._api.perform(
            "alerting.list", "GET", "/api/alerting/rules/_find",
            params=req.params, result=RuleList, success=below_299, options=options,
        )

    async def health(self, *options: RequestOption) -> APIResponse[AlertingHealth]:
        return await self._api.perform(
            "alerting.health", "GET", "/api/alerting/_health", result=AlertingHealth, options=options,
        )

    async def get_types(self, *options: RequestOption) -> APIResponse[List[RuleType]]:
        return await self._api.perform(
            "alerting.get_types", "GET", "/api/alerting/rule_types", result=List[RuleType], options=options,
        )
