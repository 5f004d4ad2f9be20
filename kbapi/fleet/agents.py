"""Fleet agents and the actions sent to them."""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field
from typing_extensions import Annotated

from ..base import Namespace, require
from ..models import KibanaModel, Params
from ..response import APIResponse
from ..transport import RequestOption
from .models import ActionIdResult, Item, ItemList

_AGENTS = "/api/fleet/agents"


class AgentInfo(KibanaModel):
    id: str
    version: str


class AgentComponentUnit(KibanaModel):
    id: str
    type: str
    status: str
    message: str = ""
    payload: Optional[Dict[str, Any]] = None


class AgentComponent(KibanaModel):
    id: str
    type: str
    status: str
    message: str = ""
    units: Optional[List[AgentComponentUnit]] = None


class AgentMetrics(KibanaModel):
    cpu_avg: Optional[float] = None
    memory_size_byte_avg: Optional[float] = None


class UpgradeDetails(KibanaModel):
    action_id: str
    state: str
    target_version: str
    metadata: Optional[Dict[str, Any]] = None


class Agent(KibanaModel):
    id: str
    type: str = "PERMANENT"
    active: bool = False
    enrolled_at: Optional[str] = None
    agent: Optional[AgentInfo] = None
    policy_id: Optional[str] = None
    policy_revision: Optional[float] = None
    status: Optional[str] = None
    last_checkin: Optional[str] = None
    last_checkin_status: Optional[str] = None
    last_checkin_message: Optional[str] = None
    local_metadata: Dict[str, Any] = Field(default_factory=dict)
    user_provided_metadata: Optional[Dict[str, Any]] = None
    tags: Optional[List[str]] = None
    packages: List[str] = Field(default_factory=list)
    namespaces: Optional[List[str]] = None
    components: Optional[List[AgentComponent]] = None
    metrics: Optional[AgentMetrics] = None
    outputs: Optional[Dict[str, Any]] = None
    unhealthy_reason: Optional[List[str]] = None
    upgrade_details: Optional[UpgradeDetails] = None
    upgrade_started_at: Optional[str] = None
    upgraded_at: Optional[str] = None
    unenrolled_at: Optional[str] = None
    unenrollment_started_at: Optional[str] = None
    access_api_key_id: Optional[str] = None
    default_api_key_id: Optional[str] = None
    sort: Optional[List[Any]] = None


class AgentList(ItemList[Agent]):
    status_summary: Optional[Dict[str, int]] = Field(default=None, alias="statusSummary")
    next_search_after: Optional[str] = Field(default=None, alias="nextSearchAfter")
    pit: Optional[str] = None


class ListAgentsParams(Params):
    page: Optional[int] = None
    per_page: Optional[int] = Field(default=None, alias="perPage")
    kuery: Optional[str] = None
    show_inactive: Optional[bool] = Field(default=None, alias="showInactive")
    with_metrics: Optional[bool] = Field(default=None, alias="withMetrics")
    show_upgradeable: Optional[bool] = Field(default=None, alias="showUpgradeable")
    get_status_summary: Optional[bool] = Field(default=None, alias="getStatusSummary")
    sort_field: Optional[str] = Field(default=None, alias="sortField")
    sort_order: Optional[str] = Field(default=None, alias="sortOrder")
    search_after: Optional[str] = Field(default=None, alias="searchAfter")
    open_pit: Optional[bool] = Field(default=None, alias="openPit")
    pit_id: Optional[str] = Field(default=None, alias="pitId")
    pit_keep_alive: Optional[str] = Field(default=None, alias="pitKeepAlive")


class ListAgentsRequest(KibanaModel):
    params: ListAgentsParams = Field(default_factory=ListAgentsParams)


class ListByActionIdsRequest(KibanaModel):
    action_ids: List[str] = Field(alias="actionIds")


class AgentIdList(KibanaModel):
    items: List[str] = Field(default_factory=list)


class GetAgentParams(Params):
    with_metrics: Optional[bool] = Field(default=None, alias="withMetrics")


class GetAgentRequest(KibanaModel):
    agent_id: str
    params: GetAgentParams = Field(default_factory=GetAgentParams)


class AgentUpdateBody(KibanaModel):
    tags: Optional[List[str]] = None
    user_provided_metadata: Optional[Dict[str, Any]] = None


class UpdateAgentRequest(KibanaModel):
    agent_id: str
    body: AgentUpdateBody


class AgentIdRequest(KibanaModel):
    agent_id: str


class AgentStatusParams(Params):
    policy_id: Optional[str] = Field(default=None, alias="policyId")
    policy_ids: Optional[List[str]] = Field(default=None, alias="policyIds")
    kuery: Optional[str] = None


class AgentStatusRequest(KibanaModel):
    params: AgentStatusParams = Field(default_factory=AgentStatusParams)


class AgentStatusSummary(KibanaModel):
    active: int = 0
    all: int = 0
    error: int = 0
    events: int = 0
    inactive: int = 0
    offline: int = 0
    online: int = 0
    orphaned: Optional[int] = None
    other: int = 0
    unenrolled: Optional[int] = None
    updating: int = 0
    uninstalled: Optional[int] = None


class AgentStatusResult(KibanaModel):
    results: AgentStatusSummary = Field(default_factory=AgentStatusSummary)


class AgentStatusDataParams(Params):
    agents_ids: List[str] = Field(alias="agentsIds")
    pkg_name: Optional[str] = Field(default=None, alias="pkgName")
    pkg_version: Optional[str] = Field(default=None, alias="pkgVersion")
    preview_data: Optional[bool] = Field(default=None, alias="previewData")


class AgentStatusDataRequest(KibanaModel):
    params: AgentStatusDataParams


class AgentStatusData(KibanaModel):
    items: List[Dict[str, Any]] = Field(default_factory=list)
    data_preview: List[Any] = Field(default_factory=list, alias="dataPreview")


class AgentTags(KibanaModel):
    items: List[str] = Field(default_factory=list)


class FleetSetupStatus(KibanaModel):
    is_ready: bool = Field(default=False, alias="isReady")
    is_secrets_storage_enabled: Optional[bool] = Field(default=None, alias="is_secrets_storage_enabled")
    missing_requirements: List[str] = Field(default_factory=list)
    missing_optional_features: List[str] = Field(default_factory=list)
    package_verification_key_id: Optional[str] = None


class InitiateSetupBody(KibanaModel):
    admin_username: str
    admin_password: str


class InitiateSetupRequest(KibanaModel):
    body: InitiateSetupBody


class SetupResult(KibanaModel):
    is_initialized: bool = Field(default=False, alias="isInitialized")
    non_fatal_errors: List[Dict[str, Any]] = Field(default_factory=list, alias="nonFatalErrors")


class AgentUpload(KibanaModel):
    id: str
    name: str
    status: str
    action_id: Optional[str] = Field(default=None, alias="actionId")
    create_time: Optional[str] = Field(default=None, alias="createTime")
    file_path: Optional[str] = Field(default=None, alias="filePath")
    error: Optional[str] = None


class AgentFileRequest(KibanaModel):
    file_id: str
    file_name: str


class AgentFileIdRequest(KibanaModel):
    file_id: str


class DeletedFile(KibanaModel):
    id: str
    deleted: bool


class Agents(Namespace):

    async def list(self, req: Optional[ListAgentsRequest] = None, *options: RequestOption) -> APIResponse[AgentList]:
        req = req or ListAgentsRequest()
        return await self._api.perform(
            "fleet.agents.list", "GET", _AGENTS,
            params=req.params, result=AgentList, options=options,
        )

    async def list_by_action_ids(
        self, req: Optional[ListByActionIdsRequest], *options: RequestOption
    ) -> APIResponse[AgentIdList]:
        """Ids of the agents targeted by the given actions."""
        require(req)
        return await self._api.perform(
            "fleet.agents.list_by_actionid", "POST", _AGENTS,
            body=req, result=AgentIdList, options=options,
        )

    async def get(self, req: Optional[GetAgentRequest], *options: RequestOption) -> APIResponse[Item[Agent]]:
        require(req)
        require(req.agent_id, "agent id is required")
        return await self._api.perform(
            "fleet.agents.get", "GET", _AGENTS + "/{agent_id}",
            path_params={"agent_id": req.agent_id}, params=req.params, result=Item[Agent], options=options,
        )

    async def update(self, req: Optional[UpdateAgentRequest], *options: RequestOption) -> APIResponse[Item[Agent]]:
        require(req)
        require(req.agent_id, "agent id is required")
        return await self._api.perform(
            "fleet.agents.update", "PUT", _AGENTS + "/{agent_id}",
            path_params={"agent_id": req.agent_id}, body=req.body, result=Item[Agent], options=options,
        )

    async def delete(self, req: Optional[AgentIdRequest], *options: RequestOption) -> APIResponse[Dict[str, Any]]:
        require(req)
        require(req.agent_id, "agent id is required")
        return await self._api.perform(
            "fleet.agents.delete", "DELETE", _AGENTS + "/{agent_id}",
            path_params={"agent_id": req.agent_id}, result=Dict[str, Any], options=options,
        )

    async def status(self, req: Optional[AgentStatusRequest] = None, *options: RequestOption) -> APIResponse[AgentStatusResult]:
        req = req or AgentStatusRequest()
        return await self._api.perform(
            "fleet.agents.status", "GET", "/api/fleet/agent_status",
            params=req.params, result=AgentStatusResult, options=options,
        )

    async def status_data(self, req: Optional[AgentStatusDataRequest], *options: RequestOption) -> APIResponse[AgentStatusData]:
        """Whether the given agents have shipped data (optionally for one package)."""
        require(req)
        return await self._api.perform(
            "fleet.agents.status_data", "GET", "/api/fleet/agent_status/data",
            params=req.params, result=AgentStatusData, options=options,
        )

    async def list_tags(self, *options: RequestOption) -> APIResponse[AgentTags]:
        return await self._api.perform(
            "fleet.agents.list_tags", "GET", _AGENTS + "/tags",
            result=AgentTags, options=options,
        )

    async def get_setup(self, *options: RequestOption) -> APIResponse[FleetSetupStatus]:
        return await self._api.perform(
            "fleet.agents.get_setup", "GET", _AGENTS + "/setup",
            result=FleetSetupStatus, options=options,
        )

    async def initiate_setup(self, req: Optional[InitiateSetupRequest], *options: RequestOption) -> APIResponse[SetupResult]:
        require(req)
        return await self._api.perform(
            "fleet.agents.initiate_setup", "POST", _AGENTS + "/setup",
            body=req.body, result=SetupResult, options=options,
        )

    async def list_files(self, req: Optional[AgentIdRequest], *options: RequestOption) -> APIResponse[ItemList[AgentUpload]]:
        """Files uploaded by an agent (diagnostics bundles)."""
        require(req)
        require(req.agent_id, "agent id is required")
        return await self._api.perform(
            "fleet.agents.list_uploads", "GET", _AGENTS + "/{agent_id}/uploads",
            path_params={"agent_id": req.agent_id}, result=ItemList[AgentUpload], options=options,
        )

    async def get_file(self, req: Optional[AgentFileRequest], *options: RequestOption) -> APIResponse[bytes]:
        require(req)
        require(req.file_id, "file id is required")
        require(req.file_name, "file name is required")
        return await self._api.perform(
            "fleet.agents.get_file", "GET", _AGENTS + "/files/{file_id}/{file_name}",
            path_params={"file_id": req.file_id, "file_name": req.file_name}, result=bytes, options=options,
        )

    async def delete_file(self, req: Optional[AgentFileIdRequest], *options: RequestOption) -> APIResponse[DeletedFile]:
        require(req)
        require(req.file_id, "file id is required")
        return await self._api.perform(
            "fleet.agents.delete_file", "DELETE", _AGENTS + "/files/{file_id}",
            path_params={"file_id": req.file_id}, result=DeletedFile, options=options,
        )


class StandardAction(KibanaModel):
    type: Literal["UNENROLL", "UPGRADE", "POLICY_REASSIGN"]


class SettingsActionData(KibanaModel):
    """``log_level`` is one of debug, info, warning, error."""
    log_level: str


class SettingsAction(KibanaModel):
    type: Literal["SETTINGS"] = "SETTINGS"
    data: SettingsActionData


AgentAction = Annotated[Union[StandardAction, SettingsAction], Field(discriminator="type")]


class AgentActionBody(KibanaModel):
    action: AgentAction


class CreateAgentActionRequest(KibanaModel):
    agent_id: str
    body: AgentActionBody


class AgentActionItem(KibanaModel):
    id: str
    type: str
    created_at: Optional[str] = None
    agents: Optional[List[str]] = None
    data: Optional[Dict[str, Any]] = None
    expiration: Optional[str] = None
    minimum_execution_duration: Optional[float] = None
    namespaces: Optional[List[str]] = None
    rollout_duration_seconds: Optional[float] = None
    sent_at: Optional[str] = None
    source_uri: Optional[str] = None
    start_time: Optional[str] = None
    total: Optional[float] = None


class CancelActionRequest(KibanaModel):
    action_id: str


class ActionStatusParams(Params):
    page: Optional[int] = None
    per_page: Optional[int] = Field(default=None, alias="perPage")
    date: Optional[str] = None
    latest: Optional[int] = None
    error_size: Optional[int] = Field(default=None, alias="errorSize")


class ActionStatusRequest(KibanaModel):
    params: ActionStatusParams = Field(default_factory=ActionStatusParams)


class ActionError(KibanaModel):
    agent_id: str = Field(alias="agentId")
    error: str
    timestamp: str
    hostname: Optional[str] = None


class ActionStatus(KibanaModel):
    action_id: str = Field(alias="actionId")
    type: str
    status: str
    creation_time: str = Field(alias="creationTime")
    nb_agents_ack: float = Field(default=0, alias="nbAgentsAck")
    nb_agents_action_created: float = Field(default=0, alias="nbAgentsActionCreated")
    nb_agents_actioned: float = Field(default=0, alias="nbAgentsActioned")
    nb_agents_failed: float = Field(default=0, alias="nbAgentsFailed")
    cancellation_time: Optional[str] = Field(default=None, alias="cancellationTime")
    completion_time: Optional[str] = Field(default=None, alias="completionTime")
    expiration: Optional[str] = None
    has_rollout_period: Optional[bool] = Field(default=None, alias="hasRolloutPeriod")
    latest_errors: Optional[List[ActionError]] = Field(default=None, alias="latestErrors")
    new_policy_id: Optional[str] = Field(default=None, alias="newPolicyId")
    policy_id: Optional[str] = Field(default=None, alias="policyId")
    revision: Optional[float] = None
    start_time: Optional[str] = Field(default=None, alias="startTime")
    version: Optional[str] = None


class ActionStatusList(KibanaModel):
    items: List[ActionStatus] = Field(default_factory=list)


class ReassignBody(KibanaModel):
    policy_id: str


class ReassignRequest(KibanaModel):
    agent_id: str
    body: ReassignBody


class UnenrollBody(KibanaModel):
    force: Optional[bool] = None
    revoke: Optional[bool] = None


class UnenrollRequest(KibanaModel):
    agent_id: str
    body: UnenrollBody = Field(default_factory=UnenrollBody)


class UpgradeBody(KibanaModel):
    version: str
    force: Optional[bool] = None
    skip_rate_limit_check: Optional[bool] = Field(default=None, alias="skipRateLimitCheck")
    source_uri: Optional[str] = None


class UpgradeRequest(KibanaModel):
    agent_id: str
    body: UpgradeBody


class DiagnosticsBody(KibanaModel):
    additional_metrics: Optional[List[str]] = None


class DiagnosticsRequest(KibanaModel):
    agent_id: str
    body: DiagnosticsBody = Field(default_factory=DiagnosticsBody)


AgentSelector = Union[List[str], str]


class BulkReassignBody(KibanaModel):
    """``agents`` is a list of agent ids or a KQL query."""
    agents: AgentSelector
    policy_id: str
    batch_size: Optional[int] = Field(default=None, alias="batchSize")
    include_inactive: Optional[bool] = Field(default=None, alias="includeInactive")


class BulkReassignRequest(KibanaModel):
    body: BulkReassignBody


class BulkUnenrollBody(KibanaModel):
    agents: AgentSelector
    force: Optional[bool] = None
    revoke: Optional[bool] = None
    batch_size: Optional[int] = Field(default=None, alias="batchSize")
    include_inactive: Optional[bool] = Field(default=None, alias="includeInactive")


class BulkUnenrollRequest(KibanaModel):
    body: BulkUnenrollBody


class BulkUpdateTagsBody(KibanaModel):
    agents: AgentSelector
    tags_to_add: Optional[List[str]] = Field(default=None, alias="tagsToAdd")
    tags_to_remove: Optional[List[str]] = Field(default=None, alias="tagsToRemove")
    batch_size: Optional[int] = Field(default=None, alias="batchSize")


class BulkUpdateTagsRequest(KibanaModel):
    body: BulkUpdateTagsBody


class BulkUpgradeBody(KibanaModel):
    agents: AgentSelector
    version: str
    force: Optional[bool] = None
    skip_rate_limit_check: Optional[bool] = Field(default=None, alias="skipRateLimitCheck")
    source_uri: Optional[str] = None
    rollout_duration_seconds: Optional[int] = None
    start_time: Optional[str] = None
    batch_size: Optional[int] = Field(default=None, alias="batchSize")
    include_inactive: Optional[bool] = Field(default=None, alias="includeInactive")


class BulkUpgradeRequest(KibanaModel):
    body: BulkUpgradeBody


class BulkDiagnosticsBody(KibanaModel):
    agents: AgentSelector
    additional_metrics: Optional[List[str]] = None
    batch_size: Optional[int] = Field(default=None, alias="batchSize")


class BulkDiagnosticsRequest(KibanaModel):
    body: BulkDiagnosticsBody


class AgentActions(Namespace):

    async def create(
        self, req: Optional[CreateAgentActionRequest], *options: RequestOption
    ) -> APIResponse[Item[AgentActionItem]]:
        require(req)
        require(req.agent_id, "agent id is required")
        return await self._api.perform(
            "fleet.agent_actions.create", "POST", _AGENTS + "/{agent_id}/actions",
            path_params={"agent_id": req.agent_id}, body=req.body, result=Item[AgentActionItem], options=options,
        )

    async def cancel(self, req: Optional[CancelActionRequest], *options: RequestOption) -> APIResponse[Item[AgentActionItem]]:
        require(req)
        require(req.action_id, "action id is required")
        return await self._api.perform(
            "fleet.agent_actions.cancel", "POST", _AGENTS + "/actions/{action_id}/cancel",
            path_params={"action_id": req.action_id}, result=Item[AgentActionItem], options=options,
        )

    async def list_status(
        self, req: Optional[ActionStatusRequest] = None, *options: RequestOption
    ) -> APIResponse[ActionStatusList]:
        req = req or ActionStatusRequest()
        return await self._api.perform(
            "fleet.agent_actions.list_status", "GET", _AGENTS + "/action_status",
            params=req.params, result=ActionStatusList, options=options,
        )

    async def reassign(self, req: Optional[ReassignRequest], *options: RequestOption) -> APIResponse[Dict[str, Any]]:
        require(req)
        require(req.agent_id, "agent id is required")
        return await self._api.perform(
            "fleet.agent_actions.reassign", "POST", _AGENTS + "/{agent_id}/reassign",
            path_params={"agent_id": req.agent_id}, body=req.body, result=Dict[str, Any], options=options,
        )

    async def unenroll(self, req: Optional[UnenrollRequest], *options: RequestOption) -> APIResponse[Dict[str, Any]]:
        require(req)
        require(req.agent_id, "agent id is required")
        return await self._api.perform(
            "fleet.agents.unenroll", "POST", _AGENTS + "/{agent_id}/unenroll",
            path_params={"agent_id": req.agent_id}, body=req.body, result=Dict[str, Any], options=options,
        )

    async def upgrade(self, req: Optional[UpgradeRequest], *options: RequestOption) -> APIResponse[Dict[str, Any]]:
        require(req)
        require(req.agent_id, "agent id is required")
        return await self._api.perform(
            "fleet.agents.upgrade", "POST", _AGENTS + "/{agent_id}/upgrade",
            path_params={"agent_id": req.agent_id}, body=req.body, result=Dict[str, Any], options=options,
        )

    async def request_diagnostics(self, req: Optional[DiagnosticsRequest], *options: RequestOption) -> APIResponse[ActionIdResult]:
        require(req)
        require(req.agent_id, "agent id is required")
        return await self._api.perform(
            "fleet.agents.diagnostics", "POST", _AGENTS + "/{agent_id}/request_diagnostics",
            path_params={"agent_id": req.agent_id}, body=req.body, result=ActionIdResult, options=options,
        )

    async def bulk_reassign(self, req: Optional[BulkReassignRequest], *options: RequestOption) -> APIResponse[ActionIdResult]:
        require(req)
        return await self._api.perform(
            "fleet.agents.bulk.reassign", "POST", _AGENTS + "/bulk_reassign",
            body=req.body, result=ActionIdResult, options=options,
        )

    async def bulk_unenroll(self, req: Optional[BulkUnenrollRequest], *options: RequestOption) -> APIResponse[ActionIdResult]:
        require(req)
        return await self._api.perform(
            "fleet.agents.bulk.unenroll", "POST", _AGENTS + "/bulk_unenroll",
            body=req.body, result=ActionIdResult, options=options,
        )

    async def bulk_update_tags(self, req: Optional[BulkUpdateTagsRequest], *options: RequestOption) -> APIResponse[ActionIdResult]:
        require(req)
        return await self._api.perform(
            "fleet.agents.bulk.update", "POST", _AGENTS + "/bulk_update_agent_tags",
            body=req.body, result=ActionIdResult, options=options,
        )

    async def bulk_upgrade(self, req: Optional[BulkUpgradeRequest], *options: RequestOption) -> APIResponse[ActionIdResult]:
        require(req)
        return await self._api.perform(
            "fleet.agents.bulk.upgrade", "POST", _AGENTS + "/bulk_upgrade",
            body=req.body, result=ActionIdResult, options=options,
        )

    async def bulk_request_diagnostics(
        self, req: Optional[BulkDiagnosticsRequest], *options: RequestOption
    ) -> APIResponse[ActionIdResult]:
        require(req)
        return await self._api.perform(
            "fleet.agents.bulk.diagnostics", "POST", _AGENTS + "/request_diagnostics",
            body=req.body, result=ActionIdResult, options=options,
        )
