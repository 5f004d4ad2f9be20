"""Fleet agent policies."""
from typing import Any, Dict, List, Optional

from pydantic import Field

from ..base import Namespace, require
from ..models import KibanaModel, Params
from ..response import APIResponse
from ..transport import RequestOption
from .models import BulkItems, FormatParams, Item, ItemList
from .package_policies import PackagePolicy

_AGENT_POLICIES = "/api/fleet/agent_policies"


class AgentFeature(KibanaModel):
    name: str
    enabled: bool


class GlobalDataTag(KibanaModel):
    name: str
    value: Any


class RequiredVersion(KibanaModel):
    version: str
    percentage: float


class AgentPolicy(KibanaModel):
    id: str
    name: str
    namespace: str
    status: Optional[str] = None
    revision: float = 0
    description: Optional[str] = None
    is_managed: bool = False
    is_protected: bool = False
    is_default: Optional[bool] = None
    is_default_fleet_server: Optional[bool] = None
    is_preconfigured: Optional[bool] = None
    has_fleet_server: Optional[bool] = None
    monitoring_enabled: Optional[List[str]] = None
    monitoring_output_id: Optional[str] = None
    data_output_id: Optional[str] = None
    download_source_id: Optional[str] = None
    fleet_server_host_id: Optional[str] = None
    inactivity_timeout: Optional[float] = None
    unenroll_timeout: Optional[float] = None
    keep_monitoring_alive: Optional[bool] = None
    supports_agentless: Optional[bool] = None
    agent_features: Optional[List[AgentFeature]] = None
    global_data_tags: Optional[List[GlobalDataTag]] = None
    advanced_settings: Optional[Dict[str, Any]] = None
    monitoring_http: Optional[Dict[str, Any]] = None
    monitoring_diagnostics: Optional[Dict[str, Any]] = None
    overrides: Optional[Dict[str, Any]] = None
    required_versions: Optional[List[RequiredVersion]] = None
    space_ids: Optional[List[str]] = None
    package_policies: Optional[List[PackagePolicy]] = None
    agents: Optional[float] = None
    unprivileged_agents: Optional[float] = None
    schema_version: Optional[str] = None
    version: Optional[str] = None
    updated_at: Optional[str] = None
    updated_by: Optional[str] = None


class AgentPolicyBody(KibanaModel):
    name: str
    namespace: str
    id: Optional[str] = None
    description: Optional[str] = None
    monitoring_enabled: Optional[List[str]] = None
    monitoring_output_id: Optional[str] = None
    data_output_id: Optional[str] = None
    download_source_id: Optional[str] = None
    fleet_server_host_id: Optional[str] = None
    inactivity_timeout: Optional[float] = None
    unenroll_timeout: Optional[float] = None
    is_protected: Optional[bool] = None
    is_default: Optional[bool] = None
    is_default_fleet_server: Optional[bool] = None
    has_fleet_server: Optional[bool] = None
    keep_monitoring_alive: Optional[bool] = None
    supports_agentless: Optional[bool] = None
    agent_features: Optional[List[AgentFeature]] = None
    global_data_tags: Optional[List[GlobalDataTag]] = None
    advanced_settings: Optional[Dict[str, Any]] = None
    overrides: Optional[Dict[str, Any]] = None
    space_ids: Optional[List[str]] = None
    force: Optional[bool] = None


class ListAgentPoliciesParams(Params):
    page: Optional[int] = None
    per_page: Optional[int] = Field(default=None, alias="perPage")
    sort_field: Optional[str] = Field(default=None, alias="sortField")
    sort_order: Optional[str] = Field(default=None, alias="sortOrder")
    kuery: Optional[str] = None
    show_upgradeable: Optional[bool] = Field(default=None, alias="showUpgradeable")
    no_agent_count: Optional[bool] = Field(default=None, alias="noAgentCount")
    with_agent_count: Optional[bool] = Field(default=None, alias="withAgentCount")
    full: Optional[bool] = None
    format: Optional[str] = None


class ListAgentPoliciesRequest(KibanaModel):
    params: ListAgentPoliciesParams = Field(default_factory=ListAgentPoliciesParams)


class CreateAgentPolicyParams(Params):
    sys_monitoring: Optional[bool] = None


class CreateAgentPolicyRequest(KibanaModel):
    params: CreateAgentPolicyParams = Field(default_factory=CreateAgentPolicyParams)
    body: AgentPolicyBody


class GetAgentPolicyRequest(KibanaModel):
    id: str
    params: FormatParams = Field(default_factory=FormatParams)


class UpdateAgentPolicyRequest(KibanaModel):
    id: str
    params: FormatParams = Field(default_factory=FormatParams)
    body: AgentPolicyBody


class CopyAgentPolicyBody(KibanaModel):
    name: str
    description: Optional[str] = None


class CopyAgentPolicyRequest(KibanaModel):
    id: str
    params: FormatParams = Field(default_factory=FormatParams)
    body: CopyAgentPolicyBody


class FullPolicyParams(Params):
    download: Optional[bool] = None
    standalone: Optional[bool] = None
    kubernetes: Optional[bool] = None


class FullAgentPolicyRequest(KibanaModel):
    id: str
    params: FullPolicyParams = Field(default_factory=FullPolicyParams)


class DeleteAgentPolicyBody(KibanaModel):
    agent_policy_id: str = Field(alias="agentPolicyId")
    force: Optional[bool] = None


class DeleteAgentPolicyRequest(KibanaModel):
    body: DeleteAgentPolicyBody


class DeletedAgentPolicy(KibanaModel):
    id: str
    name: str


class BulkGetAgentPoliciesBody(KibanaModel):
    ids: List[str]
    full: Optional[bool] = None
    ignore_missing: Optional[bool] = Field(default=None, alias="ignoreMissing")


class BulkGetAgentPoliciesRequest(KibanaModel):
    params: FormatParams = Field(default_factory=FormatParams)
    body: BulkGetAgentPoliciesBody


class AgentPolicies(Namespace):

    async def list(
        self, req: Optional[ListAgentPoliciesRequest] = None, *options: RequestOption
    ) -> APIResponse[ItemList[AgentPolicy]]:
        req = req or ListAgentPoliciesRequest()
        return await self._api.perform(
            "fleet.agent_policies.list", "GET", _AGENT_POLICIES,
            params=req.params, result=ItemList[AgentPolicy], options=options,
        )

    async def create(self, req: Optional[CreateAgentPolicyRequest], *options: RequestOption) -> APIResponse[Item[AgentPolicy]]:
        require(req)
        return await self._api.perform(
            "fleet.agent_policies.create", "POST", _AGENT_POLICIES,
            params=req.params, body=req.body, result=Item[AgentPolicy], options=options,
        )

    async def get(self, req: Optional[GetAgentPolicyRequest], *options: RequestOption) -> APIResponse[Item[AgentPolicy]]:
        require(req)
        require(req.id, "agent policy id is required")
        return await self._api.perform(
            "fleet.agent_policies.get", "GET", _AGENT_POLICIES + "/{id}",
            path_params={"id": req.id}, params=req.params, result=Item[AgentPolicy], options=options,
        )

    async def update(self, req: Optional[UpdateAgentPolicyRequest], *options: RequestOption) -> APIResponse[Item[AgentPolicy]]:
        require(req)
        require(req.id, "agent policy id is required")
        return await self._api.perform(
            "fleet.agent_policies.update", "PUT", _AGENT_POLICIES + "/{id}",
            path_params={"id": req.id}, params=req.params, body=req.body, result=Item[AgentPolicy], options=options,
        )

    async def copy(self, req: Optional[CopyAgentPolicyRequest], *options: RequestOption) -> APIResponse[Item[AgentPolicy]]:
        require(req)
        require(req.id, "agent policy id is required")
        return await self._api.perform(
            "fleet.agent_policies.copy", "POST", _AGENT_POLICIES + "/{id}/copy",
            path_params={"id": req.id}, params=req.params, body=req.body, result=Item[AgentPolicy], options=options,
        )

    async def download(self, req: Optional[FullAgentPolicyRequest], *options: RequestOption) -> APIResponse[bytes]:
        """The compiled policy as the YAML file an agent would receive."""
        require(req)
        require(req.id, "agent policy id is required")
        return await self._api.perform(
            "fleet.agent_policies.download", "GET", _AGENT_POLICIES + "/{id}/download",
            path_params={"id": req.id}, params=req.params, result=bytes, options=options,
        )

    async def get_full(self, req: Optional[FullAgentPolicyRequest], *options: RequestOption) -> APIResponse[Item[Dict[str, Any]]]:
        require(req)
        require(req.id, "agent policy id is required")
        return await self._api.perform(
            "fleet.agent_policies.full", "GET", _AGENT_POLICIES + "/{id}/full",
            path_params={"id": req.id}, params=req.params, result=Item[Dict[str, Any]], options=options,
        )

    async def delete(self, req: Optional[DeleteAgentPolicyRequest], *options: RequestOption) -> APIResponse[DeletedAgentPolicy]:
        require(req)
        return await self._api.perform(
            "fleet.agent_policies.delete", "POST", _AGENT_POLICIES + "/delete",
            body=req.body, result=DeletedAgentPolicy, options=options,
        )

    async def bulk_get(
        self, req: Optional[BulkGetAgentPoliciesRequest], *options: RequestOption
    ) -> APIResponse[BulkItems[AgentPolicy]]:
        require(req)
        return await self._api.perform(
            "fleet.agent_policies.bulk.get", "POST", _AGENT_POLICIES + "/_bulk_get",
            params=req.params, body=req.body, result=BulkItems[AgentPolicy], options=options,
        )
