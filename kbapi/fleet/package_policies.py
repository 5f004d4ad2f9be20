"""Fleet package policies (integration instances attached to agent policies)."""
from typing import Any, Dict, List, Optional

from pydantic import Field

from ..base import Namespace, require
from ..models import KibanaModel, Params
from ..response import APIResponse
from ..transport import RequestOption
from .models import BulkItems, Deleted, FormatParams, Item, ItemList

_PACKAGE_POLICIES = "/api/fleet/package_policies"


class PolicyPackage(KibanaModel):
    name: str
    version: str
    title: Optional[str] = None
    requires_root: Optional[bool] = None
    experimental_data_stream_features: Optional[List[Dict[str, Any]]] = None


class StreamDataStream(KibanaModel):
    type: Optional[str] = None
    dataset: Optional[str] = None
    elasticsearch: Optional[Dict[str, Any]] = None


class PackagePolicyInputStream(KibanaModel):
    enabled: bool = True
    id: Optional[str] = None
    data_stream: Optional[StreamDataStream] = None
    vars: Optional[Dict[str, Any]] = None
    keep_enabled: Optional[bool] = None
    release: Optional[str] = None
    compiled_stream: Optional[Any] = None


class PackagePolicyInput(KibanaModel):
    type: str
    enabled: bool = True
    policy_template: Optional[str] = None
    streams: Optional[List[PackagePolicyInputStream]] = None
    vars: Optional[Dict[str, Any]] = None
    config: Optional[Dict[str, Any]] = None
    keep_enabled: Optional[bool] = None
    compiled_input: Optional[Any] = None


class PackagePolicy(KibanaModel):
    id: str
    name: str
    enabled: bool = True
    revision: float = 0
    namespace: Optional[str] = None
    description: Optional[str] = None
    package: Optional[PolicyPackage] = None
    policy_id: Optional[str] = None
    policy_ids: Optional[List[str]] = None
    output_id: Optional[str] = None
    inputs: Any = None
    vars: Optional[Dict[str, Any]] = None
    overrides: Optional[Dict[str, Any]] = None
    is_managed: Optional[bool] = None
    supports_agentless: Optional[bool] = None
    agents: Optional[float] = None
    secret_references: Optional[List[Dict[str, str]]] = None
    space_ids: Optional[List[str]] = Field(default=None, alias="spaceIds")
    elasticsearch: Optional[Dict[str, Any]] = None
    additional_datastreams_permissions: Optional[List[str]] = None
    version: Optional[str] = None
    created_at: Optional[str] = None
    created_by: Optional[str] = None
    updated_at: Optional[str] = None
    updated_by: Optional[str] = None


class PackagePolicyBody(KibanaModel):
    """Create/update body.

    ``inputs`` is a list of :class:`PackagePolicyInput` for the legacy format,
    or a mapping keyed by input id for ``format=simplified``.
    """
    name: str
    package: PolicyPackage
    id: Optional[str] = None
    namespace: Optional[str] = None
    description: Optional[str] = None
    enabled: Optional[bool] = None
    policy_id: Optional[str] = None
    policy_ids: Optional[List[str]] = None
    output_id: Optional[str] = None
    inputs: Any = None
    vars: Optional[Dict[str, Any]] = None
    overrides: Optional[Dict[str, Any]] = None
    force: Optional[bool] = None
    is_managed: Optional[bool] = None
    supports_agentless: Optional[bool] = None


class ListPackagePoliciesParams(Params):
    page: Optional[int] = None
    per_page: Optional[int] = Field(default=None, alias="perPage")
    sort_field: Optional[str] = Field(default=None, alias="sortField")
    sort_order: Optional[str] = Field(default=None, alias="sortOrder")
    show_upgradeable: Optional[bool] = Field(default=None, alias="showUpgradeable")
    kuery: Optional[str] = None
    format: Optional[str] = None
    with_agent_count: Optional[bool] = Field(default=None, alias="withAgentCount")


class ListPackagePoliciesRequest(KibanaModel):
    params: ListPackagePoliciesParams = Field(default_factory=ListPackagePoliciesParams)


class CreatePackagePolicyRequest(KibanaModel):
    params: FormatParams = Field(default_factory=FormatParams)
    body: PackagePolicyBody


class GetPackagePolicyRequest(KibanaModel):
    package_policy_id: str
    params: FormatParams = Field(default_factory=FormatParams)


class UpdatePackagePolicyRequest(KibanaModel):
    package_policy_id: str
    params: FormatParams = Field(default_factory=FormatParams)
    body: PackagePolicyBody


class DeletePackagePolicyParams(Params):
    force: Optional[bool] = None


class DeletePackagePolicyRequest(KibanaModel):
    package_policy_id: str
    params: DeletePackagePolicyParams = Field(default_factory=DeletePackagePolicyParams)


class BulkDeletePackagePoliciesBody(KibanaModel):
    package_policy_ids: List[str] = Field(alias="packagePolicyIds")
    force: Optional[bool] = None


class BulkDeletePackagePoliciesRequest(KibanaModel):
    body: BulkDeletePackagePoliciesBody


class BulkGetPackagePoliciesBody(KibanaModel):
    ids: List[str]
    ignore_missing: Optional[bool] = Field(default=None, alias="ignoreMissing")


class BulkGetPackagePoliciesRequest(KibanaModel):
    params: FormatParams = Field(default_factory=FormatParams)
    body: BulkGetPackagePoliciesBody


class UpgradePackagePoliciesBody(KibanaModel):
    package_policy_ids: List[str] = Field(alias="packagePolicyIds")


class UpgradePackagePoliciesRequest(KibanaModel):
    body: UpgradePackagePoliciesBody


class UpgradeDryRunBody(KibanaModel):
    package_policy_ids: List[str] = Field(alias="packagePolicyIds")
    package_version: Optional[str] = Field(default=None, alias="packageVersion")


class UpgradeDryRunRequest(KibanaModel):
    body: UpgradeDryRunBody


class UpgradeResult(KibanaModel):
    id: str
    success: bool
    name: Optional[str] = None
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    body: Optional[Dict[str, Any]] = None


class UpgradeDryRunResult(KibanaModel):
    has_errors: bool = Field(default=False, alias="hasErrors")
    name: Optional[str] = None
    diff: Optional[List[Dict[str, Any]]] = None
    agent_diff: Optional[List[Any]] = None
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    body: Optional[Dict[str, Any]] = None


class PackagePolicies(Namespace):

    async def list(
        self, req: Optional[ListPackagePoliciesRequest] = None, *options: RequestOption
    ) -> APIResponse[ItemList[PackagePolicy]]:
        req = req or ListPackagePoliciesRequest()
        return await self._api.perform(
            "fleet.package_policies.list", "GET", _PACKAGE_POLICIES,
            params=req.params, result=ItemList[PackagePolicy], options=options,
        )

    async def create(
        self, req: Optional[CreatePackagePolicyRequest], *options: RequestOption
    ) -> APIResponse[Item[PackagePolicy]]:
        require(req)
        return await self._api.perform(
            "fleet.package_policies.create", "POST", _PACKAGE_POLICIES,
            params=req.params, body=req.body, result=Item[PackagePolicy], options=options,
        )

    async def get(self, req: Optional[GetPackagePolicyRequest], *options: RequestOption) -> APIResponse[Item[PackagePolicy]]:
        require(req)
        require(req.package_policy_id, "package policy id is required")
        return await self._api.perform(
            "fleet.package_policies.get", "GET", _PACKAGE_POLICIES + "/{package_policy_id}",
            path_params={"package_policy_id": req.package_policy_id}, params=req.params,
            result=Item[PackagePolicy], options=options,
        )

    async def update(
        self, req: Optional[UpdatePackagePolicyRequest], *options: RequestOption
    ) -> APIResponse[Item[PackagePolicy]]:
        require(req)
        require(req.package_policy_id, "package policy id is required")
        return await self._api.perform(
            "fleet.package_policies.update", "PUT", _PACKAGE_POLICIES + "/{package_policy_id}",
            path_params={"package_policy_id": req.package_policy_id}, params=req.params, body=req.body,
            result=Item[PackagePolicy], options=options,
        )

    async def delete(self, req: Optional[DeletePackagePolicyRequest], *options: RequestOption) -> APIResponse[Deleted]:
        require(req)
        require(req.package_policy_id, "package policy id is required")
        return await self._api.perform(
            "fleet.package_policies.delete", "DELETE", _PACKAGE_POLICIES + "/{package_policy_id}",
            path_params={"package_policy_id": req.package_policy_id}, params=req.params,
            result=Deleted, options=options,
        )

    async def bulk_delete(
        self, req: Optional[BulkDeletePackagePoliciesRequest], *options: RequestOption
    ) -> APIResponse[List[Deleted]]:
        require(req)
        return await self._api.perform(
            "fleet.package_policies.bulk.delete", "POST", _PACKAGE_POLICIES + "/delete",
            body=req.body, result=List[Deleted], options=options,
        )

    async def bulk_get(
        self, req: Optional[BulkGetPackagePoliciesRequest], *options: RequestOption
    ) -> APIResponse[BulkItems[PackagePolicy]]:
        require(req)
        return await self._api.perform(
            "fleet.package_policies.bulk.get", "POST", _PACKAGE_POLICIES + "/_bulk_get",
            params=req.params, body=req.body, result=BulkItems[PackagePolicy], options=options,
        )

    async def upgrade(
        self, req: Optional[UpgradePackagePoliciesRequest], *options: RequestOption
    ) -> APIResponse[List[UpgradeResult]]:
        require(req)
        return await self._api.perform(
            "fleet.package_policies.upgrade", "POST", _PACKAGE_POLICIES + "/upgrade",
            body=req.body, result=List[UpgradeResult], options=options,
        )

    async def upgrade_dry_run(
        self, req: Optional[UpgradeDryRunRequest], *options: RequestOption
    ) -> APIResponse[List[UpgradeDryRunResult]]:
        require(req)
        return await self._api.perform(
            "fleet.package_policies.upgrade_dry_run", "POST", _PACKAGE_POLICIES + "/upgrade/dryrun",
            body=req.body, result=List[UpgradeDryRunResult], options=options,
        )
