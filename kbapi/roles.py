"""Kibana role management (``/api/security/role``)."""
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import Namespace, below_299, require
from .models import KibanaModel, Params
from .response import APIResponse
from .transport import RequestOption


class KibanaPermission(KibanaModel):
    base: List[str] = Field(default_factory=list)
    spaces: List[str] = Field(default_factory=list)
    feature: Dict[str, Any] = Field(default_factory=dict)


class FieldSecurity(KibanaModel):
    grant: List[str] = Field(default_factory=list)
    except_: Optional[List[str]] = Field(default=None, alias="except")


class IndexPrivilege(KibanaModel):
    names: List[str] = Field(default_factory=list)
    privileges: List[str] = Field(default_factory=list)
    query: Optional[str] = None
    field_security: Optional[FieldSecurity] = None
    allow_restricted_indices: Optional[bool] = None


class RemoteCluster(KibanaModel):
    clusters: List[str]
    privileges: List[str]


class RemoteIndices(IndexPrivilege):
    clusters: List[str] = Field(default_factory=list)


class ElasticsearchPrivilege(KibanaModel):
    cluster: List[str] = Field(default_factory=list)
    indices: List[IndexPrivilege] = Field(default_factory=list)
    run_as: Optional[List[str]] = None
    remote_cluster: Optional[List[RemoteCluster]] = None
    remote_indices: Optional[List[RemoteIndices]] = None


class RoleMetadata(KibanaModel):
    version: Optional[int] = None


class TransientMetadata(KibanaModel):
    enabled: bool = True


class RoleBody(KibanaModel):
    kibana: List[KibanaPermission] = Field(default_factory=list)
    elasticsearch: ElasticsearchPrivilege = Field(default_factory=ElasticsearchPrivilege)
    description: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class Role(RoleBody):
    name: Optional[str] = None
    transient_metadata: Optional[TransientMetadata] = None


class RolesListParams(Params):
    replace_deprecated_privileges: Optional[bool] = Field(default=None, alias="replaceDeprecatedPrivileges")


class RolesListRequest(KibanaModel):
    params: RolesListParams = Field(default_factory=RolesListParams)


class RolesGetRequest(KibanaModel):
    name: str
    params: RolesListParams = Field(default_factory=RolesListParams)


class RolesDeleteRequest(KibanaModel):
    name: str


class CreateSingleParams(Params):
    create_only: Optional[bool] = Field(default=None, alias="createOnly")


class RolesCreateUpdateSingleRoleRequest(KibanaModel):
    name: str
    params: CreateSingleParams = Field(default_factory=CreateSingleParams)
    body: RoleBody


class RolesCreateOrUpdateMultiBody(KibanaModel):
    roles: Dict[str, RoleBody]


class RolesCreateOrUpdateMultiRequest(KibanaModel):
    body: RolesCreateOrUpdateMultiBody


class Roles(Namespace):

    async def list(self, req: Optional[RolesListRequest] = None, *options: RequestOption) -> APIResponse[List[Role]]:
        req = req or RolesListRequest()
        return await self._api.perform(
            "roles.list", "GET", "/api/security/role",
            params=req.params, result=List[Role], options=options,
        )

    async def get(self, req: Optional[RolesGetRequest], *options: RequestOption) -> APIResponse[Role]:
        require(req)
        require(req.name, "role name is required")
        return await self._api.perform(
            "roles.get", "GET", "/api/security/role/{name}",
            path_params={"name": req.name}, params=req.params, result=Role, options=options,
        )

    async def delete(self, req: Optional[RolesDeleteRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        require(req.name, "role name is required")
        return await self._api.perform(
            "roles.delete", "DELETE", "/api/security/role/{name}",
            path_params={"name": req.name}, success=below_299, options=options,
        )

    async def create_or_update_single(
        self, req: Optional[RolesCreateUpdateSingleRoleRequest], *options: RequestOption
    ) -> APIResponse[None]:
        require(req)
        require(req.name, "role name is required")
        return await self._api.perform(
            "roles.create_update_single", "PUT", "/api/security/role/{name}",
            path_params={"name": req.name}, params=req.params, body=req.body,
            success=below_299, options=options,
        )

    async def create_or_update_multi(
        self, req: Optional[RolesCreateOrUpdateMultiRequest], *options: RequestOption
    ) -> APIResponse[Dict[str, Any]]:
        require(req)
        return await self._api.perform(
            "roles.create_update_multi", "PUT", "/api/security/roles",
            body=req.body, options=options,
        )
