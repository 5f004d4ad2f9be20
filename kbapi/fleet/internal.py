"""Fleet setup, settings, permission and health checks, plus data stream listing."""
from typing import List, Optional

from pydantic import Field

from ..base import Namespace, require
from ..models import KibanaModel, Params
from ..response import APIResponse
from ..transport import RequestOption
from .models import Item


class HealthCheckBody(KibanaModel):
    id: str


class HealthCheckRequest(KibanaModel):
    body: HealthCheckBody


class ServerHealth(KibanaModel):
    status: str
    host_id: Optional[str] = None
    name: Optional[str] = None


class CheckPermissionsParams(Params):
    fleet_server_setup: Optional[bool] = Field(default=None, alias="fleetServerSetup")


class CheckPermissionsRequest(KibanaModel):
    params: CheckPermissionsParams = Field(default_factory=CheckPermissionsParams)


class PermissionsResult(KibanaModel):
    success: bool
    error: Optional[str] = None


class DeleteUnenrolledAgents(KibanaModel):
    enabled: bool
    is_preconfigured: bool = False


class FleetSettings(KibanaModel):
    id: str
    version: Optional[str] = None
    delete_unenrolled_agents: Optional[DeleteUnenrolledAgents] = None
    has_seen_add_data_notice: Optional[bool] = None
    output_secret_storage_requirements_met: Optional[bool] = None
    secret_storage_requirements_met: Optional[bool] = None
    preconfigured_fields: Optional[List[str]] = None
    prerelease_integrations_enabled: Optional[bool] = None
    use_space_awareness_migration_started_at: Optional[str] = None
    use_space_awareness_migration_status: Optional[str] = None


class FleetSettingsBody(KibanaModel):
    additional_yaml_config: Optional[str] = None
    delete_unenrolled_agents: Optional[DeleteUnenrolledAgents] = None
    has_seen_add_data_notice: Optional[bool] = None
    kibana_ca_sha256: Optional[str] = None
    kibana_urls: Optional[List[str]] = None
    prerelease_integrations_enabled: Optional[bool] = None


class UpdateSettingsRequest(KibanaModel):
    body: FleetSettingsBody


class NonFatalError(KibanaModel):
    name: str
    message: str


class FleetSetup(KibanaModel):
    is_initialized: bool = Field(alias="isInitialized")
    non_fatal_errors: List[NonFatalError] = Field(default_factory=list, alias="nonFatalErrors")


class Internal(Namespace):

    async def check_fleet_server_health(
        self, req: Optional[HealthCheckRequest], *options: RequestOption
    ) -> APIResponse[ServerHealth]:
        require(req)
        require(req.body.id, "fleet server host id is required")
        return await self._api.perform(
            "fleet.internal.check_fleet_server_health", "POST", "/api/fleet/health_check",
            body=req.body, result=ServerHealth, options=options,
        )

    async def check_permissions(
        self, req: Optional[CheckPermissionsRequest] = None, *options: RequestOption
    ) -> APIResponse[PermissionsResult]:
        req = req or CheckPermissionsRequest()
        return await self._api.perform(
            "fleet.internal.check_permissions", "GET", "/api/fleet/check-permissions",
            params=req.params, result=PermissionsResult, options=options,
        )

    async def get_settings(self, *options: RequestOption) -> APIResponse[Item[FleetSettings]]:
        return await self._api.perform(
            "fleet.internal.get_settings", "GET", "/api/fleet/settings",
            result=Item[FleetSettings], options=options,
        )

    async def update_settings(
        self, req: Optional[UpdateSettingsRequest], *options: RequestOption
    ) -> APIResponse[Item[FleetSettings]]:
        require(req)
        return await self._api.perform(
            "fleet.internal.update_settings", "PUT", "/api/fleet/settings",
            body=req.body, result=Item[FleetSettings], options=options,
        )

    async def initiate_fleet_setup(self, *options: RequestOption) -> APIResponse[FleetSetup]:
        return await self._api.perform(
            "fleet.internal.initiate_fleet_setup", "POST", "/api/fleet/setup",
            result=FleetSetup, options=options,
        )


class Dashboard(KibanaModel):
    id: str
    title: str


class DataStream(KibanaModel):
    index: str
    dataset: str
    namespace: str
    type: str
    package: str
    package_version: Optional[str] = None
    last_activity_ms: float = 0
    size_in_bytes: float = 0
    size_in_bytes_formatted: Optional[str] = None
    dashboards: List[Dashboard] = Field(default_factory=list)


class DataStreamList(KibanaModel):
    data_streams: List[DataStream] = Field(default_factory=list)


class DataStreams(Namespace):

    async def list(self, *options: RequestOption) -> APIResponse[DataStreamList]:
        return await self._api.perform(
            "fleet.data_streams.list", "GET", "/api/fleet/data_streams",
            result=DataStreamList, options=options,
        )
