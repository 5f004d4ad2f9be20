"""APM settings, agent keys, annotations and source maps (``/api/apm``)."""
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import Namespace, below_299, require
from .models import KibanaModel, Params
from .response import APIResponse
from .transport import RequestOption


class APMService(KibanaModel):
    name: Optional[str] = None
    environment: Optional[str] = None


class AgentConfiguration(KibanaModel):
    service: APMService
    settings: Dict[str, str] = Field(default_factory=dict)
    agent_name: Optional[str] = None
    applied_by_agent: Optional[bool] = None
    etag: Optional[str] = None
    timestamp: Optional[float] = Field(default=None, alias="@timestamp")
    id: Optional[str] = None


class AgentConfigurationList(KibanaModel):
    configurations: List[AgentConfiguration] = Field(default_factory=list)


class AgentConfigurationBody(KibanaModel):
    service: APMService
    settings: Dict[str, str]
    agent_name: Optional[str] = None


class AgentConfigurationOverwriteParams(Params):
    overwrite: Optional[bool] = None


class AgentConfigurationCreateUpdateRequest(KibanaModel):
    params: AgentConfigurationOverwriteParams = Field(default_factory=AgentConfigurationOverwriteParams)
    body: AgentConfigurationBody


class AgentConfigurationGetParams(Params):
    name: Optional[str] = None
    environment: Optional[str] = None


class AgentConfigurationGetRequest(KibanaModel):
    params: AgentConfigurationGetParams = Field(default_factory=AgentConfigurationGetParams)


class ServiceNameParams(Params):
    service_name: Optional[str] = Field(default=None, alias="serviceName")


class ServiceNameRequest(KibanaModel):
    params: ServiceNameParams = Field(default_factory=ServiceNameParams)


class APMEnvironment(KibanaModel):
    name: Optional[str] = None
    already_configured: Optional[bool] = Field(default=None, alias="alreadyConfigured")


class APMEnvironments(KibanaModel):
    environments: List[APMEnvironment] = Field(default_factory=list)


class AgentName(KibanaModel):
    agent_name: Optional[str] = Field(default=None, alias="agentName")


class AgentConfigurationDeleteBody(KibanaModel):
    service: APMService


class AgentConfigurationDeleteRequest(KibanaModel):
    body: AgentConfigurationDeleteBody


class AgentConfigurationLookupBody(KibanaModel):
    service: APMService
    etag: Optional[str] = None
    mark_as_applied_by_agent: Optional[bool] = None


class AgentConfigurationLookupRequest(KibanaModel):
    body: AgentConfigurationLookupBody


class AgentConfigurationHit(KibanaModel):
    id: Optional[str] = Field(default=None, alias="_id")
    index: Optional[str] = Field(default=None, alias="_index")
    score: Optional[float] = Field(default=None, alias="_score")
    source: Optional[AgentConfiguration] = Field(default=None, alias="_source")


class AgentKeyCreateBody(KibanaModel):
    name: str
    privileges: List[str]


class AgentKeyCreateRequest(KibanaModel):
    body: AgentKeyCreateBody


class AgentKey(KibanaModel):
    id: str
    name: str
    api_key: str
    encoded: str
    expiration: Optional[int] = None


class AgentKeyCreated(KibanaModel):
    agent_key: Optional[AgentKey] = Field(default=None, alias="agentKey")


class AnnotationService(KibanaModel):
    version: str
    environment: Optional[str] = None


class AnnotationCreateBody(KibanaModel):
    timestamp: str = Field(alias="@timestamp")
    service: AnnotationService
    message: Optional[str] = None
    tags: Optional[List[str]] = None


class AnnotationCreateRequest(KibanaModel):
    service_name: str
    body: AnnotationCreateBody


class AnnotationCreated(KibanaModel):
    id: Optional[str] = Field(default=None, alias="_id")
    index: Optional[str] = Field(default=None, alias="_index")
    source: Optional[Dict[str, Any]] = Field(default=None, alias="_source")


class AnnotationSearchParams(Params):
    environment: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None


class AnnotationSearchRequest(KibanaModel):
    service_name: str
    params: AnnotationSearchParams = Field(default_factory=AnnotationSearchParams)


class Annotation(KibanaModel):
    id: Optional[str] = None
    text: Optional[str] = None
    type: Optional[str] = None
    timestamp: Optional[float] = Field(default=None, alias="@timestamp")


class AnnotationSearchResult(KibanaModel):
    annotations: List[Annotation] = Field(default_factory=list)


class ServerSchemaBody(KibanaModel):
    schema_: Dict[str, Any] = Field(alias="schema")


class ServerSchemaSaveRequest(KibanaModel):
    body: ServerSchemaBody


class SourcemapsGetParams(Params):
    page: Optional[int] = None
    per_page: Optional[int] = Field(default=None, alias="perPage")


class SourcemapsGetRequest(KibanaModel):
    params: SourcemapsGetParams = Field(default_factory=SourcemapsGetParams)


class SourcemapArtifact(KibanaModel):
    id: Optional[str] = None
    identifier: Optional[str] = None
    type: Optional[str] = None
    package_name: Optional[str] = Field(default=None, alias="packageName")
    relative_url: Optional[str] = None
    created: Optional[str] = None
    compression_algorithm: Optional[str] = Field(default=None, alias="compressionAlgorithm")
    encryption_algorithm: Optional[str] = Field(default=None, alias="encryptionAlgorithm")
    decoded_sha256: Optional[str] = Field(default=None, alias="decodedSha256")
    decoded_size: Optional[float] = Field(default=None, alias="decodedSize")
    encoded_sha256: Optional[str] = Field(default=None, alias="encodedSha256")
    encoded_size: Optional[float] = Field(default=None, alias="encodedSize")
    body: Optional[Any] = None


class SourcemapList(KibanaModel):
    artifacts: List[SourcemapArtifact] = Field(default_factory=list)


class SourcemapsUploadRequest(KibanaModel):
    service_name: str
    service_version: str
    bundle_filepath: str
    sourcemap: bytes


class SourcemapsDeleteRequest(KibanaModel):
    id: str


_AGENT_CONFIG = "/api/apm/settings/agent-configuration"


class AgentConfigurations(Namespace):

    async def create_update(
        self, req: Optional[AgentConfigurationCreateUpdateRequest], *options: RequestOption
    ) -> APIResponse[Dict[str, Any]]:
        require(req)
        return await self._api.perform(
            "apm.agent_configuration.create_update", "PUT", _AGENT_CONFIG,
            params=req.params, body=req.body, success=below_299, options=options,
        )

    async def get(
        self, req: Optional[AgentConfigurationGetRequest] = None, *options: RequestOption
    ) -> APIResponse[AgentConfiguration]:
        req = req or AgentConfigurationGetRequest()
        return await self._api.perform(
            "apm.agent_configuration.get", "GET", _AGENT_CONFIG + "/view",
            params=req.params, result=AgentConfiguration, success=below_299, options=options,
        )

    async def get_environments(
        self, req: Optional[ServiceNameRequest] = None, *options: RequestOption
    ) -> APIResponse[APMEnvironments]:
        req = req or ServiceNameRequest()
        return await self._api.perform(
            "apm.agent_configuration.get_environment", "GET", _AGENT_CONFIG + "/environments",
            params=req.params, result=APMEnvironments, success=below_299, options=options,
        )

    async def get_name(self, req: Optional[ServiceNameRequest], *options: RequestOption) -> APIResponse[AgentName]:
        require(req)
        require(req.params.service_name, "service name is required")
        return await self._api.perform(
            "apm.agent_configuration.get_name", "GET", _AGENT_CONFIG + "/agent_name",
            params=req.params, result=AgentName, success=below_299, options=options,
        )

    async def delete(
        self, req: Optional[AgentConfigurationDeleteRequest], *options: RequestOption
    ) -> APIResponse[Dict[str, Any]]:
        require(req)
        return await self._api.perform(
            "apm.agent_configuration.delete", "DELETE", _AGENT_CONFIG,
            body=req.body, success=below_299, options=options,
        )

    async def list(self, *options: RequestOption) -> APIResponse[AgentConfigurationList]:
        return await self._api.perform(
            "apm.agent_configuration.list", "GET", _AGENT_CONFIG,
            result=AgentConfigurationList, success=below_299, options=options,
        )

    async def lookup(
        self, req: Optional[AgentConfigurationLookupRequest], *options: RequestOption
    ) -> APIResponse[AgentConfigurationHit]:
        """Find the configuration that applies to a service, optionally marking it applied."""
        require(req)
        return await self._api.perform(
            "apm.agent_configuration.lookup", "POST", _AGENT_CONFIG + "/search",
            body=req.body, result=AgentConfigurationHit, success=below_299, options=options,
        )


class AgentKeys(Namespace):

    async def create(self, req: Optional[AgentKeyCreateRequest], *options: RequestOption) -> APIResponse[AgentKeyCreated]:
        require(req)
        return await self._api.perform(
            "apm.agent_key.create", "POST", "/api/apm/agent_keys",
            body=req.body, result=AgentKeyCreated, success=below_299, options=options,
        )


class Annotations(Namespace):

    async def create(
        self, req: Optional[AnnotationCreateRequest], *options: RequestOption
    ) -> APIResponse[AnnotationCreated]:
        require(req)
        require(req.service_name, "service name is required")
        return await self._api.perform(
            "apm.annotation.create", "POST", "/api/apm/services/{service_name}/annotation",
            path_params={"service_name": req.service_name},
            body=req.body, result=AnnotationCreated, success=below_299, options=options,
        )

    async def search(
        self, req: Optional[AnnotationSearchRequest], *options: RequestOption
    ) -> APIResponse[AnnotationSearchResult]:
        require(req)
        require(req.service_name, "service name is required")
        return await self._api.perform(
            "apm.annotation.search", "GET", "/api/apm/services/{service_name}/annotation/search",
            path_params={"service_name": req.service_name},
            params=req.params, result=AnnotationSearchResult, success=below_299, options=options,
        )


class ServerSchema(Namespace):

    async def save(self, req: Optional[ServerSchemaSaveRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        return await self._api.perform(
            "apm.server_schema.save", "POST", "/api/apm/fleet/apm_server_schema",
            body=req.body, success=below_299, options=options,
        )


class Sourcemaps(Namespace):

    async def get(self, req: Optional[SourcemapsGetRequest] = None, *options: RequestOption) -> APIResponse[SourcemapList]:
        req = req or SourcemapsGetRequest()
        return await self._api.perform(
            "apm.sourcemaps.get", "GET", "/api/apm/sourcemaps",
            params=req.params, result=SourcemapList, success=below_299, options=options,
        )

    async def upload(
        self, req: Optional[SourcemapsUploadRequest], *options: RequestOption
    ) -> APIResponse[SourcemapArtifact]:
        """Upload a source map as ``multipart/form-data``."""
        require(req)
        return await self._api.perform(
            "apm.sourcemaps.upload", "POST", "/api/apm/sourcemaps",
            files={"sourcemap": ("sourcemap.json", req.sourcemap, "application/json")},
            data={
                "service_name": req.service_name,
                "service_version": req.service_version,
                "bundle_filepath": req.bundle_filepath,
            },
            result=SourcemapArtifact, success=below_299, options=options,
        )

    async def delete(self, req: Optional[SourcemapsDeleteRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        require(req.id, "source map id is required")
        return await self._api.perform(
            "apm.sourcemaps.delete", "DELETE", "/api/apm/sourcemaps/{id}",
            path_params={"id": req.id}, success=below_299, options=options,
        )


class APM:
    """APM endpoints, grouped the way Kibana groups them."""

    def __init__(self, api) -> None:
        self.agent_configuration = AgentConfigurations(api)
        self.agent_keys = AgentKeys(api)
        self.annotations = Annotations(api)
        self.server_schema = ServerSchema(api)
        self.sourcemaps = Sourcemaps(api)
