"""Action connectors (``/api/actions``).

A connector body is a tagged union keyed on ``connector_type_id``; each
variant carries the ``config`` and ``secrets`` shapes of its connector type.
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field
from typing_extensions import Annotated

from .base import Namespace, require
from .models import KibanaModel, Params
from .response import APIResponse
from .transport import RequestOption


# --- config / secrets shapes ---------------------------------------------

class BedrockConfig(KibanaModel):
    api_url: str = Field(alias="apiUrl")
    default_model: Optional[str] = Field(default=None, alias="defaultModel")


class BedrockSecrets(KibanaModel):
    access_key: str = Field(alias="accessKey")
    secret: str


class CasesWebhookConfig(KibanaModel):
    auth_type: Optional[str] = Field(default=None, alias="authType")
    ca: Optional[str] = None
    cert_type: Optional[str] = Field(default=None, alias="certType")
    create_comment_json: Optional[str] = Field(default=None, alias="createCommentJson")
    create_comment_method: Optional[str] = Field(default=None, alias="createCommentMethod")
    create_comment_url: Optional[str] = Field(default=None, alias="createCommentUrl")
    create_incident_json: str = Field(alias="createIncidentJson")
    create_incident_method: Optional[str] = Field(default=None, alias="createIncidentMethod")
    create_incident_response_key: str = Field(alias="createIncidentResponseKey")
    create_incident_url: str = Field(alias="createIncidentUrl")
    get_incident_response_external_title_key: str = Field(alias="getIncidentResponseExternalTitleKey")
    get_incident_url: str = Field(alias="getIncidentUrl")
    has_auth: Optional[bool] = Field(default=None, alias="hasAuth")
    headers: Optional[str] = None
    update_incident_json: str = Field(alias="updateIncidentJson")
    update_incident_method: Optional[str] = Field(default=None, alias="updateIncidentMethod")
    update_incident_url: str = Field(alias="updateIncidentUrl")
    verification_mode: Optional[str] = Field(default=None, alias="verificationMode")
    view_incident_url: str = Field(alias="viewIncidentUrl")


class CertificateSecrets(KibanaModel):
    """TLS client material and basic credentials shared by the webhook types."""
    crt: Optional[str] = None
    key: Optional[str] = None
    password: Optional[str] = None
    pfx: Optional[str] = None
    user: Optional[str] = None


class UrlConfig(KibanaModel):
    url: str


class TokenSecrets(KibanaModel):
    token: str


class CrowdstrikeSecrets(KibanaModel):
    client_id: str = Field(alias="clientId")
    client_secret: str = Field(alias="clientSecret")


class EmailConfig(KibanaModel):
    client_id: Optional[str] = Field(default=None, alias="clientId")
    from_: str = Field(alias="from")
    has_auth: Optional[bool] = Field(default=None, alias="hasAuth")
    host: Optional[str] = None
    oauth_token_url: Optional[str] = Field(default=None, alias="oauthTokenUrl")
    port: Optional[int] = None
    secure: Optional[bool] = None
    service: Optional[str] = None
    tenant_id: Optional[str] = Field(default=None, alias="tenantId")


class EmailSecrets(KibanaModel):
    client_secret: Optional[str] = Field(default=None, alias="clientSecret")
    password: Optional[str] = None
    user: Optional[str] = None


class GeminiConfig(KibanaModel):
    api_url: str = Field(alias="apiUrl")
    default_model: Optional[str] = Field(default=None, alias="defaultModel")
    gcp_project_id: str = Field(alias="gcpProjectID")
    gcp_region: str = Field(alias="gcpRegion")


class GeminiSecrets(KibanaModel):
    credentials_json: str = Field(alias="credentialsJson")


class GenaiAzureConfig(KibanaModel):
    api_provider: Literal["Azure OpenAI"] = Field(default="Azure OpenAI", alias="apiProvider")
    api_url: str = Field(alias="apiUrl")


class GenaiOpenaiConfig(KibanaModel):
    api_provider: Literal["OpenAI"] = Field(default="OpenAI", alias="apiProvider")
    api_url: str = Field(alias="apiUrl")
    default_model: Optional[str] = Field(default=None, alias="defaultModel")


GenaiConfig = Annotated[Union[GenaiAzureConfig, GenaiOpenaiConfig], Field(discriminator="api_provider")]


class GenaiSecrets(KibanaModel):
    api_key: Optional[str] = Field(default=None, alias="apiKey")


class IndexConfig(KibanaModel):
    execution_time_field: Optional[str] = Field(default=None, alias="executionTimeField")
    index: str
    refresh: Optional[bool] = None


class JiraConfig(KibanaModel):
    api_url: str = Field(alias="apiUrl")
    project_key: str = Field(alias="projectKey")


class JiraSecrets(KibanaModel):
    api_token: str = Field(alias="apiToken")
    email: str


class ApiUrlConfig(KibanaModel):
    api_url: str = Field(alias="apiUrl")


class ApiKeySecrets(KibanaModel):
    api_key: str = Field(alias="apiKey")


class PagerdutySecrets(KibanaModel):
    routing_key: str = Field(alias="routingKey")


class ResilientConfig(KibanaModel):
    api_url: str = Field(alias="apiUrl")
    org_id: str = Field(alias="orgId")


class ResilientSecrets(KibanaModel):
    api_key_id: str = Field(alias="apiKeyId")
    api_key_secret: str = Field(alias="apiKeySecret")


class ServicenowItomConfig(KibanaModel):
    api_url: str = Field(alias="apiUrl")
    client_id: Optional[str] = Field(default=None, alias="clientId")
    is_oauth: Optional[bool] = Field(default=None, alias="isOAuth")
    jwt_key_id: Optional[str] = Field(default=None, alias="jwtKeyId")
    user_identifier_value: Optional[str] = Field(default=None, alias="userIdentifierValue")


class ServicenowConfig(ServicenowItomConfig):
    uses_table_api: Optional[bool] = Field(default=None, alias="usesTableApi")


class ServicenowSecrets(KibanaModel):
    client_secret: Optional[str] = Field(default=None, alias="clientSecret")
    password: Optional[str] = None
    private_key: Optional[str] = Field(default=None, alias="privateKey")
    private_key_password: Optional[str] = Field(default=None, alias="privateKeyPassword")
    username: Optional[str] = None


class SlackChannel(KibanaModel):
    id: str
    name: str


class SlackAPIConfig(KibanaModel):
    allowed_channels: Optional[List[SlackChannel]] = Field(default=None, alias="allowedChannels")


class SwimlaneFieldMapping(KibanaModel):
    field_type: str = Field(alias="fieldType")
    id: str
    key: str
    name: str


class SwimlaneConfig(KibanaModel):
    api_url: str = Field(alias="apiUrl")
    app_id: str = Field(alias="appId")
    connector_type: str = Field(alias="connectorType")
    mappings: Optional[Dict[str, SwimlaneFieldMapping]] = None


class SwimlaneSecrets(KibanaModel):
    api_token: Optional[str] = Field(default=None, alias="apiToken")


class WebhookUrlSecrets(KibanaModel):
    webhook_url: str = Field(alias="webhookUrl")


class ThehiveConfig(KibanaModel):
    organisation: Optional[str] = None
    url: str


class TinesSecrets(KibanaModel):
    email: str
    token: str


class TorqConfig(KibanaModel):
    webhook_integration_url: str = Field(alias="webhookIntegrationUrl")


class WebhookConfig(KibanaModel):
    auth_type: Optional[str] = Field(default=None, alias="authType")
    ca: Optional[str] = None
    cert_type: Optional[str] = Field(default=None, alias="certType")
    has_auth: Optional[bool] = Field(default=None, alias="hasAuth")
    headers: Optional[Dict[str, str]] = None
    method: Optional[str] = None
    url: str
    verification_mode: Optional[str] = Field(default=None, alias="verificationMode")


class XmattersConfig(KibanaModel):
    config_url: Optional[str] = Field(default=None, alias="configUrl")
    uses_basic: Optional[bool] = Field(default=None, alias="usesBasic")


class XmattersSecrets(KibanaModel):
    password: Optional[str] = None
    secrets_url: Optional[str] = Field(default=None, alias="secretsUrl")
    user: Optional[str] = None


class EmptyConfig(KibanaModel):
    pass


# --- connector bodies ----------------------------------------------------

class ConnectorBodyBase(KibanaModel):
    name: str

    def update_payload(self) -> Dict[str, Any]:
        """Wire body for an update: the connector type cannot change, so it is omitted."""
        payload = self.to_wire()
        payload.pop("connector_type_id", None)
        return payload


class BedrockConnector(ConnectorBodyBase):
    connector_type_id: Literal[".bedrock"] = ".bedrock"
    config: BedrockConfig
    secrets: Optional[BedrockSecrets] = None


class CasesWebhookConnector(ConnectorBodyBase):
    connector_type_id: Literal[".cases-webhook"] = ".cases-webhook"
    config: CasesWebhookConfig
    secrets: Optional[CertificateSecrets] = None


class CrowdstrikeConnector(ConnectorBodyBase):
    connector_type_id: Literal[".crowdstrike"] = ".crowdstrike"
    config: UrlConfig
    secrets: Optional[CrowdstrikeSecrets] = None


class D3SecurityConnector(ConnectorBodyBase):
    connector_type_id: Literal[".d3security"] = ".d3security"
    config: UrlConfig
    secrets: Optional[TokenSecrets] = None


class EmailConnector(ConnectorBodyBase):
    connector_type_id: Literal[".email"] = ".email"
    config: EmailConfig
    secrets: Optional[EmailSecrets] = None


class GeminiConnector(ConnectorBodyBase):
    connector_type_id: Literal[".gemini"] = ".gemini"
    config: GeminiConfig
    secrets: Optional[GeminiSecrets] = None


class GenaiConnector(ConnectorBodyBase):
    connector_type_id: Literal[".gen-ai"] = ".gen-ai"
    config: GenaiConfig
    secrets: Optional[GenaiSecrets] = None


class IndexConnector(ConnectorBodyBase):
    connector_type_id: Literal[".index"] = ".index"
    config: IndexConfig


class JiraConnector(ConnectorBodyBase):
    connector_type_id: Literal[".jira"] = ".jira"
    config: JiraConfig
    secrets: Optional[JiraSecrets] = None


class OpsgenieConnector(ConnectorBodyBase):
    connector_type_id: Literal[".opsgenie"] = ".opsgenie"
    config: ApiUrlConfig
    secrets: Optional[ApiKeySecrets] = None


class PagerdutyConnector(ConnectorBodyBase):
    connector_type_id: Literal[".pagerduty"] = ".pagerduty"
    config: ApiUrlConfig
    secrets: Optional[PagerdutySecrets] = None


class ResilientConnector(ConnectorBodyBase):
    connector_type_id: Literal[".resilient"] = ".resilient"
    config: ResilientConfig
    secrets: Optional[ResilientSecrets] = None


class SentineloneConnector(ConnectorBodyBase):
    connector_type_id: Literal[".sentinelone"] = ".sentinelone"
    config: UrlConfig
    secrets: Optional[TokenSecrets] = None


class ServerLogConnector(ConnectorBodyBase):
    connector_type_id: Literal[".server-log"] = ".server-log"
    config: EmptyConfig = Field(default_factory=EmptyConfig)


class ServicenowConnector(ConnectorBodyBase):
    connector_type_id: Literal[".servicenow"] = ".servicenow"
    config: ServicenowConfig
    secrets: Optional[ServicenowSecrets] = None


class ServicenowItomConnector(ConnectorBodyBase):
    connector_type_id: Literal[".servicenow-itom"] = ".servicenow-itom"
    config: ServicenowItomConfig
    secrets: Optional[ServicenowSecrets] = None


class ServicenowSirConnector(ConnectorBodyBase):
    connector_type_id: Literal[".servicenow-sir"] = ".servicenow-sir"
    config: ServicenowConfig
    secrets: Optional[ServicenowSecrets] = None


class SlackConnector(ConnectorBodyBase):
    connector_type_id: Literal[".slack"] = ".slack"
    config: EmptyConfig = Field(default_factory=EmptyConfig)
    secrets: Optional[WebhookUrlSecrets] = None


class SlackAPIConnector(ConnectorBodyBase):
    connector_type_id: Literal[".slack_api"] = ".slack_api"
    config: SlackAPIConfig = Field(default_factory=SlackAPIConfig)
    secrets: Optional[TokenSecrets] = None


class SwimlaneConnector(ConnectorBodyBase):
    connector_type_id: Literal[".swimlane"] = ".swimlane"
    config: SwimlaneConfig
    secrets: Optional[SwimlaneSecrets] = None


class TeamsConnector(ConnectorBodyBase):
    connector_type_id: Literal[".teams"] = ".teams"
    config: EmptyConfig = Field(default_factory=EmptyConfig)
    secrets: Optional[WebhookUrlSecrets] = None


class ThehiveConnector(ConnectorBodyBase):
    connector_type_id: Literal[".thehive"] = ".thehive"
    config: ThehiveConfig
    secrets: Optional[ApiKeySecrets] = None


class TinesConnector(ConnectorBodyBase):
    connector_type_id: Literal[".tines"] = ".tines"
    config: UrlConfig
    secrets: Optional[TinesSecrets] = None


class TorqConnector(ConnectorBodyBase):
    connector_type_id: Literal[".torq"] = ".torq"
    config: TorqConfig
    secrets: Optional[TokenSecrets] = None


class WebhookConnector(ConnectorBodyBase):
    connector_type_id: Literal[".webhook"] = ".webhook"
    config: WebhookConfig
    secrets: Optional[CertificateSecrets] = None


class XmattersConnector(ConnectorBodyBase):
    connector_type_id: Literal[".xmatters"] = ".xmatters"
    config: XmattersConfig = Field(default_factory=XmattersConfig)
    secrets: Optional[XmattersSecrets] = None


ConnectorBody = Annotated[
    Union[
        BedrockConnector,
        CasesWebhookConnector,
        CrowdstrikeConnector,
        D3SecurityConnector,
        EmailConnector,
        GeminiConnector,
        GenaiConnector,
        IndexConnector,
        JiraConnector,
        OpsgenieConnector,
        PagerdutyConnector,
        ResilientConnector,
        SentineloneConnector,
        ServerLogConnector,
        ServicenowConnector,
        ServicenowItomConnector,
        ServicenowSirConnector,
        SlackConnector,
        SlackAPIConnector,
        SwimlaneConnector,
        TeamsConnector,
        ThehiveConnector,
        TinesConnector,
        TorqConnector,
        WebhookConnector,
        XmattersConnector,
    ],
    Field(discriminator="connector_type_id"),
]


# --- responses -----------------------------------------------------------

class Connector(KibanaModel):
    id: str
    name: str
    connector_type_id: str
    config: Optional[Dict[str, Any]] = None
    is_deprecated: bool = False
    is_missing_secrets: Optional[bool] = None
    is_preconfigured: bool = False
    is_system_action_type: bool = False
    referenced_by_count: Optional[int] = None


class ConnectorType(KibanaModel):
    id: str
    name: str
    enabled: bool = False
    enabled_in_config: bool = False
    enabled_in_license: bool = False
    is_system_action_type: bool = False
    minimum_license_required: Optional[str] = None
    supported_feature_ids: List[str] = Field(default_factory=list)


class ConnectorRunResult(KibanaModel):
    connector_id: str
    status: str
    data: Optional[Any] = None
    message: Optional[str] = None
    service_message: Optional[str] = None


# --- run params ----------------------------------------------------------

class RunMessageEmail(KibanaModel):
    to: Optional[List[str]] = None
    cc: Optional[List[str]] = None
    bcc: Optional[List[str]] = None
    subject: str
    message: str


class RunMessageServerlog(KibanaModel):
    level: Optional[str] = None
    message: str


class RunMessageSlack(KibanaModel):
    message: str


class RunDocuments(KibanaModel):
    documents: List[Dict[str, Any]]


class RunTriggerPagerduty(KibanaModel):
    event_action: Literal["trigger"] = Field(default="trigger", alias="eventAction")
    summary: Optional[str] = None
    severity: Optional[str] = None
    source: Optional[str] = None
    class_: Optional[str] = Field(default=None, alias="class")
    component: Optional[str] = None
    group: Optional[str] = None
    dedup_key: Optional[str] = Field(default=None, alias="dedupKey")
    custom_details: Optional[Dict[str, Any]] = Field(default=None, alias="customDetails")
    links: Optional[List[Dict[str, str]]] = None
    timestamp: Optional[str] = None


class RunAcknowledgeResolvePagerduty(KibanaModel):
    dedup_key: str = Field(alias="dedupKey")
    event_action: Literal["acknowledge", "resolve"] = Field(alias="eventAction")


class RunSubAction(KibanaModel):
    """``subAction`` envelope used by the case-management connectors."""
    sub_action: str = Field(alias="subAction")
    sub_action_params: Optional[Dict[str, Any]] = Field(default=None, alias="subActionParams")


RunParams = Union[
    RunMessageEmail,
    RunMessageServerlog,
    RunMessageSlack,
    RunDocuments,
    RunTriggerPagerduty,
    RunAcknowledgeResolvePagerduty,
    RunSubAction,
    Dict[str, Any],
]


# --- requests ------------------------------------------------------------

class ConnectorsCreateRequest(KibanaModel):
    id: str = ""
    body: ConnectorBody


class ConnectorsGetRequest(KibanaModel):
    id: str


class ConnectorsDeleteRequest(KibanaModel):
    id: str


class ConnectorsUpdateRequest(KibanaModel):
    id: str
    body: ConnectorBody


class ConnectorsGetTypesParams(Params):
    feature_id: Optional[str] = None


class ConnectorsGetTypesRequest(KibanaModel):
    params: ConnectorsGetTypesParams = Field(default_factory=ConnectorsGetTypesParams)


class ConnectorsRunBody(KibanaModel):
    params: RunParams


class ConnectorsRunRequest(KibanaModel):
    id: str
    body: ConnectorsRunBody


class Connectors(Namespace):

    async def create(self, req: Optional[ConnectorsCreateRequest], *options: RequestOption) -> APIResponse[Connector]:
        """Create a connector; an empty ``id`` lets Kibana generate one."""
        require(req)
        path = "/api/actions/connector/{id}" if req.id else "/api/actions/connector"
        return await self._api.perform(
            "connectors.create", "POST", path,
            path_params={"id": req.id} if req.id else None,
            body=req.body, result=Connector, options=options,
        )

    async def get(self, req: Optional[ConnectorsGetRequest], *options: RequestOption) -> APIResponse[Connector]:
        require(req)
        require(req.id, "connector id is required")
        return await self._api.perform(
            "connectors.get", "GET", "/api/actions/connector/{id}",
            path_params={"id": req.id}, result=Connector, options=options,
        )

    async def update(self, req: Optional[ConnectorsUpdateRequest], *options: RequestOption) -> APIResponse[Connector]:
        require(req)
        require(req.id, "connector id is required")
        return await self._api.perform(
            "connectors.update", "PUT", "/api/actions/connector/{id}",
            path_params={"id": req.id}, body=req.body.update_payload(), result=Connector, options=options,
        )

    async def delete(self, req: Optional[ConnectorsDeleteRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        require(req.id, "connector id is required")
        return await self._api.perform(
            "connectors.delete", "DELETE", "/api/actions/connector/{id}",
            path_params={"id": req.id}, options=options,
        )

    async def list(self, *options: RequestOption) -> APIResponse[List[Connector]]:
        return await self._api.perform(
            "connectors.list", "GET", "/api/actions/connectors",
            result=List[Connector], options=options,
        )

    async def get_types(
        self, req: Optional[ConnectorsGetTypesRequest] = None, *options: RequestOption
    ) -> APIResponse[List[ConnectorType]]:
        req = req or ConnectorsGetTypesRequest()
        return await self._api.perform(
            "connectors.get_types", "GET", "/api/actions/connector_types",
            params=req.params, result=List[ConnectorType], options=options,
        )

    async def run(self, req: Optional[ConnectorsRunRequest], *options: RequestOption) -> APIResponse[ConnectorRunResult]:
        """Execute a connector with the given action params."""
        require(req)
        require(req.id, "connector id is required")
        return await self._api.perform(
            "connectors.run", "POST", "/api/actions/connector/{id}/_execute",
            path_params={"id": req.id}, body=req.body, result=ConnectorRunResult, options=options,
        )
