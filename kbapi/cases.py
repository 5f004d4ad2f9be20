"""Cases (``/api/cases``).

The case ``connector`` and the attached comments are tagged unions: the
connector is keyed on ``type`` (``.jira``, ``.servicenow``, ...), comments on
``type`` (``alert`` or ``user``).
"""
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field, model_serializer
from typing_extensions import Annotated

from .base import Namespace, below_299, require
from .exceptions import RequestValidationError
from .models import KibanaModel, Params
from .response import APIResponse
from .transport import RequestOption


class UserObject(KibanaModel):
    email: Optional[str] = None
    full_name: Optional[str] = None
    username: Optional[str] = None
    profile_uid: Optional[str] = None


class CaseAssignee(KibanaModel):
    uid: str


class CaseSettings(KibanaModel):
    sync_alerts: bool = Field(default=True, alias="syncAlerts")


class CaseCustomField(KibanaModel):
    key: str
    type: str
    value: Optional[Any] = None


# --- case connectors -----------------------------------------------------

class JiraFields(KibanaModel):
    issue_type: Optional[str] = Field(default=None, alias="issueType")
    parent: Optional[str] = None
    priority: Optional[str] = None


class ResilientFields(KibanaModel):
    issue_types: Optional[List[str]] = Field(default=None, alias="issueTypes")
    severity_code: Optional[str] = Field(default=None, alias="severityCode")


class ServiceNowFields(KibanaModel):
    category: Optional[str] = None
    impact: Optional[str] = None
    severity: Optional[str] = None
    subcategory: Optional[str] = None
    urgency: Optional[str] = None


class ServiceNowSIRFields(KibanaModel):
    category: Optional[str] = None
    dest_ip: Optional[bool] = Field(default=None, alias="destIp")
    malware_hash: Optional[bool] = Field(default=None, alias="malwareHash")
    malware_url: Optional[bool] = Field(default=None, alias="malwareUrl")
    priority: Optional[str] = None
    source_ip: Optional[bool] = Field(default=None, alias="sourceIp")
    subcategory: Optional[str] = None


class SwimlaneFields(KibanaModel):
    case_id: Optional[str] = Field(default=None, alias="caseId")


class CaseConnectorBase(KibanaModel):
    id: str
    name: str


class NoneCaseConnector(CaseConnectorBase):
    id: str = "none"
    name: str = "none"
    type: Literal[".none"] = ".none"
    fields: None = None

    @model_serializer(mode="wrap")
    def _keep_null_fields(self, handler):
        data = handler(self)
        data["fields"] = None
        return data


class JiraCaseConnector(CaseConnectorBase):
    type: Literal[".jira"] = ".jira"
    fields: JiraFields


class ResilientCaseConnector(CaseConnectorBase):
    type: Literal[".resilient"] = ".resilient"
    fields: ResilientFields


class ServiceNowCaseConnector(CaseConnectorBase):
    type: Literal[".servicenow"] = ".servicenow"
    fields: ServiceNowFields


class ServiceNowSIRCaseConnector(CaseConnectorBase):
    type: Literal[".servicenow-sir"] = ".servicenow-sir"
    fields: ServiceNowSIRFields


class SwimlaneCaseConnector(CaseConnectorBase):
    type: Literal[".swimlane"] = ".swimlane"
    fields: SwimlaneFields


class WebhookCaseConnector(CaseConnectorBase):
    type: Literal[".cases-webhook"] = ".cases-webhook"
    fields: Optional[Any] = None


CaseConnector = Annotated[
    Union[
        NoneCaseConnector,
        JiraCaseConnector,
        ResilientCaseConnector,
        ServiceNowCaseConnector,
        ServiceNowSIRCaseConnector,
        SwimlaneCaseConnector,
        WebhookCaseConnector,
    ],
    Field(discriminator="type"),
]


# --- comments ------------------------------------------------------------

class AlertRule(KibanaModel):
    id: Optional[str] = None
    name: Optional[str] = None


class AlertCommentBody(KibanaModel):
    type: Literal["alert"] = "alert"
    owner: str
    alert_id: Union[str, List[str]] = Field(alias="alertId")
    index: Union[str, List[str]]
    rule: AlertRule


class UserCommentBody(KibanaModel):
    type: Literal["user"] = "user"
    owner: str
    comment: str


CommentBody = Annotated[Union[AlertCommentBody, UserCommentBody], Field(discriminator="type")]


class CommentMeta(KibanaModel):
    id: str
    version: Optional[str] = None
    created_at: Optional[str] = None
    created_by: Optional[UserObject] = None
    updated_at: Optional[str] = None
    updated_by: Optional[UserObject] = None
    pushed_at: Optional[str] = None
    pushed_by: Optional[UserObject] = None


class AlertComment(AlertCommentBody, CommentMeta):
    pass


class UserComment(UserCommentBody, CommentMeta):
    pass


Comment = Annotated[Union[AlertComment, UserComment], Field(discriminator="type")]


class ExternalService(KibanaModel):
    connector_id: Optional[str] = None
    connector_name: Optional[str] = None
    external_id: Optional[str] = None
    external_title: Optional[str] = None
    external_url: Optional[str] = None
    pushed_at: Optional[str] = None
    pushed_by: Optional[UserObject] = None


class Case(KibanaModel):
    id: str
    version: str
    title: str
    description: str
    owner: str
    status: str
    tags: List[str] = Field(default_factory=list)
    settings: Optional[CaseSettings] = None
    connector: Optional[CaseConnector] = None
    assignees: Optional[List[CaseAssignee]] = None
    category: Optional[str] = None
    severity: Optional[str] = None
    custom_fields: Optional[List[CaseCustomField]] = Field(default=None, alias="customFields")
    comments: List[Comment] = Field(default_factory=list)
    total_alerts: int = Field(default=0, alias="totalAlerts")
    total_comment: int = Field(default=0, alias="totalComment")
    duration: Optional[int] = None
    external_service: Optional[ExternalService] = None
    closed_at: Optional[str] = None
    closed_by: Optional[UserObject] = None
    created_at: Optional[str] = None
    created_by: Optional[UserObject] = None
    updated_at: Optional[str] = None
    updated_by: Optional[UserObject] = None


class CaseCreateBody(KibanaModel):
    title: str
    description: str
    owner: str
    connector: CaseConnector = Field(default_factory=NoneCaseConnector)
    settings: CaseSettings = Field(default_factory=CaseSettings)
    tags: List[str] = Field(default_factory=list)
    assignees: Optional[List[CaseAssignee]] = None
    category: Optional[str] = None
    severity: Optional[str] = None
    custom_fields: Optional[List[CaseCustomField]] = Field(default=None, alias="customFields")


class CaseUpdate(KibanaModel):
    id: str
    version: str
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    tags: Optional[List[str]] = None
    connector: Optional[CaseConnector] = None
    settings: Optional[CaseSettings] = None
    assignees: Optional[List[CaseAssignee]] = None
    category: Optional[str] = None
    severity: Optional[str] = None
    custom_fields: Optional[List[CaseCustomField]] = Field(default=None, alias="customFields")


class CaseUpdateBody(KibanaModel):
    cases: List[CaseUpdate]


# --- user actions --------------------------------------------------------

class UserActionType(str, Enum):
    ASSIGNEES = "assignees"
    CREATE_CASE = "create_case"
    COMMENT = "comment"
    CONNECTOR = "connector"
    DESCRIPTION = "description"
    PUSHED = "pushed"
    TAGS = "tags"
    TITLE = "title"
    STATUS = "status"
    SETTINGS = "settings"
    SEVERITY = "severity"
    DELETE_CASE = "delete_case"
    CATEGORY = "category"
    CUSTOM_FIELDS = "customFields"


class UserAction(KibanaModel):
    id: str
    action: str
    type: str
    owner: str
    version: Optional[str] = None
    comment_id: Optional[str] = None
    created_at: Optional[str] = None
    created_by: Optional[UserObject] = None
    payload: Dict[str, Any] = Field(default_factory=dict)

    @property
    def action_type(self) -> Optional[UserActionType]:
        """Known action type, or ``None`` for types this client does not model."""
        try:
            return UserActionType(self.type)
        except ValueError:
            return None


class UserActionList(KibanaModel):
    page: int = 0
    per_page: int = 0
    total: int = 0
    user_actions: List[UserAction] = Field(default_factory=list, alias="userActions")

    def action_types(self) -> List[Optional[UserActionType]]:
        return [action.action_type for action in self.user_actions]


# --- settings ------------------------------------------------------------

class SettingsConnector(KibanaModel):
    id: str
    name: str
    type: str
    fields: Optional[Any] = None


class CaseTemplate(KibanaModel):
    key: str
    name: str
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    case_fields: Optional[Dict[str, Any]] = Field(default=None, alias="caseFields")


class SettingsCustomField(KibanaModel):
    key: str
    label: str
    type: str
    required: bool = False
    default_value: Optional[Any] = Field(default=None, alias="defaultValue")


class CaseSettingsBody(KibanaModel):
    closure_type: str
    connector: SettingsConnector
    owner: str
    custom_fields: Optional[List[SettingsCustomField]] = Field(default=None, alias="customFields")
    templates: Optional[List[CaseTemplate]] = None


class CaseSettingsUpdateBody(KibanaModel):
    version: str
    closure_type: Optional[str] = None
    connector: Optional[SettingsConnector] = None
    custom_fields: Optional[List[SettingsCustomField]] = Field(default=None, alias="customFields")
    templates: Optional[List[CaseTemplate]] = None


class CaseConfiguration(CaseSettingsBody):
    id: str
    version: Optional[str] = None
    error: Optional[str] = None
    mappings: Optional[List[Dict[str, Any]]] = None
    created_at: Optional[str] = None
    created_by: Optional[UserObject] = None
    updated_at: Optional[str] = None
    updated_by: Optional[UserObject] = None


# --- misc responses ------------------------------------------------------

class CaseAlert(KibanaModel):
    id: Optional[str] = None
    index: Optional[str] = None
    attached_at: Optional[str] = None


class CaseForAlert(KibanaModel):
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    totals: Optional[Dict[str, int]] = None


class CaseList(KibanaModel):
    cases: List[Case] = Field(default_factory=list)
    page: int = 0
    per_page: int = 0
    total: int = 0
    count_open_cases: Optional[int] = None
    count_in_progress_cases: Optional[int] = None
    count_closed_cases: Optional[int] = None


class CommentList(KibanaModel):
    comments: List[Comment] = Field(default_factory=list)
    page: int = 0
    per_page: int = 0
    total: int = 0


class CaseConnectorInfo(KibanaModel):
    id: str
    name: str
    action_type_id: Optional[str] = Field(default=None, alias="actionTypeId")
    config: Optional[Dict[str, Any]] = None
    is_deprecated: Optional[bool] = None
    is_missing_secrets: Optional[bool] = None
    is_preconfigured: Optional[bool] = None
    referenced_by_count: Optional[int] = None


# --- requests ------------------------------------------------------------

class OwnerParams(Params):
    owner: Optional[List[str]] = None


class CasesCreateRequest(KibanaModel):
    body: CaseCreateBody


class CasesUpdateRequest(KibanaModel):
    body: CaseUpdateBody


class CaseIdRequest(KibanaModel):
    id: str


class CasesGetParams(Params):
    include_comments: Optional[bool] = Field(default=None, alias="includeComments")


class CasesGetRequest(KibanaModel):
    id: str
    params: CasesGetParams = Field(default_factory=CasesGetParams)


class CasesDeleteParams(Params):
    ids: List[str] = Field(default_factory=list)


class CasesDeleteRequest(KibanaModel):
    params: CasesDeleteParams


class CasesAddCommentRequest(KibanaModel):
    id: str
    body: CommentBody


class CommentUpdate(KibanaModel):
    id: str
    version: str
    type: str
    owner: str
    comment: Optional[str] = None
    alert_id: Optional[Union[str, List[str]]] = Field(default=None, alias="alertId")
    index: Optional[Union[str, List[str]]] = None
    rule: Optional[AlertRule] = None


class CasesUpdateCommentRequest(KibanaModel):
    id: str
    body: CommentUpdate


class CaseCommentRequest(KibanaModel):
    case_id: str
    comment_id: str


class CasesAttachFileRequest(KibanaModel):
    id: str
    file: bytes
    filename: str


class CasesListActivityParams(Params):
    page: Optional[int] = None
    per_page: Optional[int] = None
    sort_order: Optional[str] = None
    types: Optional[List[str]] = None


class CasesListActivityRequest(KibanaModel):
    id: str
    params: CasesListActivityParams = Field(default_factory=CasesListActivityParams)


class CasesListCommentsParams(Params):
    page: Optional[int] = None
    per_page: Optional[int] = None
    sort_order: Optional[str] = None


class CasesListCommentsRequest(KibanaModel):
    id: str
    params: CasesListCommentsParams = Field(default_factory=CasesListCommentsParams)


class CasesListFromAlertRequest(KibanaModel):
    alert_id: str
    params: OwnerParams = Field(default_factory=OwnerParams)


class CasesPushRequest(KibanaModel):
    case_id: str
    connector_id: str


class CasesSearchParams(Params):
    assignees: Optional[List[str]] = None
    category: Optional[List[str]] = None
    default_search_operator: Optional[str] = Field(default=None, alias="defaultSearchOperator")
    from_: Optional[str] = Field(default=None, alias="from")
    owner: Optional[List[str]] = None
    page: Optional[int] = None
    per_page: Optional[int] = Field(default=None, alias="perPage")
    reporters: Optional[List[str]] = None
    search: Optional[str] = None
    search_fields: Optional[List[str]] = Field(default=None, alias="searchFields")
    severity: Optional[str] = None
    sort_field: Optional[str] = Field(default=None, alias="sortField")
    sort_order: Optional[str] = Field(default=None, alias="sortOrder")
    status: Optional[str] = None
    tags: Optional[List[str]] = None
    to: Optional[str] = None


class CasesSearchRequest(KibanaModel):
    params: CasesSearchParams = Field(default_factory=CasesSearchParams)


class OwnerRequest(KibanaModel):
    params: OwnerParams = Field(default_factory=OwnerParams)


class CasesAddSettingsRequest(KibanaModel):
    body: CaseSettingsBody


class CasesUpdateSettingsRequest(KibanaModel):
    configuration_id: str
    body: CaseSettingsUpdateBody


class Cases(Namespace):

    async def create(self, req: Optional[CasesCreateRequest], *options: RequestOption) -> APIResponse[Case]:
        require(req)
        return await self._api.perform(
            "cases.create", "POST", "/api/cases",
            body=req.body, result=Case, success=below_299, options=options,
        )

    async def update(self, req: Optional[CasesUpdateRequest], *options: RequestOption) -> APIResponse[List[Case]]:
        require(req)
        return await self._api.perform(
            "cases.update", "PATCH", "/api/cases",
            body=req.body, result=List[Case], success=below_299, options=options,
        )

    async def get(self, req: Optional[CasesGetRequest], *options: RequestOption) -> APIResponse[Case]:
        require(req)
        require(req.id, "case id is required")
        return await self._api.perform(
            "cases.get", "GET", "/api/cases/{id}",
            path_params={"id": req.id}, params=req.params, result=Case, success=below_299, options=options,
        )

    async def delete(self, req: Optional[CasesDeleteRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        if not req.params.ids:
            raise RequestValidationError("at least one case id is required")
        return await self._api.perform(
            "cases.delete", "DELETE", "/api/cases",
            params=req.params, success=below_299, options=options,
        )

    async def search(self, req: Optional[CasesSearchRequest] = None, *options: RequestOption) -> APIResponse[CaseList]:
        req = req or CasesSearchRequest()
        return await self._api.perform(
            "cases.search", "GET", "/api/cases/_find",
            params=req.params, result=CaseList, success=below_299, options=options,
        )

    async def add_comment_alert(self, req: Optional[CasesAddCommentRequest], *options: RequestOption) -> APIResponse[Case]:
        """Attach an alert or a user comment to a case."""
        require(req)
        require(req.id, "case id is required")
        return await self._api.perform(
            "cases.add_comment_alert", "POST", "/api/cases/{id}/comments",
            path_params={"id": req.id}, body=req.body, result=Case, success=below_299, options=options,
        )

    async def update_alert_comment(
        self, req: Optional[CasesUpdateCommentRequest], *options: RequestOption
    ) -> APIResponse[Case]:
        require(req)
        require(req.id, "case id is required")
        return await self._api.perform(
            "cases.update_alert_comment", "PATCH", "/api/cases/{id}/comments",
            path_params={"id": req.id}, body=req.body, result=Case, success=below_299, options=options,
        )

    async def get_alert_comment(self, req: Optional[CaseCommentRequest], *options: RequestOption) -> APIResponse[Comment]:
        require(req)
        require(req.case_id, "case id is required")
        require(req.comment_id, "comment id is required")
        return await self._api.perform(
            "cases.get_alert_comment", "GET", "/api/cases/{case_id}/comments/{comment_id}",
            path_params={"case_id": req.case_id, "comment_id": req.comment_id},
            result=Comment, success=below_299, options=options,
        )

    async def delete_alert_comment(self, req: Optional[CaseCommentRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        require(req.case_id, "case id is required")
        require(req.comment_id, "comment id is required")
        return await self._api.perform(
            "cases.delete_alert_comment", "DELETE", "/api/cases/{case_id}/comments/{comment_id}",
            path_params={"case_id": req.case_id, "comment_id": req.comment_id},
            success=below_299, options=options,
        )

    async def delete_all_alerts_comments(self, req: Optional[CaseIdRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        require(req.id, "case id is required")
        return await self._api.perform(
            "cases.delete_all_alerts_comments", "DELETE", "/api/cases/{id}/comments",
            path_params={"id": req.id}, success=below_299, options=options,
        )

    async def list_alerts_comments(
        self, req: Optional[CasesListCommentsRequest], *options: RequestOption
    ) -> APIResponse[CommentList]:
        require(req)
        require(req.id, "case id is required")
        return await self._api.perform(
            "cases.list_alert_comment", "GET", "/api/cases/{id}/comments/_find",
            path_params={"id": req.id}, params=req.params, result=CommentList, success=below_299, options=options,
        )

    async def attach_file(self, req: Optional[CasesAttachFileRequest], *options: RequestOption) -> APIResponse[Case]:
        """Upload a file attachment as ``multipart/form-data``."""
        require(req)
        require(req.id, "case id is required")
        return await self._api.perform(
            "cases.attach_file", "POST", "/api/cases/{id}/files",
            path_params={"id": req.id},
            files={"file": (req.filename, req.file, "application/octet-stream")},
            data={"filename": req.filename},
            result=Case, success=below_299, options=options,
        )

    async def get_all_alerts(self, req: Optional[CaseIdRequest], *options: RequestOption) -> APIResponse[List[CaseAlert]]:
        require(req)
        require(req.id, "case id is required")
        return await self._api.perform(
            "cases.get_all_alerts", "GET", "/api/cases/{id}/alerts",
            path_params={"id": req.id}, result=List[CaseAlert], success=below_299, options=options,
        )

    async def list_from_alert(
        self, req: Optional[CasesListFromAlertRequest], *options: RequestOption
    ) -> APIResponse[List[CaseForAlert]]:
        require(req)
        require(req.alert_id, "alert id is required")
        return await self._api.perform(
            "cases.list_from_alert", "GET", "/api/cases/alerts/{alert_id}",
            path_params={"alert_id": req.alert_id}, params=req.params,
            result=List[CaseForAlert], success=below_299, options=options,
        )

    async def list_activity(
        self, req: Optional[CasesListActivityRequest], *options: RequestOption
    ) -> APIResponse[UserActionList]:
        require(req)
        require(req.id, "case id is required")
        return await self._api.perform(
            "cases.list_activity", "GET", "/api/cases/{id}/user_actions/_find",
            path_params={"id": req.id}, params=req.params, result=UserActionList, success=below_299, options=options,
        )

    async def push(self, req: Optional[CasesPushRequest], *options: RequestOption) -> APIResponse[Case]:
        require(req)
        require(req.case_id, "case id is required")
        require(req.connector_id, "connector id is required")
        return await self._api.perform(
            "cases.push", "POST", "/api/cases/{case_id}/connector/{connector_id}/_push",
            path_params={"case_id": req.case_id, "connector_id": req.connector_id},
            body={}, result=Case, success=below_299, options=options,
        )

    async def get_connectors(self, *options: RequestOption) -> APIResponse[List[CaseConnectorInfo]]:
        return await self._api.perform(
            "cases.get_connectors", "GET", "/api/cases/configure/connectors/_find",
            result=List[CaseConnectorInfo], success=below_299, options=options,
        )

    async def get_settings(
        self, req: Optional[OwnerRequest] = None, *options: RequestOption
    ) -> APIResponse[List[CaseConfiguration]]:
        req = req or OwnerRequest()
        return await self._api.perform(
            "cases.get_settings", "GET", "/api/cases/configure",
            params=req.params, result=List[CaseConfiguration], success=below_299, options=options,
        )

    async def add_settings(
        self, req: Optional[CasesAddSettingsRequest], *options: RequestOption
    ) -> APIResponse[CaseConfiguration]:
        require(req)
        return await self._api.perform(
            "cases.add_settings", "POST", "/api/cases/configure",
            body=req.body, result=CaseConfiguration, success=below_299, options=options,
        )

    async def update_settings(
        self, req: Optional[CasesUpdateSettingsRequest], *options: RequestOption
    ) -> APIResponse[CaseConfiguration]:
        require(req)
        require(req.configuration_id, "configuration id is required")
        return await self._api.perform(
            "cases.update_settings", "PATCH", "/api/cases/configure/{configuration_id}",
            path_params={"configuration_id": req.configuration_id},
            body=req.body, result=CaseConfiguration, success=below_299, options=options,
        )

    async def get_tags(self, req: Optional[OwnerRequest] = None, *options: RequestOption) -> APIResponse[List[str]]:
        req = req or OwnerRequest()
        return await self._api.perform(
            "cases.get_tags", "GET", "/api/cases/tags",
            params=req.params, result=List[str], success=below_299, options=options,
        )

    async def get_creators(
        self, req: Optional[OwnerRequest] = None, *options: RequestOption
    ) -> APIResponse[List[UserObject]]:
        req = req or OwnerRequest()
        return await self._api.perform(
            "cases.get_creators", "GET", "/api/cases/reporters",
            params=req.params, result=List[UserObject], success=below_299, options=options,
        )
