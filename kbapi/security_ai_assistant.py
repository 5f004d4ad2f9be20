"""Security AI assistant (``/api/security_ai_assistant``).

Knowledge base entries are polymorphic on ``type``: ``document`` entries
carry text, ``index`` entries point the assistant at an index to query.
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field
from typing_extensions import Annotated

from .base import Namespace, below_299, require
from .models import KibanaModel, Params
from .response import APIResponse
from .transport import RequestOption


class AssistantUser(KibanaModel):
    id: Optional[str] = None
    name: Optional[str] = None


class BulkDelete(KibanaModel):
    ids: Optional[List[str]] = None
    query: Optional[str] = None


class BulkActionSummary(KibanaModel):
    failed: int = 0
    skipped: int = 0
    succeeded: int = 0
    total: int = 0


class BulkSkipResult(KibanaModel):
    id: str
    name: Optional[str] = None
    skip_reason: str


class BulkErrorDetail(KibanaModel):
    id: str
    name: Optional[str] = None


class BulkActionError(KibanaModel):
    message: str
    status_code: int
    err_code: Optional[str] = None


class AnonymizationField(KibanaModel):
    id: str
    field: str
    allowed: Optional[bool] = None
    anonymized: Optional[bool] = None
    namespace: Optional[str] = None
    timestamp: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    updated_by: Optional[str] = Field(default=None, alias="updatedBy")


class AnonymizationFieldInput(KibanaModel):
    """Bulk create/update item; ``id`` is only meaningful for updates."""
    field: str
    id: Optional[str] = None
    allowed: Optional[bool] = None
    anonymized: Optional[bool] = None


class AnonymizationBulkBody(KibanaModel):
    create: Optional[List[AnonymizationFieldInput]] = None
    update: Optional[List[AnonymizationFieldInput]] = None
    delete: Optional[BulkDelete] = None


class AnonymizationBulkRequest(KibanaModel):
    body: AnonymizationBulkBody


class AnonymizationBulkResults(KibanaModel):
    created: List[AnonymizationField] = Field(default_factory=list)
    updated: List[AnonymizationField] = Field(default_factory=list)
    deleted: List[str] = Field(default_factory=list)
    skipped: List[BulkSkipResult] = Field(default_factory=list)


class AnonymizationBulkError(BulkActionError):
    anonymization_fields: List[BulkErrorDetail] = Field(default_factory=list)


class AnonymizationBulkAttributes(KibanaModel):
    results: AnonymizationBulkResults = Field(default_factory=AnonymizationBulkResults)
    summary: BulkActionSummary = Field(default_factory=BulkActionSummary)
    errors: List[AnonymizationBulkError] = Field(default_factory=list)


class AnonymizationBulkResult(KibanaModel):
    success: Optional[bool] = None
    status_code: Optional[int] = None
    message: Optional[str] = None
    anonymization_fields_count: Optional[int] = None
    attributes: AnonymizationBulkAttributes = Field(default_factory=AnonymizationBulkAttributes)


class Prompt(KibanaModel):
    id: str
    name: str
    content: str
    prompt_type: str = Field(alias="promptType")
    categories: Optional[List[str]] = None
    color: Optional[str] = None
    consumer: Optional[str] = None
    is_default: Optional[bool] = Field(default=None, alias="isDefault")
    is_new_conversation_default: Optional[bool] = Field(default=None, alias="isNewConversationDefault")
    namespace: Optional[str] = None
    timestamp: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    updated_by: Optional[str] = Field(default=None, alias="updatedBy")
    users: Optional[List[AssistantUser]] = None


class PromptInput(KibanaModel):
    """``prompt_type`` is ``system`` or ``quick``; ``id`` only for updates."""
    name: str
    content: str
    prompt_type: str = Field(alias="promptType")
    id: Optional[str] = None
    categories: Optional[List[str]] = None
    color: Optional[str] = None
    consumer: Optional[str] = None
    is_default: Optional[bool] = Field(default=None, alias="isDefault")
    is_new_conversation_default: Optional[bool] = Field(default=None, alias="isNewConversationDefault")


class PromptsBulkBody(KibanaModel):
    create: Optional[List[PromptInput]] = None
    update: Optional[List[PromptInput]] = None
    delete: Optional[BulkDelete] = None


class PromptsBulkRequest(KibanaModel):
    body: PromptsBulkBody


class PromptsBulkResults(KibanaModel):
    created: List[Prompt] = Field(default_factory=list)
    updated: List[Prompt] = Field(default_factory=list)
    deleted: List[str] = Field(default_factory=list)
    skipped: List[BulkSkipResult] = Field(default_factory=list)


class PromptsBulkError(BulkActionError):
    prompts: List[BulkErrorDetail] = Field(default_factory=list)


class PromptsBulkAttributes(KibanaModel):
    results: PromptsBulkResults = Field(default_factory=PromptsBulkResults)
    summary: BulkActionSummary = Field(default_factory=BulkActionSummary)
    errors: List[PromptsBulkError] = Field(default_factory=list)


class PromptsBulkResult(KibanaModel):
    success: Optional[bool] = None
    status_code: Optional[int] = None
    message: Optional[str] = None
    prompts_count: Optional[int] = None
    attributes: PromptsBulkAttributes = Field(default_factory=PromptsBulkAttributes)


class KnowledgeBaseVector(KibanaModel):
    model_id: str = Field(alias="modelId")
    tokens: Dict[str, float]


class InputSchemaField(KibanaModel):
    description: str
    field_name: str = Field(alias="fieldName")
    field_type: str = Field(alias="fieldType")


class _EntryBase(KibanaModel):
    name: str
    id: Optional[str] = None
    global_: Optional[bool] = Field(default=None, alias="global")
    namespace: Optional[str] = None
    users: Optional[List[AssistantUser]] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    created_by: Optional[str] = Field(default=None, alias="createdBy")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")
    updated_by: Optional[str] = Field(default=None, alias="updatedBy")


class DocumentEntry(_EntryBase):
    type: Literal["document"] = "document"
    kb_resource: str = Field(alias="kbResource")
    source: str
    text: str
    required: Optional[bool] = None
    vector: Optional[KnowledgeBaseVector] = None


class IndexEntry(_EntryBase):
    type: Literal["index"] = "index"
    description: str
    field: str
    index: str
    query_description: str = Field(alias="queryDescription")
    input_schema: Optional[List[InputSchemaField]] = Field(default=None, alias="inputSchema")
    output_fields: Optional[List[str]] = Field(default=None, alias="outputFields")


KnowledgeBaseEntry = Annotated[Union[DocumentEntry, IndexEntry], Field(discriminator="type")]


class KnowledgeBaseEntryRequest(KibanaModel):
    body: KnowledgeBaseEntry


class KnowledgeBaseEntryUpdateRequest(KibanaModel):
    id: str
    body: KnowledgeBaseEntry


class KnowledgeBaseEntryIdRequest(KibanaModel):
    id: str


class KnowledgeBaseBulkBody(KibanaModel):
    create: Optional[List[KnowledgeBaseEntry]] = None
    update: Optional[List[KnowledgeBaseEntry]] = None
    delete: Optional[BulkDelete] = None


class KnowledgeBaseBulkRequest(KibanaModel):
    body: KnowledgeBaseBulkBody


class KnowledgeBaseBulkResults(KibanaModel):
    created: List[KnowledgeBaseEntry] = Field(default_factory=list)
    updated: List[KnowledgeBaseEntry] = Field(default_factory=list)
    deleted: List[str] = Field(default_factory=list)
    skipped: List[BulkSkipResult] = Field(default_factory=list)

    def documents(self) -> List[DocumentEntry]:
        return [e for e in self.created + self.updated if isinstance(e, DocumentEntry)]

    def indices(self) -> List[IndexEntry]:
        return [e for e in self.created + self.updated if isinstance(e, IndexEntry)]


class KnowledgeBaseBulkError(BulkActionError):
    knowledge_base_entries: List[BulkErrorDetail] = Field(default_factory=list, alias="knowledgeBaseEntries")


class KnowledgeBaseBulkAttributes(KibanaModel):
    results: KnowledgeBaseBulkResults = Field(default_factory=KnowledgeBaseBulkResults)
    summary: BulkActionSummary = Field(default_factory=BulkActionSummary)
    errors: List[KnowledgeBaseBulkError] = Field(default_factory=list)


class KnowledgeBaseBulkResult(KibanaModel):
    success: Optional[bool] = None
    status_code: Optional[int] = None
    message: Optional[str] = None
    knowledge_base_entries_count: Optional[int] = Field(default=None, alias="knowledgeBaseEntriesCount")
    attributes: KnowledgeBaseBulkAttributes = Field(default_factory=KnowledgeBaseBulkAttributes)


class KnowledgeBaseParams(Params):
    model_id: Optional[str] = Field(default=None, alias="modelId")
    ignore_security_labs: Optional[bool] = Field(default=None, alias="ignoreSecurityLabs")


class KnowledgeBaseRequest(KibanaModel):
    resource: str
    params: KnowledgeBaseParams = Field(default_factory=KnowledgeBaseParams)


class KnowledgeBaseSetup(KibanaModel):
    success: bool = False


class KnowledgeBaseStatus(KibanaModel):
    elser_exists: Optional[bool] = None
    is_setup_available: Optional[bool] = None
    is_setup_in_progress: Optional[bool] = None
    product_documentation_status: Optional[str] = None
    security_labs_exists: Optional[bool] = None
    user_data_exists: Optional[bool] = None


class APIConfig(KibanaModel):
    action_type_id: str = Field(alias="actionTypeId")
    connector_id: str = Field(alias="connectorId")
    default_system_prompt_id: Optional[str] = Field(default=None, alias="defaultSystemPromptId")
    model: Optional[str] = None
    provider: Optional[str] = None


class TraceData(KibanaModel):
    trace_id: Optional[str] = Field(default=None, alias="traceId")
    transaction_id: Optional[str] = Field(default=None, alias="transactionId")


class ConversationMessage(KibanaModel):
    content: str
    role: str
    timestamp: str
    is_error: Optional[bool] = Field(default=None, alias="isError")
    reader: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None
    trace_data: Optional[TraceData] = Field(default=None, alias="traceData")


class ConversationSummary(KibanaModel):
    confidence: Optional[str] = None
    content: Optional[str] = None
    public: Optional[bool] = None
    timestamp: Optional[str] = None


class Conversation(KibanaModel):
    id: Optional[str] = None
    title: str
    namespace: Optional[str] = None
    category: Optional[str] = None
    is_default: bool = Field(default=False, alias="isDefault")
    api_config: Optional[APIConfig] = Field(default=None, alias="apiConfig")
    messages: Optional[List[ConversationMessage]] = None
    replacements: Optional[Dict[str, str]] = None
    exclude_from_last_conversation_storage: Optional[bool] = Field(
        default=None, alias="excludeFromLastConversationStorage"
    )
    summary: Optional[ConversationSummary] = None
    users: List[AssistantUser] = Field(default_factory=list)
    timestamp: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")


class ConversationCreateBody(KibanaModel):
    title: str
    id: Optional[str] = None
    category: Optional[str] = None
    api_config: Optional[APIConfig] = Field(default=None, alias="apiConfig")
    messages: Optional[List[ConversationMessage]] = None
    replacements: Optional[Dict[str, str]] = None
    exclude_from_last_conversation_storage: Optional[bool] = Field(
        default=None, alias="excludeFromLastConversationStorage"
    )


class ConversationCreateRequest(KibanaModel):
    body: ConversationCreateBody


class ConversationIdRequest(KibanaModel):
    id: str


class FindParams(Params):
    fields: Optional[List[str]] = None
    filter: Optional[str] = None
    sort_field: Optional[str] = None
    sort_order: Optional[str] = None
    page: Optional[int] = None
    per_page: Optional[int] = None


class FindRequest(KibanaModel):
    params: FindParams = Field(default_factory=FindParams)


class ConversationList(KibanaModel):
    data: List[Conversation] = Field(default_factory=list)
    page: int = 0
    per_page: int = 0
    total: int = 0


class KnowledgeBaseEntryList(KibanaModel):
    data: List[KnowledgeBaseEntry] = Field(default_factory=list)
    page: int = 0
    per_page: int = 0
    total: int = 0


class AnonymizationFieldList(KibanaModel):
    data: List[AnonymizationField] = Field(default_factory=list)
    page: int = 0
    per_page: int = Field(default=0, alias="perPage")
    total: int = 0
    aggregations: Optional[Dict[str, Any]] = None


class PromptList(KibanaModel):
    data: List[Prompt] = Field(default_factory=list)
    page: int = 0
    per_page: int = Field(default=0, alias="perPage")
    total: int = 0


class ChatMessage(KibanaModel):
    """``role`` is ``system``, ``user`` or ``assistant``."""
    role: str
    content: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
    fields_to_anonymize: Optional[List[str]] = None


class ChatCompleteBody(KibanaModel):
    connector_id: str = Field(alias="connectorId")
    messages: List[ChatMessage]
    persist: bool
    conversation_id: Optional[str] = Field(default=None, alias="conversationId")
    is_stream: Optional[bool] = Field(default=None, alias="isStream")
    lang_smith_api_key: Optional[str] = Field(default=None, alias="langSmithApiKey")
    lang_smith_project: Optional[str] = Field(default=None, alias="langSmithProject")
    model: Optional[str] = None
    prompt_id: Optional[str] = Field(default=None, alias="promptId")
    response_language: Optional[str] = Field(default=None, alias="responseLanguage")


class ChatCompleteParams(Params):
    content_references_disabled: Optional[bool] = None


class ChatCompleteRequest(KibanaModel):
    params: ChatCompleteParams = Field(default_factory=ChatCompleteParams)
    body: ChatCompleteBody


_BASE = "/api/security_ai_assistant"
_CONVERSATIONS = _BASE + "/current_user/conversations"
_ENTRIES = _BASE + "/knowledge_base/entries"


class SecurityAIAssistant(Namespace):

    async def bulk_action_anonymization_fields(
        self, req: Optional[AnonymizationBulkRequest], *options: RequestOption
    ) -> APIResponse[AnonymizationBulkResult]:
        require(req)
        return await self._api.perform(
            "security_ai_assistant.bulk_action_anonymization", "POST", _BASE + "/anonymization_fields/_bulk_action",
            body=req.body, result=AnonymizationBulkResult, success=below_299, options=options,
        )

    async def bulk_action_knowledge_base_entries(
        self, req: Optional[KnowledgeBaseBulkRequest], *options: RequestOption
    ) -> APIResponse[KnowledgeBaseBulkResult]:
        require(req)
        return await self._api.perform(
            "security_ai_assistant.bulk_action_knowledge_base_entry", "POST", _ENTRIES + "/_bulk_action",
            body=req.body, result=KnowledgeBaseBulkResult, success=below_299, options=options,
        )

    async def bulk_action_prompts(
        self, req: Optional[PromptsBulkRequest], *options: RequestOption
    ) -> APIResponse[PromptsBulkResult]:
        require(req)
        return await self._api.perform(
            "security_ai_assistant.bulk_action_prompts", "POST", _BASE + "/prompts/_bulk_action",
            body=req.body, result=PromptsBulkResult, success=below_299, options=options,
        )

    async def create_conversation(
        self, req: Optional[ConversationCreateRequest], *options: RequestOption
    ) -> APIResponse[Conversation]:
        require(req)
        return await self._api.perform(
            "security_ai_assistant.create_conversation", "POST", _CONVERSATIONS,
            body=req.body, result=Conversation, success=below_299, options=options,
        )

    async def get_conversation(
        self, req: Optional[ConversationIdRequest], *options: RequestOption
    ) -> APIResponse[Conversation]:
        require(req)
        require(req.id, "conversation id is required")
        return await self._api.perform(
            "security_ai_assistant.get_conversation", "GET", _CONVERSATIONS + "/{id}",
            path_params={"id": req.id}, result=Conversation, success=below_299, options=options,
        )

    async def delete_conversation(
        self, req: Optional[ConversationIdRequest], *options: RequestOption
    ) -> APIResponse[Conversation]:
        require(req)
        require(req.id, "conversation id is required")
        return await self._api.perform(
            "security_ai_assistant.delete_conversation", "DELETE", _CONVERSATIONS + "/{id}",
            path_params={"id": req.id}, result=Conversation, success=below_299, options=options,
        )

    async def list_conversations(
        self, req: Optional[FindRequest] = None, *options: RequestOption
    ) -> APIResponse[ConversationList]:
        req = req or FindRequest()
        return await self._api.perform(
            "security_ai_assistant.list_conversations", "GET", _CONVERSATIONS + "/_find",
            params=req.params, result=ConversationList, success=below_299, options=options,
        )

    async def create_knowledge_base(
        self, req: Optional[KnowledgeBaseRequest], *options: RequestOption
    ) -> APIResponse[KnowledgeBaseSetup]:
        """Set up the knowledge base for ``resource`` (ELSER model and optional Security Labs docs)."""
        require(req)
        require(req.resource, "resource is required")
        return await self._api.perform(
            "security_ai_assistant.create_knowledge_base", "POST", _BASE + "/knowledge_base/{resource}",
            path_params={"resource": req.resource}, params=req.params,
            result=KnowledgeBaseSetup, success=below_299, options=options,
        )

    async def get_knowledge_base(
        self, req: Optional[KnowledgeBaseRequest], *options: RequestOption
    ) -> APIResponse[KnowledgeBaseStatus]:
        require(req)
        require(req.resource, "resource is required")
        return await self._api.perform(
            "security_ai_assistant.get_knowledge_base", "GET", _BASE + "/knowledge_base/{resource}",
            path_params={"resource": req.resource}, result=KnowledgeBaseStatus, success=below_299, options=options,
        )

    async def create_knowledge_base_entry(
        self, req: Optional[KnowledgeBaseEntryRequest], *options: RequestOption
    ) -> APIResponse[KnowledgeBaseEntry]:
        require(req)
        return await self._api.perform(
            "security_ai_assistant.create_knowledge_base_entry", "POST", _ENTRIES,
            body=req.body, result=KnowledgeBaseEntry, success=below_299, options=options,
        )

    async def get_knowledge_base_entry(
        self, req: Optional[KnowledgeBaseEntryIdRequest], *options: RequestOption
    ) -> APIResponse[KnowledgeBaseEntry]:
        require(req)
        require(req.id, "entry id is required")
        return await self._api.perform(
            "security_ai_assistant.get_knowledge_base_entry", "GET", _ENTRIES + "/{id}",
            path_params={"id": req.id}, result=KnowledgeBaseEntry, success=below_299, options=options,
        )

    async def update_knowledge_base_entry(
        self, req: Optional[KnowledgeBaseEntryUpdateRequest], *options: RequestOption
    ) -> APIResponse[KnowledgeBaseEntry]:
        require(req)
        require(req.id, "entry id is required")
        return await self._api.perform(
            "security_ai_assistant.update_knowledge_base_entry", "PUT", _ENTRIES + "/{id}",
            path_params={"id": req.id}, body=req.body, result=KnowledgeBaseEntry, success=below_299, options=options,
        )

    async def delete_knowledge_base_entry(
        self, req: Optional[KnowledgeBaseEntryIdRequest], *options: RequestOption
    ) -> APIResponse[Dict[str, Any]]:
        require(req)
        require(req.id, "entry id is required")
        return await self._api.perform(
            "security_ai_assistant.delete_knowledge_base_entry", "DELETE", _ENTRIES + "/{id}",
            path_params={"id": req.id}, result=Dict[str, Any], success=below_299, options=options,
        )

    async def list_knowledge_base_entries(
        self, req: Optional[FindRequest] = None, *options: RequestOption
    ) -> APIResponse[KnowledgeBaseEntryList]:
        req = req or FindRequest()
        return await self._api.perform(
            "security_ai_assistant.list_knowledge_base_entry", "GET", _ENTRIES + "/_find",
            params=req.params, result=KnowledgeBaseEntryList, success=below_299, options=options,
        )

    async def list_anonymization_fields(
        self, req: Optional[FindRequest] = None, *options: RequestOption
    ) -> APIResponse[AnonymizationFieldList]:
        req = req or FindRequest()
        return await self._api.perform(
            "security_ai_assistant.list_anonymization_fields", "GET", _BASE + "/anonymization_fields/_find",
            params=req.params, result=AnonymizationFieldList, success=below_299, options=options,
        )

    async def list_prompts(
        self, req: Optional[FindRequest] = None, *options: RequestOption
    ) -> APIResponse[PromptList]:
        req = req or FindRequest()
        return await self._api.perform(
            "security_ai_assistant.list_prompts", "GET", _BASE + "/prompts/_find",
            params=req.params, result=PromptList, success=below_299, options=options,
        )

    async def chat_complete(
        self,
        req: Optional[ChatCompleteRequest],
        *options: RequestOption,
        stream: bool = False,
    ) -> APIResponse:
        """Ask the model for a completion.

        With ``body.is_stream`` set the server answers with a text stream;
        pass ``stream=True`` to read it from ``response.stream``.
        """
        require(req)
        return await self._api.perform(
            "security_ai_assistant.create_model_response", "POST", _BASE + "/chat/complete",
            params=req.params, body=req.body, stream=stream, success=below_299, options=options,
        )
