"""Security exception lists and items (``/api/exception_lists``).

Item ``entries`` are a tagged union keyed on ``type``; ``nested`` entries
hold further match entries.
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import Field
from typing_extensions import Annotated

from .base import Namespace, below_299, require
from .models import KibanaModel, Params
from .ndjson import NDJSONResponse
from .response import APIResponse
from .saved_objects import NDJSON_FILENAME
from .transport import RequestOption


class EntryMatch(KibanaModel):
    type: Literal["match"] = "match"
    field: str
    operator: str = "included"
    value: str


class EntryMatchAny(KibanaModel):
    type: Literal["match_any"] = "match_any"
    field: str
    operator: str = "included"
    value: List[str]


class EntryListRef(KibanaModel):
    id: str
    type: str


class EntryList(KibanaModel):
    type: Literal["list"] = "list"
    field: str
    operator: str = "included"
    list: EntryListRef


class EntryExists(KibanaModel):
    type: Literal["exists"] = "exists"
    field: str
    operator: str = "included"


class EntryWildcard(KibanaModel):
    type: Literal["wildcard"] = "wildcard"
    field: str
    operator: str = "included"
    value: str


NestedEntryItem = Annotated[Union[EntryMatch, EntryMatchAny, EntryExists], Field(discriminator="type")]


class EntryNested(KibanaModel):
    type: Literal["nested"] = "nested"
    field: str
    entries: List[NestedEntryItem]


ExceptionEntry = Annotated[
    Union[EntryMatch, EntryMatchAny, EntryList, EntryExists, EntryNested, EntryWildcard],
    Field(discriminator="type"),
]


class ExceptionComment(KibanaModel):
    comment: str
    id: Optional[str] = None
    created_at: Optional[str] = None
    created_by: Optional[str] = None


class ExceptionList(KibanaModel):
    id: Optional[str] = None
    list_id: Optional[str] = None
    name: str
    description: str
    type: str
    namespace_type: Optional[str] = None
    immutable: Optional[bool] = None
    os_types: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    meta: Optional[Any] = None
    tie_breaker_id: Optional[str] = None
    version: Optional[int] = None
    underscore_version: Optional[str] = Field(default=None, alias="_version")
    created_at: Optional[str] = None
    created_by: Optional[str] = None
    updated_at: Optional[str] = None
    updated_by: Optional[str] = None


class ExceptionItem(KibanaModel):
    id: Optional[str] = None
    item_id: Optional[str] = None
    list_id: Optional[str] = None
    name: str
    description: str
    type: str = "simple"
    entries: List[ExceptionEntry] = Field(default_factory=list)
    namespace_type: Optional[str] = None
    os_types: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    comments: Optional[List[ExceptionComment]] = None
    expire_time: Optional[str] = None
    meta: Optional[Any] = None
    tie_breaker_id: Optional[str] = None
    underscore_version: Optional[str] = Field(default=None, alias="_version")
    created_at: Optional[str] = None
    created_by: Optional[str] = None
    updated_at: Optional[str] = None
    updated_by: Optional[str] = None


class ExceptionItemPage(KibanaModel):
    data: List[ExceptionItem] = Field(default_factory=list)
    page: int = 0
    per_page: int = 0
    total: int = 0
    pit: Optional[str] = None


class ExceptionListPage(KibanaModel):
    data: List[ExceptionList] = Field(default_factory=list)
    page: int = 0
    per_page: int = 0
    total: int = 0


class ExceptionListSummary(KibanaModel):
    linux: int = 0
    macos: int = 0
    windows: int = 0
    total: int = 0


class ImportErrorInfo(KibanaModel):
    message: str
    status_code: int


class ImportErrorDetail(KibanaModel):
    error: ImportErrorInfo
    list_id: Optional[str] = None
    item_id: Optional[str] = None


class ExceptionListImportResult(KibanaModel):
    errors: List[ImportErrorDetail] = Field(default_factory=list)
    success: bool = False
    success_count: int = 0
    success_exception_lists: Optional[bool] = None
    success_count_exception_lists: Optional[int] = None
    success_exception_list_items: Optional[bool] = None
    success_count_exception_list_items: Optional[int] = None


# --- params --------------------------------------------------------------

class ListRefParams(Params):
    """Addresses a list by ``id`` or ``list_id``."""
    id: Optional[str] = None
    list_id: Optional[str] = None
    namespace_type: Optional[str] = None


class ItemRefParams(Params):
    """Addresses an item by ``id`` or ``item_id``."""
    id: Optional[str] = None
    item_id: Optional[str] = None
    namespace_type: Optional[str] = None


class ExportListParams(ListRefParams):
    include_expired_exceptions: Optional[bool] = None


class DuplicateListParams(Params):
    list_id: str
    namespace_type: Optional[str] = None
    include_expired_exceptions: Optional[bool] = None


class SummaryParams(ListRefParams):
    filter: Optional[str] = None


class FindParams(Params):
    filter: Optional[str] = None
    namespace_type: Optional[Union[str, List[str]]] = None
    sort_field: Optional[str] = None
    sort_order: Optional[str] = None
    page: Optional[int] = None
    per_page: Optional[int] = None


class ListItemsParams(FindParams):
    list_id: Optional[List[str]] = None
    search: Optional[str] = None


class ImportListParams(Params):
    overwrite: Optional[bool] = None
    as_new_list: Optional[bool] = None


# --- requests ------------------------------------------------------------

class ExceptionListRequest(KibanaModel):
    params: ListRefParams = Field(default_factory=ListRefParams)


class ExceptionItemRequest(KibanaModel):
    params: ItemRefParams = Field(default_factory=ItemRefParams)


class ExceptionItemBody(KibanaModel):
    list_id: Optional[str] = None
    item_id: Optional[str] = None
    name: str
    description: str
    type: str = "simple"
    entries: List[ExceptionEntry]
    namespace_type: Optional[str] = None
    os_types: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    comments: Optional[List[ExceptionComment]] = None
    expire_time: Optional[str] = None
    meta: Optional[Any] = None


class ExceptionItemUpdateBody(ExceptionItemBody):
    id: Optional[str] = None
    underscore_version: Optional[str] = Field(default=None, alias="_version")


class ExceptionListBody(KibanaModel):
    list_id: Optional[str] = None
    name: str
    description: str
    type: str = "detection"
    namespace_type: Optional[str] = None
    os_types: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    meta: Optional[Any] = None
    version: Optional[int] = None


class ExceptionListUpdateBody(ExceptionListBody):
    id: Optional[str] = None
    underscore_version: Optional[str] = Field(default=None, alias="_version")


class CreateItemRequest(KibanaModel):
    body: ExceptionItemBody


class UpdateItemRequest(KibanaModel):
    body: ExceptionItemUpdateBody


class CreateListRequest(KibanaModel):
    body: ExceptionListBody


class UpdateListRequest(KibanaModel):
    body: ExceptionListUpdateBody


class RuleExceptionItemsBody(KibanaModel):
    items: List[ExceptionItemBody]


class CreateRuleExceptionItemsRequest(KibanaModel):
    rule_id: str
    body: RuleExceptionItemsBody


class SharedListBody(KibanaModel):
    name: str
    description: str


class CreateSharedListRequest(KibanaModel):
    body: SharedListBody


class DuplicateListRequest(KibanaModel):
    params: DuplicateListParams


class ExportListRequest(KibanaModel):
    params: ExportListParams


class SummaryRequest(KibanaModel):
    params: SummaryParams = Field(default_factory=SummaryParams)


class ImportListRequest(KibanaModel):
    file: bytes
    params: ImportListParams = Field(default_factory=ImportListParams)


class ListItemsRequest(KibanaModel):
    params: ListItemsParams = Field(default_factory=ListItemsParams)


class ListListsRequest(KibanaModel):
    params: FindParams = Field(default_factory=FindParams)


_LISTS = "/api/exception_lists"
_ITEMS = "/api/exception_lists/items"


class SecurityExceptions(Namespace):

    async def create_list(self, req: Optional[CreateListRequest], *options: RequestOption) -> APIResponse[ExceptionList]:
        require(req)
        return await self._api.perform(
            "security_exceptions.create_list", "POST", _LISTS,
            body=req.body, result=ExceptionList, success=below_299, options=options,
        )

    async def create_shared_list(
        self, req: Optional[CreateSharedListRequest], *options: RequestOption
    ) -> APIResponse[ExceptionList]:
        require(req)
        return await self._api.perform(
            "security_exceptions.create_shared_list", "POST", "/api/exceptions/shared",
            body=req.body, result=ExceptionList, success=below_299, options=options,
        )

    async def get_list(self, req: Optional[ExceptionListRequest], *options: RequestOption) -> APIResponse[ExceptionList]:
        require(req)
        return await self._api.perform(
            "security_exceptions.get_list", "GET", _LISTS,
            params=req.params, result=ExceptionList, success=below_299, options=options,
        )

    async def update_list(self, req: Optional[UpdateListRequest], *options: RequestOption) -> APIResponse[ExceptionList]:
        require(req)
        return await self._api.perform(
            "security_exceptions.update_list", "PUT", _LISTS,
            body=req.body, result=ExceptionList, success=below_299, options=options,
        )

    async def delete_list(self, req: Optional[ExceptionListRequest], *options: RequestOption) -> APIResponse[ExceptionList]:
        require(req)
        return await self._api.perform(
            "security_exceptions.delete_list", "DELETE", _LISTS,
            params=req.params, result=ExceptionList, success=below_299, options=options,
        )

    async def duplicate_list(self, req: Optional[DuplicateListRequest], *options: RequestOption) -> APIResponse[ExceptionList]:
        require(req)
        return await self._api.perform(
            "security_exceptions.duplicate_list", "POST", _LISTS + "/_duplicate",
            params=req.params, result=ExceptionList, success=below_299, options=options,
        )

    async def list_lists(
        self, req: Optional[ListListsRequest] = None, *options: RequestOption
    ) -> APIResponse[ExceptionListPage]:
        req = req or ListListsRequest()
        return await self._api.perform(
            "security_exceptions.list_lists", "GET", _LISTS + "/_find",
            params=req.params, result=ExceptionListPage, success=below_299, options=options,
        )

    async def get_summary(
        self, req: Optional[SummaryRequest] = None, *options: RequestOption
    ) -> APIResponse[ExceptionListSummary]:
        req = req or SummaryRequest()
        return await self._api.perform(
            "security_exceptions.get_summary", "GET", _LISTS + "/summary",
            params=req.params, result=ExceptionListSummary, success=below_299, options=options,
        )

    async def export_list(
        self, req: Optional[ExportListRequest], *options: RequestOption, stream: bool = False
    ) -> NDJSONResponse:
        """Export a list and its items as NDJSON records."""
        require(req)
        return await self._api.perform(
            "security_exceptions.export_list", "POST", _LISTS + "/_export",
            params=req.params, ndjson=True, stream=stream, success=below_299, options=options,
        )

    async def import_list(
        self, req: Optional[ImportListRequest], *options: RequestOption
    ) -> APIResponse[ExceptionListImportResult]:
        require(req)
        return await self._api.perform(
            "security_exceptions.import_list", "POST", _LISTS + "/_import",
            params=req.params,
            files={"file": (NDJSON_FILENAME, req.file, "application/ndjson")},
            result=ExceptionListImportResult, success=below_299, options=options,
        )

    async def create_item(self, req: Optional[CreateItemRequest], *options: RequestOption) -> APIResponse[ExceptionItem]:
        require(req)
        return await self._api.perform(
            "security_exceptions.create_item", "POST", _ITEMS,
            body=req.body, result=ExceptionItem, success=below_299, options=options,
        )

    async def create_items(
        self, req: Optional[CreateRuleExceptionItemsRequest], *options: RequestOption
    ) -> APIResponse[List[ExceptionItem]]:
        """Create exception items attached to a single detection rule."""
        require(req)
        require(req.rule_id, "rule id is required")
        return await self._api.perform(
            "security_exceptions.create_items", "POST", "/api/detection_engine/rules/{id}/exceptions",
            path_params={"id": req.rule_id}, body=req.body,
            result=List[ExceptionItem], success=below_299, options=options,
        )

    async def get_item(self, req: Optional[ExceptionItemRequest], *options: RequestOption) -> APIResponse[ExceptionItem]:
        require(req)
        return await self._api.perform(
            "security_exceptions.get_item", "GET", _ITEMS,
            params=req.params, result=ExceptionItem, success=below_299, options=options,
        )

    async def update_item(self, req: Optional[UpdateItemRequest], *options: RequestOption) -> APIResponse[ExceptionItem]:
        require(req)
        return await self._api.perform(
            "security_exceptions.update_item", "PUT", _ITEMS,
            body=req.body, result=ExceptionItem, success=below_299, options=options,
        )

    async def delete_item(self, req: Optional[ExceptionItemRequest], *options: RequestOption) -> APIResponse[ExceptionItem]:
        require(req)
        return await self._api.perform(
            "security_exceptions.delete_item", "DELETE", _ITEMS,
            params=req.params, result=ExceptionItem, success=below_299, options=options,
        )

    async def list_items(
        self, req: Optional[ListItemsRequest] = None, *options: RequestOption
    ) -> APIResponse[ExceptionItemPage]:
        req = req or ListItemsRequest()
        return await self._api.perform(
            "security_exceptions.list_items", "GET", _ITEMS + "/_find",
            params=req.params, result=ExceptionItemPage, success=below_299, options=options,
        )
