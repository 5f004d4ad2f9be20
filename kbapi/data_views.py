"""Data views (``/api/data_views``)."""
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import Namespace, below_299, require
from .models import KibanaModel
from .response import APIResponse
from .transport import RequestOption


class RuntimeFieldScript(KibanaModel):
    source: Optional[str] = None


class RuntimeField(KibanaModel):
    type: str
    script: RuntimeFieldScript = Field(default_factory=RuntimeFieldScript)


class FieldAttrs(KibanaModel):
    count: Optional[int] = None
    custom_label: Optional[str] = Field(default=None, alias="customLabel")
    custom_description: Optional[str] = Field(default=None, alias="customDescription")


class SourceFilter(KibanaModel):
    value: str


class TypeMeta(KibanaModel):
    aggs: Dict[str, Any] = Field(default_factory=dict)
    params: Dict[str, Any] = Field(default_factory=dict)


class DataViewField(KibanaModel):
    name: str
    type: str
    count: int = 0
    es_types: List[str] = Field(default_factory=list, alias="esTypes")
    scripted: bool = False
    searchable: bool = False
    aggregatable: bool = False
    read_from_doc_values: bool = Field(default=False, alias="readFromDocValues")
    short_dots_enable: bool = Field(default=False, alias="shortDotsEnable")
    format: Optional[Dict[str, Any]] = None
    runtime_field: Optional[RuntimeField] = Field(default=None, alias="runtimeField")


class DataView(KibanaModel):
    title: str
    id: Optional[str] = None
    name: Optional[str] = None
    version: Optional[str] = None
    type: Optional[str] = None
    time_field_name: Optional[str] = Field(default=None, alias="timeFieldName")
    allow_no_index: Optional[bool] = Field(default=None, alias="allowNoIndex")
    namespaces: Optional[List[str]] = None
    field_attrs: Optional[Dict[str, FieldAttrs]] = Field(default=None, alias="fieldAttrs")
    field_formats: Optional[Dict[str, Any]] = Field(default=None, alias="fieldFormats")
    fields: Optional[Dict[str, DataViewField]] = None
    runtime_field_map: Optional[Dict[str, RuntimeField]] = Field(default=None, alias="runtimeFieldMap")
    source_filters: Optional[List[SourceFilter]] = Field(default=None, alias="sourceFilters")
    type_meta: Optional[TypeMeta] = Field(default=None, alias="typeMeta")


class DataViewEnvelope(KibanaModel):
    data_view: DataView


class DataViewSummary(KibanaModel):
    id: str
    title: str
    name: Optional[str] = None
    namespaces: Optional[List[str]] = None
    type_meta: Optional[TypeMeta] = Field(default=None, alias="typeMeta")


class DataViewList(KibanaModel):
    data_view: List[DataViewSummary] = Field(default_factory=list)


class DataViewCreateBody(KibanaModel):
    data_view: DataView
    override: Optional[bool] = None


class DataViewUpdate(KibanaModel):
    title: Optional[str] = None
    name: Optional[str] = None
    time_field_name: Optional[str] = Field(default=None, alias="timeFieldName")
    allow_no_index: Optional[bool] = Field(default=None, alias="allowNoIndex")
    field_formats: Optional[Dict[str, Any]] = Field(default=None, alias="fieldFormats")
    runtime_field_map: Optional[Dict[str, RuntimeField]] = Field(default=None, alias="runtimeFieldMap")
    source_filters: Optional[List[SourceFilter]] = Field(default=None, alias="sourceFilters")


class DataViewUpdateBody(KibanaModel):
    data_view: DataViewUpdate
    refresh_fields: Optional[bool] = None


class DataViewsCreateRequest(KibanaModel):
    body: DataViewCreateBody


class DataViewsUpdateRequest(KibanaModel):
    id: str
    body: DataViewUpdateBody


class DataViewIdRequest(KibanaModel):
    id: str


class RuntimeFieldBody(KibanaModel):
    name: str
    runtime_field: RuntimeField = Field(alias="runtimeField")


class DataViewsRuntimeFieldRequest(KibanaModel):
    """Create (or upsert) a runtime field on a data view."""
    id: str
    body: RuntimeFieldBody


class RuntimeFieldRef(KibanaModel):
    id: str
    field_name: str


class RuntimeFieldUpdateBody(KibanaModel):
    runtime_field: RuntimeField = Field(alias="runtimeField")


class DataViewsUpdateRuntimeFieldRequest(KibanaModel):
    id: str
    field_name: str
    body: RuntimeFieldUpdateBody


class RuntimeFieldResult(KibanaModel):
    data_view: Optional[DataView] = None
    fields: List[DataViewField] = Field(default_factory=list)


class DefaultDataView(KibanaModel):
    data_view_id: Optional[str] = None


class SetDefaultBody(KibanaModel):
    data_view_id: Optional[str]
    force: Optional[bool] = None


class DataViewsSetDefaultRequest(KibanaModel):
    body: SetDefaultBody


class FieldMetadataBody(KibanaModel):
    fields: Dict[str, FieldAttrs]


class DataViewsUpdateFieldMetadataRequest(KibanaModel):
    id: str
    body: FieldMetadataBody


class Acknowledged(KibanaModel):
    acknowledged: Optional[bool] = None


class SwapReferencesBody(KibanaModel):
    from_id: str = Field(alias="fromId")
    to_id: str = Field(alias="toId")
    from_type: Optional[str] = Field(default=None, alias="fromType")
    for_id: Optional[List[str]] = Field(default=None, alias="forId")
    for_type: Optional[str] = Field(default=None, alias="forType")
    delete: Optional[bool] = None


class DataViewsSwapReferencesRequest(KibanaModel):
    body: SwapReferencesBody


class SwapReferencesResult(KibanaModel):
    result: List[Dict[str, Any]] = Field(default_factory=list)
    delete_status: Optional[Dict[str, Any]] = Field(default=None, alias="deleteStatus")


_DATA_VIEW = "/api/data_views/data_view/{id}"
_RUNTIME_FIELD = _DATA_VIEW + "/runtime_field/{field_name}"


class DataViews(Namespace):

    async def list(self, *options: RequestOption) -> APIResponse[DataViewList]:
        return await self._api.perform(
            "dataviews.list", "GET", "/api/data_views",
            result=DataViewList, success=below_299, options=options,
        )

    async def create(self, req: Optional[DataViewsCreateRequest], *options: RequestOption) -> APIResponse[DataViewEnvelope]:
        require(req)
        return await self._api.perform(
            "dataviews.create", "POST", "/api/data_views/data_view",
            body=req.body, result=DataViewEnvelope, success=below_299, options=options,
        )

    async def get(self, req: Optional[DataViewIdRequest], *options: RequestOption) -> APIResponse[DataViewEnvelope]:
        require(req)
        require(req.id, "data view id is required")
        return await self._api.perform(
            "dataviews.get", "GET", _DATA_VIEW,
            path_params={"id": req.id}, result=DataViewEnvelope, success=below_299, options=options,
        )

    async def update(self, req: Optional[DataViewsUpdateRequest], *options: RequestOption) -> APIResponse[DataViewEnvelope]:
        require(req)
        require(req.id, "data view id is required")
        return await self._api.perform(
            "dataviews.update", "POST", _DATA_VIEW,
            path_params={"id": req.id}, body=req.body, result=DataViewEnvelope, success=below_299, options=options,
        )

    async def delete(self, req: Optional[DataViewIdRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        require(req.id, "data view id is required")
        return await self._api.perform(
            "dataviews.delete", "DELETE", _DATA_VIEW,
            path_params={"id": req.id}, success=below_299, options=options,
        )

    async def get_default(self, *options: RequestOption) -> APIResponse[DefaultDataView]:
        return await self._api.perform(
            "dataviews.get_default", "GET", "/api/data_views/default",
            result=DefaultDataView, success=below_299, options=options,
        )

    async def set_default(self, req: Optional[DataViewsSetDefaultRequest], *options: RequestOption) -> APIResponse[Acknowledged]:
        """Set the default data view; a ``None`` id with ``force`` clears it."""
        require(req)
        return await self._api.perform(
            "dataviews.set_default", "POST", "/api/data_views/default",
            body=req.body.model_dump(mode="json", by_alias=True, exclude_unset=True),
            result=Acknowledged, success=below_299, options=options,
        )

    async def update_field_metadata(
        self, req: Optional[DataViewsUpdateFieldMetadataRequest], *options: RequestOption
    ) -> APIResponse[Acknowledged]:
        require(req)
        require(req.id, "data view id is required")
        return await self._api.perform(
            "dataviews.update_field_metadata", "POST", _DATA_VIEW + "/fields",
            path_params={"id": req.id}, body=req.body, result=Acknowledged, success=below_299, options=options,
        )

    async def create_runtime_field(
        self, req: Optional[DataViewsRuntimeFieldRequest], *options: RequestOption
    ) -> APIResponse[RuntimeFieldResult]:
        require(req)
        require(req.id, "data view id is required")
        return await self._api.perform(
            "dataviews.create_runtime_field", "POST", _DATA_VIEW + "/runtime_field",
            path_params={"id": req.id}, body=req.body, result=RuntimeFieldResult, success=below_299, options=options,
        )

    async def create_update_runtime_field(
        self, req: Optional[DataViewsRuntimeFieldRequest], *options: RequestOption
    ) -> APIResponse[RuntimeFieldResult]:
        require(req)
        require(req.id, "data view id is required")
        return await self._api.perform(
            "dataviews.create_update_runtime_field", "PUT", _DATA_VIEW + "/runtime_field",
            path_params={"id": req.id}, body=req.body, result=RuntimeFieldResult, success=below_299, options=options,
        )

    async def get_runtime_field(self, req: Optional[RuntimeFieldRef], *options: RequestOption) -> APIResponse[RuntimeFieldResult]:
        require(req)
        require(req.id, "data view id is required")
        require(req.field_name, "field name is required")
        return await self._api.perform(
            "dataviews.get_runtime_field", "GET", _RUNTIME_FIELD,
            path_params={"id": req.id, "field_name": req.field_name},
            result=RuntimeFieldResult, success=below_299, options=options,
        )

    async def update_runtime_field(
        self, req: Optional[DataViewsUpdateRuntimeFieldRequest], *options: RequestOption
    ) -> APIResponse[RuntimeFieldResult]:
        require(req)
        require(req.id, "data view id is required")
        require(req.field_name, "field name is required")
        return await self._api.perform(
            "dataviews.update_runtime_field", "POST", _RUNTIME_FIELD,
            path_params={"id": req.id, "field_name": req.field_name},
            body=req.body, result=RuntimeFieldResult, success=below_299, options=options,
        )

    async def delete_runtime_field(self, req: Optional[RuntimeFieldRef], *options: RequestOption) -> APIResponse[None]:
        require(req)
        require(req.id, "data view id is required")
        require(req.field_name, "field name is required")
        return await self._api.perform(
            "dataviews.delete_runtime_field", "DELETE", _RUNTIME_FIELD,
            path_params={"id": req.id, "field_name": req.field_name}, success=below_299, options=options,
        )

    async def swap_saved_object_reference(
        self, req: Optional[DataViewsSwapReferencesRequest], *options: RequestOption
    ) -> APIResponse[SwapReferencesResult]:
        require(req)
        return await self._api.perform(
            "dataviews.swap_saved_object_reference", "POST", "/api/data_views/swap_references",
            body=req.body, result=SwapReferencesResult, success=below_299, options=options,
        )

    async def preview_saved_object_swap(
        self, req: Optional[DataViewsSwapReferencesRequest], *options: RequestOption
    ) -> APIResponse[SwapReferencesResult]:
        require(req)
        return await self._api.perform(
            "dataviews.preview_saved_object_swap", "POST", "/api/data_views/swap_references/_preview",
            body=req.body, result=SwapReferencesResult, success=below_299, options=options,
        )
