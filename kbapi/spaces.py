"""Spaces endpoints (``/api/spaces``)."""
from typing import Dict, List, Optional

from pydantic import Field

from .base import Namespace, require
from .models import KibanaModel, Params, SavedObjectRef
from .response import APIResponse
from .transport import RequestOption


class Space(KibanaModel):
    id: Optional[str] = None
    name: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    reserved: Optional[bool] = Field(default=None, alias="_reserved")
    description: Optional[str] = None
    disabled_features: Optional[List[str]] = Field(default=None, alias="disabledFeatures")
    color: Optional[str] = None
    initials: Optional[str] = None
    solution: Optional[str] = None


class SpaceBody(Space):
    id: str
    name: str


class SpacesGetRequest(KibanaModel):
    id: str


class SpacesGetAllParams(Params):
    purpose: Optional[str] = None
    include_authorized_purposes: Optional[bool] = None


class SpacesGetAllRequest(KibanaModel):
    params: SpacesGetAllParams = Field(default_factory=SpacesGetAllParams)


class SpacesCreateRequest(KibanaModel):
    body: SpaceBody


class SpacesUpdateRequest(KibanaModel):
    id: str
    body: SpaceBody


class SpacesDeleteRequest(KibanaModel):
    id: str


class CopyObjectsBody(KibanaModel):
    objects: List[SavedObjectRef]
    spaces: List[str]
    compatibility_mode: Optional[bool] = Field(default=None, alias="compatibilityMode")
    create_new_copies: Optional[bool] = Field(default=None, alias="createNewCopies")
    include_references: Optional[bool] = Field(default=None, alias="includeReferences")
    overwrite: Optional[bool] = None


class SpacesCopyObjectsRequest(KibanaModel):
    body: CopyObjectsBody


class CopyResult(KibanaModel):
    success: bool = False
    success_count: Optional[int] = Field(default=None, alias="successCount")
    success_results: Optional[List[dict]] = Field(default=None, alias="successResults")
    errors: Optional[List[dict]] = None


class LegacyURLAlias(KibanaModel):
    source_id: str = Field(alias="sourceId")
    target_space: str = Field(alias="targetSpace")
    target_type: str = Field(alias="targetType")


class DisableLegacyURLBody(KibanaModel):
    aliases: List[LegacyURLAlias]


class SpacesDisableLegacyURLRequest(KibanaModel):
    body: DisableLegacyURLBody


class ShareableReferencesBody(KibanaModel):
    objects: List[SavedObjectRef]


class SpacesShareableReferencesRequest(KibanaModel):
    body: ShareableReferencesBody


class ObjectSpacesReferences(KibanaModel):
    id: str
    type: str
    spaces: List[str] = Field(default_factory=list)
    inbound_references: List[dict] = Field(default_factory=list, alias="inboundReferences")


class ShareableReferences(KibanaModel):
    objects: List[ObjectSpacesReferences] = Field(default_factory=list)


class UpdateObjectsSpacesBody(KibanaModel):
    objects: List[SavedObjectRef]
    spaces_to_add: List[str] = Field(default_factory=list, alias="spacesToAdd")
    spaces_to_remove: List[str] = Field(default_factory=list, alias="spacesToRemove")


class SpacesUpdateObjectsRequest(KibanaModel):
    body: UpdateObjectsSpacesBody


class ObjectSpaces(KibanaModel):
    id: str
    type: str
    spaces: List[str] = Field(default_factory=list)


class UpdateObjectsSpacesResult(KibanaModel):
    objects: List[ObjectSpaces] = Field(default_factory=list)


class Spaces(Namespace):

    async def get(self, req: Optional[SpacesGetRequest], *options: RequestOption) -> APIResponse[Space]:
        """GET /api/spaces/space/{id}"""
        require(req)
        return await self._api.perform(
            "spaces.get", "GET", "/api/spaces/space/{id}",
            path_params={"id": req.id}, result=Space, options=options,
        )

    async def get_all(
        self, req: Optional[SpacesGetAllRequest] = None, *options: RequestOption
    ) -> APIResponse[List[Space]]:
        req = req or SpacesGetAllRequest()
        return await self._api.perform(
            "spaces.get_all", "GET", "/api/spaces/space",
            params=req.params, result=List[Space], options=options,
        )

    async def create(self, req: Optional[SpacesCreateRequest], *options: RequestOption) -> APIResponse[Space]:
        require(req)
        return await self._api.perform(
            "spaces.create", "POST", "/api/spaces/space",
            body=req.body, result=Space, options=options,
        )

    async def update(self, req: Optional[SpacesUpdateRequest], *options: RequestOption) -> APIResponse[Space]:
        require(req)
        return await self._api.perform(
            "spaces.update", "PUT", "/api/spaces/space/{id}",
            path_params={"id": req.id}, body=req.body, result=Space, options=options,
        )

    async def delete(self, req: Optional[SpacesDeleteRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        return await self._api.perform(
            "spaces.delete", "DELETE", "/api/spaces/space/{id}",
            path_params={"id": req.id}, options=options,
        )

    async def copy_objects(
        self, req: Optional[SpacesCopyObjectsRequest], *options: RequestOption
    ) -> APIResponse[Dict[str, CopyResult]]:
        """Copy saved objects into other spaces; the body is keyed by target space id."""
        require(req)
        return await self._api.perform(
            "spaces.copy", "POST", "/api/spaces/_copy_saved_objects",
            body=req.body, result=Dict[str, CopyResult], options=options,
        )

    async def disable_legacy_url_aliases(
        self, req: Optional[SpacesDisableLegacyURLRequest], *options: RequestOption
    ) -> APIResponse[None]:
        require(req)
        return await self._api.perform(
            "spaces.disable_legacy_url", "POST", "/api/spaces/_disable_legacy_url_aliases",
            body=req.body, options=options,
        )

    async def get_shareable_references(
        self, req: Optional[SpacesShareableReferencesRequest], *options: RequestOption
    ) -> APIResponse[ShareableReferences]:
        require(req)
        return await self._api.perform(
            "spaces.shareable_references", "POST", "/api/spaces/_get_shareable_references",
            body=req.body, result=ShareableReferences, options=options,
        )

    async def update_objects(
        self, req: Optional[SpacesUpdateObjectsRequest], *options: RequestOption
    ) -> APIResponse[UpdateObjectsSpacesResult]:
        require(req)
        return await self._api.perform(
            "spaces.update_objects", "POST", "/api/spaces/_update_objects_spaces",
            body=req.body, result=UpdateObjectsSpacesResult, options=options,
        )
