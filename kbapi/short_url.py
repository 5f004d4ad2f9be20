"""Short URL endpoints."""
from typing import Any, Dict, Optional

from pydantic import Field

from .base import Namespace, require
from .models import KibanaModel
from .response import APIResponse
from .transport import RequestOption


class ShortURLLocator(KibanaModel):
    id: Optional[str] = None
    version: Optional[str] = None
    state: Optional[Dict[str, Any]] = None


class ShortURL(KibanaModel):
    id: Optional[str] = None
    slug: Optional[str] = None
    access_count: Optional[int] = Field(default=None, alias="accessCount")
    access_date: Optional[Any] = Field(default=None, alias="accessDate")
    create_date: Optional[Any] = Field(default=None, alias="createDate")
    locator: Optional[ShortURLLocator] = None


class ShortURLCreateBody(KibanaModel):
    locator_id: str = Field(alias="locatorId")
    params: Dict[str, Any] = Field(default_factory=dict)
    human_readable_slug: Optional[bool] = Field(default=None, alias="humanReadableSlug")
    slug: Optional[str] = None


class ShortURLCreateRequest(KibanaModel):
    body: ShortURLCreateBody


class ShortURLGetRequest(KibanaModel):
    id: str


class ShortURLDeleteRequest(KibanaModel):
    id: str


class ShortURLResolveRequest(KibanaModel):
    slug: str


class ShortURLs(Namespace):

    async def create(self, req: Optional[ShortURLCreateRequest], *options: RequestOption) -> APIResponse[ShortURL]:
        require(req)
        return await self._api.perform(
            "short_url.create", "POST", "/api/short_url",
            body=req.body, result=ShortURL, options=options,
        )

    async def get(self, req: Optional[ShortURLGetRequest], *options: RequestOption) -> APIResponse[ShortURL]:
        require(req)
        return await self._api.perform(
            "short_url.get", "GET", "/api/short_url/{id}",
            path_params={"id": req.id}, result=ShortURL, options=options,
        )

    async def delete(self, req: Optional[ShortURLDeleteRequest], *options: RequestOption) -> APIResponse[None]:
        require(req)
        return await self._api.perform(
            "short_url.delete", "DELETE", "/api/short_url/{id}",
            path_params={"id": req.id}, options=options,
        )

    async def resolve(self, req: Optional[ShortURLResolveRequest], *options: RequestOption) -> APIResponse[ShortURL]:
        """Look a short URL up by its slug."""
        require(req)
        return await self._api.perform(
            "short_url.resolve", "GET", "/api/short_url/_slug/{slug}",
            path_params={"slug": req.slug}, result=ShortURL, options=options,
        )
