"""Endpoint exception list (``/api/endpoint_list``).

Items share the exception-item shapes of :mod:`kbapi.security_exceptions`;
the list itself is a singleton, so no list id is needed.
"""
from typing import Any, Dict, List, Optional

from pydantic import Field

from .base import Namespace, require
from .models import KibanaModel, Params
from .response import APIResponse
from .security_exceptions import (
    ExceptionComment,
    ExceptionEntry,
    ExceptionItem,
    ExceptionItemPage,
    ExceptionList,
)
from .transport import RequestOption


class EndpointItemParams(Params):
    id: Optional[str] = None
    item_id: Optional[str] = None


class EndpointItemRequest(KibanaModel):
    params: EndpointItemParams = Field(default_factory=EndpointItemParams)


class EndpointItemBody(KibanaModel):
    item_id: Optional[str] = None
    name: str
    description: str
    type: str = "simple"
    entries: List[ExceptionEntry]
    os_types: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    comments: Optional[List[ExceptionComment]] = None
    meta: Optional[Dict[str, Any]] = None


class EndpointItemUpdateBody(EndpointItemBody):
    id: Optional[str] = None
    underscore_version: Optional[str] = Field(default=None, alias="_version")


class EndpointCreateItemRequest(KibanaModel):
    body: EndpointItemBody


class EndpointUpdateItemRequest(KibanaModel):
    body: EndpointItemUpdateBody


class EndpointListItemsParams(Params):
    filter: Optional[str] = None
    page: Optional[int] = None
    per_page: Optional[int] = None
    sort_field: Optional[str] = None
    sort_order: Optional[str] = None


class EndpointListItemsRequest(KibanaModel):
    params: EndpointListItemsParams = Field(default_factory=EndpointListItemsParams)


_ITEMS = "/api/endpoint_list/items"


class EndpointExceptions(Namespace):

    async def create_list(self, *options: RequestOption) -> APIResponse[ExceptionList]:
        """Create the endpoint exception list; an empty body means it already exists."""
        return await self._api.perform(
            "endpoint.exceptions.create_list", "POST", "/api/endpoint_list",
            result=ExceptionList, options=options,
        )

    async def create_item(self, req: Optional[EndpointCreateItemRequest], *options: RequestOption) -> APIResponse[ExceptionItem]:
        require(req)
        return await self._api.perform(
            "endpoint.exceptions.create_item", "POST", _ITEMS,
            body=req.body, result=ExceptionItem, options=options,
        )

    async def get(self, req: Optional[EndpointItemRequest], *options: RequestOption) -> APIResponse[ExceptionItem]:
        require(req)
        return await self._api.perform(
            "endpoint.exceptions.get", "GET", _ITEMS,
            params=req.params, result=ExceptionItem, options=options,
        )

    async def update(self, req: Optional[EndpointUpdateItemRequest], *options: RequestOption) -> APIResponse[ExceptionItem]:
        require(req)
        return await self._api.perform(
            "endpoint.exceptions.update", "PUT", _ITEMS,
            body=req.body, result=ExceptionItem, options=options,
        )

    async def delete(self, req: Optional[EndpointItemRequest], *options: RequestOption) -> APIResponse[ExceptionItem]:
        require(req)
        return await self._api.perform(
            "endpoint.exceptions.delete_item", "DELETE", _ITEMS,
            params=req.params, result=ExceptionItem, options=options,
        )

    async def list_items(
        self, req: Optional[EndpointListItemsRequest] = None, *options: RequestOption
    ) -> APIResponse[ExceptionItemPage]:
        req = req or EndpointListItemsRequest()
        return await self._api.perform(
            "endpoint.exceptions.list_items", "GET", _ITEMS + "/_find",
            params=req.params, result=ExceptionItemPage, options=options,
        )


class Endpoint:

    def __init__(self, api) -> None:
        self.exceptions = EndpointExceptions(api)
