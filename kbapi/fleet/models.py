"""Envelopes shared by the Fleet API.

Fleet wraps single records in ``{"item": ...}`` and listings in
``{"items": [...], "total", "page", "perPage"}``.
"""
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import Field

from ..models import KibanaModel, Params

T = TypeVar("T")


class Item(KibanaModel, Generic[T]):
    item: T


class ItemList(KibanaModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    total: int = 0
    page: int = 0
    per_page: int = Field(default=0, alias="perPage")


class BulkItems(KibanaModel, Generic[T]):
    """``_bulk_get`` result; unknown ids are omitted when ``ignoreMissing`` is set."""
    items: List[T] = Field(default_factory=list)


class ActionIdResult(KibanaModel):
    action_id: str = Field(alias="actionId")


class IdResult(KibanaModel):
    id: str


class Deleted(KibanaModel):
    id: Optional[str] = None
    name: Optional[str] = None
    success: Optional[bool] = None
    action: Optional[str] = None


class PageParams(Params):
    page: Optional[int] = None
    per_page: Optional[int] = Field(default=None, alias="perPage")
    kuery: Optional[str] = None


class FormatParams(Params):
    """``format`` is ``simplified`` or ``legacy`` for package policy shapes."""
    format: Optional[str] = None


JSONObject = Dict[str, Any]
