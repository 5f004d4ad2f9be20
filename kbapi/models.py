"""Shared base models for Kibana request and response payloads."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class KibanaModel(BaseModel):
    """Wire DTO: unknown fields are kept, fields accept alias or python name."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Params(KibanaModel):
    """Query string parameters; aliases are the wire names."""
    pass


class SavedObjectRef(KibanaModel):
    """``{id, type}`` pair identifying a saved object."""
    id: str
    type: str


class SavedObjectReference(KibanaModel):
    id: str
    name: Optional[str] = None
    type: str


class Paginated(KibanaModel):
    page: Optional[int] = None
    per_page: Optional[int] = Field(default=None, alias="perPage")
    total: Optional[int] = None


class AcknowledgedResponse(KibanaModel):
    acknowledged: Optional[bool] = None


class IdResponse(KibanaModel):
    id: Optional[str] = None


JSONObject = Dict[str, Any]
JSONList = List[Dict[str, Any]]
