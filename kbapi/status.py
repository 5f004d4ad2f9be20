"""Kibana status endpoint."""
from typing import Any, Dict, Optional

from pydantic import Field

from .base import Namespace
from .models import KibanaModel, Params
from .response import APIResponse
from .transport import RequestOption


class StatusLevel(KibanaModel):
    level: Optional[str] = None
    summary: Optional[str] = None
    detail: Optional[str] = None
    documentation_url: Optional[str] = Field(default=None, alias="documentationUrl")
    meta: Optional[Dict[str, Any]] = None


class CoreStatus(KibanaModel):
    elasticsearch: Optional[StatusLevel] = None
    saved_objects: Optional[StatusLevel] = Field(default=None, alias="savedObjects")


class ServiceStatus(KibanaModel):
    overall: Optional[StatusLevel] = None
    core: Optional[CoreStatus] = None
    plugins: Optional[Dict[str, StatusLevel]] = None


class VersionInfo(KibanaModel):
    number: Optional[str] = None
    build_hash: Optional[str] = None
    build_number: Optional[float] = None
    build_snapshot: Optional[bool] = None
    build_flavor: Optional[str] = None
    build_date: Optional[str] = None


class KibanaStatus(KibanaModel):
    name: Optional[str] = None
    uuid: Optional[str] = None
    version: Optional[VersionInfo] = None
    status: Optional[ServiceStatus] = None
    metrics: Optional[Dict[str, Any]] = None


class KibanaStatusRedacted(KibanaModel):
    """Minimal status returned to unauthenticated callers."""
    status: Optional[ServiceStatus] = None


class GetStatusRequest(Params):
    v7format: Optional[bool] = None
    v8format: Optional[bool] = None


class Status(Namespace):

    async def get(
        self, req: Optional[GetStatusRequest] = None, *options: RequestOption
    ) -> APIResponse[KibanaStatus]:
        """GET /api/status"""
        return await self._api.perform(
            "status", "GET", "/api/status",
            params=req, result=KibanaStatus, options=options,
        )

    async def get_redacted(
        self, req: Optional[GetStatusRequest] = None, *options: RequestOption
    ) -> APIResponse[KibanaStatusRedacted]:
        return await self._api.perform(
            "status", "GET", "/api/status",
            params=req, result=KibanaStatusRedacted, options=options,
        )
