"""Uptime app settings."""
from typing import List, Optional

from pydantic import Field

from .base import Namespace, require
from .models import KibanaModel
from .response import APIResponse
from .transport import RequestOption


class DefaultEmail(KibanaModel):
    to: Optional[List[str]] = None
    cc: Optional[List[str]] = None
    bcc: Optional[List[str]] = None


class UptimeSettings(KibanaModel):
    cert_age_threshold: Optional[float] = Field(default=None, alias="certAgeThreshold")
    cert_expiration_threshold: Optional[float] = Field(default=None, alias="certExpirationThreshold")
    default_connectors: Optional[List[str]] = Field(default=None, alias="defaultConnectors")
    default_email: Optional[DefaultEmail] = Field(default=None, alias="defaultEmail")
    heartbeat_indices: Optional[str] = Field(default=None, alias="heartbeatIndices")


class UptimeUpdateSettingsRequest(KibanaModel):
    body: UptimeSettings


class Uptime(Namespace):

    async def get_settings(self, *options: RequestOption) -> APIResponse[UptimeSettings]:
        return await self._api.perform(
            "uptime.get_settings", "GET", "/api/uptime/settings",
            result=UptimeSettings, options=options,
        )

    async def update_settings(
        self, req: Optional[UptimeUpdateSettingsRequest], *options: RequestOption
    ) -> APIResponse[UptimeSettings]:
        require(req)
        return await self._api.perform(
            "uptime.update_settings", "PUT", "/api/uptime/settings",
            body=req.body, result=UptimeSettings, options=options,
        )
