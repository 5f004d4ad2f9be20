"""Fleet endpoints agents connect to: Fleet Servers, proxies and binary download sources."""
from typing import Any, Dict, List, Optional

from ..base import Namespace, require
from ..models import KibanaModel
from ..response import APIResponse
from ..transport import RequestOption
from .models import IdResult, Item, ItemList


class DownloadSourceSSL(KibanaModel):
    certificate: Optional[str] = None
    certificate_authorities: Optional[List[str]] = None
    key: Optional[str] = None


class DownloadSource(KibanaModel):
    name: str
    host: str
    id: Optional[str] = None
    is_default: Optional[bool] = None
    proxy_id: Optional[str] = None
    ssl: Optional[DownloadSourceSSL] = None
    secrets: Optional[Dict[str, Any]] = None


class CreateDownloadSourceRequest(KibanaModel):
    body: DownloadSource


class DownloadSourceIdRequest(KibanaModel):
    source_id: str


class UpdateDownloadSourceRequest(KibanaModel):
    source_id: str
    body: DownloadSource


class Proxy(KibanaModel):
    name: str
    url: str
    id: Optional[str] = None
    certificate: Optional[str] = None
    certificate_authorities: Optional[str] = None
    certificate_key: Optional[str] = None
    is_preconfigured: Optional[bool] = None
    proxy_headers: Optional[Dict[str, Any]] = None

    def set_proxy_headers(self, headers: Dict[str, Any]) -> None:
        """Replace all proxy headers at once."""
        self.proxy_headers = dict(headers)


class CreateProxyRequest(KibanaModel):
    body: Proxy


class ProxyIdRequest(KibanaModel):
    proxy_id: str


class UpdateProxyRequest(KibanaModel):
    proxy_id: str
    body: Proxy


class ServerHost(KibanaModel):
    name: str
    host_urls: List[str]
    id: Optional[str] = None
    is_default: Optional[bool] = None
    is_internal: Optional[bool] = None
    is_preconfigured: Optional[bool] = None
    proxy_id: Optional[str] = None


class CreateServerHostRequest(KibanaModel):
    body: ServerHost


class ServerHostIdRequest(KibanaModel):
    host_id: str


class UpdateServerHostRequest(KibanaModel):
    host_id: str
    body: ServerHost


class _Collection(Namespace):
    """CRUD over one Fleet collection whose records are wrapped as ``{"item": ...}``."""

    path = ""
    span = ""
    model: Any = None
    id_name = "item_id"

    async def _list(self, options):
        return await self._api.perform(
            self.span + ".list", "GET", self.path, result=ItemList[self.model], options=options,
        )

    async def _create(self, req, options):
        require(req)
        return await self._api.perform(
            self.span + ".create", "POST", self.path, body=req.body, result=Item[self.model], options=options,
        )

    async def _get(self, item_id, options):
        require(item_id, f"{self.id_name} is required")
        return await self._api.perform(
            self.span + ".get", "GET", self.path + "/{item_id}",
            path_params={"item_id": item_id}, result=Item[self.model], options=options,
        )

    async def _update(self, item_id, body, options):
        require(item_id, f"{self.id_name} is required")
        return await self._api.perform(
            self.span + ".update", "PUT", self.path + "/{item_id}",
            path_params={"item_id": item_id}, body=body, result=Item[self.model], options=options,
        )

    async def _delete(self, item_id, options):
        require(item_id, f"{self.id_name} is required")
        return await self._api.perform(
            self.span + ".delete", "DELETE", self.path + "/{item_id}",
            path_params={"item_id": item_id}, result=IdResult, options=options,
        )


class BinaryDownloadSources(_Collection):
    """Hosts agents download upgrade binaries from."""

    path = "/api/fleet/agent_download_sources"
    span = "fleet.binary_download"
    model = DownloadSource
    id_name = "source_id"

    async def list(self, *options: RequestOption) -> APIResponse[ItemList[DownloadSource]]:
        return await self._list(options)

    async def create(
        self, req: Optional[CreateDownloadSourceRequest], *options: RequestOption
    ) -> APIResponse[Item[DownloadSource]]:
        return await self._create(req, options)

    async def get(self, req: Optional[DownloadSourceIdRequest], *options: RequestOption) -> APIResponse[Item[DownloadSource]]:
        require(req)
        return await self._get(req.source_id, options)

    async def update(
        self, req: Optional[UpdateDownloadSourceRequest], *options: RequestOption
    ) -> APIResponse[Item[DownloadSource]]:
        require(req)
        return await self._update(req.source_id, req.body, options)

    async def delete(self, req: Optional[DownloadSourceIdRequest], *options: RequestOption) -> APIResponse[IdResult]:
        require(req)
        return await self._delete(req.source_id, options)


class Proxies(_Collection):

    path = "/api/fleet/proxies"
    span = "fleet.proxies"
    model = Proxy
    id_name = "proxy_id"

    async def list(self, *options: RequestOption) -> APIResponse[ItemList[Proxy]]:
        return await self._list(options)

    async def create(self, req: Optional[CreateProxyRequest], *options: RequestOption) -> APIResponse[Item[Proxy]]:
        return await self._create(req, options)

    async def get(self, req: Optional[ProxyIdRequest], *options: RequestOption) -> APIResponse[Item[Proxy]]:
        require(req)
        return await self._get(req.proxy_id, options)

    async def update(self, req: Optional[UpdateProxyRequest], *options: RequestOption) -> APIResponse[Item[Proxy]]:
        require(req)
        return await self._update(req.proxy_id, req.body, options)

    async def delete(self, req: Optional[ProxyIdRequest], *options: RequestOption) -> APIResponse[IdResult]:
        require(req)
        return await self._delete(req.proxy_id, options)


class ServerHosts(_Collection):

    path = "/api/fleet/fleet_server_hosts"
    span = "fleet.server_host"
    model = ServerHost
    id_name = "host_id"

    async def list(self, *options: RequestOption) -> APIResponse[ItemList[ServerHost]]:
        return await self._list(options)

    async def create(self, req: Optional[CreateServerHostRequest], *options: RequestOption) -> APIResponse[Item[ServerHost]]:
        return await self._create(req, options)

    async def get(self, req: Optional[ServerHostIdRequest], *options: RequestOption) -> APIResponse[Item[ServerHost]]:
        require(req)
        return await self._get(req.host_id, options)

    async def update(self, req: Optional[UpdateServerHostRequest], *options: RequestOption) -> APIResponse[Item[ServerHost]]:
        require(req)
        return await self._update(req.host_id, req.body, options)

    async def delete(self, req: Optional[ServerHostIdRequest], *options: RequestOption) -> APIResponse[IdResult]:
        require(req)
        return await self._delete(req.host_id, options)
