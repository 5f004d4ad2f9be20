"""Credentials Fleet hands to agents and Fleet Servers."""
from typing import List, Optional

from pydantic import Field

from ..base import Namespace, require
from ..models import KibanaModel, Params
from ..response import APIResponse
from ..transport import RequestOption
from .models import Item, ItemList, PageParams

_ENROLLMENT_API_KEYS = "/api/fleet/enrollment_api_keys"
_UNINSTALL_TOKENS = "/api/fleet/uninstall_tokens"


class EnrollmentAPIKey(KibanaModel):
    id: str
    api_key: str
    api_key_id: str
    active: bool = True
    created_at: Optional[str] = None
    name: Optional[str] = None
    policy_id: Optional[str] = None
    hidden: Optional[bool] = None


class EnrollmentAPIKeyList(ItemList[EnrollmentAPIKey]):
    # older servers also return the records under "list"
    list_: Optional[List[EnrollmentAPIKey]] = Field(default=None, alias="list")


class EnrollmentAPIKeyAction(Item[EnrollmentAPIKey]):
    action: Optional[str] = None


class ListEnrollmentAPIKeysRequest(KibanaModel):
    params: PageParams = Field(default_factory=PageParams)


class CreateEnrollmentAPIKeyBody(KibanaModel):
    policy_id: str
    name: Optional[str] = None
    expiration: Optional[str] = None


class CreateEnrollmentAPIKeyRequest(KibanaModel):
    body: CreateEnrollmentAPIKeyBody


class EnrollmentAPIKeyIdRequest(KibanaModel):
    key_id: str


class RevokeResult(KibanaModel):
    action: str


class EnrollmentAPIKeys(Namespace):

    async def list(
        self, req: Optional[ListEnrollmentAPIKeysRequest] = None, *options: RequestOption
    ) -> APIResponse[EnrollmentAPIKeyList]:
        req = req or ListEnrollmentAPIKeysRequest()
        return await self._api.perform(
            "fleet.enrollment_api_keys.list", "GET", _ENROLLMENT_API_KEYS,
            params=req.params, result=EnrollmentAPIKeyList, options=options,
        )

    async def create(
        self, req: Optional[CreateEnrollmentAPIKeyRequest], *options: RequestOption
    ) -> APIResponse[EnrollmentAPIKeyAction]:
        require(req)
        require(req.body.policy_id, "policy id is required")
        return await self._api.perform(
            "fleet.enrollment_api_keys.create", "POST", _ENROLLMENT_API_KEYS,
            body=req.body, result=EnrollmentAPIKeyAction, options=options,
        )

    async def get(
        self, req: Optional[EnrollmentAPIKeyIdRequest], *options: RequestOption
    ) -> APIResponse[Item[EnrollmentAPIKey]]:
        require(req)
        require(req.key_id, "key id is required")
        return await self._api.perform(
            "fleet.enrollment_api_keys.get", "GET", _ENROLLMENT_API_KEYS + "/{key_id}",
            path_params={"key_id": req.key_id}, result=Item[EnrollmentAPIKey], options=options,
        )

    async def revoke(self, req: Optional[EnrollmentAPIKeyIdRequest], *options: RequestOption) -> APIResponse[RevokeResult]:
        """Deactivate a key; agents can no longer enroll with it."""
        require(req)
        require(req.key_id, "key id is required")
        return await self._api.perform(
            "fleet.enrollment_api_keys.revoke", "DELETE", _ENROLLMENT_API_KEYS + "/{key_id}",
            path_params={"key_id": req.key_id}, result=RevokeResult, options=options,
        )


class ServiceTokenBody(KibanaModel):
    """``remote`` requests a token for a remote Fleet Server."""
    remote: Optional[bool] = None


class CreateServiceTokenRequest(KibanaModel):
    body: ServiceTokenBody = Field(default_factory=ServiceTokenBody)


class ServiceToken(KibanaModel):
    name: str
    value: str


class ServiceTokens(Namespace):

    async def create(
        self, req: Optional[CreateServiceTokenRequest] = None, *options: RequestOption
    ) -> APIResponse[ServiceToken]:
        req = req or CreateServiceTokenRequest()
        return await self._api.perform(
            "fleet.service_token.create", "POST", "/api/fleet/service_tokens",
            body=req.body, result=ServiceToken, options=options,
        )


class UninstallTokenMetadata(KibanaModel):
    id: str
    policy_id: str
    created_at: str
    policy_name: Optional[str] = None
    namespaces: Optional[List[str]] = None


class UninstallToken(UninstallTokenMetadata):
    token: str


class UninstallTokensParams(Params):
    policy_id: Optional[str] = Field(default=None, alias="policyId")
    search: Optional[str] = None
    per_page: Optional[int] = Field(default=None, alias="perPage")
    page: Optional[int] = None


class UninstallTokensRequest(KibanaModel):
    params: UninstallTokensParams = Field(default_factory=UninstallTokensParams)


class UninstallTokenIdRequest(KibanaModel):
    token_id: str


class UninstallTokens(Namespace):

    async def get_metadata(
        self, req: Optional[UninstallTokensRequest] = None, *options: RequestOption
    ) -> APIResponse[ItemList[UninstallTokenMetadata]]:
        """Metadata of the latest token per policy; the tokens themselves are omitted."""
        req = req or UninstallTokensRequest()
        return await self._api.perform(
            "fleet.uninstall_tokens.get_metadata", "GET", _UNINSTALL_TOKENS,
            params=req.params, result=ItemList[UninstallTokenMetadata], options=options,
        )

    async def get_decrypted(
        self, req: Optional[UninstallTokenIdRequest], *options: RequestOption
    ) -> APIResponse[Item[UninstallToken]]:
        require(req)
        require(req.token_id, "uninstall token id is required")
        return await self._api.perform(
            "fleet.uninstall_tokens.get_decrypted", "GET", _UNINSTALL_TOKENS + "/{token_id}",
            path_params={"token_id": req.token_id}, result=Item[UninstallToken], options=options,
        )


class RotateKeyPairParams(Params):
    acknowledge: bool = True


class RotateKeyPairRequest(KibanaModel):
    params: RotateKeyPairParams = Field(default_factory=RotateKeyPairParams)


class MessageResult(KibanaModel):
    message: str


class MessageSigningService(Namespace):

    async def rotate(
        self, req: Optional[RotateKeyPairRequest] = None, *options: RequestOption
    ) -> APIResponse[MessageResult]:
        """Rotate the key pair agents use to verify Fleet policies.

        Kibana rejects the call unless ``acknowledge`` is set.
        """
        req = req or RotateKeyPairRequest()
        return await self._api.perform(
            "fleet.message_signing_service.rotate", "POST", "/api/fleet/message_signing_service/rotate_key_pair",
            params=req.params, result=MessageResult, options=options,
        )
