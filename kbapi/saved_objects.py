"""Saved objects import/export.

Exports come back as NDJSON; imports upload an NDJSON file as
``multipart/form-data`` under the ``file`` field.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from .base import Namespace, below_299, require
from .models import KibanaModel, Params, SavedObjectRef, SavedObjectReference
from .ndjson import NDJSONResponse
from .response import APIResponse
from .serialization import dumps
from .transport import RequestOption

NDJSON_FILENAME = "export.ndjson"


class SavedObject(KibanaModel):
    """One exported record."""
    id: str
    type: str
    managed: Optional[bool] = None
    version: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)
    references: List[SavedObjectReference] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    core_migration_version: Optional[str] = Field(default=None, alias="coreMigrationVersion")
    type_migration_version: Optional[str] = Field(default=None, alias="typeMigrationVersion")


class ExportBody(KibanaModel):
    objects: Optional[List[SavedObjectRef]] = None
    type: Optional[Union[str, List[str]]] = None
    exclude_export_details: Optional[bool] = Field(default=None, alias="excludeExportDetails")
    include_references_deep: Optional[bool] = Field(default=None, alias="includeReferencesDeep")


class SavedObjectExportRequest(KibanaModel):
    body: ExportBody


class ImportParams(Params):
    create_new_copies: Optional[bool] = Field(default=None, alias="createNewCopies")
    overwrite: Optional[bool] = None
    compatibility_mode: Optional[bool] = Field(default=None, alias="compatibilityMode")


class SavedObjectImportRequest(KibanaModel):
    file: bytes
    params: ImportParams = Field(default_factory=ImportParams)


class ImportResult(KibanaModel):
    success: Optional[bool] = None
    success_count: Optional[int] = Field(default=None, alias="successCount")
    success_results: Optional[List[Dict[str, Any]]] = Field(default=None, alias="successResults")
    errors: Optional[List[Dict[str, Any]]] = None


class ReplaceReference(KibanaModel):
    type: Optional[str] = None
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None


class RetryOperation(KibanaModel):
    id: str
    type: str
    destination_id: Optional[str] = Field(default=None, alias="destinationId")
    ignore_missing_references: Optional[bool] = Field(default=None, alias="ignoreMissingReferences")
    overwrite: Optional[bool] = None
    replace_references: Optional[List[ReplaceReference]] = Field(default=None, alias="replaceReferences")


class ResolveImportParams(Params):
    create_new_copies: Optional[bool] = Field(default=None, alias="createNewCopies")
    compatibility_mode: Optional[bool] = Field(default=None, alias="compatibilityMode")


class SavedObjectResolveImportsRequest(KibanaModel):
    file: bytes
    retries: List[RetryOperation] = Field(default_factory=list)
    params: ResolveImportParams = Field(default_factory=ResolveImportParams)


class RotateKeyParams(Params):
    batch_size: Optional[int] = None
    type: Optional[str] = None


class SavedObjectRotateKeyRequest(KibanaModel):
    params: RotateKeyParams = Field(default_factory=RotateKeyParams)


class RotateKeyResult(KibanaModel):
    total: int = 0
    successful: int = 0
    failed: int = 0


class SavedObjects(Namespace):

    async def export(
        self,
        req: Optional[SavedObjectExportRequest],
        *options: RequestOption,
        stream: bool = False,
    ) -> NDJSONResponse:
        """Export saved objects as NDJSON records.

        With ``stream=True`` the response body is left open on
        ``response.stream``; iterate it with ``aiter_records()``.
        """
        require(req)
        return await self._api.perform(
            "saved_objects.export", "POST", "/api/saved_objects/_export",
            body=req.body, ndjson=True, stream=stream, options=options,
        )

    async def import_(
        self, req: Optional[SavedObjectImportRequest], *options: RequestOption
    ) -> APIResponse[ImportResult]:
        require(req)
        return await self._api.perform(
            "saved_objects.import", "POST", "/api/saved_objects/_import",
            params=req.params,
            files={"file": (NDJSON_FILENAME, req.file, "application/ndjson")},
            result=ImportResult, options=options,
        )

    async def resolve_import_errors(
        self, req: Optional[SavedObjectResolveImportsRequest], *options: RequestOption
    ) -> APIResponse[ImportResult]:
        require(req)
        fields = {f"retries[{i}]": dumps(retry).decode("utf-8") for i, retry in enumerate(req.retries)}
        return await self._api.perform(
            "saved_objects.resolve_imports", "POST", "/api/saved_objects/_resolve_import_errors",
            params=req.params,
            files={"file": (NDJSON_FILENAME, req.file, "application/ndjson")},
            data=fields, result=ImportResult, success=below_299, options=options,
        )

    async def rotate_key(
        self, req: Optional[SavedObjectRotateKeyRequest] = None, *options: RequestOption
    ) -> APIResponse[RotateKeyResult]:
        """Rotate the encryption key of encrypted saved objects."""
        req = req or SavedObjectRotateKeyRequest()
        return await self._api.perform(
            "saved_objects.rotate_key", "POST", "/api/encrypted_saved_objects/_rotate_key",
            params=req.params, result=RotateKeyResult, success=below_299, options=options,
        )
