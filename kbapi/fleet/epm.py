"""Fleet package manager (EPM): integration packages from the registry or uploads."""
from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from ..base import Namespace, require
from ..models import KibanaModel, Params
from ..response import APIResponse
from ..transport import RequestOption
from .models import IdResult, Item

_EPM = "/api/fleet/epm"


def _package_path(name: str, version: Optional[str]) -> str:
    # version is optional on several package routes
    if version:
        return _EPM + "/packages/{name}/{version}"
    return _EPM + "/packages/{name}"


def _package_path_params(name: str, version: Optional[str]) -> Dict[str, str]:
    path_params = {"name": name}
    if version:
        path_params["version"] = version
    return path_params


class Icon(KibanaModel):
    src: str
    path: Optional[str] = None
    size: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None
    dark_mode: Optional[bool] = None


class InstalledAsset(KibanaModel):
    id: str
    type: str
    origin_id: Optional[str] = Field(default=None, alias="originId")
    version: Optional[str] = None
    deferred: Optional[bool] = None


class InstallFailedAttempt(KibanaModel):
    created_at: str
    target_version: str
    error: Dict[str, Any]


class InstallationInfo(KibanaModel):
    name: str
    version: str
    type: Optional[str] = None
    install_status: Optional[str] = None
    install_source: Optional[str] = None
    installed_es: List[InstalledAsset] = Field(default_factory=list)
    installed_kibana: List[InstalledAsset] = Field(default_factory=list)
    installed_kibana_space_id: Optional[str] = None
    additional_spaces_installed_kibana: Optional[Dict[str, List[InstalledAsset]]] = None
    install_format_schema_version: Optional[str] = None
    verification_status: Optional[str] = None
    verification_key_id: Optional[str] = None
    experimental_data_stream_features: Optional[List[Dict[str, Any]]] = None
    latest_executed_state: Optional[Dict[str, Any]] = None
    latest_install_failed_attempts: Optional[List[InstallFailedAttempt]] = None
    namespaces: Optional[List[str]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class PackageOwner(KibanaModel):
    github: Optional[str] = None
    type: Optional[str] = None


class PackageListItem(KibanaModel):
    id: str
    name: str
    title: str
    version: str
    description: Optional[str] = None
    categories: Optional[List[str]] = None
    conditions: Optional[Dict[str, Any]] = None
    data_streams: Optional[List[Dict[str, Any]]] = None
    discovery: Optional[Dict[str, Any]] = None
    download: Optional[str] = None
    format_version: Optional[str] = None
    icons: Optional[List[Icon]] = None
    installation_info: Optional[InstallationInfo] = Field(default=None, alias="installationInfo")
    integration: Optional[str] = None
    internal: Optional[bool] = None
    latest_version: Optional[str] = Field(default=None, alias="latestVersion")
    owner: Optional[PackageOwner] = None
    path: Optional[str] = None
    policy_templates: Optional[List[Dict[str, Any]]] = None
    readme: Optional[str] = None
    release: Optional[str] = None
    signature_path: Optional[str] = None
    source: Optional[Dict[str, Any]] = None
    status: Optional[str] = None
    type: Optional[str] = None
    vars: Optional[List[Dict[str, Any]]] = None

    @property
    def installed(self) -> bool:
        return self.status == "installed"


class PackageInfo(PackageListItem):
    id: Optional[str] = None
    assets: Dict[str, Any] = Field(default_factory=dict)
    agent: Optional[Dict[str, Any]] = None
    asset_tags: Optional[List[Dict[str, Any]]] = None
    elasticsearch: Optional[Dict[str, Any]] = None
    keep_policies_up_to_date: Optional[bool] = Field(default=None, alias="keepPoliciesUpToDate")
    license: Optional[str] = None
    license_path: Optional[str] = Field(default=None, alias="licensePath")
    notice: Optional[str] = None
    screenshots: Optional[List[Dict[str, Any]]] = None
    saved_object: Optional[Dict[str, Any]] = None


class PackageMetadata(KibanaModel):
    has_policies: bool = False


class PackageInfoItem(Item[PackageInfo]):
    metadata: Optional[PackageMetadata] = None


class PackageList(KibanaModel):
    items: List[PackageListItem] = Field(default_factory=list)


class InstallResult(KibanaModel):
    """Assets written by an install or removed by a delete."""
    meta: Optional[Dict[str, Any]] = Field(default=None, alias="_meta")
    items: List[InstalledAsset] = Field(default_factory=list)

    @property
    def install_source(self) -> Optional[str]:
        return (self.meta or {}).get("install_source")


class ListPackagesParams(Params):
    category: Optional[str] = None
    prerelease: Optional[bool] = None
    exclude_install_status: Optional[bool] = Field(default=None, alias="excludeInstallStatus")
    with_package_policies_count: Optional[bool] = Field(default=None, alias="withPackagePoliciesCount")


class ListPackagesRequest(KibanaModel):
    params: ListPackagesParams = Field(default_factory=ListPackagesParams)


class GetPackageParams(Params):
    ignore_unverified: Optional[bool] = Field(default=None, alias="ignoreUnverified")
    prerelease: Optional[bool] = None
    full: Optional[bool] = None
    with_metadata: Optional[bool] = Field(default=None, alias="withMetadata")


class GetPackageRequest(KibanaModel):
    name: str
    version: Optional[str] = None
    params: GetPackageParams = Field(default_factory=GetPackageParams)


class InstallParams(Params):
    prerelease: Optional[bool] = None
    ignore_mapping_update_errors: Optional[bool] = Field(default=None, alias="ignoreMappingUpdateErrors")
    skip_data_stream_rollover: Optional[bool] = Field(default=None, alias="skipDataStreamRollover")


class InstallPackageBody(KibanaModel):
    force: Optional[bool] = None
    ignore_constraints: Optional[bool] = None


class InstallPackageRequest(KibanaModel):
    name: str
    version: Optional[str] = None
    params: InstallParams = Field(default_factory=InstallParams)
    body: InstallPackageBody = Field(default_factory=InstallPackageBody)


class UploadPackageRequest(KibanaModel):
    """``package`` holds a zip or gzipped tar archive."""
    package: bytes
    content_type: str = "application/zip"
    params: InstallParams = Field(default_factory=InstallParams)


class DeletePackageParams(Params):
    force: Optional[bool] = None


class DeletePackageRequest(KibanaModel):
    name: str
    version: Optional[str] = None
    params: DeletePackageParams = Field(default_factory=DeletePackageParams)


class PackageSettingsBody(KibanaModel):
    keep_policies_up_to_date: Optional[bool] = Field(default=None, alias="keepPoliciesUpToDate")


class UpdatePackageSettingsRequest(KibanaModel):
    name: str
    version: Optional[str] = None
    body: PackageSettingsBody


class PackageFileRequest(KibanaModel):
    name: str
    version: str
    file_path: str


class PackageRef(KibanaModel):
    name: str
    version: Optional[str] = None
    prerelease: Optional[bool] = None


class BulkInstallBody(KibanaModel):
    packages: List[Union[str, PackageRef]]
    force: Optional[bool] = None


class PrereleaseParams(Params):
    prerelease: Optional[bool] = None


class BulkInstallRequest(KibanaModel):
    params: PrereleaseParams = Field(default_factory=PrereleaseParams)
    body: BulkInstallBody


class BulkInstallItem(KibanaModel):
    name: str
    version: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    status_code: Optional[int] = Field(default=None, alias="statusCode")
    error: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BulkInstallResult(KibanaModel):
    items: List[BulkInstallItem] = Field(default_factory=list)


class AssetRef(KibanaModel):
    id: str
    type: str


class BulkAssetsBody(KibanaModel):
    asset_ids: List[AssetRef] = Field(alias="assetIds")


class BulkAssetsRequest(KibanaModel):
    body: BulkAssetsBody


class AssetAttributes(KibanaModel):
    title: Optional[str] = None
    description: Optional[str] = None
    service: Optional[str] = None


class Asset(KibanaModel):
    id: str
    type: str
    attributes: AssetAttributes = Field(default_factory=AssetAttributes)
    app_link: Optional[str] = Field(default=None, alias="appLink")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")


class AssetList(KibanaModel):
    items: List[Asset] = Field(default_factory=list)


class TransformRef(KibanaModel):
    transform_id: str = Field(alias="transformId")


class AuthorizeTransformsBody(KibanaModel):
    transforms: List[TransformRef]


class AuthorizeTransformsRequest(KibanaModel):
    name: str
    version: str
    params: PrereleaseParams = Field(default_factory=PrereleaseParams)
    body: AuthorizeTransformsBody


class TransformResult(KibanaModel):
    transform_id: str = Field(alias="transformId")
    success: bool
    error: Optional[Any] = None


class Dataset(KibanaModel):
    name: str
    type: str


class CustomIntegrationBody(KibanaModel):
    integration_name: str = Field(alias="integrationName")
    datasets: List[Dataset]
    force: Optional[bool] = None


class CustomIntegrationRequest(KibanaModel):
    body: CustomIntegrationBody


class InputsTemplateParams(Params):
    """``format`` is ``json`` (default), ``yml`` or ``yaml``."""
    format: Optional[str] = None
    prerelease: Optional[bool] = None
    ignore_unverified: Optional[bool] = Field(default=None, alias="ignoreUnverified")


class InputsTemplateRequest(KibanaModel):
    name: str
    version: str
    params: InputsTemplateParams = Field(default_factory=InputsTemplateParams)


class TemplateStream(KibanaModel):
    id: str
    data_stream: Dict[str, Any] = Field(default_factory=dict)


class TemplateInput(KibanaModel):
    id: str
    type: str
    streams: List[TemplateStream] = Field(default_factory=list)


class InputsTemplate(KibanaModel):
    inputs: List[TemplateInput] = Field(default_factory=list)


class PackageNameRequest(KibanaModel):
    name: str


class PackageStats(KibanaModel):
    agent_policy_count: int = 0


class PackageStatsResult(KibanaModel):
    response: PackageStats


class InstalledPackagesParams(Params):
    data_stream_type: Optional[str] = Field(default=None, alias="dataStreamType")
    show_only_active_data_streams: Optional[bool] = Field(default=None, alias="showOnlyActiveDataStreams")
    name_query: Optional[str] = Field(default=None, alias="nameQuery")
    search_after: Optional[List[Any]] = Field(default=None, alias="searchAfter")
    per_page: Optional[int] = Field(default=None, alias="perPage")
    sort_order: Optional[str] = Field(default=None, alias="sortOrder")


class InstalledPackagesRequest(KibanaModel):
    params: InstalledPackagesParams = Field(default_factory=InstalledPackagesParams)


class InstalledDataStream(KibanaModel):
    name: str
    title: str


class InstalledPackage(KibanaModel):
    name: str
    version: str
    status: str
    title: Optional[str] = None
    description: Optional[str] = None
    icons: Optional[List[Icon]] = None
    data_streams: List[InstalledDataStream] = Field(default_factory=list, alias="dataStreams")


class InstalledPackages(KibanaModel):
    items: List[InstalledPackage] = Field(default_factory=list)
    total: int = 0
    search_after: Optional[List[Any]] = Field(default=None, alias="searchAfter")


class LimitedPackages(KibanaModel):
    """Packages that cannot be removed from an agent policy."""
    items: List[str] = Field(default_factory=list)


class ListCategoriesParams(Params):
    prerelease: Optional[bool] = None
    include_policy_templates: Optional[bool] = None


class ListCategoriesRequest(KibanaModel):
    params: ListCategoriesParams = Field(default_factory=ListCategoriesParams)


class Category(KibanaModel):
    id: str
    title: str
    count: int = 0
    parent_id: Optional[str] = None
    parent_title: Optional[str] = None


class CategoryList(KibanaModel):
    items: List[Category] = Field(default_factory=list)


class ListDataStreamsParams(Params):
    """``type`` is one of logs, metrics, traces, synthetics or profiling."""
    type: Optional[str] = None
    dataset_query: Optional[str] = Field(default=None, alias="datasetQuery")
    sort_order: Optional[str] = Field(default=None, alias="sortOrder")
    uncategorised_only: Optional[bool] = Field(default=None, alias="uncategorisedOnly")


class ListDataStreamsRequest(KibanaModel):
    params: ListDataStreamsParams = Field(default_factory=ListDataStreamsParams)


class DataStreamName(KibanaModel):
    name: str


class DataStreamNames(KibanaModel):
    items: List[DataStreamName] = Field(default_factory=list)


class EPM(Namespace):

    async def list_packages(
        self, req: Optional[ListPackagesRequest] = None, *options: RequestOption
    ) -> APIResponse[PackageList]:
        req = req or ListPackagesRequest()
        return await self._api.perform(
            "fleet.epm.list_packages", "GET", _EPM + "/packages",
            params=req.params, result=PackageList, options=options,
        )

    async def get_package(self, req: Optional[GetPackageRequest], *options: RequestOption) -> APIResponse[PackageInfoItem]:
        require(req)
        require(req.name, "package name is required")
        return await self._api.perform(
            "fleet.epm.get_package", "GET", _package_path(req.name, req.version),
            path_params=_package_path_params(req.name, req.version), params=req.params,
            result=PackageInfoItem, options=options,
        )

    async def install_package_registry(
        self, req: Optional[InstallPackageRequest], *options: RequestOption
    ) -> APIResponse[InstallResult]:
        require(req)
        require(req.name, "package name is required")
        return await self._api.perform(
            "fleet.epm.install_package_registry", "POST", _package_path(req.name, req.version),
            path_params=_package_path_params(req.name, req.version), params=req.params, body=req.body,
            result=InstallResult, options=options,
        )

    async def install_package_upload(
        self, req: Optional[UploadPackageRequest], *options: RequestOption
    ) -> APIResponse[InstallResult]:
        require(req)
        require(req.package, "package archive is required")
        return await self._api.perform(
            "fleet.epm.install_package_upload", "POST", _EPM + "/packages",
            params=req.params, body=req.package, content_type=req.content_type,
            result=InstallResult, options=options,
        )

    async def delete_package(self, req: Optional[DeletePackageRequest], *options: RequestOption) -> APIResponse[InstallResult]:
        require(req)
        require(req.name, "package name is required")
        return await self._api.perform(
            "fleet.epm.delete_package", "DELETE", _package_path(req.name, req.version),
            path_params=_package_path_params(req.name, req.version), params=req.params,
            result=InstallResult, options=options,
        )

    async def update_package_settings(
        self, req: Optional[UpdatePackageSettingsRequest], *options: RequestOption
    ) -> APIResponse[Item[PackageInfo]]:
        require(req)
        require(req.name, "package name is required")
        return await self._api.perform(
            "fleet.epm.update_package_settings", "PUT", _package_path(req.name, req.version),
            path_params=_package_path_params(req.name, req.version), body=req.body,
            result=Item[PackageInfo], options=options,
        )

    async def get_package_file(self, req: Optional[PackageFileRequest], *options: RequestOption) -> APIResponse[bytes]:
        """Raw contents of one file inside a package (manifest, readme, image...)."""
        require(req)
        require(req.name, "package name is required")
        require(req.version, "package version is required")
        require(req.file_path, "file path is required")
        # file_path keeps its slashes
        path = _EPM + "/packages/{name}/{version}/" + req.file_path.lstrip("/").replace("{", "{{").replace("}", "}}")
        return await self._api.perform(
            "fleet.epm.get_package_file", "GET", path,
            path_params={"name": req.name, "version": req.version}, result=bytes, options=options,
        )

    async def get_package_stats(self, req: Optional[PackageNameRequest], *options: RequestOption) -> APIResponse[PackageStatsResult]:
        require(req)
        require(req.name, "package name is required")
        return await self._api.perform(
            "fleet.epm.get_package_stats", "GET", _EPM + "/packages/{name}/stats",
            path_params={"name": req.name}, result=PackageStatsResult, options=options,
        )

    async def get_package_verification_id(self, *options: RequestOption) -> APIResponse[IdResult]:
        return await self._api.perform(
            "fleet.epm.get_package_verification_id", "GET", _EPM + "/verification_key_id",
            result=IdResult, options=options,
        )

    async def get_packages_installed(
        self, req: Optional[InstalledPackagesRequest] = None, *options: RequestOption
    ) -> APIResponse[InstalledPackages]:
        req = req or InstalledPackagesRequest()
        return await self._api.perform(
            "fleet.epm.get_packages_installed", "GET", _EPM + "/packages/installed",
            params=req.params, result=InstalledPackages, options=options,
        )

    async def get_packages_limited(self, *options: RequestOption) -> APIResponse[LimitedPackages]:
        return await self._api.perform(
            "fleet.epm.get_packages_limited", "GET", _EPM + "/packages/limited",
            result=LimitedPackages, options=options,
        )

    async def get_inputs_template(self, req: Optional[InputsTemplateRequest], *options: RequestOption) -> APIResponse:
        """Inputs template for a package; a YAML ``format`` returns raw bytes."""
        require(req)
        require(req.name, "package name is required")
        require(req.version, "package version is required")
        as_json = req.params.format in (None, "json")
        return await self._api.perform(
            "fleet.epm.get_inputs_template", "GET", _EPM + "/templates/{name}/{version}/inputs",
            path_params={"name": req.name, "version": req.version}, params=req.params,
            result=InputsTemplate if as_json else bytes, options=options,
        )

    async def list_categories(
        self, req: Optional[ListCategoriesRequest] = None, *options: RequestOption
    ) -> APIResponse[CategoryList]:
        req = req or ListCategoriesRequest()
        return await self._api.perform(
            "fleet.epm.list_categories", "GET", _EPM + "/categories",
            params=req.params, result=CategoryList, options=options,
        )

    async def list_datastreams(
        self, req: Optional[ListDataStreamsRequest] = None, *options: RequestOption
    ) -> APIResponse[DataStreamNames]:
        req = req or ListDataStreamsRequest()
        return await self._api.perform(
            "fleet.epm.list_datastreams", "GET", _EPM + "/data_streams",
            params=req.params, result=DataStreamNames, options=options,
        )

    async def bulk_install_packages(
        self, req: Optional[BulkInstallRequest], *options: RequestOption
    ) -> APIResponse[BulkInstallResult]:
        require(req)
        return await self._api.perform(
            "fleet.epm.bulk.install_packages", "POST", _EPM + "/packages/_bulk",
            params=req.params, body=req.body, result=BulkInstallResult, options=options,
        )

    async def bulk_get_assets(self, req: Optional[BulkAssetsRequest], *options: RequestOption) -> APIResponse[AssetList]:
        require(req)
        return await self._api.perform(
            "fleet.epm.bulk.get_assets", "POST", _EPM + "/bulk_assets",
            body=req.body, result=AssetList, options=options,
        )

    async def authorize_transforms(
        self, req: Optional[AuthorizeTransformsRequest], *options: RequestOption
    ) -> APIResponse[List[TransformResult]]:
        require(req)
        require(req.name, "package name is required")
        require(req.version, "package version is required")
        return await self._api.perform(
            "fleet.epm.authorize_transforms", "POST",
            _EPM + "/packages/{name}/{version}/transforms/authorize",
            path_params={"name": req.name, "version": req.version}, params=req.params, body=req.body,
            result=List[TransformResult], options=options,
        )

    async def create_custom_integration(
        self, req: Optional[CustomIntegrationRequest], *options: RequestOption
    ) -> APIResponse[InstallResult]:
        require(req)
        return await self._api.perform(
            "fleet.epm.create_custom_integration", "POST", _EPM + "/custom_integrations",
            body=req.body, result=InstallResult, options=options,
        )
