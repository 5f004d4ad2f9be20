import pytest

from kbapi import APIError, RequestValidationError
from kbapi.fleet.agent_policies import (
    AgentPolicyBody,
    CreateAgentPolicyParams,
    CreateAgentPolicyRequest,
    ListAgentPoliciesParams,
    ListAgentPoliciesRequest,
)
from kbapi.fleet.epm import (
    GetPackageRequest,
    InstallPackageBody,
    InstallPackageRequest,
    PackageFileRequest,
    UploadPackageRequest,
)
from kbapi.fleet.hosts import CreateProxyRequest, Proxy, ProxyIdRequest, ServerHostIdRequest, UpdateProxyRequest
from kbapi.fleet.keys import EnrollmentAPIKeyIdRequest

PACKAGE = {
    "name": "nginx", "version": "1.20.0", "title": "Nginx", "type": "integration",
    "status": "installed",
}


@pytest.mark.asyncio
async def test_get_package_with_and_without_version(api, transport):
    transport.respond(200, {"item": PACKAGE, "metadata": {"has_policies": True}})
    transport.respond(200, {"item": PACKAGE})

    versioned = await api.fleet.epm.get_package(GetPackageRequest(name="nginx", version="1.20.0"))
    assert transport.last.url.path == "/api/fleet/epm/packages/nginx/1.20.0"
    assert versioned.body.item.title == "Nginx"
    assert versioned.body.metadata.has_policies is True

    await api.fleet.epm.get_package(GetPackageRequest(name="nginx"))
    assert transport.last.url.path == "/api/fleet/epm/packages/nginx"


@pytest.mark.asyncio
async def test_install_from_registry(api, transport):
    transport.respond(200, {
        "_meta": {"install_source": "registry"},
        "items": [{"id": "logs-nginx.access", "type": "index_template"}],
    })

    resp = await api.fleet.epm.install_package_registry(
        InstallPackageRequest(name="nginx", version="1.20.0", body=InstallPackageBody(force=True))
    )

    assert transport.last.method == "POST"
    assert transport.last_json() == {"force": True}
    assert resp.body.install_source == "registry"
    assert resp.body.items[0].type == "index_template"


@pytest.mark.asyncio
async def test_upload_sends_archive_bytes(api, transport):
    transport.respond(200, {"_meta": {"install_source": "upload"}, "items": []})
    archive = b"PK\x03\x04fake-zip"

    await api.fleet.epm.install_package_upload(UploadPackageRequest(package=archive))

    request = transport.last
    assert request.url.path == "/api/fleet/epm/packages"
    assert request.headers["Content-Type"] == "application/zip"
    assert request.content == archive


@pytest.mark.asyncio
async def test_upload_rejects_empty_archive(api, transport):
    with pytest.raises(RequestValidationError, match="package archive is required"):
        await api.fleet.epm.install_package_upload(UploadPackageRequest(package=b""))
    assert transport.requests == []


@pytest.mark.asyncio
async def test_get_package_file_returns_raw_bytes(api, transport):
    transport.respond(200, content=b"# Nginx\n", headers={"Content-Type": "text/markdown"})

    resp = await api.fleet.epm.get_package_file(
        PackageFileRequest(name="nginx", version="1.20.0", file_path="docs/README.md")
    )

    assert transport.last.url.path == "/api/fleet/epm/packages/nginx/1.20.0/docs/README.md"
    assert resp.body == b"# Nginx\n"


@pytest.mark.asyncio
async def test_fleet_rejects_non_200_success(api, transport):
    transport.respond(201, {"item": PACKAGE})
    with pytest.raises(APIError) as exc_info:
        await api.fleet.epm.get_package(GetPackageRequest(name="nginx"))
    assert exc_info.value.status_code == 201


@pytest.mark.asyncio
async def test_proxy_crud(api, transport):
    proxy = {"id": "p1", "name": "corp", "url": "http://proxy:3128", "proxy_headers": {"X-Auth": "t"}}
    transport.respond(200, {"item": proxy})
    transport.respond(200, {"item": proxy})
    transport.respond(200, {"item": {**proxy, "name": "corp-2"}})
    transport.respond(200, {"id": "p1"})

    body = Proxy(name="corp", url="http://proxy:3128")
    body.set_proxy_headers({"X-Auth": "t"})
    created = await api.fleet.proxies.create(CreateProxyRequest(body=body))
    assert transport.last.url.path == "/api/fleet/proxies"
    assert transport.last_json()["proxy_headers"] == {"X-Auth": "t"}
    assert created.body.item.id == "p1"

    await api.fleet.proxies.get(ProxyIdRequest(proxy_id="p1"))
    assert transport.last.url.path == "/api/fleet/proxies/p1"

    updated = await api.fleet.proxies.update(
        UpdateProxyRequest(proxy_id="p1", body=Proxy(name="corp-2", url="http://proxy:3128"))
    )
    assert transport.last.method == "PUT"
    assert updated.body.item.name == "corp-2"

    deleted = await api.fleet.proxies.delete(ProxyIdRequest(proxy_id="p1"))
    assert transport.last.method == "DELETE"
    assert deleted.body.id == "p1"


@pytest.mark.asyncio
async def test_server_host_requires_id(api, transport):
    with pytest.raises(RequestValidationError, match="host_id is required"):
        await api.fleet.server_hosts.get(ServerHostIdRequest(host_id=""))
    assert transport.requests == []


@pytest.mark.asyncio
async def test_revoke_enrollment_key(api, transport):
    transport.respond(200, {"action": "deleted"})

    resp = await api.fleet.enrollment_api_keys.revoke(EnrollmentAPIKeyIdRequest(key_id="key-1"))

    assert transport.last.method == "DELETE"
    assert transport.last.url.path == "/api/fleet/enrollment_api_keys/key-1"
    assert resp.body.action == "deleted"


@pytest.mark.asyncio
async def test_rotate_key_pair_acknowledges(api, transport):
    transport.respond(200, {"message": "Key pair rotated successfully."})
    await api.fleet.message_signing_service.rotate()
    assert transport.last.url.path == "/api/fleet/message_signing_service/rotate_key_pair"
    assert transport.last.url.params["acknowledge"] == "true"


@pytest.mark.asyncio
async def test_agent_policies_list_params(api, transport):
    transport.respond(200, {
        "items": [{"id": "pol-1", "name": "default", "namespace": "default", "revision": 3}],
        "total": 1, "page": 1, "perPage": 5,
    })

    resp = await api.fleet.agent_policies.list(
        ListAgentPoliciesRequest(params=ListAgentPoliciesParams(per_page=5, kuery="name:default", full=True))
    )

    params = transport.last.url.params
    assert params["perPage"] == "5"
    assert params["kuery"] == "name:default"
    assert params["full"] == "true"
    assert "page" not in params
    assert resp.body.items[0].revision == 3
    assert resp.body.total == 1


@pytest.mark.asyncio
async def test_create_agent_policy_with_system_monitoring(api, transport):
    transport.respond(200, {"item": {"id": "pol-2", "name": "edge", "namespace": "prod"}})

    await api.fleet.agent_policies.create(
        CreateAgentPolicyRequest(
            params=CreateAgentPolicyParams(sys_monitoring=True),
            body=AgentPolicyBody(name="edge", namespace="prod", monitoring_enabled=["logs", "metrics"]),
        )
    )

    assert transport.last.url.params["sys_monitoring"] == "true"
    assert transport.last_json() == {"name": "edge", "namespace": "prod", "monitoring_enabled": ["logs", "metrics"]}
