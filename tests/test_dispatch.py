import httpx
import pytest

from kbapi import API, APIError, NotFoundError, RequestValidationError, ServerError, with_headers
from kbapi.base import build_query, only_200
from kbapi.exceptions import KibanaError, ResponseDecodeError, ResponseReadError
from kbapi.roles import Roles
from kbapi.spaces import Space, SpacesGetRequest, SpacesGetAllParams, SpacesGetAllRequest
from kbapi.status import GetStatusRequest


@pytest.mark.asyncio
async def test_nil_request_is_rejected_before_transport(api, transport):
    with pytest.raises(RequestValidationError, match="request cannot be nil"):
        await api.spaces.get(None)
    assert transport.requests == []


@pytest.mark.asyncio
async def test_missing_required_field_is_rejected(api, transport):
    from kbapi.connectors import ConnectorsGetRequest

    with pytest.raises(RequestValidationError, match="connector id is required"):
        await api.connectors.get(ConnectorsGetRequest(id=""))
    assert transport.requests == []


@pytest.mark.asyncio
async def test_spaces_get_decodes_body(api, transport):
    transport.respond(200, {"id": "marketing", "name": "Marketing", "disabledFeatures": ["dev_tools"]})

    resp = await api.spaces.get(SpacesGetRequest(id="marketing"))

    assert transport.last.method == "GET"
    assert transport.last.url.path == "/api/spaces/space/marketing"
    assert resp.status_code == 200
    assert isinstance(resp.body, Space)
    assert resp.body.name == "Marketing"
    assert resp.body.disabled_features == ["dev_tools"]


@pytest.mark.asyncio
async def test_path_parameters_are_escaped_as_one_segment(api, transport):
    transport.respond(200, {"id": "a/b"})
    await api.spaces.get(SpacesGetRequest(id="a/b c"))
    assert transport.last.url.raw_path == b"/api/spaces/space/a%2Fb%20c"


@pytest.mark.asyncio
async def test_empty_success_body_yields_none(api, transport):
    from kbapi.spaces import SpacesDeleteRequest

    transport.respond(204)
    transport.respond(200)
    with pytest.raises(APIError):
        # spaces.delete only accepts 200
        await api.spaces.delete(SpacesDeleteRequest(id="x"))
    resp = await api.spaces.delete(SpacesDeleteRequest(id="x"))
    assert resp.body is None


@pytest.mark.asyncio
async def test_below_299_accepts_no_content(api, transport):
    from kbapi.roles import RolesDeleteRequest

    transport.respond(204)
    resp = await api.roles.delete(RolesDeleteRequest(name="viewer"))
    assert resp.status_code == 204
    assert transport.last.method == "DELETE"


@pytest.mark.asyncio
async def test_json_error_body(api, transport):
    transport.respond(404, {"statusCode": 404, "error": "Not Found", "message": "Saved object [space/x] not found"})

    with pytest.raises(NotFoundError) as exc_info:
        await api.spaces.get(SpacesGetRequest(id="x"))

    err = exc_info.value
    assert err.status_code == 404
    assert err.error["error"] == "Not Found"
    assert str(err).startswith("HTTP Status Code 404: {")
    assert err.response.raw_body


@pytest.mark.asyncio
async def test_raw_text_error_body(api, transport):
    transport.respond(502, content=b"<html>Bad Gateway</html>")

    with pytest.raises(ServerError) as exc_info:
        await api.spaces.get(SpacesGetRequest(id="x"))

    assert exc_info.value.error == "<html>Bad Gateway</html>"
    assert str(exc_info.value) == "HTTP Status Code 502: <html>Bad Gateway</html>"


@pytest.mark.asyncio
async def test_undecodable_success_body(api, transport):
    transport.respond(200, content=b"not json")
    with pytest.raises(ResponseDecodeError) as exc_info:
        await api.spaces.get(SpacesGetRequest(id="x"))
    assert exc_info.value.response.status_code == 200


@pytest.mark.asyncio
async def test_transport_error_propagates_unchanged(api, transport):
    boom = httpx.ConnectError("connection refused")
    transport.fail(boom)

    with pytest.raises(httpx.ConnectError) as exc_info:
        await api.spaces.get(SpacesGetRequest(id="x"))

    assert exc_info.value is boom


@pytest.mark.asyncio
async def test_options_apply_in_order(api, transport):
    seen = []

    def first(request):
        seen.append("first")
        request.headers["X-Order"] = "1"

    def second(request):
        seen.append("second")
        request.headers["X-Order"] = request.headers["X-Order"] + "2"

    transport.respond(200, {"id": "x"})
    await api.spaces.get(SpacesGetRequest(id="x"), first, second)

    assert seen == ["first", "second"]
    assert transport.last.headers["X-Order"] == "12"


@pytest.mark.asyncio
async def test_failing_option_aborts_before_transport(api, transport):
    class Refused(Exception):
        pass

    def refuse(request):
        raise Refused()

    called = []

    with pytest.raises(Refused):
        await api.spaces.get(SpacesGetRequest(id="x"), refuse, lambda r: called.append(r))

    assert called == []
    assert transport.requests == []


@pytest.mark.asyncio
async def test_with_headers_appends_values(api, transport):
    transport.respond(200, {"id": "x"})
    await api.spaces.get(
        SpacesGetRequest(id="x"),
        with_headers({"X-Tag": "a"}),
        with_headers([("X-Tag", "b"), ("Elastic-Api-Version", "2023-10-31")]),
    )
    assert transport.last.headers.get_list("X-Tag") == ["a", "b"]
    assert transport.last.headers["Elastic-Api-Version"] == "2023-10-31"


@pytest.mark.asyncio
async def test_query_booleans_and_unset_values(api, transport):
    transport.respond(200, [])
    await api.spaces.get_all(SpacesGetAllRequest(params=SpacesGetAllParams(include_authorized_purposes=True)))
    assert transport.last.url.params["include_authorized_purposes"] == "true"
    assert "purpose" not in transport.last.url.params


@pytest.mark.asyncio
async def test_status_params(api, transport):
    transport.respond(200, {"name": "kibana", "version": {"number": "8.15.0"}})
    resp = await api.status.get(GetStatusRequest(v8format=False))
    assert transport.last.url.path == "/api/status"
    assert transport.last.url.params["v8format"] == "false"
    assert resp.body.version.number == "8.15.0"


def test_build_query_formats_values():
    query = build_query({"a": True, "b": None, "c": ["x", "y"], "d": {"k": 1}, "e": 3})
    assert query == {"a": "true", "c": "x,y", "d": '{"k":1}', "e": "3"}


def test_only_200_is_strict():
    assert only_200(200)
    assert not only_200(201)


@pytest.mark.asyncio
async def test_instrumentation_callback_order(instrumented_api, recorder):
    api, mock = instrumented_api
    mock.respond(200, {"id": "x"})

    await api.spaces.get(SpacesGetRequest(id="x"))

    assert recorder.names() == [
        "start",
        "record_path_part",
        "before_request",
        "record_request_body",
        "after_request",
        "close",
    ]
    assert recorder.calls[0] == ("start", "spaces.get")
    assert recorder.calls[1] == ("record_path_part", "id", "x")
    assert recorder.calls[4] == ("after_request", "kibana", "/api/spaces/space/x")


@pytest.mark.asyncio
async def test_instrumentation_records_errors(instrumented_api, recorder):
    api, mock = instrumented_api
    mock.respond(500, {"message": "boom"})

    with pytest.raises(ServerError) as exc_info:
        await api.spaces.get(SpacesGetRequest(id="x"))

    assert ("record_error", exc_info.value) in recorder.calls
    assert recorder.names()[-1] == "close"


@pytest.mark.asyncio
async def test_after_request_runs_when_transport_fails(instrumented_api, recorder):
    api, mock = instrumented_api
    mock.fail(httpx.ReadTimeout("slow"))

    with pytest.raises(httpx.ReadTimeout):
        await api.spaces.get(SpacesGetRequest(id="x"))

    names = recorder.names()
    assert names.index("after_request") < names.index("record_error") < names.index("close")


def test_roles_namespace_is_bound(api):
    assert isinstance(api.roles, Roles)


@pytest.mark.asyncio
async def test_spaces_get_default_with_empty_space(api, transport):
    transport.respond(200, {})

    resp = await api.spaces.get(SpacesGetRequest(id="default"))

    assert resp.status_code == 200
    assert resp.body == Space()
    assert transport.last.method == "GET"
    assert transport.last.url.path == "/api/spaces/space/default"


class BrokenBody(httpx.AsyncByteStream):
    async def __aiter__(self):
        yield b'{"partial'
        raise httpx.ReadError("connection reset mid-body")


class BrokenBodyTransport:
    def __init__(self, status_code):
        self.status_code = status_code

    async def perform(self, request):
        return httpx.Response(self.status_code, stream=BrokenBody(), request=request)


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [500, 200])
async def test_body_read_failure_is_wrapped(status_code):
    api = API(BrokenBodyTransport(status_code))

    with pytest.raises(ResponseReadError, match="failed to read response body") as exc_info:
        await api.spaces.get(SpacesGetRequest(id="ops"))

    err = exc_info.value
    assert isinstance(err, KibanaError)
    assert isinstance(err.__cause__, httpx.ReadError)
    assert err.status_code == status_code
    assert err.response.body is None


@pytest.mark.asyncio
async def test_json_null_body_decodes_to_none(api, transport):
    transport.respond(200, content=b"null")

    resp = await api.spaces.get(SpacesGetRequest(id="ops"))

    assert resp.status_code == 200
    assert resp.body is None
    assert resp.raw_body == b"null"
