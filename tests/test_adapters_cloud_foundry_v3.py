"""Regression tests for Cloud Foundry v3 adapter wire mapping and error handling."""

from __future__ import annotations

from datetime import datetime, timezone
import json

import httpx

import pytest

from cf_restage_all.adapters import (
    CloudFoundryV3Adapter,
    PlatformDecodeError,
    PlatformNotFoundError,
    PlatformTransportError,
    PlatformTransportTimeoutError,
)

_API_URL = "https://api.example.test"


def _build_adapter(handler, space_guid: str | None = None, access_token: str = "token") -> CloudFoundryV3Adapter:
    http_client = httpx.Client(base_url=_API_URL, transport=httpx.MockTransport(handler))
    return CloudFoundryV3Adapter(
        api_url=_API_URL,
        access_token=access_token,
        space_guid=space_guid,
        http_client=http_client,
    )


def test_adapters_cf_list_applications_follows_pagination_and_scopes_space() -> None:
    """List applications across pages with space scoping and bearer auth.

    Returns:
        None: Assertions validate listing order, query and headers.

    Raises:
        AssertionError: Raised when listing mapping is incorrect.
    """

    requests: list[httpx.Request] = []
    next_href = f"{_API_URL}/v3/apps?page=2&per_page=100&space_guids=space-1"

    def _handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.params.get("page") == "2":
            return httpx.Response(
                200,
                json={"pagination": {"next": None}, "resources": [{"guid": "g2", "name": "app2", "state": "STOPPED"}]},
            )
        return httpx.Response(
            200,
            json={
                "pagination": {"next": {"href": next_href}},
                "resources": [{"guid": "g1", "name": "app1", "state": "STARTED", "lifecycle": {"type": "buildpack"}}],
            },
        )

    adapter = _build_adapter(_handler, space_guid="space-1")
    applications = adapter.adapter_list_applications()

    assert [(app.guid, app.name, app.state) for app in applications] == [
        ("g1", "app1", "STARTED"),
        ("g2", "app2", "STOPPED"),
    ]
    assert requests[0].url.path == "/v3/apps"
    assert requests[0].url.params["space_guids"] == "space-1"
    assert requests[0].headers["Authorization"] == "bearer token"
    assert str(requests[1].url) == next_href


def test_adapters_cf_keeps_existing_bearer_prefix() -> None:
    """Do not double the bearer prefix of CF CLI stored tokens.

    Returns:
        None: Assertions validate header normalization.

    Raises:
        AssertionError: Raised when token prefix is duplicated.
    """

    captured_headers: list[str] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        captured_headers.append(request.headers["Authorization"])
        return httpx.Response(200, json={"resources": []})

    adapter = _build_adapter(_handler, access_token="bearer eyJ.token")
    assert adapter.adapter_list_applications() == []
    assert captured_headers == ["bearer eyJ.token"]


def test_adapters_cf_current_droplet_resolves_package_guid_and_created_at() -> None:
    """Derive package guid from package link basename and parse creation time.

    Returns:
        None: Assertions validate droplet mapping.

    Raises:
        AssertionError: Raised when droplet mapping is incorrect.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v3/apps/app-1/droplets/current"
        return httpx.Response(
            200,
            json={
                "guid": "droplet-1",
                "created_at": "2020-03-28T23:39:34Z",
                "links": {"package": {"href": f"{_API_URL}/v3/packages/pkg-guid-1"}},
            },
        )

    droplet = _build_adapter(_handler).adapter_get_current_droplet("app-1")

    assert droplet.guid == "droplet-1"
    assert droplet.package_guid == "pkg-guid-1"
    assert droplet.created_at == datetime(2020, 3, 28, 23, 39, 34, tzinfo=timezone.utc)


def test_adapters_cf_current_droplet_maps_404_to_not_found() -> None:
    """Raise not-found when the application has no current droplet.

    Returns:
        None: Assertions validate 404 mapping.

    Raises:
        AssertionError: Raised when 404 is not mapped.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(404, json={"errors": [{"detail": "Droplet not found", "title": "CF-ResourceNotFound"}]})

    with pytest.raises(PlatformNotFoundError, match="has no current droplet") as error_info:
        _build_adapter(_handler).adapter_get_current_droplet("app-1")
    assert error_info.value.status_code == 404


def test_adapters_cf_current_droplet_without_package_link_is_not_found() -> None:
    """Raise not-found when the current droplet has no package link.

    Returns:
        None: Assertions validate missing package handling.

    Raises:
        AssertionError: Raised when missing package is accepted.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(200, json={"guid": "d", "created_at": "2020-03-28T23:39:34Z", "links": {}})

    with pytest.raises(PlatformNotFoundError, match="has no package"):
        _build_adapter(_handler).adapter_get_current_droplet("app-1")


def test_adapters_cf_submit_build_posts_package_reference() -> None:
    """Post build request body with package guid and return created build.

    Returns:
        None: Assertions validate request body and result mapping.

    Raises:
        AssertionError: Raised when build submission is incorrect.
    """

    captured_bodies: list[dict[str, object]] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "POST"
        assert request.url.path == "/v3/builds"
        captured_bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"guid": "build-1", "state": "STAGING", "droplet": None})

    build = _build_adapter(_handler).adapter_submit_build("pkg-1")

    assert captured_bodies == [{"package": {"guid": "pkg-1"}}]
    assert (build.guid, build.state, build.droplet_guid) == ("build-1", "STAGING", None)


def test_adapters_cf_get_build_maps_droplet_reference() -> None:
    """Map staged build droplet reference.

    Returns:
        None: Assertions validate build mapping.

    Raises:
        AssertionError: Raised when droplet guid is lost.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/v3/builds/build-1"
        return httpx.Response(200, json={"guid": "build-1", "state": "STAGED", "droplet": {"guid": "abcd"}})

    build = _build_adapter(_handler).adapter_get_build("build-1")

    assert build.domain_is_staged()
    assert build.droplet_guid == "abcd"


@pytest.mark.parametrize(("echoed_guid", "expected"), [("abcd", True), ("other", False)])
def test_adapters_cf_assign_droplet_compares_echoed_guid(echoed_guid: str, expected: bool) -> None:
    """Return whether assignment echo matches requested droplet guid.

    Args:
        echoed_guid: Guid returned by upstream relationship echo.
        expected: Expected assignment result.

    Returns:
        None: Assertions validate echo comparison.

    Raises:
        AssertionError: Raised when echo comparison is incorrect.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "PATCH"
        assert request.url.path == "/v3/apps/app-1/relationships/current_droplet"
        assert json.loads(request.content) == {"data": {"guid": "abcd"}}
        return httpx.Response(200, json={"data": {"guid": echoed_guid}})

    assert _build_adapter(_handler).adapter_assign_droplet("app-1", "abcd") is expected


def test_adapters_cf_restart_and_get_application() -> None:
    """Post restart action and read application state.

    Returns:
        None: Assertions validate restart and lookup calls.

    Raises:
        AssertionError: Raised when endpoints are incorrect.
    """

    seen: list[tuple[str, str]] = []

    def _handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        if request.method == "POST":
            return httpx.Response(200, json={"guid": "app-1", "name": "app1", "state": "STARTED"})
        return httpx.Response(200, json={"guid": "app-1", "name": "app1", "state": "STARTED"})

    adapter = _build_adapter(_handler)
    adapter.adapter_restart_application("app-1")
    application = adapter.adapter_get_application("app-1")

    assert seen == [("POST", "/v3/apps/app-1/actions/restart"), ("GET", "/v3/apps/app-1")]
    assert application.domain_is_started()
    assert application.name == "app1"


def test_adapters_cf_http_error_maps_to_transport_error_with_detail() -> None:
    """Raise transport error carrying upstream error detail and status.

    Returns:
        None: Assertions validate HTTP error mapping.

    Raises:
        AssertionError: Raised when HTTP error mapping is incorrect.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(502, json={"errors": [{"detail": "upstream unavailable"}]})

    with pytest.raises(PlatformTransportError, match="HTTP 502.*upstream unavailable") as error_info:
        _build_adapter(_handler).adapter_get_build("build-1")
    assert error_info.value.status_code == 502


def test_adapters_cf_timeout_maps_to_transport_timeout_error() -> None:
    """Raise transport timeout error when the request times out.

    Returns:
        None: Assertions validate timeout mapping.

    Raises:
        AssertionError: Raised when timeout mapping is incorrect.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(PlatformTransportTimeoutError, match="timed out"):
        _build_adapter(_handler).adapter_get_application("app-1")


def test_adapters_cf_connect_error_maps_to_transport_error() -> None:
    """Raise transport error when the connection fails.

    Returns:
        None: Assertions validate connection failure mapping.

    Raises:
        AssertionError: Raised when connection errors leak.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PlatformTransportError, match="connection refused"):
        _build_adapter(_handler).adapter_list_applications()


def test_adapters_cf_non_json_body_maps_to_decode_error() -> None:
    """Raise decode error on non-JSON response body.

    Returns:
        None: Assertions validate decode error mapping.

    Raises:
        AssertionError: Raised when invalid JSON is accepted.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(200, content=b"<html>gateway</html>")

    with pytest.raises(PlatformDecodeError, match="not JSON"):
        _build_adapter(_handler).adapter_get_build("build-1")


def test_adapters_cf_unexpected_shape_maps_to_decode_error() -> None:
    """Raise decode error when a required field is missing.

    Returns:
        None: Assertions validate typed payload checks.

    Raises:
        AssertionError: Raised when malformed payload is accepted.
    """

    def _handler(request: httpx.Request) -> httpx.Response:
        _ = request
        return httpx.Response(200, json={"data": None})

    with pytest.raises(PlatformDecodeError, match="context=assign_droplet"):
        _build_adapter(_handler).adapter_assign_droplet("app-1", "abcd")


def test_adapters_cf_rejects_blank_configuration() -> None:
    """Reject blank API URL and token.

    Returns:
        None: Assertions validate constructor checks.

    Raises:
        AssertionError: Raised when blank values are accepted.
    """

    with pytest.raises(ValueError, match="api_url"):
        CloudFoundryV3Adapter(api_url=" ", access_token="token")
    with pytest.raises(ValueError, match="access_token"):
        CloudFoundryV3Adapter(api_url=_API_URL, access_token="")
