"""Cloud Foundry v3 HTTP API adapter implementation for restage workflows."""

from __future__ import annotations

import posixpath
from typing import Any, Final, TypeVar
from urllib.parse import urlparse

import httpx
from pydantic import BaseModel, ValidationError
import structlog

from cf_restage_all.domain import Application, Build, CurrentDroplet

from .interfaces import PlatformAdapterPort
from .platform_errors import (
    PlatformDecodeError,
    PlatformNotFoundError,
    PlatformTransportError,
    PlatformTransportTimeoutError,
)
from .platform_payloads import (
    ApplicationListPayload,
    ApplicationPayload,
    BuildPayload,
    CurrentDropletRelationshipPayload,
    DropletPayload,
    RestartActionPayload,
)

log = structlog.get_logger(__name__)

_PayloadT = TypeVar("_PayloadT", bound=BaseModel)


class CloudFoundryV3Adapter(PlatformAdapterPort):
    """Adapter implementation for the Cloud Foundry v3 apps, builds and droplets endpoints."""

    _USER_AGENT: Final[str] = "cf-restage-all/1.0 (Python/httpx)"
    _MAX_LIST_PAGES: Final[int] = 1000

    def __init__(
        self,
        api_url: str,
        access_token: str,
        space_guid: str | None = None,
        request_timeout_seconds: float = 30.0,
        verify_ssl: bool = True,
        http_client: httpx.Client | None = None,
    ):
        """Initialize platform adapter with one reusable HTTP client.

        Args:
            api_url: Base control-plane API URL, for example `https://api.example.com`.
            access_token: OAuth access token, with or without `bearer ` prefix.
            space_guid: Optional space scope for application listing.
            request_timeout_seconds: Per-request timeout in seconds.
            verify_ssl: Whether TLS certificates are verified.
            http_client: Optional preconfigured client, used by tests with `httpx.MockTransport`.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when required config values are invalid.
        """

        normalized_api_url = api_url.strip()
        normalized_access_token = access_token.strip()

        if not normalized_api_url:
            raise ValueError("api_url must not be blank")
        if not normalized_access_token:
            raise ValueError("access_token must not be blank")
        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        if not normalized_access_token.lower().startswith("bearer "):
            normalized_access_token = f"bearer {normalized_access_token}"

        self._api_url = normalized_api_url.rstrip("/")
        self._space_guid = (space_guid or "").strip() or None
        self._http_client = http_client or httpx.Client(
            base_url=self._api_url,
            timeout=request_timeout_seconds,
            verify=verify_ssl,
        )
        self._http_client.headers.update(
            {
                "Authorization": normalized_access_token,
                "Accept": "application/json",
                "User-Agent": self._USER_AGENT,
            }
        )

    def adapter_close(self) -> None:
        """Close the underlying HTTP client."""

        self._http_client.close()

    def adapter_list_applications(self) -> list[Application]:
        """List applications in scope, following pagination links.

        Returns:
            list[Application]: Applications in listing order.

        Raises:
            PlatformTransportError: Raised for transport failures.
            PlatformDecodeError: Raised when a page does not match the list contract.
        """

        first_page_parameters = {"per_page": "100"}
        if self._space_guid is not None:
            first_page_parameters["space_guids"] = self._space_guid
        query_parameters: dict[str, str] | None = first_page_parameters

        applications: list[Application] = []
        next_url: str | None = "/v3/apps"
        for _page_index in range(self._MAX_LIST_PAGES):
            if next_url is None:
                break
            payload = self._adapter_request_json("GET", next_url, query_parameters=query_parameters)
            page = self._adapter_decode(ApplicationListPayload, payload, context_label="list_applications")
            for resource in page.resources:
                if not resource.guid:
                    raise PlatformDecodeError("application list entry is missing guid")
                applications.append(
                    Application(guid=resource.guid, name=resource.name or resource.guid, state=resource.state)
                )
            next_url = page.pagination.next.href if page.pagination and page.pagination.next else None
            # next links already carry the original query string
            query_parameters = None
        else:
            raise PlatformDecodeError("application list pagination did not terminate")

        log.debug("platform_applications_listed", count=len(applications), space_guid=self._space_guid)
        return applications

    def adapter_get_current_droplet(self, app_guid: str) -> CurrentDroplet:
        """Fetch current droplet and derive its source package guid.

        Args:
            app_guid: Application identifier.

        Returns:
            CurrentDroplet: Current droplet metadata.

        Raises:
            PlatformNotFoundError: Raised when the app has no current droplet or package link.
            PlatformTransportError: Raised for transport failures.
            PlatformDecodeError: Raised when response shape is unexpected.
        """

        payload = self._adapter_request_json(
            "GET",
            f"/v3/apps/{app_guid}/droplets/current",
            not_found_message=f"application {app_guid} has no current droplet",
        )
        droplet = self._adapter_decode(DropletPayload, payload, context_label="current_droplet")
        if droplet.links.package is None:
            raise PlatformNotFoundError(f"current droplet of application {app_guid} has no package")

        package_guid = posixpath.basename(urlparse(droplet.links.package.href).path.rstrip("/"))
        if not package_guid:
            raise PlatformDecodeError("current droplet package link has no package guid")

        return CurrentDroplet(
            guid=droplet.guid or "",
            created_at=droplet.created_at,
            package_guid=package_guid,
        )

    def adapter_submit_build(self, package_guid: str) -> Build:
        """Submit one build for the given package.

        Args:
            package_guid: Source package identifier.

        Returns:
            Build: Created build.

        Raises:
            PlatformTransportError: Raised for transport failures.
            PlatformDecodeError: Raised when response shape is unexpected.
        """

        payload = self._adapter_request_json(
            "POST",
            "/v3/builds",
            json_body={"package": {"guid": package_guid}},
        )
        build = self._adapter_decode(BuildPayload, payload, context_label="submit_build")
        if not build.guid:
            raise PlatformDecodeError("submitted build response is missing guid")

        log.debug("platform_build_submitted", package_guid=package_guid, build_guid=build.guid)
        return self._adapter_build_from_payload(build, fallback_guid=build.guid)

    def adapter_get_build(self, build_guid: str) -> Build:
        """Fetch one build record.

        Args:
            build_guid: Build identifier.

        Returns:
            Build: Latest build state.

        Raises:
            PlatformTransportError: Raised for transport failures.
            PlatformDecodeError: Raised when response shape is unexpected.
        """

        payload = self._adapter_request_json("GET", f"/v3/builds/{build_guid}")
        build = self._adapter_decode(BuildPayload, payload, context_label="get_build")
        return self._adapter_build_from_payload(build, fallback_guid=build_guid)

    def adapter_assign_droplet(self, app_guid: str, droplet_guid: str) -> bool:
        """Assign application current droplet and verify the echoed guid.

        Args:
            app_guid: Application identifier.
            droplet_guid: Droplet identifier.

        Returns:
            bool: True when the response echoes `droplet_guid`.

        Raises:
            PlatformTransportError: Raised for transport failures.
            PlatformDecodeError: Raised when response shape is unexpected.
        """

        payload = self._adapter_request_json(
            "PATCH",
            f"/v3/apps/{app_guid}/relationships/current_droplet",
            json_body={"data": {"guid": droplet_guid}},
        )
        relationship = self._adapter_decode(
            CurrentDropletRelationshipPayload,
            payload,
            context_label="assign_droplet",
        )
        return relationship.data.guid == droplet_guid

    def adapter_restart_application(self, app_guid: str) -> None:
        """Trigger application restart.

        Args:
            app_guid: Application identifier.

        Returns:
            None: Restart is fire-and-forget.

        Raises:
            PlatformTransportError: Raised for transport failures.
            PlatformDecodeError: Raised when response is not a JSON object.
        """

        payload = self._adapter_request_json("POST", f"/v3/apps/{app_guid}/actions/restart")
        self._adapter_decode(RestartActionPayload, payload, context_label="restart_application")

    def adapter_get_application(self, app_guid: str) -> Application:
        """Fetch one application record.

        Args:
            app_guid: Application identifier.

        Returns:
            Application: Latest application state.

        Raises:
            PlatformTransportError: Raised for transport failures.
            PlatformDecodeError: Raised when response shape is unexpected.
        """

        payload = self._adapter_request_json("GET", f"/v3/apps/{app_guid}")
        application = self._adapter_decode(ApplicationPayload, payload, context_label="get_application")
        resolved_guid = application.guid or app_guid
        return Application(guid=resolved_guid, name=application.name or resolved_guid, state=application.state)

    def _adapter_build_from_payload(self, build: BuildPayload, fallback_guid: str) -> Build:
        return Build(
            guid=build.guid or fallback_guid,
            state=build.state,
            droplet_guid=build.droplet.guid if build.droplet is not None else None,
        )

    def _adapter_request_json(
        self,
        method: str,
        url: str,
        query_parameters: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        not_found_message: str | None = None,
    ) -> Any:
        """Execute one HTTP request and return the parsed JSON body.

        Args:
            method: HTTP method.
            url: Relative API path or absolute pagination URL.
            query_parameters: Optional query string parameters.
            json_body: Optional JSON request body.
            not_found_message: When set, HTTP 404 raises `PlatformNotFoundError` with this message.

        Returns:
            Any: Parsed JSON document.

        Raises:
            PlatformTransportTimeoutError: Raised when the request timed out.
            PlatformTransportError: Raised for network failures and non-success HTTP status.
            PlatformNotFoundError: Raised for mapped HTTP 404 responses.
            PlatformDecodeError: Raised when the body is not valid JSON.
        """

        try:
            response = self._http_client.request(method, url, params=query_parameters, json=json_body)
        except httpx.TimeoutException as error:
            raise PlatformTransportTimeoutError(f"platform request timed out: {method} {url}") from error
        except httpx.HTTPError as error:
            raise PlatformTransportError(f"platform request failed: {method} {url}: {error}") from error

        log.debug("platform_request_completed", method=method, url=url, status_code=response.status_code)

        if response.status_code == 404 and not_found_message is not None:
            raise PlatformNotFoundError(not_found_message, status_code=404)
        if response.status_code >= 400:
            raise PlatformTransportError(
                f"platform returned HTTP {response.status_code} for {method} {url}: "
                f"{self._adapter_error_detail(response)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as error:
            raise PlatformDecodeError(f"platform response is not JSON for {method} {url}") from error

    def _adapter_decode(self, payload_model: type[_PayloadT], payload: Any, context_label: str) -> _PayloadT:
        """Validate payload against endpoint contract and raise deterministic decode errors.

        Args:
            payload_model: Endpoint payload model type.
            payload: Parsed JSON document.
            context_label: Context label for error messages.

        Returns:
            BaseModel: Validated payload model instance.

        Raises:
            PlatformDecodeError: Raised when payload shape does not match the contract.
        """

        try:
            return payload_model.model_validate(payload)
        except ValidationError as error:
            raise PlatformDecodeError(
                f"unexpected platform response for context={context_label}: {error.error_count()} validation error(s)"
            ) from error

    def _adapter_error_detail(self, response: httpx.Response) -> str:
        """Extract first upstream error detail, falling back to the reason phrase."""

        try:
            payload = response.json()
        except ValueError:
            return response.reason_phrase or "unknown error"
        if isinstance(payload, dict):
            errors = payload.get("errors")
            if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                return str(errors[0].get("detail") or errors[0].get("title") or "unknown error")
        return response.reason_phrase or "unknown error"
