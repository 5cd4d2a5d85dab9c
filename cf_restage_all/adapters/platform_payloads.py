"""Typed response contracts for the platform v3 endpoints used by the adapter.

Each model describes only the fields the adapter reads. Unknown fields are
ignored so additive upstream changes do not break decoding, while a missing
or mistyped required field surfaces as a decode failure.
"""

from __future__ import annotations

from pydantic import AwareDatetime, BaseModel, ConfigDict


class _PayloadModel(BaseModel):
    """Base payload model ignoring unknown upstream fields."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class LinkPayload(_PayloadModel):
    """Hypermedia link."""

    href: str


class GuidReferencePayload(_PayloadModel):
    """Nested `{"guid": ...}` reference object."""

    guid: str


class ApplicationPayload(_PayloadModel):
    """Application resource returned by `/v3/apps` endpoints."""

    guid: str | None = None
    name: str | None = None
    state: str


class PaginationPayload(_PayloadModel):
    """List pagination block."""

    next: LinkPayload | None = None


class ApplicationListPayload(_PayloadModel):
    """Paginated application list returned by `GET /v3/apps`."""

    pagination: PaginationPayload | None = None
    resources: list[ApplicationPayload]


class DropletLinksPayload(_PayloadModel):
    """Droplet links block; `package` is absent for uploaded droplets."""

    package: LinkPayload | None = None


class DropletPayload(_PayloadModel):
    """Droplet resource returned by `GET /v3/apps/{guid}/droplets/current`."""

    guid: str | None = None
    created_at: AwareDatetime
    links: DropletLinksPayload


class BuildPayload(_PayloadModel):
    """Build resource returned by `POST /v3/builds` and `GET /v3/builds/{guid}`."""

    guid: str | None = None
    state: str = "PENDING"
    droplet: GuidReferencePayload | None = None


class CurrentDropletRelationshipPayload(_PayloadModel):
    """Relationship echo returned by `PATCH /v3/apps/{guid}/relationships/current_droplet`."""

    data: GuidReferencePayload


class RestartActionPayload(_PayloadModel):
    """Application body returned by `POST /v3/apps/{guid}/actions/restart`."""

    state: str | None = None
