"""Response schemas for the HTTP API."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str


class DescriptionOut(BaseModel):
    mib: str
    description: str


class IdentifierOut(BaseModel):
    """Bare name+path record: parents, children, siblings, search hits."""

    name: str
    oid: str


class IdentifierDetailOut(IdentifierOut):
    """Full record returned by ``GET /oids/{oid}``."""

    object_type: str | None = None
    descriptions: list[DescriptionOut] = Field(default_factory=list)
    parent: IdentifierOut | None = None


class RelationOut(BaseModel):
    oid: IdentifierOut
    children: list["RelationOut"] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: str
    components: dict[str, Any] | None = None
