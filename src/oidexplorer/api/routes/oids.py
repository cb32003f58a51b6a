"""OID lookup routes.

Paths and query semantics match the public oid-explorer API. Errors are
raised as OidExplorerError subclasses and rendered by the handlers
registered in ``oidexplorer.main``.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Query

from oidexplorer.api.dependencies import get_oid_service
from oidexplorer.api.schemas import (
    ErrorResponse,
    IdentifierDetailOut,
    IdentifierOut,
    RelationOut,
)
from oidexplorer.services.oid_service import (
    OidService,
    build_search_criteria,
)

router = APIRouter(prefix="/oids", tags=["oids"])

_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get(
    "", response_model=list[IdentifierOut], responses=_ERRORS
)
async def search_oids(
    keyword: str = Query(default="", description="Search keyword"),
    type: str = Query(  # noqa: A002
        default="", description="Match against: oid, name or any"
    ),
    limit: str = Query(default="", description="Maximum result count"),
    service: OidService = Depends(get_oid_service),
) -> list[dict[str, Any]]:
    """Search OIDs by name and/or dotted path."""
    criteria = build_search_criteria(keyword, type, limit)
    oids = await service.search(criteria)
    return [o.to_dict() for o in oids]


@router.get(
    "/{oid}", response_model=IdentifierDetailOut, responses=_ERRORS
)
async def get_oid(
    oid: str,
    service: OidService = Depends(get_oid_service),
) -> dict[str, Any]:
    """Get one OID with its descriptions and parent."""
    identifier = await service.get_oid(oid)
    return identifier.to_dict()


@router.get(
    "/{oid}/relation", response_model=RelationOut, responses=_ERRORS
)
async def get_oid_relation(
    oid: str,
    service: OidService = Depends(get_oid_service),
) -> dict[str, Any]:
    """Get the tree from the namespace root down to the OID's children."""
    relation = await service.resolve_relation(oid)
    return relation.to_dict()


@router.get(
    "/{oid}/parent", response_model=IdentifierOut, responses=_ERRORS
)
async def get_oid_parent(
    oid: str,
    service: OidService = Depends(get_oid_service),
) -> dict[str, Any]:
    parent = await service.resolve_parent(oid)
    return parent.to_dict()


@router.get(
    "/{oid}/siblings",
    response_model=list[IdentifierOut],
    responses=_ERRORS,
)
async def get_oid_siblings(
    oid: str,
    service: OidService = Depends(get_oid_service),
) -> list[dict[str, Any]]:
    siblings = await service.resolve_siblings(oid)
    return [s.to_dict() for s in siblings]


@router.get(
    "/{oid}/children",
    response_model=list[IdentifierOut],
    responses=_ERRORS,
)
async def get_oid_children(
    oid: str,
    service: OidService = Depends(get_oid_service),
) -> list[dict[str, Any]]:
    children = await service.resolve_children(oid)
    return [c.to_dict() for c in children]
