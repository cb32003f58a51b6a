"""FastAPI dependency injection for repository and service access."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request

from oidexplorer.repositories.oid_repo import SqlOidRepository
from oidexplorer.repositories.protocols import OidRepository
from oidexplorer.services.data_service import DataService
from oidexplorer.services.oid_service import OidService


def get_data_service(request: Request) -> DataService:
    """Get DataService from app.state."""
    return request.app.state.data_service  # type: ignore[no-any-return]


async def get_repo(
    data_service: DataService = Depends(get_data_service),
) -> AsyncIterator[OidRepository]:
    """Generator dep: session lives for the entire request.

    A store that failed to initialize raises StoreError here, and the
    next request tries to connect again.
    """
    session_factory = await data_service.get_session_factory()
    async with session_factory() as session:
        yield SqlOidRepository(session)


def get_oid_service(
    repo: OidRepository = Depends(get_repo),
) -> OidService:
    return OidService(repo)
