"""SQL implementation of OidRepository."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from oidexplorer.errors import NotFoundError, StoreError
from oidexplorer.models.description import Mib, OidDescription
from oidexplorer.models.oid import OidRecord
from oidexplorer.oid import (
    Description,
    Identifier,
    IdentifierDetails,
    SearchCriteria,
    require_oid,
)

logger = logging.getLogger(__name__)


def _by_depth() -> tuple[Any, ...]:
    # Length first so "1.2" and "1.3" sort before "1.10"
    return (func.length(OidRecord.oid), OidRecord.oid)


class SqlOidRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _execute(self, stmt: Select[Any]) -> Result[Any]:
        try:
            return await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            logger.warning("event=query_failed error=%s", exc)
            raise StoreError("failed to query database") from exc

    async def get_by_oid(self, oid: str) -> Identifier:
        require_oid(oid)
        result = await self._execute(
            select(OidRecord).where(OidRecord.oid == oid)
        )
        record = result.scalar_one_or_none()
        if record is None:
            raise NotFoundError(f"oid {oid} not found")

        result = await self._execute(
            select(Mib.name, OidDescription.description)
            .select_from(OidDescription)
            .join(Mib, OidDescription.mib_id == Mib.id)
            .where(OidDescription.oid_id == record.id)
            .order_by(Mib.name, OidDescription.id)
        )
        descriptions = tuple(
            Description(mib=row.name, description=row.description)
            for row in result
        )

        # A root has no parent; a store failure here still propagates
        try:
            parent: Identifier | None = await self.get_parent(oid)
        except NotFoundError:
            parent = None

        return Identifier(
            name=record.name,
            oid=record.oid,
            details=IdentifierDetails(
                object_type=record.object_type,
                descriptions=descriptions,
                parent=parent,
            ),
        )

    async def get_parent(self, oid: str) -> Identifier:
        require_oid(oid)
        parent = aliased(OidRecord)
        result = await self._execute(
            select(parent.name, parent.oid)
            .join_from(OidRecord, parent, OidRecord.parent_id == parent.id)
            .where(OidRecord.oid == oid)
        )
        row = result.first()
        if row is None:
            raise NotFoundError(f"oid {oid} has no parent")
        return Identifier(name=row.name, oid=row.oid)

    async def get_children(self, oid: str) -> list[Identifier]:
        require_oid(oid)
        parent = aliased(OidRecord)
        result = await self._execute(
            select(OidRecord.name, OidRecord.oid)
            .join(parent, OidRecord.parent_id == parent.id)
            .where(parent.oid == oid)
            .order_by(*_by_depth())
        )
        return [Identifier(name=row.name, oid=row.oid) for row in result]

    async def get_siblings(self, oid: str) -> list[Identifier]:
        require_oid(oid)
        parent_id = (
            select(OidRecord.parent_id)
            .where(OidRecord.oid == oid)
            .scalar_subquery()
        )
        result = await self._execute(
            select(OidRecord.name, OidRecord.oid)
            .where(OidRecord.parent_id == parent_id, OidRecord.oid != oid)
            .order_by(*_by_depth())
        )
        return [Identifier(name=row.name, oid=row.oid) for row in result]

    async def search(
        self, criteria: SearchCriteria
    ) -> list[Identifier]:
        stmt = select(OidRecord.name, OidRecord.oid)
        if criteria.any is not None:
            kw = criteria.any
            stmt = stmt.where(
                OidRecord.name.contains(kw, autoescape=True)
                | OidRecord.oid.contains(kw, autoescape=True)
            ).order_by(
                func.instr(OidRecord.name, kw),
                func.instr(OidRecord.oid, kw),
                OidRecord.name,
            )
        elif criteria.name is not None:
            kw = criteria.name
            stmt = stmt.where(
                OidRecord.name.contains(kw, autoescape=True)
            ).order_by(func.instr(OidRecord.name, kw), OidRecord.name)
        elif criteria.oid is not None:
            kw = criteria.oid
            stmt = stmt.where(
                OidRecord.oid.contains(kw, autoescape=True)
            ).order_by(func.instr(OidRecord.oid, kw), OidRecord.name)
        else:
            stmt = stmt.order_by(OidRecord.oid)

        if criteria.limit is not None:
            stmt = stmt.limit(criteria.limit)

        result = await self._execute(stmt)
        return [Identifier(name=row.name, oid=row.oid) for row in result]
