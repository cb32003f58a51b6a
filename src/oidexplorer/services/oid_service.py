"""OID lookup service: flat records, single-level relations, search and
the full relation tree.

Every operation is stateless and resolves independently against the
repository it was given. Errors from the repository propagate unchanged;
input errors are raised before the repository is touched.
"""

from __future__ import annotations

import logging
import re

from oidexplorer.constants import SearchType
from oidexplorer.errors import InvalidInputError, NotFoundError, StoreError
from oidexplorer.oid import (
    Identifier,
    Relation,
    SearchCriteria,
    require_oid,
)
from oidexplorer.repositories.protocols import OidRepository

logger = logging.getLogger(__name__)

# Plain ASCII decimal, optionally signed; no spaces or underscores
_INTEGER = re.compile(r"[+-]?[0-9]+")


def build_search_criteria(
    keyword: str = "",
    search_type: str = "",
    limit: str = "",
) -> SearchCriteria:
    """Turn raw ``/oids`` query parameters into a SearchCriteria.

    An empty keyword means no filter. An empty ``search_type`` means
    ``any``. ``limit`` must parse as a non-negative integer when given.
    """
    fields: dict[str, str] = {}
    if keyword:
        try:
            kind = SearchType(search_type or SearchType.ANY)
        except ValueError:
            raise InvalidInputError("invalid queryType") from None
        fields[kind.value] = keyword

    parsed_limit: int | None = None
    if limit:
        if not _INTEGER.fullmatch(limit):
            raise InvalidInputError("limit is not an integer")
        parsed_limit = int(limit)
        _check_limit(parsed_limit)

    return SearchCriteria(limit=parsed_limit, **fields)


def _check_limit(limit: int | None) -> None:
    if limit is not None and limit < 0:
        raise InvalidInputError("limit must not be negative")


class OidService:
    def __init__(self, repo: OidRepository) -> None:
        self._repo = repo

    async def get_oid(self, oid: str) -> Identifier:
        require_oid(oid)
        logger.debug("event=oid_lookup oid=%s", oid)
        return await self._repo.get_by_oid(oid)

    async def resolve_parent(self, oid: str) -> Identifier:
        require_oid(oid)
        logger.debug("event=parent_lookup oid=%s", oid)
        return await self._repo.get_parent(oid)

    async def resolve_children(self, oid: str) -> list[Identifier]:
        require_oid(oid)
        children = await self._repo.get_children(oid)
        logger.debug(
            "event=children_lookup oid=%s count=%d", oid, len(children)
        )
        if not children:
            raise NotFoundError()
        return children

    async def resolve_siblings(self, oid: str) -> list[Identifier]:
        require_oid(oid)
        siblings = await self._repo.get_siblings(oid)
        logger.debug(
            "event=siblings_lookup oid=%s count=%d", oid, len(siblings)
        )
        if not siblings:
            raise NotFoundError()
        return siblings

    async def search(
        self, criteria: SearchCriteria
    ) -> list[Identifier]:
        _check_limit(criteria.limit)
        results = await self._repo.search(criteria)
        logger.debug(
            "event=search oid=%s name=%s any=%s limit=%s count=%d",
            criteria.oid,
            criteria.name,
            criteria.any,
            criteria.limit,
            len(results),
        )
        if not results:
            raise NotFoundError()
        return results

    async def resolve_relation(self, oid: str) -> Relation:
        """Build the tree from the namespace root down to ``oid``'s children.

        The queried node is the only level that fans out; every ancestor
        has the accumulated tree as its sole child. Ascent is an explicit
        loop over parent references; a path seen twice means the stored
        parent chain is cyclic and aborts the build.
        """
        require_oid(oid)

        current = await self._repo.get_by_oid(oid)
        children = await self._repo.get_children(oid)
        relation = Relation(
            oid=current.bare(),
            children=tuple(Relation(oid=c.bare()) for c in children),
        )

        visited = {current.oid}
        while current.parent is not None:
            parent = current.parent
            if parent.oid in visited:
                raise StoreError(
                    f"cycle detected in parent chain at {parent.oid}"
                )
            visited.add(parent.oid)

            relation = Relation(oid=parent.bare(), children=(relation,))
            current = await self._repo.get_by_oid(parent.oid)

        logger.debug(
            "event=relation_resolved oid=%s depth=%d children=%d",
            oid,
            len(visited),
            len(children),
        )
        return relation
