"""In-memory fake repository for testing.

Dict-backed implementation of the OidRepository protocol, mirroring the
SQL ordering rules. No SQLAlchemy, no I/O: instant operations for unit
and API tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from oidexplorer.errors import NotFoundError, StoreError
from oidexplorer.oid import (
    Description,
    Identifier,
    IdentifierDetails,
    SearchCriteria,
    oid_sort_key,
    require_oid,
)


def _instr(haystack: str, needle: str) -> int:
    """1-based position like SQL ``INSTR``; 0 when absent."""
    return haystack.find(needle) + 1


@dataclass
class _Node:
    name: str
    oid: str
    parent: str | None = None
    object_type: str | None = None
    descriptions: list[Description] = field(default_factory=list)


class FakeOidRepository:
    """Dict-backed OidRepository for testing.

    ``calls`` records every operation as ``"<op>:<oid>"``; any oid in
    ``failing`` raises StoreError on lookup, simulating a dead store.
    An oid in ``failing_parents`` fails only its parent lookup.
    """

    def __init__(self) -> None:
        self._store: dict[str, _Node] = {}
        self.calls: list[str] = []
        self.failing: set[str] = set()
        self.failing_parents: set[str] = set()

    def add(
        self,
        oid: str,
        name: str,
        parent: str | None = None,
        object_type: str | None = None,
        descriptions: list[tuple[str, str]] | None = None,
    ) -> None:
        self._store[oid] = _Node(
            name=name,
            oid=oid,
            parent=parent,
            object_type=object_type,
            descriptions=[
                Description(mib=mib, description=text)
                for mib, text in descriptions or []
            ],
        )

    def _record(self, op: str, oid: str) -> None:
        self.calls.append(f"{op}:{oid}")
        if oid in self.failing:
            raise StoreError("failed to query database")

    async def get_by_oid(self, oid: str) -> Identifier:
        require_oid(oid)
        self._record("get_by_oid", oid)
        node = self._store.get(oid)
        if node is None:
            raise NotFoundError(f"oid {oid} not found")
        try:
            parent: Identifier | None = await self.get_parent(oid)
        except NotFoundError:
            parent = None
        return Identifier(
            name=node.name,
            oid=node.oid,
            details=IdentifierDetails(
                object_type=node.object_type,
                descriptions=tuple(
                    sorted(node.descriptions, key=lambda d: d.mib)
                ),
                parent=parent,
            ),
        )

    async def get_parent(self, oid: str) -> Identifier:
        require_oid(oid)
        self._record("get_parent", oid)
        if oid in self.failing_parents:
            raise StoreError("failed to query database")
        node = self._store.get(oid)
        if node is None or node.parent not in self._store:
            raise NotFoundError(f"oid {oid} has no parent")
        parent = self._store[node.parent]
        return Identifier(name=parent.name, oid=parent.oid)

    async def get_children(self, oid: str) -> list[Identifier]:
        require_oid(oid)
        self._record("get_children", oid)
        children = [
            n for n in self._store.values() if n.parent == oid
        ]
        return [
            Identifier(name=n.name, oid=n.oid)
            for n in sorted(children, key=lambda n: oid_sort_key(n.oid))
        ]

    async def get_siblings(self, oid: str) -> list[Identifier]:
        require_oid(oid)
        self._record("get_siblings", oid)
        node = self._store.get(oid)
        if node is None or node.parent is None:
            return []
        siblings = [
            n
            for n in self._store.values()
            if n.parent == node.parent and n.oid != oid
        ]
        return [
            Identifier(name=n.name, oid=n.oid)
            for n in sorted(siblings, key=lambda n: oid_sort_key(n.oid))
        ]

    async def search(
        self, criteria: SearchCriteria
    ) -> list[Identifier]:
        self.calls.append("search")
        nodes = list(self._store.values())
        if criteria.any is not None:
            kw = criteria.any
            matched = [
                n
                for n in nodes
                if kw.lower() in n.name.lower()
                or kw.lower() in n.oid.lower()
            ]
            matched.sort(
                key=lambda n: (
                    _instr(n.name, kw),
                    _instr(n.oid, kw),
                    n.name,
                )
            )
        elif criteria.name is not None:
            kw = criteria.name
            matched = [n for n in nodes if kw.lower() in n.name.lower()]
            matched.sort(key=lambda n: (_instr(n.name, kw), n.name))
        elif criteria.oid is not None:
            kw = criteria.oid
            matched = [n for n in nodes if kw.lower() in n.oid.lower()]
            matched.sort(key=lambda n: (_instr(n.oid, kw), n.name))
        else:
            matched = sorted(nodes, key=lambda n: n.oid)

        if criteria.limit is not None:
            matched = matched[: criteria.limit]
        return [Identifier(name=n.name, oid=n.oid) for n in matched]


class FakeDataService:
    """Stand-in for DataService in API tests."""

    def __init__(self, connected: bool = True) -> None:
        self.connected = connected

    async def check_connection(self) -> bool:
        return self.connected
