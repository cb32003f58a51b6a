"""Frozen value types for the OID namespace.

Every record handed out by the repositories and services is one of these.
They are built fresh per request from store rows and never mutated, so two
identical queries against an unchanged store render identical JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from oidexplorer.errors import InvalidInputError


def require_oid(oid: str) -> str:
    """Reject an empty path before any store access."""
    if not oid:
        raise InvalidInputError("got empty oid to search for")
    return oid


def oid_sort_key(oid: str) -> tuple[int, str]:
    """Ordering used for children and siblings: path length, then path.

    ``"1.2"`` and ``"1.3"`` sort before ``"1.10"``, which approximates
    numeric order without parsing each arc.
    """
    return (len(oid), oid)


@dataclass(frozen=True)
class Description:
    """One description of an OID, taken from a single MIB."""

    mib: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"mib": self.mib, "description": self.description}


@dataclass(frozen=True)
class IdentifierDetails:
    """Metadata only present on full lookups (``GET /oids/{oid}``)."""

    object_type: str | None = None
    descriptions: tuple[Description, ...] = ()
    parent: Identifier | None = None


@dataclass(frozen=True)
class Identifier:
    """A node of the namespace.

    ``details`` is ``None`` for bare name+path records: parent
    references, children, siblings, search hits and relation nodes.
    """

    name: str
    oid: str
    details: IdentifierDetails | None = None

    def bare(self) -> Identifier:
        if self.details is None:
            return self
        return Identifier(name=self.name, oid=self.oid)

    @property
    def parent(self) -> Identifier | None:
        return self.details.parent if self.details else None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "oid": self.oid}
        if self.details is not None:
            data["object_type"] = self.details.object_type
            data["descriptions"] = [
                d.to_dict() for d in self.details.descriptions
            ]
            data["parent"] = (
                self.details.parent.to_dict()
                if self.details.parent
                else None
            )
        return data


@dataclass(frozen=True)
class Relation:
    """Tree view anchored at a queried OID.

    Built root-first: a single-child spine from the namespace root
    down to the queried node, fanning out at its direct children.
    """

    oid: Identifier
    children: tuple[Relation, ...] = field(default_factory=tuple)

    def spine(self) -> list[Identifier]:
        """Identifiers along the single-child chain, root first.

        Stops at the first node with zero or several children. When the
        queried node has exactly one child, that child is included too.
        """
        nodes = [self.oid]
        current = self
        while len(current.children) == 1:
            current = current.children[0]
            nodes.append(current.oid)
        return nodes

    def to_dict(self) -> dict[str, Any]:
        return {
            "oid": self.oid.to_dict(),
            "children": [c.to_dict() for c in self.children],
        }


@dataclass(frozen=True)
class SearchCriteria:
    """Keyword search query shape.

    At most one of ``oid``, ``name`` and ``any`` is set; with none set
    the search returns every node ordered by path.
    """

    oid: str | None = None
    name: str | None = None
    any: str | None = None
    limit: int | None = None

    def __post_init__(self) -> None:
        populated = [
            f for f in (self.oid, self.name, self.any) if f is not None
        ]
        if len(populated) > 1:
            raise ValueError(
                "only one of oid, name and any may be set"
            )
