"""Protocol-based repository interface.

The SQL implementation satisfies this protocol structurally (no inheritance).
Test doubles can be plain classes or mocks matching the same signature.
"""

from typing import Protocol

from oidexplorer.oid import Identifier, SearchCriteria


class OidRepository(Protocol):
    async def get_by_oid(self, oid: str) -> Identifier: ...
    async def get_parent(self, oid: str) -> Identifier: ...
    async def get_children(self, oid: str) -> list[Identifier]: ...
    async def get_siblings(self, oid: str) -> list[Identifier]: ...
    async def search(
        self, criteria: SearchCriteria
    ) -> list[Identifier]: ...
