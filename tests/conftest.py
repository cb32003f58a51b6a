"""Shared test fixtures: in-memory SQLite, async session, seeded OID tree."""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from oidexplorer.api.dependencies import get_data_service, get_oid_service
from oidexplorer.main import app
from oidexplorer.models import Base, Mib, OidDescription, OidRecord
from oidexplorer.repositories.fakes import FakeDataService, FakeOidRepository
from oidexplorer.services.oid_service import OidService

# (oid, name, parent oid, object type)
OID_TREE: list[tuple[str, str, str | None, str | None]] = [
    ("1", "iso", None, None),
    ("1.3", "org", "1", None),
    ("1.3.6", "dod", "1.3", None),
    ("1.3.6.1", "internet", "1.3.6", "OBJECT IDENTIFIER"),
    ("1.3.6.1.2", "mgmt", "1.3.6.1", "OBJECT IDENTIFIER"),
    ("1.3.6.1.10", "tenth", "1.3.6.1", None),
    ("1.3.6.1.4", "private", "1.3.6.1", "OBJECT IDENTIFIER"),
    ("1.3.6.1.3", "experimental", "1.3.6.1", None),
    ("2", "joint-iso-itu-t", None, None),
]

# (oid, mib, description)
DESCRIPTIONS: list[tuple[str, str, str]] = [
    ("1.3.6.1", "SNMPv2-SMI", "the Internet subtree"),
    ("1.3.6.1", "RFC1155-SMI", "internet OBJECT IDENTIFIER"),
]


def build_fake_repo() -> FakeOidRepository:
    repo = FakeOidRepository()
    for oid, name, parent, object_type in OID_TREE:
        repo.add(
            oid,
            name,
            parent=parent,
            object_type=object_type,
            descriptions=[
                (mib, text)
                for d_oid, mib, text in DESCRIPTIONS
                if d_oid == oid
            ],
        )
    return repo


async def seed_oid_tree(session: AsyncSession) -> None:
    """Insert OID_TREE and DESCRIPTIONS, parents before children."""
    ids: dict[str, int] = {}
    for oid, name, parent, object_type in OID_TREE:
        record = OidRecord(
            oid=oid,
            name=name,
            object_type=object_type,
            parent_id=ids[parent] if parent else None,
        )
        session.add(record)
        await session.flush()
        ids[oid] = record.id

    mibs: dict[str, int] = {}
    for oid, mib_name, text in DESCRIPTIONS:
        if mib_name not in mibs:
            mib = Mib(name=mib_name)
            session.add(mib)
            await session.flush()
            mibs[mib_name] = mib.id
        session.add(
            OidDescription(
                oid_id=ids[oid], mib_id=mibs[mib_name], description=text
            )
        )
    await session.flush()


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory database per test; StaticPool shares one connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Function-scoped session with connection-level rollback."""
    async with engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)
        yield session
        await session.close()
        await transaction.rollback()


@pytest.fixture
async def seeded_session(session: AsyncSession) -> AsyncSession:
    await seed_oid_tree(session)
    return session


@pytest.fixture
def fake_repo() -> FakeOidRepository:
    return build_fake_repo()


@pytest.fixture
async def client(
    fake_repo: FakeOidRepository,
) -> AsyncIterator[AsyncClient]:
    """ASGI client with the fake repository injected (no database)."""
    app.dependency_overrides[get_oid_service] = lambda: OidService(
        fake_repo
    )
    app.dependency_overrides[get_data_service] = lambda: FakeDataService()

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()
