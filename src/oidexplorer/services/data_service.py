"""Shared store handle: lazy engine initialization and health checks."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
)

from oidexplorer.config import Settings, create_app_engine
from oidexplorer.errors import StoreError
from oidexplorer.models.base import Base

logger = logging.getLogger(__name__)


class DataService:
    """Owns the process-wide engine and session factory.

    The engine is created on first use. A successful initialization is
    kept for the process lifetime; a failed one is discarded so that the
    next caller tries again instead of inheriting the failure.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self._session_factory is not None

    async def get_session_factory(
        self,
    ) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is not None:
            return self._session_factory

        async with self._lock:
            # Another caller may have finished while we waited
            if self._session_factory is not None:
                return self._session_factory

            engine = create_app_engine(
                self._settings.database_url,
                echo=self._settings.debug_mode,
            )
            try:
                async with engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
            except (SQLAlchemyError, OSError) as exc:
                await engine.dispose()
                logger.error(
                    "event=db_init_failed error=%s", exc
                )
                raise StoreError("failed to initialize database") from exc

            self._engine = engine
            self._session_factory = async_sessionmaker(
                engine, expire_on_commit=False
            )
            logger.info("event=db_initialized")
            return self._session_factory

    async def create_schema(self) -> None:
        await self.get_session_factory()
        engine = self._engine
        if engine is None:
            raise StoreError("database is not initialized")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def check_connection(self) -> bool:
        try:
            session_factory = await self.get_session_factory()
            async with session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except (StoreError, SQLAlchemyError):
            return False

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
        self._engine = None
        self._session_factory = None
