"""Environment-based configuration and database engine factory."""

from __future__ import annotations

import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from oidexplorer.logging_config import parse_level

logger = logging.getLogger(__name__)

ENV_PREFIX = "OID_EXPLORER_"


class Settings(BaseSettings):
    """Reads from .env file and ``OID_EXPLORER_*`` environment variables."""

    # Database
    database_url: str = "sqlite:///data/oids.db"
    create_schema: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 9000
    cors_origins: str = ""

    # Logging
    log_level: str = "ERROR"
    debug_mode: bool = False

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        parse_level(v)
        return v.upper()

    @field_validator("port")
    @classmethod
    def _validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [
            o.strip() for o in self.cors_origins.split(",") if o.strip()
        ]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": ENV_PREFIX,
        "extra": "ignore",
    }


def to_async_url(url: str) -> str:
    """Swap a sync driver URL for its async counterpart.

    ``sqlite:///`` becomes ``sqlite+aiosqlite:///`` and ``mysql://``
    becomes ``mysql+aiomysql://``; anything else passes through.
    """
    if url.startswith("sqlite:///"):
        return "sqlite+aiosqlite:///" + url[len("sqlite:///"):]
    if url.startswith("mysql://"):
        return "mysql+aiomysql://" + url[len("mysql://"):]
    return url


def create_app_engine(
    url: str, *, echo: bool = False
) -> AsyncEngine:
    """Create the async engine for the OID store.

    SQLite connections get WAL journaling and foreign keys via a
    pool-connect listener, so it fires once per raw DBAPI connection.
    """
    db_url = to_async_url(url)
    engine = create_async_engine(db_url, echo=echo, pool_pre_ping=True)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragmas(
            dbapi_conn: object,
            _connection_record: object,
        ) -> None:
            cursor = dbapi_conn.cursor()  # type: ignore[attr-defined]
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    logger.debug("event=engine_created dialect=%s", engine.dialect.name)
    return engine
