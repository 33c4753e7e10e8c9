# =============================================================================
# lib/database.py - Async SQLAlchemy Engine Wrapper
# =============================================================================
# This module owns the connection pool and the session factory.
#
# Three backends are supported through SQLAlchemy's asyncio extension:
# - SQLite      (sqlite+aiosqlite://)
# - PostgreSQL  (postgresql+asyncpg://)
# - MySQL       (mysql+aiomysql://)
#
# Usage:
#   from lib.database import Database
#
#   database = Database("sqlite+aiosqlite:///./conduit.db")
#   await database.create_all()
#   async with database.session() as session:
#       ...
# =============================================================================

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from lib.entities import Base

logger = logging.getLogger(__name__)


# Sync driver names -> async driver used by the engine
ASYNC_DRIVERS = {
    "sqlite": "sqlite+aiosqlite",
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "postgresql+psycopg2": "postgresql+asyncpg",
    "mysql": "mysql+aiomysql",
    "mysql+pymysql": "mysql+aiomysql",
    "mariadb": "mysql+aiomysql",
}


def normalize_database_url(url: str) -> str:
    """
    Upgrade a plain database URL to its async driver.

    URLs that already name an async driver are returned unchanged.

    Example:
        normalize_database_url("postgres://u:p@db/conduit")
        # -> "postgresql+asyncpg://u:p@db/conduit"
    """
    scheme, separator, rest = url.partition("://")
    if not separator:
        raise ValueError(f"Invalid database URL: {url!r}")
    return f"{ASYNC_DRIVERS.get(scheme.lower(), scheme)}://{rest}"


def _is_memory_sqlite(url: str) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database in (None, "", ":memory:")


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Engine and session factory for one configured backend.

    One instance is created per application and stored on app.state.
    The pool itself is managed by SQLAlchemy and the driver.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = normalize_database_url(url)
        self.backend = make_url(self.url).get_backend_name()

        engine_kwargs: dict = {"echo": echo}
        if self.backend == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            # An in-memory database only exists on its single connection
            if _is_memory_sqlite(self.url):
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)
        if self.backend == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Create every table that does not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Database schema ready ({self.backend})")

    async def drop_all(self) -> None:
        """Drop every table."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session that commits on success and rolls back on error.

        Each HTTP request gets exactly one of these, so the writes a
        handler performs form a single transaction.
        """
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def ping(self) -> bool:
        """Run SELECT 1 against the backend."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
