"""
Database Engine and Sessions.

One async engine per process over the SQLite file named in
database.yaml. It is created on first use, so importing this module never
touches the configuration.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from sitekit.backend.core.logging import get_logger

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """SQLite leaves foreign keys unenforced unless every connection asks."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        from sitekit.backend.core.config import get_app_config, get_database_url

        db_config = get_app_config().database
        _engine = create_async_engine(get_database_url(), echo=db_config.echo)
        event.listen(_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        logger.debug("Database engine created", extra={"path": db_config.path})
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), class_=AsyncSession, expire_on_commit=False)
    return _session_factory


async def init_db() -> None:
    """Create missing tables. Existing tables and rows are left alone."""
    from sitekit.backend.models import Base

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready", extra={"tables": len(Base.metadata.tables)})


async def dispose_engine() -> None:
    """Close pooled connections; the next get_engine() starts over."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Request-scoped session: committed when the endpoint returns, rolled
    back when it raises.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
