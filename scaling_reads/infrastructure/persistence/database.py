"""Persistence: primary and replica engines, session factories, and Base.

Writes go to the primary (settings.primary_database_url). Reads go to the
replica set (settings.replica_database_url, falling back to the primary when
unset); a multi-host URL lets the driver balance across replicas. The
physical replication between them is external.

Engines and session factories are created lazily on first use (get_read_context /
get_write_context) so import does not trigger Settings validation.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from scaling_reads.core.config import Settings, get_settings
from scaling_reads.domain.exceptions import SqlNotConfiguredException
from scaling_reads.infrastructure.persistence.data_context import (
    ReadOnlyDataContext,
    WriteDataContext,
)

logger = logging.getLogger(__name__)

# Set by _ensure_engines() on first use; avoids get_settings() at import time.
primary_engine: AsyncEngine | None = None
replica_engine: AsyncEngine | None = None
PrimarySessionLocal: async_sessionmaker[AsyncSession] | None = None
ReplicaSessionLocal: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def _is_postgres(url: str) -> bool:
    return url.startswith("postgresql")


def create_engine_for(url: str, settings: Settings, *, read_only: bool = False) -> AsyncEngine:
    """Create an async engine for url with pool/driver options from settings.

    Pool sizing and connect_args apply to PostgreSQL only. Read-only engines
    run every transaction as READ ONLY on PostgreSQL.
    """
    kwargs: dict[str, Any] = {"echo": settings.database_echo}
    if _is_postgres(url):
        kwargs.update(
            pool_pre_ping=True,
            pool_size=settings.db_pool_size if settings.db_pool_size is not None else 20,
            max_overflow=(
                settings.db_max_overflow if settings.db_max_overflow is not None else 30
            ),
            pool_recycle=3600,
            connect_args={
                "command_timeout": (
                    settings.db_command_timeout
                    if settings.db_command_timeout is not None
                    else 60
                ),
            },
        )
    engine = create_async_engine(url, **kwargs)
    if read_only and _is_postgres(url):
        engine = engine.execution_options(postgresql_readonly=True)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory shared by both roles; capability comes from the context type."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


def _ensure_engines() -> None:
    """Create both engines and session factories on first use."""
    global primary_engine, replica_engine, PrimarySessionLocal, ReplicaSessionLocal
    if PrimarySessionLocal is not None and ReplicaSessionLocal is not None:
        return
    settings = get_settings()
    primary_engine = create_engine_for(settings.primary_database_url, settings)
    replica_engine = create_engine_for(
        settings.effective_replica_url, settings, read_only=True
    )
    PrimarySessionLocal = create_session_factory(primary_engine)
    ReplicaSessionLocal = create_session_factory(replica_engine)
    if not settings.replica_database_url:
        logger.warning("REPLICA_DATABASE_URL not set; reads are served by the primary")


def get_engines() -> tuple[AsyncEngine, AsyncEngine]:
    """Return (primary, replica) engines, creating them if needed."""
    _ensure_engines()
    if primary_engine is None or replica_engine is None:
        raise SqlNotConfiguredException()
    return primary_engine, replica_engine


async def create_schema() -> None:
    """Create all tables on the primary (development only; replicas follow via replication)."""
    from scaling_reads.infrastructure.persistence import models  # noqa: F401  (registers tables)

    engine, _ = get_engines()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema created on primary")


async def dispose_engines() -> None:
    """Dispose both engines (shutdown). Safe to call when never created."""
    global primary_engine, replica_engine, PrimarySessionLocal, ReplicaSessionLocal
    for engine in (primary_engine, replica_engine):
        if engine is not None:
            await engine.dispose()
    primary_engine = replica_engine = None
    PrimarySessionLocal = ReplicaSessionLocal = None


async def get_read_context() -> AsyncIterator[ReadOnlyDataContext]:
    """Read-only data context dependency (replica pool).

    Yields a ReadOnlyDataContext and closes its session on exit. Any mutation
    attempted through it raises ReadOnlyContextError.
    """
    _ensure_engines()
    if ReplicaSessionLocal is None:
        raise SqlNotConfiguredException()
    async with ReplicaSessionLocal() as session:
        yield ReadOnlyDataContext(session)


async def get_write_context() -> AsyncIterator[WriteDataContext]:
    """Write-capable data context dependency (primary).

    Does not begin a transaction; callers scope one with context.transaction().
    Uncommitted work is rolled back when the session closes.
    """
    _ensure_engines()
    if PrimarySessionLocal is None:
        raise SqlNotConfiguredException()
    async with PrimarySessionLocal() as session:
        yield WriteDataContext(session)
