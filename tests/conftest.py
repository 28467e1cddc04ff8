"""Pytest configuration and fixtures for scaling-reads.

HTTP tests use scaling_reads.main:app with the data contexts bound to an
in-memory SQLite database (aiosqlite) and the cache-aside executor bound to
an InMemoryCache driven by a fake clock, so TTL expiry is deterministic.
"""

import os

# Settings are read when scaling_reads.main is imported; set env first.
os.environ["PRIMARY_DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["CACHE_BACKEND"] = "memory"
os.environ["TELEMETRY_ENABLED"] = "false"

from collections.abc import AsyncIterator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from scaling_reads.api.v1.dependencies import (  # noqa: E402
    get_cache_aside,
    get_read_context,
    get_write_context,
)
from scaling_reads.infrastructure.cache import CacheAside, InMemoryCache  # noqa: E402
from scaling_reads.infrastructure.persistence import models  # noqa: E402,F401
from scaling_reads.infrastructure.persistence.data_context import (  # noqa: E402
    ReadOnlyDataContext,
    WriteDataContext,
)
from scaling_reads.infrastructure.persistence.database import (  # noqa: E402
    Base,
    create_session_factory,
)
from scaling_reads.main import app  # noqa: E402


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_cache(clock: FakeClock) -> InMemoryCache:
    return InMemoryCache(clock=clock)


@pytest.fixture
def cache_aside_executor(memory_cache: InMemoryCache) -> CacheAside:
    """Cache-aside executor over the fake-clock memory cache (no tracing hooks)."""
    return CacheAside(memory_cache, hooks=())


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite engine with the schema created. One connection shared (StaticPool)."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def query_log(engine: AsyncEngine) -> list[str]:
    """SQL statements executed against the engine, in order."""
    statements: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany) -> None:
        statements.append(statement)

    event.listen(engine.sync_engine, "before_cursor_execute", _record)
    return statements


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
async def read_context(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[ReadOnlyDataContext]:
    async with session_factory() as session:
        yield ReadOnlyDataContext(session)


@pytest.fixture
async def write_context(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[WriteDataContext]:
    async with session_factory() as session:
        yield WriteDataContext(session)


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    cache_aside_executor: CacheAside,
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI) with test data contexts and cache."""

    async def _read_context() -> AsyncIterator[ReadOnlyDataContext]:
        async with session_factory() as session:
            yield ReadOnlyDataContext(session)

    async def _write_context() -> AsyncIterator[WriteDataContext]:
        async with session_factory() as session:
            yield WriteDataContext(session)

    app.dependency_overrides[get_read_context] = _read_context
    app.dependency_overrides[get_write_context] = _write_context
    app.dependency_overrides[get_cache_aside] = lambda: cache_aside_executor
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
