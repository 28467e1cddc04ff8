"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure (cache client, cache-aside
executor, schema creation, telemetry, engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from scaling_reads.core.config import Settings, get_settings
from scaling_reads.infrastructure.cache import (
    CacheAside,
    CacheProtocol,
    CacheService,
    InMemoryCache,
)

logger = logging.getLogger(__name__)


async def build_cache(settings: Settings) -> CacheProtocol | None:
    """Create the cache client selected by settings.cache_backend.

    A Redis server that cannot be reached leaves the client unavailable;
    reads then go straight to the replicas.
    """
    if settings.cache_backend == "redis":
        cache = CacheService(settings=settings)
        await cache.connect()
        return cache
    if settings.cache_backend == "memory":
        logger.info("Using in-process memory cache")
        return InMemoryCache()
    logger.info("Caching disabled (cache_backend=none)")
    return None


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: cache client and cache-aside executor, schema (if
    enabled), telemetry (if enabled). Shutdown order: cache disconnect,
    telemetry shutdown, engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    cache = await build_cache(settings)
    app.state.cache = cache
    app.state.cache_aside = CacheAside(cache, default_ttl=settings.cache_default_ttl)

    if settings.create_schema_on_startup:
        from scaling_reads.infrastructure.persistence.database import create_schema

        await create_schema()

    if settings.telemetry_enabled:
        from scaling_reads.infrastructure.persistence.database import get_engines
        from scaling_reads.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_sqlalchemy(*get_engines())
        if isinstance(cache, CacheService):
            telemetry.instrument_redis()
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    if isinstance(app.state.cache, CacheService):
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")
    app.state.cache = None
    app.state.cache_aside = None

    from scaling_reads.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    from scaling_reads.infrastructure.persistence.database import dispose_engines

    await dispose_engines()
    logger.info("Database engines disposed")
