"""Cache-aside dependency: resolves the executor built at startup."""

from __future__ import annotations

import logging

from fastapi import Request

from scaling_reads.infrastructure.cache.cache_aside import CacheAside

logger = logging.getLogger(__name__)


def get_cache_aside(request: Request) -> CacheAside:
    """Return app.state.cache_aside; a pass-through executor when none is configured."""
    cache_aside = getattr(request.app.state, "cache_aside", None)
    if cache_aside is None:
        logger.debug("No cache-aside executor on app state; reads are not cached")
        return CacheAside(cache=None)
    return cache_aside
