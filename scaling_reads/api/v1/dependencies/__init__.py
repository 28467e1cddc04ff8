"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for data contexts, album services and the
cache-aside executor. Routes depend only on these, not on infra directly.
"""

from scaling_reads.api.v1.dependencies.album import (
    get_album_command_service,
    get_album_query_service,
)
from scaling_reads.api.v1.dependencies.cache import get_cache_aside
from scaling_reads.api.v1.dependencies.db import get_read_context, get_write_context

__all__ = [
    "get_album_command_service",
    "get_album_query_service",
    "get_cache_aside",
    "get_read_context",
    "get_write_context",
]
