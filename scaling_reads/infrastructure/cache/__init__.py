"""Cache: cache-aside executor, key builder, and cache backends.

CacheAside is composed with read operations; backends implement
CacheProtocol (Redis via CacheService, InMemoryCache for dev/tests).
"""

from scaling_reads.infrastructure.cache.cache_aside import (
    CacheAside,
    CacheEvent,
    CacheEventHook,
    CacheOutcome,
    trace_cache_event,
)
from scaling_reads.infrastructure.cache.cache_protocol import CacheProtocol
from scaling_reads.infrastructure.cache.keys import OperationSignature, build_cache_key
from scaling_reads.infrastructure.cache.memory_cache import InMemoryCache
from scaling_reads.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheAside",
    "CacheEvent",
    "CacheEventHook",
    "CacheOutcome",
    "CacheProtocol",
    "CacheService",
    "InMemoryCache",
    "OperationSignature",
    "build_cache_key",
    "trace_cache_event",
]
