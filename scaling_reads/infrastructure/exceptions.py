"""Infrastructure exceptions for cache and external operations.

Extend ScalingReadsException so presentation can map them consistently,
although cache errors are normally absorbed by the cache-aside layer.
"""

from scaling_reads.domain.exceptions import ScalingReadsException


class CacheException(ScalingReadsException):
    """Base exception for cache operations."""


class CacheUnavailableError(CacheException):
    """Cache backend unreachable (connection refused, timeout, disconnected)."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Cache unavailable during {operation}",
            "CACHE_UNAVAILABLE",
            {"operation": operation, "reason": reason},
        )
