"""Cache protocol for the cache-aside layer (DIP).

Values are plain strings; serialization belongs to the caller. set() must be
atomic (value and expiry written together) so an interrupted store never
leaves a half-written entry.
"""

from typing import Protocol


class CacheProtocol(Protocol):
    """Protocol for cache backends (e.g. Redis, in-memory)."""

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str) -> str | None:
        """Return cached string or None when absent or expired.

        May raise when the backend is unreachable; callers treat that as a miss.
        """
        ...

    async def set(self, key: str, value: str, ttl: int) -> bool:
        """Store value with a TTL in seconds. Returns True on success."""
        ...
