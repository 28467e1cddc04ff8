"""In-process cache backend with per-entry expiration.

Used when CACHE_BACKEND=memory (single-process development) and in tests.
The clock is injectable so expiry can be driven deterministically.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_EVERY = 64


class InMemoryCache:
    """Dict-backed cache: key -> (value, absolute expiry on the given clock).

    Expired entries are dropped lazily on read, and every sweep_every writes
    all expired entries are purged so keys that are never read again do not
    accumulate. Not shared across processes.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_every: int = DEFAULT_SWEEP_EVERY,
    ) -> None:
        if sweep_every < 1:
            raise ValueError(f"sweep_every must be at least 1, got {sweep_every}")
        self._clock = clock
        self._sweep_every = sweep_every
        self._writes = 0
        self._entries: dict[str, tuple[str, float]] = {}

    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            logger.debug("Cache EXPIRED: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return value

    async def set(self, key: str, value: str, ttl: int) -> bool:
        self._writes += 1
        if self._writes % self._sweep_every == 0:
            self.sweep()
        self._entries[key] = (value, self._clock() + ttl)
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    def sweep(self) -> int:
        """Drop every expired entry; return how many were removed."""
        now = self._clock()
        expired = [k for k, (_, expires_at) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Cache SWEEP: removed %d expired entries", len(expired))
        return len(expired)

    def __len__(self) -> int:
        """Number of stored entries, including expired ones not yet swept."""
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and self._clock() < entry[1]

    def keys(self) -> list[str]:
        """Return keys of live (unexpired) entries."""
        now = self._clock()
        return [k for k, (_, expires_at) in self._entries.items() if now < expires_at]
