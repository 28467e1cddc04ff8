"""Cache-aside execution for read operations.

Per call: LOOKUP -> HIT returns the cached value; MISS runs the operation
once, stores a non-None result with the TTL, and returns it. The cache is
fail-open: lookup and store errors are logged and treated as miss / no-op,
while errors from the operation itself propagate unchanged and are never
cached.

No locking: concurrent misses on one key may both execute and both store
(last write wins). There is no invalidation; cached reads may be stale for
up to the TTL after a write.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic_core import to_jsonable_python

from scaling_reads.core.constants import CACHE_PREFIX_ENDPOINT, DEFAULT_CACHE_TTL_SECONDS
from scaling_reads.infrastructure.cache.cache_protocol import CacheProtocol
from scaling_reads.infrastructure.cache.keys import OperationSignature, build_cache_key
from scaling_reads.shared.telemetry.tracing import add_span_event

logger = logging.getLogger(__name__)


class CacheOutcome(str, Enum):
    """What happened to the cache during one cache-aside call."""

    HIT = "hit"
    MISS = "miss"
    LOOKUP_ERROR = "lookup_error"
    STORED = "stored"
    NOT_STORED = "not_stored"
    STORE_ERROR = "store_error"
    BYPASS = "bypass"


@dataclass(frozen=True)
class CacheEvent:
    """Observability record emitted for each cache step."""

    key: str
    outcome: CacheOutcome
    ttl: int | None = None
    error: Exception | None = None


CacheEventHook = Callable[[CacheEvent], None]


def trace_cache_event(event: CacheEvent) -> None:
    """Record the cache step as an event on the current span."""
    attributes: dict[str, Any] = {"cache.key": event.key}
    if event.ttl is not None:
        attributes["cache.ttl"] = event.ttl
    if event.error is not None:
        attributes["cache.error"] = type(event.error).__name__
    add_span_event(f"cache.{event.outcome.value}", attributes)


def validate_ttl(ttl: int) -> int:
    """Return ttl if it is a positive integer number of seconds.

    Raises:
        ValueError: ttl is not a positive int.
    """
    if isinstance(ttl, bool) or not isinstance(ttl, int) or ttl <= 0:
        raise ValueError(f"Cache TTL must be a positive integer of seconds, got {ttl!r}")
    return ttl


def serialize_result(value: Any) -> str:
    """Serialize an operation result to the JSON text stored in the cache."""
    return json.dumps(to_jsonable_python(value), separators=(",", ":"), ensure_ascii=False)


class CacheAside:
    """Wraps read operations with a cache-aside lookup.

    The cache client is passed in explicitly; None (or an unavailable
    client) makes every call go straight to the operation.
    """

    def __init__(
        self,
        cache: CacheProtocol | None,
        *,
        default_ttl: int = DEFAULT_CACHE_TTL_SECONDS,
        key_prefix: str = CACHE_PREFIX_ENDPOINT,
        hooks: Sequence[CacheEventHook] = (trace_cache_event,),
    ) -> None:
        """Initialize the cache-aside executor.

        Args:
            cache: Cache backend (Redis, in-memory) or None to disable caching.
            default_ttl: TTL in seconds when the caller does not override it.
            key_prefix: Namespace of built keys (default 'endpoint').
            hooks: Callables notified of every cache step (hit, miss, errors).
        """
        self.cache = cache
        self.default_ttl = validate_ttl(default_ttl)
        self.key_prefix = key_prefix
        self.hooks = tuple(hooks)

    def _emit(self, event: CacheEvent) -> None:
        """Run every hook; a failing hook is logged and never reaches the caller."""
        for hook in self.hooks:
            try:
                hook(event)
            except Exception:
                logger.warning(
                    "Cache event hook %r failed for key %s (%s)",
                    hook,
                    event.key,
                    event.outcome.value,
                    exc_info=True,
                )

    def build_key(self, signature: OperationSignature) -> str:
        return build_cache_key(signature, prefix=self.key_prefix)

    async def get_or_execute(
        self,
        signature: OperationSignature,
        operation: Callable[[], Awaitable[Any]],
        *,
        ttl: int | None = None,
    ) -> Any:
        """Return the cached result for signature, or run operation and cache it.

        Args:
            signature: Identity of the read (name + result-affecting arguments).
            operation: Zero-argument coroutine factory running the real read.
            ttl: Per-operation TTL override in seconds.

        Returns:
            The deserialized cached value on hit, the fresh result on miss.
        """
        effective_ttl = self.default_ttl if ttl is None else validate_ttl(ttl)
        key = self.build_key(signature)

        if self.cache is None or not self.cache.is_available():
            self._emit(CacheEvent(key, CacheOutcome.BYPASS))
            return await operation()

        hit, cached = await self._lookup(self.cache, key)
        if hit:
            return cached

        result = await operation()
        await self._store(self.cache, key, result, effective_ttl)
        return result

    async def _lookup(self, cache: CacheProtocol, key: str) -> tuple[bool, Any]:
        """Return (True, value) on hit; (False, None) on miss or any cache error."""
        try:
            raw = await cache.get(key)
        except Exception as e:
            logger.warning("Cache lookup failed for key %s; treating as miss: %s", key, e)
            self._emit(CacheEvent(key, CacheOutcome.LOOKUP_ERROR, error=e))
            return False, None
        if raw is None:
            self._emit(CacheEvent(key, CacheOutcome.MISS))
            return False, None
        try:
            value = json.loads(raw)
        except ValueError as e:
            logger.warning("Cached payload for key %s is not valid JSON; treating as miss", key)
            self._emit(CacheEvent(key, CacheOutcome.LOOKUP_ERROR, error=e))
            return False, None
        self._emit(CacheEvent(key, CacheOutcome.HIT))
        return True, value

    async def _store(self, cache: CacheProtocol, key: str, result: Any, ttl: int) -> None:
        """Store result under key; failures are logged and ignored."""
        if result is None:
            self._emit(CacheEvent(key, CacheOutcome.NOT_STORED, ttl=ttl))
            return
        try:
            stored = await cache.set(key, serialize_result(result), ttl)
        except Exception as e:
            logger.warning("Cache store failed for key %s; result not cached: %s", key, e)
            self._emit(CacheEvent(key, CacheOutcome.STORE_ERROR, ttl=ttl, error=e))
            return
        if not stored:
            logger.warning("Cache store rejected for key %s; result not cached", key)
            self._emit(CacheEvent(key, CacheOutcome.STORE_ERROR, ttl=ttl))
            return
        self._emit(CacheEvent(key, CacheOutcome.STORED, ttl=ttl))
