"""Cache key builder for cache-aside reads. Single place for key format (DRY).

Key format: endpoint:<operation name>:<sha256 hex of canonical JSON arguments>.
Arguments are serialized with sorted keys so their order never changes the
key. Injected/service arguments are excluded before hashing. When a
signature carries no argument descriptor, the key degrades to
endpoint:<operation name> (one shared entry per route).
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic_core import to_jsonable_python

from scaling_reads.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_ENDPOINT


@dataclass(frozen=True)
class OperationSignature:
    """Identity of a read operation: stable name plus result-affecting arguments.

    Attributes:
        name: Stable operation name, usually the request path (e.g. /api/v1/albums/7).
        arguments: Argument name -> value, or None when the operation's
            parameters cannot be described (coarse per-route key).
        excluded: Argument names that are environment, not input
            (injected handles, services); never part of the key.
    """

    name: str
    arguments: Mapping[str, Any] | None = None
    excluded: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_resolved(self) -> bool:
        return self.arguments is not None

    def included_arguments(self) -> dict[str, Any]:
        """Return arguments that affect the result (excluded names removed)."""
        if self.arguments is None:
            return {}
        return {k: v for k, v in self.arguments.items() if k not in self.excluded}


def canonical_json(data: Mapping[str, Any]) -> str:
    """Canonical JSON for deterministic hashing.

    Pydantic models, dataclasses, datetimes, enums and UUIDs are converted
    to their JSON form first.

    Raises:
        pydantic_core.PydanticSerializationError: An argument cannot be serialized.
    """
    return json.dumps(
        data,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=to_jsonable_python,
    )


def arguments_digest(arguments: Mapping[str, Any]) -> str:
    """SHA-256 of the canonical JSON form of arguments, lowercase hex."""
    return hashlib.sha256(canonical_json(arguments).encode("utf-8")).hexdigest()


def build_cache_key(
    signature: OperationSignature,
    prefix: str = CACHE_PREFIX_ENDPOINT,
) -> str:
    """Build the cache key for an operation signature.

    Args:
        signature: Operation name and arguments.
        prefix: Key namespace; must not contain CACHE_KEY_SEP.

    Returns:
        prefix:name:digest, or prefix:name when the signature is unresolved.

    Raises:
        ValueError: If prefix contains the separator or name is empty.
    """
    if CACHE_KEY_SEP in prefix:
        raise ValueError(
            f"Cache key prefix {prefix!r} must not contain separator {CACHE_KEY_SEP!r}"
        )
    if not signature.name:
        raise ValueError("Operation name is required to build a cache key")
    base = f"{prefix}{CACHE_KEY_SEP}{signature.name}"
    if not signature.is_resolved:
        return base
    return f"{base}{CACHE_KEY_SEP}{arguments_digest(signature.included_arguments())}"
