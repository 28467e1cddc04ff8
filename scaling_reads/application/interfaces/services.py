"""Service interfaces (ports) for the application layer."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol


class ITransactionScope(Protocol):
    """Scoped unit of work: commit on success, roll back on any failure."""

    def transaction(self) -> AbstractAsyncContextManager[Any]:
        """Return an async context manager wrapping one transaction."""
        ...
