"""Data contexts: capability-scoped handles over an AsyncSession.

Both contexts share one query surface (execute, scalar, scalars, get), so
read logic is written once against DataContext. They differ in the
mutation surface:

- WriteDataContext is bound to the primary and allows add/delete/flush/
  commit inside a scoped transaction().
- ReadOnlyDataContext is bound to the replica pool; every mutation method
  raises ReadOnlyContextError immediately, only SELECT statements may be
  executed, and the underlying session refuses to flush or commit.

One context per request; never shared between concurrent requests.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import Result
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from scaling_reads.domain.exceptions import ReadOnlyContextError

logger = logging.getLogger(__name__)


class DataContext(ABC):
    """Query surface shared by read-only and write-capable contexts."""

    read_only: bool

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def execute(self, statement: Any, params: dict[str, Any] | None = None) -> Result[Any]:
        """Execute a statement and return the buffered result."""
        return await self._session.execute(statement, params)

    async def scalar(self, statement: Any, params: dict[str, Any] | None = None) -> Any:
        """Return the first column of the first row, or None."""
        result = await self.execute(statement, params)
        return result.scalar_one_or_none()

    async def scalars(self, statement: Any, params: dict[str, Any] | None = None) -> list[Any]:
        """Return all first-column values as a list."""
        result = await self.execute(statement, params)
        return list(result.scalars().all())

    async def get(self, model: type[Any], ident: Any, **kwargs: Any) -> Any:
        """Return an entity by primary key, or None."""
        return await self._session.get(model, ident, **kwargs)

    async def close(self) -> None:
        await self._session.close()

    # Mutation surface

    @abstractmethod
    def add(self, obj: Any) -> None: ...

    @abstractmethod
    def add_all(self, objs: Iterable[Any]) -> None: ...

    @abstractmethod
    async def delete(self, obj: Any) -> None: ...

    @abstractmethod
    async def flush(self) -> None: ...

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...

    @abstractmethod
    def transaction(self) -> Any:
        """Async context manager: commit on success, roll back on any failure."""


class WriteDataContext(DataContext):
    """Write-capable context bound to the primary store."""

    read_only = False

    def add(self, obj: Any) -> None:
        self._session.add(obj)

    def add_all(self, objs: Iterable[Any]) -> None:
        self._session.add_all(objs)

    async def delete(self, obj: Any) -> None:
        await self._session.delete(obj)

    async def flush(self) -> None:
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[WriteDataContext]:
        """Scoped transaction: begin, yield, then commit or roll back.

        Rolls back on any exception, including cancellation of the request.
        """
        async with self._session.begin():
            yield self


def _reject_flush(session: Session, flush_context: Any, instances: Any) -> None:
    """before_flush listener installed on read-only sessions."""
    logger.error("Flush attempted on a read-only session")
    raise ReadOnlyContextError("flush")


def _reject_commit(session: Session) -> None:
    """before_commit listener installed on read-only sessions."""
    logger.error("Commit attempted on a read-only session")
    raise ReadOnlyContextError("commit")


class ReadOnlyDataContext(DataContext):
    """Read-only context bound to the replica pool.

    Mutation methods exist for polymorphic uniformity and fail the instant
    they are called. Loaded entities are detached from the session after
    each query (no identity-map tracking is kept for them).
    """

    read_only = True

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        event.listen(session.sync_session, "before_flush", _reject_flush)
        event.listen(session.sync_session, "before_commit", _reject_commit)

    def _violation(self, operation: str) -> ReadOnlyContextError:
        logger.error("Mutation '%s' attempted on a read-only data context", operation)
        return ReadOnlyContextError(operation)

    async def execute(self, statement: Any, params: dict[str, Any] | None = None) -> Result[Any]:
        """Run a SELECT; any other statement (DML, DDL, textual SQL) is rejected.

        Results are buffered, so ORM rows are detached before being returned.
        """
        if not getattr(statement, "is_select", False):
            raise self._violation("execute")
        result = await super().execute(statement, params)
        self._session.expunge_all()
        return result

    async def scalar(self, statement: Any, params: dict[str, Any] | None = None) -> Any:
        value = await super().scalar(statement, params)
        self._session.expunge_all()
        return value

    async def scalars(self, statement: Any, params: dict[str, Any] | None = None) -> list[Any]:
        values = await super().scalars(statement, params)
        self._session.expunge_all()
        return values

    async def get(self, model: type[Any], ident: Any, **kwargs: Any) -> Any:
        value = await super().get(model, ident, **kwargs)
        self._session.expunge_all()
        return value

    def add(self, obj: Any) -> None:
        raise self._violation("add")

    def add_all(self, objs: Iterable[Any]) -> None:
        raise self._violation("add_all")

    async def delete(self, obj: Any) -> None:
        raise self._violation("delete")

    async def flush(self) -> None:
        raise self._violation("flush")

    async def commit(self) -> None:
        raise self._violation("commit")

    async def rollback(self) -> None:
        raise self._violation("rollback")

    def transaction(self) -> Any:
        raise self._violation("transaction")
