"""Album service dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from scaling_reads.application.use_cases.albums import (
    AlbumCommandService,
    AlbumQueryService,
)
from scaling_reads.infrastructure.persistence.data_context import (
    ReadOnlyDataContext,
    WriteDataContext,
)
from scaling_reads.infrastructure.persistence.repositories import AlbumRepository

from .db import get_read_context, get_write_context


async def get_album_query_service(
    context: Annotated[ReadOnlyDataContext, Depends(get_read_context)],
) -> AlbumQueryService:
    """Album queries over the replica pool (read-only handle)."""
    return AlbumQueryService(AlbumRepository(context))


async def get_album_command_service(
    context: Annotated[WriteDataContext, Depends(get_write_context)],
) -> AlbumCommandService:
    """Album writes on the primary; the context is also the transaction scope."""
    return AlbumCommandService(AlbumRepository(context), unit_of_work=context)
