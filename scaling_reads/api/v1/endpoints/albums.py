"""Album API: thin routes over the read pipeline (replicas + cache) and the write pipeline (primary)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from scaling_reads.api.v1.caching import cache_aside
from scaling_reads.api.v1.dependencies import (
    get_album_command_service,
    get_album_query_service,
)
from scaling_reads.application.dtos.album import AlbumCreate, SongCreate
from scaling_reads.application.use_cases.albums import (
    MAX_PAGE_SIZE,
    AlbumCommandService,
    AlbumQueryService,
)
from scaling_reads.core.constants import ALBUM_CACHE_TTL_SECONDS
from scaling_reads.schemas.album import (
    AlbumCreateRequest,
    AlbumCreateResponse,
    AlbumResponse,
)

router = APIRouter()


@router.post("", response_model=AlbumCreateResponse)
async def create_album(
    body: AlbumCreateRequest,
    album_svc: Annotated[AlbumCommandService, Depends(get_album_command_service)],
):
    """Create an album and its songs on the primary in one transaction.

    Cached reads are not invalidated; they may return the previous state
    until their TTL lapses.
    """
    created = await album_svc.create_album(
        AlbumCreate(
            title=body.title,
            songs=[SongCreate(title=song.title) for song in body.songs],
        )
    )
    return AlbumCreateResponse(id=created.id)


@router.get("", response_model=list[AlbumResponse])
@cache_aside()
async def list_albums(
    album_svc: Annotated[AlbumQueryService, Depends(get_album_query_service)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = 20,
):
    """List albums ordered by id (replica read, cached with the default TTL)."""
    return await album_svc.list_albums(skip=skip, limit=limit)


@router.get("/{album_id}", response_model=AlbumResponse | None)
@cache_aside(ttl=ALBUM_CACHE_TTL_SECONDS)
async def get_album(
    album_id: int,
    album_svc: Annotated[AlbumQueryService, Depends(get_album_query_service)],
):
    """Get an album with its songs (replica read, cached 120 s).

    Unknown ids return null; that empty result is not cached.
    """
    return await album_svc.get_album(album_id)
