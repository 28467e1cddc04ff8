"""Album repository over a DataContext. Returns application DTOs.

Queries run through whatever context is supplied (read-only replica or
write-capable primary); create_album needs a write-capable context and
fails with ReadOnlyContextError otherwise.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from scaling_reads.application.dtos.album import AlbumCreate, AlbumResult, SongResult
from scaling_reads.infrastructure.persistence.data_context import DataContext
from scaling_reads.infrastructure.persistence.models.album import Album, Song


def _album_to_result(album: Album) -> AlbumResult:
    """Map ORM Album (songs loaded) to application AlbumResult."""
    return AlbumResult(
        id=album.id,
        title=album.title,
        songs=[SongResult(title=s.title) for s in album.songs],
    )


class AlbumRepository:
    """Album repository. Songs are always loaded eagerly (selectinload)."""

    def __init__(self, context: DataContext) -> None:
        self.context = context

    async def get_by_id(self, album_id: int) -> AlbumResult | None:
        stmt = (
            select(Album)
            .options(selectinload(Album.songs))
            .where(Album.id == album_id)
        )
        album = await self.context.scalar(stmt)
        return _album_to_result(album) if album else None

    async def list_albums(self, skip: int = 0, limit: int = 100) -> list[AlbumResult]:
        stmt = (
            select(Album)
            .options(selectinload(Album.songs))
            .order_by(Album.id)
            .offset(skip)
            .limit(limit)
        )
        albums = await self.context.scalars(stmt)
        return [_album_to_result(a) for a in albums]

    async def create_album(self, data: AlbumCreate) -> AlbumResult:
        """Add album and songs, flush to obtain the id. Caller owns the transaction."""
        album = Album(
            title=data.title,
            songs=[
                Song(title=song.title, position=index)
                for index, song in enumerate(data.songs)
            ],
        )
        self.context.add(album)
        await self.context.flush()
        return _album_to_result(album)
