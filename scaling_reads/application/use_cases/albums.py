"""Album operations: read pipeline (replicas) and write pipeline (primary).

AlbumQueryService is built over a repository bound to a read-only context;
AlbumCommandService over one bound to a write-capable context plus its
transaction scope. The write path never touches the cache, so cached reads
may lag a write by up to their TTL.
"""

from __future__ import annotations

import logging

from scaling_reads.application.dtos.album import (
    AlbumCreate,
    AlbumCreationResult,
    AlbumResult,
)
from scaling_reads.application.interfaces.repositories import IAlbumRepository
from scaling_reads.application.interfaces.services import ITransactionScope
from scaling_reads.domain.exceptions import ValidationException

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class AlbumQueryService:
    """Query albums. Safe to run against any context, normally a replica."""

    def __init__(self, album_repo: IAlbumRepository) -> None:
        self.album_repo = album_repo

    async def get_album(self, album_id: int) -> AlbumResult | None:
        """Return the album with its songs, or None when it does not exist."""
        return await self.album_repo.get_by_id(album_id)

    async def list_albums(self, skip: int = 0, limit: int = 20) -> list[AlbumResult]:
        """Return a page of albums ordered by id."""
        if skip < 0:
            raise ValidationException("skip must be >= 0", field="skip")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationException(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )
        return await self.album_repo.list_albums(skip=skip, limit=limit)


class AlbumCommandService:
    """Create albums on the primary inside one scoped transaction."""

    def __init__(self, album_repo: IAlbumRepository, unit_of_work: ITransactionScope) -> None:
        self.album_repo = album_repo
        self.unit_of_work = unit_of_work

    async def create_album(self, data: AlbumCreate) -> AlbumCreationResult:
        """Validate, then add the album and its songs and commit.

        Any failure inside the transaction rolls back everything (album and songs).
        """
        if not data.title.strip():
            raise ValidationException("Album title is required", field="title")
        for index, song in enumerate(data.songs):
            if not song.title.strip():
                raise ValidationException(
                    "Song title is required", field=f"songs[{index}].title"
                )
        async with self.unit_of_work.transaction():
            album = await self.album_repo.create_album(data)
        logger.info("Album created: id=%s songs=%d", album.id, len(album.songs))
        return AlbumCreationResult(id=album.id)
