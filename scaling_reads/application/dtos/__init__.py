"""Application DTOs (no ORM dependency)."""

from scaling_reads.application.dtos.album import (
    AlbumCreate,
    AlbumCreationResult,
    AlbumResult,
    SongCreate,
    SongResult,
)

__all__ = [
    "AlbumCreate",
    "AlbumCreationResult",
    "AlbumResult",
    "SongCreate",
    "SongResult",
]
