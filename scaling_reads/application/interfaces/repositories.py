"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from scaling_reads.application.dtos.album import AlbumCreate, AlbumResult


class IAlbumRepository(Protocol):
    """Protocol for album repository (DIP).

    Query methods work over read-only and write-capable contexts alike;
    create_album requires a write-capable one.
    """

    async def get_by_id(self, album_id: int) -> AlbumResult | None:
        """Return album with its songs, or None."""

    async def list_albums(self, skip: int = 0, limit: int = 100) -> list[AlbumResult]:
        """Return albums ordered by id with pagination."""

    async def create_album(self, data: AlbumCreate) -> AlbumResult:
        """Persist a new album and its songs; returns it with the assigned id."""
