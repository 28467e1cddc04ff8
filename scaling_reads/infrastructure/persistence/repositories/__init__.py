"""Persistence repositories. Re-exports for dependency injection."""

from scaling_reads.infrastructure.persistence.repositories.album_repo import AlbumRepository

__all__ = ["AlbumRepository"]
