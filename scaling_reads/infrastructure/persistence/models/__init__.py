"""Persistence models: ORM entities."""

from scaling_reads.infrastructure.persistence.models.album import Album, Song

__all__ = ["Album", "Song"]
