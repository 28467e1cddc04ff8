"""Application use cases: one entry point per workflow."""

from scaling_reads.application.use_cases.albums import (
    AlbumCommandService,
    AlbumQueryService,
)

__all__ = [
    "AlbumCommandService",
    "AlbumQueryService",
]
