"""Pydantic request/response schemas for the API."""

from scaling_reads.schemas.album import (
    AlbumCreateRequest,
    AlbumCreateResponse,
    AlbumResponse,
    SongCreateRequest,
    SongResponse,
)
from scaling_reads.schemas.health import HealthResponse, ReadinessResponse

__all__ = [
    "AlbumCreateRequest",
    "AlbumCreateResponse",
    "AlbumResponse",
    "HealthResponse",
    "ReadinessResponse",
    "SongCreateRequest",
    "SongResponse",
]
