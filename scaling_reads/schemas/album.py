"""Album API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SongCreateRequest(BaseModel):
    """Song in an album creation request."""

    title: str = Field(..., min_length=1, max_length=255)


class AlbumCreateRequest(BaseModel):
    """Request body for creating an album with its songs."""

    title: str = Field(..., min_length=1, max_length=255, description="Album title")
    songs: list[SongCreateRequest] = Field(
        default_factory=list, description="Songs in track order"
    )


class AlbumCreateResponse(BaseModel):
    """Response after album creation."""

    id: int


class SongResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str


class AlbumResponse(BaseModel):
    """Album with its songs (read path; may be served from cache)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    songs: list[SongResponse] = Field(default_factory=list)
