"""DTOs for album use cases (no dependency on ORM)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SongCreate:
    """Song to add with a new album."""

    title: str


@dataclass(frozen=True)
class AlbumCreate:
    """Input for creating an album with its songs (write path)."""

    title: str
    songs: list[SongCreate] = field(default_factory=list)


@dataclass(frozen=True)
class SongResult:
    title: str


@dataclass(frozen=True)
class AlbumResult:
    """Album read-model (result of get_by_id, list_albums, create_album)."""

    id: int
    title: str
    songs: list[SongResult] = field(default_factory=list)


@dataclass(frozen=True)
class AlbumCreationResult:
    """Result of album creation: the id assigned by the primary."""

    id: int
