"""AlbumQueryService / AlbumCommandService unit tests with mocked repository and transaction scope."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from scaling_reads.application.dtos.album import (
    AlbumCreate,
    AlbumCreationResult,
    AlbumResult,
    SongCreate,
    SongResult,
)
from scaling_reads.application.use_cases.albums import (
    MAX_PAGE_SIZE,
    AlbumCommandService,
    AlbumQueryService,
)
from scaling_reads.domain.exceptions import ValidationException

ALBUM = AlbumResult(id=7, title="Abbey Road", songs=[SongResult(title="Something")])


class _RecordingScope:
    """Transaction scope that records enter/exit and whether it saw an error."""

    def __init__(self) -> None:
        self.entered = 0
        self.failed = False

    @asynccontextmanager
    async def transaction(self):
        self.entered += 1
        try:
            yield self
        except Exception:
            self.failed = True
            raise


@pytest.fixture
def album_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=ALBUM)
    repo.list_albums = AsyncMock(return_value=[ALBUM])
    repo.create_album = AsyncMock(return_value=ALBUM)
    return repo


class TestAlbumQueryService:
    async def test_get_album(self, album_repo: MagicMock) -> None:
        svc = AlbumQueryService(album_repo)
        assert await svc.get_album(7) == ALBUM
        album_repo.get_by_id.assert_awaited_once_with(7)

    async def test_get_album_unknown_returns_none(self, album_repo: MagicMock) -> None:
        album_repo.get_by_id.return_value = None
        assert await AlbumQueryService(album_repo).get_album(999) is None

    async def test_list_albums(self, album_repo: MagicMock) -> None:
        svc = AlbumQueryService(album_repo)
        assert await svc.list_albums(skip=10, limit=5) == [ALBUM]
        album_repo.list_albums.assert_awaited_once_with(skip=10, limit=5)

    @pytest.mark.parametrize(
        "skip,limit,field",
        [(-1, 10, "skip"), (0, 0, "limit"), (0, MAX_PAGE_SIZE + 1, "limit")],
    )
    async def test_list_albums_rejects_bad_paging(
        self, album_repo: MagicMock, skip: int, limit: int, field: str
    ) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await AlbumQueryService(album_repo).list_albums(skip=skip, limit=limit)
        assert exc_info.value.details == {"field": field}
        album_repo.list_albums.assert_not_awaited()


class TestAlbumCommandService:
    async def test_create_album_runs_in_transaction(self, album_repo: MagicMock) -> None:
        scope = _RecordingScope()
        data = AlbumCreate(title="Abbey Road", songs=[SongCreate(title="Something")])

        result = await AlbumCommandService(album_repo, scope).create_album(data)

        assert result == AlbumCreationResult(id=7)
        assert scope.entered == 1
        assert scope.failed is False
        album_repo.create_album.assert_awaited_once_with(data)

    async def test_repository_failure_rolls_back(self, album_repo: MagicMock) -> None:
        album_repo.create_album.side_effect = RuntimeError("primary down")
        scope = _RecordingScope()

        with pytest.raises(RuntimeError, match="primary down"):
            await AlbumCommandService(album_repo, scope).create_album(AlbumCreate(title="X"))
        assert scope.failed is True

    async def test_blank_title_rejected_before_transaction(self, album_repo: MagicMock) -> None:
        scope = _RecordingScope()

        with pytest.raises(ValidationException) as exc_info:
            await AlbumCommandService(album_repo, scope).create_album(AlbumCreate(title="  "))

        assert exc_info.value.details == {"field": "title"}
        assert scope.entered == 0

    async def test_blank_song_title_rejected(self, album_repo: MagicMock) -> None:
        data = AlbumCreate(
            title="Abbey Road",
            songs=[SongCreate(title="Something"), SongCreate(title="")],
        )

        with pytest.raises(ValidationException) as exc_info:
            await AlbumCommandService(album_repo, _RecordingScope()).create_album(data)

        assert exc_info.value.details == {"field": "songs[1].title"}
        album_repo.create_album.assert_not_awaited()
