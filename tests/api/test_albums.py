"""Album endpoints end to end: write on the primary, cached reads from the replica context."""

import re

from httpx import AsyncClient

from scaling_reads.infrastructure.cache import InMemoryCache

ABBEY_ROAD = {
    "title": "Abbey Road",
    "songs": [{"title": "Come Together"}, {"title": "Something"}],
}


async def _create(client: AsyncClient, body: dict = ABBEY_ROAD) -> int:
    response = await client.post("/api/v1/albums", json=body)
    assert response.status_code == 200
    return response.json()["id"]


async def test_create_returns_id(client: AsyncClient) -> None:
    response = await client.post("/api/v1/albums", json=ABBEY_ROAD)
    assert response.status_code == 200
    assert response.json() == {"id": 1}


async def test_create_then_get(client: AsyncClient) -> None:
    album_id = await _create(client)

    response = await client.get(f"/api/v1/albums/{album_id}")

    assert response.status_code == 200
    assert response.json() == {
        "id": album_id,
        "title": "Abbey Road",
        "songs": [{"title": "Come Together"}, {"title": "Something"}],
    }


async def test_get_is_cached_under_route_and_argument_digest(
    client: AsyncClient, memory_cache: InMemoryCache
) -> None:
    album_id = await _create(client)

    await client.get(f"/api/v1/albums/{album_id}")

    keys = memory_cache.keys()
    assert len(keys) == 1
    assert re.fullmatch(rf"endpoint:/api/v1/albums/{album_id}:[0-9a-f]{{64}}", keys[0])


async def test_second_get_within_ttl_does_not_query(
    client: AsyncClient, query_log: list[str], clock
) -> None:
    album_id = await _create(client)

    first = await client.get(f"/api/v1/albums/{album_id}")
    queries_after_first = len(query_log)
    clock.advance(60)
    second = await client.get(f"/api/v1/albums/{album_id}")

    assert len(query_log) == queries_after_first
    assert second.json() == first.json()


async def test_get_album_expires_after_120_seconds(
    client: AsyncClient, query_log: list[str], clock
) -> None:
    album_id = await _create(client)
    await client.get(f"/api/v1/albums/{album_id}")
    queries_after_first = len(query_log)

    clock.advance(119)
    await client.get(f"/api/v1/albums/{album_id}")
    assert len(query_log) == queries_after_first

    clock.advance(2)
    response = await client.get(f"/api/v1/albums/{album_id}")
    assert len(query_log) > queries_after_first
    assert response.json()["title"] == "Abbey Road"


async def test_unknown_album_returns_null_and_is_not_cached(
    client: AsyncClient, memory_cache: InMemoryCache
) -> None:
    response = await client.get("/api/v1/albums/999")

    assert response.status_code == 200
    assert response.json() is None
    assert memory_cache.keys() == []


async def test_album_created_after_empty_lookup_is_found(client: AsyncClient) -> None:
    """An empty result is not cached, so a later create is visible immediately."""
    assert (await client.get("/api/v1/albums/1")).json() is None

    album_id = await _create(client)

    assert (await client.get(f"/api/v1/albums/{album_id}")).json()["title"] == "Abbey Road"


async def test_list_is_stale_until_ttl_lapses(client: AsyncClient, clock) -> None:
    """Writes do not invalidate cached reads; the list catches up after 60 s."""
    assert (await client.get("/api/v1/albums")).json() == []

    album_id = await _create(client)
    assert (await client.get("/api/v1/albums")).json() == []

    clock.advance(61)
    albums = (await client.get("/api/v1/albums")).json()
    assert [a["id"] for a in albums] == [album_id]


async def test_list_paging_uses_distinct_keys(
    client: AsyncClient, memory_cache: InMemoryCache
) -> None:
    first = await _create(client, {"title": "Please Please Me", "songs": []})
    second = await _create(client, {"title": "With the Beatles", "songs": []})

    page_one = (await client.get("/api/v1/albums", params={"limit": 1})).json()
    page_two = (await client.get("/api/v1/albums", params={"skip": 1, "limit": 1})).json()

    assert [a["id"] for a in page_one] == [first]
    assert [a["id"] for a in page_two] == [second]
    assert len(memory_cache.keys()) == 2


async def test_list_rejects_out_of_range_limit(client: AsyncClient) -> None:
    response = await client.get("/api/v1/albums", params={"limit": 0})
    assert response.status_code == 422


async def test_create_requires_title(client: AsyncClient) -> None:
    response = await client.post("/api/v1/albums", json={"title": "", "songs": []})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_create_rejects_blank_song_title(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/albums", json={"title": "Abbey Road", "songs": [{"title": "   "}]}
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "songs[0].title"}
    assert (await client.get("/api/v1/albums")).json() == []


async def test_create_with_no_songs(client: AsyncClient) -> None:
    album_id = await _create(client, {"title": "Silence"})

    response = await client.get(f"/api/v1/albums/{album_id}")

    assert response.json() == {"id": album_id, "title": "Silence", "songs": []}
