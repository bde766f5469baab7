import asyncio
import base64

import httpx
import pytest

from core.config import Settings
from core.errors import UpstreamError
from tmdb.client import TmdbClient
from toolserver.server import build_server

SETTINGS = Settings(tmdb_token="secret-token")

PERSON = {
    "adult": False,
    "also_known_as": ["Thomas Jeffrey Hanks"],
    "biography": "Thomas Jeffrey Hanks is an American actor and filmmaker.",
    "birthday": "1956-07-09",
    "deathday": None,
    "gender": 2,
    "homepage": None,
    "id": 31,
    "imdb_id": "nm0000158",
    "known_for_department": "Acting",
    "name": "Tom Hanks",
    "place_of_birth": "Concord, California, USA",
    "popularity": 80.5,
    "profile_path": "/xndWFsBlClOJFRdhSt4NBwiPq2o.jpg",
}


def _client(handler):
    http = httpx.AsyncClient(
        base_url=SETTINGS.tmdb_base_url,
        transport=httpx.MockTransport(handler),
    )
    return TmdbClient(SETTINGS, http=http)


def _run(client, call):
    async def _go():
        async with client:
            return await call(client)

    return asyncio.run(_go())


@pytest.mark.unit
def test_find_person_searches_then_fetches_details():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path == "/3/search/person":
            return httpx.Response(200, json={"results": [{"id": 31}, {"id": 32}]})
        if request.url.path == "/3/person/31":
            return httpx.Response(200, json=PERSON)
        return httpx.Response(404)

    person = _run(_client(handler), lambda c: c.find_person("Tom Hanks"))

    assert person.name == "Tom Hanks"
    assert person.profile_path == "/xndWFsBlClOJFRdhSt4NBwiPq2o.jpg"
    assert seen[0].url.params["query"] == "Tom Hanks"
    assert seen[0].url.params["language"] == "en-US"
    assert seen[0].headers["Authorization"] == "Bearer secret-token"
    assert seen[0].headers["Accept"] == "application/json"


@pytest.mark.unit
def test_find_person_without_results_returns_none():
    def handler(request):
        return httpx.Response(200, json={"page": 1, "results": []})

    assert _run(_client(handler), lambda c: c.find_person("Zzzznotreal")) is None


@pytest.mark.unit
def test_movies_by_actor_keeps_upstream_order():
    def handler(request):
        assert request.url.path == "/3/discover/movie"
        assert request.url.params["with_cast"] == "31"
        return httpx.Response(200, json={"results": [
            {"id": 2, "title": "B", "overview": "", "release_date": "2001-01-01"},
            {"id": 1, "title": "A", "overview": "", "release_date": ""},
            {"id": 3, "title": "C", "overview": "third"},
        ]})

    movies = _run(_client(handler), lambda c: c.movies_by_actor(31))

    assert [m.title for m in movies] == ["B", "A", "C"]
    assert movies[0].release_year == "2001"
    assert movies[1].release_year is None


@pytest.mark.unit
def test_image_as_base64_uses_sized_image_url():
    def handler(request):
        assert str(request.url) == "https://image.tmdb.org/t/p/w92/profile.jpg"
        return httpx.Response(200, content=b"\xff\xd8jpeg")

    data = _run(_client(handler), lambda c: c.image_as_base64("/profile.jpg"))

    assert base64.b64decode(data) == b"\xff\xd8jpeg"


@pytest.mark.unit
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(401, json={"status_message": "Invalid API key"}),
        httpx.Response(500),
        httpx.Response(200, content=b"<html>"),
        httpx.Response(200, json={"results": [{"title": "no id"}]}),
    ],
)
def test_failures_surface_as_upstream_error(response):
    def handler(request):
        return response

    with pytest.raises(UpstreamError):
        _run(_client(handler), lambda c: c.movies_by_actor(31))


@pytest.mark.unit
def test_network_error_surfaces_as_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError):
        _run(_client(handler), lambda c: c.find_person("Tom Hanks"))


@pytest.mark.unit
def test_image_http_error_surfaces_as_upstream_error():
    def handler(request):
        return httpx.Response(404)

    with pytest.raises(UpstreamError):
        _run(_client(handler), lambda c: c.image_as_base64("/missing.jpg"))


@pytest.mark.unit
def test_over_long_name_surfaces_as_upstream_error():
    def handler(request):
        return httpx.Response(200, json={"results": []})

    with pytest.raises(UpstreamError):
        _run(_client(handler), lambda c: c.find_person("a" * 70000))


@pytest.mark.unit
def test_over_long_name_is_unavailable_result_end_to_end():
    def handler(request):
        return httpx.Response(200, json={"results": []})

    async def _go():
        async with _client(handler) as client:
            server = build_server(client)
            return await server.handle_request({
                "jsonrpc": "2.0",
                "id": 1,
                "method": "tools/call",
                "params": {"name": "get_actor_info", "arguments": {"actor_name": "a" * 70000}},
            })

    response = asyncio.run(_go())

    result = response["result"]
    assert result["isError"] is True
    assert result["content"][0]["text"].startswith("The movie database service is unavailable")
