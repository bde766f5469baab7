from typing import Dict, List, Optional

import pytest

from core.errors import UpstreamError
from tmdb.models import MovieRecord, PersonRecord
from toolserver.server import build_server


class StubUpstream:
    """In-memory stand-in for TmdbClient. Records every call it receives."""

    def __init__(
        self,
        people: Optional[Dict[str, PersonRecord]] = None,
        movies: Optional[Dict[int, List[MovieRecord]]] = None,
        fail_metadata: bool = False,
        fail_images: bool = False,
    ):
        self.people = people or {}
        self.movies = movies or {}
        self.fail_metadata = fail_metadata
        self.fail_images = fail_images
        self.calls: List[tuple] = []

    async def find_person(self, name: str) -> Optional[PersonRecord]:
        self.calls.append(("find_person", name))
        if self.fail_metadata:
            raise UpstreamError("connection refused")
        return self.people.get(name)

    async def movies_by_actor(self, actor_id: int) -> List[MovieRecord]:
        self.calls.append(("movies_by_actor", actor_id))
        if self.fail_metadata:
            raise UpstreamError("connection refused")
        return list(self.movies.get(actor_id, []))

    async def image_as_base64(self, path: str) -> str:
        self.calls.append(("image_as_base64", path))
        if self.fail_images:
            raise UpstreamError("image host timed out")
        return "aW1hZ2UtYnl0ZXM="


@pytest.fixture
def tom_hanks() -> PersonRecord:
    return PersonRecord(
        id=31,
        name="Tom Hanks",
        biography="Thomas Jeffrey Hanks is an American actor and filmmaker.",
        birthday="1956-07-09",
        place_of_birth="Concord, California, USA",
        profile_path="/xndWFsBlClOJFRdhSt4NBwiPq2o.jpg",
    )


@pytest.fixture
def hanks_movies() -> List[MovieRecord]:
    return [
        MovieRecord(
            id=13,
            title="Forrest Gump",
            release_date="1994-06-23",
            overview="A man with a low IQ has accomplished great things in his life.",
        ),
        MovieRecord(
            id=862,
            title="Toy Story",
            release_date="1995-10-30",
            overview="Led by Woody, Andy's toys live happily in his room.",
        ),
        MovieRecord(
            id=857,
            title="Saving Private Ryan",
            release_date="1998-07-24",
            overview="As U.S. troops storm the beaches of Normandy, three brothers lie dead.",
        ),
    ]


@pytest.fixture
def upstream(tom_hanks, hanks_movies) -> StubUpstream:
    return StubUpstream(
        people={"Tom Hanks": tom_hanks},
        movies={31: hanks_movies},
    )


@pytest.fixture
def server(upstream):
    return build_server(upstream)


@pytest.fixture
def make_upstream():
    return StubUpstream
