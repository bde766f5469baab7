from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PersonRecord(BaseModel):
    """A person as returned by TMDB /person/{id}."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    biography: str = ""
    birthday: Optional[str] = None
    deathday: Optional[str] = None
    place_of_birth: Optional[str] = None
    known_for_department: Optional[str] = None
    also_known_as: List[str] = Field(default_factory=list)
    profile_path: Optional[str] = None
    popularity: float = 0.0


class MovieRecord(BaseModel):
    """One entry of the TMDB /discover/movie results."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    original_title: Optional[str] = None
    overview: str = ""
    release_date: Optional[str] = None
    poster_path: Optional[str] = None
    popularity: float = 0.0
    vote_average: float = 0.0

    @property
    def release_year(self) -> Optional[str]:
        if self.release_date and len(self.release_date) >= 4:
            return self.release_date[:4]
        return None


class _SearchHit(BaseModel):
    id: int


class PersonSearchResponse(BaseModel):
    results: List[_SearchHit] = Field(default_factory=list)


class MovieResponse(BaseModel):
    results: List[MovieRecord] = Field(default_factory=list)
