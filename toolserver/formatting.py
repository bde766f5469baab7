from typing import Sequence

from tmdb.models import MovieRecord, PersonRecord


def format_person(person: PersonRecord) -> str:
    return "\n".join(
        [
            f"ID: {person.id}",
            f"Name: {person.name}",
            f"Date of Birth: {person.birthday or ''}",
            f"Place of Birth: {person.place_of_birth or ''}",
            f"Biography: {person.biography}",
        ]
    )


def format_movie(movie: MovieRecord) -> str:
    title = movie.title
    if movie.release_year:
        title = f"{title} ({movie.release_year})"
    return "\n".join(
        [
            title,
            f"   Release date: {movie.release_date or 'unknown'}",
            f"   Overview: {movie.overview or 'No overview available.'}",
        ]
    )


def format_movies(movies: Sequence[MovieRecord]) -> str:
    """
    Numbered list, one entry per movie.
    Order is exactly the order given.
    """
    return "\n".join(
        f"{index}. {format_movie(movie)}"
        for index, movie in enumerate(movies, start=1)
    )
