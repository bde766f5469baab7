"""
Async client for The Movie Database (TMDB) API.

Only the three calls the tools need are implemented. Every failure, whether
network, HTTP status or an unexpected payload, surfaces as UpstreamError.
"""

from __future__ import annotations

import base64
import logging
from typing import List, Optional, Protocol

import httpx
from pydantic import ValidationError

from core.config import Settings
from core.errors import UpstreamError
from tmdb.models import MovieRecord, MovieResponse, PersonRecord, PersonSearchResponse

logger = logging.getLogger(__name__)


class UpstreamClient(Protocol):
    async def find_person(self, name: str) -> Optional[PersonRecord]: ...

    async def movies_by_actor(self, actor_id: int) -> List[MovieRecord]: ...

    async def image_as_base64(self, path: str) -> str: ...


class TmdbClient:
    def __init__(self, settings: Settings, http: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._http = http or httpx.AsyncClient(
            base_url=settings.tmdb_base_url,
            timeout=settings.tmdb_timeout_seconds,
        )
        self._headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {settings.tmdb_token}",
        }

    async def __aenter__(self) -> "TmdbClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ---------- Public API ----------

    async def find_person(self, name: str) -> Optional[PersonRecord]:
        """
        Search a person by name and fetch the details of the first hit.
        Returns None when the search has no results.
        """
        search = await self._get_json(
            "/search/person",
            params={"query": name, "language": self.settings.tmdb_language},
        )
        hits = self._parse(PersonSearchResponse, search).results
        if not hits:
            return None

        details = await self._get_json(f"/person/{hits[0].id}")
        return self._parse(PersonRecord, details)

    async def movies_by_actor(self, actor_id: int) -> List[MovieRecord]:
        """Movies featuring the actor, in the order TMDB returns them."""
        payload = await self._get_json(
            "/discover/movie",
            params={"with_cast": str(actor_id)},
        )
        return self._parse(MovieResponse, payload).results

    def resolve_image_url(self, path: str) -> str:
        return f"{self.settings.tmdb_image_base_url}/{self.settings.tmdb_image_size}{path}"

    async def image_as_base64(self, path: str) -> str:
        url = self.resolve_image_url(path)
        try:
            response = await self._http.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise UpstreamError(f"image download failed for {path}: {exc}") from exc
        return base64.b64encode(response.content).decode("ascii")

    # ---------- Internals ----------

    async def _get_json(self, path: str, params: Optional[dict] = None):
        logger.debug("GET %s %s", path, params or {})
        try:
            response = await self._http.get(path, params=params, headers=self._headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"TMDB answered {exc.response.status_code} for {path}"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise UpstreamError(f"request to TMDB failed for {path}: {exc}") from exc
        except ValueError as exc:
            raise UpstreamError(f"TMDB returned invalid JSON for {path}") from exc

    @staticmethod
    def _parse(model, payload):
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise UpstreamError(
                f"unexpected TMDB payload ({exc.error_count()} invalid fields)"
            ) from exc
