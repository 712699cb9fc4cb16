"""iTunes Search / Lookup API client."""

import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from config.settings import get_settings
from core.exceptions import CatalogRequestError
from core.sentry import add_itunes_breadcrumb, capture_exception
from core.telemetry import record_api_time, record_itunes_api_call
from itunes.models import CatalogResponse, CatalogResult
from services.parser import MediaKind, ParsedQuery

logger = logging.getLogger(__name__)

ITUNES_API_BASE = "https://itunes.apple.com"
SEARCH_PATH = "/search"
LOOKUP_PATH = "/lookup"

MEDIA_PARAMS: dict[MediaKind, tuple[str, str]] = {
    MediaKind.AUDIOBOOK: ("audiobook", "audiobook"),
    MediaKind.EBOOK: ("ebook", "ebook"),
    MediaKind.MOVIE: ("movie", "movie"),
    MediaKind.TV_SEASON: ("tvShow", "tvSeason"),
    MediaKind.SONG: ("music", "song"),
    MediaKind.ALBUM: ("music", "album"),
    MediaKind.SOFTWARE: ("software", "software"),
}
"""Media kind -> (media, entity) query parameters."""


def build_search_params(query: ParsedQuery, limit: int) -> dict[str, str]:
    """Query parameters for a free-text search."""
    media, entity = MEDIA_PARAMS.get(query.media_kind, ("music", str(query.media_kind)))
    params = {
        "term": query.search_term,
        "country": query.country,
        "limit": str(limit),
        "media": media,
        "entity": entity,
    }
    if query.attribute:
        params["attribute"] = str(query.attribute)
    return params


def build_lookup_params(query: ParsedQuery) -> dict[str, str]:
    """Query parameters for a lookup by catalog id."""
    return {"id": query.search_term, "country": query.country}


def build_request(query: ParsedQuery, limit: int) -> tuple[str, dict[str, str]]:
    """Pick the endpoint and parameters a parsed query maps to."""
    if query.direct_lookup:
        return LOOKUP_PATH, build_lookup_params(query)
    return SEARCH_PATH, build_search_params(query, limit)


class ITunesService:
    """Service for iTunes catalog requests.

    One request per call; transport failures, error statuses and undecodable
    bodies are raised as CatalogRequestError carrying a readable message.
    """

    def __init__(
        self,
        base_url: str | None = None,
        result_limit: int | None = None,
        timeout: float | None = None,
    ):
        settings = get_settings()
        self.base_url = base_url or settings.itunes_api_base
        self.result_limit = result_limit if result_limit is not None else settings.itunes_result_limit
        self.timeout = timeout if timeout is not None else settings.itunes_timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"User-Agent": "ITunesArtworkFinder/1.0"},
                timeout=self.timeout,
            )
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def check_api(self) -> bool:
        """Check catalog API connectivity with a minimal search."""
        try:
            client = await self._get_client()
            resp = await client.get(SEARCH_PATH, params={"term": "test", "limit": "1"})
            return bool(resp.status_code == 200)
        except Exception:
            return False

    async def get_json(self, path: str, params: dict[str, str]) -> dict[str, Any]:
        """Issue a GET against the catalog and return the decoded JSON body.

        Raises:
            CatalogRequestError: On transport failure, non-2xx status or a body
                that is not a JSON object
        """
        client = await self._get_client()
        add_itunes_breadcrumb(path.strip("/"), dict(params))
        logger.info(f"Fetching from iTunes API: {path} {params}")

        start = time.perf_counter()
        try:
            response = await client.get(path, params=params)
        except httpx.RequestError as e:
            logger.error(f"iTunes request failed: {e}")
            error = CatalogRequestError(
                f"iTunes API request failed: {e}", details={"path": path, "params": params}
            )
            capture_exception(error, {"path": path, "params": params})
            raise error from e
        finally:
            record_itunes_api_call()
            record_api_time((time.perf_counter() - start) * 1000)

        if response.status_code >= 400:
            logger.error(f"iTunes API returned {response.status_code} for {path}")
            error = CatalogRequestError(
                f"iTunes API returned {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
                details={"path": path},
            )
            capture_exception(error, {"path": path, "status_code": response.status_code})
            raise error

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"iTunes API returned a non-JSON body for {path}")
            raise CatalogRequestError(
                "iTunes API returned an invalid response",
                status_code=response.status_code,
                details={"path": path},
            ) from e

        if not isinstance(data, dict):
            raise CatalogRequestError(
                "iTunes API returned an invalid response",
                status_code=response.status_code,
                details={"path": path},
            )
        return data

    async def fetch(self, query: ParsedQuery) -> list[CatalogResult]:
        """Run the search or lookup a parsed query maps to.

        Args:
            query: Parsed search submission

        Returns:
            list[CatalogResult]: Possibly empty list of catalog records
        """
        path, params = build_request(query, self.result_limit)
        data = await self.get_json(path, params)
        results = self._parse_results(data, path)
        logger.info(f"iTunes API returned {len(results)} results for {path}")
        return results

    def _parse_results(self, data: dict[str, Any], path: str) -> list[CatalogResult]:
        try:
            return CatalogResponse.model_validate(data).results
        except ValidationError as e:
            logger.error(f"Unexpected iTunes response shape for {path}: {e}")
            raise CatalogRequestError(
                "iTunes API returned an invalid response", details={"path": path}
            ) from e
