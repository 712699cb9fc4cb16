"""Models for the search API contract."""

from enum import StrEnum

from pydantic import BaseModel

from artwork.models import ArtworkLinkSet
from services.parser import MediaKind, ParsedQuery


class SearchStatus(StrEnum):
    OK = "ok"
    NO_RESULTS = "no_results"


class SearchResultItem(BaseModel):
    """A single result: display fields paired with its artwork links."""

    title: str
    view_url: str
    media_kind: MediaKind
    artist_name: str | None = None
    collection_name: str | None = None
    track_name: str | None = None
    release_date: str | None = None
    artwork: ArtworkLinkSet


class SearchResponse(BaseModel):
    """Response from the search endpoint."""

    query: ParsedQuery
    status: SearchStatus = SearchStatus.OK
    results: list[SearchResultItem] = []
    total: int = 0
    catalog_stats: dict | None = None


class CatalogRequest(BaseModel):
    """The catalog call a parsed query maps to."""

    endpoint: str
    params: dict[str, str]


class ParseResponse(BaseModel):
    """Response from the parse endpoint."""

    query: ParsedQuery
    catalog_request: CatalogRequest
