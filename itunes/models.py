"""Pydantic models for iTunes Search / Lookup API responses."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CatalogResult(BaseModel):
    """A single record from the catalog, read-only.

    Field names are snake_case; the camelCase names used by the API are
    accepted as aliases. Fields the service does not use are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    wrapper_type: str | None = None
    kind: str | None = None
    artist_name: str | None = None
    collection_name: str | None = None
    track_name: str | None = None
    release_date: str | None = None
    collection_view_url: str | None = None
    track_view_url: str | None = None
    artist_view_url: str | None = None
    view_url: str | None = None
    artwork_url_60: str | None = None
    artwork_url_100: str | None = None

    @property
    def artwork_template(self) -> str | None:
        """Thumbnail URL the artwork links are derived from."""
        return self.artwork_url_100 or self.artwork_url_60


class CatalogResponse(BaseModel):
    """Envelope returned by both the search and the lookup endpoint."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    result_count: int = 0
    results: list[CatalogResult] = []
