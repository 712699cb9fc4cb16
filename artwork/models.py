"""Pydantic models for derived artwork links."""

from pydantic import BaseModel, computed_field

from itunes.models import CatalogResult
from services.parser import MediaKind, OutputFormat

MIN_FILENAME_LENGTH = 5


class ArtworkLink(BaseModel):
    """A single downloadable rendition."""

    label: str
    url: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def filename(self) -> str:
        """Suggested name for a "save as" download."""
        name = self.url.split("/")[-1].split("?")[0]
        if len(name) < MIN_FILENAME_LENGTH:
            name = self.label + (".png" if self.url.endswith(".png") else ".jpg")
        return name


class ArtworkLinkSet(BaseModel):
    """Ordered download links for one catalog result, smallest first."""

    media_kind: MediaKind
    output_format: OutputFormat
    preview_url: str
    links: list[ArtworkLink] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def max_resolution_url(self) -> str | None:
        """The "HD" link, always the last one in the set."""
        return self.links[-1].url if self.links else None

    @property
    def labels(self) -> list[str]:
        return [link.label for link in self.links]


class ArtworkLinksRequest(BaseModel):
    """Request body for deriving links from a catalog record."""

    result: CatalogResult
    media_kind: MediaKind = MediaKind.ALBUM
    output_format: OutputFormat = OutputFormat.JPG
