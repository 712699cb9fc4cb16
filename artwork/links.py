"""Per-media-kind artwork link sets.

Each media kind offers a fixed, ordered set of renditions followed by one
"HD" link pointing at the best available image:

    album / song     600, 1500, 3000, HD
    audiobook        3000, HD
    ebook            2200 (1467x2200 portrait), HD
    movie / tvSeason HD (poster path, no mirror rewrite)
    software         HD
"""

from artwork.models import ArtworkLink, ArtworkLinkSet
from artwork.urls import (
    PREVIEW_SIZE,
    as_thumbnail_template,
    ebook_cover_url,
    max_resolution_url,
    poster_max_resolution_url,
    resize,
)
from itunes.models import CatalogResult
from services.parser import MediaKind, OutputFormat

HD_LABEL = "HD"

SQUARE_SIZES: dict[MediaKind, tuple[int, ...]] = {
    MediaKind.ALBUM: (600, 1500, 3000),
    MediaKind.SONG: (600, 1500, 3000),
    MediaKind.AUDIOBOOK: (3000,),
    MediaKind.EBOOK: (),
    MediaKind.MOVIE: (),
    MediaKind.TV_SEASON: (),
    MediaKind.SOFTWARE: (),
}
"""Square sizes offered before the HD link; unknown kinds get the album set."""

POSTER_KINDS = frozenset({MediaKind.MOVIE, MediaKind.TV_SEASON})


def build_links(
    template: str,
    media_kind: MediaKind = MediaKind.ALBUM,
    output_format: OutputFormat = OutputFormat.JPG,
) -> list[ArtworkLink]:
    """Build the ordered download links for a thumbnail template.

    Args:
        template: Thumbnail URL as returned by the catalog (``artworkUrl100``
            or ``artworkUrl60``)
        media_kind: Kind the search was made for
        output_format: Requested image format

    Returns:
        list[ArtworkLink]: Sized renditions followed by the HD link
    """
    template = as_thumbnail_template(template)
    sizes = SQUARE_SIZES.get(media_kind, SQUARE_SIZES[MediaKind.ALBUM])
    links = [ArtworkLink(label=str(size), url=resize(template, size, output_format)) for size in sizes]

    if media_kind == MediaKind.EBOOK:
        links.append(ArtworkLink(label="2200", url=ebook_cover_url(template, output_format)))

    if media_kind in POSTER_KINDS:
        hd_url = poster_max_resolution_url(template, output_format)
    else:
        hd_url = max_resolution_url(template, output_format)
    links.append(ArtworkLink(label=HD_LABEL, url=hd_url))
    return links


def derive_links(
    result: CatalogResult,
    media_kind: MediaKind = MediaKind.ALBUM,
    output_format: OutputFormat = OutputFormat.JPG,
) -> ArtworkLinkSet:
    """Derive the artwork link set for one catalog result.

    Never raises: a record with a malformed or missing thumbnail yields
    best-effort URLs.
    """
    template = result.artwork_template or ""
    return ArtworkLinkSet(
        media_kind=media_kind,
        output_format=output_format,
        preview_url=resize(template, PREVIEW_SIZE, output_format),
        links=build_links(template, media_kind, output_format),
    )
