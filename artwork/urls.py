"""URL rewriting for mzstatic artwork thumbnails.

Catalog records carry a thumbnail template such as::

    https://is1-ssl.mzstatic.com/image/thumb/Music115/v4/.../source.jpg/100x100bb.jpg

The CDN serves other sizes when the ``100x100`` token is changed, so every
download link is the template with a different size token, a ``-999`` quality
marker and a normalized extension. Nothing here validates its input: a template
without a size token comes back with only the extension handling applied.
"""

import re
from dataclasses import dataclass, replace

from services.parser import OutputFormat

SIZE_TOKEN = re.compile(r"/(\d+x\d+)(bb)?")

THUMBNAIL_SIZE = "100x100"
QUALITY_MARKER = "-999"
"""Marker the CDN reads as "highest JPEG quality"."""

OVERSIZED = 10000
"""Larger than any stored artwork; the CDN answers with the biggest it has."""

PREVIEW_SIZE = 300

NON_JPG_EXTENSION = re.compile(r"\.(png|webp|tif)$")
ANY_IMAGE_EXTENSION = re.compile(r"\.(jpg|png|webp|tif)$")

HIGH_RES_SOURCE = re.compile(r"^https://.*?\.mzstatic\.com/image/thumb/(.*)/.*\.(jpg|png)$")
HIGH_RES_MIRROR = "https://a1.mzstatic.com/us/r1000/063/"

TRAILING_BB = re.compile(r"bb(\.(jpg|png|webp|tif))$")
TRAILING_BB_IN_FILENAME = re.compile(r"/([^/]*?)bb(\.(jpg|png|webp|tif))$")


@dataclass(frozen=True)
class ArtworkUrl:
    """A thumbnail URL split around its size token.

    ``str(url)`` reassembles ``prefix + size + marker + remainder``. When the
    URL has no size token, everything lives in ``prefix`` and the setters are
    no-ops.
    """

    prefix: str
    size: str = ""
    marker: str = ""
    remainder: str = ""

    @classmethod
    def parse(cls, url: str) -> "ArtworkUrl":
        match = SIZE_TOKEN.search(url)
        if match is None:
            return cls(prefix=url)
        return cls(
            prefix=url[: match.start(1)],
            size=match.group(1),
            marker=match.group(2) or "",
            remainder=url[match.end() :],
        )

    @property
    def has_size_token(self) -> bool:
        return bool(self.size)

    def with_size(self, width: int, height: int | None = None) -> "ArtworkUrl":
        if not self.has_size_token:
            return self
        return replace(self, size=f"{width}x{height if height is not None else width}")

    def replace_size(self, old: str, new: str) -> "ArtworkUrl":
        """Swap the size token only when it is exactly ``old``."""
        if self.size != old:
            return self
        return replace(self, size=new)

    def with_marker(self, marker: str) -> "ArtworkUrl":
        if not self.has_size_token:
            return self
        return replace(self, marker=marker)

    def __str__(self) -> str:
        return f"{self.prefix}{self.size}{self.marker}{self.remainder}"


def as_thumbnail_template(template: str) -> str:
    """Reset any size token to ``100x100``, keeping its marker.

    Lets a 60px template through the ebook and poster rewrites, which only
    match ``100x100``.
    """
    url = ArtworkUrl.parse(template)
    if not url.has_size_token:
        return template
    return str(replace(url, size=THUMBNAIL_SIZE))


def force_jpg_extension(url: str) -> str:
    """Make url end in ``.jpg``, replacing a png/webp/tif extension if present."""
    if url.endswith(".jpg"):
        return url
    url = NON_JPG_EXTENSION.sub("", url)
    return url + ".jpg"


def ensure_image_extension(url: str) -> str:
    """Append ``.jpg`` only when url has no image extension at all."""
    if ANY_IMAGE_EXTENSION.search(url):
        return url
    return url + ".jpg"


def apply_output_format(url: str, output_format: OutputFormat) -> str:
    """Swap a trailing ``.jpg`` for ``.png`` when png output is requested."""
    if output_format == OutputFormat.PNG and url.endswith(".jpg"):
        return url[: -len(".jpg")] + ".png"
    return url


def resize(template: str, size: int, output_format: OutputFormat = OutputFormat.JPG) -> str:
    """Ask the CDN for a square rendition of ``size`` pixels."""
    url = ArtworkUrl.parse(template).with_size(size).with_marker(QUALITY_MARKER)
    return apply_output_format(force_jpg_extension(str(url)), output_format)


def ebook_cover_url(template: str, output_format: OutputFormat = OutputFormat.JPG) -> str:
    """Portrait 1467x2200 rendition used for book covers."""
    url = ArtworkUrl.parse(template).replace_size(THUMBNAIL_SIZE, "1467x2200")
    if url.size == "1467x2200":
        url = url.with_marker(QUALITY_MARKER)
    return apply_output_format(force_jpg_extension(str(url)), output_format)


def max_resolution_url(template: str, output_format: OutputFormat = OutputFormat.JPG) -> str:
    """Best-available artwork via the flat high-resolution mirror.

    The oversized rendition is requested first; when the URL follows the
    ``/image/thumb/<path>/<file>`` layout, ``<path>`` (which ends in the source
    file name) is re-rooted under the mirror host. A ``bb`` marker is removed
    only from the final path segment.
    """
    url = resize(template, OVERSIZED, output_format)
    url = HIGH_RES_SOURCE.sub(lambda m: HIGH_RES_MIRROR + m.group(1), url)
    url = TRAILING_BB_IN_FILENAME.sub(r"/\1\2", url)
    url = ensure_image_extension(url)
    return apply_output_format(url, output_format)


def poster_max_resolution_url(template: str, output_format: OutputFormat = OutputFormat.JPG) -> str:
    """Best-available poster art for movies and TV seasons.

    Poster templates are rewritten in place on their original host; the mirror
    rewrite is not applied.
    """
    url = ArtworkUrl.parse(template).replace_size(THUMBNAIL_SIZE, f"{OVERSIZED}x{OVERSIZED}")
    if url.size == f"{OVERSIZED}x{OVERSIZED}":
        # keep any bb so the trailing-marker strip below sees it
        url = replace(url, marker=QUALITY_MARKER + url.marker)
    rewritten = TRAILING_BB.sub(r"\1", str(url))
    return apply_output_format(force_jpg_extension(rewritten), output_format)
