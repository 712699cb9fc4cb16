"""Query parser for the artwork search box.

Turns a raw user-entered string such as ``"uk: artist: Coldplay .png"`` into a
ParsedQuery. Prefixes are consumed in a fixed order (country, media kind,
attribute), each at most once and only at the current start of the term.

Parsing never fails: anything unrecognized is left in the search term and the
remaining fields keep their defaults.
"""

import logging
import re
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class MediaKind(StrEnum):
    ALBUM = "album"
    SONG = "song"
    MOVIE = "movie"
    TV_SEASON = "tvSeason"
    SOFTWARE = "software"
    AUDIOBOOK = "audiobook"
    EBOOK = "ebook"


class Attribute(StrEnum):
    """Catalog search-field restrictions."""

    ARTIST = "artistTerm"
    TITLE = "titleTerm"
    AUTHOR = "authorTerm"
    DIRECTOR = "directorTerm"
    ACTOR = "actorTerm"
    COMPOSER = "composerTerm"


class OutputFormat(StrEnum):
    JPG = "jpg"
    PNG = "png"


DEFAULT_COUNTRY = "us"

PNG_TOKEN = re.compile(r"\.png", re.IGNORECASE)

STOREFRONT_URL = re.compile(
    r"(https?://(itunes|apps|books)\.apple\.com/[^\s]+/id(\d+))", re.IGNORECASE
)

# (path fragment, kind) checked in order; the first hit wins
STOREFRONT_PATH_KINDS: tuple[tuple[str, MediaKind], ...] = (
    ("/app/", MediaKind.SOFTWARE),
    ("/movie/", MediaKind.MOVIE),
    ("/tv-season/", MediaKind.TV_SEASON),
    ("/tvshow/", MediaKind.TV_SEASON),
    ("/audiobook/", MediaKind.AUDIOBOOK),
    ("/book/", MediaKind.EBOOK),
    ("/books/", MediaKind.EBOOK),
)

COUNTRY_PREFIXES: tuple[tuple[str, str], ...] = (
    ("uk:", "gb"),
    ("us:", "us"),
    ("ca:", "ca"),
    ("au:", "au"),
    ("fr:", "fr"),
    ("de:", "de"),
    ("jp:", "jp"),
    ("it:", "it"),
    ("es:", "es"),
    ("nl:", "nl"),
    ("br:", "br"),
    ("mx:", "mx"),
    ("ru:", "ru"),
    ("se:", "se"),
    ("cn:", "cn"),
    ("kr:", "kr"),
    ("in:", "in"),
    ("za:", "za"),
    ("no:", "no"),
    ("dk:", "dk"),
    ("fi:", "fi"),
    ("pl:", "pl"),
    ("at:", "at"),
    ("ch:", "ch"),
    ("be:", "be"),
    ("pt:", "pt"),
    ("gr:", "gr"),
    ("tr:", "tr"),
    ("ar:", "ar"),
    ("cl:", "cl"),
    ("co:", "co"),
    ("pe:", "pe"),
    ("eg:", "eg"),
    ("th:", "th"),
    ("id:", "id"),
    ("my:", "my"),
    ("sg:", "sg"),
    ("ph:", "ph"),
    ("vn:", "vn"),
    ("tw:", "tw"),
    ("hk:", "hk"),
    ("nz:", "nz"),
    ("ie:", "ie"),
    ("cz:", "cz"),
    ("sk:", "sk"),
    ("hu:", "hu"),
    ("ro:", "ro"),
    ("bg:", "bg"),
    ("hr:", "hr"),
    ("si:", "si"),
    ("lt:", "lt"),
    ("lv:", "lv"),
    ("ee:", "ee"),
    ("is:", "is"),
    ("lu:", "lu"),
    ("mt:", "mt"),
    ("cy:", "cy"),
)
"""Storefront prefixes in precedence order. ``uk:`` maps to the ``gb`` storefront."""

MEDIA_KIND_PREFIXES: tuple[tuple[str, MediaKind], ...] = (
    ("album:", MediaKind.ALBUM),
    ("song:", MediaKind.SONG),
    ("audiobook:", MediaKind.AUDIOBOOK),
    ("ebook:", MediaKind.EBOOK),
    ("movie:", MediaKind.MOVIE),
    ("tv:", MediaKind.TV_SEASON),
    ("app:", MediaKind.SOFTWARE),
)

ATTRIBUTE_PREFIXES: tuple[tuple[str, Attribute, MediaKind], ...] = (
    ("artist:", Attribute.ARTIST, MediaKind.ALBUM),
    ("title:", Attribute.TITLE, MediaKind.ALBUM),
    ("author:", Attribute.AUTHOR, MediaKind.AUDIOBOOK),
    ("director:", Attribute.DIRECTOR, MediaKind.MOVIE),
    ("actor:", Attribute.ACTOR, MediaKind.MOVIE),
    ("composer:", Attribute.COMPOSER, MediaKind.ALBUM),
)
"""Attribute prefixes with the media kind they imply when none was given."""


class ParsedQuery(BaseModel):
    """Structured form of one search submission."""

    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    media_kind: MediaKind = MediaKind.ALBUM
    attribute: Attribute | None = None
    country: str = DEFAULT_COUNTRY
    output_format: OutputFormat = OutputFormat.JPG
    direct_lookup: bool = False


def strip_png_token(text: str) -> tuple[str, bool]:
    """Remove every ``.png`` token from text.

    Returns:
        Tuple of (trimmed text, whether a token was found)
    """
    if PNG_TOKEN.search(text) is None:
        return text, False
    return PNG_TOKEN.sub("", text).strip(), True


def media_kind_from_storefront_url(url: str) -> MediaKind:
    """Infer the media kind from a storefront URL path, defaulting to album."""
    url_lower = url.lower()
    for fragment, kind in STOREFRONT_PATH_KINDS:
        if fragment in url_lower:
            return kind
    return MediaKind.ALBUM


def _consume_prefix(term: str, prefix: str) -> str | None:
    """Strip prefix from the start of term (case-insensitive), or None if absent."""
    if term.lower().startswith(prefix):
        return term[len(prefix) :].strip()
    return None


def parse_query(raw: str | None, default_country: str = DEFAULT_COUNTRY) -> ParsedQuery:
    """Decompose a raw search string into a ParsedQuery.

    Args:
        raw: Text as typed by the user, possibly with prefixes, a ``.png``
            modifier, or a pasted storefront URL
        default_country: Storefront used when no country prefix is given

    Returns:
        ParsedQuery: Never raises; unrecognized input falls back to defaults
    """
    term = (raw or "").strip()
    term, wants_png = strip_png_token(term)
    output_format = OutputFormat.PNG if wants_png else OutputFormat.JPG

    url_match = STOREFRONT_URL.search(term)
    if url_match:
        parsed = ParsedQuery(
            search_term=url_match.group(3),
            country=default_country,
            media_kind=media_kind_from_storefront_url(url_match.group(1)),
            output_format=output_format,
            direct_lookup=True,
        )
        logger.debug(f"Parsed storefront URL into lookup: {parsed}")
        return parsed

    country = default_country
    media_kind = MediaKind.ALBUM
    attribute = None
    explicit_kind = False

    for prefix, code in COUNTRY_PREFIXES:
        remainder = _consume_prefix(term, prefix)
        if remainder is not None:
            country, term = code, remainder
            break

    for prefix, kind in MEDIA_KIND_PREFIXES:
        remainder = _consume_prefix(term, prefix)
        if remainder is not None:
            media_kind, term = kind, remainder
            explicit_kind = True
            break

    for prefix, attr, default_kind in ATTRIBUTE_PREFIXES:
        remainder = _consume_prefix(term, prefix)
        if remainder is not None:
            attribute, term = attr, remainder
            if not explicit_kind:
                media_kind = default_kind
            break

    # removal can splice a new token together, e.g. ".p.pngng"
    term, trailing_png = strip_png_token(term)
    if trailing_png:
        output_format = OutputFormat.PNG

    parsed = ParsedQuery(
        search_term=term.strip(),
        media_kind=media_kind,
        attribute=attribute,
        country=country,
        output_format=output_format,
    )
    logger.debug(f"Parsed query {raw!r} into {parsed}")
    return parsed
