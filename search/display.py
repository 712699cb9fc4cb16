"""Display fields shown next to each result's artwork."""

import re
from datetime import datetime

from itunes.models import CatalogResult
from services.parser import MediaKind

RELEASE_TAGS: tuple[tuple[re.Pattern[str], re.Pattern[str], str], ...] = (
    (re.compile(r"\bEP\b", re.IGNORECASE), re.compile(r"\s*-?\s*\bEP\b", re.IGNORECASE), "[EP]"),
    (
        re.compile(r"\bSingle\b", re.IGNORECASE),
        re.compile(r"\s*-?\s*\bSingle\b", re.IGNORECASE),
        "[Single]",
    ),
)
"""(detect, strip, tag) per release type; EP wins over Single."""


def release_year(release_date: str | None) -> int | None:
    """Year from an ISO-8601 release date such as ``2011-09-26T07:00:00Z``."""
    if not release_date:
        return None
    try:
        return datetime.fromisoformat(release_date).year
    except ValueError:
        return None


def normalize_release_tag(collection_name: str) -> str:
    """Move an inline ``EP`` / ``Single`` marker to a bracketed suffix.

    ``"Midnight City - Single"`` becomes ``"Midnight City [Single]"``.
    """
    for detect, strip, tag in RELEASE_TAGS:
        if detect.search(collection_name):
            return f"{strip.sub('', collection_name, count=1).strip()} {tag}"
    return collection_name


def display_title(result: CatalogResult, media_kind: MediaKind) -> str:
    """Card title for a result.

    Albums read ``"{artist} - {collection} (year)"``; every other kind shows the
    collection name, falling back to the track name.
    """
    if media_kind != MediaKind.ALBUM:
        return result.collection_name or result.track_name or ""

    collection = normalize_release_tag(result.collection_name or "")
    year = release_year(result.release_date)
    suffix = f" ({year})" if year is not None else ""
    return f"{result.artist_name or ''} - {collection}{suffix}"


def view_url(result: CatalogResult) -> str:
    """Store page for a result, or ``"#"`` when it has none."""
    return (
        result.collection_view_url
        or result.track_view_url
        or result.artist_view_url
        or result.view_url
        or "#"
    )
