"""Shared test factories for model construction."""

from itunes.models import CatalogResult

THUMB_BASE = "https://is1-ssl.mzstatic.com/image/thumb/Music115/v4/3e/56/2f/3e562f0c-f4a5-e1d3-2b8c-0d2a8f8b1a20"
ALBUM_THUMBNAIL = f"{THUMB_BASE}/075679958227.jpg/100x100bb.jpg"
ALBUM_MIRROR = (
    "https://a1.mzstatic.com/us/r1000/063/Music115/v4/3e/56/2f/"
    "3e562f0c-f4a5-e1d3-2b8c-0d2a8f8b1a20/075679958227.jpg"
)

MOVIE_THUMBNAIL = (
    "https://is1-ssl.mzstatic.com/image/thumb/Video124/v4/a1/b2/c3/"
    "a1b2c3d4-0000-1111-2222-333344445555/pr_source.lsr/100x100bb.jpg"
)

APP_THUMBNAIL = (
    "https://is1-ssl.mzstatic.com/image/thumb/Purple211/v4/9a/8b/7c/"
    "9a8b7c6d-1234-5678-9abc-def012345678/Prod-0-0-1x_U007emarketing-0-7-0-85-220.png/100x100bb.jpg"
)


def make_catalog_result(artwork_url_100=ALBUM_THUMBNAIL, **kwargs):
    """Build a CatalogResult with sensible defaults."""
    defaults = dict(
        wrapper_type="collection",
        artist_name="Test Artist",
        collection_name="Test Album",
        release_date="2011-09-26T07:00:00Z",
        collection_view_url="https://music.apple.com/us/album/test-album/123",
    )
    defaults.update(kwargs)
    return CatalogResult(artwork_url_100=artwork_url_100, **defaults)


def make_api_record(**kwargs):
    """Build a raw catalog record the way the iTunes API spells it."""
    record = {
        "wrapperType": "collection",
        "collectionType": "Album",
        "artistName": "Coldplay",
        "collectionName": "Mylo Xyloto",
        "releaseDate": "2011-10-24T07:00:00Z",
        "collectionViewUrl": "https://music.apple.com/gb/album/mylo-xyloto/1122782080",
        "artworkUrl60": ALBUM_THUMBNAIL.replace("100x100bb", "60x60bb"),
        "artworkUrl100": ALBUM_THUMBNAIL,
    }
    record.update(kwargs)
    return record


def make_api_response(*records):
    return {"resultCount": len(records), "results": list(records)}
