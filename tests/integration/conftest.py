"""Integration test fixtures.

Provides a real ITunesService whose HTTP client talks to an in-process fake
of the iTunes Search / Lookup API, seeded with representative records.
"""

import httpx
import pytest
import pytest_asyncio

from config.settings import Settings
from itunes.service import ITunesService
from tests.factories import APP_THUMBNAIL, MOVIE_THUMBNAIL, make_api_record

# ---------------------------------------------------------------------------
# Seed data -- representative catalog records
# ---------------------------------------------------------------------------

ALBUMS = [
    make_api_record(),
    make_api_record(collectionName="Parachutes", releaseDate="2000-07-10T07:00:00Z"),
    make_api_record(collectionName="Christmas Lights - Single", releaseDate="2010-12-01T08:00:00Z"),
    make_api_record(collectionName="No Artwork Here", artworkUrl60=None, artworkUrl100=None),
]

MOVIES = [
    make_api_record(
        wrapperType="track",
        kind="feature-movie",
        artistName="Christopher Nolan",
        collectionName=None,
        trackName="Inception",
        trackViewUrl="https://itunes.apple.com/us/movie/inception/id400763833",
        collectionViewUrl=None,
        artworkUrl60=None,
        artworkUrl100=MOVIE_THUMBNAIL,
    ),
]

APPS = {
    "389801252": make_api_record(
        wrapperType="software",
        kind="software",
        artistName="Instagram, Inc.",
        collectionName=None,
        trackName="Instagram",
        trackViewUrl="https://apps.apple.com/us/app/instagram/id389801252",
        collectionViewUrl=None,
        artworkUrl60=None,
        artworkUrl100=APP_THUMBNAIL,
    ),
}


class FakeCatalog:
    """In-process stand-in for itunes.apple.com.

    Records every request it serves so tests can assert on the outgoing
    parameters.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.fail_with: int | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with:
            return httpx.Response(self.fail_with)

        params = request.url.params
        if request.url.path == "/lookup":
            record = APPS.get(params.get("id", ""))
            records = [record] if record else []
        elif params.get("term", "").lower() == "test":
            records = ALBUMS[:1]
        elif params.get("entity") == "movie":
            records = [r for r in MOVIES if params.get("term", "").lower() in r["artistName"].lower()]
        elif params.get("entity") == "album":
            records = [r for r in ALBUMS if params.get("term", "").lower() in r["artistName"].lower()]
        else:
            records = []
        return httpx.Response(200, json={"resultCount": len(records), "results": records})

    @property
    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)


@pytest.fixture
def fake_catalog():
    return FakeCatalog()


@pytest_asyncio.fixture
async def itunes_service(fake_catalog):
    """Real ITunesService backed by the fake catalog."""
    service = ITunesService(base_url="https://itunes.test", result_limit=60, timeout=5.0)
    service._client = httpx.AsyncClient(
        base_url=service.base_url,
        transport=httpx.MockTransport(fake_catalog.handler),
    )
    yield service
    await service.close()


@pytest.fixture
def test_settings():
    """Settings with no real tokens, telemetry disabled."""
    return Settings(
        sentry_dsn=None,
        posthog_api_key=None,
        enable_telemetry=False,
        itunes_api_base="https://itunes.test",
        default_country="us",
    )


@pytest_asyncio.fixture
async def app_client(itunes_service, test_settings):
    """httpx AsyncClient with a real ITunesService but no PostHog."""
    from httpx import ASGITransport, AsyncClient

    from config.settings import get_settings
    from core.dependencies import get_itunes_service, get_posthog_client
    from main import app

    app.dependency_overrides[get_itunes_service] = lambda: itunes_service
    app.dependency_overrides[get_posthog_client] = lambda: None
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
