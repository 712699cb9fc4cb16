"""Shared test fixtures for pytest."""

from unittest.mock import AsyncMock

import pytest

from services.parser import MediaKind, OutputFormat, ParsedQuery
from tests.factories import make_catalog_result


@pytest.fixture
def mock_itunes_service():
    """Create a mock iTunes service."""
    service = AsyncMock()
    service.fetch = AsyncMock(return_value=[])
    service.get_json = AsyncMock(return_value={"resultCount": 0, "results": []})
    service.check_api = AsyncMock(return_value=True)
    service.close = AsyncMock()
    service.result_limit = 60
    return service


@pytest.fixture
def sample_catalog_result():
    """Create a sample album record for testing."""
    return make_catalog_result(
        artist_name="Coldplay",
        collection_name="Mylo Xyloto",
        release_date="2011-10-24T07:00:00Z",
    )


@pytest.fixture
def sample_parsed_query():
    """Create a sample parsed query for testing."""
    return ParsedQuery(
        search_term="Coldplay",
        media_kind=MediaKind.ALBUM,
        country="gb",
        output_format=OutputFormat.JPG,
    )
