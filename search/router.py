"""Search API router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from posthog import Posthog

from config.settings import Settings, get_settings
from core.dependencies import get_itunes_service, get_posthog_client
from core.exceptions import CatalogRequestError
from core.telemetry import RequestTelemetry, get_request_stats, init_request_stats
from itunes.service import ITunesService, build_request
from search.models import CatalogRequest, ParseResponse, SearchResponse
from search.orchestrator import perform_search, resolve_query

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search the iTunes catalog and derive artwork links",
    description="""
    Parses the raw search box text and runs the matching catalog request.

    Supported prefixes, in order: a country (`uk:`, `jp:`, ...), a media kind
    (`album:`, `song:`, `movie:`, `tv:`, `app:`, `audiobook:`, `ebook:`) and an
    attribute (`artist:`, `title:`, `author:`, `director:`, `actor:`,
    `composer:`). A `.png` anywhere switches links to PNG. A pasted
    apps/itunes/books.apple.com URL is looked up by its id.
    """,
    responses={
        200: {"description": "Search completed (status is ok or no_results)"},
        502: {"description": "The iTunes catalog request failed"},
        500: {"description": "Internal server error"},
    },
)
async def handle_search(
    term: str = Query(..., description="Raw search text, prefixes included"),
    country: str | None = Query(
        None, min_length=2, max_length=2, description="Storefront overriding any country prefix"
    ),
    settings: Settings = Depends(get_settings),
    itunes_service: ITunesService = Depends(get_itunes_service),
    posthog_client: Posthog | None = Depends(get_posthog_client),
):
    """Process a search request."""
    init_request_stats()
    telemetry = RequestTelemetry()

    try:
        response = await perform_search(
            raw_term=term,
            itunes_service=itunes_service,
            telemetry=telemetry,
            country=country,
            default_country=settings.resolved_default_country,
        )
        response.catalog_stats = get_request_stats()

        if posthog_client:
            telemetry.send_to_posthog(
                posthog_client,
                {
                    "results_count": response.total,
                    "status": response.status,
                    "media_kind": response.query.media_kind,
                    "direct_lookup": response.query.direct_lookup,
                    "had_attribute": response.query.attribute is not None,
                },
            )

        return response

    except CatalogRequestError as e:
        logger.warning(f"Catalog request failed (upstream status {e.status_code}): {e.message}")
        raise HTTPException(status_code=502, detail=e.message) from e
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Search failed: {e}")
        raise HTTPException(status_code=500, detail="Internal server error") from e


@router.get(
    "/parse",
    response_model=ParseResponse,
    summary="Show how a search term is interpreted",
)
async def handle_parse(
    term: str = Query(..., description="Raw search text, prefixes included"),
    country: str | None = Query(None, min_length=2, max_length=2),
    settings: Settings = Depends(get_settings),
) -> ParseResponse:
    """Parse a term without calling the catalog."""
    query = resolve_query(term, country=country, default_country=settings.resolved_default_country)
    endpoint, params = build_request(query, settings.itunes_result_limit)
    return ParseResponse(query=query, catalog_request=CatalogRequest(endpoint=endpoint, params=params))
