"""Search orchestrator: parse -> catalog request -> artwork links.

The parser and the link deriver are pure; the only I/O is the single catalog
request in between. Catalog failures propagate as CatalogRequestError for the
router to translate; an empty result list is a normal "no results" outcome.
"""

import logging

from artwork.links import derive_links
from core.sentry import tag_search
from core.telemetry import RequestTelemetry
from itunes.models import CatalogResult
from itunes.service import ITunesService
from search.display import display_title, view_url
from search.models import SearchResponse, SearchResultItem, SearchStatus
from services.parser import DEFAULT_COUNTRY, ParsedQuery, parse_query

logger = logging.getLogger(__name__)


def build_result_item(result: CatalogResult, query: ParsedQuery) -> SearchResultItem:
    """Pair a catalog record's display fields with its artwork links."""
    return SearchResultItem(
        title=display_title(result, query.media_kind),
        view_url=view_url(result),
        media_kind=query.media_kind,
        artist_name=result.artist_name,
        collection_name=result.collection_name,
        track_name=result.track_name,
        release_date=result.release_date,
        artwork=derive_links(result, query.media_kind, query.output_format),
    )


def build_result_items(results: list[CatalogResult], query: ParsedQuery) -> list[SearchResultItem]:
    """Build result items, skipping records that carry no artwork at all."""
    items = []
    for result in results:
        if not result.artwork_template:
            logger.debug(f"Skipping result without artwork: {result.collection_name or result.track_name}")
            continue
        items.append(build_result_item(result, query))
    return items


def resolve_query(
    raw_term: str,
    country: str | None = None,
    default_country: str = DEFAULT_COUNTRY,
) -> ParsedQuery:
    """Parse a raw term; an explicit country overrides any country prefix."""
    query = parse_query(raw_term, default_country=default_country)
    if country:
        query = query.model_copy(update={"country": country.strip().lower()})
    return query


async def perform_search(
    raw_term: str,
    itunes_service: ITunesService,
    telemetry: RequestTelemetry | None = None,
    country: str | None = None,
    default_country: str = DEFAULT_COUNTRY,
) -> SearchResponse:
    """Run a full search for a raw user-entered term.

    Args:
        raw_term: Text as typed by the user
        itunes_service: Catalog client
        telemetry: Optional per-request step timer
        country: Storefront that overrides the parsed country prefix
        default_country: Storefront used when neither is given

    Returns:
        SearchResponse: Results with artwork links, or a "no_results" status

    Raises:
        CatalogRequestError: If the catalog request fails
    """
    telemetry = telemetry or RequestTelemetry()

    with telemetry.track_step("parse"):
        query = resolve_query(raw_term, country=country, default_country=default_country)
    tag_search(query)

    if not query.search_term:
        logger.info(f"Nothing to search for in {raw_term!r}")
        return SearchResponse(query=query, status=SearchStatus.NO_RESULTS)

    with telemetry.track_step("catalog_request"):
        telemetry.record_api_call("itunes")
        results = await itunes_service.fetch(query)

    with telemetry.track_step("derive_links"):
        items = build_result_items(results, query)

    status = SearchStatus.OK if items else SearchStatus.NO_RESULTS
    logger.info(
        f"Search {query.search_term!r} ({query.media_kind}, {query.country}): "
        f"{len(items)} results"
    )
    return SearchResponse(query=query, status=status, results=items, total=len(items))
