"""Same-origin relay for iTunes search requests made from a browser."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from core.dependencies import get_itunes_service
from core.exceptions import CatalogRequestError
from itunes.service import SEARCH_PATH, ITunesService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["itunes"])

DEFAULT_LIMIT = "60"


@router.get(
    "/itunes",
    summary="Relay a search to the iTunes API",
    responses={
        200: {"description": "Raw iTunes search response"},
        500: {"description": "The iTunes API request failed"},
    },
)
async def relay_search(
    term: str | None = Query(None),
    entity: str | None = Query(None),
    country: str | None = Query(None),
    media: str | None = Query(None),
    attribute: str | None = Query(None),
    limit: str | None = Query(None),
    itunes_service: ITunesService = Depends(get_itunes_service),
):
    """Forward the given search parameters unchanged and return the raw JSON."""
    params = {
        name: value
        for name, value in (
            ("term", term),
            ("entity", entity),
            ("country", country),
            ("media", media),
            ("attribute", attribute),
        )
        if value
    }
    params["limit"] = limit or DEFAULT_LIMIT

    try:
        return await itunes_service.get_json(SEARCH_PATH, params)
    except CatalogRequestError as e:
        logger.error(f"iTunes API relay error: {e.message}")
        return JSONResponse(
            status_code=500,
            content={"error": "Failed to fetch from iTunes API", "message": e.message},
        )
