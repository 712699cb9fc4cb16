"""FastAPI router for artwork link derivation."""

from fastapi import APIRouter

from artwork.links import derive_links
from artwork.models import ArtworkLinkSet, ArtworkLinksRequest

router = APIRouter(prefix="/artwork", tags=["artwork"])


@router.post(
    "/links",
    response_model=ArtworkLinkSet,
    summary="Derive download links for one catalog record",
    responses={
        200: {"description": "Link set returned"},
        422: {"description": "Malformed request body"},
    },
)
async def get_artwork_links(request: ArtworkLinksRequest) -> ArtworkLinkSet:
    """Derive the ordered artwork links for a record the caller already holds."""
    return derive_links(request.result, request.media_kind, request.output_format)
