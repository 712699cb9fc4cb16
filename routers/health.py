"""Health check router with a real catalog connectivity check."""

import asyncio
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config.settings import Settings, get_settings
from core.dependencies import get_itunes_service
from itunes.service import ITunesService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

CHECK_TIMEOUT = 3.0
CORE_SERVICES = {"itunes_api"}


async def _check_itunes_api(itunes_service: ITunesService) -> str:
    """Ping the iTunes API via the service's own client."""
    return "ok" if await itunes_service.check_api() else "error"


async def _run_check(coro) -> str:
    """Run a single health check with a timeout."""
    try:
        return await asyncio.wait_for(coro, timeout=CHECK_TIMEOUT)
    except TimeoutError:
        return "timeout"


@router.get(
    "/health",
    summary="Health check",
    responses={
        200: {"description": "Service is healthy"},
        503: {"description": "Service is unhealthy (catalog unreachable)"},
    },
)
async def health_check(
    settings: Settings = Depends(get_settings),
    itunes_service: ITunesService = Depends(get_itunes_service),
):
    """Health check with a real connectivity probe of the catalog."""
    services = {"itunes_api": await _run_check(_check_itunes_api(itunes_service))}

    status = "healthy" if all(services[s] == "ok" for s in CORE_SERVICES) else "unhealthy"
    if status != "healthy":
        logger.warning(f"Health check failed: {services}")

    body = {
        "status": status,
        "version": settings.app_version,
        "services": services,
    }
    return JSONResponse(content=body, status_code=200 if status == "healthy" else 503)
