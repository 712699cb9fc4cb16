"""Main application entry point for the iTunes Artwork Finder service."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from artwork.router import router as artwork_router
from config.settings import get_settings
from core.dependencies import close_itunes_service, flush_posthog, shutdown_posthog
from core.logging import setup_logging
from core.sentry import init_sentry
from itunes.router import router as itunes_router
from routers.health import router as health_router
from search.router import router as search_router

load_dotenv()

settings = get_settings()

init_sentry(
    dsn=settings.sentry_dsn,
    environment="production" if settings.log_level != "DEBUG" else "development",
    release=settings.app_version,
    traces_sample_rate=settings.sentry_traces_sample_rate,
)

log_file = None
if settings.log_level != "DEBUG":
    log_dir = Path("/app/logs") if Path("/app/logs").exists() else Path("logs")
    log_file = log_dir / "itunes-artwork-finder.log"
setup_logging(level=settings.log_level, log_file=log_file)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan with proper startup and shutdown."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"iTunes API: {settings.itunes_api_base} (limit {settings.itunes_result_limit})")

    yield

    logger.info("Shutting down application")
    shutdown_posthog()
    await close_itunes_service()
    logger.info("All services shut down")


app = FastAPI(
    title=settings.app_name,
    description="Resolve search box queries against the iTunes catalog and derive artwork download links",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.middleware("http")
async def posthog_flush_middleware(request: Request, call_next):
    """Flush PostHog events after each request to prevent data loss."""
    response = await call_next(request)
    flush_posthog()
    return response


app.include_router(health_router, prefix="", tags=["health"])
app.include_router(search_router, prefix="/api/v1", tags=["search"])
app.include_router(artwork_router, prefix="/api/v1", tags=["artwork"])
app.include_router(itunes_router, prefix="/api/v1", tags=["itunes"])

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
