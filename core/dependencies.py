"""FastAPI dependency injection providers."""

import logging

from fastapi import Depends
from posthog import Posthog

from config.settings import Settings, get_settings
from core.exceptions import ServiceInitializationError
from itunes.service import ITunesService

logger = logging.getLogger(__name__)

# Module-level instances for lifecycle management
_itunes_service: ITunesService | None = None
_posthog_client: Posthog | None = None


async def get_itunes_service(settings: Settings = Depends(get_settings)) -> ITunesService:
    """Get iTunes catalog service instance.

    Args:
        settings: Application settings

    Returns:
        ITunesService: Shared catalog client

    Raises:
        ServiceInitializationError: If the service cannot be created
    """
    global _itunes_service

    if _itunes_service is None:
        try:
            _itunes_service = ITunesService(
                base_url=settings.itunes_api_base,
                result_limit=settings.itunes_result_limit,
                timeout=settings.itunes_timeout,
            )
            logger.info(f"iTunes service initialized (base: {settings.itunes_api_base})")
        except Exception as e:
            logger.error(f"Failed to initialize iTunes service: {e}")
            raise ServiceInitializationError(f"iTunes service initialization failed: {e}") from e

    return _itunes_service


async def close_itunes_service() -> None:
    """Close the iTunes service and its HTTP client."""
    global _itunes_service
    if _itunes_service:
        await _itunes_service.close()
        _itunes_service = None


def get_posthog_client(settings: Settings = Depends(get_settings)) -> Posthog | None:
    """Get PostHog client instance.

    Args:
        settings: Application settings

    Returns:
        Optional[Posthog]: PostHog client if configured and enabled, None otherwise
    """
    global _posthog_client

    if not settings.enable_telemetry:
        logger.debug("Telemetry disabled")
        return None

    if not settings.posthog_api_key:
        logger.debug("POSTHOG_API_KEY not set - telemetry disabled")
        return None

    if _posthog_client is None:
        _posthog_client = Posthog(
            settings.posthog_api_key,
            host=settings.posthog_host,
        )
        logger.info(f"PostHog client initialized (host: {settings.posthog_host})")

    return _posthog_client


def flush_posthog() -> None:
    """Flush any buffered PostHog events."""
    if _posthog_client:
        _posthog_client.flush()


def shutdown_posthog() -> None:
    """Shutdown PostHog client gracefully."""
    global _posthog_client
    if _posthog_client:
        _posthog_client.shutdown()
        _posthog_client = None
        logger.info("PostHog client shutdown")
