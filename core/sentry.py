"""Sentry error tracking for catalog requests."""

import logging
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from services.parser import ParsedQuery

logger = logging.getLogger(__name__)

BREADCRUMB_CATEGORY = "itunes"
REQUEST_CONTEXT = "itunes_request"


def init_sentry(
    dsn: str | None,
    environment: str = "production",
    release: str | None = None,
    traces_sample_rate: float = 1.0,
) -> None:
    """Initialize the Sentry SDK with the FastAPI integration.

    Does nothing when ``dsn`` is empty, so local runs and tests stay offline.
    """
    if not dsn:
        logger.info("Sentry DSN not configured, skipping initialization")
        return

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        integrations=[FastApiIntegration()],
        traces_sample_rate=traces_sample_rate,
        sample_rate=1.0,
    )
    logger.info(f"Sentry initialized (environment: {environment})")


def tag_search(query: ParsedQuery) -> None:
    """Tag the current scope with how the search term was interpreted."""
    sentry_sdk.set_tag("media_kind", str(query.media_kind))
    sentry_sdk.set_tag("country", query.country)
    sentry_sdk.set_tag("direct_lookup", query.direct_lookup)


def add_itunes_breadcrumb(
    operation: str,
    data: dict[str, Any] | None = None,
    level: str = "info",
) -> None:
    """Record an outbound catalog request.

    Args:
        operation: "search" or "lookup"
        data: Query parameters sent
        level: Sentry breadcrumb level
    """
    sentry_sdk.add_breadcrumb(
        category=BREADCRUMB_CATEGORY,
        message=operation,
        data=data or {},
        level=level,
    )


def capture_exception(error: Exception, context: dict[str, Any] | None = None) -> None:
    """Send an exception to Sentry, attaching the request that caused it."""
    if context:
        sentry_sdk.set_context(REQUEST_CONTEXT, context)
    sentry_sdk.capture_exception(error)
