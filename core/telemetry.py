"""Telemetry module for tracking request performance with PostHog."""

import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from posthog import Posthog

logger = logging.getLogger(__name__)

DISTINCT_ID = "itunes-artwork-finder-service"


@dataclass
class StepResult:
    """Result of a tracked step."""

    duration_ms: float
    success: bool = True
    error_type: str | None = None


@dataclass
class RequestTelemetry:
    """Tracks performance metrics for a single search request."""

    steps: dict[str, StepResult] = field(default_factory=dict)
    api_calls: dict[str, int] = field(default_factory=lambda: {"itunes": 0})
    start_time: float = field(default_factory=time.perf_counter)

    @contextmanager
    def track_step(self, step_name: str):
        """Context manager to time a step.

        Args:
            step_name: Name of the step being tracked
        """
        step_start = time.perf_counter()
        error_type = None

        try:
            yield
        except Exception as e:
            error_type = type(e).__name__
            raise
        finally:
            self.steps[step_name] = StepResult(
                duration_ms=(time.perf_counter() - step_start) * 1000,
                success=error_type is None,
                error_type=error_type,
            )

    def record_api_call(self, service: str) -> None:
        """Increment API call counter for a service."""
        if service in self.api_calls:
            self.api_calls[service] += 1
        else:
            logger.warning(f"Unknown service for API call tracking: {service}")

    def get_total_duration_ms(self) -> float:
        """Get total elapsed time since telemetry was created."""
        return (time.perf_counter() - self.start_time) * 1000

    def get_step_timings(self) -> dict[str, float]:
        """Get timing for each step in milliseconds."""
        return {f"{name}_ms": step.duration_ms for name, step in self.steps.items()}

    def send_to_posthog(
        self,
        posthog_client: Posthog,
        extra_properties: dict[str, Any] | None = None,
    ) -> None:
        """Send all telemetry events to PostHog.

        Args:
            posthog_client: PostHog client instance
            extra_properties: Additional properties to include in the completed event
        """
        extra_properties = extra_properties or {}

        for step_name, step_result in self.steps.items():
            posthog_client.capture(
                distinct_id=DISTINCT_ID,
                event=f"search_{step_name}",
                properties={
                    "step": step_name,
                    "duration_ms": round(step_result.duration_ms, 2),
                    "success": step_result.success,
                    "error_type": step_result.error_type,
                },
            )

        posthog_client.capture(
            distinct_id=DISTINCT_ID,
            event="search_completed",
            properties={
                "total_duration_ms": round(self.get_total_duration_ms(), 2),
                "steps": self.get_step_timings(),
                "api_calls": self.api_calls.copy(),
                "catalog": get_request_stats() or empty_request_stats(),
                **extra_properties,
            },
        )

        logger.debug(
            f"Sent telemetry: {len(self.steps)} steps, total {self.get_total_duration_ms():.1f}ms"
        )


# ---------------------------------------------------------------------------
# Per-request catalog stats via ContextVar
# ---------------------------------------------------------------------------

_request_stats_var: ContextVar[dict | None] = ContextVar("request_stats")


def empty_request_stats() -> dict:
    return {"api_calls": 0, "api_time_ms": 0.0}


def init_request_stats() -> None:
    """Initialize catalog stats for the current request context."""
    _request_stats_var.set(empty_request_stats())


def record_itunes_api_call() -> None:
    """Record an iTunes API call in the current request context."""
    stats = _request_stats_var.get(None)
    if stats is not None:
        stats["api_calls"] += 1


def record_api_time(ms: float) -> None:
    """Accumulate iTunes API call time in the current request context."""
    stats = _request_stats_var.get(None)
    if stats is not None:
        stats["api_time_ms"] += ms


def get_request_stats() -> dict | None:
    """Get catalog stats for the current request context, or None if not initialized."""
    return _request_stats_var.get(None)
