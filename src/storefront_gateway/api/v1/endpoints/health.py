"""Health check endpoints.

Provides liveness and readiness probes for load balancers and orchestrators.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from storefront_gateway.api.dependencies import get_app_settings
from storefront_gateway.core.config import Settings


router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Health status", examples=["healthy"])
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")


class ReadinessResponse(HealthResponse):
    """Readiness check response with upstream configuration status."""

    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Configuration status of upstream clients",
    )
    reviews_cache_age: float | None = Field(
        default=None,
        description="Age in seconds of the cached review dataset, if any",
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Check if the service is alive. No upstream is contacted."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Reports which upstream clients are configured and the review cache age.",
)
async def readiness_check(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ReadinessResponse:
    """Check if the service is ready to handle requests.

    Upstreams are not called; a client counts as configured when it was
    created at startup and has credentials.
    """
    state = request.app.state
    dependencies = {
        "judgeme": _client_status(
            getattr(state, "judgeme_client", None), settings.JUDGEME_API_TOKEN
        ),
        "shopify": _client_status(
            getattr(state, "shopify_client", None), settings.SHOPIFY_ACCESS_TOKEN
        ),
    }

    reviews_service = getattr(state, "reviews_service", None)
    cache_age = reviews_service.cache_age() if reviews_service is not None else None

    all_configured = all(status == "configured" for status in dependencies.values())

    return ReadinessResponse(
        status="ready" if all_configured else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
        reviews_cache_age=round(cache_age, 1) if cache_age is not None else None,
    )


def _client_status(client: object | None, credential: str) -> str:
    if client is None:
        return "unavailable"
    return "configured" if credential else "not_configured"
