"""API routes implementation."""

from fastapi import APIRouter, Request, status
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    ClickEventResponse,
    LinkAnalyticsResponse,
    HealthResponse,
    ErrorResponse,
    StatisticsResponse,
)
from ..request_utils import request_base_url

router = APIRouter()


@router.post(
    "/shorturls",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid URL, short code or validity"},
        409: {"model": ErrorResponse, "description": "Short code already exists"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Create short URL",
    description="Create a shortened URL valid for a number of minutes. Optionally provide a custom short code.",
)
async def shorten_url(request: Request, body: ShortenRequest):
    """Create a shortened URL."""
    service = request.app.state.service

    # Blank custom code means generate one
    custom_code = body.custom_code.strip() if body.custom_code else None

    result = await service.create_short_link(
        original_url=body.original_url,
        validity_minutes=body.validity_minutes,
        custom_code=custom_code or None,
        base_url=request_base_url(request),
    )

    return ShortenResponse(**result)


@router.get(
    "/shorturls/{shortcode}",
    response_model=LinkAnalyticsResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Short code not found"},
        410: {"model": ErrorResponse, "description": "Short code expired"},
    },
    summary="Get link analytics",
    description="Get a short link with its click count and click history.",
)
async def get_link_analytics(request: Request, shortcode: str):
    """Get analytics for a short link."""
    service = request.app.state.service

    info = await service.get_analytics(shortcode, base_url=request_base_url(request))

    history = [
        ClickEventResponse(
            timestamp=event.timestamp,
            referrer=event.referrer,
            location=event.location,
            user_agent=event.user_agent,
        )
        for event in info["click_history"]
    ]

    return LinkAnalyticsResponse(**{**info, "click_history": history})


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Get statistics",
    description="Get service-wide statistics.",
)
async def get_statistics(request: Request):
    """Get service statistics."""
    service = request.app.state.service

    stats = await service.get_statistics()

    return StatisticsResponse(**stats)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        registry="healthy" if health["registry"] else "unhealthy",
        analytics="healthy" if health["analytics"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
