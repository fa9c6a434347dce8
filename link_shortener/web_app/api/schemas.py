"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ShortenRequest(CamelModel):
    """Request to shorten a URL."""

    original_url: str = Field(..., description="The URL to shorten", min_length=1)
    validity_minutes: Optional[float] = Field(None, description="Minutes the link stays active (default 30)")
    custom_code: Optional[str] = Field(None, description="Optional custom short code")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "originalUrl": "https://example.com/very/long/path/to/resource",
                    "validityMinutes": 30,
                },
                {
                    "originalUrl": "https://github.com/user/repo",
                    "customCode": "myrepo",
                },
            ]
        },
    )


class ShortenResponse(CamelModel):
    """Response after shortening a URL."""

    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The original long URL")
    shortcode: str = Field(..., description="The short code")
    created_at: datetime = Field(..., description="Creation timestamp")
    expires_at: datetime = Field(..., description="Expiry timestamp")


class ClickEventResponse(CamelModel):
    """One recorded click."""

    timestamp: datetime
    referrer: Optional[str] = None
    location: str
    user_agent: Optional[str] = None


class LinkAnalyticsResponse(CamelModel):
    """Response with link details and click history."""

    shortcode: str
    short_url: str
    original_url: str
    created_at: datetime
    expires_at: datetime
    click_count: int
    click_history: List[ClickEventResponse]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    registry: str = Field(..., description="Link registry status")
    analytics: str = Field(..., description="Analytics recorder status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error kind")
    detail: Optional[str] = Field(None, description="Detailed error information")


class StatisticsResponse(BaseModel):
    """Statistics response."""

    total_links: int
    active_links: int
    expired_links: int
    total_clicks: int
    recorded_clicks: int
