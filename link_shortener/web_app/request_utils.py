"""Helpers reading per-request details."""

from typing import Dict, Optional

from fastapi import Request

from ..lib.common.headers import build_base_url, get_client_location


def request_base_url(request: Request) -> str:
    """Base URL short links should use for this request."""
    config = request.app.state.config
    return build_base_url(
        headers=dict(request.headers),
        fallback_base_url=config.base_url,
        request_scheme=request.url.scheme,
        request_host=request.headers.get("host"),
    )


def visit_metadata(request: Request) -> Dict[str, Optional[str]]:
    """Referrer, location and user agent of a redirect visit."""
    location = getattr(request.state, "client_location", None)
    if location is None:
        location = get_client_location(
            dict(request.headers),
            request.client.host if request.client else None,
        )

    return {
        "referrer": request.headers.get("referer"),
        "location": location,
        "user_agent": request.headers.get("user-agent"),
    }
