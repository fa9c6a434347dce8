"""Forwarded headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from ...lib.common.headers import get_client_location


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that resolves the visitor's origin once per request."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Store the client location from X-Forwarded-For or the peer address."""
        request.state.client_location = get_client_location(
            dict(request.headers),
            request.client.host if request.client else None,
        )

        response = await call_next(request)
        return response
