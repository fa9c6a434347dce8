"""Request logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable, Optional


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with its status, and where redirects send visitors."""

    def __init__(self, app, logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("link_shortener.web")

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()

        client_ip = request.client.host if request.client else "unknown"
        self.logger.info(f"Request: {request.method} {request.url.path} from {client_ip}")

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        summary = (
            f"Response: {request.method} {request.url.path} - "
            f"Status: {response.status_code} - Duration: {duration_ms:.2f}ms"
        )

        location = response.headers.get("location")
        if 300 <= response.status_code < 400 and location:
            summary += f" - Redirect: {location}"

        if response.status_code in (404, 410):
            # Unknown or expired link lookups
            self.logger.warning(summary)
        else:
            self.logger.info(summary)

        return response
