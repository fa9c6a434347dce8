"""
Exception handlers turning link errors into consistent JSON responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..lib.errors import (
    ShortLinkError,
    InvalidUrl,
    InvalidShortcode,
    InvalidValidity,
    ShortcodeConflict,
    GenerationExhausted,
    NotFound,
    Expired,
)

logger = logging.getLogger("link_shortener.web")

ERROR_STATUS = {
    InvalidUrl: status.HTTP_400_BAD_REQUEST,
    InvalidShortcode: status.HTTP_400_BAD_REQUEST,
    InvalidValidity: status.HTTP_400_BAD_REQUEST,
    ShortcodeConflict: status.HTTP_409_CONFLICT,
    NotFound: status.HTTP_404_NOT_FOUND,
    Expired: status.HTTP_410_GONE,
    GenerationExhausted: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: ShortLinkError) -> int:
    """HTTP status for a link error; unknown kinds are server errors."""
    for error_type, status_code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def link_error_handler(request: Request, exc: ShortLinkError) -> JSONResponse:
    """Map a link error to its HTTP status."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"Link error in {request.url.path}: {exc.message}")
    else:
        logger.warning(f"Link error in {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content={"error": exc.kind, "detail": exc.message},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and answer with a 500."""
    logger.error(f"Unhandled error in {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "InternalError", "detail": "Internal server error"},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the link error handlers on an app."""
    app.add_exception_handler(ShortLinkError, link_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
