"""FastAPI application factory."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import api_router
from .web import redirect_router
from .errors import register_error_handlers
from .middleware.headers import ForwardedHeadersMiddleware
from .middleware.logging import LoggingMiddleware


def create_app(
    service_instance,
    config,
    logger=None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        service_instance: Link service instance (may be set later in a lifespan)
        config: Configuration instance
        logger: Optional logger for request logging

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Link Shortener",
        description="URL shortening service with expiring links and click analytics",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Store instances in app state for access in routes
    app.state.service = service_instance
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(ForwardedHeadersMiddleware)
    app.add_middleware(LoggingMiddleware, logger=logger)

    register_error_handlers(app)

    prefix = "/" + config.path_prefix.strip("/") if config.path_prefix.strip("/") else ""

    app.include_router(api_router, tags=["API"])
    app.include_router(redirect_router, prefix=prefix, tags=["Redirect"])

    return app
