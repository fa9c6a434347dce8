#!/usr/bin/env python3
"""
Main entry point for the link shortener service.

Links and click histories live in memory for the lifetime of the process.
Each uvicorn worker owns its own stores, so run a single worker unless links
need not be shared.

Usage:
    link-shortener
    python -m link_shortener.app

Environment variables:
    BASE_URL - Base URL for short links
    PATH_PREFIX - Path prefix of the redirect endpoint (default /s)
    PORT - Port to listen on
    DEFAULT_VALIDITY_MINUTES - Validity when a request gives none
    SWEEP_INTERVAL_SECONDS - Expiry sweep period (0 disables)
    LOG_LEVEL - Logging level
"""

import logging
import signal
import sys
from contextlib import asynccontextmanager
from typing import Optional, Tuple

import uvicorn
from fastapi import FastAPI

from .config import Config, load_config
from .lib.analytics import AnalyticsRecorder
from .lib.registry import LinkRegistry
from .lib.service import LinkService
from .lib.shortcode import ShortCodeGenerator
from .lib.sweeper import ExpirySweeper
from .lib.common.logging_config import setup_logging
from .web_app import create_app


def build_service(
    config: Config,
    logger: Optional[logging.Logger] = None,
) -> Tuple[LinkService, Optional[ExpirySweeper]]:
    """Construct the stores and the service around them.

    Returns:
        The service, and the expiry sweeper when one is configured
    """
    generator = ShortCodeGenerator(default_length=config.short_code_length)
    registry = LinkRegistry(
        short_code_generator=generator,
        logger=logger,
        max_collision_retries=config.max_collision_retries,
        default_validity_minutes=config.default_validity_minutes,
        max_custom_code_length=config.max_custom_code_length,
    )
    analytics = AnalyticsRecorder(logger=logger)
    service = LinkService(
        registry=registry,
        analytics=analytics,
        base_url=config.base_url,
        path_prefix=config.path_prefix,
        logger=logger,
    )

    sweeper = None
    if config.sweep_interval_seconds > 0:
        sweeper = ExpirySweeper(
            registry=registry,
            analytics=analytics,
            interval_seconds=config.sweep_interval_seconds,
            grace_seconds=config.sweep_grace_seconds,
            logger=logger,
        )

    return service, sweeper


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting link shortener service...")

    service, sweeper = build_service(config, logger)
    app.state.service = service
    app.state.sweeper = sweeper

    if sweeper:
        sweeper.start()
    else:
        logger.info("Expiry sweeper disabled")

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down link shortener service...")

    if sweeper:
        await sweeper.stop()

    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Link Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")

    # Service is built in the lifespan
    app = create_app(service_instance=None, config=config, logger=logger)
    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
