"""Pytest configuration and fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from httpx import AsyncClient, ASGITransport

from link_shortener.config import Config
from link_shortener.lib.analytics import AnalyticsRecorder
from link_shortener.lib.registry import LinkRegistry
from link_shortener.lib.service import LinkService
from link_shortener.lib.shortcode import ShortCodeGenerator
from link_shortener.lib.common.logging_config import setup_logging
from link_shortener.web_app import create_app


class FakeClock:
    """Manually advanced clock returning tz-aware UTC datetimes."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class SequenceGenerator(ShortCodeGenerator):
    """Generator replaying a fixed list of codes."""

    def __init__(self, codes):
        super().__init__(default_length=6)
        self.codes = list(codes)
        self.calls = 0

    def generate(self, length=None):
        code = self.codes[min(self.calls, len(self.codes) - 1)]
        self.calls += 1
        return code


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    """Create controllable clock."""
    return FakeClock()


@pytest.fixture
def short_code_generator():
    """Create short code generator."""
    return ShortCodeGenerator(default_length=6)


@pytest.fixture
def registry(short_code_generator, clock, logger):
    """Create link registry."""
    return LinkRegistry(
        short_code_generator=short_code_generator,
        clock=clock,
        logger=logger,
    )


@pytest.fixture
def analytics(logger):
    """Create analytics recorder."""
    return AnalyticsRecorder(logger=logger)


@pytest.fixture
def service(registry, analytics, logger) -> LinkService:
    """Create service instance."""
    return LinkService(
        registry=registry,
        analytics=analytics,
        base_url="http://testserver",
        path_prefix="/s",
        logger=logger,
    )


@pytest.fixture
def config():
    """Create test configuration."""
    return Config(base_url="http://testserver", path_prefix="/s")


@pytest.fixture
def app(service, config, logger):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config, logger=logger)


@pytest.fixture
async def client(app):
    """Create test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
