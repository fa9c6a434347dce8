"""Business logic service for the link shortener."""

import logging
from typing import Optional, Dict, Any

from .analytics import AnalyticsRecorder
from .models import ClickEvent, UNKNOWN_LOCATION
from .registry import LinkRegistry
from .common.url_builder import build_short_url


class LinkService:
    """Service layer serving create, inspect and redirect over the stores."""

    def __init__(
        self,
        registry: LinkRegistry,
        analytics: AnalyticsRecorder,
        base_url: str = "http://localhost:5000",
        path_prefix: str = "/s",
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize link service.

        Args:
            registry: Link registry instance
            analytics: Click analytics recorder instance
            base_url: Base URL used to compose short URLs
            path_prefix: Path prefix of the redirect endpoint
            logger: Optional logger
        """
        self.registry = registry
        self.analytics = analytics
        self.base_url = base_url
        self.path_prefix = path_prefix
        self.logger = logger or logging.getLogger(__name__)

    def short_url_for(self, shortcode: str, base_url: Optional[str] = None) -> str:
        """Compose the externally visible short URL for a short code."""
        return build_short_url(
            short_code=shortcode,
            base_url=base_url or self.base_url,
            path_prefix=self.path_prefix,
        )

    async def create_short_link(
        self,
        original_url: str,
        validity_minutes: Optional[float] = None,
        custom_code: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a new short link.

        Args:
            original_url: The original long URL
            validity_minutes: Minutes the link stays active (registry default if omitted)
            custom_code: Optional custom short code
            base_url: Optional base URL overriding the configured one

        Returns:
            Dictionary with shortcode, short_url, original_url, created_at, expires_at

        Raises:
            ShortLinkError: If the registry rejects the link
        """
        record = self.registry.create(
            original_url,
            validity_minutes=validity_minutes,
            custom_code=custom_code,
        )
        self.analytics.init_history(record.shortcode)

        self.logger.info(f"Created short URL -> {original_url}", extra={"shortcode": record.shortcode})

        return {
            "shortcode": record.shortcode,
            "short_url": self.short_url_for(record.shortcode, base_url),
            "original_url": record.original_url,
            "created_at": record.created_at,
            "expires_at": record.expires_at,
        }

    async def get_analytics(self, shortcode: str, base_url: Optional[str] = None) -> Dict[str, Any]:
        """Get a link together with its click history.

        Raises:
            NotFound: If the short code is unknown
            Expired: If the link is past its validity window
        """
        record = self.registry.get(shortcode)
        history = self.analytics.get_history(shortcode)

        self.logger.debug(f"Retrieved analytics for {shortcode}: {record.click_count} clicks")

        return {
            "shortcode": record.shortcode,
            "short_url": self.short_url_for(record.shortcode, base_url),
            "original_url": record.original_url,
            "created_at": record.created_at,
            "expires_at": record.expires_at,
            "click_count": record.click_count,
            "click_history": history,
        }

    async def redirect(
        self,
        shortcode: str,
        referrer: Optional[str] = None,
        location: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> str:
        """Resolve a short code for a visit and record the click.

        Args:
            shortcode: The short code visited
            referrer: Referring page, if sent
            location: Caller origin identifier, if known
            user_agent: Visitor user agent, if sent

        Returns:
            The original URL to redirect to

        Raises:
            NotFound: If the short code is unknown
            Expired: If the link is past its validity window
        """
        original_url = self.registry.record_visit(shortcode)

        # Count and history are separate critical sections
        event = ClickEvent(
            timestamp=self.registry.clock(),
            referrer=referrer or None,
            location=location or UNKNOWN_LOCATION,
            user_agent=user_agent or None,
        )
        self.analytics.append(shortcode, event)

        self.logger.debug(f"Redirecting -> {original_url}", extra={"shortcode": shortcode})
        return original_url

    async def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics.

        Returns:
            Dictionary with statistics
        """
        stats = self.registry.statistics()
        stats["recorded_clicks"] = self.analytics.total_events()
        return stats

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        registry_healthy = self.registry.is_responsive()
        analytics_healthy = self.analytics.is_responsive()

        return {
            "registry": registry_healthy,
            "analytics": analytics_healthy,
            "overall": registry_healthy and analytics_healthy,
        }
