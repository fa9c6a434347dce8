"""Data models for the link registry and click analytics."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


UNKNOWN_LOCATION = "Unknown"


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class LinkRecord:
    """Represents a registered short link."""

    shortcode: str
    original_url: str
    created_at: datetime
    expires_at: datetime
    click_count: int = 0

    def is_expired(self, now: datetime) -> bool:
        """Check whether the validity window has passed at ``now``."""
        return now > self.expires_at

    def snapshot(self) -> "LinkRecord":
        """Return a detached copy safe to hand to callers."""
        return replace(self)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "shortcode": self.shortcode,
            "original_url": self.original_url,
            "created_at": _isoformat(self.created_at),
            "expires_at": _isoformat(self.expires_at),
            "click_count": self.click_count,
        }


@dataclass(frozen=True)
class ClickEvent:
    """One recorded visit to a short link."""

    timestamp: datetime
    referrer: Optional[str] = None
    location: str = UNKNOWN_LOCATION
    user_agent: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "timestamp": _isoformat(self.timestamp),
            "referrer": self.referrer,
            "location": self.location,
            "user_agent": self.user_agent,
        }
