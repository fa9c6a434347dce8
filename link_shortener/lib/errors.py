"""
Error classes raised by the link registry and service.

Every failure of a core operation surfaces as one of these; none of them is
fatal to the process. The web layer maps each kind to an HTTP status.
"""

from typing import Optional, Dict, Any


class ShortLinkError(Exception):
    """
    Base error for link operations.

    Attributes:
        message: Error message
        details: Optional additional error details
    """
    message: str = "Link operation failed"

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        """
        Initialize link error.

        Args:
            message: Error message (overrides default)
            details: Optional additional error details
        """
        self.message = message or self.message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        """Name of the error kind, e.g. ``NotFound``."""
        return type(self).__name__


class InvalidUrl(ShortLinkError):
    """Original URL is not an absolute http/https URL."""
    message = "Invalid URL"


class InvalidShortcode(ShortLinkError):
    """Custom short code has an unacceptable format."""
    message = "Invalid short code"


class InvalidValidity(ShortLinkError):
    """Validity window is not a positive number of minutes."""
    message = "Invalid validity period"


class ShortcodeConflict(ShortLinkError):
    """Requested custom short code is already registered."""
    message = "Short code already exists"


class GenerationExhausted(ShortLinkError):
    """No free short code found within the retry budget."""
    message = "Unable to generate a unique short code"


class NotFound(ShortLinkError):
    """No link is registered under the short code."""
    message = "Short URL not found"


class Expired(ShortLinkError):
    """The link exists but its validity window has passed."""
    message = "Short URL has expired"
