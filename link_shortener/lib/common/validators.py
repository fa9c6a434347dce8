"""Validation utilities for the link shortener."""

import math
import re
from urllib.parse import urlparse
from typing import Tuple


MAX_URL_LENGTH = 2048

_SHORT_CODE_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL is required"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    try:
        result = urlparse(url)

        # Check if scheme is http or https
        if result.scheme not in ["http", "https"]:
            return False, "URL must use http or https protocol"

        # Check if netloc (domain) exists
        if not result.netloc or not result.hostname:
            return False, "URL must have a valid domain"

        # Out-of-range ports raise ValueError here
        if result.port is not None and result.port < 1:
            return False, "URL port must be between 1 and 65535"

        return True, ""

    except ValueError as e:
        return False, f"Invalid URL format: {str(e)}"


def is_valid_short_code(short_code: str, min_length: int = 1, max_length: int = 32) -> Tuple[bool, str]:
    """Validate a custom short code.

    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if len(short_code) < min_length:
        return False, f"Short code must be at least {min_length} characters"

    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"

    # Only allow alphanumeric characters, hyphens, and underscores
    if not _SHORT_CODE_PATTERN.match(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"

    return True, ""


def is_valid_validity(validity_minutes) -> Tuple[bool, str]:
    """Validate a validity period expressed in minutes.

    Args:
        validity_minutes: Minutes the link stays active

    Returns:
        Tuple of (is_valid, error_message)
    """
    if isinstance(validity_minutes, bool) or not isinstance(validity_minutes, (int, float)):
        return False, "Validity must be a number of minutes"

    if not math.isfinite(validity_minutes):
        return False, "Validity must be a finite number of minutes"

    if validity_minutes <= 0:
        return False, "Validity must be greater than zero"

    return True, ""
