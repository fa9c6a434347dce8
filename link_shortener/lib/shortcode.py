"""Short code generation utilities."""

import random
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate random short codes for links."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    def __init__(self, default_length: int = 6):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
        """
        if default_length < 1:
            raise ValueError("default_length must be at least 1")
        self.default_length = default_length

    def generate(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Each character is drawn independently and uniformly from the
        62-character alphabet. Uniqueness is the caller's concern.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code

        Raises:
            ValueError: If length is less than 1
        """
        if length is None:
            length = self.default_length
        if length < 1:
            raise ValueError("length must be at least 1")
        return ''.join(random.choices(self.BASE62_CHARS, k=length))

    @staticmethod
    def is_valid_format(code: str) -> bool:
        """Check if code only uses characters accepted in short codes.

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return bool(code) and all(c in ShortCodeGenerator.BASE62_CHARS or c in '-_' for c in code)
