"""In-memory registry of short links."""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Any

from .errors import (
    Expired,
    GenerationExhausted,
    InvalidShortcode,
    InvalidUrl,
    InvalidValidity,
    NotFound,
    ShortcodeConflict,
)
from .models import LinkRecord
from .shortcode import ShortCodeGenerator
from .common.validators import is_valid_url, is_valid_short_code, is_valid_validity


Clock = Callable[[], datetime]

DEFAULT_VALIDITY_MINUTES = 30


def utc_now() -> datetime:
    """Current time as a tz-aware UTC datetime."""
    return datetime.now(timezone.utc)


class LinkRegistry:
    """Maps short codes to link records.

    All reads and writes of the key space go through a single lock, so the
    existence check and insert of ``create`` and the expiry check and
    increment of ``record_visit`` are each atomic. Expiry is evaluated lazily
    on access; expired records stay in place.
    """

    def __init__(
        self,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        clock: Optional[Clock] = None,
        logger: Optional[logging.Logger] = None,
        max_collision_retries: int = 10,
        default_validity_minutes: float = DEFAULT_VALIDITY_MINUTES,
        max_custom_code_length: int = 32,
    ):
        """Initialize link registry.

        Args:
            short_code_generator: Optional short code generator
            clock: Callable returning the current tz-aware time
            logger: Optional logger
            max_collision_retries: Extra generation attempts after a collision
            default_validity_minutes: Validity used when none is given
            max_custom_code_length: Maximum length of custom short codes
        """
        self.generator = short_code_generator or ShortCodeGenerator()
        self.clock = clock or utc_now
        self.logger = logger or logging.getLogger(__name__)
        self.max_collision_retries = max_collision_retries
        self.default_validity_minutes = default_validity_minutes
        self.max_custom_code_length = max_custom_code_length

        self._records: Dict[str, LinkRecord] = {}
        self._lock = threading.Lock()

    def create(
        self,
        original_url: str,
        validity_minutes: Optional[float] = None,
        custom_code: Optional[str] = None,
    ) -> LinkRecord:
        """Register a new short link.

        Args:
            original_url: The original long URL
            validity_minutes: Minutes the link stays active (default 30)
            custom_code: Optional caller-chosen short code

        Returns:
            Snapshot of the stored record

        Raises:
            InvalidUrl: If the URL is not an absolute http/https URL
            InvalidValidity: If the validity is not a positive number
            InvalidShortcode: If the custom code has a bad format
            ShortcodeConflict: If the custom code is already registered
            GenerationExhausted: If no free code was found within the retries
        """
        is_valid, error = is_valid_url(original_url)
        if not is_valid:
            raise InvalidUrl(f"Invalid URL: {error}", {"original_url": original_url})

        if validity_minutes is None:
            validity_minutes = self.default_validity_minutes
        is_valid, error = is_valid_validity(validity_minutes)
        if not is_valid:
            raise InvalidValidity(error, {"validity_minutes": validity_minutes})

        if custom_code is not None:
            is_valid, error = is_valid_short_code(custom_code, max_length=self.max_custom_code_length)
            if not is_valid:
                raise InvalidShortcode(f"Invalid short code: {error}", {"shortcode": custom_code})

        with self._lock:
            created_at = self.clock()
            try:
                expires_at = created_at + timedelta(minutes=validity_minutes)
            except (OverflowError, ValueError):
                raise InvalidValidity(
                    "Validity extends past the latest representable date",
                    {"validity_minutes": validity_minutes},
                ) from None

            if custom_code is not None:
                if custom_code in self._records:
                    raise ShortcodeConflict(
                        f"Short code '{custom_code}' already exists",
                        {"shortcode": custom_code},
                    )
                shortcode = custom_code
            else:
                shortcode = self._generate_unique_short_code()

            record = LinkRecord(
                shortcode=shortcode,
                original_url=original_url,
                created_at=created_at,
                expires_at=expires_at,
            )
            self._records[shortcode] = record

        self.logger.debug(f"Registered {shortcode} until {record.expires_at.isoformat()}")
        return record.snapshot()

    def get(self, shortcode: str) -> LinkRecord:
        """Look up an active link.

        Raises:
            NotFound: If no record exists for the short code
            Expired: If the record's validity window has passed
        """
        with self._lock:
            record = self._get_active(shortcode)
            return record.snapshot()

    def record_visit(self, shortcode: str) -> str:
        """Count a visit to an active link.

        Args:
            shortcode: The short code visited

        Returns:
            The original URL to redirect to

        Raises:
            NotFound: If no record exists for the short code
            Expired: If the record's validity window has passed
        """
        with self._lock:
            record = self._get_active(shortcode)
            record.click_count += 1
            return record.original_url

    def exists(self, shortcode: str) -> bool:
        """Check if a short code is registered, active or expired."""
        with self._lock:
            return shortcode in self._records

    def remove_expired(self, grace: timedelta = timedelta(0)) -> list:
        """Drop records that expired more than ``grace`` ago.

        Returns:
            The removed short codes
        """
        cutoff = self.clock() - grace
        with self._lock:
            removed = [code for code, record in self._records.items() if record.expires_at < cutoff]
            for code in removed:
                del self._records[code]
        return removed

    def statistics(self) -> Dict[str, Any]:
        """Summarize the registry contents."""
        now = self.clock()
        with self._lock:
            records = list(self._records.values())
            total_clicks = sum(record.click_count for record in records)
            expired = sum(1 for record in records if record.is_expired(now))

        return {
            "total_links": len(records),
            "active_links": len(records) - expired,
            "expired_links": expired,
            "total_clicks": total_clicks,
        }

    def is_responsive(self, timeout: float = 1.0) -> bool:
        """Check that the registry lock can be taken within ``timeout`` seconds."""
        if not self._lock.acquire(timeout=timeout):
            return False
        self._lock.release()
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _get_active(self, shortcode: str) -> LinkRecord:
        # Caller holds self._lock
        record = self._records.get(shortcode)
        if record is None:
            raise NotFound(f"Short code '{shortcode}' not found", {"shortcode": shortcode})
        if record.is_expired(self.clock()):
            raise Expired(
                f"Short code '{shortcode}' expired at {record.expires_at.isoformat()}",
                {"shortcode": shortcode, "expires_at": record.expires_at.isoformat()},
            )
        return record

    def _generate_unique_short_code(self) -> str:
        # Caller holds self._lock
        for attempt in range(self.max_collision_retries + 1):
            code = self.generator.generate()
            if code not in self._records:
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return code
            self.logger.debug(f"Short code collision on {code}")

        raise GenerationExhausted(
            f"Unable to generate unique short code after {self.max_collision_retries + 1} attempts",
            {"attempts": self.max_collision_retries + 1},
        )
