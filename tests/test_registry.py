"""Tests for the link registry."""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from link_shortener.lib.errors import (
    Expired,
    GenerationExhausted,
    InvalidShortcode,
    InvalidUrl,
    InvalidValidity,
    NotFound,
    ShortcodeConflict,
)
from link_shortener.lib.registry import LinkRegistry
from conftest import SequenceGenerator


class TestCreate:
    """Test link creation."""

    def test_create_then_get(self, registry, clock):
        """A new link has no clicks and the requested validity."""
        record = registry.create("https://example.com/page", validity_minutes=45)

        fetched = registry.get(record.shortcode)
        assert fetched.click_count == 0
        assert fetched.original_url == "https://example.com/page"
        assert fetched.created_at == clock.now
        assert fetched.expires_at - fetched.created_at == timedelta(minutes=45)

    def test_default_validity(self, registry):
        """Validity defaults to 30 minutes."""
        record = registry.create("https://example.com")

        assert record.expires_at - record.created_at == timedelta(minutes=30)

    def test_fractional_validity(self, registry):
        """Validity may be a fraction of a minute."""
        record = registry.create("https://example.com", validity_minutes=0.5)

        assert record.expires_at - record.created_at == timedelta(seconds=30)

    def test_generated_code_format(self, registry):
        """Generated codes are six alphanumeric characters."""
        record = registry.create("https://example.com")

        assert len(record.shortcode) == 6
        assert record.shortcode.isalnum()

    @pytest.mark.parametrize("url", ["not-a-url", "", "ftp://example.com", "https://", "http://host:99999/"])
    def test_invalid_url(self, registry, url):
        """Non http(s) or malformed URLs are rejected."""
        with pytest.raises(InvalidUrl):
            registry.create(url)
        assert len(registry) == 0

    def test_url_too_long(self, registry):
        """URLs over 2048 characters are rejected."""
        with pytest.raises(InvalidUrl, match="too long"):
            registry.create("https://example.com/" + "a" * 2048)

    @pytest.mark.parametrize("validity", [0, -5, float("nan"), float("inf"), "10", True, 1e10, 1e15])
    def test_invalid_validity(self, registry, validity):
        """Validity must be a positive finite number."""
        with pytest.raises(InvalidValidity):
            registry.create("https://example.com", validity_minutes=validity)

    def test_custom_code(self, registry):
        """Custom codes are used as given."""
        record = registry.create("https://a.com", custom_code="abc")

        assert record.shortcode == "abc"
        assert registry.get("abc").original_url == "https://a.com"

    def test_custom_code_conflict(self, registry):
        """A second create with the same custom code fails and keeps the first."""
        registry.create("https://a.com", custom_code="abc")

        with pytest.raises(ShortcodeConflict, match="already exists"):
            registry.create("https://b.com", custom_code="abc")

        assert registry.get("abc").original_url == "https://a.com"

    def test_custom_code_conflicts_with_expired(self, registry, clock):
        """Expired codes still block reuse."""
        registry.create("https://a.com", validity_minutes=1, custom_code="old")
        clock.advance(minutes=5)

        with pytest.raises(ShortcodeConflict):
            registry.create("https://b.com", custom_code="old")

    def test_custom_code_conflicts_with_generated(self, registry):
        """A custom code equal to a generated one conflicts."""
        record = registry.create("https://a.com")

        with pytest.raises(ShortcodeConflict):
            registry.create("https://b.com", custom_code=record.shortcode)

    @pytest.mark.parametrize("code", ["has space", "sl/ash", "a" * 33, "emoji☃"])
    def test_invalid_custom_code(self, registry, code):
        """Custom codes must be short URL-safe identifiers."""
        with pytest.raises(InvalidShortcode):
            registry.create("https://a.com", custom_code=code)

    def test_returned_record_is_snapshot(self, registry):
        """Mutating a returned record does not touch the stored one."""
        record = registry.create("https://a.com", custom_code="snap")
        record.click_count = 99
        record.original_url = "https://evil.com"

        stored = registry.get("snap")
        assert stored.click_count == 0
        assert stored.original_url == "https://a.com"


class TestCollisions:
    """Test generated code collision handling."""

    def test_regenerates_on_collision(self, clock, logger):
        """A colliding generated code is replaced by a fresh one."""
        generator = SequenceGenerator(["AAAAAA", "AAAAAA", "BBBBBB"])
        registry = LinkRegistry(short_code_generator=generator, clock=clock, logger=logger)

        first = registry.create("https://a.com")
        second = registry.create("https://b.com")

        assert first.shortcode == "AAAAAA"
        assert second.shortcode == "BBBBBB"
        assert generator.calls == 3

    def test_generation_exhausted(self, clock, logger):
        """Retries are capped."""
        generator = SequenceGenerator(["AAAAAA"])
        registry = LinkRegistry(
            short_code_generator=generator,
            clock=clock,
            logger=logger,
            max_collision_retries=3,
        )
        registry.create("https://a.com")
        generator.calls = 0

        with pytest.raises(GenerationExhausted):
            registry.create("https://b.com")

        assert generator.calls == 4
        assert len(registry) == 1

    def test_generated_codes_unique(self, registry):
        """Many creations never reuse a code."""
        codes = [registry.create(f"https://example.com/{i}").shortcode for i in range(500)]

        assert len(set(codes)) == 500


class TestLookup:
    """Test get and record_visit."""

    def test_get_not_found(self, registry):
        with pytest.raises(NotFound):
            registry.get("missing")

    def test_record_visit_not_found(self, registry):
        with pytest.raises(NotFound):
            registry.record_visit("missing")

    def test_record_visit_increments(self, registry):
        """Each visit returns the URL and counts once."""
        record = registry.create("https://example.com/page")

        assert registry.record_visit(record.shortcode) == "https://example.com/page"
        assert registry.record_visit(record.shortcode) == "https://example.com/page"
        assert registry.get(record.shortcode).click_count == 2

    def test_active_until_expiry_instant(self, registry, clock):
        """A link still resolves at exactly its expiry time."""
        record = registry.create("https://example.com", validity_minutes=1)
        clock.advance(minutes=1)

        assert registry.get(record.shortcode).shortcode == record.shortcode

    def test_expired(self, registry, clock):
        """Past expiry, get and record_visit fail and leave the record untouched."""
        record = registry.create("https://example.com", validity_minutes=1)
        registry.record_visit(record.shortcode)
        clock.advance(seconds=61)

        with pytest.raises(Expired):
            registry.get(record.shortcode)
        with pytest.raises(Expired):
            registry.record_visit(record.shortcode)

        assert registry.exists(record.shortcode)
        clock.advance(seconds=-61)
        stored = registry.get(record.shortcode)
        assert stored.click_count == 1
        assert stored.expires_at == record.expires_at
        assert stored.created_at == record.created_at


class TestConcurrency:
    """Test thread safety of the registry."""

    def test_concurrent_visits_counted_exactly(self, registry):
        """N concurrent visits add exactly N clicks."""
        record = registry.create("https://example.com/hot")
        visits = 1000

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda _: registry.record_visit(record.shortcode), range(visits)))

        assert results == ["https://example.com/hot"] * visits
        assert registry.get(record.shortcode).click_count == visits

    def test_concurrent_custom_code_single_winner(self, registry):
        """Racing creates of one custom code leave exactly one winner."""
        barrier = threading.Barrier(8)
        outcomes = []

        def attempt(i):
            barrier.wait()
            try:
                registry.create(f"https://example.com/{i}", custom_code="race")
                outcomes.append("created")
            except ShortcodeConflict:
                outcomes.append("conflict")

        threads = [threading.Thread(target=attempt, args=(i,)) for i in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count("created") == 1
        assert outcomes.count("conflict") == 7


class TestMaintenance:
    """Test statistics and expiry removal."""

    def test_statistics(self, registry, clock):
        registry.create("https://a.com", validity_minutes=1, custom_code="short")
        record = registry.create("https://b.com", validity_minutes=60)
        registry.record_visit(record.shortcode)
        registry.record_visit("short")
        clock.advance(minutes=2)

        stats = registry.statistics()
        assert stats == {
            "total_links": 2,
            "active_links": 1,
            "expired_links": 1,
            "total_clicks": 2,
        }

    def test_remove_expired_respects_grace(self, registry, clock):
        registry.create("https://a.com", validity_minutes=1, custom_code="gone")
        registry.create("https://b.com", validity_minutes=60, custom_code="kept")
        clock.advance(minutes=5)

        assert registry.remove_expired(timedelta(minutes=10)) == []
        assert registry.remove_expired(timedelta(minutes=2)) == ["gone"]
        assert not registry.exists("gone")
        assert registry.exists("kept")

    def test_is_responsive(self, registry):
        assert registry.is_responsive()
