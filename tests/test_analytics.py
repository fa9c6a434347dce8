"""Tests for the analytics recorder."""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

from link_shortener.lib.analytics import AnalyticsRecorder
from link_shortener.lib.models import ClickEvent


T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_event(seconds: int = 0, **kwargs) -> ClickEvent:
    return ClickEvent(timestamp=T0 + timedelta(seconds=seconds), **kwargs)


class TestAnalyticsRecorder:
    """Test click history recording."""

    def test_unknown_shortcode_has_empty_history(self, analytics):
        assert analytics.get_history("nothing") == []

    def test_init_history(self, analytics):
        analytics.init_history("abc")

        assert analytics.get_history("abc") == []

    def test_init_history_keeps_existing(self, analytics):
        """Re-initializing never wipes recorded clicks."""
        analytics.append("abc", make_event())
        analytics.init_history("abc")

        assert len(analytics.get_history("abc")) == 1

    def test_append_preserves_order(self, analytics):
        events = [make_event(i, location=f"10.0.0.{i}") for i in range(5)]
        for event in events:
            analytics.append("abc", event)

        assert analytics.get_history("abc") == events

    def test_append_creates_history(self, analytics):
        """Appending to an unseen code starts its history."""
        event = make_event(referrer="https://ref.example")
        analytics.append("fresh", event)

        assert analytics.get_history("fresh") == [event]

    def test_histories_are_independent(self, analytics):
        analytics.append("one", make_event(1))
        analytics.append("two", make_event(2))
        analytics.append("two", make_event(3))

        assert len(analytics.get_history("one")) == 1
        assert len(analytics.get_history("two")) == 2
        assert analytics.total_events() == 3

    def test_history_is_a_copy(self, analytics):
        analytics.append("abc", make_event())

        history = analytics.get_history("abc")
        history.clear()

        assert len(analytics.get_history("abc")) == 1

    def test_event_defaults(self):
        event = ClickEvent(timestamp=T0)

        assert event.referrer is None
        assert event.location == "Unknown"
        assert event.user_agent is None
        assert event.to_dict() == {
            "timestamp": "2024-01-01T00:00:00+00:00",
            "referrer": None,
            "location": "Unknown",
            "user_agent": None,
        }

    def test_remove(self, analytics):
        analytics.append("abc", make_event())

        assert analytics.remove("abc")
        assert not analytics.remove("abc")
        assert analytics.get_history("abc") == []

    def test_concurrent_appends(self):
        recorder = AnalyticsRecorder()

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(lambda i: recorder.append("hot", make_event(i)), range(1000)))

        assert len(recorder.get_history("hot")) == 1000
        assert recorder.is_responsive()
