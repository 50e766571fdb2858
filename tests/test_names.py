"""
Test cases for event identifiers.
"""

from typed_events import NEW_LISTENER, REMOVE_LISTENER, Event
from typed_events.names import describe


class TestEvent:
    """Test Event tokens."""

    def test_tokens_are_unique(self):
        """Test that tokens with the same description are different keys."""
        first = Event("ready")
        second = Event("ready")
        assert first != second
        assert len({first, second}) == 2

    def test_repr(self):
        """Test token representations."""
        assert repr(Event("ready")) == "Event('ready')"
        assert repr(Event()) == "Event()"

    def test_describe(self):
        """Test how identifiers are shown in log messages."""
        assert describe("msg") == "'msg'"
        assert describe(Event("ready")) == "Event('ready')"


def test_meta_event_names():
    assert NEW_LISTENER == "newListener"
    assert REMOVE_LISTENER == "removeListener"
