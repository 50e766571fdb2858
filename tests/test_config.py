"""
Test cases for emitter configuration.
"""

from collections.abc import Iterator

import pytest
from pydantic import ValidationError

from typed_events import DEFAULT_MAX_LISTENERS, EmitterConfig, EventEmitter, default_config, get_default_max_listeners, set_default_max_listeners


@pytest.fixture
def restore_default() -> Iterator[None]:
    yield
    set_default_max_listeners(DEFAULT_MAX_LISTENERS)


class TestEmitterConfig:
    """Test the EmitterConfig model."""

    def test_defaults(self):
        """Test default field values."""
        config = EmitterConfig()
        assert config.max_listeners == 10
        assert config.on_error is None

    @pytest.mark.parametrize("value", [-1, "10", 2.5, True])
    def test_invalid_max_listeners(self, value: object):
        """Test that only non-negative ints are accepted."""
        with pytest.raises(ValidationError):
            EmitterConfig(max_listeners=value)

    def test_on_error_must_be_callable(self):
        """Test that a non-callable error hook is rejected."""
        with pytest.raises(ValidationError):
            EmitterConfig(on_error="log it")

    def test_config_is_frozen(self):
        """Test that a config cannot be changed after creation."""
        config = EmitterConfig()
        with pytest.raises(ValidationError):
            config.max_listeners = 3

    def test_emitter_uses_given_config(self):
        """Test that an explicit config sets the emitter threshold."""
        emitter = EventEmitter(EmitterConfig(max_listeners=3))
        assert emitter.get_max_listeners() == 3


@pytest.mark.usefixtures("restore_default")
class TestProcessDefault:
    """Test the process-wide default threshold."""

    def test_initial_default(self):
        """Test the initial process-wide default."""
        assert get_default_max_listeners() == DEFAULT_MAX_LISTENERS == 10
        assert default_config().max_listeners == 10

    def test_new_emitters_use_changed_default(self):
        """Test that emitters created after a change pick it up."""
        set_default_max_listeners(4)
        assert get_default_max_listeners() == 4
        assert EventEmitter().get_max_listeners() == 4

    def test_existing_emitters_keep_their_threshold(self):
        """Test that changing the default is not retroactive."""
        emitter = EventEmitter()
        set_default_max_listeners(2)
        assert emitter.get_max_listeners() == 10

    def test_explicit_config_ignores_default(self):
        """Test that an injected config is isolated from the default."""
        set_default_max_listeners(2)
        assert EventEmitter(EmitterConfig()).get_max_listeners() == 10

    def test_invalid_default_rejected(self):
        """Test that a negative default raises and leaves the default unchanged."""
        with pytest.raises(ValidationError):
            set_default_max_listeners(-5)
        assert get_default_max_listeners() == 10
