"""
config.py

Emitter configuration and the process-wide default listener threshold.
"""

from collections.abc import Callable
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

DEFAULT_MAX_LISTENERS = 10

MaxListeners = Annotated[int, Field(ge=0, strict=True)]

ErrorHook = Callable[[Any, Exception, Callable[..., Any]], None]

_max_listeners_adapter = TypeAdapter(MaxListeners)
_default_max_listeners = DEFAULT_MAX_LISTENERS


class EmitterConfig(BaseModel):
    """
    Settings read once when an emitter is created.

    Attributes:
        max_listeners: Listener count per event above which a leak warning is
            logged. 0 disables the warning.
        on_error: Optional hook called as ``on_error(event, exc, listener)`` for
            every listener exception swallowed by ``emit``.
    """

    model_config = ConfigDict(frozen=True)

    max_listeners: MaxListeners = DEFAULT_MAX_LISTENERS
    on_error: ErrorHook | None = None


def validate_max_listeners(value: int) -> int:
    """Validate a threshold, raising ``pydantic.ValidationError`` if it is not a non-negative int."""
    return _max_listeners_adapter.validate_python(value)


def get_default_max_listeners() -> int:
    return _default_max_listeners


def set_default_max_listeners(value: int) -> None:
    """
    Change the threshold given to emitters created from now on.

    Emitters that already exist keep their own threshold.
    """
    global _default_max_listeners  # noqa: PLW0603
    _default_max_listeners = validate_max_listeners(value)


def default_config() -> EmitterConfig:
    """Build a config from the current process-wide defaults."""
    return EmitterConfig(max_listeners=_default_max_listeners)
