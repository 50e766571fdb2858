"""
names.py

Event identifiers and the type-level helpers that tie an event to the
signature of its listeners.
"""

from collections.abc import Callable
from typing import Any, Final, Generic, Literal, ParamSpec, TypeAlias

P = ParamSpec("P")

NEW_LISTENER: Final = "newListener"
REMOVE_LISTENER: Final = "removeListener"

MetaEventName: TypeAlias = Literal["newListener", "removeListener"]
MetaListener: TypeAlias = Callable[[Callable[..., Any]], object]


class Event(Generic[P]):
    """
    Unique event token that declares the signature of its listeners.

    Two tokens are never equal, even with the same description, so a token can
    be shared between modules without name clashes. The parameter spec is only
    seen by type checkers::

        message: Event[[str]] = Event("message")
        emitter.on(message, lambda text: print(text.upper()))
        emitter.emit(message, "hi")
    """

    __slots__ = ("description",)

    def __init__(self, description: str | None = None) -> None:
        self.description = description

    def __repr__(self) -> str:
        if self.description is None:
            return "Event()"
        return f"Event({self.description!r})"


EventName: TypeAlias = str | Event[...]


def describe(event: EventName) -> str:
    """Human readable form of an event identifier, used in log messages."""
    if isinstance(event, Event):
        return repr(event)
    return repr(str(event))
