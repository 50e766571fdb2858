"""
events.py

Typed event emitter with the listener semantics of the Node.js EventEmitter.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial
from logging import getLogger
from typing import Any, Generic, Self, TypeVar, overload

from .config import EmitterConfig, default_config, validate_max_listeners
from .names import NEW_LISTENER, REMOVE_LISTENER, Event, EventName, MetaEventName, MetaListener, P, describe

logger = getLogger("typed_events")

NameT = TypeVar("NameT", bound=str)


@dataclass(frozen=True, eq=False, slots=True)
class ListenerEntry:
    """
    A registered listener.

    ``callback`` is what gets invoked. ``original`` is set when ``callback``
    wraps a user supplied listener (``once``), and is what introspection and
    removal report back. Listeners are compared with ``==``, which is identity
    for plain functions and lets a fresh ``obj.method`` lookup match a bound
    method registered earlier.
    """

    callback: Callable[..., Any]
    original: Callable[..., Any] | None = None

    @property
    def resolved(self) -> Callable[..., Any]:
        return self.callback if self.original is None else self.original

    def matches(self, listener: Callable[..., Any]) -> bool:
        return self.callback == listener or (self.original is not None and self.original == listener)


def _check_listener(listener: object) -> None:
    if not callable(listener):
        msg = f"The listener argument must be callable, got {type(listener).__name__}"
        raise TypeError(msg)


class EventEmitter(Generic[NameT]):
    """
    Synchronous publish/subscribe emitter.

    Listeners are kept per event in registration order and called in that
    order by ``emit``. String event names can be narrowed with a ``Literal``
    type parameter, and ``Event`` tokens carry the listener signature, so a
    type checker verifies both registration and emission::

        ready: Event[[str, int]] = Event("ready")
        emitter: EventEmitter[Literal["close"]] = EventEmitter()
        emitter.on(ready, lambda host, port: ...)
        emitter.emit(ready, "localhost", 8080)
    """

    def __init__(self, config: EmitterConfig | None = None) -> None:
        """
        Initialize the emitter.

        Args:
            config: Emitter settings. Defaults to ``default_config()``, read
                once here.
        """
        if config is None:
            config = default_config()
        self._events: dict[EventName, list[ListenerEntry]] = {}
        self._events_count = 0
        self._max_listeners = config.max_listeners
        self._on_error = config.on_error
        self._warned: set[EventName] = set()
        self._pending: set[asyncio.Future[Any]] = set()

    # Registration

    @overload
    def add_listener(self, event: Event[P], listener: Callable[P, object]) -> Self: ...
    @overload
    def add_listener(self, event: MetaEventName, listener: MetaListener) -> Self: ...
    @overload
    def add_listener(self, event: NameT, listener: Callable[..., object]) -> Self: ...
    def add_listener(self, event: EventName, listener: Callable[..., Any]) -> Self:
        """
        Append a listener to the end of the event's listener list.

        ``newListener`` is emitted with the listener before it is added. The
        same listener may be added more than once; each registration is called.

        Args:
            event: Event name or token.
            listener: Callable invoked with the arguments passed to ``emit``.

        Returns:
            The emitter, for chaining.
        """
        _check_listener(listener)
        return self._register(event, ListenerEntry(listener), prepend=False)

    on = add_listener

    @overload
    def prepend_listener(self, event: Event[P], listener: Callable[P, object]) -> Self: ...
    @overload
    def prepend_listener(self, event: MetaEventName, listener: MetaListener) -> Self: ...
    @overload
    def prepend_listener(self, event: NameT, listener: Callable[..., object]) -> Self: ...
    def prepend_listener(self, event: EventName, listener: Callable[..., Any]) -> Self:
        """Insert a listener at the front of the event's listener list."""
        _check_listener(listener)
        return self._register(event, ListenerEntry(listener), prepend=True)

    @overload
    def once(self, event: Event[P], listener: Callable[P, object]) -> Self: ...
    @overload
    def once(self, event: MetaEventName, listener: MetaListener) -> Self: ...
    @overload
    def once(self, event: NameT, listener: Callable[..., object]) -> Self: ...
    def once(self, event: EventName, listener: Callable[..., Any]) -> Self:
        """
        Append a listener that runs for the next emission only.

        The listener is deregistered before it is called, so a listener that
        re-emits the same event from inside itself is not invoked again. A
        nested ``emit`` of the same event from an earlier listener does not
        call it twice either.
        """
        _check_listener(listener)
        return self._register(event, self._once_entry(event, listener), prepend=False)

    @overload
    def prepend_once_listener(self, event: Event[P], listener: Callable[P, object]) -> Self: ...
    @overload
    def prepend_once_listener(self, event: MetaEventName, listener: MetaListener) -> Self: ...
    @overload
    def prepend_once_listener(self, event: NameT, listener: Callable[..., object]) -> Self: ...
    def prepend_once_listener(self, event: EventName, listener: Callable[..., Any]) -> Self:
        """Like ``once`` but the listener goes to the front of the list."""
        _check_listener(listener)
        return self._register(event, self._once_entry(event, listener), prepend=True)

    def _once_entry(self, event: EventName, listener: Callable[..., Any]) -> ListenerEntry:
        fired = False

        def once_wrapper(*args: Any, **kwargs: Any) -> Any:
            nonlocal fired
            if fired:
                return None
            fired = True
            self.remove_listener(event, once_wrapper)
            return listener(*args, **kwargs)

        return ListenerEntry(once_wrapper, original=listener)

    def _register(self, event: EventName, entry: ListenerEntry, *, prepend: bool) -> Self:
        self.emit(NEW_LISTENER, entry.resolved)

        listeners = self._events.setdefault(event, [])
        if prepend:
            listeners.insert(0, entry)
        else:
            listeners.append(entry)
        self._events_count += 1

        count = len(listeners)
        if self._max_listeners and count > self._max_listeners and event not in self._warned:
            self._warned.add(event)
            logger.warning(
                "Max listeners (%d) have been reached. %d listeners were added to event %s. This may cause a memory leak.",
                self._max_listeners,
                count,
                describe(event),
            )
        return self

    # Removal

    def remove_listener(self, event: NameT | MetaEventName | Event[...], listener: Callable[..., Any]) -> Self:
        """
        Remove the first registration of ``listener`` for ``event``.

        A ``once`` registration can be removed either by the listener passed to
        ``once`` or by the wrapper returned from ``raw_listeners``. When an
        entry is removed, ``removeListener`` is emitted with the listener.
        Unknown events and listeners are ignored.

        Returns:
            The emitter, for chaining.
        """
        listeners = self._events.get(event)
        if not listeners:
            return self

        for index, entry in enumerate(listeners):
            if entry.matches(listener):
                del listeners[index]
                if not listeners:
                    self._drop(event)
                self.emit(REMOVE_LISTENER, entry.resolved)
                break
        return self

    off = remove_listener

    def remove_all_listeners(self, event: NameT | MetaEventName | Event[...] | None = None) -> Self:
        """
        Remove every listener of ``event``, or of all events when omitted.

        No ``removeListener`` notifications are emitted.
        """
        if event is None:
            self._events.clear()
            self._warned.clear()
        elif event in self._events:
            self._drop(event)
        return self

    def _drop(self, event: EventName) -> None:
        del self._events[event]
        self._warned.discard(event)

    # Introspection

    def listeners(self, event: NameT | MetaEventName | Event[...]) -> list[Callable[..., Any]]:
        """Return a copy of the event's listeners, with ``once`` wrappers resolved to the original."""
        return [entry.resolved for entry in self._events.get(event, ())]

    def raw_listeners(self, event: NameT | MetaEventName | Event[...]) -> list[Callable[..., Any]]:
        """Return a copy of the event's listeners as registered, including ``once`` wrappers."""
        return [entry.callback for entry in self._events.get(event, ())]

    def listener_count(self, event: NameT | MetaEventName | Event[...], listener: Callable[..., Any] | None = None) -> int:
        """
        Count listeners for an event.

        Args:
            event: Event name or token.
            listener: When given, count only registrations of this listener. A
                ``once`` registration matches both its original listener and
                its wrapper from ``raw_listeners``.

        Returns:
            Number of matching registrations, 0 for unknown events.
        """
        entries = self._events.get(event, ())
        if listener is None:
            return len(entries)
        return sum(1 for entry in entries if entry.matches(listener))

    def event_names(self) -> list[EventName]:
        """Return the events that have listeners, in the order they were first registered."""
        return list(self._events)

    def get_max_listeners(self) -> int:
        return self._max_listeners

    def set_max_listeners(self, n: int) -> Self:
        """Set the leak warning threshold for this emitter. 0 disables it."""
        self._max_listeners = validate_max_listeners(n)
        return self

    # Dispatch

    @overload
    def emit(self, event: Event[P], /, *args: P.args, **kwargs: P.kwargs) -> bool: ...
    @overload
    def emit(self, event: MetaEventName, listener: Callable[..., Any], /) -> bool: ...
    @overload
    def emit(self, event: NameT, /, *args: Any, **kwargs: Any) -> bool: ...
    def emit(self, event: EventName, /, *args: Any, **kwargs: Any) -> bool:
        """
        Call every listener of ``event`` with the given arguments.

        The listener list is copied before the first call, so listeners added
        or removed while dispatching do not change who is called this time.
        Exceptions raised by listeners are discarded after being passed to the
        configured ``on_error`` hook. Awaitables returned by listeners are
        scheduled on the running event loop and never awaited here.

        Args:
            event: Event name or token.
            *args: Positional arguments for the listeners.
            **kwargs: Keyword arguments for the listeners.

        Returns:
            True if the event had listeners, False otherwise.
        """
        listeners = self._events.get(event)
        if not listeners:
            return False

        for entry in tuple(listeners):
            try:
                result = entry.callback(*args, **kwargs)
            except Exception as exc:
                self._listener_failed(event, exc, entry.resolved)
                continue
            if inspect.isawaitable(result):
                self._schedule(event, result, entry.resolved)
        return True

    def _schedule(self, event: EventName, awaitable: Awaitable[Any], listener: Callable[..., Any]) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Listener %r for event %s returned an awaitable outside of a running event loop; it will not run.", listener, describe(event))
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return

        future = asyncio.ensure_future(awaitable)
        self._pending.add(future)
        future.add_done_callback(partial(self._task_done, event, listener))

    def _task_done(self, event: EventName, listener: Callable[..., Any], future: asyncio.Future[Any]) -> None:
        self._pending.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if isinstance(exc, Exception):
            self._listener_failed(event, exc, listener)

    def _listener_failed(self, event: EventName, exc: Exception, listener: Callable[..., Any]) -> None:
        logger.debug("Listener %r for event %s raised %r; discarded.", listener, describe(event), exc, exc_info=exc)
        if self._on_error is None:
            return
        try:
            self._on_error(event, exc, listener)
        except Exception:
            logger.exception("Error hook failed while handling an exception from event %s", describe(event))
