from .config import DEFAULT_MAX_LISTENERS, EmitterConfig, default_config, get_default_max_listeners, set_default_max_listeners
from .events import EventEmitter, ListenerEntry
from .names import NEW_LISTENER, REMOVE_LISTENER, Event, EventName

__all__ = [
    "DEFAULT_MAX_LISTENERS",
    "NEW_LISTENER",
    "REMOVE_LISTENER",
    "EmitterConfig",
    "Event",
    "EventEmitter",
    "EventName",
    "ListenerEntry",
    "default_config",
    "get_default_max_listeners",
    "set_default_max_listeners",
]
