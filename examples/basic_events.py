"""
Example: Basic Event Usage

This example demonstrates the listener lifecycle of EventEmitter:
regular, prepended and once listeners, removal and introspection.
"""

from typed_events import NEW_LISTENER, REMOVE_LISTENER, EventEmitter


def main():
    """Demonstrate basic event usage."""
    print("=== Basic Events Demo ===\n")

    emitter = EventEmitter()

    # Meta events report every registration and removal
    emitter.on(NEW_LISTENER, lambda listener: print(f"   [NEW] {listener.__name__}"))
    emitter.on(REMOVE_LISTENER, lambda listener: print(f"   [REMOVED] {listener.__name__}"))

    print("1. Registering listeners:")

    def log_message(text: str) -> None:
        print(f"   [LOG] {text}")

    def greet_once(text: str) -> None:
        print(f"   [ONCE] First message was: {text}")

    def audit(text: str) -> None:
        print(f"   [AUDIT] {len(text)} characters")

    emitter.on("msg", log_message)
    emitter.once("msg", greet_once)
    emitter.prepend_listener("msg", audit)
    print(f"   Listeners: {[fn.__name__ for fn in emitter.listeners('msg')]}\n")

    print("2. Emitting twice:")
    emitter.emit("msg", "hi")
    emitter.emit("msg", "bye")
    print(f"   Listener count: {emitter.listener_count('msg')}\n")

    print("3. A failing listener does not stop the others:")

    def broken(text: str) -> None:
        msg = f"cannot handle {text!r}"
        raise ValueError(msg)

    emitter.prepend_listener("msg", broken)
    delivered = emitter.emit("msg", "still delivered")
    print(f"   emit returned {delivered}\n")

    print("4. Removing listeners:")
    emitter.off("msg", broken).off("msg", audit)
    emitter.remove_all_listeners("msg")
    print(f"   Event names left: {emitter.event_names()}")
    print(f"   emit on empty event returned {emitter.emit('msg', 'nobody')}\n")

    print("=== Demo Complete ===")


if __name__ == "__main__":
    main()
