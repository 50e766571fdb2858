"""
Example: Advanced Event Usage

This example demonstrates:
- Typed Event tokens checked by a type checker
- Literal event names
- Injected configuration with an error hook
- The listener leak warning
- Async listeners scheduled on the running loop
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Literal

from typed_events import EmitterConfig, Event, EventEmitter


@dataclass
class Order:
    order_id: str
    total: float


# Typed tokens: a type checker rejects listeners or emits with the wrong shape
order_placed: Event[[Order]] = Event("order_placed")
order_shipped: Event[[str, str]] = Event("order_shipped")

Lifecycle = Literal["start", "stop"]


def report_error(event: Any, exc: Exception, listener: Any) -> None:
    print(f"   [HOOK] {listener.__name__} failed on {event!r}: {exc}")


async def notify_customer(order: Order) -> None:
    await asyncio.sleep(0.01)
    print(f"   [ASYNC] Customer notified about {order.order_id}")


async def run() -> None:
    emitter: EventEmitter[Lifecycle] = EventEmitter(EmitterConfig(max_listeners=3, on_error=report_error))

    print("1. Typed tokens:")
    emitter.on(order_placed, lambda order: print(f"   [ORDER] {order.order_id}: {order.total:.2f}"))
    emitter.on(order_shipped, lambda order_id, carrier: print(f"   [SHIP] {order_id} via {carrier}"))
    emitter.emit(order_placed, Order("A-1", 42.5))
    emitter.emit(order_shipped, "A-1", "postal")
    print()

    print("2. Error hook:")

    def reject(order: Order) -> None:
        msg = f"order {order.order_id} over limit"
        raise ValueError(msg)

    emitter.prepend_listener(order_placed, reject)
    emitter.emit(order_placed, Order("A-2", 1000.0))
    emitter.off(order_placed, reject)
    print()

    print("3. Leak warning (threshold 3):")
    for index in range(4):
        emitter.on("start", lambda index=index: print(f"   [START] listener {index}"))
    emitter.emit("start")
    print()

    print("4. Async listener:")
    emitter.on(order_placed, notify_customer)
    emitter.emit(order_placed, Order("A-3", 9.99))
    print("   emit returned before the notification")
    await asyncio.sleep(0.05)
    print()

    print("=== Demo Complete ===")


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="   [%(levelname)s] %(message)s")
    asyncio.run(run())
