"""In-memory event bus implementation."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Type

from shared.domain.bus import IEventBus, IEventHandler
from shared.domain.events import DomainEvent


class InMemoryEventBus(IEventBus):
    """Simple in-process event bus.

    ``publish`` takes a live event; ``dispatch`` rebuilds one from an
    outbox row (event name + JSON payload) before handing it over.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        handlers = self._handlers.setdefault(event_class, [])
        if handler not in handlers:
            handlers.append(handler)

    def publish(self, event: DomainEvent) -> None:
        for handler in self._handlers.get(type(event), []):
            handler.handle(event)

    def dispatch(self, event_name: str, payload: Mapping[str, Any]) -> int:
        """Publish the event named ``event_name``; return the handler count."""
        delivered = 0
        for event_class, handlers in self._handlers.items():
            if event_class.__name__ != event_name:
                continue
            event = event_class(
                **{key: value for key, value in payload.items() if key != "event_name"}
            )
            for handler in handlers:
                handler.handle(event)
                delivered += 1
        return delivered


# Global bus instance (singleton)

event_bus = InMemoryEventBus()
