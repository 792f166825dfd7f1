from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Protocol, Sequence

import structlog

from sortstep.core.events.bus import EventBus, EventHandler, Subscription
from sortstep.core.events.engine import ENGINE_EVENT_TYPES

log = structlog.get_logger()


class EngineListener(Protocol):
    """
    Anything that reacts to engine events (playback driver, collectors).
    """

    def subscriptions(self) -> Sequence[tuple[str, EventHandler]]:
        ...


@dataclass(frozen=True, slots=True)
class WiredSubscription:
    listener: str
    subscription: Subscription


@dataclass(frozen=True, slots=True)
class RouterWiring:
    subscriptions: tuple[WiredSubscription, ...]

    def listeners_for(self, event_type: str) -> tuple[str, ...]:
        """
        Listener names subscribed to event_type, in dispatch order.
        """
        return tuple(w.listener for w in self.subscriptions if w.subscription.event_type == event_type)


class EngineRouter:
    """
    Attaches engine listeners to the bus an engine publishes on.

    Listeners are wired in the order given, each keeping its own
    subscriptions() order, so dispatch order is reproducible. Event types
    the engine never publishes are rejected up front; a misspelt
    subscription would otherwise just never fire.
    """

    def __init__(self, *, bus: EventBus, known_event_types: AbstractSet[str] = ENGINE_EVENT_TYPES) -> None:
        self._bus = bus
        self._known = frozenset(known_event_types)

    def register(self, listeners: Iterable[EngineListener]) -> RouterWiring:
        wired: list[WiredSubscription] = []
        seen: set[tuple[str, int, int]] = set()

        for listener in listeners:
            name = type(listener).__name__
            subs = listener.subscriptions()

            for event_type, handler in subs:
                if event_type not in self._known:
                    raise ValueError(f"{name} subscribed to unknown event type {event_type!r}")

                # same bound method on the same object twice would double-dispatch
                key = (event_type, id(getattr(handler, "__func__", handler)), id(getattr(handler, "__self__", None)))
                if key in seen:
                    raise RuntimeError(f"{name} subscribed twice to {event_type}")
                seen.add(key)

                s = self._bus.subscribe(event_type=event_type, handler=handler)
                wired.append(WiredSubscription(listener=name, subscription=s))

        log.info(
            "router.wired",
            listeners=sorted({w.listener for w in wired}),
            subscriptions=len(wired),
        )
        return RouterWiring(subscriptions=tuple(wired))
