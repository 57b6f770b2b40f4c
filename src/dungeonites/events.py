from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type, TypeVar


T = TypeVar("T")


class EventBus:
    """Synchronous in-process event bus for simulation events.

    Subscribers are keyed by event class; events are emitted by instance.
    Handlers run inline in subscription order so tests stay deterministic.
    The core assumes a single writer per player state, so no locking happens here.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[Type[Any], List[Callable[[Any], None]]] = {}

    def subscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        self._subscribers.setdefault(event_type, []).append(handler)  # type: ignore[arg-type]

    def unsubscribe(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            if not handlers:
                self._subscribers.pop(event_type, None)

    def emit(self, event: Any) -> None:
        for event_type, handlers in list(self._subscribers.items()):
            if isinstance(event, event_type):
                for h in list(handlers):
                    h(event)


@dataclass(frozen=True)
class CurrencyChangedEvent:
    currency: str
    old_amount: int
    new_amount: int
    delta: int
    reason: str  # e.g., "grant", "exchange", "division_entry", "adjust"


@dataclass(frozen=True)
class EffectAppliedEvent:
    player_id: str
    effect_id: str
    duration: int
    refreshed: bool


@dataclass(frozen=True)
class EffectExpiredEvent:
    player_id: str
    effect_id: str
