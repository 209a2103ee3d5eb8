"""Table events emitted while rounds are dealt and settled."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of table events."""

    # Round flow
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Betting
    BET_PLACED = auto()
    BET_SETTLED = auto()

    # Cards and wheel
    CARD_DEALT = auto()
    SHOE_SHUFFLED = auto()
    WHEEL_SPUN = auto()

    # Blackjack actions
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_BLACKJACK = auto()
    PLAYER_BUSTS = auto()
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()


@dataclass(frozen=True)
class GameEvent:
    """Immutable table event."""

    event_type: EventType
    round_id: int
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"#{self.round_id} {self.event_type.name}: {self.data}"


EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Event emitter for one table.

    Handlers subscribe to one event type or, with ``None``, to all events.
    Every emitted event is kept in the table's event history.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._event_history: list[GameEvent] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        """Record an event and call type-specific, then catch-all handlers."""
        self._event_history.append(event)
        logger.debug("%s", event)

        for handler in self._handlers.get(event.event_type, []):
            handler(event)
        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(
        self,
        event_type: EventType,
        round_id: int,
        **data: Any,
    ) -> GameEvent:
        """Create and emit a new event."""
        event = GameEvent(event_type=event_type, round_id=round_id, data=data)
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Return a copy of the event history."""
        return self._event_history.copy()

    def clear_history(self) -> None:
        """Clear the event history."""
        self._event_history.clear()
