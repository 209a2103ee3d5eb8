"""Round state machines, events and table sessions."""

from settlement.game.events import GameEvent, EventEmitter, EventType
from settlement.game.state import RoundPhase
from settlement.game.blackjack import BlackjackResult, BlackjackRound
from settlement.game.table import TableRules, TableSession

__all__ = [
    "GameEvent",
    "EventEmitter",
    "EventType",
    "RoundPhase",
    "BlackjackResult",
    "BlackjackRound",
    "TableRules",
    "TableSession",
]
