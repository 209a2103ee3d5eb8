"""Blackjack round phases."""

from enum import Enum, auto


class RoundPhase(Enum):
    """
    Blackjack round state machine states.

    Flow: WAITING_FOR_BET → PLAYER_TURN → DEALER_TURN → ROUND_COMPLETE
    """

    WAITING_FOR_BET = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    ROUND_COMPLETE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


VALID_TRANSITIONS: dict[RoundPhase, list[RoundPhase]] = {
    RoundPhase.WAITING_FOR_BET: [RoundPhase.PLAYER_TURN, RoundPhase.ROUND_COMPLETE],
    RoundPhase.PLAYER_TURN: [RoundPhase.DEALER_TURN, RoundPhase.ROUND_COMPLETE],
    RoundPhase.DEALER_TURN: [RoundPhase.ROUND_COMPLETE],
    RoundPhase.ROUND_COMPLETE: [],
}


def is_valid_transition(from_phase: RoundPhase, to_phase: RoundPhase) -> bool:
    """Check if a phase transition is allowed."""
    return to_phase in VALID_TRANSITIONS.get(from_phase, [])
